"""Service for establishment registration and review."""
import logging

from vfire.domain.access import ensure_role
from vfire.domain.entities import Establishment
from vfire.domain.exceptions import EstablishmentNotFoundError
from vfire.domain.statuses import EstablishmentStatus, UserRole
from vfire.repositories import mappers

from .results import OperationResult
from .serializers import application_dict, establishment_dict

logger = logging.getLogger(__name__)


class EstablishmentService:

    def __init__(self, uow):
        self._uow = uow

    def _log_transition(self, row, previous, actor):
        logger.info(
            "Establishment status changed",
            extra={'props': {
                'establishment_id': str(row.id),
                'from': previous.value if previous else None,
                'to': row.status.value,
                'actor_id': str(actor.id),
            }},
        )

    def _get_visible(self, actor, establishment_id):
        """Owners only see their own establishments; admins see all."""
        role = ensure_role(actor.role, UserRole.OWNER, UserRole.ADMIN)
        if role == UserRole.OWNER:
            row = self._uow.establishments.get_for_owner(establishment_id, actor.id)
        else:
            row = self._uow.establishments.get_by_id(establishment_id)
        if row is None:
            raise EstablishmentNotFoundError(str(establishment_id))
        return row

    # Owner

    def list_for_owner(self, actor):
        """Own establishments, each with its most recent application."""
        ensure_role(actor.role, UserRole.OWNER)
        result = []
        for row in self._uow.establishments.list_by_owner(actor.id):
            latest = row.applications[0] if row.applications else None
            result.append(establishment_dict(row, latest_application=latest))
        return result

    def list_registered_for_owner(self, actor):
        """Establishments the owner may apply with."""
        ensure_role(actor.role, UserRole.OWNER)
        return [establishment_dict(r) for r in self._uow.establishments.list_registered_by_owner(actor.id)]

    def register(self, actor, establishment_name, dti_certificate_no):
        ensure_role(actor.role, UserRole.OWNER)
        entity = Establishment.create(actor.id, establishment_name, dti_certificate_no)
        row = self._uow.establishments.add(mappers.establishment_to_row(entity))
        self._uow.commit()

        self._log_transition(row, EstablishmentStatus.UNREGISTERED, actor)
        return OperationResult(
            success=True,
            message=f'{entity.name} submitted for registration.',
            data=establishment_dict(row),
        )

    def resubmit(self, actor, establishment_id):
        """Send a rejected establishment back for review."""
        ensure_role(actor.role, UserRole.OWNER)
        row = self._get_visible(actor, establishment_id)
        entity = mappers.establishment_to_entity(row)
        previous = entity.status

        entity.register(actor.role)
        mappers.apply_establishment(entity, row)
        self._uow.commit()

        self._log_transition(row, previous, actor)
        return OperationResult(success=True, message=f'{entity.name} resubmitted.', data=establishment_dict(row))

    # Shared

    def get(self, actor, establishment_id):
        row = self._get_visible(actor, establishment_id)
        data = establishment_dict(row, with_owner=actor.role == UserRole.ADMIN)
        data['applications'] = [application_dict(a) for a in row.applications]
        return data

    # Admin

    def list_all(self, actor, status=None):
        ensure_role(actor.role, UserRole.ADMIN)
        return [establishment_dict(r, with_owner=True) for r in self._uow.establishments.list_all(status=status)]

    def list_pending(self, actor):
        return self.list_all(actor, status=EstablishmentStatus.PENDING)

    def approve(self, actor, establishment_id):
        row = self._get_visible(actor, establishment_id)
        entity = mappers.establishment_to_entity(row)
        previous = entity.status

        entity.approve(actor.role)
        mappers.apply_establishment(entity, row)
        self._uow.commit()

        self._log_transition(row, previous, actor)
        return OperationResult(success=True, message=f'{entity.name} registered.', data=establishment_dict(row))

    def reject(self, actor, establishment_id, reason):
        row = self._get_visible(actor, establishment_id)
        entity = mappers.establishment_to_entity(row)
        previous = entity.status

        entity.reject(actor.role, reason)
        mappers.apply_establishment(entity, row)
        self._uow.commit()

        self._log_transition(row, previous, actor)
        return OperationResult(success=True, message=f'{entity.name} rejected.', data=establishment_dict(row))
