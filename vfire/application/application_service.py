"""Service for certificate applications: submission, scheduling and decisions."""
import logging
from datetime import timezone

from vfire.domain.access import ensure_role
from vfire.domain.entities import Application, utcnow
from vfire.domain.exceptions import (
    ApplicationNotFoundError,
    EstablishmentNotFoundError,
    NotFoundError,
    ProfileNotFoundError,
    ValidationError,
)
from vfire.domain.statuses import AccountStatus, ApplicationType, UserRole
from vfire.repositories import mappers

from .results import OperationResult
from .serializers import application_dict

logger = logging.getLogger(__name__)


def to_naive_utc(value):
    """Aware datetimes are converted to UTC; naive ones are taken as UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ApplicationService:
    """
    Application workflow: unscheduled -> for_inspection -> inspected ->
    approved | rejected.

    Every method loads the row, lets the domain entity validate the change
    and writes the result back in a single commit.
    """

    def __init__(self, uow, clock=utcnow):
        self._uow = uow
        self._clock = clock

    def _log_transition(self, row, previous, actor, **props):
        logger.info(
            "Application status changed",
            extra={'props': {
                'application_id': str(row.id),
                'from': previous.value if previous else None,
                'to': row.status.value,
                'actor_id': str(actor.id),
                **props,
            }},
        )

    def _get_row(self, application_id):
        row = self._uow.applications.get_with_details(application_id)
        if row is None:
            raise ApplicationNotFoundError(str(application_id))
        return row

    def get_visible_row(self, actor, application_id):
        """
        Load an application the actor may see: the owner who applied, the
        assigned inspector, or any admin. Others get a not-found error.
        """
        row = self._get_row(application_id)
        role = UserRole(actor.role)
        if role == UserRole.ADMIN:
            return row
        if role == UserRole.OWNER and row.owner_id == actor.id:
            return row
        if role == UserRole.INSPECTOR and row.inspector_id == actor.id:
            return row
        raise ApplicationNotFoundError(str(application_id))

    def _get_inspector(self, inspector_id):
        inspector = self._uow.profiles.get_by_id(inspector_id)
        if inspector is None:
            raise ProfileNotFoundError(str(inspector_id))
        if inspector.role != UserRole.INSPECTOR:
            raise ValidationError("The assigned profile is not an inspector", "inspector_id")
        if inspector.account_status != AccountStatus.REGISTERED:
            raise ValidationError("The assigned inspector account is not active", "inspector_id")
        return inspector

    # Owner

    def apply(self, actor, establishment_id, application_type):
        """Create an unscheduled application against a registered establishment."""
        ensure_role(actor.role, UserRole.OWNER)
        est_row = self._uow.establishments.get_for_owner(establishment_id, actor.id)
        if est_row is None:
            raise EstablishmentNotFoundError(str(establishment_id))

        establishment = mappers.establishment_to_entity(est_row)
        entity = Application.create(
            establishment,
            ApplicationType(application_type),
            owner_id=actor.id,
            actor=actor.role,
            now=self._clock(),
        )
        row = self._uow.applications.add(mappers.application_to_row(entity))
        row.establishment = est_row
        self._uow.commit()

        self._log_transition(row, None, actor, type=entity.type.value)
        return OperationResult(
            success=True,
            message=f'{entity.type.label} application submitted for {entity.establishment_name}.',
            data=application_dict(row),
        )

    def list_for_owner(self, actor):
        ensure_role(actor.role, UserRole.OWNER)
        return [application_dict(r) for r in self._uow.applications.list_by_owner(actor.id)]

    # Shared

    def get(self, actor, application_id):
        return application_dict(self.get_visible_row(actor, application_id), with_checklist=True)

    def get_certificate(self, actor, application_id):
        row = self.get_visible_row(actor, application_id)
        if not row.certificate_url:
            raise NotFoundError("Certificate", str(application_id))
        return {
            'application_id': str(row.id),
            'type': row.type.value,
            'establishment_name': row.establishment_name,
            'certificate_url': row.certificate_url,
        }

    # Admin

    def list_by_type(self, actor, application_type, status=None):
        ensure_role(actor.role, UserRole.ADMIN)
        rows = self._uow.applications.list_by_type(ApplicationType(application_type), status=status)
        return [application_dict(r) for r in rows]

    def schedule(self, actor, application_id, inspector_id, inspection_schedule):
        ensure_role(actor.role, UserRole.ADMIN)
        row = self._get_row(application_id)
        inspector = self._get_inspector(inspector_id)
        entity = mappers.application_to_entity(row)
        previous = entity.status

        entity.schedule(actor.role, inspector.id, to_naive_utc(inspection_schedule), now=self._clock())
        mappers.apply_application(entity, row)
        row.inspector = inspector
        self._uow.commit()

        self._log_transition(row, previous, actor, inspector_id=str(inspector.id))
        return OperationResult(
            success=True,
            message=f'Inspection scheduled with {inspector.full_name}.',
            data=application_dict(row),
        )

    def reschedule(self, actor, application_id, inspector_id=None, inspection_schedule=None):
        ensure_role(actor.role, UserRole.ADMIN)
        row = self._get_row(application_id)
        inspector = self._get_inspector(inspector_id) if inspector_id is not None else None
        entity = mappers.application_to_entity(row)

        entity.reschedule(actor.role, inspector_id=inspector.id if inspector else None,
                          when=to_naive_utc(inspection_schedule), now=self._clock())
        mappers.apply_application(entity, row)
        if inspector is not None:
            row.inspector = inspector
        self._uow.commit()

        logger.info(
            "Inspection rescheduled",
            extra={'props': {
                'application_id': str(row.id),
                'inspector_id': str(row.inspector_id),
                'inspection_schedule': row.inspection_schedule.isoformat(),
                'actor_id': str(actor.id),
            }},
        )
        return OperationResult(success=True, message='Inspection rescheduled.', data=application_dict(row))

    def approve(self, actor, application_id, certificate_url=None):
        row = self._get_row(application_id)
        entity = mappers.application_to_entity(row)
        previous = entity.status

        entity.approve(actor.role, certificate_url=certificate_url)
        mappers.apply_application(entity, row)
        self._uow.commit()

        self._log_transition(row, previous, actor)
        message = 'Application approved.'
        if entity.has_certificate:
            message = 'Application approved and certificate issued.'
        return OperationResult(success=True, message=message, data=application_dict(row))

    def reject(self, actor, application_id, reason):
        row = self._get_row(application_id)
        entity = mappers.application_to_entity(row)
        previous = entity.status

        entity.reject(actor.role, reason)
        mappers.apply_application(entity, row)
        self._uow.commit()

        self._log_transition(row, previous, actor)
        return OperationResult(success=True, message='Application rejected.', data=application_dict(row))

    def issue_certificate(self, actor, application_id, certificate_url):
        row = self._get_row(application_id)
        entity = mappers.application_to_entity(row)

        entity.issue_certificate(actor.role, certificate_url)
        mappers.apply_application(entity, row)
        self._uow.commit()

        logger.info(
            "Certificate issued",
            extra={'props': {'application_id': str(row.id), 'actor_id': str(actor.id)}},
        )
        return OperationResult(success=True, message='Certificate recorded.', data=application_dict(row))
