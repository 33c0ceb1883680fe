"""Repository for Establishment rows."""
from typing import List, Optional
import uuid

from sqlalchemy.orm import joinedload

from vfire.models_db import Establishment
from vfire.domain.statuses import EstablishmentStatus


class EstablishmentRepository:
    def __init__(self, session):
        self._session = session

    def get_by_id(self, id: uuid.UUID) -> Optional[Establishment]:
        return self._session.get(Establishment, id)

    def get_for_owner(self, id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Establishment]:
        return self._session.query(Establishment).filter_by(id=id, owner_id=owner_id).first()

    def list_by_owner(self, owner_id: uuid.UUID) -> List[Establishment]:
        return self._session.query(Establishment).filter(
            Establishment.owner_id == owner_id,
        ).order_by(Establishment.created_at.desc()).all()

    def list_registered_by_owner(self, owner_id: uuid.UUID) -> List[Establishment]:
        return self._session.query(Establishment).filter(
            Establishment.owner_id == owner_id,
            Establishment.status == EstablishmentStatus.REGISTERED,
        ).order_by(Establishment.establishment_name).all()

    def list_all(self, status: Optional[EstablishmentStatus] = None) -> List[Establishment]:
        """All establishments with their owner loaded, newest first."""
        query = self._session.query(Establishment).options(joinedload(Establishment.owner))
        if status is not None:
            query = query.filter(Establishment.status == EstablishmentStatus(status))
        return query.order_by(Establishment.created_at.desc()).all()

    def count_by_status(self, owner_id: Optional[uuid.UUID] = None) -> dict:
        query = self._session.query(Establishment.status)
        if owner_id is not None:
            query = query.filter(Establishment.owner_id == owner_id)
        counts = {status: 0 for status in EstablishmentStatus}
        for status, in query.all():
            counts[status] += 1
        return counts

    def add(self, establishment: Establishment) -> Establishment:
        self._session.add(establishment)
        return establishment
