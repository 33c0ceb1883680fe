"""Repository for Application rows."""
from datetime import date, datetime
from typing import List, Optional
import uuid

from sqlalchemy.orm import joinedload

from vfire.models_db import Application
from vfire.domain.statuses import ApplicationStatus, ApplicationType


class ApplicationRepository:
    def __init__(self, session):
        self._session = session

    def get_by_id(self, id: uuid.UUID) -> Optional[Application]:
        return self._session.get(Application, id)

    def get_with_details(self, id: uuid.UUID) -> Optional[Application]:
        """Application with establishment, inspector and checklist eagerly loaded."""
        return self._session.query(Application).options(
            joinedload(Application.establishment),
            joinedload(Application.inspector),
            joinedload(Application.checklist),
        ).filter(Application.id == id).first()

    def list(
        self,
        type: Optional[ApplicationType] = None,
        status: Optional[ApplicationStatus] = None,
        owner_id: Optional[uuid.UUID] = None,
        inspector_id: Optional[uuid.UUID] = None,
    ) -> List[Application]:
        query = self._session.query(Application).options(joinedload(Application.inspector))
        if type is not None:
            query = query.filter(Application.type == ApplicationType(type))
        if status is not None:
            query = query.filter(Application.status == ApplicationStatus(status))
        if owner_id is not None:
            query = query.filter(Application.owner_id == owner_id)
        if inspector_id is not None:
            query = query.filter(Application.inspector_id == inspector_id)
        return query.order_by(Application.created_at.desc()).all()

    def list_by_owner(self, owner_id: uuid.UUID) -> List[Application]:
        return self.list(owner_id=owner_id)

    def list_by_type(self, type: ApplicationType, status: Optional[ApplicationStatus] = None) -> List[Application]:
        return self.list(type=type, status=status)

    def list_for_inspector(self, inspector_id: uuid.UUID, statuses=None) -> List[Application]:
        """Applications assigned to an inspector, soonest inspection first."""
        query = self._session.query(Application).filter(Application.inspector_id == inspector_id)
        if statuses:
            query = query.filter(Application.status.in_([ApplicationStatus(s) for s in statuses]))
        return query.order_by(Application.inspection_schedule.asc()).all()

    def list_scheduled(self) -> List[Application]:
        """Every application that has an inspection date, for the admin inspections view."""
        return self._session.query(Application).options(
            joinedload(Application.inspector),
        ).filter(
            Application.inspection_schedule.isnot(None),
        ).order_by(Application.inspection_schedule.asc()).all()

    def list_upcoming(
        self,
        now: datetime,
        inspector_id: Optional[uuid.UUID] = None,
        owner_id: Optional[uuid.UUID] = None,
        limit: int = 5,
    ) -> List[Application]:
        query = self._session.query(Application).filter(
            Application.status == ApplicationStatus.FOR_INSPECTION,
            Application.inspection_schedule >= now,
        )
        if inspector_id is not None:
            query = query.filter(Application.inspector_id == inspector_id)
        if owner_id is not None:
            query = query.filter(Application.owner_id == owner_id)
        return query.order_by(Application.inspection_schedule.asc()).limit(limit).all()

    def list_scheduled_between(
        self,
        start: date,
        end: date,
        inspector_id: Optional[uuid.UUID] = None,
        owner_id: Optional[uuid.UUID] = None,
    ) -> List[Application]:
        """Applications whose inspection falls on a day in [start, end)."""
        query = self._session.query(Application).options(
            joinedload(Application.inspector),
        ).filter(
            Application.inspection_schedule.isnot(None),
            Application.inspection_schedule >= datetime.combine(start, datetime.min.time()),
            Application.inspection_schedule < datetime.combine(end, datetime.min.time()),
        )
        if inspector_id is not None:
            query = query.filter(Application.inspector_id == inspector_id)
        if owner_id is not None:
            query = query.filter(Application.owner_id == owner_id)
        return query.order_by(Application.inspection_schedule.asc()).all()

    def list_for_month(self, year: int, month: int, **filters) -> List[Application]:
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        return self.list_scheduled_between(start, end, **filters)

    def count_by_status(
        self,
        owner_id: Optional[uuid.UUID] = None,
        inspector_id: Optional[uuid.UUID] = None,
    ) -> dict:
        query = self._session.query(Application.status)
        if owner_id is not None:
            query = query.filter(Application.owner_id == owner_id)
        if inspector_id is not None:
            query = query.filter(Application.inspector_id == inspector_id)
        counts = {status: 0 for status in ApplicationStatus}
        for status, in query.all():
            counts[status] += 1
        return counts

    def count_by_type(self) -> dict:
        counts = {t: 0 for t in ApplicationType}
        for t, in self._session.query(Application.type).all():
            counts[t] += 1
        return counts

    def add(self, application: Application) -> Application:
        self._session.add(application)
        return application

    def list_recent(self, limit: int = 5) -> List[Application]:
        return self._session.query(Application).order_by(Application.created_at.desc()).limit(limit).all()

    def count_approved(self, with_certificate: bool) -> int:
        query = self._session.query(Application).filter(Application.status == ApplicationStatus.APPROVED)
        if with_certificate:
            query = query.filter(Application.certificate_url.isnot(None))
        else:
            query = query.filter(Application.certificate_url.is_(None))
        return query.count()
