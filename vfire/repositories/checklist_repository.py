"""Repository for InspectionChecklist rows."""
from typing import List, Optional
import uuid

from vfire.models_db import InspectionChecklist


class ChecklistRepository:
    def __init__(self, session):
        self._session = session

    def get_by_id(self, id: uuid.UUID) -> Optional[InspectionChecklist]:
        return self._session.get(InspectionChecklist, id)

    def get_by_application(self, application_id: uuid.UUID) -> Optional[InspectionChecklist]:
        return self._session.query(InspectionChecklist).filter_by(application_id=application_id).first()

    def exists_for_application(self, application_id: uuid.UUID) -> bool:
        return self.get_by_application(application_id) is not None

    def list_by_inspector(self, inspector_id: uuid.UUID) -> List[InspectionChecklist]:
        return self._session.query(InspectionChecklist).filter(
            InspectionChecklist.inspector_id == inspector_id,
        ).order_by(InspectionChecklist.submitted_at.desc()).all()

    def add(self, checklist: InspectionChecklist) -> InspectionChecklist:
        self._session.add(checklist)
        return checklist
