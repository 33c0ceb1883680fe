"""
InspectionChecklist Entity - The inspector's record of an on-site inspection.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Dict, Optional
from uuid import UUID

from .application import Application
from .base import Entity, utcnow
from ..exceptions import ValidationError
from ..statuses import InspectionResult, UserRole
from ..workflow import ensure_checklist_allowed


@dataclass
class InspectionChecklist(Entity):
    """
    Checklist entity. Created once per application and never changed after.
    """
    application_id: Optional[UUID] = None
    inspector_id: Optional[UUID] = None
    inspection_date: Optional[date] = None
    inspection_time: Optional[time] = None
    checklist_items: Dict[str, Any] = field(default_factory=dict)
    result: InspectionResult = InspectionResult.PASS
    inspector_signature: str = ""
    remarks: Optional[str] = None
    submitted_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if not isinstance(self.checklist_items, dict) or not self.checklist_items:
            raise ValidationError("At least one checklist item is required", "checklist_items")
        if not self.inspector_signature or not self.inspector_signature.strip():
            raise ValidationError("Inspector signature is required", "inspector_signature")
        if self.inspection_date is None:
            raise ValidationError("Inspection date is required", "inspection_date")
        if self.inspection_time is None:
            raise ValidationError("Inspection time is required", "inspection_time")
        self.result = InspectionResult(self.result)
        if self.remarks is not None:
            self.remarks = self.remarks.strip() or None

    @classmethod
    def submit(
        cls,
        application: Application,
        inspector_id: UUID,
        actor: UserRole,
        inspection_date: date,
        inspection_time: time,
        checklist_items: Dict[str, Any],
        result: InspectionResult,
        inspector_signature: str,
        remarks: Optional[str] = None,
        already_submitted: bool = False,
    ) -> 'InspectionChecklist':
        """
        Record the checklist and move the application to inspected.

        Any result (pass, fail or conditional) completes the inspection; the
        approve/reject decision stays with the admin.
        """
        ensure_checklist_allowed(
            application.id,
            application.status,
            actor,
            actor_id=inspector_id,
            assigned_inspector_id=application.inspector_id,
            already_submitted=already_submitted,
        )
        checklist = cls(
            application_id=application.id,
            inspector_id=inspector_id,
            inspection_date=inspection_date,
            inspection_time=inspection_time,
            checklist_items=dict(checklist_items or {}),
            result=result,
            inspector_signature=inspector_signature.strip() if inspector_signature else "",
            remarks=remarks,
        )
        application.complete_inspection(actor, inspector_id)
        return checklist

    @property
    def passed(self) -> bool:
        return self.result == InspectionResult.PASS

    def __str__(self) -> str:
        return f"InspectionChecklist({self.application_id}, {self.result.value})"
