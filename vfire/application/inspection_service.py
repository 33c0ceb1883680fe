"""Service for inspections and checklist submission."""
import logging

from sqlalchemy.exc import IntegrityError

from vfire.domain.access import ensure_role
from vfire.domain.entities import InspectionChecklist
from vfire.domain.exceptions import ChecklistNotFoundError, DuplicateChecklistError
from vfire.domain.statuses import ApplicationStatus, UserRole
from vfire.repositories import mappers

from .application_service import ApplicationService
from .results import OperationResult
from .serializers import application_dict, checklist_dict

logger = logging.getLogger(__name__)

COMPLETED_STATUSES = (ApplicationStatus.INSPECTED, ApplicationStatus.APPROVED, ApplicationStatus.REJECTED)


class InspectionService:

    def __init__(self, uow, applications=None):
        self._uow = uow
        self._applications = applications or ApplicationService(uow)

    # Inspector

    def list_assigned(self, actor):
        ensure_role(actor.role, UserRole.INSPECTOR)
        rows = self._uow.applications.list_for_inspector(actor.id, statuses=[ApplicationStatus.FOR_INSPECTION])
        return [application_dict(r) for r in rows]

    def list_completed(self, actor):
        """Assigned applications whose checklist has been submitted."""
        ensure_role(actor.role, UserRole.INSPECTOR)
        rows = self._uow.applications.list_for_inspector(actor.id, statuses=COMPLETED_STATUSES)
        return [application_dict(r, with_checklist=True) for r in rows if r.checklist is not None]

    def get(self, actor, application_id):
        return self._applications.get(actor, application_id)

    def submit_checklist(self, actor, application_id, request):
        """
        Record the checklist and move the application to inspected.

        Only the assigned inspector may submit, once, while the application
        is for_inspection.
        """
        ensure_role(actor.role, UserRole.INSPECTOR)
        row = self._applications.get_visible_row(actor, application_id)
        application = mappers.application_to_entity(row)
        previous = application.status

        checklist = InspectionChecklist.submit(
            application,
            inspector_id=actor.id,
            actor=actor.role,
            inspection_date=request.inspection_date,
            inspection_time=request.inspection_time,
            checklist_items=request.checklist_items,
            result=request.result,
            inspector_signature=request.inspector_signature,
            remarks=request.remarks,
            already_submitted=row.checklist is not None,
        )

        try:
            checklist_row = self._uow.checklists.add(mappers.checklist_to_row(checklist))
            row.checklist = checklist_row
            mappers.apply_application(application, row)
            self._uow.commit()
        except IntegrityError:
            # Unique application_id: a concurrent submission won
            self._uow.rollback()
            raise DuplicateChecklistError(str(application_id))

        logger.info(
            "Application status changed",
            extra={'props': {
                'application_id': str(row.id),
                'from': previous.value,
                'to': row.status.value,
                'actor_id': str(actor.id),
                'result': checklist.result.value,
            }},
        )
        return OperationResult(
            success=True,
            message='Checklist submitted. The application is now awaiting the admin decision.',
            data={'application': application_dict(row), 'checklist': checklist_dict(checklist_row)},
        )

    def get_checklist(self, actor, application_id):
        row = self._applications.get_visible_row(actor, application_id)
        if row.checklist is None:
            raise ChecklistNotFoundError(str(application_id))
        return checklist_dict(row.checklist)

    # Admin

    def list_all(self, actor):
        """Every application that has been scheduled for inspection."""
        ensure_role(actor.role, UserRole.ADMIN)
        return [application_dict(r) for r in self._uow.applications.list_scheduled()]
