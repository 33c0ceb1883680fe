"""Unit tests for InspectionService."""
from datetime import date, time

import pytest

from vfire.application.inspection_service import InspectionService
from vfire.domain.exceptions import (
    ApplicationNotFoundError,
    ChecklistNotFoundError,
    DuplicateChecklistError,
    InvalidStatusTransitionError,
    UnauthorizedError,
)
from vfire.domain.statuses import ApplicationStatus, InspectionResult, UserRole
from vfire.schemas import ChecklistRequest


def checklist_request(**overrides):
    data = {
        'inspection_date': date(2025, 5, 3),
        'inspection_time': time(14, 0),
        'checklist_items': {'fire_extinguishers': 'compliant', 'exits': 'blocked'},
        'inspection_status': 'fail',
        'inspector_signature': 'J. Cruz',
        'remarks': 'Clear the rear exit.',
    }
    data.update(overrides)
    return ChecklistRequest(**data)


class TestSubmitChecklist:

    def test_submit_moves_to_inspected(self, uow, inspector, scheduled_application):
        result = InspectionService(uow).submit_checklist(inspector, scheduled_application.id, checklist_request())

        assert result.data['application']['status'] == 'inspected'
        assert result.data['checklist']['inspection_status'] == 'fail'
        checklist = uow.checklists.get_by_application(scheduled_application.id)
        assert checklist.inspector_id == inspector.id
        assert checklist.checklist_items['exits'] == 'blocked'
        assert uow.applications.get_by_id(scheduled_application.id).status == ApplicationStatus.INSPECTED

    def test_second_submission_rejected(self, uow, inspector, scheduled_application):
        service = InspectionService(uow)
        service.submit_checklist(inspector, scheduled_application.id, checklist_request())

        with pytest.raises((DuplicateChecklistError, InvalidStatusTransitionError)):
            service.submit_checklist(inspector, scheduled_application.id, checklist_request())
        assert len(uow.checklists.list_by_inspector(inspector.id)) == 1

    def test_checklist_exists_for_other_status(self, uow, inspector, scheduled_application, checklist_factory,
                                               db_session):
        checklist_factory.create(db_session, scheduled_application)
        db_session.expire_all()

        with pytest.raises(DuplicateChecklistError):
            InspectionService(uow).submit_checklist(inspector, scheduled_application.id, checklist_request())

    def test_unassigned_inspector_gets_not_found(self, uow, scheduled_application, profile_factory, db_session):
        other = profile_factory.create(db_session, role=UserRole.INSPECTOR)
        with pytest.raises(ApplicationNotFoundError):
            InspectionService(uow).submit_checklist(other, scheduled_application.id, checklist_request())

    def test_admin_cannot_submit(self, uow, admin, scheduled_application):
        with pytest.raises(UnauthorizedError):
            InspectionService(uow).submit_checklist(admin, scheduled_application.id, checklist_request())

    def test_request_accepts_result_by_name(self):
        request = ChecklistRequest(
            inspection_date=date(2025, 5, 3),
            inspection_time=time(9, 0),
            checklist_items={'a': 'ok'},
            result='conditional',
            inspector_signature='Sig',
        )
        assert request.result == InspectionResult.CONDITIONAL


class TestInspectorViews:

    def test_list_assigned(self, uow, inspector, scheduled_application):
        items = InspectionService(uow).list_assigned(inspector)
        assert [i['id'] for i in items] == [str(scheduled_application.id)]

    def test_list_completed_only_with_checklist(self, uow, inspector, scheduled_application,
                                                registered_establishment, application_factory, db_session):
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.APPROVED,
                                   inspector_id=inspector.id)
        service = InspectionService(uow)
        service.submit_checklist(inspector, scheduled_application.id, checklist_request())

        items = service.list_completed(inspector)
        assert [i['id'] for i in items] == [str(scheduled_application.id)]
        assert items[0]['checklist']['inspector_signature'] == 'J. Cruz'
        assert service.list_assigned(inspector) == []

    def test_get_checklist_missing(self, uow, inspector, scheduled_application):
        with pytest.raises(ChecklistNotFoundError):
            InspectionService(uow).get_checklist(inspector, scheduled_application.id)

    def test_owner_reads_checklist(self, uow, owner, inspector, scheduled_application):
        InspectionService(uow).submit_checklist(inspector, scheduled_application.id, checklist_request())
        data = InspectionService(uow).get_checklist(owner, scheduled_application.id)
        assert data['remarks'] == 'Clear the rear exit.'


class TestAdminViews:

    def test_list_all_scheduled(self, uow, admin, scheduled_application, registered_establishment,
                                application_factory, db_session):
        application_factory.create(db_session, registered_establishment)
        items = InspectionService(uow).list_all(admin)
        assert [i['id'] for i in items] == [str(scheduled_application.id)]

    def test_list_all_requires_admin(self, uow, inspector):
        with pytest.raises(UnauthorizedError):
            InspectionService(uow).list_all(inspector)
