"""
Unit tests for the request-scoped container (vfire/container.py).

Tests cover:
- get_uow: one UnitOfWork per request
- SessionState: anonymous and signed-in request state
- service factories share the request UnitOfWork
- teardown_uow: closes the UoW, rollback on exception
"""

from unittest.mock import MagicMock, patch

from flask import g

from vfire.application import (
    AccountService,
    ApplicationService,
    CalendarService,
    DashboardService,
    EstablishmentService,
    InspectionService,
)
from vfire.container import (
    SessionState,
    get_account_service,
    get_application_service,
    get_calendar_service,
    get_dashboard_service,
    get_establishment_service,
    get_inspection_service,
    get_session_state,
    get_uow,
    set_session_state,
    teardown_uow,
)
from vfire.domain.statuses import UserRole


class TestGetUow:

    def test_reused_within_request(self, app):
        with app.test_request_context():
            assert get_uow() is get_uow()

    @patch('vfire.container.UnitOfWork')
    @patch('vfire.container.get_db')
    def test_built_from_session(self, mock_get_db, mock_uow_cls, app):
        session = MagicMock()
        mock_get_db.return_value = iter([session])

        with app.test_request_context():
            get_uow()
            mock_uow_cls.assert_called_once_with(session)


class TestSessionState:

    def test_anonymous(self, app):
        with app.test_request_context():
            state = get_session_state()
            assert not state.is_authenticated
            assert state.home_path == '/auth/login'
            assert state.to_dict()['profile'] is None

    def test_from_profile(self, owner):
        state = SessionState.from_profile(owner)
        assert state.role == UserRole.OWNER
        assert state.home_path == '/owner/dashboard'
        assert state.to_dict()['profile']['id'] == str(owner.id)

    def test_set_replaces_request_state(self, app, admin):
        with app.test_request_context():
            set_session_state(admin)
            assert get_session_state().role == UserRole.ADMIN
            set_session_state(None)
            assert not get_session_state().is_authenticated


class TestServiceFactories:

    def test_types(self, app):
        with app.test_request_context():
            assert isinstance(get_account_service(), AccountService)
            assert isinstance(get_establishment_service(), EstablishmentService)
            assert isinstance(get_application_service(), ApplicationService)
            assert isinstance(get_inspection_service(), InspectionService)
            assert isinstance(get_dashboard_service(), DashboardService)
            assert isinstance(get_calendar_service(), CalendarService)


class TestTeardownUow:

    def test_closes_uow(self, app):
        with app.test_request_context():
            uow = MagicMock()
            g.uow = uow
            g.session_state = SessionState()
            teardown_uow()
            uow.close.assert_called_once()
            uow.rollback.assert_not_called()
            assert 'session_state' not in g

    def test_rollback_on_exception(self, app):
        with app.test_request_context():
            uow = MagicMock()
            g.uow = uow
            teardown_uow(RuntimeError('boom'))
            uow.rollback.assert_called_once()
            uow.close.assert_called_once()
