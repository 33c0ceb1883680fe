"""
Simple Dependency Injection container using Flask's g object.

No external DI framework needed - just factory functions that create
services with their dependencies, cached per-request in Flask g.
"""
from dataclasses import dataclass
from typing import Optional

from flask import g
from flask_login import current_user

from vfire.database import get_db
from vfire.domain.access import home_path_for
from vfire.domain.statuses import UserRole
from vfire.repositories.unit_of_work import UnitOfWork


@dataclass
class SessionState:
    """
    Who is making the current request.

    Built once per request from the Flask-Login session, replaced on
    login/logout and dropped at app-context teardown.
    """
    profile: Optional[object] = None
    role: Optional[UserRole] = None
    is_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.profile is not None

    @property
    def home_path(self) -> str:
        return home_path_for(self.role)

    def to_dict(self):
        from vfire.application.serializers import profile_dict
        return {
            'authenticated': self.is_authenticated,
            'role': self.role.value if self.role else None,
            'home': self.home_path,
            'profile': profile_dict(self.profile),
        }

    @classmethod
    def from_profile(cls, profile):
        if profile is None:
            return cls()
        return cls(profile=profile, role=UserRole(profile.role))


def get_uow() -> UnitOfWork:
    """Get or create UnitOfWork for the current request."""
    if 'uow' not in g:
        db = next(get_db())
        g.uow = UnitOfWork(db)
    return g.uow


def get_session_state() -> SessionState:
    if 'session_state' not in g:
        profile = current_user if current_user.is_authenticated else None
        g.session_state = SessionState.from_profile(profile)
    return g.session_state


def set_session_state(profile) -> SessionState:
    """Refresh the request state after login or logout."""
    g.session_state = SessionState.from_profile(profile)
    return g.session_state


def get_account_service():
    from vfire.application.account_service import AccountService
    return AccountService(get_uow())


def get_establishment_service():
    from vfire.application.establishment_service import EstablishmentService
    return EstablishmentService(get_uow())


def get_application_service():
    from vfire.application.application_service import ApplicationService
    return ApplicationService(get_uow())


def get_inspection_service():
    from vfire.application.inspection_service import InspectionService
    return InspectionService(get_uow(), applications=get_application_service())


def get_dashboard_service():
    """Get DashboardService for the current request."""
    from vfire.application.dashboard_service import DashboardService
    return DashboardService(get_uow())


def get_calendar_service():
    from vfire.application.calendar_service import CalendarService
    return CalendarService(get_uow())


def teardown_uow(exception=None):
    """
    Teardown handler for Flask app context.

    Register with: app.teardown_appcontext(teardown_uow)
    """
    g.pop('session_state', None)
    uow = g.pop('uow', None)
    if uow:
        if exception:
            uow.rollback()
        uow.close()
