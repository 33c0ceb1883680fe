"""
Role-based access: the route gate and the per-role navigation table.

The gate is a pure function of (required role, profile role, loading flag).
Roles are compared by exact match; an admin is not an inspector and an
inspector is not an owner.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .exceptions import UnauthorizedError
from .statuses import ApplicationType, UserRole


class GateDecision(str, Enum):
    ALLOW = "allow"
    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_DASHBOARD = "redirect_dashboard"

    @property
    def allowed(self) -> bool:
        return self == GateDecision.ALLOW

    @property
    def is_redirect(self) -> bool:
        return self in (GateDecision.REDIRECT_LOGIN, GateDecision.REDIRECT_DASHBOARD)


def _as_role(value) -> Optional[UserRole]:
    if value is None or isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        return None


def role_gate(
    required_role: Union[UserRole, str, None],
    profile_role: Union[UserRole, str, None],
    is_loading: bool = False,
    is_authenticated: bool = True,
) -> GateDecision:
    """
    Decide whether a page guarded by ``required_role`` may be rendered.

    >>> role_gate('admin', 'owner')
    <GateDecision.REDIRECT_DASHBOARD: 'redirect_dashboard'>
    """
    if is_loading:
        return GateDecision.LOADING
    if not is_authenticated:
        return GateDecision.REDIRECT_LOGIN
    if required_role is None:
        return GateDecision.ALLOW
    required = _as_role(required_role)
    actual = _as_role(profile_role)
    if actual is None or required != actual:
        return GateDecision.REDIRECT_DASHBOARD
    return GateDecision.ALLOW


@dataclass(frozen=True)
class NavItem:
    label: str
    path: str


@dataclass(frozen=True)
class NavGroup:
    label: str
    items: Tuple[NavItem, ...]

    def to_dict(self) -> dict:
        return {
            'group': self.label,
            'items': [{'label': i.label, 'to': i.path} for i in self.items],
        }


HOME_PATHS: Dict[UserRole, str] = {
    UserRole.ADMIN: '/admin/dashboard',
    UserRole.INSPECTOR: '/inspector/dashboard',
    UserRole.OWNER: '/owner/dashboard',
}

CALENDAR = NavItem('Calendar', '/calendar')

NAVIGATION: Dict[UserRole, Tuple[NavGroup, ...]] = {
    UserRole.ADMIN: (
        NavGroup('Dashboard', (NavItem('Overview', HOME_PATHS[UserRole.ADMIN]),)),
        NavGroup('User Management', (
            NavItem('All Users', '/admin/users'),
            NavItem('Pending Users', '/admin/users/pending'),
        )),
        NavGroup('Establishments', (
            NavItem('All Establishments', '/admin/establishments'),
            NavItem('Pending Establishments', '/admin/establishments/pending'),
        )),
        NavGroup('Applications', (
            NavItem('FSEC Applications', f'/admin/applications/{ApplicationType.FSEC.value}'),
            NavItem(ApplicationType.FSIC_OCCUPANCY.label, f'/admin/applications/{ApplicationType.FSIC_OCCUPANCY.value}'),
            NavItem(ApplicationType.FSIC_BUSINESS.label, f'/admin/applications/{ApplicationType.FSIC_BUSINESS.value}'),
        )),
        NavGroup('Inspections', (
            NavItem('View Inspections', '/admin/inspections'),
            CALENDAR,
        )),
    ),
    UserRole.INSPECTOR: (
        NavGroup('Dashboard', (NavItem('Overview', HOME_PATHS[UserRole.INSPECTOR]),)),
        NavGroup('Inspections', (
            NavItem('Assigned Inspections', '/inspector/inspections'),
            NavItem('Completed Inspections', '/inspector/inspections/completed'),
            CALENDAR,
        )),
    ),
    UserRole.OWNER: (
        NavGroup('Dashboard', (NavItem('Overview', HOME_PATHS[UserRole.OWNER]),)),
        NavGroup('Establishments', (
            NavItem('My Establishments', '/owner/establishments'),
            NavItem('Register Establishment', '/owner/establishments/register'),
        )),
        NavGroup('Applications', (
            NavItem('Apply for Certification', '/owner/applications/apply'),
            NavItem('My Applications', '/owner/applications'),
        )),
    ),
}


def navigation_for(role: Union[UserRole, str]) -> Tuple[NavGroup, ...]:
    return NAVIGATION[UserRole(role)]


def home_path_for(role: Union[UserRole, str, None]) -> str:
    """Dashboard of a role; unknown or missing roles land on the login page."""
    role = _as_role(role)
    if role is None:
        return '/auth/login'
    return HOME_PATHS[role]


def ensure_role(actor_role: Union[UserRole, str, None], *allowed: UserRole) -> UserRole:
    """Raise UnauthorizedError unless ``actor_role`` is one of ``allowed``."""
    role = _as_role(actor_role)
    if role is None or role not in allowed:
        names = ", ".join(r.value for r in allowed)
        raise UnauthorizedError(f"This action requires role: {names}")
    return role
