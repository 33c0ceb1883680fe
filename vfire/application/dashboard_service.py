"""Service for building dashboard data."""
from vfire.domain.access import ensure_role, navigation_for
from vfire.domain.entities import utcnow
from vfire.domain.statuses import ApplicationStatus, EstablishmentStatus, UserRole

from .serializers import application_dict, establishment_dict


def _by_value(counts):
    return {status.value: n for status, n in counts.items()}


class DashboardService:
    """Extracts dashboard business logic from route handlers."""

    def __init__(self, uow, clock=utcnow):
        self._uow = uow
        self._clock = clock

    def get_dashboard(self, actor):
        builders = {
            UserRole.ADMIN: self.get_admin_dashboard,
            UserRole.INSPECTOR: self.get_inspector_dashboard,
            UserRole.OWNER: self.get_owner_dashboard,
        }
        return builders[UserRole(actor.role)](actor)

    def get_admin_dashboard(self, actor):
        """
        Build the admin overview.

        Returns dict with keys: stats, actions, recent_applications,
        upcoming_inspections, navigation.
        """
        ensure_role(actor.role, UserRole.ADMIN)
        establishments = self._uow.establishments.count_by_status()
        applications = self._uow.applications.count_by_status()
        pending_users = len(self._uow.profiles.list_pending())

        stats = {
            'total_establishments': sum(establishments.values()),
            'pending_applications': applications[ApplicationStatus.UNSCHEDULED],
            'scheduled_inspections': applications[ApplicationStatus.FOR_INSPECTION],
            'total_certificates': self._uow.applications.count_approved(with_certificate=True),
        }
        actions = {
            'pending_registrations': establishments[EstablishmentStatus.PENDING] + pending_users,
            'pending_establishments': establishments[EstablishmentStatus.PENDING],
            'pending_users': pending_users,
            'applications_to_review': applications[ApplicationStatus.INSPECTED],
            'certificates_to_issue': self._uow.applications.count_approved(with_certificate=False),
        }
        return {
            'stats': stats,
            'actions': actions,
            'applications_by_status': _by_value(applications),
            'applications_by_type': _by_value(self._uow.applications.count_by_type()),
            'recent_applications': [application_dict(a) for a in self._uow.applications.list_recent()],
            'upcoming_inspections': [
                application_dict(a) for a in self._uow.applications.list_upcoming(self._clock())
            ],
            'navigation': [group.to_dict() for group in navigation_for(UserRole.ADMIN)],
        }

    def get_inspector_dashboard(self, actor):
        ensure_role(actor.role, UserRole.INSPECTOR)
        applications = self._uow.applications.count_by_status(inspector_id=actor.id)
        completed = len(self._uow.checklists.list_by_inspector(actor.id))
        return {
            'stats': {
                'assigned': applications[ApplicationStatus.FOR_INSPECTION],
                'completed': completed,
            },
            'upcoming_inspections': [
                application_dict(a)
                for a in self._uow.applications.list_upcoming(self._clock(), inspector_id=actor.id)
            ],
            'navigation': [group.to_dict() for group in navigation_for(UserRole.INSPECTOR)],
        }

    def get_owner_dashboard(self, actor):
        ensure_role(actor.role, UserRole.OWNER)
        establishments = self._uow.establishments.list_by_owner(actor.id)
        return {
            'establishments_by_status': _by_value(self._uow.establishments.count_by_status(owner_id=actor.id)),
            'applications_by_status': _by_value(self._uow.applications.count_by_status(owner_id=actor.id)),
            'establishments': [
                establishment_dict(e, latest_application=e.applications[0] if e.applications else None)
                for e in establishments
            ],
            'upcoming_inspections': [
                application_dict(a)
                for a in self._uow.applications.list_upcoming(self._clock(), owner_id=actor.id)
            ],
            'navigation': [group.to_dict() for group in navigation_for(UserRole.OWNER)],
        }
