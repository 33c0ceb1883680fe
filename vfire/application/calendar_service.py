"""Service for the inspection calendar."""
from collections import defaultdict

from vfire.domain.entities import utcnow
from vfire.domain.exceptions import ValidationError
from vfire.domain.statuses import UserRole

from .serializers import application_dict

MANAGING_ROLES = (UserRole.ADMIN, UserRole.INSPECTOR)

# The end of December MAX_YEAR must still be a valid date.
MIN_YEAR = 1
MAX_YEAR = 9998


class CalendarService:

    def __init__(self, uow, clock=utcnow):
        self._uow = uow
        self._clock = clock

    def get_month(self, actor, year=None, month=None):
        """
        Scheduled inspections of one month grouped by day.

        Admins see every inspection, inspectors their assignments and owners
        the inspections of their own applications.
        """
        today = self._clock().date()
        year = year if year is not None else today.year
        month = month if month is not None else today.month
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}", "year")
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12", "month")

        role = UserRole(actor.role)
        filters = {}
        if role == UserRole.INSPECTOR:
            filters['inspector_id'] = actor.id
        elif role == UserRole.OWNER:
            filters['owner_id'] = actor.id

        days = defaultdict(list)
        rows = self._uow.applications.list_for_month(year, month, **filters)
        for row in rows:
            days[row.inspection_schedule.date().isoformat()].append(application_dict(row))

        return {
            'year': year,
            'month': month,
            'can_manage': role in MANAGING_ROLES,
            'total': len(rows),
            'days': dict(days),
        }
