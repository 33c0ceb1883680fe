"""Repository for Profile rows."""
from typing import List, Optional
import uuid

from vfire.models_db import Profile
from vfire.domain.statuses import AccountStatus, UserRole


class ProfileRepository:
    def __init__(self, session):
        self._session = session

    def get_by_id(self, id: uuid.UUID) -> Optional[Profile]:
        return self._session.get(Profile, id)

    def get_by_email(self, email: str) -> Optional[Profile]:
        return self._session.query(Profile).filter_by(email=email.strip().lower()).first()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def list_all(self, role: Optional[UserRole] = None) -> List[Profile]:
        query = self._session.query(Profile)
        if role is not None:
            query = query.filter(Profile.role == UserRole(role))
        return query.order_by(Profile.created_at.desc()).all()

    def list_pending(self) -> List[Profile]:
        return self._session.query(Profile).filter(
            Profile.account_status == AccountStatus.PENDING,
        ).order_by(Profile.created_at.asc()).all()

    def list_inspectors(self, active_only: bool = True) -> List[Profile]:
        query = self._session.query(Profile).filter(Profile.role == UserRole.INSPECTOR)
        if active_only:
            query = query.filter(Profile.account_status == AccountStatus.REGISTERED)
        return query.order_by(Profile.last_name, Profile.first_name).all()

    def count_by_role(self) -> dict:
        counts = {role: 0 for role in UserRole}
        for role, in self._session.query(Profile.role).all():
            counts[role] += 1
        return counts

    def add(self, profile: Profile) -> Profile:
        self._session.add(profile)
        return profile
