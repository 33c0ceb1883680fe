"""
Profile Entity - A person using the portal and their account status.
"""

from dataclasses import dataclass
from typing import Optional

from .base import Entity
from ..exceptions import ValidationError
from ..statuses import AccountStatus, UserRole
from ..value_objects import Email
from ..workflow import transition_account


@dataclass
class Profile(Entity):
    """
    Profile entity.

    Owners sign themselves up and wait for an admin to approve the account.
    Inspectors and admins are provisioned by an admin and start registered.
    """
    email: Email = None
    first_name: str = ""
    last_name: str = ""
    middle_name: Optional[str] = None
    position: Optional[str] = None
    role: UserRole = UserRole.OWNER
    account_status: AccountStatus = AccountStatus.PENDING
    rejection_reason: Optional[str] = None
    must_change_password: bool = False

    def __post_init__(self):
        if self.email is None:
            raise ValidationError("Email is required", "email")
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("First name is required", "first_name")
        if not self.last_name or not self.last_name.strip():
            raise ValidationError("Last name is required", "last_name")
        self.first_name = self.first_name.strip()
        self.last_name = self.last_name.strip()
        if self.middle_name is not None:
            self.middle_name = self.middle_name.strip() or None
        self.role = UserRole(self.role)
        self.account_status = AccountStatus(self.account_status)

    @classmethod
    def create_owner(
        cls,
        email: str,
        first_name: str,
        last_name: str,
        middle_name: Optional[str] = None,
    ) -> 'Profile':
        return cls(
            email=Email(email),
            first_name=first_name,
            last_name=last_name,
            middle_name=middle_name,
            role=UserRole.OWNER,
            account_status=AccountStatus.PENDING,
        )

    @classmethod
    def create_inspector(
        cls,
        email: str,
        first_name: str,
        last_name: str,
        position: Optional[str] = None,
    ) -> 'Profile':
        return cls(
            email=Email(email),
            first_name=first_name,
            last_name=last_name,
            position=position,
            role=UserRole.INSPECTOR,
            account_status=AccountStatus.REGISTERED,
            must_change_password=True,
        )

    @classmethod
    def create_admin(cls, email: str, first_name: str = "Admin", last_name: str = "User") -> 'Profile':
        return cls(
            email=Email(email),
            first_name=first_name,
            last_name=last_name,
            role=UserRole.ADMIN,
            account_status=AccountStatus.REGISTERED,
        )

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_inspector(self) -> bool:
        return self.role == UserRole.INSPECTOR

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER

    @property
    def can_sign_in(self) -> bool:
        return self.account_status != AccountStatus.REJECTED

    def approve(self, actor: UserRole) -> None:
        """Admin approves a pending account."""
        self.account_status = transition_account(self.account_status, AccountStatus.REGISTERED, actor)
        self.rejection_reason = None
        self.mark_updated()

    def reject(self, actor: UserRole, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValidationError("A rejection reason is required", "rejection_reason")
        self.account_status = transition_account(self.account_status, AccountStatus.REJECTED, actor)
        self.rejection_reason = reason.strip()
        self.mark_updated()

    def __str__(self) -> str:
        return f"Profile({self.full_name}, {self.role.label})"
