"""
Establishment Entity - A business location owned by an establishment owner.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .base import Entity
from ..exceptions import ValidationError
from ..statuses import EstablishmentStatus, UserRole
from ..value_objects import DtiNumber
from ..workflow import transition_establishment


@dataclass
class Establishment(Entity):
    """
    Establishment entity.

    Registration goes unregistered -> pending (owner submits) -> registered
    (admin approves). An admin may reject at any point before; the owner can
    then resubmit. Only registered establishments may apply for certificates.
    """
    owner_id: Optional[UUID] = None
    name: str = ""
    dti_certificate_no: DtiNumber = None
    status: EstablishmentStatus = EstablishmentStatus.UNREGISTERED
    rejection_reason: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Establishment name is required", "establishment_name")
        self.name = self.name.strip()
        if self.dti_certificate_no is None:
            raise ValidationError("DTI certificate number is required", "dti_certificate_no")
        if isinstance(self.dti_certificate_no, str):
            self.dti_certificate_no = DtiNumber(self.dti_certificate_no)
        self.status = EstablishmentStatus(self.status)

    @classmethod
    def create(
        cls,
        owner_id: UUID,
        name: str,
        dti_certificate_no: str,
        submit: bool = True,
    ) -> 'Establishment':
        """
        Create an establishment for an owner.

        With ``submit`` (the default) it is immediately sent for admin review.
        """
        establishment = cls(
            owner_id=owner_id,
            name=name,
            dti_certificate_no=DtiNumber(dti_certificate_no),
        )
        if submit:
            establishment.register(UserRole.OWNER)
        return establishment

    @property
    def is_registered(self) -> bool:
        return self.status == EstablishmentStatus.REGISTERED

    @property
    def is_pending(self) -> bool:
        return self.status == EstablishmentStatus.PENDING

    @property
    def can_apply(self) -> bool:
        return self.is_registered

    def register(self, actor: UserRole) -> None:
        """Owner submits (or resubmits) the establishment for review."""
        self.status = transition_establishment(self.status, EstablishmentStatus.PENDING, actor)
        self.rejection_reason = None
        self.mark_updated()

    def approve(self, actor: UserRole) -> None:
        self.status = transition_establishment(self.status, EstablishmentStatus.REGISTERED, actor)
        self.rejection_reason = None
        self.mark_updated()

    def reject(self, actor: UserRole, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValidationError("A rejection reason is required", "rejection_reason")
        self.status = transition_establishment(self.status, EstablishmentStatus.REJECTED, actor)
        self.rejection_reason = reason.strip()
        self.mark_updated()

    def __str__(self) -> str:
        return f"Establishment({self.name}, DTI {self.dti_certificate_no})"
