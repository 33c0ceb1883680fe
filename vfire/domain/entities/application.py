"""
Application Entity - A request for a fire-safety certificate.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from .base import Entity, utcnow
from .establishment import Establishment
from ..exceptions import (
    BusinessRuleViolationError,
    UnauthorizedError,
    ValidationError,
)
from ..statuses import ApplicationStatus, ApplicationType, UserRole
from ..workflow import ensure_can_apply, transition_application


def _validate_certificate_url(url: str) -> str:
    if not url or not url.strip():
        raise ValidationError("Certificate URL is required", "certificate_url")
    url = url.strip()
    if not (url.startswith("https://") or url.startswith("http://")):
        raise ValidationError("Certificate URL must be an http(s) link", "certificate_url")
    return url


@dataclass
class Application(Entity):
    """
    Certificate application entity.

    The establishment name and DTI number are copied at submission time so
    that the application keeps showing what was applied for even if the
    establishment record later changes.
    """
    establishment_id: Optional[UUID] = None
    owner_id: Optional[UUID] = None
    type: ApplicationType = ApplicationType.FSEC
    status: ApplicationStatus = ApplicationStatus.UNSCHEDULED
    establishment_name: str = ""
    dti_certificate_no: str = ""
    application_date: date = field(default_factory=lambda: utcnow().date())
    application_time: time = field(default_factory=lambda: utcnow().time().replace(microsecond=0))
    inspection_schedule: Optional[datetime] = None
    inspector_id: Optional[UUID] = None
    certificate_url: Optional[str] = None
    rejection_reason: Optional[str] = None

    def __post_init__(self):
        if self.establishment_id is None:
            raise ValidationError("Establishment is required", "establishment_id")
        self.type = ApplicationType(self.type)
        self.status = ApplicationStatus(self.status)

    @classmethod
    def create(
        cls,
        establishment: Establishment,
        application_type: ApplicationType,
        owner_id: UUID,
        actor: UserRole = UserRole.OWNER,
        now: Optional[datetime] = None,
    ) -> 'Application':
        """Owner applies for a certificate on one of their registered establishments."""
        if establishment.owner_id != owner_id:
            raise UnauthorizedError("You can only apply for your own establishments")
        ensure_can_apply(establishment.id, establishment.status, actor)
        now = now or utcnow()
        return cls(
            establishment_id=establishment.id,
            owner_id=owner_id,
            type=ApplicationType(application_type),
            status=ApplicationStatus.UNSCHEDULED,
            establishment_name=establishment.name,
            dti_certificate_no=str(establishment.dti_certificate_no),
            application_date=now.date(),
            application_time=now.time().replace(microsecond=0),
        )

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def has_certificate(self) -> bool:
        return bool(self.certificate_url)

    def schedule(
        self,
        actor: UserRole,
        inspector_id: UUID,
        when: datetime,
        now: Optional[datetime] = None,
    ) -> None:
        """Admin assigns an inspector and an inspection date."""
        if inspector_id is None:
            raise ValidationError("An inspector is required", "inspector_id")
        self._validate_schedule(when, now)
        self.status = transition_application(self.status, ApplicationStatus.FOR_INSPECTION, actor)
        self.inspector_id = inspector_id
        self.inspection_schedule = when
        self.mark_updated(now)

    def reschedule(
        self,
        actor: UserRole,
        inspector_id: Optional[UUID] = None,
        when: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Admin changes the inspector and/or date of a scheduled inspection."""
        if UserRole(actor) != UserRole.ADMIN:
            raise UnauthorizedError("Only admins may reschedule inspections")
        if self.status != ApplicationStatus.FOR_INSPECTION:
            raise BusinessRuleViolationError(
                "RESCHEDULE",
                f"Only scheduled inspections can be rescheduled (status is '{self.status.value}')",
            )
        if inspector_id is None and when is None:
            raise ValidationError("Nothing to reschedule", "inspection_schedule")
        if when is not None:
            self._validate_schedule(when, now)
            self.inspection_schedule = when
        if inspector_id is not None:
            self.inspector_id = inspector_id
        self.mark_updated(now)

    def complete_inspection(self, actor: UserRole, inspector_id: Optional[UUID] = None) -> None:
        """Inspector finished the on-site inspection."""
        if inspector_id is not None and self.inspector_id is not None and inspector_id != self.inspector_id:
            raise UnauthorizedError("Only the assigned inspector may complete this inspection")
        self.status = transition_application(self.status, ApplicationStatus.INSPECTED, actor)
        self.mark_updated()

    def approve(self, actor: UserRole, certificate_url: Optional[str] = None) -> None:
        self.status = transition_application(self.status, ApplicationStatus.APPROVED, actor)
        self.rejection_reason = None
        if certificate_url:
            self.certificate_url = _validate_certificate_url(certificate_url)
        self.mark_updated()

    def issue_certificate(self, actor: UserRole, certificate_url: str) -> None:
        """Record (or replace) the certificate of an approved application."""
        if UserRole(actor) != UserRole.ADMIN:
            raise UnauthorizedError("Only admins may issue certificates")
        if self.status != ApplicationStatus.APPROVED:
            raise BusinessRuleViolationError(
                "CERTIFICATE",
                "Certificates can only be issued for approved applications",
            )
        self.certificate_url = _validate_certificate_url(certificate_url)
        self.mark_updated()

    def reject(self, actor: UserRole, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValidationError("A rejection reason is required", "rejection_reason")
        self.status = transition_application(self.status, ApplicationStatus.REJECTED, actor)
        self.rejection_reason = reason.strip()
        self.mark_updated()

    @staticmethod
    def _validate_schedule(when: Optional[datetime], now: Optional[datetime]) -> None:
        if when is None:
            raise ValidationError("An inspection date is required", "inspection_schedule")
        if when <= (now or utcnow()):
            raise ValidationError("The inspection must be scheduled in the future", "inspection_schedule")

    def __str__(self) -> str:
        return f"Application({self.type.label}, {self.establishment_name}, {self.status.value})"
