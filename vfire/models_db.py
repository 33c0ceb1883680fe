from datetime import date, datetime, time
from typing import List, Optional
import uuid

from flask_login import UserMixin
from sqlalchemy import (
    JSON, Date, Enum as SAEnum, ForeignKey, Index, String, Text, Time, TIMESTAMP, Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .domain.entities.base import utcnow
from .domain.statuses import (
    AccountStatus,
    ApplicationStatus,
    ApplicationType,
    EstablishmentStatus,
    InspectionResult,
    UserRole,
)


# 1. Declarative base
class Base(DeclarativeBase):
    pass


def _enum(enum_cls, name):
    # Store the lowercase values ("for_inspection"), not the member names.
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


JsonType = JSON().with_variant(JSONB(), "postgresql")


# 2. Tables
class Profile(UserMixin, Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[Optional[str]] = mapped_column(String)
    role: Mapped[UserRole] = mapped_column(_enum(UserRole, "user_role"), nullable=False, default=UserRole.OWNER)
    account_status: Mapped[AccountStatus] = mapped_column(
        _enum(AccountStatus, "establishment_status"), nullable=False, default=AccountStatus.PENDING,
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text)
    must_change_password: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    establishments: Mapped[List["Establishment"]] = relationship(back_populates="owner")
    assigned_applications: Mapped[List["Application"]] = relationship(
        back_populates="inspector", foreign_keys="Application.inspector_id",
    )

    @property
    def is_active(self):
        # Flask-Login refuses to log in inactive users.
        return self.account_status != AccountStatus.REJECTED

    @property
    def full_name(self):
        return " ".join(p for p in (self.first_name, self.middle_name, self.last_name) if p)


class Establishment(Base):
    __tablename__ = "establishments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"), nullable=False, index=True)
    establishment_name: Mapped[str] = mapped_column(String, nullable=False)
    dti_certificate_no: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[EstablishmentStatus] = mapped_column(
        _enum(EstablishmentStatus, "establishment_status"), nullable=False, default=EstablishmentStatus.UNREGISTERED,
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    owner: Mapped["Profile"] = relationship(back_populates="establishments")
    applications: Mapped[List["Application"]] = relationship(
        back_populates="establishment", order_by="Application.created_at.desc()",
    )


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        Index("ix_applications_type_status", "type", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    establishment_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("establishments.id"), nullable=False, index=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"), nullable=False, index=True)
    type: Mapped[ApplicationType] = mapped_column(_enum(ApplicationType, "application_type"), nullable=False)
    status: Mapped[ApplicationStatus] = mapped_column(
        _enum(ApplicationStatus, "application_status"), nullable=False, default=ApplicationStatus.UNSCHEDULED,
    )
    # Snapshot of the establishment at submission time
    establishment_name: Mapped[str] = mapped_column(String, nullable=False)
    dti_certificate_no: Mapped[str] = mapped_column(String, nullable=False)

    application_date: Mapped[date] = mapped_column(Date, nullable=False)
    application_time: Mapped[time] = mapped_column(Time, nullable=False)
    inspection_schedule: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, index=True)
    inspector_id: Mapped[Optional[uuid.UUID]] = mapped_column(ForeignKey("profiles.id"), nullable=True, index=True)
    certificate_url: Mapped[Optional[str]] = mapped_column(String)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    establishment: Mapped["Establishment"] = relationship(back_populates="applications")
    owner: Mapped["Profile"] = relationship(foreign_keys=[owner_id])
    inspector: Mapped[Optional["Profile"]] = relationship(
        back_populates="assigned_applications", foreign_keys=[inspector_id],
    )
    checklist: Mapped[Optional["InspectionChecklist"]] = relationship(back_populates="application", uselist=False)


class InspectionChecklist(Base):
    __tablename__ = "inspection_checklists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("applications.id"), unique=True, nullable=False)
    inspector_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"), nullable=False, index=True)
    inspection_date: Mapped[date] = mapped_column(Date, nullable=False)
    inspection_time: Mapped[time] = mapped_column(Time, nullable=False)
    checklist_items: Mapped[dict] = mapped_column(JsonType, nullable=False)
    inspection_status: Mapped[InspectionResult] = mapped_column(
        _enum(InspectionResult, "inspection_status"), nullable=False,
    )
    inspector_signature: Mapped[str] = mapped_column(String, nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    submitted_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=utcnow)

    application: Mapped["Application"] = relationship(back_populates="checklist")
    inspector: Mapped["Profile"] = relationship()
