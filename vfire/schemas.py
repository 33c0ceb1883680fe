"""Request payloads accepted by the JSON API."""
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
import uuid

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator, model_validator

from .config import config
from .domain.exceptions import ValidationError
from .domain.statuses import ApplicationType, InspectionResult


class EstablishmentInput(BaseModel):
    establishment_name: str = Field(min_length=1, description="Business name as shown on the DTI certificate.")
    dti_certificate_no: str = Field(min_length=1, description="DTI certificate number.")


class SignUpRequest(BaseModel):
    first_name: str = Field(min_length=1)
    middle_name: Optional[str] = None
    last_name: str = Field(min_length=1)
    email: str
    password: str
    confirm_password: str
    establishments: List[EstablishmentInput] = Field(min_length=1, description="At least one establishment.")

    @field_validator("password")
    @classmethod
    def password_length(cls, v):
        if len(v) < config.MIN_SIGNUP_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {config.MIN_SIGNUP_PASSWORD_LENGTH} characters")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, v):
        if len(v) < config.MIN_CHANGED_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {config.MIN_CHANGED_PASSWORD_LENGTH} characters")
        if not any(c.isdigit() for c in v):
            raise ValueError("Password must contain at least one number")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class CreateInspectorRequest(BaseModel):
    email: str
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    position: Optional[str] = None
    password: Optional[str] = Field(default=None, description="Generated when omitted.")


class CreateAdminRequest(BaseModel):
    email: str
    password: str = Field(min_length=8)
    first_name: str = "Admin"
    last_name: str = "User"


class RejectRequest(BaseModel):
    reason: str = Field(min_length=1)


class ApplyRequest(BaseModel):
    establishment_id: uuid.UUID
    type: ApplicationType


class ScheduleRequest(BaseModel):
    inspector_id: uuid.UUID
    inspection_schedule: datetime


class RescheduleRequest(BaseModel):
    inspector_id: Optional[uuid.UUID] = None
    inspection_schedule: Optional[datetime] = None


class ApproveApplicationRequest(BaseModel):
    certificate_url: Optional[str] = None


class CertificateRequest(BaseModel):
    certificate_url: str = Field(min_length=1)


class ChecklistRequest(BaseModel):
    inspection_date: date
    inspection_time: time
    checklist_items: Dict[str, Any] = Field(description="Checklist answers keyed by item.")
    result: InspectionResult = Field(alias="inspection_status")
    inspector_signature: str = Field(min_length=1)
    remarks: Optional[str] = None

    model_config = {"populate_by_name": True}


def parse(schema, payload):
    """Validate a request body, raising the domain ValidationError on failure."""
    try:
        return schema.model_validate(payload or {})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        message = first.get("msg", "Invalid input").removeprefix("Value error, ")
        raise ValidationError(message, field) from e
