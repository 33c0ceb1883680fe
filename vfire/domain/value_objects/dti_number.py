"""
DTI Number Value Object - Trade-registration identifier of an establishment.
"""

from dataclasses import dataclass
from ..exceptions import ValidationError


@dataclass(frozen=True)
class DtiNumber:
    """
    Immutable DTI certificate number.

    The portal accepts whatever the owner reads off the certificate; it only
    normalizes spacing and case so that "dti-123 456" and "DTI-123456" compare
    equal.
    """

    value: str

    MAX_LENGTH = 64

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValidationError("DTI certificate number is required", "dti_certificate_no")

        normalized = "".join(self.value.split()).upper()
        if len(normalized) > self.MAX_LENGTH:
            raise ValidationError(
                f"DTI certificate number must be at most {self.MAX_LENGTH} characters",
                "dti_certificate_no",
            )

        object.__setattr__(self, 'value', normalized)

    def __str__(self) -> str:
        return self.value
