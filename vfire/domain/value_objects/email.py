"""
Email value object - the sign-in identifier of a profile.
"""

import re
from dataclasses import dataclass

from ..exceptions import ValidationError

EMAIL_PATTERN = re.compile(r'^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$')


@dataclass(frozen=True)
class Email:
    """
    Trimmed, lower-cased email address.

    Profiles are looked up by this normalized form, so "Owner@Example.com"
    and "owner@example.com" are the same account.
    """

    value: str

    def __post_init__(self):
        normalized = (self.value or "").strip().lower()
        if not normalized:
            raise ValidationError("Email is required", "email")
        if not EMAIL_PATTERN.match(normalized):
            raise ValidationError(f"Invalid email: {self.value}", "email")
        object.__setattr__(self, 'value', normalized)

    def __str__(self) -> str:
        return self.value
