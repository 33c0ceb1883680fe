# Value Objects - Immutable domain primitives
from .email import Email
from .dti_number import DtiNumber

__all__ = ['Email', 'DtiNumber']
