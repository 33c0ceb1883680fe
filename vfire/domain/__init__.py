# Domain Layer - Pure business logic, no dependencies on infrastructure

# Exceptions
from .exceptions import (
    DomainError,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    EstablishmentNotRegisteredError,
    DuplicateChecklistError,
    DuplicateEmailError,
    ProfileNotFoundError,
    EstablishmentNotFoundError,
    ApplicationNotFoundError,
    ChecklistNotFoundError,
    AccountRejectedError,
)

# Status enums
from .statuses import (
    UserRole,
    RegistrationStatus,
    AccountStatus,
    EstablishmentStatus,
    ApplicationType,
    ApplicationStatus,
    InspectionResult,
)

# Value Objects
from .value_objects import Email, DtiNumber

# Entities
from .entities import (
    Entity,
    Profile,
    Establishment,
    Application,
    InspectionChecklist,
)

# Access control
from .access import GateDecision, role_gate, navigation_for, home_path_for, ensure_role

__all__ = [
    # Exceptions
    'DomainError',
    'ValidationError',
    'NotFoundError',
    'UnauthorizedError',
    'BusinessRuleViolationError',
    'InvalidStatusTransitionError',
    'EstablishmentNotRegisteredError',
    'DuplicateChecklistError',
    'DuplicateEmailError',
    'ProfileNotFoundError',
    'EstablishmentNotFoundError',
    'ApplicationNotFoundError',
    'ChecklistNotFoundError',
    'AccountRejectedError',
    # Status enums
    'UserRole',
    'RegistrationStatus',
    'AccountStatus',
    'EstablishmentStatus',
    'ApplicationType',
    'ApplicationStatus',
    'InspectionResult',
    # Value Objects
    'Email',
    'DtiNumber',
    # Entities
    'Entity',
    'Profile',
    'Establishment',
    'Application',
    'InspectionChecklist',
    # Access control
    'GateDecision',
    'role_gate',
    'navigation_for',
    'home_path_for',
    'ensure_role',
]
