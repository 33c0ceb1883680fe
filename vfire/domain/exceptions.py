"""
Domain exceptions - Business-level errors.

These exceptions represent business rule violations and domain-specific errors.
They are raised by the domain and application layers and translated to HTTP
responses by the route layer.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(DomainError):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class NotFoundError(DomainError):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, identifier: str = None):
        self.entity_type = entity_type
        self.identifier = identifier
        message = f"{entity_type} not found"
        if identifier:
            message = f"{entity_type} '{identifier}' not found"
        super().__init__(message, f"{entity_type.upper()}_NOT_FOUND")


class UnauthorizedError(DomainError):
    """Raised when the acting profile doesn't have permission."""

    def __init__(self, message: str = "Access not authorized"):
        super().__init__(message, "UNAUTHORIZED")


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        super().__init__(message, f"BUSINESS_RULE_{rule.upper()}")


# Specific domain errors

class ProfileNotFoundError(NotFoundError):

    def __init__(self, profile_id: str = None):
        super().__init__("Profile", profile_id)


class EstablishmentNotFoundError(NotFoundError):

    def __init__(self, establishment_id: str = None):
        super().__init__("Establishment", establishment_id)


class ApplicationNotFoundError(NotFoundError):

    def __init__(self, application_id: str = None):
        super().__init__("Application", application_id)


class ChecklistNotFoundError(NotFoundError):

    def __init__(self, application_id: str = None):
        super().__init__("Checklist", application_id)


class InvalidStatusTransitionError(BusinessRuleViolationError):
    """Raised when an invalid status transition is attempted."""

    def __init__(self, current_status: str, target_status: str, entity_type: str = "Entity"):
        self.current_status = current_status
        self.target_status = target_status
        self.entity_type = entity_type
        message = f"{entity_type} cannot move from '{current_status}' to '{target_status}'"
        super().__init__("STATUS_TRANSITION", message)


class EstablishmentNotRegisteredError(BusinessRuleViolationError):
    """Raised when applying for a certificate on an establishment that is not registered."""

    def __init__(self, establishment_id: str, status: str):
        self.establishment_id = establishment_id
        self.status = status
        message = f"Establishment '{establishment_id}' is {status}; only registered establishments may apply"
        super().__init__("ESTABLISHMENT_NOT_REGISTERED", message)


class DuplicateChecklistError(BusinessRuleViolationError):
    """Raised when a second checklist is submitted for the same application."""

    def __init__(self, application_id: str):
        self.application_id = application_id
        message = f"A checklist was already submitted for application '{application_id}'"
        super().__init__("DUPLICATE_CHECKLIST", message)


class DuplicateEmailError(BusinessRuleViolationError):

    def __init__(self, email: str):
        self.email = email
        super().__init__("DUPLICATE_EMAIL", f"Email '{email}' is already registered")


class AccountRejectedError(UnauthorizedError):
    """Raised when a profile whose registration was rejected tries to sign in."""

    def __init__(self, profile_id: str = None):
        self.profile_id = profile_id
        super().__init__("Your account registration was rejected")
        self.code = "ACCOUNT_REJECTED"
