"""
Structured error codes.

Gives every failure a stable code plus one message for the person using the
portal and one for the administrator reading the logs.
"""

from .domain.exceptions import (
    AccountRejectedError,
    BusinessRuleViolationError,
    DomainError,
    DuplicateChecklistError,
    DuplicateEmailError,
    EstablishmentNotRegisteredError,
    InvalidStatusTransitionError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class ErrorCode:
    """Error catalogue with end-user and administrator messages."""

    # Input (1xxx)
    ERR_1001 = {
        "code": "ERR_1001",
        "admin_msg": "Request payload failed validation",
        "user_msg": "Some fields are missing or invalid. Check the form and try again."
    }

    ERR_1002 = {
        "code": "ERR_1002",
        "admin_msg": "CSRF token missing or invalid",
        "user_msg": "Your session expired. Refresh the page and try again."
    }

    # Access (2xxx)
    ERR_2001 = {
        "code": "ERR_2001",
        "admin_msg": "Unauthenticated request to a protected endpoint",
        "user_msg": "Please sign in to continue."
    }

    ERR_2002 = {
        "code": "ERR_2002",
        "admin_msg": "Role not allowed for this action",
        "user_msg": "You do not have permission to do this."
    }

    ERR_2003 = {
        "code": "ERR_2003",
        "admin_msg": "Sign-in attempt on a rejected account",
        "user_msg": "Your account registration was rejected. Contact the fire station for details."
    }

    # Records (3xxx)
    ERR_3002 = {
        "code": "ERR_3002",
        "admin_msg": "Record not found",
        "user_msg": "The record you are looking for does not exist or is not visible to you."
    }

    ERR_3003 = {
        "code": "ERR_3003",
        "admin_msg": "Database connection lost",
        "user_msg": "The service is temporarily unavailable. Try again in a few minutes."
    }

    ERR_3004 = {
        "code": "ERR_3004",
        "admin_msg": "Duplicate record (unique constraint)",
        "user_msg": "This record already exists."
    }

    # Workflow (4xxx)
    ERR_4001 = {
        "code": "ERR_4001",
        "admin_msg": "Illegal status transition",
        "user_msg": "This action is not possible in the current status of the record."
    }

    ERR_4002 = {
        "code": "ERR_4002",
        "admin_msg": "Application against an establishment that is not registered",
        "user_msg": "Only registered establishments can apply for a certificate. Wait for the admin approval."
    }

    ERR_4003 = {
        "code": "ERR_4003",
        "admin_msg": "Checklist already submitted for this application",
        "user_msg": "A checklist was already submitted for this inspection."
    }

    ERR_4004 = {
        "code": "ERR_4004",
        "admin_msg": "Business rule violated",
        "user_msg": "This action is not allowed."
    }

    # Generic (9xxx)
    ERR_9001 = {
        "code": "ERR_9001",
        "admin_msg": "Unexpected error (see traceback)",
        "user_msg": "An unexpected error occurred. The team has been notified."
    }

    ERR_9002 = {
        "code": "ERR_9002",
        "admin_msg": "Too many requests (rate limit)",
        "user_msg": "Too many attempts. Wait a minute and try again."
    }

    @staticmethod
    def get_error(exception_or_code):
        """
        Resolve an error entry from an exception or a code string.

        Unknown inputs resolve to ERR_9001.
        """
        if isinstance(exception_or_code, str):
            if exception_or_code.startswith("ERR_"):
                return getattr(ErrorCode, exception_or_code, ErrorCode.ERR_9001)
            exception_or_code = Exception(exception_or_code)

        # Domain errors, most specific first
        if isinstance(exception_or_code, EstablishmentNotRegisteredError):
            return ErrorCode.ERR_4002
        if isinstance(exception_or_code, DuplicateChecklistError):
            return ErrorCode.ERR_4003
        if isinstance(exception_or_code, DuplicateEmailError):
            return ErrorCode.ERR_3004
        if isinstance(exception_or_code, InvalidStatusTransitionError):
            return ErrorCode.ERR_4001
        if isinstance(exception_or_code, BusinessRuleViolationError):
            return ErrorCode.ERR_4004
        if isinstance(exception_or_code, ValidationError):
            return ErrorCode.ERR_1001
        if isinstance(exception_or_code, NotFoundError):
            return ErrorCode.ERR_3002
        if isinstance(exception_or_code, AccountRejectedError):
            return ErrorCode.ERR_2003
        if isinstance(exception_or_code, UnauthorizedError):
            return ErrorCode.ERR_2002
        if isinstance(exception_or_code, DomainError):
            return ErrorCode.ERR_4004

        error_str = str(exception_or_code).lower()

        # Database
        if "unique constraint" in error_str or "duplicate key" in error_str:
            return ErrorCode.ERR_3004
        if "database" in error_str or "connection" in error_str:
            return ErrorCode.ERR_3003

        if "rate limit" in error_str or "too many requests" in error_str:
            return ErrorCode.ERR_9002

        # Default
        return ErrorCode.ERR_9001
