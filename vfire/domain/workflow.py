"""
Workflow rules - which status changes are legal and who may perform them.

Every status write in the portal goes through one of the ``transition_*``
functions below. They return the validated target status so callers can
assign it directly::

    row.status = transition_application(row.status, ApplicationStatus.FOR_INSPECTION, actor)
"""

from typing import Dict, FrozenSet, Optional, Union

from .exceptions import (
    DuplicateChecklistError,
    EstablishmentNotRegisteredError,
    InvalidStatusTransitionError,
    UnauthorizedError,
)
from .statuses import (
    AccountStatus,
    ApplicationStatus,
    EstablishmentStatus,
    UserRole,
)

# Target status -> roles allowed to move an entity there.
ESTABLISHMENT_ACTORS: Dict[EstablishmentStatus, FrozenSet[UserRole]] = {
    EstablishmentStatus.PENDING: frozenset({UserRole.OWNER}),
    EstablishmentStatus.REGISTERED: frozenset({UserRole.ADMIN}),
    EstablishmentStatus.REJECTED: frozenset({UserRole.ADMIN}),
}

# Accounts share the registration enum but not its transitions: once an
# account is registered or rejected it stays that way.
ACCOUNT_TRANSITIONS: Dict[AccountStatus, FrozenSet[AccountStatus]] = {
    AccountStatus.UNREGISTERED: frozenset({AccountStatus.PENDING}),
    AccountStatus.PENDING: frozenset({AccountStatus.REGISTERED, AccountStatus.REJECTED}),
    AccountStatus.REGISTERED: frozenset(),
    AccountStatus.REJECTED: frozenset(),
}

ACCOUNT_ACTORS: Dict[AccountStatus, FrozenSet[UserRole]] = {
    AccountStatus.PENDING: frozenset({UserRole.OWNER}),
    AccountStatus.REGISTERED: frozenset({UserRole.ADMIN}),
    AccountStatus.REJECTED: frozenset({UserRole.ADMIN}),
}

APPLICATION_ACTORS: Dict[ApplicationStatus, FrozenSet[UserRole]] = {
    ApplicationStatus.FOR_INSPECTION: frozenset({UserRole.ADMIN}),
    ApplicationStatus.INSPECTED: frozenset({UserRole.INSPECTOR}),
    ApplicationStatus.APPROVED: frozenset({UserRole.ADMIN}),
    ApplicationStatus.REJECTED: frozenset({UserRole.ADMIN}),
}

# Who may create each kind of record.
APPLICANT_ROLES = frozenset({UserRole.OWNER})
CHECKLIST_ROLES = frozenset({UserRole.INSPECTOR})


def _transition(enum_cls, current, target, actor, actors, entity_type, allowed=None):
    current = enum_cls(current)
    target = enum_cls(target)
    actor = UserRole(actor)

    legal = allowed[current] if allowed is not None else current.can_transition_to
    if target not in legal:
        raise InvalidStatusTransitionError(current.value, target.value, entity_type)
    if actor not in actors.get(target, frozenset()):
        raise UnauthorizedError(
            f"Role '{actor.value}' may not move {entity_type.lower()} to '{target.value}'"
        )
    return target


def transition_establishment(
    current: Union[EstablishmentStatus, str],
    target: Union[EstablishmentStatus, str],
    actor: Union[UserRole, str],
) -> EstablishmentStatus:
    return _transition(EstablishmentStatus, current, target, actor, ESTABLISHMENT_ACTORS, "Establishment")


def transition_account(
    current: Union[AccountStatus, str],
    target: Union[AccountStatus, str],
    actor: Union[UserRole, str],
) -> AccountStatus:
    return _transition(
        AccountStatus, current, target, actor, ACCOUNT_ACTORS, "Account", allowed=ACCOUNT_TRANSITIONS
    )


def transition_application(
    current: Union[ApplicationStatus, str],
    target: Union[ApplicationStatus, str],
    actor: Union[UserRole, str],
) -> ApplicationStatus:
    return _transition(ApplicationStatus, current, target, actor, APPLICATION_ACTORS, "Application")


def ensure_can_apply(
    establishment_id,
    establishment_status: Union[EstablishmentStatus, str],
    actor: Union[UserRole, str],
) -> None:
    """An application may only be created by an owner against a registered establishment."""
    if UserRole(actor) not in APPLICANT_ROLES:
        raise UnauthorizedError("Only establishment owners may apply for certificates")
    status = EstablishmentStatus(establishment_status)
    if status != EstablishmentStatus.REGISTERED:
        raise EstablishmentNotRegisteredError(str(establishment_id), status.value)


def ensure_checklist_allowed(
    application_id,
    application_status: Union[ApplicationStatus, str],
    actor: Union[UserRole, str],
    actor_id=None,
    assigned_inspector_id=None,
    already_submitted: bool = False,
) -> None:
    """
    A checklist is submitted once, by the assigned inspector, while the
    application is for_inspection.
    """
    if UserRole(actor) not in CHECKLIST_ROLES:
        raise UnauthorizedError("Only inspectors may submit inspection checklists")
    if already_submitted:
        raise DuplicateChecklistError(str(application_id))
    status = ApplicationStatus(application_status)
    if status != ApplicationStatus.FOR_INSPECTION:
        raise InvalidStatusTransitionError(status.value, ApplicationStatus.INSPECTED.value, "Application")
    if assigned_inspector_id is not None and actor_id is not None and str(actor_id) != str(assigned_inspector_id):
        raise UnauthorizedError("Only the assigned inspector may submit this checklist")


def next_status(current: Union[ApplicationStatus, str]) -> Optional[ApplicationStatus]:
    """Next non-rejection state of an application, or None when terminal."""
    current = ApplicationStatus(current)
    forward = [s for s in current.can_transition_to if s != ApplicationStatus.REJECTED]
    return forward[0] if forward else None
