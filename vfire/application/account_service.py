"""Service for accounts: owner sign-up, sign-in checks, passwords and admin user management."""
import logging
import secrets
import string

from werkzeug.security import check_password_hash, generate_password_hash

from vfire.domain.access import ensure_role
from vfire.domain.entities import Establishment, Profile
from vfire.domain.exceptions import (
    AccountRejectedError,
    DuplicateEmailError,
    ProfileNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from vfire.domain.statuses import UserRole
from vfire.domain.value_objects import Email
from vfire.repositories import mappers

from .results import OperationResult
from .serializers import establishment_dict, profile_dict

logger = logging.getLogger(__name__)


def generate_password(length=12):
    alphabet = string.ascii_letters + string.digits + '!@#$%&'
    # Always contains a digit so it satisfies the change-password policy.
    return secrets.choice(string.digits) + ''.join(secrets.choice(alphabet) for _ in range(length - 1))


class AccountService:
    """Handles account creation, authentication and admin review of profiles."""

    def __init__(self, uow):
        self._uow = uow

    # Sign-up / sign-in

    def sign_up(self, request):
        """
        Register an owner together with their establishments.

        The profile and every establishment are written in one transaction:
        either the owner ends up with all establishments pending review, or
        nothing is stored.
        """
        email = Email(request.email)
        if self._uow.profiles.email_exists(str(email)):
            raise DuplicateEmailError(str(email))

        profile = Profile.create_owner(
            email=str(email),
            first_name=request.first_name,
            last_name=request.last_name,
            middle_name=request.middle_name,
        )
        establishments = [
            Establishment.create(profile.id, item.establishment_name, item.dti_certificate_no)
            for item in request.establishments
        ]

        try:
            row = self._uow.profiles.add(
                mappers.profile_to_row(profile, password_hash=generate_password_hash(request.password))
            )
            self._uow.flush()
            est_rows = [self._uow.establishments.add(mappers.establishment_to_row(e)) for e in establishments]
            self._uow.commit()
        except Exception:
            self._uow.rollback()
            raise

        logger.info(
            "Owner signed up",
            extra={'props': {'profile_id': str(profile.id), 'establishments': len(est_rows)}},
        )
        return OperationResult(
            success=True,
            message='Registration submitted. An administrator will review your account.',
            data={
                'profile': profile_dict(row),
                'establishments': [establishment_dict(e) for e in est_rows],
            },
        )

    def authenticate(self, email, password):
        """Return the profile row for valid credentials, or raise UnauthorizedError."""
        try:
            normalized = str(Email(email))
        except ValidationError:
            raise UnauthorizedError("Invalid email or password")

        profile = self._uow.profiles.get_by_email(normalized)
        if profile is None or not profile.password_hash or not check_password_hash(profile.password_hash, password):
            logger.warning("Failed sign-in", extra={'props': {'email': normalized}})
            raise UnauthorizedError("Invalid email or password")
        if not mappers.profile_to_entity(profile).can_sign_in:
            logger.warning("Sign-in refused for rejected account", extra={'props': {'profile_id': str(profile.id)}})
            raise AccountRejectedError(str(profile.id))
        return profile

    def change_password(self, profile, current_password, new_password):
        if not check_password_hash(profile.password_hash or '', current_password):
            raise ValidationError("Current password is incorrect", "current_password")
        if check_password_hash(profile.password_hash, new_password):
            raise ValidationError("The new password must be different from the current one", "new_password")

        profile.password_hash = generate_password_hash(new_password)
        profile.must_change_password = False
        self._uow.commit()
        logger.info("Password changed", extra={'props': {'profile_id': str(profile.id)}})
        return OperationResult(success=True, message='Password updated.')

    # Provisioned accounts

    def create_inspector(self, actor, email, first_name, last_name, position=None, password=None):
        """
        Admin creates an inspector account.

        Returns:
            OperationResult whose data carries the initial password, which the
            inspector must change on first sign-in.
        """
        ensure_role(actor.role, UserRole.ADMIN)
        profile = Profile.create_inspector(email, first_name, last_name, position=position)
        if self._uow.profiles.email_exists(str(profile.email)):
            raise DuplicateEmailError(str(profile.email))

        password = password or generate_password()
        row = self._uow.profiles.add(
            mappers.profile_to_row(profile, password_hash=generate_password_hash(password))
        )
        data = profile_dict(row)
        self._uow.commit()

        logger.info(
            "Inspector created",
            extra={'props': {'profile_id': str(profile.id), 'actor_id': str(actor.id)}},
        )
        data['password'] = password
        return OperationResult(success=True, message=f'Inspector {profile.full_name} created.', data=data)

    def create_admin(self, email, password, first_name="Admin", last_name="User", actor=None):
        """
        Create an admin account.

        Called without ``actor`` from the CLI (bootstrapping the first admin);
        through the API the caller must be an admin.
        """
        if actor is not None:
            ensure_role(actor.role, UserRole.ADMIN)
        if not password or len(password) < 8:
            raise ValidationError("Admin password must be at least 8 characters", "password")

        profile = Profile.create_admin(email, first_name=first_name, last_name=last_name)
        if self._uow.profiles.email_exists(str(profile.email)):
            raise DuplicateEmailError(str(profile.email))

        row = self._uow.profiles.add(
            mappers.profile_to_row(profile, password_hash=generate_password_hash(password))
        )
        data = profile_dict(row)
        self._uow.commit()

        logger.info(
            "Admin created",
            extra={'props': {'profile_id': str(profile.id), 'actor_id': str(actor.id) if actor else 'cli'}},
        )
        return OperationResult(success=True, message=f'Admin {profile.full_name} created.', data=data)

    # Admin user management

    def get_profile(self, profile_id):
        profile = self._uow.profiles.get_by_id(profile_id)
        if profile is None:
            raise ProfileNotFoundError(str(profile_id))
        return profile

    def list_users(self, actor, role=None):
        ensure_role(actor.role, UserRole.ADMIN)
        return [profile_dict(p) for p in self._uow.profiles.list_all(role=role)]

    def list_pending_users(self, actor):
        ensure_role(actor.role, UserRole.ADMIN)
        return [profile_dict(p) for p in self._uow.profiles.list_pending()]

    def list_inspectors(self, actor):
        ensure_role(actor.role, UserRole.ADMIN)
        return [profile_dict(p) for p in self._uow.profiles.list_inspectors()]

    def approve_user(self, actor, profile_id):
        row = self.get_profile(profile_id)
        entity = mappers.profile_to_entity(row)
        previous = entity.account_status

        entity.approve(actor.role)
        mappers.apply_profile(entity, row)
        self._uow.commit()

        logger.info(
            "Account status changed",
            extra={'props': {
                'profile_id': str(row.id),
                'from': previous.value,
                'to': entity.account_status.value,
                'actor_id': str(actor.id),
            }},
        )
        return OperationResult(success=True, message=f'{entity.full_name} approved.', data=profile_dict(row))

    def reject_user(self, actor, profile_id, reason):
        row = self.get_profile(profile_id)
        if row.id == actor.id:
            raise ValidationError("You cannot reject your own account", "profile_id")
        entity = mappers.profile_to_entity(row)
        previous = entity.account_status

        entity.reject(actor.role, reason)
        mappers.apply_profile(entity, row)
        self._uow.commit()

        logger.info(
            "Account status changed",
            extra={'props': {
                'profile_id': str(row.id),
                'from': previous.value,
                'to': entity.account_status.value,
                'actor_id': str(actor.id),
            }},
        )
        return OperationResult(success=True, message=f'{entity.full_name} rejected.', data=profile_dict(row))
