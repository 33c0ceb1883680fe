"""Tests for the management commands."""
from datetime import datetime

import pytest

from vfire.cli import DEMO_OWNER, DEMO_PASSWORD, seed_demo
from vfire.domain.exceptions import DuplicateEmailError
from vfire.domain.statuses import AccountStatus, ApplicationStatus, EstablishmentStatus, UserRole
from vfire.repositories.profile_repository import ProfileRepository

NOW = datetime(2025, 1, 6, 8, 0)


class TestSeedDemo:

    def test_covers_every_role(self, uow):
        summary = seed_demo(uow, now=NOW)

        admin = uow.profiles.get_by_email(summary['admin'])
        inspector = uow.profiles.get_by_email(summary['inspector'])
        owner = uow.profiles.get_by_email(DEMO_OWNER['email'])
        assert admin.role == UserRole.ADMIN
        assert inspector.role == UserRole.INSPECTOR
        assert inspector.must_change_password is False
        assert owner.account_status == AccountStatus.REGISTERED
        assert summary['password'] == DEMO_PASSWORD

    def test_establishment_statuses(self, uow):
        seed_demo(uow, now=NOW)
        owner = uow.profiles.get_by_email(DEMO_OWNER['email'])

        counts = uow.establishments.count_by_status(owner_id=owner.id)
        assert counts[EstablishmentStatus.REGISTERED] == 2
        assert counts[EstablishmentStatus.PENDING] == 1

    def test_application_statuses(self, uow):
        seed_demo(uow, now=NOW)

        counts = uow.applications.count_by_status()
        assert counts[ApplicationStatus.UNSCHEDULED] == 1
        assert counts[ApplicationStatus.FOR_INSPECTION] == 1
        assert counts[ApplicationStatus.INSPECTED] == 1

        inspector = uow.profiles.get_by_email('inspector@demo.vfire.ph')
        assert len(uow.checklists.list_by_inspector(inspector.id)) == 1

    def test_second_run_fails(self, uow):
        seed_demo(uow, now=NOW)
        with pytest.raises(DuplicateEmailError):
            seed_demo(uow, now=NOW)


class TestCommands:

    def test_create_admin(self, app, db_session):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-admin', 'chief@example.com', '--password', 'LongPass12'])

        assert result.exit_code == 0, result.output
        created = ProfileRepository(db_session).get_by_email('chief@example.com')
        assert created.role == UserRole.ADMIN

    def test_create_admin_short_password(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-admin', 'chief@example.com', '--password', 'short'])

        assert result.exit_code != 0
        assert 'at least 8 characters' in result.output

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=['init-db'])
        assert result.exit_code == 0, result.output
