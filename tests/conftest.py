"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. Requests made with the
test client share the thread-local session with the fixtures and close it
at teardown, so tests read results back through ``db_session`` instead of
holding on to rows loaded before the request.
"""
import uuid
from datetime import date, time, timedelta

import pytest
from werkzeug.security import generate_password_hash

from vfire import database
from vfire.app import create_app
from vfire.domain.entities import utcnow
from vfire.domain.statuses import (
    AccountStatus,
    ApplicationStatus,
    ApplicationType,
    EstablishmentStatus,
    InspectionResult,
    UserRole,
)
from vfire.models_db import Application, Establishment, InspectionChecklist, Profile
from vfire.repositories.unit_of_work import UnitOfWork

TEST_PASSWORD = 'Password123'

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'DATABASE_URL': 'sqlite://',
    'CREATE_TABLES': True,
    'WTF_CSRF_ENABLED': False,
    'RATELIMIT_ENABLED': False,
    'LOG_JSON': False,
    'LOG_LEVEL': 'WARNING',
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    yield app
    database.remove_session()
    database.drop_all()


@pytest.fixture
def make_app():
    """Build an app with settings other than the test defaults."""
    def _make(**overrides):
        return create_app({**TEST_CONFIG, **overrides})
    yield _make
    database.remove_session()
    database.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(app):
    """The scoped session registry; always proxies to the live session."""
    return database.db_session


@pytest.fixture
def uow(db_session):
    return UnitOfWork(db_session)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

_PASSWORD_HASH = generate_password_hash(TEST_PASSWORD)


class ProfileFactory:
    @staticmethod
    def create(session, role=UserRole.OWNER, **kwargs):
        n = uuid.uuid4().hex[:8]
        defaults = {
            'id': uuid.uuid4(),
            'email': f'{role.value}-{n}@example.com',
            'password_hash': _PASSWORD_HASH,
            'first_name': role.value.capitalize(),
            'last_name': f'Test {n}',
            'role': role,
            'account_status': AccountStatus.PENDING if role == UserRole.OWNER else AccountStatus.REGISTERED,
            'must_change_password': False,
        }
        defaults.update(kwargs)
        profile = Profile(**defaults)
        session.add(profile)
        session.commit()
        return profile


class EstablishmentFactory:
    @staticmethod
    def create(session, owner, **kwargs):
        n = uuid.uuid4().hex[:6].upper()
        defaults = {
            'id': uuid.uuid4(),
            'owner_id': owner.id,
            'establishment_name': f'Establishment {n}',
            'dti_certificate_no': f'DTI-{n}',
            'status': EstablishmentStatus.REGISTERED,
        }
        defaults.update(kwargs)
        establishment = Establishment(**defaults)
        session.add(establishment)
        session.commit()
        return establishment


class ApplicationFactory:
    @staticmethod
    def create(session, establishment, **kwargs):
        now = utcnow()
        defaults = {
            'id': uuid.uuid4(),
            'establishment_id': establishment.id,
            'owner_id': establishment.owner_id,
            'type': ApplicationType.FSEC,
            'status': ApplicationStatus.UNSCHEDULED,
            'establishment_name': establishment.establishment_name,
            'dti_certificate_no': establishment.dti_certificate_no,
            'application_date': now.date(),
            'application_time': now.time().replace(microsecond=0),
        }
        defaults.update(kwargs)
        application = Application(**defaults)
        session.add(application)
        session.commit()
        return application


class ChecklistFactory:
    @staticmethod
    def create(session, application, **kwargs):
        defaults = {
            'id': uuid.uuid4(),
            'application_id': application.id,
            'inspector_id': application.inspector_id,
            'inspection_date': date.today(),
            'inspection_time': time(10, 0),
            'checklist_items': {'fire_extinguishers': 'compliant'},
            'inspection_status': InspectionResult.PASS,
            'inspector_signature': 'Inspector',
        }
        defaults.update(kwargs)
        checklist = InspectionChecklist(**defaults)
        session.add(checklist)
        session.commit()
        return checklist


@pytest.fixture
def profile_factory():
    return ProfileFactory


@pytest.fixture
def establishment_factory():
    return EstablishmentFactory


@pytest.fixture
def application_factory():
    return ApplicationFactory


@pytest.fixture
def checklist_factory():
    return ChecklistFactory


@pytest.fixture
def admin(db_session):
    return ProfileFactory.create(db_session, role=UserRole.ADMIN)


@pytest.fixture
def inspector(db_session):
    return ProfileFactory.create(db_session, role=UserRole.INSPECTOR)


@pytest.fixture
def owner(db_session):
    return ProfileFactory.create(db_session, role=UserRole.OWNER, account_status=AccountStatus.REGISTERED)


@pytest.fixture
def registered_establishment(db_session, owner):
    return EstablishmentFactory.create(db_session, owner)


@pytest.fixture
def scheduled_application(db_session, registered_establishment, inspector):
    return ApplicationFactory.create(
        db_session,
        registered_establishment,
        status=ApplicationStatus.FOR_INSPECTION,
        inspector_id=inspector.id,
        inspection_schedule=utcnow() + timedelta(days=2),
    )


# ---------------------------------------------------------------------------
# Logged-in clients
# ---------------------------------------------------------------------------

def login_as(client, profile):
    """Put the profile in the Flask-Login session without going through /auth/login."""
    with client.session_transaction() as sess:
        sess['_user_id'] = str(profile.id)
        sess['_fresh'] = True
    return client


@pytest.fixture
def admin_client(app, admin):
    return login_as(app.test_client(), admin), admin


@pytest.fixture
def inspector_client(app, inspector):
    return login_as(app.test_client(), inspector), inspector


@pytest.fixture
def owner_client(app, owner):
    return login_as(app.test_client(), owner), owner


@pytest.fixture
def login():
    return login_as
