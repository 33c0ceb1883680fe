"""Unit tests for SQLAlchemy model properties in models_db.py.

Covers:
- Profile.full_name with and without a middle name
- Profile.is_active, which Flask-Login checks before signing a user in
- Application.type label and JSON checklist items surviving a round trip
"""

from vfire.domain.statuses import AccountStatus, ApplicationType, UserRole
from vfire.repositories.unit_of_work import UnitOfWork


class TestProfileFullName:

    def test_includes_middle_name(self, db_session, profile_factory):
        profile = profile_factory.create(db_session, first_name='Maria', middle_name='Santos', last_name='Reyes')
        assert profile.full_name == 'Maria Santos Reyes'

    def test_skips_missing_middle_name(self, db_session, profile_factory):
        profile = profile_factory.create(db_session, first_name='Jose', middle_name=None, last_name='Cruz')
        assert profile.full_name == 'Jose Cruz'


class TestProfileIsActive:

    def test_pending_owner_is_active(self, db_session, profile_factory):
        assert profile_factory.create(db_session, role=UserRole.OWNER).is_active is True

    def test_rejected_owner_is_inactive(self, db_session, profile_factory):
        profile = profile_factory.create(db_session, account_status=AccountStatus.REJECTED)
        assert profile.is_active is False


class TestApplicationColumns:

    def test_enum_and_json_columns_reload(self, db_session, registered_establishment,
                                          application_factory, checklist_factory, inspector):
        application = application_factory.create(
            db_session, registered_establishment, type=ApplicationType.FSIC_OCCUPANCY, inspector_id=inspector.id,
        )
        checklist_factory.create(db_session, application, checklist_items={'exits': 'blocked', 'alarms': 'ok'})
        application_id = application.id
        db_session.remove()

        row = UnitOfWork(db_session).applications.get_with_details(application_id)
        assert row.type == ApplicationType.FSIC_OCCUPANCY
        assert row.type.label
        assert row.checklist.checklist_items == {'exits': 'blocked', 'alarms': 'ok'}
