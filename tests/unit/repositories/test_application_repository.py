"""Tests for ApplicationRepository."""
from datetime import datetime, timedelta

from vfire.domain.statuses import ApplicationStatus, ApplicationType
from vfire.repositories.application_repository import ApplicationRepository


class TestApplicationQueries:

    def test_get_with_details_loads_checklist(self, db_session, scheduled_application, checklist_factory):
        checklist_factory.create(db_session, scheduled_application)
        db_session.expunge_all()

        row = ApplicationRepository(db_session).get_with_details(scheduled_application.id)
        assert row.checklist is not None
        assert row.inspector is not None
        assert row.establishment.id == scheduled_application.establishment_id

    def test_list_by_type_and_status(self, db_session, registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment, type=ApplicationType.FSEC)
        business = application_factory.create(db_session, registered_establishment,
                                              type=ApplicationType.FSIC_BUSINESS)
        application_factory.create(db_session, registered_establishment, type=ApplicationType.FSIC_BUSINESS,
                                   status=ApplicationStatus.REJECTED)
        repo = ApplicationRepository(db_session)

        assert len(repo.list_by_type(ApplicationType.FSIC_BUSINESS)) == 2
        unscheduled = repo.list_by_type(ApplicationType.FSIC_BUSINESS, status=ApplicationStatus.UNSCHEDULED)
        assert [a.id for a in unscheduled] == [business.id]

    def test_list_by_owner(self, db_session, owner, registered_establishment, profile_factory,
                           establishment_factory, application_factory):
        mine = application_factory.create(db_session, registered_establishment)
        other_est = establishment_factory.create(db_session, profile_factory.create(db_session))
        application_factory.create(db_session, other_est)

        results = ApplicationRepository(db_session).list_by_owner(owner.id)
        assert [a.id for a in results] == [mine.id]

    def test_list_for_inspector_filters_statuses(self, db_session, inspector, scheduled_application,
                                                 registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.INSPECTED,
                                   inspector_id=inspector.id)
        repo = ApplicationRepository(db_session)

        assert len(repo.list_for_inspector(inspector.id)) == 2
        assigned = repo.list_for_inspector(inspector.id, statuses=[ApplicationStatus.FOR_INSPECTION])
        assert [a.id for a in assigned] == [scheduled_application.id]

    def test_list_scheduled_skips_unscheduled(self, db_session, scheduled_application,
                                              registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment)

        results = ApplicationRepository(db_session).list_scheduled()
        assert [a.id for a in results] == [scheduled_application.id]


class TestScheduleQueries:

    def test_list_upcoming_excludes_past(self, db_session, inspector, registered_establishment,
                                         application_factory):
        now = datetime(2025, 6, 1, 8, 0)
        soon = application_factory.create(db_session, registered_establishment,
                                          status=ApplicationStatus.FOR_INSPECTION, inspector_id=inspector.id,
                                          inspection_schedule=now + timedelta(days=1))
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.FOR_INSPECTION,
                                   inspector_id=inspector.id, inspection_schedule=now - timedelta(days=1))
        repo = ApplicationRepository(db_session)

        results = repo.list_upcoming(now, inspector_id=inspector.id)
        assert [a.id for a in results] == [soon.id]

    def test_list_upcoming_orders_and_limits(self, db_session, inspector, registered_establishment,
                                             application_factory):
        now = datetime(2025, 6, 1, 8, 0)
        ids = []
        for days in (3, 1, 2):
            row = application_factory.create(db_session, registered_establishment,
                                             status=ApplicationStatus.FOR_INSPECTION, inspector_id=inspector.id,
                                             inspection_schedule=now + timedelta(days=days))
            ids.append((days, row.id))
        results = ApplicationRepository(db_session).list_upcoming(now, limit=2)

        expected = [row_id for _, row_id in sorted(ids)][:2]
        assert [a.id for a in results] == expected

    def test_list_for_month(self, db_session, inspector, registered_establishment, application_factory):
        inside = application_factory.create(db_session, registered_establishment,
                                            status=ApplicationStatus.FOR_INSPECTION, inspector_id=inspector.id,
                                            inspection_schedule=datetime(2025, 2, 28, 23, 30))
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.FOR_INSPECTION,
                                   inspector_id=inspector.id, inspection_schedule=datetime(2025, 3, 1, 0, 0))
        repo = ApplicationRepository(db_session)

        results = repo.list_for_month(2025, 2)
        assert [a.id for a in results] == [inside.id]

    def test_list_for_month_december(self, db_session, inspector, registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.FOR_INSPECTION,
                                   inspector_id=inspector.id, inspection_schedule=datetime(2025, 12, 31, 9, 0))

        assert len(ApplicationRepository(db_session).list_for_month(2025, 12)) == 1


class TestCounts:

    def test_count_by_status(self, db_session, scheduled_application, registered_establishment,
                             application_factory):
        application_factory.create(db_session, registered_establishment)
        counts = ApplicationRepository(db_session).count_by_status()

        assert counts[ApplicationStatus.UNSCHEDULED] == 1
        assert counts[ApplicationStatus.FOR_INSPECTION] == 1
        assert counts[ApplicationStatus.APPROVED] == 0

    def test_count_by_status_for_inspector(self, db_session, scheduled_application, inspector,
                                           registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment)
        counts = ApplicationRepository(db_session).count_by_status(inspector_id=inspector.id)

        assert sum(counts.values()) == 1

    def test_count_by_type(self, db_session, registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment, type=ApplicationType.FSIC_OCCUPANCY)
        counts = ApplicationRepository(db_session).count_by_type()

        assert counts[ApplicationType.FSIC_OCCUPANCY] == 1
        assert counts[ApplicationType.FSEC] == 0

    def test_count_approved(self, db_session, registered_establishment, application_factory):
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.APPROVED,
                                   certificate_url='https://example.com/cert.pdf')
        application_factory.create(db_session, registered_establishment, status=ApplicationStatus.APPROVED)
        repo = ApplicationRepository(db_session)

        assert repo.count_approved(with_certificate=True) == 1
        assert repo.count_approved(with_certificate=False) == 1
