"""Unit tests for EstablishmentService."""
import uuid

import pytest

from vfire.application.establishment_service import EstablishmentService
from vfire.domain.exceptions import (
    EstablishmentNotFoundError,
    InvalidStatusTransitionError,
    UnauthorizedError,
    ValidationError,
)
from vfire.domain.statuses import EstablishmentStatus


class TestOwnerOperations:

    def test_register_starts_pending(self, uow, owner):
        result = EstablishmentService(uow).register(owner, 'Corner Cafe', 'dti 777')

        assert result.data['status'] == 'pending'
        assert result.data['dti_certificate_no'] == 'DTI777'
        assert len(uow.establishments.list_by_owner(owner.id)) == 1

    def test_register_requires_owner(self, uow, admin):
        with pytest.raises(UnauthorizedError):
            EstablishmentService(uow).register(admin, 'Corner Cafe', 'DTI-1')

    def test_list_for_owner_includes_latest_application(self, uow, owner, registered_establishment,
                                                        application_factory, db_session):
        application = application_factory.create(db_session, registered_establishment)
        db_session.expire_all()

        items = EstablishmentService(uow).list_for_owner(owner)
        assert len(items) == 1
        assert items[0]['latest_application']['id'] == str(application.id)

    def test_list_registered_for_owner(self, uow, owner, registered_establishment, establishment_factory,
                                       db_session):
        establishment_factory.create(db_session, owner, status=EstablishmentStatus.PENDING)
        items = EstablishmentService(uow).list_registered_for_owner(owner)
        assert [e['id'] for e in items] == [str(registered_establishment.id)]

    def test_resubmit_rejected(self, uow, owner, establishment_factory, db_session):
        est = establishment_factory.create(db_session, owner, status=EstablishmentStatus.REJECTED,
                                           rejection_reason='Blurry scan')
        result = EstablishmentService(uow).resubmit(owner, est.id)

        assert result.data['status'] == 'pending'
        assert result.data['rejection_reason'] is None

    def test_resubmit_registered_fails(self, uow, owner, registered_establishment):
        with pytest.raises(InvalidStatusTransitionError):
            EstablishmentService(uow).resubmit(owner, registered_establishment.id)

    def test_other_owner_sees_not_found(self, uow, registered_establishment, profile_factory, db_session):
        stranger = profile_factory.create(db_session)
        with pytest.raises(EstablishmentNotFoundError):
            EstablishmentService(uow).get(stranger, registered_establishment.id)

    def test_inspector_has_no_access(self, uow, inspector, registered_establishment):
        with pytest.raises(UnauthorizedError):
            EstablishmentService(uow).get(inspector, registered_establishment.id)


class TestAdminReview:

    def test_approve_pending(self, uow, admin, owner, establishment_factory, db_session):
        est = establishment_factory.create(db_session, owner, status=EstablishmentStatus.PENDING)
        result = EstablishmentService(uow).approve(admin, est.id)

        assert result.success
        assert uow.establishments.get_by_id(est.id).status == EstablishmentStatus.REGISTERED

    def test_approve_unknown(self, uow, admin):
        with pytest.raises(EstablishmentNotFoundError):
            EstablishmentService(uow).approve(admin, uuid.uuid4())

    def test_reject_with_reason(self, uow, admin, owner, establishment_factory, db_session):
        est = establishment_factory.create(db_session, owner, status=EstablishmentStatus.PENDING)
        EstablishmentService(uow).reject(admin, est.id, 'DTI number does not match')

        row = uow.establishments.get_by_id(est.id)
        assert row.status == EstablishmentStatus.REJECTED
        assert row.rejection_reason == 'DTI number does not match'

    def test_reject_without_reason(self, uow, admin, owner, establishment_factory, db_session):
        est = establishment_factory.create(db_session, owner, status=EstablishmentStatus.PENDING)
        with pytest.raises(ValidationError):
            EstablishmentService(uow).reject(admin, est.id, '')

    def test_owner_cannot_approve_own(self, uow, owner, establishment_factory, db_session):
        est = establishment_factory.create(db_session, owner, status=EstablishmentStatus.PENDING)
        with pytest.raises(UnauthorizedError):
            EstablishmentService(uow).approve(owner, est.id)

    def test_list_pending_with_owner(self, uow, admin, owner, registered_establishment,
                                     establishment_factory, db_session):
        est = establishment_factory.create(db_session, owner, status=EstablishmentStatus.PENDING)
        items = EstablishmentService(uow).list_pending(admin)

        assert [e['id'] for e in items] == [str(est.id)]
        assert items[0]['owner']['id'] == str(owner.id)

    def test_get_includes_applications(self, uow, admin, registered_establishment, application_factory,
                                       db_session):
        application_factory.create(db_session, registered_establishment)
        db_session.expire_all()

        data = EstablishmentService(uow).get(admin, registered_establishment.id)
        assert len(data['applications']) == 1
        assert 'owner' in data
