"""
Unit of Work pattern for managing database transactions.

Provides a single entry point for all repositories within a request,
ensuring consistent transaction management.
"""
from .profile_repository import ProfileRepository
from .establishment_repository import EstablishmentRepository
from .application_repository import ApplicationRepository
from .checklist_repository import ChecklistRepository


class UnitOfWork:
    """
    Aggregates all repositories and manages the database session lifecycle.

    Usage:
        uow = UnitOfWork(session)
        profile = uow.profiles.get_by_email('owner@example.com')
        uow.applications.add(application)
        uow.commit()
    """

    def __init__(self, session):
        self.session = session
        self.profiles = ProfileRepository(session)
        self.establishments = EstablishmentRepository(session)
        self.applications = ApplicationRepository(session)
        self.checklists = ChecklistRepository(session)

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def flush(self):
        self.session.flush()

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
        self.close()
        return False
