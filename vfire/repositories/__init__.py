from .unit_of_work import UnitOfWork
from .profile_repository import ProfileRepository
from .establishment_repository import EstablishmentRepository
from .application_repository import ApplicationRepository
from .checklist_repository import ChecklistRepository
