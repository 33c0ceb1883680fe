from .account_service import AccountService
from .application_service import ApplicationService
from .calendar_service import CalendarService
from .dashboard_service import DashboardService
from .establishment_service import EstablishmentService
from .inspection_service import InspectionService
from .results import OperationResult
