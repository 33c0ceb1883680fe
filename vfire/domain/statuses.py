"""
Closed status and role enumerations shared by every entity of the portal.

Values are the lowercase strings stored in the database and exchanged over
the API, so ``ApplicationStatus("for_inspection")`` round-trips as-is.
"""

from enum import Enum
from typing import List


class UserRole(str, Enum):
    """Roles of the portal. There is no hierarchy between them."""
    ADMIN = "admin"
    INSPECTOR = "inspector"
    OWNER = "owner"

    @property
    def label(self) -> str:
        labels = {
            self.ADMIN: "Administrator",
            self.INSPECTOR: "Inspector",
            self.OWNER: "Establishment Owner",
        }
        return labels[self]


class RegistrationStatus(str, Enum):
    """
    Registration workflow shared by establishments and profile accounts.

    unregistered -> pending -> registered, and any non-rejected state may be
    rejected. A rejected registration can be resubmitted (back to pending).
    """
    UNREGISTERED = "unregistered"
    PENDING = "pending"
    REGISTERED = "registered"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        labels = {
            self.UNREGISTERED: "Unregistered",
            self.PENDING: "Pending Registration",
            self.REGISTERED: "Registered",
            self.REJECTED: "Rejected",
        }
        return labels[self]

    @property
    def can_transition_to(self) -> List['RegistrationStatus']:
        transitions = {
            self.UNREGISTERED: [self.PENDING, self.REJECTED],
            self.PENDING: [self.REGISTERED, self.REJECTED],
            self.REGISTERED: [self.REJECTED],
            self.REJECTED: [self.PENDING],
        }
        return transitions.get(self, [])


# Same database enum, two names for readability at the call sites.
EstablishmentStatus = RegistrationStatus
AccountStatus = RegistrationStatus


class ApplicationType(str, Enum):
    """Certificate applied for."""
    FSEC = "fsec"
    FSIC_BUSINESS = "fsic-business"
    FSIC_OCCUPANCY = "fsic-occupancy"

    @property
    def label(self) -> str:
        labels = {
            self.FSEC: "FSEC",
            self.FSIC_BUSINESS: "FSIC (Business)",
            self.FSIC_OCCUPANCY: "FSIC (Occupancy)",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions = {
            self.FSEC: "Fire Safety Evaluation Clearance",
            self.FSIC_BUSINESS: "Fire Safety Inspection Certificate for business permit",
            self.FSIC_OCCUPANCY: "Fire Safety Inspection Certificate for occupancy permit",
        }
        return descriptions[self]


class ApplicationStatus(str, Enum):
    """
    Certificate application workflow.

    1. UNSCHEDULED - submitted by the owner
    2. FOR_INSPECTION - inspector and date assigned by an admin
    3. INSPECTED - checklist submitted by the inspector
    4. APPROVED / REJECTED - decided by an admin
    """
    UNSCHEDULED = "unscheduled"
    FOR_INSPECTION = "for_inspection"
    INSPECTED = "inspected"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').capitalize()

    @property
    def is_terminal(self) -> bool:
        return self in (self.APPROVED, self.REJECTED)

    @property
    def can_transition_to(self) -> List['ApplicationStatus']:
        transitions = {
            self.UNSCHEDULED: [self.FOR_INSPECTION, self.REJECTED],
            self.FOR_INSPECTION: [self.INSPECTED, self.REJECTED],
            self.INSPECTED: [self.APPROVED, self.REJECTED],
            self.APPROVED: [],
            self.REJECTED: [],
        }
        return transitions.get(self, [])


class InspectionResult(str, Enum):
    """Outcome recorded on an inspection checklist."""
    PASS = "pass"
    FAIL = "fail"
    CONDITIONAL = "conditional"
