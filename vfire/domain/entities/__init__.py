"""
Domain Entities - Pure business objects without infrastructure dependencies.
"""

from .base import Entity, utcnow
from .profile import Profile
from .establishment import Establishment
from .application import Application
from .inspection_checklist import InspectionChecklist

__all__ = [
    'Entity',
    'utcnow',
    'Profile',
    'Establishment',
    'Application',
    'InspectionChecklist',
]
