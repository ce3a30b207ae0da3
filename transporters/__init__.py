"""
Transporters domain package.

Public API:
- Domain models: Transporter, VehicleType, RoutePair
- Hard eligibility filter: filter_eligible_transporters
"""
from .models import RoutePair, Transporter, VehicleType
from .selection import check_eligibility, filter_eligible_transporters

__all__ = [
    "Transporter",
    "VehicleType",
    "RoutePair",
    "check_eligibility",
    "filter_eligible_transporters",
]
