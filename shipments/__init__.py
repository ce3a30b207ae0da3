"""
Shipments domain package.

Public API:
- Domain models: Shipment, CargoCategory, ShipmentStatus
- Boundary validation error: InvalidRecordError
"""
from .models import CargoCategory, InvalidRecordError, Shipment, ShipmentStatus

__all__ = [
    "Shipment",
    "CargoCategory",
    "ShipmentStatus",
    "InvalidRecordError",
]
