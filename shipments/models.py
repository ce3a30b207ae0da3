"""
Purpose: Domain models for the Shipments capability.
What it does:
- Defines the posted load (Shipment) a shipper wants moved between two cities.
- Defines enums for cargo category and shipment lifecycle status.
- Provides boundary validation so invalid records are rejected before the
  matching engine ever sees them.

Rule: No scoring, no pricing. Models only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class InvalidRecordError(ValueError):
    """Raised when a shipment or transporter record violates a data invariant."""
    pass


class CargoCategory(str, Enum):
    GENERAL = "general"
    FOOD = "food"
    AGRICULTURAL = "agricultural"
    MAIZE = "maize"
    TOBACCO = "tobacco"
    TEA = "tea"
    SUGAR = "sugar"
    FERTILIZER = "fertilizer"
    CONSTRUCTION = "construction"
    CEMENT = "cement"
    FUEL = "fuel"
    FRAGILE = "fragile"
    PERISHABLE = "perishable"
    HAZARDOUS = "hazardous"
    LIVESTOCK = "livestock"


class ShipmentStatus(str, Enum):
    POSTED = "posted"
    MATCHED = "matched"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Shipment:
    """
    A posted load. Immutable once posted; status transitions are owned
    by the shipment lifecycle, not by matching.
    """
    id: str
    origin: str
    destination: str
    weight_kg: float
    cargo_category: CargoCategory
    price: int  # whole Malawi Kwacha
    pickup_date: datetime

    status: ShipmentStatus = ShipmentStatus.POSTED
    border_crossing_required: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def new(
        cls,
        shipment_id: str,
        origin: str,
        destination: str,
        weight_kg: float,
        cargo_category: str | CargoCategory,
        price: int,
        pickup_date: datetime,
        status: str | ShipmentStatus = ShipmentStatus.POSTED,
        border_crossing_required: bool = False,
        created_at: Optional[datetime] = None,
    ) -> Shipment:
        if isinstance(cargo_category, str):
            cargo_category = CargoCategory(cargo_category)
        if isinstance(status, str):
            status = ShipmentStatus(status)

        return cls(
            id=shipment_id,
            origin=origin,
            destination=destination,
            weight_kg=weight_kg,
            cargo_category=cargo_category,
            price=price,
            pickup_date=pickup_date,
            status=status,
            border_crossing_required=border_crossing_required,
            created_at=created_at,
        )

    @property
    def route(self) -> Tuple[str, str]:
        return (self.origin, self.destination)

    def validate(self) -> None:
        """
        Boundary checks for the shipment invariants.
        """
        if not self.origin or not self.destination:
            raise InvalidRecordError(f"Shipment {self.id}: origin and destination are required")

        if self.origin == self.destination:
            raise InvalidRecordError(f"Shipment {self.id}: origin and destination must differ")

        if not math.isfinite(self.weight_kg) or self.weight_kg <= 0:
            raise InvalidRecordError(f"Shipment {self.id}: weight_kg must be > 0, got {self.weight_kg}")

        if self.price <= 0:
            raise InvalidRecordError(f"Shipment {self.id}: price must be > 0, got {self.price}")

        if self.created_at is not None:
            if _is_aware(self.pickup_date) != _is_aware(self.created_at):
                raise InvalidRecordError(
                    f"Shipment {self.id}: pickup_date and created_at must both be timezone-aware or both naive"
                )
            if self.pickup_date < self.created_at:
                raise InvalidRecordError(f"Shipment {self.id}: pickup_date is before created_at")


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None
