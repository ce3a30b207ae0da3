"""
Purpose: Hard eligibility rules that run before ranking.
What it does:
Accepts a shipment and a pool of transporters and drops the ones that cannot
legally or physically carry the load (offline, wrong vehicle class for the
cargo, no refrigeration for perishables). Ranking is left to matching.engine.
"""

from typing import Dict, FrozenSet, List, Sequence, Tuple

from shipments.models import CargoCategory, Shipment
from .models import Transporter, VehicleType

_GENERAL_FLEET = frozenset({
    VehicleType.PICKUP,
    VehicleType.CANTER,
    VehicleType.SMALL_TRUCK,
    VehicleType.MEDIUM_TRUCK,
    VehicleType.LARGE_TRUCK,
    VehicleType.FLATBED,
})
_BULK_FLEET = frozenset({VehicleType.MEDIUM_TRUCK, VehicleType.LARGE_TRUCK, VehicleType.FLATBED})
_FARM_FLEET = _GENERAL_FLEET - {VehicleType.PICKUP}

CARGO_VEHICLE_COMPATIBILITY: Dict[CargoCategory, FrozenSet[VehicleType]] = {
    CargoCategory.GENERAL: _GENERAL_FLEET,
    CargoCategory.FOOD: _GENERAL_FLEET | {VehicleType.REFRIGERATED},
    CargoCategory.AGRICULTURAL: _FARM_FLEET,
    CargoCategory.MAIZE: _FARM_FLEET,
    CargoCategory.TOBACCO: _BULK_FLEET,
    CargoCategory.TEA: frozenset({VehicleType.MEDIUM_TRUCK, VehicleType.LARGE_TRUCK, VehicleType.REFRIGERATED}),
    CargoCategory.SUGAR: _BULK_FLEET,
    CargoCategory.FERTILIZER: _BULK_FLEET,
    CargoCategory.CONSTRUCTION: _BULK_FLEET,
    CargoCategory.CEMENT: _BULK_FLEET,
    CargoCategory.FUEL: frozenset({VehicleType.TANKER}),
    CargoCategory.FRAGILE: frozenset({VehicleType.SMALL_TRUCK, VehicleType.MEDIUM_TRUCK, VehicleType.REFRIGERATED}),
    CargoCategory.PERISHABLE: frozenset({VehicleType.REFRIGERATED}),
    CargoCategory.HAZARDOUS: frozenset({VehicleType.LARGE_TRUCK, VehicleType.TANKER}),
    CargoCategory.LIVESTOCK: frozenset({VehicleType.LARGE_TRUCK, VehicleType.FLATBED}),
}


def check_eligibility(transporter: Transporter, shipment: Shipment) -> Tuple[bool, List[str]]:
    """
    Returns (eligible, reasons). Reasons are human readable and empty when eligible.
    """
    reasons: List[str] = []

    if not transporter.is_available:
        reasons.append("Transporter is not available")

    if transporter.vehicle_type is not None:
        compatible = CARGO_VEHICLE_COMPATIBILITY.get(
            shipment.cargo_category, CARGO_VEHICLE_COMPATIBILITY[CargoCategory.GENERAL]
        )
        if transporter.vehicle_type not in compatible:
            reasons.append(
                f"{transporter.vehicle_type.value} cannot transport {shipment.cargo_category.value} cargo"
            )

    if shipment.cargo_category == CargoCategory.PERISHABLE and not transporter.has_refrigeration:
        reasons.append("Perishable cargo requires refrigerated transport")

    return (not reasons, reasons)


def filter_eligible_transporters(shipment: Shipment, transporters: Sequence[Transporter]) -> List[Transporter]:
    """
    Returns only transporters who are online and whose vehicle can carry
    the shipment's cargo category.
    """
    eligible = []

    for transporter in transporters:
        ok, _ = check_eligibility(transporter, shipment)
        if not ok:
            continue

        eligible.append(transporter)

    return eligible
