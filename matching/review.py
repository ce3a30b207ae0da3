"""
Purpose: Decide which matches an admin should look at before the transporter is notified.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

from shipments.models import CargoCategory, Shipment
from transporters.models import Transporter
from .policy import MatchingPolicy

T = TypeVar("T")

_DANGEROUS_CARGO = frozenset({CargoCategory.HAZARDOUS, CargoCategory.FUEL})


def check_needs_review(
    shipment: Shipment, transporter: Transporter, total_score: int, policy: MatchingPolicy
) -> List[str]:
    """
    Returns the review reasons; an empty list means no review is needed.
    """
    reasons: List[str] = []

    if shipment.price > policy.high_value_price:
        reasons.append(f"High value shipment (>MK {policy.high_value_price:,})")

    if not transporter.verified:
        reasons.append("Unverified transporter")

    if transporter.rating_count < policy.min_reliable_ratings:
        reasons.append(f"New transporter (< {policy.min_reliable_ratings} ratings)")

    if total_score < policy.low_score_review_threshold:
        reasons.append("Low match score")

    if shipment.cargo_category in _DANGEROUS_CARGO:
        reasons.append("Hazardous/fuel cargo requires verification")

    if shipment.border_crossing_required:
        reasons.append("Border crossing required")

    return reasons


def group_by_notification_priority(matches: Sequence[T], high_priority_count: int = 3) -> Tuple[List[T], List[T]]:
    """
    Split ranked matches into (SMS + WhatsApp, WhatsApp only).
    """
    if high_priority_count < 0:
        raise ValueError("high_priority_count must be >= 0")
    return list(matches[:high_priority_count]), list(matches[high_priority_count:])
