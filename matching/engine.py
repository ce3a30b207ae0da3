"""
Purpose: The matching "orchestrator" (single entry point).
What it does:

For a posted shipment and a pool of candidate transporters:

- resolves route facts per candidate (routing.RouteResolver)

- computes the five sub-scores and the weighted total (scoring.py)

- flags backhaul opportunities and applies the seasonal price multiplier

- drops matches under the minimum score

- sorts: total desc, backhaul first, rating desc (stable on input order)

- truncates to min(max_results, policy.max_matches)

Rule: Engine is the only file other modules should call directly for matching.
It is pure: no I/O, no clock reads (`now` is a parameter), no shared state.
Callers validate records and pre-filter eligibility before calling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, List, Optional, Sequence, Tuple

from pricing.seasonal import effective_price, get_seasonal_multiplier
from routing.route_resolver import RouteResolver
from shipments.models import Shipment
from transporters.models import Transporter
from .policy import MAX_MATCHES, MatchingPolicy, default_matching_policy
from .review import check_needs_review
from .scoring import (
    ScoreBreakdown,
    capacity_score,
    experience_score,
    reputation_score,
    route_score,
    timing_score,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchingOptions:
    """
    Per-call knobs layered over the policy.
    """
    exclude_transporters: FrozenSet[str] = frozenset()
    require_verified: bool = False
    # Overrides policy.min_match_score when set.
    min_score: Optional[int] = None


@dataclass(frozen=True)
class Match:
    """
    One ranked (shipment, transporter) pairing. Transient view object:
    recomputed on demand, never persisted, never mutated.
    """
    shipment_id: str
    transporter_id: str
    total_score: int
    is_backhaul: bool
    score_breakdown: ScoreBreakdown
    effective_price: int
    seasonal_multiplier: float

    transporter_rating: float = 0.0
    vehicle_plate: str = ""
    is_known_return_route: bool = False
    needs_review: bool = False
    review_reasons: Tuple[str, ...] = field(default_factory=tuple)


# -------------------------
# Timing helpers
# -------------------------

def days_until_pickup(pickup_date: datetime, now: datetime) -> int:
    """
    Whole calendar days from `now` to the pickup day. Overdue pickups count as 0.
    """
    return max(0, (pickup_date.date() - now.date()).days)


def has_schedule_conflict(transporter: Transporter, pickup_date: datetime) -> bool:
    """
    True if the transporter is committed elsewhere on the pickup day or only
    frees up after it.
    """
    pickup_day = pickup_date.date()

    if transporter.available_from is not None and transporter.available_from.date() > pickup_day:
        return True

    return pickup_day in transporter.booked_dates


# -------------------------
# Scoring one pair
# -------------------------

def score_transporter(
    shipment: Shipment,
    transporter: Transporter,
    *,
    now: datetime,
    resolver: Optional[RouteResolver] = None,
    policy: Optional[MatchingPolicy] = None,
) -> Match:
    """
    Build the Match for a single (shipment, transporter) pair, without filtering.
    """
    policy = policy or default_matching_policy()
    resolver = resolver or RouteResolver(
        fallback_distance_km=policy.fallback_distance_km,
        min_return_trips=policy.min_return_trips,
    )

    known_return = resolver.is_known_return_route(transporter, shipment)
    experience = resolver.experience_on_route(transporter, shipment)

    # Deviation only matters when neither route shortcut applies.
    deviation = 0.0
    if not known_return and experience == 0:
        deviation = resolver.deviation_km(transporter, shipment)

    breakdown = ScoreBreakdown(
        route=route_score(known_return, experience, deviation),
        capacity=capacity_score(shipment.weight_kg, transporter.vehicle_capacity_kg),
        timing=timing_score(
            days_until_pickup(shipment.pickup_date, now),
            has_schedule_conflict(transporter, shipment.pickup_date),
        ),
        reputation=reputation_score(transporter.verified, transporter.rating_average, transporter.rating_count),
        experience=experience_score(experience),
    )
    total = breakdown.total(policy.weights)

    multiplier = get_seasonal_multiplier(shipment.cargo_category, now.date())
    reasons = check_needs_review(shipment, transporter, total, policy)

    logger.debug(
        "Shipment %s / transporter %s -> route=%s capacity=%s timing=%s reputation=%.2f "
        "experience=%s total=%d backhaul=%s",
        shipment.id, transporter.id, breakdown.route, breakdown.capacity, breakdown.timing,
        breakdown.reputation, breakdown.experience, total, known_return,
    )

    return Match(
        shipment_id=shipment.id,
        transporter_id=transporter.id,
        total_score=total,
        is_backhaul=known_return,
        score_breakdown=breakdown,
        effective_price=effective_price(shipment.price, shipment.cargo_category, now.date()),
        seasonal_multiplier=multiplier,
        transporter_rating=transporter.rating_average,
        vehicle_plate=transporter.vehicle_plate,
        is_known_return_route=known_return,
        needs_review=bool(reasons),
        review_reasons=tuple(reasons),
    )


# -------------------------
# Ranking
# -------------------------

def rank_matches(matches: Sequence[Match]) -> List[Match]:
    """
    Deterministic ordering: total desc, backhaul first, rating desc.
    sorted() is stable, so full ties keep input order.
    """
    return sorted(
        matches,
        key=lambda m: (-m.total_score, not m.is_backhaul, -m.transporter_rating),
    )


def compute_matches(
    shipment: Shipment,
    candidates: Sequence[Transporter],
    max_results: int = MAX_MATCHES,
    *,
    now: datetime,
    resolver: Optional[RouteResolver] = None,
    policy: Optional[MatchingPolicy] = None,
    options: Optional[MatchingOptions] = None,
) -> List[Match]:
    """
    Main matching entry point (pure algorithm).

    Parameters
    ----------
    shipment:
        A validated, posted shipment.
    candidates:
        Point-in-time snapshot of available transporters. Empty is fine.
    max_results:
        Caller cap; the effective cap is min(max_results, policy.max_matches).
    now:
        Current time, used for days-until-pickup and the seasonal multiplier.
    resolver / policy / options:
        Injected tables, tunables and per-call filters.

    Returns
    -------
    Ranked matches. Empty when nothing clears the minimum score; that is
    not an error.
    """
    if max_results < 0:
        raise ValueError(f"max_results must be >= 0, got {max_results}")

    policy = policy or default_matching_policy()
    options = options or MatchingOptions()
    resolver = resolver or RouteResolver(
        fallback_distance_km=policy.fallback_distance_km,
        min_return_trips=policy.min_return_trips,
    )
    min_score = policy.min_match_score if options.min_score is None else options.min_score

    limit = min(max_results, policy.max_matches)
    if limit == 0 or not candidates:
        return []

    kept: List[Match] = []
    for transporter in candidates:
        if transporter.id in options.exclude_transporters:
            continue
        if options.require_verified and not transporter.verified:
            continue

        match = score_transporter(shipment, transporter, now=now, resolver=resolver, policy=policy)
        if match.total_score < min_score:
            continue
        kept.append(match)

    ranked = rank_matches(kept)[:limit]

    logger.info(
        "Shipment %s: %d candidates, %d above score %d, returning %d",
        shipment.id, len(candidates), len(kept), min_score, len(ranked),
    )
    return ranked
