"""
Purpose: Five sub-score calculators plus the weighted aggregate.
What it does:

Each sub-score is a pure function returning a value on a 0-100 scale:

route_score       - known return route > prior experience > pickup deviation bands
capacity_score    - utilization bands, rewards near-full loads, penalizes overload
timing_score      - urgency bands on days until pickup, schedule conflict = 20
reputation_score  - verification + rating (cold-start aware), clamped to 100
experience_score  - bands on same-direction trips (10..50)

aggregate_score combines them with the policy weights and rounds half-up.

Piecewise functions are expressed as ordered (predicate, value) tables;
the first matching row wins.

Rule: No I/O, no clocks, no randomness. Corrupted numeric input raises
ScoringError instead of producing NaN/inf scores.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from pricing.seasonal import round_half_up
from .policy import ScoreWeights

Step = Tuple[Callable[[float], bool], int]


class ScoringError(ValueError):
    """Raised when scoring input would produce a NaN/infinite or out-of-range score."""
    pass


# -------------------------
# Step tables
# -------------------------

KNOWN_RETURN_ROUTE_SCORE = 100
ROUTE_EXPERIENCE_SCORE = 90

# deviation km from the transporter's position to the pickup city
DEVIATION_STEPS: Sequence[Step] = (
    (lambda km: km < 50, 70),
    (lambda km: km < 100, 50),
    (lambda km: km < 200, 30),
    (lambda km: True, 10),
)

# utilization percent = weight / capacity * 100
CAPACITY_STEPS: Sequence[Step] = (
    (lambda u: 80 <= u <= 100, 100),
    (lambda u: 60 <= u < 80, 90),
    (lambda u: 40 <= u < 60, 70),
    (lambda u: 20 <= u < 40, 50),
    (lambda u: u < 20, 30),
    (lambda u: 100 < u <= 110, 60),  # slight overload, tolerated
    (lambda u: u > 110, 20),  # unsafe overload
)

SCHEDULE_CONFLICT_SCORE = 20

# whole days until pickup
TIMING_STEPS: Sequence[Step] = (
    (lambda d: d <= 0, 100),
    (lambda d: d == 1, 95),
    (lambda d: 2 <= d <= 3, 85),
    (lambda d: 4 <= d <= 7, 70),
    (lambda d: 8 <= d <= 14, 50),
    (lambda d: True, 30),
)

VERIFIED_POINTS = 40
UNVERIFIED_POINTS = 10
RELIABLE_RATING_COUNT = 5
RELIABLE_RATING_POINTS = 40
SPARSE_RATING_POINTS = 30
NO_RATING_POINTS = 20  # benefit of the doubt for brand-new transporters

# same-direction trips on the shipment's leg
EXPERIENCE_STEPS: Sequence[Step] = (
    (lambda n: n >= 10, 50),
    (lambda n: n >= 5, 40),
    (lambda n: n >= 2, 30),
    (lambda n: n == 1, 20),
    (lambda n: True, 10),
)


def step_value(table: Sequence[Step], x: float) -> int:
    for predicate, value in table:
        if predicate(x):
            return value
    raise ScoringError(f"No step matched input {x!r}")


def _require_finite(name: str, value: float) -> None:
    if value is None or not math.isfinite(value):
        raise ScoringError(f"{name} must be a finite number, got {value!r}")


# -------------------------
# Sub-scores
# -------------------------

def route_score(is_known_return_route: bool, experience_on_route: int, deviation_km: float) -> int:
    if is_known_return_route:
        return KNOWN_RETURN_ROUTE_SCORE
    if experience_on_route > 0:
        return ROUTE_EXPERIENCE_SCORE

    _require_finite("deviation_km", deviation_km)
    return step_value(DEVIATION_STEPS, deviation_km)


def utilization_percent(weight_kg: float, vehicle_capacity_kg: float) -> float:
    _require_finite("weight_kg", weight_kg)
    _require_finite("vehicle_capacity_kg", vehicle_capacity_kg)
    if vehicle_capacity_kg <= 0:
        raise ScoringError(f"vehicle_capacity_kg must be > 0, got {vehicle_capacity_kg}")
    if weight_kg <= 0:
        raise ScoringError(f"weight_kg must be > 0, got {weight_kg}")

    # trim float noise (1100 / 1000 * 100 == 110.00000000000001)
    return round(weight_kg * 100 / vehicle_capacity_kg, 9)


def capacity_score(weight_kg: float, vehicle_capacity_kg: float) -> int:
    return step_value(CAPACITY_STEPS, utilization_percent(weight_kg, vehicle_capacity_kg))


def timing_score(days_until_pickup: int, has_schedule_conflict: bool) -> int:
    if has_schedule_conflict:
        return SCHEDULE_CONFLICT_SCORE
    return step_value(TIMING_STEPS, days_until_pickup)


def reputation_score(verified: bool, rating_average: float, rating_count: int) -> float:
    _require_finite("rating_average", rating_average)

    score = VERIFIED_POINTS if verified else UNVERIFIED_POINTS

    if rating_count >= RELIABLE_RATING_COUNT:
        score += (rating_average / 5) * RELIABLE_RATING_POINTS
    elif rating_count > 0:
        score += (rating_average / 5) * SPARSE_RATING_POINTS
    else:
        score += NO_RATING_POINTS

    return min(max(score, 0), 100)


def experience_score(experience_on_route: int) -> int:
    return step_value(EXPERIENCE_STEPS, experience_on_route)


# -------------------------
# Aggregate
# -------------------------

@dataclass(frozen=True)
class ScoreBreakdown:
    route: float
    capacity: float
    timing: float
    reputation: float
    experience: float

    def weighted_sum(self, weights: ScoreWeights) -> float:
        return (
            self.route * weights.route
            + self.capacity * weights.capacity
            + self.timing * weights.timing
            + self.reputation * weights.reputation
            + self.experience * weights.experience
        )

    def total(self, weights: Optional[ScoreWeights] = None) -> int:
        return aggregate_score(
            self.route, self.capacity, self.timing, self.reputation, self.experience,
            weights=weights,
        )


def aggregate_score(
    route: float,
    capacity: float,
    timing: float,
    reputation: float,
    experience: float,
    *,
    weights: Optional[ScoreWeights] = None,
) -> int:
    """
    round(route*0.40 + capacity*0.20 + timing*0.15 + reputation*0.15 + experience*0.10)

    No clamping beyond rounding; each input must already be on 0-100.
    """
    weights = weights or ScoreWeights()

    for name, value in (
        ("route", route),
        ("capacity", capacity),
        ("timing", timing),
        ("reputation", reputation),
        ("experience", experience),
    ):
        _require_finite(f"{name} score", value)
        if not 0 <= value <= 100:
            raise ScoringError(f"{name} score must be within [0, 100], got {value}")

    breakdown = ScoreBreakdown(route, capacity, timing, reputation, experience)
    return round_half_up(breakdown.weighted_sum(weights))
