"""
Purpose: Central configuration for transporter matching (single source of truth).
What it does:

Stores all tunable thresholds/caps:

WEIGHTS = route 0.40, capacity 0.20, timing 0.15, reputation 0.15, experience 0.10

MIN_MATCH_SCORE = 30

MAX_MATCHES = 10

FALLBACK_DISTANCE_KM = 500

MIN_RETURN_TRIPS = 2 (reverse trips in the history index for a known return route)

Review thresholds (high value price, minimum ratings, low score).

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, replace
from typing import Optional

from dotenv import load_dotenv

from routing.distances import DEFAULT_FALLBACK_DISTANCE_KM
from routing.history import DEFAULT_MIN_RETURN_TRIPS

MIN_MATCH_SCORE = 30
MAX_MATCHES = 10


@dataclass(frozen=True)
class ScoreWeights:
    route: float = 0.40
    capacity: float = 0.20
    timing: float = 0.15
    reputation: float = 0.15
    experience: float = 0.10

    def total(self) -> float:
        return self.route + self.capacity + self.timing + self.reputation + self.experience


@dataclass(frozen=True)
class MatchingPolicy:
    """
    Central configuration for matching and ranking.

    Keep all matching thresholds here so behavior can be tuned without
    touching the scoring tables or the engine.
    """

    weights: ScoreWeights = field(default_factory=ScoreWeights)

    # --- Filtering / truncation ---
    # Matches scoring below this are dropped.
    min_match_score: int = MIN_MATCH_SCORE
    # Hard cap on the ranked list; callers may ask for fewer, never more.
    max_matches: int = MAX_MATCHES

    # --- Route resolution ---
    fallback_distance_km: float = DEFAULT_FALLBACK_DISTANCE_KM
    # Reverse trips in the history index needed to call a leg a known return route.
    min_return_trips: int = DEFAULT_MIN_RETURN_TRIPS

    # --- Admin review triggers ---
    high_value_price: int = 500_000  # MWK
    min_reliable_ratings: int = 5
    low_score_review_threshold: int = 50

    # --- Notifications ---
    # Top N matches get SMS + WhatsApp, the rest WhatsApp only.
    high_priority_notifications: int = 3

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup.
        """
        w = self.weights
        for name in ("route", "capacity", "timing", "reputation", "experience"):
            if getattr(w, name) < 0:
                raise ValueError(f"weight '{name}' must be >= 0")

        if not math.isclose(w.total(), 1.0, abs_tol=1e-9):
            raise ValueError(f"weights must sum to 1.0, got {w.total()}")

        if not 0 <= self.min_match_score <= 100:
            raise ValueError("min_match_score must be within [0, 100]")

        if self.max_matches < 1:
            raise ValueError("max_matches must be >= 1")

        if self.fallback_distance_km < 0:
            raise ValueError("fallback_distance_km must be >= 0")

        if self.min_return_trips < 1:
            raise ValueError("min_return_trips must be >= 1")

        if self.high_priority_notifications < 0:
            raise ValueError("high_priority_notifications must be >= 0")


def default_matching_policy() -> MatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MatchingPolicy()
    p.validate()
    return p


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def policy_from_env(base: Optional[MatchingPolicy] = None) -> MatchingPolicy:
    """
    Default policy with overrides from the environment / .env file:

    MATOLA_MIN_MATCH_SCORE=30
    MATOLA_MAX_MATCHES=10
    MATOLA_FALLBACK_DISTANCE_KM=500
    """
    load_dotenv()
    base = base or MatchingPolicy()

    p = replace(
        base,
        min_match_score=_env_number("MATOLA_MIN_MATCH_SCORE", int, base.min_match_score),
        max_matches=_env_number("MATOLA_MAX_MATCHES", int, base.max_matches),
        fallback_distance_km=_env_number("MATOLA_FALLBACK_DISTANCE_KM", float, base.fallback_distance_km),
    )
    p.validate()
    return p
