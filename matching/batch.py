"""
Purpose: Periodic "match all pending shipments" job.
What it does:
- Rejects invalid shipment/transporter records at the boundary (logged, skipped).
- Skips shipments that are no longer posted.
- Applies the hard eligibility filter per shipment.
- Calls compute_matches and collects the ranked lists.

A failure on one shipment is logged and counted; it never aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from routing.route_resolver import RouteResolver
from shipments.models import InvalidRecordError, Shipment, ShipmentStatus
from transporters.models import Transporter
from transporters.selection import filter_eligible_transporters
from .engine import Match, compute_matches
from .policy import MatchingPolicy, default_matching_policy

logger = logging.getLogger(__name__)


@dataclass
class BatchMatchResult:
    matches: Dict[str, List[Match]] = field(default_factory=dict)
    processed: int = 0
    matches_created: int = 0
    errors: int = 0
    rejected_transporters: List[str] = field(default_factory=list)


def _valid_transporters(transporters: Sequence[Transporter]) -> Tuple[List[Transporter], List[str]]:
    valid: List[Transporter] = []
    rejected: List[str] = []
    for transporter in transporters:
        try:
            transporter.validate()
        except InvalidRecordError as e:
            logger.warning("Skipping transporter: %s", e)
            rejected.append(transporter.id)
            continue
        valid.append(transporter)
    return valid, rejected


def batch_match_pending_shipments(
    shipments: Sequence[Shipment],
    transporters: Sequence[Transporter],
    *,
    now: datetime,
    resolver: Optional[RouteResolver] = None,
    policy: Optional[MatchingPolicy] = None,
    max_results: Optional[int] = None,
) -> BatchMatchResult:
    policy = policy or default_matching_policy()
    resolver = resolver or RouteResolver(
        fallback_distance_km=policy.fallback_distance_km,
        min_return_trips=policy.min_return_trips,
    )
    max_results = policy.max_matches if max_results is None else max_results

    result = BatchMatchResult()
    pool, result.rejected_transporters = _valid_transporters(transporters)

    for shipment in shipments:
        if shipment.status != ShipmentStatus.POSTED:
            continue

        try:
            shipment.validate()
            candidates = filter_eligible_transporters(shipment, pool)
            matches = compute_matches(
                shipment, candidates, max_results, now=now, resolver=resolver, policy=policy
            )
        except ValueError as e:
            # InvalidRecordError and ScoringError are both ValueErrors
            logger.error("Error matching shipment %s: %s", shipment.id, e)
            result.errors += 1
            continue

        result.matches[shipment.id] = matches
        result.processed += 1
        result.matches_created += len(matches)

    logger.info(
        "Batch matching done: processed=%d matches=%d errors=%d",
        result.processed, result.matches_created, result.errors,
    )
    return result
