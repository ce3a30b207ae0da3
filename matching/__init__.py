#Expose the high-level matching pipeline pieces:
#Sub-score calculators + aggregate (scoring)
#Tunables (policy)
#Engine orchestrator (the "one call" entry point)
#Review flags, notification grouping, and the periodic batch job

from .policy import MAX_MATCHES, MIN_MATCH_SCORE, MatchingPolicy, ScoreWeights, default_matching_policy, policy_from_env
from .scoring import ScoreBreakdown, ScoringError, aggregate_score
from .engine import Match, MatchingOptions, compute_matches, rank_matches, score_transporter  #the main function to call to rank transporters for a shipment
from .review import check_needs_review, group_by_notification_priority
from .batch import BatchMatchResult, batch_match_pending_shipments

__all__ = [
    "MAX_MATCHES",
    "MIN_MATCH_SCORE",
    "MatchingPolicy",
    "ScoreWeights",
    "default_matching_policy",
    "policy_from_env",
    "ScoreBreakdown",
    "ScoringError",
    "aggregate_score",
    "Match",
    "MatchingOptions",
    "compute_matches",
    "rank_matches",
    "score_transporter",
    "check_needs_review",
    "group_by_notification_priority",
    "BatchMatchResult",
    "batch_match_pending_shipments",
]
