import pytest

from matching.policy import MatchingPolicy, ScoreWeights, default_matching_policy, policy_from_env

ENV_VARS = ("MATOLA_MIN_MATCH_SCORE", "MATOLA_MAX_MATCHES", "MATOLA_FALLBACK_DISTANCE_KM")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's local .env out of the tests
    monkeypatch.setattr("matching.policy.load_dotenv", lambda *a, **k: False)


def test_defaults():
    p = default_matching_policy()

    assert p.min_match_score == 30
    assert p.max_matches == 10
    assert p.fallback_distance_km == 500
    assert p.min_return_trips == 2
    assert p.weights.total() == pytest.approx(1.0)


@pytest.mark.parametrize(
    "policy",
    [
        MatchingPolicy(weights=ScoreWeights(route=0.5)),
        MatchingPolicy(weights=ScoreWeights(route=-0.1, capacity=0.7)),
        MatchingPolicy(min_match_score=101),
        MatchingPolicy(max_matches=0),
        MatchingPolicy(fallback_distance_km=-1),
        MatchingPolicy(min_return_trips=0),
        MatchingPolicy(high_priority_notifications=-1),
    ],
)
def test_validate_rejects_bad_policies(policy):
    with pytest.raises(ValueError):
        policy.validate()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MATOLA_MIN_MATCH_SCORE", "45")
    monkeypatch.setenv("MATOLA_MAX_MATCHES", "5")
    monkeypatch.setenv("MATOLA_FALLBACK_DISTANCE_KM", "650.5")

    p = policy_from_env()

    assert (p.min_match_score, p.max_matches, p.fallback_distance_km) == (45, 5, 650.5)


def test_blank_env_values_keep_defaults(monkeypatch):
    monkeypatch.setenv("MATOLA_MAX_MATCHES", "  ")
    assert policy_from_env().max_matches == 10


def test_env_overrides_keep_base_policy(monkeypatch):
    monkeypatch.setenv("MATOLA_MIN_MATCH_SCORE", "40")
    p = policy_from_env(MatchingPolicy(high_value_price=1_000_000))

    assert p.min_match_score == 40
    assert p.high_value_price == 1_000_000


def test_non_numeric_env_value(monkeypatch):
    monkeypatch.setenv("MATOLA_MAX_MATCHES", "ten")
    with pytest.raises(ValueError, match="MATOLA_MAX_MATCHES"):
        policy_from_env()


def test_env_values_are_validated(monkeypatch):
    monkeypatch.setenv("MATOLA_MIN_MATCH_SCORE", "150")
    with pytest.raises(ValueError):
        policy_from_env()
