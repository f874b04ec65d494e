import pytest

from riskmap.models.assessment import AssessmentRequest
from riskmap.models.errors import ValidationError, ValidationReason
from riskmap.models.strategy import Strategy, normalize_strategy_map
from riskmap.reference.loader import load_reference_data
from riskmap.scoring.engine import compute_risk


def test_manufacturing_example(reference):
    """base 50, multiplier 1.2, continuous monitoring at 85% -> 39"""
    result = compute_risk(
        AssessmentRequest(
            industry="Manufacturing",
            countries=["Testland"],
            strategy_coverage={Strategy.CONTINUOUS_MONITORING: 100},
        ),
        reference,
    )

    assert result.hrdd_multiplier == pytest.approx(0.65)
    assert result.country_risks[0].risk == 39
    assert result.overall_risk == 39
    assert result.risk_level == "Low"


def test_no_strategy_mix_is_neutral(reference):
    result = compute_risk(
        AssessmentRequest(industry="Services", countries=["Testland"]),
        reference,
    )

    assert result.hrdd_multiplier == 1.0
    assert result.hrdd is None
    assert result.country_risks[0].risk == 50


def test_simple_mode_without_activity_data(reference):
    result = compute_risk(
        AssessmentRequest(industry="Manufacturing", countries=["Lowland", "Highland"]),
        reference,
    )

    # 20 x 1.2 = 24, 80 x 1.2 = 96
    assert result.mode == "simple"
    assert [cr.risk for cr in result.country_risks] == [24, 96]
    assert result.overall_risk == 60
    assert result.total_activity is None
    assert "total_activity" not in result.to_dict()


def test_equal_activity_matches_simple_mode(reference):
    simple = compute_risk(
        AssessmentRequest(industry="Manufacturing", countries=["Lowland", "Highland"]),
        reference,
    )
    weighted = compute_risk(
        AssessmentRequest(
            industry="Manufacturing",
            countries=["Lowland", "Highland"],
            activity_volumes={"Lowland": 25, "Highland": 25},
        ),
        reference,
    )

    assert weighted.mode == "activity_weighted"
    assert weighted.overall_risk == simple.overall_risk
    assert weighted.total_activity == 50


def test_uniform_risk_ignores_skewed_activity(reference):
    result = compute_risk(
        AssessmentRequest(
            industry="Services",
            countries=["Testland", "Midland"],
            activity_volumes={"Testland": 10, "Midland": 90},
        ),
        reference,
    )

    assert [cr.weight for cr in result.country_risks] == [10, 90]
    assert result.overall_risk == 50


def test_empty_activity_map_uses_default_volume(reference):
    result = compute_risk(
        AssessmentRequest(
            industry="Services",
            countries=["Testland", "Lowland"],
            activity_volumes={},
        ),
        reference,
    )

    assert result.mode == "activity_weighted"
    assert result.total_activity == 20
    assert all(cr.activity_level == 10 for cr in result.country_risks)


def test_hyphenated_and_underscored_keys_score_the_same(reference):
    def run(coverage):
        return compute_risk(
            AssessmentRequest(
                industry="Manufacturing",
                countries=["Oddland"],
                strategy_coverage=normalize_strategy_map(coverage),
            ),
            reference,
        )

    hyphenated = run({"unannounced-audit": 70, "no-engagement": 30})
    underscored = run({"unannounced_audit": 70, "no_engagement": 30})

    assert hyphenated == underscored


def test_raw_hyphenated_coverage_is_normalised_by_the_engine(reference):
    result = compute_risk(
        AssessmentRequest(
            industry="Manufacturing",
            countries=["Testland"],
            strategy_coverage={"continuous-monitoring": 100},
        ),
        reference,
    )

    assert result.hrdd_multiplier == pytest.approx(0.65)
    assert result.overall_risk == 39
    assert result.hrdd.dominant_strategy == Strategy.CONTINUOUS_MONITORING


def test_unknown_effectiveness_key_stops_scoring(reference):
    with pytest.raises(ValidationError) as exc:
        compute_risk(
            AssessmentRequest(
                industry="Manufacturing",
                countries=["Testland"],
                strategy_coverage={"continuous_monitoring": 100},
                strategy_effectiveness={"bogus": 50},
            ),
            reference,
        )
    assert exc.value.reason == ValidationReason.UNKNOWN_STRATEGY


def test_infinite_activity_volume_stops_scoring(reference):
    with pytest.raises(ValidationError) as exc:
        compute_risk(
            AssessmentRequest(
                industry="Manufacturing",
                countries=["Testland"],
                activity_volumes={"Testland": float("inf")},
            ),
            reference,
        )
    assert exc.value.reason == ValidationReason.INVALID_ACTIVITY


def test_unknown_country_stops_scoring(reference):
    with pytest.raises(ValidationError) as exc:
        compute_risk(
            AssessmentRequest(industry="Services", countries=["Testland", "Atlantis"]),
            reference,
        )
    assert exc.value.reason == ValidationReason.MISSING_COUNTRIES
    assert exc.value.missing == ["Atlantis"]


def test_bundled_snapshot_clamps_high_risk_sourcing():
    reference = load_reference_data()
    result = compute_risk(
        AssessmentRequest(
            industry="Textiles",
            countries=["Bangladesh", "Germany"],
            strategy_coverage={Strategy.NO_ENGAGEMENT: 100},
        ),
        reference,
    )

    risks = {cr.country: cr.risk for cr in result.country_risks}
    # 82 x 1.6 x 1.5 -> clamped; 15 x 1.6 x 1.5 = 36
    assert risks == {"Bangladesh": 100, "Germany": 36}
    assert result.overall_risk == 68
    assert result.risk_level == "High"


def test_result_serialises_with_hrdd_detail(reference):
    result = compute_risk(
        AssessmentRequest(
            industry="Manufacturing",
            countries=["Testland"],
            strategy_coverage={Strategy.CONTINUOUS_MONITORING: 100},
            activity_volumes={"Testland": 5},
        ),
        reference,
    )
    payload = result.to_dict()

    assert payload["hrdd_data"]["dominant_strategy"] == "continuous_monitoring"
    assert payload["hrdd_data"]["strategies"]["no_engagement"] == 0
    assert payload["country_risks"][0]["weight"] == 100
    assert payload["total_activity"] == 5
