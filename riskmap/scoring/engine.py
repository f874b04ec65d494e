from riskmap.models.assessment import AssessmentRequest, AssessmentResult
from riskmap.reference.loader import ReferenceData
from riskmap.scoring.classification import classify_risk
from riskmap.scoring.country import adjust_country_risk
from riskmap.scoring.hrdd import NEUTRAL_MULTIPLIER, compute_hrdd
from riskmap.scoring.validator import validate_request
from riskmap.scoring.weighting import (
    resolve_activity_volumes,
    score_activity_weighted,
    score_simple,
)


def compute_risk(request: AssessmentRequest, reference: ReferenceData) -> AssessmentResult:
    """
    Scores one assessment request.

    Pipeline:
        Validator -> HRDD multiplier -> per-country adjustment -> aggregation

    Aggregation runs in "simple" mode (plain mean) when the request carries
    no activity volumes and in "activity_weighted" mode otherwise.
    Pure: reads the reference tables, never writes anything.
    """
    validated = validate_request(
        industry=request.industry,
        countries=request.countries,
        reference=reference,
        strategy_coverage=request.strategy_coverage,
        strategy_effectiveness=request.strategy_effectiveness,
        activity_volumes=request.activity_volumes,
    )
    industry = validated.industry
    countries = validated.countries

    # 1. HRDD multiplier (neutral when no strategy mix was given)
    hrdd = None
    hrdd_multiplier = NEUTRAL_MULTIPLIER
    if validated.strategy_coverage is not None:
        hrdd = compute_hrdd(
            validated.strategy_coverage,
            validated.strategy_effectiveness,
            defaults=reference.default_effectiveness,
        )
        hrdd_multiplier = hrdd.multiplier

    # 2. Per-country adjustment
    adjusted = [
        (c, adjust_country_risk(c.base_risk_score, industry.risk_multiplier, hrdd_multiplier))
        for c in countries
    ]

    # 3. Aggregate
    if request.activity_volumes is None:
        outcome = score_simple(adjusted)
    else:
        volumes = resolve_activity_volumes(
            [c.name for c in countries],
            request.activity_volumes,
            reference.default_activity,
        )
        outcome = score_activity_weighted(adjusted, volumes)

    return AssessmentResult(
        overall_risk=outcome.overall_risk,
        risk_level=classify_risk(outcome.overall_risk),
        mode=outcome.mode,
        industry=industry.name,
        industry_multiplier=industry.risk_multiplier,
        hrdd_multiplier=hrdd_multiplier,
        country_risks=outcome.country_risks,
        hrdd=hrdd,
        total_activity=outcome.total_activity,
    )
