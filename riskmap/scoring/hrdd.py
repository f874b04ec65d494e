from typing import Dict, Mapping, Optional

from riskmap.models.assessment import HrddResult
from riskmap.models.strategy import DEFAULT_EFFECTIVENESS, STRATEGY_ORDER, Strategy
from riskmap.scoring.thresholds import (
    HRDD_MULTIPLIER_MAX,
    HRDD_MULTIPLIER_MIN,
    MODERATE_COVERAGE_MIN,
    STRONG_COVERAGE_MIN,
)
from riskmap.scoring.utils import clamp


NEUTRAL_MULTIPLIER = 1.0


def merge_effectiveness(
    effectiveness: Optional[Mapping[Strategy, float]],
    defaults: Optional[Mapping[Strategy, float]] = None,
) -> Dict[Strategy, float]:
    """
    Fills in the default rating for every strategy the caller did not rate.
    Supplied values are kept as-is, including 0.
    """
    merged = dict(defaults or DEFAULT_EFFECTIVENESS)
    if effectiveness:
        merged.update(effectiveness)
    return {s: merged.get(s, 0.0) for s in STRATEGY_ORDER}


def total_effectiveness(
    coverage: Mapping[Strategy, float],
    effectiveness: Mapping[Strategy, float],
) -> float:
    """
    Sum of coverage fraction x effectiveness fraction over all five
    strategies. Nominally in [0, 1]; not clamped here.
    """
    total = 0.0
    for strategy in STRATEGY_ORDER:
        weight = coverage.get(strategy, 0.0) / 100
        total += weight * effectiveness.get(strategy, 0.0) / 100
    return total


def effectiveness_to_multiplier(effectiveness_fraction: float) -> float:
    """
    Fixed linear map: 0.0 -> 1.5 (risk amplified), 1.0 -> 0.5 (risk halved),
    hard clamped at both ends.
    """
    return clamp(
        HRDD_MULTIPLIER_MAX - effectiveness_fraction,
        HRDD_MULTIPLIER_MIN,
        HRDD_MULTIPLIER_MAX,
    )


def dominant_strategy(
    coverage: Mapping[Strategy, float],
    effectiveness: Mapping[Strategy, float],
) -> Strategy:
    # Strict comparison: ties go to the strategy evaluated first
    top_strategy = STRATEGY_ORDER[0]
    top_score = -1.0
    for strategy in STRATEGY_ORDER:
        score = coverage.get(strategy, 0.0) * effectiveness.get(strategy, 0.0)
        if score > top_score:
            top_score = score
            top_strategy = strategy
    return top_strategy


def coverage_quality(weighted_pct: float) -> str:
    if weighted_pct > STRONG_COVERAGE_MIN:
        return "Strong"
    elif weighted_pct > MODERATE_COVERAGE_MIN:
        return "Moderate"
    return "Weak"


def compute_hrdd(
    coverage: Mapping[Strategy, float],
    effectiveness: Optional[Mapping[Strategy, float]] = None,
    defaults: Optional[Mapping[Strategy, float]] = None,
) -> HrddResult:
    """
    Turns a validated coverage mix into the HRDD multiplier plus the
    display figures derived from it.
    """
    full_coverage = {s: coverage.get(s, 0.0) for s in STRATEGY_ORDER}
    ratings = merge_effectiveness(effectiveness, defaults)

    fraction = total_effectiveness(full_coverage, ratings)
    weighted_pct = round(fraction * 100, 1)

    return HrddResult(
        multiplier=effectiveness_to_multiplier(fraction),
        total_effectiveness=fraction,
        coverage=full_coverage,
        effectiveness=ratings,
        dominant_strategy=dominant_strategy(full_coverage, ratings),
        weighted_effectiveness_pct=weighted_pct,
        coverage_quality=coverage_quality(weighted_pct),
    )
