from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from riskmap.models.assessment import CountryRisk
from riskmap.models.reference import Country
from riskmap.scoring.utils import round_half_up


SIMPLE_MODE = "simple"
ACTIVITY_WEIGHTED_MODE = "activity_weighted"

MIN_ACTIVITY_LEVEL = 1.0


@dataclass(frozen=True)
class WeightedOutcome:
    overall_risk: int
    mode: str
    country_risks: List[CountryRisk] = field(default_factory=list)
    total_activity: Optional[float] = None


def resolve_activity_volumes(
    countries: Sequence[str],
    activity_volumes: Mapping[str, float],
    default_activity: float,
) -> Dict[str, float]:
    """
    One volume per requested country. Absent, null or zero entries take
    the default; anything else is floored at 1.
    """
    resolved = {}
    for name in countries:
        volume = activity_volumes.get(name)
        if not volume:
            volume = default_activity
        resolved[name] = max(MIN_ACTIVITY_LEVEL, float(volume))
    return resolved


def score_simple(adjusted: Sequence[Tuple[Country, int]]) -> WeightedOutcome:
    """Unweighted mean of the adjusted country risks."""
    risks = [risk for _, risk in adjusted]
    overall = round_half_up(sum(risks) / len(risks))

    return WeightedOutcome(
        overall_risk=overall,
        mode=SIMPLE_MODE,
        country_risks=[
            CountryRisk(country=c.name, risk=risk, base_risk=c.base_risk_score)
            for c, risk in adjusted
        ],
    )


def score_activity_weighted(
    adjusted: Sequence[Tuple[Country, int]],
    volumes: Mapping[str, float],
) -> WeightedOutcome:
    """
    Each country contributes in proportion to its share of total activity:
        weight = activity / total_activity * 100
        overall = round(sum(risk * weight / 100))
    """
    total_activity = sum(volumes[c.name] for c, _ in adjusted)

    country_risks = []
    weighted_sum = 0.0
    for country, risk in adjusted:
        activity = volumes[country.name]
        weight = activity / total_activity * 100
        weighted_sum += risk * weight / 100
        country_risks.append(CountryRisk(
            country=country.name,
            risk=risk,
            base_risk=country.base_risk_score,
            activity_level=activity,
            weight=weight,
        ))

    return WeightedOutcome(
        overall_risk=round_half_up(weighted_sum),
        mode=ACTIVITY_WEIGHTED_MODE,
        country_risks=country_risks,
        total_activity=total_activity,
    )
