import math
import numbers
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from riskmap.models.errors import ValidationError, ValidationReason
from riskmap.models.reference import Country, Industry
from riskmap.models.strategy import Strategy, normalize_strategy_map
from riskmap.reference.loader import ReferenceData
from riskmap.scoring.thresholds import COVERAGE_TOLERANCE, COVERAGE_TOTAL


@dataclass(frozen=True)
class ValidatedRequest:
    """
    Resolved reference records plus strategy maps keyed by Strategy.
    Scoring reads only from this, never from the raw request.
    """
    industry: Industry
    countries: List[Country]
    strategy_coverage: Optional[Dict[Strategy, float]] = None
    strategy_effectiveness: Optional[Dict[Strategy, float]] = None


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, numbers.Real)


def dedupe_countries(countries: Sequence[str]) -> List[str]:
    """Keeps the first occurrence of each name, in request order."""
    return list(dict.fromkeys(countries))


def validate_industry(industry: str, reference: ReferenceData) -> Industry:
    if not industry or not str(industry).strip():
        raise ValidationError(
            ValidationReason.MISSING_INDUSTRY,
            "Invalid request. Industry and countries array required.",
        )

    record = reference.industry(industry)
    if record is None:
        raise ValidationError(
            ValidationReason.MISSING_INDUSTRY,
            f"Invalid industry: {industry}",
        )
    return record


def validate_countries(countries: Sequence[str], reference: ReferenceData) -> List[Country]:
    if not countries:
        raise ValidationError(
            ValidationReason.EMPTY_COUNTRY_LIST,
            "Invalid request. Industry and countries array required.",
        )

    missing = [name for name in countries if reference.country(name) is None]
    if missing:
        raise ValidationError(
            ValidationReason.MISSING_COUNTRIES,
            "Invalid countries",
            missing=missing,
        )

    return [reference.country(name) for name in countries]


def validate_coverage(coverage: Mapping) -> Dict[Strategy, float]:
    """
    Normalises keys, then requires finite, non-negative percentages
    totalling 100 (+/- 0.1).
    """
    normalized = normalize_strategy_map(coverage)

    for strategy, value in normalized.items():
        if not _is_number(value) or not math.isfinite(value):
            raise ValidationError(
                ValidationReason.COVERAGE_NOT_100,
                f"Coverage for {strategy.value} must be a finite number",
            )
        if value < 0:
            raise ValidationError(
                ValidationReason.NEGATIVE_COVERAGE,
                f"Coverage for {strategy.value} cannot be negative",
            )

    total = sum(normalized.values())
    if abs(total - COVERAGE_TOTAL) > COVERAGE_TOLERANCE:
        raise ValidationError(
            ValidationReason.COVERAGE_NOT_100,
            "HRDD strategy percentages must total 100%",
        )
    return normalized


def validate_effectiveness(effectiveness: Mapping) -> Dict[Strategy, float]:
    # No range check; the multiplier clamp bounds the result
    normalized = normalize_strategy_map(effectiveness)

    for strategy, value in normalized.items():
        if not _is_number(value) or not math.isfinite(value):
            raise ValidationError(
                ValidationReason.INVALID_EFFECTIVENESS,
                f"Effectiveness for {strategy.value} must be a finite number",
            )
    return normalized


def validate_activity_volumes(activity_volumes: Mapping[str, object]) -> None:
    for country, volume in activity_volumes.items():
        if volume is None:
            continue
        if not _is_number(volume) or not math.isfinite(volume):
            raise ValidationError(
                ValidationReason.INVALID_ACTIVITY,
                f"Activity volume for {country} must be a finite number",
            )


def validate_request(
    industry: str,
    countries: Sequence[str],
    reference: ReferenceData,
    strategy_coverage: Optional[Mapping] = None,
    strategy_effectiveness: Optional[Mapping] = None,
    activity_volumes: Optional[Mapping[str, object]] = None,
) -> ValidatedRequest:
    """
    Checks a request against the reference tables before anything is scored.
    Strategy keys may be hyphenated or underscored; the returned maps are
    keyed by Strategy.
    """
    if not countries:
        raise ValidationError(
            ValidationReason.EMPTY_COUNTRY_LIST,
            "Invalid request. Industry and countries array required.",
        )

    industry_record = validate_industry(industry, reference)
    country_records = validate_countries(dedupe_countries(countries), reference)

    coverage = None
    effectiveness = None
    if strategy_coverage is not None:
        coverage = validate_coverage(strategy_coverage)
    if strategy_effectiveness is not None:
        effectiveness = validate_effectiveness(strategy_effectiveness)

    if activity_volumes is not None:
        validate_activity_volumes(activity_volumes)

    return ValidatedRequest(
        industry=industry_record,
        countries=country_records,
        strategy_coverage=coverage,
        strategy_effectiveness=effectiveness,
    )
