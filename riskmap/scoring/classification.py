from riskmap.scoring.thresholds import (
    HIGH_MAX,
    LOW_MAX,
    MEDIUM_MAX,
    VERY_LOW_MAX,
)


def classify_risk(overall_risk: float) -> str:
    if overall_risk <= VERY_LOW_MAX:
        return "Very Low"
    elif overall_risk <= LOW_MAX:
        return "Low"
    elif overall_risk <= MEDIUM_MAX:
        return "Medium"
    elif overall_risk <= HIGH_MAX:
        return "High"
    return "Very High"


def country_risk_band(risk: float) -> str:
    """
    CSS band for a single country row. Exclusive lower bounds,
    so 80 is still "high-risk".
    """
    if risk > HIGH_MAX:
        return "very-high-risk"
    elif risk > MEDIUM_MAX:
        return "high-risk"
    elif risk > LOW_MAX:
        return "medium-risk"
    return "low-risk"
