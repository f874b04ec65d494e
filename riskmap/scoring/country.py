from riskmap.scoring.utils import clamp, round_half_up


def adjust_country_risk(
    base_risk_score: float,
    risk_multiplier: float,
    hrdd_multiplier: float,
) -> int:
    """
    base risk x industry multiplier x HRDD multiplier, rounded and
    clamped to [0, 100]. Independent per country.
    """
    adjusted = round_half_up(base_risk_score * risk_multiplier * hrdd_multiplier)
    return int(clamp(adjusted, 0, 100))
