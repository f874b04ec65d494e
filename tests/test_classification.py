import pytest

from riskmap.scoring.classification import classify_risk, country_risk_band


@pytest.mark.parametrize("score,label", [
    (0, "Very Low"),
    (20, "Very Low"),
    (21, "Low"),
    (40, "Low"),
    (41, "Medium"),
    (60, "Medium"),
    (61, "High"),
    (80, "High"),
    (81, "Very High"),
    (100, "Very High"),
])
def test_upper_bounds_are_inclusive(score, label):
    assert classify_risk(score) == label


def test_country_bands():
    assert country_risk_band(40) == "low-risk"
    assert country_risk_band(41) == "medium-risk"
    assert country_risk_band(61) == "high-risk"
    assert country_risk_band(80) == "high-risk"
    assert country_risk_band(81) == "very-high-risk"
