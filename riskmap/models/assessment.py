from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from riskmap.models.strategy import Strategy


@dataclass(frozen=True)
class AssessmentRequest:
    """
    Explicit input snapshot for one scoring call.
    Strategy keys may be Strategy members or either string form
    ("continuous-monitoring" / "continuous_monitoring"); validation normalises them.
    """
    industry: str
    countries: List[str]
    strategy_coverage: Optional[Dict[Union[Strategy, str], float]] = None
    strategy_effectiveness: Optional[Dict[Union[Strategy, str], float]] = None
    activity_volumes: Optional[Dict[str, float]] = None


@dataclass(frozen=True)
class HrddResult:
    multiplier: float
    total_effectiveness: float
    coverage: Dict[Strategy, float]
    effectiveness: Dict[Strategy, float]
    dominant_strategy: Strategy
    weighted_effectiveness_pct: float
    coverage_quality: str

    def to_dict(self) -> dict:
        return {
            "multiplier": self.multiplier,
            "effectiveness": self.total_effectiveness,
            "strategies": {s.value: v for s, v in self.coverage.items()},
            "effectiveness_values": {s.value: v for s, v in self.effectiveness.items()},
            "dominant_strategy": self.dominant_strategy.value,
            "weighted_effectiveness": self.weighted_effectiveness_pct,
            "coverage_quality": self.coverage_quality,
        }


@dataclass(frozen=True)
class CountryRisk:
    country: str
    risk: int
    base_risk: float
    activity_level: Optional[float] = None
    weight: Optional[float] = None

    def to_dict(self) -> dict:
        payload = {
            "country": self.country,
            "risk": self.risk,
            "base_risk": self.base_risk,
        }
        if self.activity_level is not None:
            payload["activity_level"] = self.activity_level
            payload["weight"] = self.weight
        return payload


@dataclass(frozen=True)
class AssessmentResult:
    overall_risk: int
    risk_level: str
    mode: str  # "simple" | "activity_weighted"
    industry: str
    industry_multiplier: float
    hrdd_multiplier: float
    country_risks: List[CountryRisk] = field(default_factory=list)
    hrdd: Optional[HrddResult] = None
    total_activity: Optional[float] = None

    def to_dict(self) -> dict:
        payload = {
            "overall_risk": self.overall_risk,
            "risk_level": self.risk_level,
            "mode": self.mode,
            "industry": self.industry,
            "industry_multiplier": self.industry_multiplier,
            "hrdd_multiplier": self.hrdd_multiplier,
            "country_risks": [cr.to_dict() for cr in self.country_risks],
        }
        if self.total_activity is not None:
            payload["total_activity"] = self.total_activity
        if self.hrdd is not None:
            payload["hrdd_data"] = self.hrdd.to_dict()
        return payload
