from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional


# =========================================================
# Persisted assessment (append-only, never read by scoring)
# =========================================================
@dataclass(frozen=True)
class AssessmentRecord:
    assessment_id: str
    created_at: datetime

    # Request snapshot
    industry: str
    countries: List[str]
    hrdd_strategies: Dict[str, float]
    hrdd_effectiveness: Dict[str, float]
    activity_data: Dict[str, float]

    # Outcome
    overall_risk_score: int
    country_scores: List[Dict]
    hrdd_multiplier: float
    total_activity: Optional[float]

    # Integrity
    record_hash: str

    def to_dict(self) -> dict:
        return {
            "assessment_id": self.assessment_id,
            "created_at": self.created_at.isoformat(),
            "industry": self.industry,
            "countries": list(self.countries),
            "hrdd_strategies": dict(self.hrdd_strategies),
            "hrdd_effectiveness": dict(self.hrdd_effectiveness),
            "activity_data": dict(self.activity_data),
            "overall_risk_score": self.overall_risk_score,
            "country_scores": [dict(cs) for cs in self.country_scores],
            "hrdd_multiplier": self.hrdd_multiplier,
            "total_activity": self.total_activity,
            "record_hash": self.record_hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AssessmentRecord":
        return cls(
            assessment_id=data["assessment_id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            industry=data["industry"],
            countries=list(data["countries"]),
            hrdd_strategies=dict(data.get("hrdd_strategies") or {}),
            hrdd_effectiveness=dict(data.get("hrdd_effectiveness") or {}),
            activity_data=dict(data.get("activity_data") or {}),
            overall_risk_score=data["overall_risk_score"],
            country_scores=list(data.get("country_scores") or []),
            hrdd_multiplier=data["hrdd_multiplier"],
            total_activity=data.get("total_activity"),
            record_hash=data["record_hash"],
        )
