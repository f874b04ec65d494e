from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Country:
    name: str
    base_risk_score: float  # 1 - 100
    iso_code: Optional[str] = None
    region: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "country": self.name,
            "iso_code": self.iso_code,
            "base_risk_score": self.base_risk_score,
            "region": self.region,
        }


@dataclass(frozen=True)
class Industry:
    name: str
    risk_multiplier: float  # 0.1 - 3.0
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "industry": self.name,
            "risk_multiplier": self.risk_multiplier,
            "description": self.description,
        }
