import json
from pathlib import Path
from typing import Dict, List, Optional

from riskmap.models.reference import Country, Industry
from riskmap.models.strategy import DEFAULT_EFFECTIVENESS, Strategy


SNAPSHOT_DIR = Path(__file__).parent / "snapshots"

DEFAULT_SNAPSHOT_VERSION = "reference_v1_2025-01-01"
DEFAULT_ACTIVITY_LEVEL = 10.0


def load_reference_snapshot(filename: str) -> Dict:
    """
    Load a versioned reference snapshot from disk.
    Snapshots are static and reviewable.
    """
    if not filename.endswith(".json"):
        filename = f"{filename}.json"

    snapshot_path = SNAPSHOT_DIR / filename

    if not snapshot_path.exists():
        raise FileNotFoundError(f"Reference snapshot not found: {filename}")

    with open(snapshot_path, "r", encoding="utf-8") as f:
        snapshot = json.load(f)

    if "snapshot_version" not in snapshot:
        raise ValueError("Invalid snapshot: missing snapshot_version")

    return snapshot


class ReferenceData:
    """
    Read-only country and industry tables, loaded once and shared.
    """

    def __init__(
        self,
        countries: List[Country],
        industries: List[Industry],
        default_activity: float = DEFAULT_ACTIVITY_LEVEL,
        default_effectiveness: Optional[Dict[Strategy, float]] = None,
        snapshot_version: str = "inline",
    ):
        self._countries = {c.name: c for c in countries}
        self._industries = {i.name: i for i in industries}
        self.default_activity = default_activity
        self.default_effectiveness = dict(default_effectiveness or DEFAULT_EFFECTIVENESS)
        self.snapshot_version = snapshot_version

    @classmethod
    def from_snapshot(cls, snapshot: Dict) -> "ReferenceData":
        countries = [
            Country(
                name=row["country"],
                base_risk_score=row["base_risk_score"],
                iso_code=row.get("iso_code"),
                region=row.get("region"),
            )
            for row in snapshot.get("countries", [])
        ]
        industries = [
            Industry(
                name=row["industry"],
                risk_multiplier=row["risk_multiplier"],
                description=row.get("description"),
            )
            for row in snapshot.get("industries", [])
        ]

        indexes = snapshot.get("indexes", {})
        default_activity = indexes.get("activity_level", {}).get("default", DEFAULT_ACTIVITY_LEVEL)
        effectiveness = dict(DEFAULT_EFFECTIVENESS)
        for key, value in indexes.get("hrdd_effectiveness", {}).items():
            effectiveness[Strategy.parse(key)] = value

        return cls(
            countries=countries,
            industries=industries,
            default_activity=default_activity,
            default_effectiveness=effectiveness,
            snapshot_version=snapshot["snapshot_version"],
        )

    # --- Lookups used by scoring ---

    def country(self, name: str) -> Optional[Country]:
        return self._countries.get(name)

    def industry(self, name: str) -> Optional[Industry]:
        return self._industries.get(name)

    @property
    def countries(self) -> List[Country]:
        return sorted(self._countries.values(), key=lambda c: c.name)

    @property
    def industries(self) -> List[Industry]:
        return sorted(self._industries.values(), key=lambda i: i.name)

    # --- Loose lookups used by the API detail endpoints ---

    def find_country(self, identifier: str) -> Optional[Country]:
        """Match by ISO code, then by case-insensitive name fragment."""
        needle = identifier.strip()
        for country in self.countries:
            if country.iso_code and country.iso_code == needle.upper():
                return country
        for country in self.countries:
            if needle.lower() in country.name.lower():
                return country
        return None

    def find_industry(self, name: str) -> Optional[Industry]:
        needle = name.strip().lower()
        return next(
            (i for i in self.industries if needle in i.name.lower()),
            None,
        )


def load_reference_data(snapshot_version: str = DEFAULT_SNAPSHOT_VERSION) -> ReferenceData:
    return ReferenceData.from_snapshot(load_reference_snapshot(snapshot_version))
