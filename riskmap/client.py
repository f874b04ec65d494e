import logging
from typing import Any, Dict, List, Optional

import requests

from riskmap.models.assessment import AssessmentRequest
from riskmap.models.strategy import normalize_strategy_map
from riskmap.reference.loader import ReferenceData, load_reference_data
from riskmap.scoring.engine import compute_risk

logger = logging.getLogger("riskmap.client")


class RiskMapClient:
    """
    Talks to the RiskMap API. When the API is unreachable or answers with an
    error status, it switches to fallback mode and scores locally against
    the bundled reference snapshot.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        fallback_reference: Optional[ReferenceData] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.using_fallback = False
        self._fallback_reference = fallback_reference

    @property
    def fallback_reference(self) -> ReferenceData:
        if self._fallback_reference is None:
            self._fallback_reference = load_reference_data()
        return self._fallback_reference

    def _get(self, path: str) -> Any:
        response = requests.get(f"{self.base_url}{path}", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_countries(self) -> List[str]:
        try:
            data = self._get("/countries")
            self.using_fallback = False
            return sorted(row["country"] for row in data)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Using fallback countries data: {e}")

        self.using_fallback = True
        return [c.name for c in self.fallback_reference.countries]

    def fetch_industries(self) -> List[str]:
        try:
            data = self._get("/industries")
            return sorted(row["industry"] for row in data)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Using fallback industries data: {e}")

        return [i.name for i in self.fallback_reference.industries]

    def calculate_risk(
        self,
        industry: str,
        countries: List[str],
        hrdd_strategies: Optional[Dict[str, float]] = None,
        hrdd_effectiveness: Optional[Dict[str, float]] = None,
        activity_volumes: Optional[Dict[str, float]] = None,
    ) -> Dict[str, Any]:
        """
        Returns the API response body. A 400 from the API (bad input) is
        not a connectivity problem, so it is raised, not masked by the fallback.
        """
        if not self.using_fallback:
            payload = {
                "industry": industry,
                "countries": list(countries),
                "hrdd_strategies": hrdd_strategies,
                "hrdd_effectiveness": hrdd_effectiveness,
                "activity_volumes": activity_volumes,
            }
            try:
                response = requests.post(
                    f"{self.base_url}/calculate-risk",
                    json=payload,
                    timeout=self.timeout,
                    headers={"Content-Type": "application/json"},
                )
            except requests.exceptions.RequestException as e:
                logger.warning(f"API unavailable, using fallback calculation: {e}")
            else:
                if response.ok:
                    return response.json()
                if response.status_code == 400:
                    response.raise_for_status()
                logger.warning(f"API returned {response.status_code}, using fallback calculation")

        return self.calculate_risk_locally(
            industry, countries, hrdd_strategies, hrdd_effectiveness, activity_volumes
        )

    def calculate_risk_locally(
        self,
        industry: str,
        countries: List[str],
        hrdd_strategies: Optional[Dict[str, float]] = None,
        hrdd_effectiveness: Optional[Dict[str, float]] = None,
        activity_volumes: Optional[Dict[str, float]] = None,
    ) -> Dict[str, Any]:
        request = AssessmentRequest(
            industry=industry,
            countries=list(countries),
            strategy_coverage=normalize_strategy_map(hrdd_strategies),
            strategy_effectiveness=normalize_strategy_map(hrdd_effectiveness),
            activity_volumes=activity_volumes,
        )
        response = compute_risk(request, self.fallback_reference).to_dict()
        response["assessment_id"] = None
        return response
