from enum import Enum
from typing import List, Optional


class ValidationReason(str, Enum):
    EMPTY_COUNTRY_LIST = "empty_country_list"
    MISSING_INDUSTRY = "missing_industry"
    MISSING_COUNTRIES = "missing_countries"
    COVERAGE_NOT_100 = "coverage_not_100"
    UNKNOWN_STRATEGY = "unknown_strategy"
    NEGATIVE_COVERAGE = "negative_coverage"
    INVALID_ACTIVITY = "invalid_activity"
    INVALID_EFFECTIVENESS = "invalid_effectiveness"


class ValidationError(ValueError):
    """
    Raised when an assessment request cannot be scored.
    `reason` is machine-readable; `missing` is only set for unknown countries.
    """

    def __init__(
        self,
        reason: ValidationReason,
        message: str,
        missing: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.missing = list(missing) if missing else []

    def to_dict(self) -> dict:
        payload = {"error": self.message, "reason": self.reason.value}
        if self.reason == ValidationReason.MISSING_COUNTRIES:
            payload["missing"] = self.missing
        return payload
