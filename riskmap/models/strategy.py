from enum import Enum

from riskmap.models.errors import ValidationError, ValidationReason


class Strategy(str, Enum):
    """
    The closed set of HRDD monitoring strategies.

    Declaration order is the evaluation order used everywhere a tie
    has to be broken.
    """
    CONTINUOUS_MONITORING = "continuous_monitoring"
    UNANNOUNCED_AUDIT = "unannounced_audit"
    ANNOUNCED_AUDIT = "announced_audit"
    SELF_ASSESSMENT = "self_assessment"
    NO_ENGAGEMENT = "no_engagement"

    @classmethod
    def parse(cls, identifier: str) -> "Strategy":
        """
        Accepts either the underscored or the hyphenated identifier
        ("continuous-monitoring"), case-insensitively.
        """
        if isinstance(identifier, cls):
            return identifier

        key = str(identifier).strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValidationError(
                ValidationReason.UNKNOWN_STRATEGY,
                f"Unknown HRDD strategy: {identifier}",
            ) from None

    @property
    def slug(self) -> str:
        # Hyphenated form used by the form fields
        return self.value.replace("_", "-")

    @property
    def label(self) -> str:
        return " ".join(part.capitalize() for part in self.value.split("_"))


STRATEGY_ORDER = tuple(Strategy)

DEFAULT_EFFECTIVENESS = {
    Strategy.CONTINUOUS_MONITORING: 85.0,
    Strategy.UNANNOUNCED_AUDIT: 50.0,
    Strategy.ANNOUNCED_AUDIT: 15.0,
    Strategy.SELF_ASSESSMENT: 5.0,
    Strategy.NO_ENGAGEMENT: 0.0,
}


def normalize_strategy_map(values):
    """
    Converts a boundary mapping (hyphenated or underscored keys) into a
    mapping keyed by Strategy. Returns None when no mapping is given.
    """
    if values is None:
        return None

    normalized = {}
    for key, value in values.items():
        normalized[Strategy.parse(key)] = value
    return normalized
