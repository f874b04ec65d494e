from typing import Dict

from riskmap.models.strategy import STRATEGY_ORDER, Strategy


def _preset(*values: float) -> Dict[Strategy, float]:
    return dict(zip(STRATEGY_ORDER, values))


# Coverage mixes offered by the assessment form, in strategy order.
PRESETS = {
    "conservative": _preset(30, 20, 25, 20, 5),
    "balanced": _preset(20, 15, 25, 30, 10),
    "aggressive": _preset(40, 30, 20, 5, 5),
    "minimal": _preset(5, 5, 10, 30, 50),
}


def get_preset(name: str) -> Dict[Strategy, float]:
    """Returns a copy of a named coverage preset. Raises KeyError if unknown."""
    key = name.strip().lower()
    if key not in PRESETS:
        raise KeyError(f"Unknown preset: {name}")
    return dict(PRESETS[key])
