import math


def round_half_up(value: float) -> int:
    """
    Rounds .5 toward +infinity (not banker's rounding), so 38.5 -> 39
    and -0.5 -> 0. Scores must match the published calculator exactly.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
