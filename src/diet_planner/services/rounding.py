"""Half-up rounding helpers shared by the pipeline stages."""

import math


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves away from zero for positive values, like ``Math.round``."""
    scale = 10**decimals
    return math.floor(value * scale + 0.5) / scale


def round_to_step(value: float, step: float) -> float:
    """Round to the nearest multiple of ``step``."""
    if step <= 0:
        return value
    return math.floor(value / step + 0.5) * step
