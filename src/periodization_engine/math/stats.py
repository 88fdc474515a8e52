"""Small numeric helpers shared by the classifiers, enricher and scorer."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up.

    Python's ``round`` uses banker's rounding (``round(70.5) == 70``);
    scores here round ``x.5`` up. The value is first snapped to 9 decimals
    so that float noise such as ``70.49999999999999`` rounds as ``70.5``.
    """
    return int(math.floor(round(value, 9) + 0.5))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def clamp_score(value: float) -> int:
    """Clamp to [0, 100] and round half up."""
    return round_half_up(clamp(value))


def split_halves(values: Sequence[float]) -> tuple[Sequence[float], Sequence[float]]:
    """Split at ``len // 2``: the second half gets the extra element."""
    mid = len(values) // 2
    return values[:mid], values[mid:]


def round_to(value: float, decimals: int) -> float:
    """Round half up to a number of decimals, e.g. ``round_to(63.65, 1) == 63.7``."""
    factor = 10**decimals
    return math.floor(round(value * factor, 9) + 0.5) / factor
