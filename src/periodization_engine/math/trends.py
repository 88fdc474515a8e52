"""Trend directions over weekly series.

Two flavours are used: a causal look-back trend (current week against the
average of up to ``window`` previous weeks) for per-week classification,
and a half-split trend (second half against first half) for describing a
finished phase. Zero reference averages yield "no trend" rather than a
division by zero.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from periodization_engine.math.stats import mean, split_halves
from periodization_engine.models.enums import MIN_TREND_WEEKS, TrendDirection


def percent_change(current: float, reference: float) -> float | None:
    """Percent change from ``reference`` to ``current``, or None if reference <= 0."""
    if reference <= 0:
        return None
    return (current - reference) / reference * 100.0


def direction_from_change(change: float | None, threshold: float) -> TrendDirection:
    """Map a change to a direction using a symmetric +/- threshold."""
    if change is None:
        return TrendDirection.STABLE
    if change > threshold:
        return TrendDirection.INCREASING
    if change < -threshold:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def lookback(values: Sequence[float], index: int, window: int) -> Sequence[float] | None:
    """The up-to-``window`` values before ``index``, or None when too few exist.

    Only values strictly before ``index`` are returned, so the trend for a
    week never depends on later weeks.
    """
    size = min(window, index)
    if size < MIN_TREND_WEEKS:
        return None
    return values[index - size : index]


def lookback_percent_trend(
    values: Sequence[float], index: int, window: int, threshold_pct: float
) -> tuple[TrendDirection, bool]:
    """Percent-change trend of ``values[index]`` against its look-back average.

    Returns:
        (direction, established): ``established`` is False when there is
        no usable look-back (too early or a zero average).
    """
    previous = lookback(values, index, window)
    if previous is None:
        return TrendDirection.STABLE, False
    change = percent_change(values[index], mean(previous))
    if change is None:
        return TrendDirection.STABLE, False
    return direction_from_change(change, threshold_pct), True


def lookback_delta_trend(
    values: Sequence[float], index: int, window: int, threshold: float
) -> tuple[TrendDirection, bool]:
    """Absolute-difference trend of ``values[index]`` against its look-back average."""
    previous = lookback(values, index, window)
    if previous is None:
        return TrendDirection.STABLE, False
    return direction_from_change(values[index] - mean(previous), threshold), True


def half_split_percent_trend(
    values: Sequence[float], threshold_pct: float
) -> tuple[TrendDirection, float]:
    """Percent trend of the second half against the first.

    Returns:
        (direction, change_pct). A one-element series or a zero first-half
        average gives (STABLE, 0.0).
    """
    first, second = split_halves(values)
    if not first:
        return TrendDirection.STABLE, 0.0
    change = percent_change(mean(second), mean(first))
    if change is None:
        return TrendDirection.STABLE, 0.0
    return direction_from_change(change, threshold_pct), change


def half_split_delta_trend(values: Sequence[float], threshold: float) -> TrendDirection:
    """Absolute trend of the second-half average against the first-half average."""
    first, second = split_halves(values)
    if not first:
        return TrendDirection.STABLE
    return direction_from_change(mean(second) - mean(first), threshold)


def fit_linear_trend(values: Sequence[float]) -> tuple[float, float, float]:
    """Least-squares line through ``values`` against their index.

    Uses numpy.polyfit. Fewer than two points gives a flat line through the
    only value (or 0) with R^2 = 0.

    Returns:
        (slope, intercept, r_squared)
    """
    if len(values) < 2:
        return 0.0, float(values[0]) if len(values) else 0.0, 0.0
    x = np.arange(len(values), dtype=np.float64)
    y = np.asarray(values, dtype=np.float64)
    # numpy.polyfit(x, y, 1) returns [slope, intercept]
    slope, intercept = np.polyfit(x, y, 1)
    predicted = slope * x + intercept
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r_squared = 1.0 - (ss_res / ss_tot) if ss_tot > 0 else 0.0
    return float(slope), float(intercept), r_squared
