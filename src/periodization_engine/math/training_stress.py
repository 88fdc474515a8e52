"""Training stress: CTL, ATL and TSB from daily TSS.

CTL and ATL are exponentially weighted moving averages of daily TSS with
time constants of 42 and 7 days:

    x_t = x_{t-1} + (tss_t - x_{t-1}) / tau

which is a pandas EWMA with ``alpha = 1 / tau`` and ``adjust=False``. Both
start from the supplied initial value (0 for a fresh athlete). TSB is
CTL - ATL.

References:
    - Banister et al. (1975): impulse-response fitness/fatigue model
    - Coggan & Allen (2010): Training and Racing with a Power Meter,
      Performance Management Chart (CTL/ATL/TSB)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date

import numpy as np
import pandas as pd

from periodization_engine.math.stats import round_to
from periodization_engine.models.enums import (
    ATL_TIME_CONSTANT,
    CTL_TIME_CONSTANT,
    TRAINING_STRESS_DECIMALS,
)


@dataclass(frozen=True)
class TrainingStressPoint:
    """CTL/ATL/TSB at the end of one day."""

    date: date
    tss: float
    ctl: float
    atl: float
    tsb: float


def calculate_ewma_series(
    daily_loads: Sequence[float], time_constant: int, initial: float = 0.0
) -> list[float]:
    """Exponentially weighted moving average for every day of a load series.

    Args:
        daily_loads: Daily TSS values (oldest first).
        time_constant: Time constant in days (42 for CTL, 7 for ATL).
        initial: Value of the average before the first day.

    Returns:
        One EWMA value per input day.
    """
    if len(daily_loads) == 0:
        return []
    series = pd.Series([initial, *daily_loads], dtype=np.float64)
    ewma = series.ewm(alpha=1.0 / time_constant, adjust=False).mean()
    return [float(v) for v in ewma.iloc[1:]]


def calculate_ctl(daily_loads: Sequence[float], initial: float = 0.0) -> float:
    """Chronic training load ("fitness") after the last day, unrounded."""
    values = calculate_ewma_series(daily_loads, CTL_TIME_CONSTANT, initial)
    return values[-1] if values else initial


def calculate_atl(daily_loads: Sequence[float], initial: float = 0.0) -> float:
    """Acute training load ("fatigue") after the last day, unrounded."""
    values = calculate_ewma_series(daily_loads, ATL_TIME_CONSTANT, initial)
    return values[-1] if values else initial


def calculate_tsb(ctl: float, atl: float) -> float:
    """Training stress balance ("form"), rounded to one decimal."""
    return round_to(ctl - atl, TRAINING_STRESS_DECIMALS)


def fill_daily_tss(
    daily_tss: Mapping[date, float],
    start: date | None = None,
    end: date | None = None,
) -> pd.Series:
    """Daily TSS indexed by calendar day, with rest days filled as 0.

    Args:
        daily_tss: TSS per day; days may be missing.
        start: First day of the series (defaults to the earliest key).
        end: Last day of the series (defaults to the latest key).

    Returns:
        A float Series indexed by a daily DatetimeIndex.
    """
    if not daily_tss and (start is None or end is None):
        return pd.Series(dtype=np.float64)
    observed = pd.Series(
        {pd.Timestamp(day): float(tss) for day, tss in daily_tss.items()},
        dtype=np.float64,
    ).sort_index()
    first = pd.Timestamp(start) if start is not None else observed.index.min()
    last = pd.Timestamp(end) if end is not None else observed.index.max()
    # Several entries on one day add up.
    observed = observed.groupby(level=0).sum()
    index = pd.date_range(first, last, freq="D")
    return observed.reindex(index, fill_value=0.0)


def daily_training_stress(
    daily_tss: Mapping[date, float],
    start: date | None = None,
    end: date | None = None,
    initial_ctl: float = 0.0,
    initial_atl: float = 0.0,
) -> list[TrainingStressPoint]:
    """CTL/ATL/TSB for every day from ``start`` to ``end``.

    Values are rounded to one decimal. TSB is computed from the unrounded
    CTL and ATL.
    """
    filled = fill_daily_tss(daily_tss, start, end)
    if filled.empty:
        return []
    loads = filled.to_list()
    ctl = calculate_ewma_series(loads, CTL_TIME_CONSTANT, initial_ctl)
    atl = calculate_ewma_series(loads, ATL_TIME_CONSTANT, initial_atl)
    return [
        TrainingStressPoint(
            date=ts.date(),
            tss=tss,
            ctl=round_to(c, TRAINING_STRESS_DECIMALS),
            atl=round_to(a, TRAINING_STRESS_DECIMALS),
            tsb=calculate_tsb(c, a),
        )
        for ts, tss, c, a in zip(filled.index, loads, ctl, atl)
    ]
