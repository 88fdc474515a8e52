"""Aggregate daily TSS and activities into ISO (Monday-Sunday) weeks.

Weekly TSS is the sum of the week's daily TSS. CTL, ATL and TSB are the
42/7-day EWMA values on the last day of the week that has data, computed
over a gap-free daily series (rest days count as zero TSS).
"""

from __future__ import annotations

import dataclasses
import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import date, timedelta

import pandas as pd

from periodization_engine.math.training_stress import daily_training_stress
from periodization_engine.models.enums import DAYS_PER_WEEK
from periodization_engine.models.weekly_metric import (
    ActivityRef,
    HRZoneDistribution,
    WeeklyMetric,
)

logger = logging.getLogger(__name__)


def iso_week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def hr_zone_distribution(activities: Sequence[ActivityRef]) -> HRZoneDistribution | None:
    """Percent of zone time per HR zone, summed over activities with zone data."""
    totals = [0.0] * 5
    for activity in activities:
        if activity.hr_zone_seconds is None:
            continue
        for zone, seconds in enumerate(activity.hr_zone_seconds):
            totals[zone] += seconds
    grand_total = sum(totals)
    if grand_total <= 0:
        return None
    shares = [seconds / grand_total * 100.0 for seconds in totals]
    return HRZoneDistribution(*shares)


def _weekly_stress(daily_tss: Mapping[date, float]) -> pd.DataFrame:
    """Per-week TSS sum and end-of-week CTL/ATL/TSB, indexed by week start."""
    frame = pd.DataFrame(
        [dataclasses.asdict(point) for point in daily_training_stress(daily_tss)]
    )
    frame["week_start"] = [iso_week_start(day) for day in frame["date"]]
    return frame.groupby("week_start", sort=True).agg(
        tss=("tss", "sum"), ctl=("ctl", "last"), atl=("atl", "last"), tsb=("tsb", "last")
    )


def aggregate_weekly_metrics(
    daily_tss: Mapping[date, float],
    activities: Sequence[ActivityRef] = (),
) -> tuple[WeeklyMetric, ...]:
    """Build the weekly series the phase detector consumes.

    Every ISO week from the first to the last day with TSS data is emitted,
    including weeks without training. Activities outside that range are
    ignored.

    Args:
        daily_tss: TSS per calendar day; missing days count as rest.
        activities: Activities to total per week (duration, distance,
            elevation) and to derive the HR-zone distribution from.

    Returns:
        WeeklyMetric records in ascending ``week_start`` order.
    """
    if not daily_tss:
        return ()

    by_week: dict[date, list[ActivityRef]] = defaultdict(list)
    for activity in sorted(activities, key=lambda a: a.date):
        by_week[iso_week_start(activity.date)].append(activity)

    stress = _weekly_stress(daily_tss)
    weeks: list[WeeklyMetric] = []
    for week_start, row in stress.iterrows():
        week_activities = tuple(by_week.get(week_start, ()))
        weeks.append(
            WeeklyMetric(
                week_start=week_start,
                week_end=week_start + timedelta(days=DAYS_PER_WEEK - 1),
                total_duration=sum(a.duration for a in week_activities),
                total_distance=sum(a.distance for a in week_activities),
                avg_weekly_tss=float(row["tss"]),
                avg_ctl=float(row["ctl"]),
                avg_atl=float(row["atl"]),
                avg_tsb=float(row["tsb"]),
                total_elevation=sum(a.elevation_gain for a in week_activities),
                activity_count=len(week_activities),
                hr_zone_distribution=hr_zone_distribution(week_activities),
                activities=week_activities,
            )
        )

    skipped = len(activities) - sum(w.activity_count for w in weeks)
    if skipped:
        logger.debug("Ignored %d activities outside the TSS date range", skipped)
    logger.debug("Aggregated %d days of TSS into %d weeks", len(daily_tss), len(weeks))
    return tuple(weeks)
