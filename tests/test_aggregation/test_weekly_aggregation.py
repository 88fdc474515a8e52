"""Tests for aggregating daily TSS and activities into ISO weeks."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from periodization_engine.aggregation.weekly import (
    aggregate_weekly_metrics,
    hr_zone_distribution,
    iso_week_start,
)
from periodization_engine.math.stats import round_to
from periodization_engine.math.training_stress import (
    calculate_atl,
    calculate_ctl,
    daily_training_stress,
)
from periodization_engine.models.weekly_metric import ActivityRef

MONDAY = date(2024, 1, 1)


def _activity(activity_id: int, day: date, hours: float, zones: tuple | None = None) -> ActivityRef:
    return ActivityRef(
        activity_id=activity_id,
        activity_type="running",
        date=day,
        duration=hours * 3600.0,
        distance=hours * 12_000.0,
        elevation_gain=100.0,
        hr_zone_seconds=zones,
    )


class TestIsoWeekStart:
    @pytest.mark.parametrize("offset", range(7))
    def test_every_day_maps_to_monday(self, offset: int) -> None:
        assert iso_week_start(MONDAY + timedelta(days=offset)) == MONDAY

    def test_next_monday_starts_new_week(self) -> None:
        assert iso_week_start(MONDAY + timedelta(days=7)) == MONDAY + timedelta(days=7)


class TestHRZoneDistribution:
    def test_percent_of_summed_zone_time(self) -> None:
        activities = [
            _activity(1, MONDAY, 1.0, (1800.0, 1200.0, 600.0, 0.0, 0.0)),
            _activity(2, MONDAY, 1.0, (0.0, 1200.0, 600.0, 600.0, 0.0)),
            _activity(3, MONDAY, 1.0, None),
        ]
        zones = hr_zone_distribution(activities)
        assert zones is not None
        assert zones.as_tuple() == pytest.approx((30.0, 40.0, 20.0, 10.0, 0.0))

    def test_none_without_zone_time(self) -> None:
        assert hr_zone_distribution([_activity(1, MONDAY, 1.0)]) is None
        assert hr_zone_distribution([]) is None


class TestAggregateWeeklyMetrics:
    def test_weekly_sums_and_end_of_week_load(self) -> None:
        daily = {MONDAY + timedelta(days=i): 100.0 for i in range(14)}
        weeks = aggregate_weekly_metrics(daily)
        assert [w.week_start for w in weeks] == [MONDAY, MONDAY + timedelta(days=7)]
        assert weeks[0].week_end == MONDAY + timedelta(days=6)
        assert weeks[0].avg_weekly_tss == pytest.approx(700.0)
        assert weeks[0].avg_ctl == pytest.approx(round_to(calculate_ctl([100.0] * 7), 1))
        assert weeks[1].avg_atl == pytest.approx(round_to(calculate_atl([100.0] * 14), 1))
        assert weeks[1].avg_tsb < 0

    def test_week_carries_last_daily_stress_point(self) -> None:
        daily = {MONDAY + timedelta(days=i): 40.0 + 15 * (i % 3) for i in range(17)}
        points = daily_training_stress(daily)
        weeks = aggregate_weekly_metrics(daily)
        assert len(weeks) == 3
        for week in weeks:
            (last,) = [p for p in points if p.date == min(week.week_end, points[-1].date)]
            assert (week.avg_ctl, week.avg_atl, week.avg_tsb) == (last.ctl, last.atl, last.tsb)
        assert weeks[-1].avg_weekly_tss == pytest.approx(sum(p.tss for p in points[14:]))

    def test_rest_weeks_are_emitted(self) -> None:
        daily = {MONDAY: 150.0, MONDAY + timedelta(days=19): 90.0}
        weeks = aggregate_weekly_metrics(daily)
        assert len(weeks) == 3
        assert weeks[1].avg_weekly_tss == 0.0
        assert weeks[1].avg_ctl < weeks[0].avg_ctl
        assert weeks[1].activity_count == 0

    def test_partial_first_week(self) -> None:
        wednesday = MONDAY + timedelta(days=2)
        weeks = aggregate_weekly_metrics({wednesday: 80.0, wednesday + timedelta(days=1): 80.0})
        assert len(weeks) == 1
        assert weeks[0].week_start == MONDAY
        assert weeks[0].avg_weekly_tss == pytest.approx(160.0)

    def test_activities_are_totalled_per_week(self) -> None:
        daily = {MONDAY + timedelta(days=i): 60.0 for i in range(14)}
        activities = [
            _activity(1, MONDAY + timedelta(days=1), 1.5, (3000.0, 2000.0, 400.0, 0.0, 0.0)),
            _activity(2, MONDAY + timedelta(days=3), 2.0),
            _activity(3, MONDAY + timedelta(days=8), 1.0),
            _activity(4, MONDAY + timedelta(days=40), 1.0),
        ]
        weeks = aggregate_weekly_metrics(daily, activities)
        assert weeks[0].activity_count == 2
        assert weeks[0].volume_hours == pytest.approx(3.5)
        assert weeks[0].distance_km == pytest.approx(42.0)
        assert weeks[0].total_elevation == pytest.approx(200.0)
        assert weeks[0].hr_zone_distribution is not None
        assert [a.activity_id for a in weeks[0].activities] == [1, 2]
        assert weeks[1].activity_count == 1
        assert weeks[1].hr_zone_distribution is None
        assert sum(w.activity_count for w in weeks) == 3

    def test_no_data(self) -> None:
        assert aggregate_weekly_metrics({}) == ()
