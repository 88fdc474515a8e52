"""Shared test fixtures: weekly series, personal records, detected phases."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable

import pytest

from periodization_engine.models.enums import FormZone, TrainingPhase, TrendDirection
from periodization_engine.models.personal_record import PersonalRecord, PRCategory
from periodization_engine.models.phase import (
    ConfidenceFactors,
    DetectedPhase,
    FormMetrics,
    FormZoneDistribution,
)
from periodization_engine.models.weekly_metric import HRZoneDistribution, WeeklyMetric

SEASON_START = date(2024, 1, 1)  # Monday

AEROBIC_ZONES = (60.0, 28.0, 8.0, 3.0, 1.0)
HARD_ZONES = (30.0, 25.0, 15.0, 20.0, 10.0)
TAPER_ZONES = (20.0, 25.0, 40.0, 10.0, 5.0)

WeekFactory = Callable[..., WeeklyMetric]
PhaseFactory = Callable[..., DetectedPhase]


def make_week(
    index: int,
    hours: float = 6.0,
    tss: float = 250.0,
    ctl: float = 40.0,
    tsb: float = 0.0,
    zones: tuple[float, float, float, float, float] | None = AEROBIC_ZONES,
    activity_count: int = 5,
    start: date = SEASON_START,
) -> WeeklyMetric:
    """Week ``index`` of a season; ATL is derived so that TSB = CTL - ATL."""
    week_start = start + timedelta(weeks=index)
    return WeeklyMetric(
        week_start=week_start,
        week_end=week_start + timedelta(days=6),
        total_duration=hours * 3600.0,
        total_distance=hours * 10_000.0,  # 10 km/h
        avg_weekly_tss=tss,
        avg_ctl=ctl,
        avg_atl=ctl - tsb,
        avg_tsb=tsb,
        total_elevation=hours * 50.0,
        activity_count=activity_count,
        hr_zone_distribution=HRZoneDistribution(*zones) if zones is not None else None,
    )


def make_phase(
    phase: TrainingPhase,
    start_week: int,
    weeks: int,
    avg_tsb: float | None = 0.0,
    min_tsb: float | None = None,
    overreaching_days: int = 0,
    fresh_pct: float = 0.0,
) -> DetectedPhase:
    """A DetectedPhase covering ``weeks`` weeks; ``avg_tsb=None`` omits form metrics."""
    start = SEASON_START + timedelta(weeks=start_week)
    form = None
    if avg_tsb is not None:
        form = FormMetrics(
            avg_tsb=avg_tsb,
            min_tsb=avg_tsb if min_tsb is None else min_tsb,
            max_tsb=avg_tsb,
            tsb_trend=TrendDirection.STABLE,
            zone_distribution=FormZoneDistribution(
                fresh=fresh_pct, maintenance=100.0 - fresh_pct
            ),
            dominant_zone=FormZone.FRESH if fresh_pct > 50 else FormZone.MAINTENANCE,
            overreaching_days=overreaching_days,
        )
    return DetectedPhase(
        phase=phase,
        start_date=start,
        end_date=start + timedelta(weeks=weeks, days=-1),
        duration_weeks=weeks,
        avg_weekly_volume=6.0,
        avg_weekly_distance=60.0,
        volume_trend=TrendDirection.STABLE,
        volume_change=0.0,
        avg_weekly_tss=250.0,
        tss_trend=TrendDirection.STABLE,
        avg_ctl=40.0,
        ctl_gain=0.0,
        avg_atl=40.0,
        avg_tsb=avg_tsb if avg_tsb is not None else 0.0,
        confidence=70,
        confidence_factors=ConfidenceFactors(volume=70, intensity=70, tss=70, duration=100),
        form_metrics=form,
    )


def make_pr(day: date, category_id: str = "run_5k", activity_id: int = 1) -> PersonalRecord:
    return PersonalRecord(
        category=PRCategory(category_id=category_id, name=category_id.replace("_", " ")),
        timestamp=datetime.combine(day, datetime.min.time()).replace(hour=9),
        activity_id=activity_id,
        value=1200.0,
    )


@pytest.fixture
def week_factory() -> WeekFactory:
    return make_week


@pytest.fixture
def phase_factory() -> PhaseFactory:
    return make_phase


@pytest.fixture
def periodized_block() -> tuple[WeeklyMetric, ...]:
    """Twelve weeks: six aerobic base weeks, four hard build weeks, a two-week taper.

    Detects as base(6) -> build(4) -> taper(2) with the default config.
    """
    hours = (4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 9.5, 9.5, 9.5, 9.5, 5.8, 4.5)
    tss = (200.0, 220.0, 240.0, 260.0, 280.0, 290.0, 400.0, 420.0, 440.0, 420.0, 250.0, 180.0)
    ctl = (30.0, 33.0, 36.0, 39.0, 42.0, 45.0, 50.0, 55.0, 60.0, 64.0, 59.0, 57.0)
    tsb = (-5.0, -5.0, -5.0, -5.0, -5.0, -5.0, -15.0, -18.0, -20.0, -18.0, 8.0, 23.0)
    zones = (AEROBIC_ZONES,) * 6 + (HARD_ZONES,) * 4 + (TAPER_ZONES,) * 2
    return tuple(
        make_week(i, hours=h, tss=t, ctl=c, tsb=b, zones=z)
        for i, (h, t, c, b, z) in enumerate(zip(hours, tss, ctl, tsb, zones))
    )


@pytest.fixture
def steady_block() -> tuple[WeeklyMetric, ...]:
    """Ten identical maintenance weeks."""
    return tuple(
        make_week(i, hours=7.0, tss=280.0, ctl=45.0, tsb=-2.0, zones=AEROBIC_ZONES)
        for i in range(10)
    )


@pytest.fixture
def season_prs() -> tuple[PersonalRecord, ...]:
    """A PR in week 2 (base), week 8 (build) and week 12 (taper)."""
    return (
        make_pr(SEASON_START + timedelta(days=9), "run_5k", 101),
        make_pr(SEASON_START + timedelta(days=52), "run_10k", 102),
        make_pr(SEASON_START + timedelta(days=80), "run_5k", 103),
    )
