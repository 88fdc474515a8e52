"""Tests for the recovery (TSB management) sub-score."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.scoring.recovery import (
    analyze_recovery_management,
    calculate_recovery_score,
)

WeekFactory = Callable[..., WeeklyMetric]
PhaseFactory = Callable[..., DetectedPhase]


def _weeks(week_factory: WeekFactory, tsb: list[float]) -> list[WeeklyMetric]:
    return [week_factory(i, tsb=v) for i, v in enumerate(tsb)]


class TestRecoveryScore:
    def test_periodized_block(self, periodized_block: tuple[WeeklyMetric, ...]) -> None:
        score = calculate_recovery_score(periodized_block, [])
        tsb = score.management.tsb_management
        assert tsb.avg_tsb == pytest.approx(-70.0 / 12)
        assert tsb.overreaching_episodes == 0
        assert tsb.adequate_recovery_periods == 1
        assert score.overall == 90

    def test_well_managed_form_scores_100(self, week_factory: WeekFactory) -> None:
        weeks = _weeks(week_factory, [-10.0, -5.0, 20.0, -8.0, 18.0])
        assert calculate_recovery_score(weeks, []).overall == 100

    def test_frequent_overreaching_is_penalised(self, week_factory: WeekFactory) -> None:
        weeks = _weeks(week_factory, [-35.0, -32.0, -20.0, -25.0, -18.0])
        score = calculate_recovery_score(weeks, [])
        assert score.management.tsb_management.overreaching_episodes == 2
        assert score.overall == 50

    def test_empty_series_scores_zero(self) -> None:
        assert calculate_recovery_score([], []).overall == 0


class TestRecoveryManagement:
    def test_interval_with_several_recovery_phases(
        self, week_factory: WeekFactory, phase_factory: PhaseFactory
    ) -> None:
        weeks = _weeks(week_factory, [0.0] * 12)
        phases = [
            phase_factory(TrainingPhase.BUILD, 0, 3),
            phase_factory(TrainingPhase.RECOVERY, 3, 1),
            phase_factory(TrainingPhase.BUILD, 4, 3),
            phase_factory(TrainingPhase.RECOVERY, 7, 1),
            phase_factory(TrainingPhase.BUILD, 8, 3),
            phase_factory(TrainingPhase.RECOVERY, 11, 1),
        ]
        management = analyze_recovery_management(weeks, phases)
        assert management.recovery_weeks_count == 3
        assert management.avg_recovery_week_interval == pytest.approx(4.0)
        assert management.is_adequate

    def test_single_recovery_phase_uses_whole_series(
        self, week_factory: WeekFactory, phase_factory: PhaseFactory
    ) -> None:
        weeks = _weeks(week_factory, [0.0] * 10)
        phases = [phase_factory(TrainingPhase.BUILD, 0, 8), phase_factory(TrainingPhase.RECOVERY, 8, 2)]
        management = analyze_recovery_management(weeks, phases)
        assert management.avg_recovery_week_interval == pytest.approx(10.0)
        assert not management.is_adequate
        assert "Incorporate more frequent recovery weeks" in management.recommendations
