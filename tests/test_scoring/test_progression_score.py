"""Tests for the progression sub-score."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.scoring.progression import (
    analyze_volume_progression,
    calculate_ctl_gain,
    calculate_progression_score,
    score_ctl_gain,
    score_recovery_frequency,
)

WeekFactory = Callable[..., WeeklyMetric]
PhaseFactory = Callable[..., DetectedPhase]


class TestVolumeProgression:
    def test_rapid_increases(self, periodized_block: tuple[WeeklyMetric, ...]) -> None:
        volume = analyze_volume_progression(periodized_block)
        assert [round(r.increase, 1) for r in volume.rapid_increases] == [25.0, 20.0, 16.7]
        assert volume.rapid_increases[0].week_start == periodized_block[1].week_start
        assert volume.is_progressive
        assert not volume.is_within_safe_range
        assert volume.progression_score == 75

    def test_gentle_ramp(self, week_factory: WeekFactory) -> None:
        weeks = [week_factory(i, hours=5.0 * 1.05**i) for i in range(10)]
        volume = analyze_volume_progression(weeks)
        assert volume.avg_weekly_increase == pytest.approx(5.0)
        assert volume.is_within_safe_range
        assert volume.progression_score == 100
        assert volume.volume_trend.slope > 0
        assert volume.volume_trend.interpretation == "Progressive increase"

    def test_flat_volume_is_not_progressive(self, week_factory: WeekFactory) -> None:
        volume = analyze_volume_progression([week_factory(i, hours=6.0) for i in range(5)])
        assert not volume.is_progressive
        assert volume.progression_score == 80
        assert volume.volume_trend.interpretation == "Non-progressive"

    def test_zero_volume_weeks_are_skipped(self, week_factory: WeekFactory) -> None:
        weeks = [week_factory(0, hours=0.0), week_factory(1, hours=5.0), week_factory(2, hours=5.5)]
        volume = analyze_volume_progression(weeks)
        assert volume.avg_weekly_increase == pytest.approx(10.0)
        assert volume.rapid_increases == ()


class TestCTLGain:
    @pytest.mark.parametrize(
        "gain, weeks, expected",
        [
            (-2.0, 12, 30),
            (0.0, 12, 50),
            (60.0, 12, 40),
            (27.0, 12, 75),
            (15.0, 12, 95),
            (12.0, 12, 90),
            (8.0, 12, 80),
            (5.0, 12, 70),
            (2.0, 12, 60),
        ],
    )
    def test_bands(self, gain: float, weeks: int, expected: int) -> None:
        assert score_ctl_gain(gain, weeks) == expected

    def test_gain_from_first_to_last_week(self, periodized_block: tuple[WeeklyMetric, ...]) -> None:
        assert calculate_ctl_gain(periodized_block) == pytest.approx(27.0)
        assert calculate_ctl_gain([]) == 0.0


class TestRecoveryFrequency:
    def test_short_history(self, phase_factory: PhaseFactory) -> None:
        assert score_recovery_frequency([phase_factory(TrainingPhase.BASE, 0, 6)]) == 80

    def test_no_recovery(self, phase_factory: PhaseFactory) -> None:
        phases = [phase_factory(TrainingPhase.BASE, 0, 6), phase_factory(TrainingPhase.BUILD, 6, 6)]
        assert score_recovery_frequency(phases) == 60

    def test_appropriate_recovery(self, phase_factory: PhaseFactory) -> None:
        phases = [
            phase_factory(TrainingPhase.BASE, 0, 5),
            phase_factory(TrainingPhase.RECOVERY, 5, 2),
            phase_factory(TrainingPhase.BUILD, 7, 5),
        ]
        assert score_recovery_frequency(phases) == 90

    def test_excessive_recovery(self, phase_factory: PhaseFactory) -> None:
        phases = [
            phase_factory(TrainingPhase.BASE, 0, 2),
            phase_factory(TrainingPhase.RECOVERY, 2, 7),
        ]
        assert score_recovery_frequency(phases) == 70


class TestProgressionScore:
    def test_weighted_total(
        self, periodized_block: tuple[WeeklyMetric, ...], phase_factory: PhaseFactory
    ) -> None:
        phases = [
            phase_factory(TrainingPhase.BASE, 0, 6),
            phase_factory(TrainingPhase.BUILD, 6, 4),
            phase_factory(TrainingPhase.TAPER, 10, 2),
        ]
        score = calculate_progression_score(periodized_block, phases)
        assert score.ctl_gain_score == 75
        assert score.recovery_weeks_score == 60
        assert score.overall == 72
