"""Tests for the performance sub-score."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable

from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.personal_record import PersonalRecord
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.scoring.performance import calculate_performance_score

PhaseFactory = Callable[..., DetectedPhase]


def _block_phases(phase_factory: PhaseFactory) -> list[DetectedPhase]:
    return [
        phase_factory(TrainingPhase.BASE, 0, 6),
        phase_factory(TrainingPhase.BUILD, 6, 4),
        phase_factory(TrainingPhase.TAPER, 10, 2),
    ]


class TestPerformanceScore:
    def test_no_records(
        self, phase_factory: PhaseFactory, periodized_block: tuple[WeeklyMetric, ...]
    ) -> None:
        score = calculate_performance_score(_block_phases(phase_factory), [], periodized_block)
        assert score.overall == 70
        correlation = score.correlation
        assert correlation.total_prs == 0
        assert correlation.peak_performance_phase == TrainingPhase.BASE
        assert correlation.effective_phases == ()
        assert correlation.peak_fitness == 64.0

    def test_records_across_phases(
        self,
        phase_factory: PhaseFactory,
        periodized_block: tuple[WeeklyMetric, ...],
        season_prs: tuple[PersonalRecord, ...],
    ) -> None:
        score = calculate_performance_score(
            _block_phases(phase_factory), season_prs, periodized_block
        )
        correlation = score.correlation
        assert correlation.prs_by_phase[TrainingPhase.BASE] == 1
        assert correlation.prs_by_phase[TrainingPhase.TAPER] == 1
        assert correlation.effective_phases == (
            TrainingPhase.BASE,
            TrainingPhase.BUILD,
            TrainingPhase.TAPER,
        )
        assert score.overall == 100

    def test_tie_follows_tally_order(
        self,
        phase_factory: PhaseFactory,
        periodized_block: tuple[WeeklyMetric, ...],
        season_prs: tuple[PersonalRecord, ...],
    ) -> None:
        # One PR each in build and taper: build is tallied first
        score = calculate_performance_score(
            _block_phases(phase_factory), season_prs[1:], periodized_block
        )
        assert score.correlation.peak_performance_phase == TrainingPhase.BUILD

    def test_records_outside_phases_still_count_in_total(
        self,
        phase_factory: PhaseFactory,
        periodized_block: tuple[WeeklyMetric, ...],
        season_prs: tuple[PersonalRecord, ...],
    ) -> None:
        late = PersonalRecord(
            category=season_prs[0].category,
            timestamp=season_prs[0].timestamp + timedelta(weeks=30),
            activity_id=999,
        )
        score = calculate_performance_score(_block_phases(phase_factory), [late], periodized_block)
        assert score.correlation.total_prs == 1
        assert sum(score.correlation.prs_by_phase.values()) == 0
        assert score.overall == 90

    def test_empty_input(self) -> None:
        score = calculate_performance_score([], [], [])
        assert score.overall == 60
        assert score.correlation.peak_fitness == 0.0
