"""Tests for training-risk warnings."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.models.enums import TrainingPhase, WarningSeverity, WarningType
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.scoring.effectiveness import calculate_effectiveness
from periodization_engine.training_warnings import (
    detect_fatigue_warnings,
    detect_form_warnings,
    detect_monotony_warnings,
    detect_recovery_warnings,
    detect_structure_warnings,
    detect_volume_warnings,
    detect_warnings,
)

WeekFactory = Callable[..., WeeklyMetric]
PhaseFactory = Callable[..., DetectedPhase]


def _tsb_weeks(week_factory: WeekFactory, tsb: list[float]) -> list[WeeklyMetric]:
    return [week_factory(i, tsb=v) for i, v in enumerate(tsb)]


class TestVolumeWarnings:
    def test_spike_severities(self, week_factory: WeekFactory) -> None:
        weeks = [
            week_factory(0, hours=6.0),
            week_factory(1, hours=8.0),  # +33 %
            week_factory(2, hours=9.5),  # +18.75 %
            week_factory(3, hours=10.0),  # +5 %
        ]
        warnings = detect_volume_warnings(weeks)
        assert [w.severity for w in warnings] == [WarningSeverity.CRITICAL, WarningSeverity.WARNING]
        assert warnings[0].detected_at == weeks[1].week_start
        assert warnings[0].description.startswith("Training volume increased by 33%")
        assert warnings[1].title == "High Volume Increase"

    def test_boundaries_are_exclusive(self, week_factory: WeekFactory) -> None:
        weeks = [week_factory(0, hours=4.0), week_factory(1, hours=5.0)]  # exactly +25 %
        warnings = detect_volume_warnings(weeks)
        assert [w.severity for w in warnings] == [WarningSeverity.WARNING]

    def test_zero_previous_week_is_skipped(self, week_factory: WeekFactory) -> None:
        weeks = [week_factory(0, hours=0.0), week_factory(1, hours=8.0)]
        assert detect_volume_warnings(weeks) == []


class TestFatigueWarnings:
    def test_long_negative_run_is_critical(self, week_factory: WeekFactory) -> None:
        weeks = _tsb_weeks(week_factory, [5.0] + [-5.0] * 8 + [2.0])
        warnings = detect_fatigue_warnings(weeks)
        assert len(warnings) == 1
        assert warnings[0].type == WarningType.CHRONIC_FATIGUE
        assert warnings[0].severity == WarningSeverity.CRITICAL
        assert warnings[0].detected_at == weeks[1].week_start
        assert warnings[0].metrics == {"consecutiveWeeks": 8}

    def test_six_week_run_is_a_warning(self, week_factory: WeekFactory) -> None:
        weeks = _tsb_weeks(week_factory, [-5.0] * 6 + [1.0])
        warnings = detect_fatigue_warnings(weeks)
        assert [w.severity for w in warnings] == [WarningSeverity.WARNING]
        assert warnings[0].title == "Extended Negative TSB"

    def test_run_open_at_end_is_reported(self, week_factory: WeekFactory) -> None:
        weeks = _tsb_weeks(week_factory, [3.0] + [-8.0] * 7)
        warnings = detect_fatigue_warnings(weeks)
        assert [w.type for w in warnings] == [WarningType.CHRONIC_FATIGUE]

    def test_overreaching_weeks(self, week_factory: WeekFactory) -> None:
        weeks = _tsb_weeks(week_factory, [0.0, -32.0, 4.0, -40.0])
        warnings = detect_fatigue_warnings(weeks)
        assert [w.type for w in warnings] == [WarningType.OVERREACHING]
        assert warnings[0].metrics == {"overreachingWeeks": 2, "minTSB": -40.0}
        assert warnings[0].detected_at == weeks[1].week_start


class TestRecoveryWarnings:
    def test_no_recovery_in_twelve_weeks(
        self, week_factory: WeekFactory, phase_factory: PhaseFactory
    ) -> None:
        weeks = [week_factory(i) for i in range(12)]
        phases = [phase_factory(TrainingPhase.BUILD, 0, 12)]
        warnings = detect_recovery_warnings(weeks, phases)
        assert [w.severity for w in warnings] == [WarningSeverity.CRITICAL]
        assert warnings[0].description == "12 weeks of training without recovery phase"

    def test_infrequent_recovery(
        self, week_factory: WeekFactory, phase_factory: PhaseFactory
    ) -> None:
        weeks = [week_factory(i) for i in range(20)]
        phases = [phase_factory(TrainingPhase.BUILD, 0, 18), phase_factory(TrainingPhase.RECOVERY, 18, 2)]
        warnings = detect_recovery_warnings(weeks, phases)
        assert [w.title for w in warnings] == ["Infrequent Recovery Periods"]
        assert warnings[0].metrics["avgInterval"] == pytest.approx(20.0)

    def test_detraining(self, week_factory: WeekFactory) -> None:
        weeks = [week_factory(i, tss=300.0, tsb=0.0) for i in range(4)]
        weeks += [week_factory(i, tss=80.0, tsb=30.0) for i in range(4, 8)]
        warnings = detect_recovery_warnings(weeks, [])
        assert [w.type for w in warnings] == [WarningType.DETRAINING]
        assert warnings[0].detected_at == weeks[4].week_start

    def test_empty_series(self) -> None:
        assert detect_recovery_warnings([], []) == []


class TestMonotonyWarnings:
    def test_flat_volume(self, steady_block: tuple[WeeklyMetric, ...]) -> None:
        warnings = detect_monotony_warnings(steady_block)
        assert len(warnings) == 1
        assert warnings[0].severity == WarningSeverity.INFO
        assert warnings[0].metrics["coefficientOfVariation"] == pytest.approx(0.0)

    def test_varied_volume(self, periodized_block: tuple[WeeklyMetric, ...]) -> None:
        assert detect_monotony_warnings(periodized_block) == []

    def test_low_volume_is_not_monotony(self, week_factory: WeekFactory) -> None:
        weeks = [week_factory(i, hours=2.0) for i in range(8)]
        assert detect_monotony_warnings(weeks) == []

    def test_short_history(self, week_factory: WeekFactory) -> None:
        assert detect_monotony_warnings([week_factory(i, hours=7.0) for i in range(3)]) == []


class TestStructureWarnings:
    def test_missing_base_and_extended_peak(
        self, phase_factory: PhaseFactory, week_factory: WeekFactory
    ) -> None:
        phases = [phase_factory(TrainingPhase.BUILD, 0, 4), phase_factory(TrainingPhase.PEAK, 4, 6)]
        weeks = [week_factory(i) for i in range(10)]
        warnings = detect_structure_warnings(phases, calculate_effectiveness(phases, weeks))
        assert [w.type for w in warnings] == [
            WarningType.MISSING_BASE_PHASE,
            WarningType.INADEQUATE_TAPER,
        ]
        assert warnings[1].detected_at == phases[1].start_date

    def test_balance_score_never_drops_below_start(
        self, phase_factory: PhaseFactory, week_factory: WeekFactory
    ) -> None:
        phases = [phase_factory(TrainingPhase.TRANSITION, 0, 8)]
        weeks = [week_factory(i) for i in range(8)]
        report = calculate_effectiveness(phases, weeks)
        assert report.phase_balance.balance_score == 70
        assert detect_structure_warnings(phases, report) == []


class TestFormWarnings:
    def test_prolonged_overreaching(self, phase_factory: PhaseFactory) -> None:
        phases = [
            phase_factory(TrainingPhase.BUILD, 0, 4, avg_tsb=-28.0, overreaching_days=14),
            phase_factory(TrainingPhase.BUILD, 4, 4, avg_tsb=-33.0, overreaching_days=21),
        ]
        warnings = [w for w in detect_form_warnings(phases) if w.type == WarningType.OVERREACHING]
        assert [w.severity for w in warnings] == [WarningSeverity.WARNING, WarningSeverity.CRITICAL]

    def test_extended_fresh(self, phase_factory: PhaseFactory) -> None:
        phases = [phase_factory(TrainingPhase.RECOVERY, 0, 3, avg_tsb=28.0, fresh_pct=100.0)]
        warnings = detect_form_warnings(phases)
        assert [w.title for w in warnings] == ["Extended Fresh Period - Detraining Risk"]
        assert warnings[0].metrics["daysInFreshZone"] == 21

    def test_build_to_build_without_recovery(self, phase_factory: PhaseFactory) -> None:
        phases = [
            phase_factory(TrainingPhase.BUILD, 0, 4, avg_tsb=-12.0, min_tsb=-18.0),
            phase_factory(TrainingPhase.BUILD, 4, 4, avg_tsb=-14.0),
        ]
        warnings = detect_form_warnings(phases)
        assert [w.type for w in warnings] == [WarningType.INSUFFICIENT_RECOVERY]
        assert warnings[0].metrics["tsbRecovery"] == pytest.approx(4.0)

    @pytest.mark.parametrize(
        "taper_tsb, severity",
        [(-12.0, WarningSeverity.CRITICAL), (-9.0, WarningSeverity.WARNING)],
    )
    def test_poor_taper(
        self, phase_factory: PhaseFactory, taper_tsb: float, severity: WarningSeverity
    ) -> None:
        phases = [
            phase_factory(TrainingPhase.BUILD, 0, 4, avg_tsb=-6.0),
            phase_factory(TrainingPhase.TAPER, 4, 2, avg_tsb=taper_tsb),
        ]
        warnings = detect_form_warnings(phases)
        assert [w.severity for w in warnings] == [severity]
        assert warnings[0].type == WarningType.INADEQUATE_TAPER

    def test_no_form_data(self, phase_factory: PhaseFactory) -> None:
        assert detect_form_warnings([phase_factory(TrainingPhase.BASE, 0, 4, avg_tsb=None)]) == []


class TestDetectWarnings:
    def test_sorted_by_severity(
        self, phase_factory: PhaseFactory, periodized_block: tuple[WeeklyMetric, ...]
    ) -> None:
        phases = [
            phase_factory(TrainingPhase.BASE, 0, 6, avg_tsb=-5.0),
            phase_factory(TrainingPhase.BUILD, 6, 4, avg_tsb=-17.75, min_tsb=-20.0),
            phase_factory(TrainingPhase.TAPER, 10, 2, avg_tsb=15.5),
        ]
        report = calculate_effectiveness(phases, periodized_block)
        warnings = detect_warnings(periodized_block, phases, report)
        assert [(w.type, w.severity) for w in warnings] == [
            (WarningType.CHRONIC_FATIGUE, WarningSeverity.CRITICAL),
            (WarningType.INSUFFICIENT_RECOVERY, WarningSeverity.CRITICAL),
            (WarningType.RAPID_VOLUME_INCREASE, WarningSeverity.WARNING),
            (WarningType.RAPID_VOLUME_INCREASE, WarningSeverity.WARNING),
            (WarningType.RAPID_VOLUME_INCREASE, WarningSeverity.WARNING),
        ]
        assert warnings[0].metrics == {"consecutiveWeeks": 10}
