"""Tests for the share of weeks spent in each phase."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.scoring.balance import calculate_phase_balance

PhaseFactory = Callable[..., DetectedPhase]


class TestPhaseBalance:
    def test_ratios_and_score(self, phase_factory: PhaseFactory) -> None:
        balance = calculate_phase_balance(
            [
                phase_factory(TrainingPhase.BASE, 0, 6),
                phase_factory(TrainingPhase.BUILD, 6, 4),
                phase_factory(TrainingPhase.TAPER, 10, 2),
            ]
        )
        assert balance.total_weeks == 12
        assert balance.base_ratio == pytest.approx(50.0)
        assert balance.build_ratio == pytest.approx(100.0 / 3)
        assert balance.taper_ratio == pytest.approx(100.0 / 6)
        assert balance.balance_score == 95
        assert balance.recommendations == ("Incorporate more recovery weeks",)

    def test_ideal_distribution(self, phase_factory: PhaseFactory) -> None:
        balance = calculate_phase_balance(
            [
                phase_factory(TrainingPhase.BASE, 0, 8),
                phase_factory(TrainingPhase.RECOVERY, 8, 2),
                phase_factory(TrainingPhase.BUILD, 10, 6),
                phase_factory(TrainingPhase.TAPER, 16, 4),
            ]
        )
        assert balance.balance_score == 100
        assert balance.recommendations == ()

    def test_repeated_phase_types_add_up(self, phase_factory: PhaseFactory) -> None:
        balance = calculate_phase_balance(
            [
                phase_factory(TrainingPhase.BUILD, 0, 3),
                phase_factory(TrainingPhase.RECOVERY, 3, 1),
                phase_factory(TrainingPhase.BUILD, 4, 4),
            ]
        )
        assert balance.build_ratio == pytest.approx(87.5)
        assert balance.recommendations == ("Increase base phase duration for better foundation",)

    def test_no_phases(self) -> None:
        balance = calculate_phase_balance([])
        assert balance.total_weeks == 0
        assert balance.base_ratio == 0.0
        assert balance.balance_score == 70
        assert len(balance.recommendations) == 3
