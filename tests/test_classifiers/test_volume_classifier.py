"""Tests for the volume classifier cascade."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.classifiers.volume import VolumeClassifier
from periodization_engine.models.config import DetectionConfig
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.weekly_metric import WeeklyMetric

WeekFactory = Callable[..., WeeklyMetric]


@pytest.fixture
def classifier() -> VolumeClassifier:
    return VolumeClassifier()


def _series(week_factory: WeekFactory, hours: list[float]) -> list[WeeklyMetric]:
    return [week_factory(i, hours=h) for i, h in enumerate(hours)]


class TestVolumeClassifier:
    def test_identity(self, classifier: VolumeClassifier) -> None:
        assert classifier.classifier_id == "volume"
        assert classifier.vote_order == 0

    def test_very_low_volume_is_recovery(
        self, classifier: VolumeClassifier, week_factory: WeekFactory
    ) -> None:
        vote = classifier.classify(_series(week_factory, [2.0]), 0, DetectionConfig())
        assert vote.phase == TrainingPhase.RECOVERY
        assert vote.confidence == 70
        assert vote.classifier_id == "volume"

    def test_first_weeks_have_no_trend(
        self, classifier: VolumeClassifier, week_factory: WeekFactory
    ) -> None:
        weeks = _series(week_factory, [4.0, 5.0])
        votes = classifier.classify_all(weeks, DetectionConfig())
        assert [v.phase for v in votes] == [TrainingPhase.PEAK, TrainingPhase.PEAK]
        assert [v.confidence for v in votes] == [60, 60]

    @pytest.mark.parametrize(
        "hours, phase, confidence",
        [
            ([6.0, 6.0, 4.0], TrainingPhase.TAPER, 75),
            ([4.0, 4.0, 5.0], TrainingPhase.BUILD, 70),
            ([5.0, 5.0, 5.0], TrainingPhase.PEAK, 60),
            ([6.0, 6.0, 8.0], TrainingPhase.BUILD, 75),
            ([9.0, 9.0, 7.0], TrainingPhase.PEAK, 70),
            ([8.0, 8.0, 8.0], TrainingPhase.BUILD, 60),
            ([10.0, 10.0, 12.0], TrainingPhase.BASE, 80),
            ([12.0, 12.0, 12.0], TrainingPhase.BUILD, 60),
            ([14.0, 14.0, 11.0], TrainingPhase.BUILD, 70),
        ],
    )
    def test_cascade_branches(
        self,
        classifier: VolumeClassifier,
        week_factory: WeekFactory,
        hours: list[float],
        phase: TrainingPhase,
        confidence: int,
    ) -> None:
        weeks = _series(week_factory, hours)
        vote = classifier.classify(weeks, len(weeks) - 1, DetectionConfig())
        assert vote.phase == phase
        assert vote.confidence == confidence

    def test_does_not_look_ahead(
        self, classifier: VolumeClassifier, week_factory: WeekFactory
    ) -> None:
        short = _series(week_factory, [6.0, 6.0, 8.0])
        extended = _series(week_factory, [6.0, 6.0, 8.0, 1.0, 20.0])
        config = DetectionConfig()
        assert classifier.classify(short, 2, config) == classifier.classify(extended, 2, config)

    def test_reasoning_mentions_hours(
        self, classifier: VolumeClassifier, week_factory: WeekFactory
    ) -> None:
        vote = classifier.classify(_series(week_factory, [2.0]), 0, DetectionConfig())
        assert "2.0h" in vote.reasoning
