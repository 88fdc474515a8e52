"""Per-week votes and the detected phases built from them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from periodization_engine.models.enums import (
    DETECTION_METHOD,
    FormZone,
    TrainingPhase,
    TrendDirection,
)


@dataclass(frozen=True)
class PhaseVote:
    """One classifier's opinion about one week.

    Attributes:
        phase: Phase the classifier believes the week belongs to.
        confidence: 0-100.
        reasoning: Short human-readable explanation with the numbers used.
        classifier_id: Identifier of the classifier that cast the vote.
    """

    phase: TrainingPhase
    confidence: int
    reasoning: str
    classifier_id: str = ""


@dataclass(frozen=True)
class WeekConsensus:
    """Winning label for one week after weighted voting."""

    phase: TrainingPhase
    score: float
    votes: tuple[PhaseVote, ...]
    notes: str = ""

    def vote_from(self, classifier_id: str) -> PhaseVote | None:
        for vote in self.votes:
            if vote.classifier_id == classifier_id:
                return vote
        return None


@dataclass(frozen=True)
class ConfidenceFactors:
    """Breakdown of a phase's confidence (each 0-100)."""

    volume: int
    intensity: int
    tss: int
    duration: int


@dataclass(frozen=True)
class PRDetail:
    category_id: str
    category_name: str
    activity_id: int
    date: date
    improvement: float = 0.0


@dataclass(frozen=True)
class PerformanceMetrics:
    """Personal records achieved inside a phase's date range."""

    prs_achieved: int
    pr_details: tuple[PRDetail, ...] = ()
    efficiency_trend: TrendDirection = TrendDirection.STABLE


@dataclass(frozen=True)
class HRZoneProfile:
    """Average HR-zone distribution across the weeks of a phase.

    ``dominant_zones`` holds the two zone numbers (1-5) with the highest
    average share, highest first.
    """

    zone1: float
    zone2: float
    zone3: float
    zone4: float
    zone5: float
    dominant_zones: tuple[int, ...]


@dataclass(frozen=True)
class FormZoneDistribution:
    """Percentage of a phase's weeks that fell into each form zone."""

    overreached: float = 0.0
    fatigued: float = 0.0
    productive_training: float = 0.0
    maintenance: float = 0.0
    optimal_race: float = 0.0
    fresh: float = 0.0

    def share(self, zone: FormZone) -> float:
        return getattr(self, zone.label)


@dataclass(frozen=True)
class FormMetrics:
    """TSB statistics for a phase."""

    avg_tsb: float
    min_tsb: float
    max_tsb: float
    tsb_trend: TrendDirection
    zone_distribution: FormZoneDistribution
    dominant_zone: FormZone
    overreaching_days: int


@dataclass(frozen=True)
class DetectedPhase:
    """A maximal contiguous run of weeks sharing one training-phase label.

    Volume figures are hours/week, distance is km/week. ``volume_change``
    and the trends compare the first and second half of the phase.
    """

    phase: TrainingPhase
    start_date: date
    end_date: date
    duration_weeks: int
    avg_weekly_volume: float
    avg_weekly_distance: float
    volume_trend: TrendDirection
    volume_change: float
    avg_weekly_tss: float
    tss_trend: TrendDirection
    avg_ctl: float
    ctl_gain: float
    avg_atl: float
    avg_tsb: float
    confidence: int
    confidence_factors: ConfidenceFactors
    detection_method: str = DETECTION_METHOD
    performance_metrics: PerformanceMetrics | None = None
    hr_zone_profile: HRZoneProfile | None = None
    form_metrics: FormMetrics | None = None

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
