"""Enumerations and default thresholds for the periodization engine.

Thresholds follow the Coggan/Allen Performance Management Chart conventions
(CTL/ATL/TSB) and classic macrocycle periodization (Bompa & Haff 2009).
The pipeline reads these only through the config objects in
``periodization_engine.models.config``; the values here are the defaults.
"""

from __future__ import annotations

from enum import IntEnum, auto


class TrainingPhase(IntEnum):
    """Macrocycle training phases recognised by the detector.

    Follows Bompa & Haff (2009) periodization, with an explicit recovery
    phase and a low-confidence transition phase for weeks without data.
    """

    BASE = auto()
    BUILD = auto()
    PEAK = auto()
    TAPER = auto()
    RECOVERY = auto()
    TRANSITION = auto()

    @property
    def label(self) -> str:
        """Lowercase external name, e.g. ``"base"``."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> TrainingPhase:
        return cls[label.strip().upper()]


class TrendDirection(IntEnum):
    """Direction of a metric over a window of weeks."""

    INCREASING = auto()
    STABLE = auto()
    DECREASING = auto()

    @property
    def label(self) -> str:
        return self.name.lower()


class FormZone(IntEnum):
    """Form (TSB) zones, most fatigued first."""

    OVERREACHED = auto()
    FATIGUED = auto()
    PRODUCTIVE_TRAINING = auto()
    MAINTENANCE = auto()
    OPTIMAL_RACE = auto()
    FRESH = auto()

    @property
    def label(self) -> str:
        return self.name.lower()


class PeriodizationModel(IntEnum):
    """Target periodization models an athlete can be scored against."""

    LINEAR = auto()
    UNDULATING = auto()
    BLOCK = auto()
    POLARIZED = auto()

    @property
    def label(self) -> str:
        return self.name.lower()


class WarningSeverity(IntEnum):
    """Warning severity, lower value = more urgent (sort order)."""

    CRITICAL = 0
    WARNING = 1
    INFO = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class WarningType(IntEnum):
    """Categories of training warnings."""

    RAPID_VOLUME_INCREASE = auto()
    CHRONIC_FATIGUE = auto()
    OVERREACHING = auto()
    INSUFFICIENT_RECOVERY = auto()
    DETRAINING = auto()
    MONOTONOUS_TRAINING = auto()
    MISSING_BASE_PHASE = auto()
    INADEQUATE_TAPER = auto()
    POOR_PHASE_BALANCE = auto()

    @property
    def label(self) -> str:
        return self.name.lower()


# ---------------------------------------------------------------------------
# Training stress (Coggan & Allen 2010, Performance Management Chart)
# ---------------------------------------------------------------------------

CTL_TIME_CONSTANT: int = 42  # Chronic training load ("fitness"), days
ATL_TIME_CONSTANT: int = 7  # Acute training load ("fatigue"), days
TRAINING_STRESS_DECIMALS: int = 1
DAYS_PER_WEEK: int = 7

# ---------------------------------------------------------------------------
# Phase detection defaults
# ---------------------------------------------------------------------------

DEFAULT_MIN_PHASE_WEEKS: int = 2

# Weekly training volume bands, hours/week
VOLUME_LOW_HOURS: float = 3.0
VOLUME_MEDIUM_HOURS: float = 6.0
VOLUME_HIGH_HOURS: float = 10.0

# Weekly TSS bands
TSS_LOW: float = 150.0
TSS_MEDIUM: float = 300.0
TSS_HIGH: float = 500.0

# Consensus vote weights per classifier
VOLUME_WEIGHT: float = 0.30
INTENSITY_WEIGHT: float = 0.40
TSS_WEIGHT: float = 0.30

# Causal look-back window for per-week trends
TREND_WINDOW_WEEKS: int = 4
MIN_TREND_WEEKS: int = 2
VOLUME_TREND_THRESHOLD_PCT: float = 10.0  # % change vs look-back average
CTL_TREND_THRESHOLD: float = 3.0  # absolute CTL points vs look-back average

# Segment-level trend thresholds (first half vs second half)
SEGMENT_VOLUME_TREND_PCT: float = 10.0
SEGMENT_TSS_TREND_PCT: float = 10.0
SEGMENT_TSB_TREND: float = 3.0

# A phase reaches full duration confidence at this many weeks
FULL_CONFIDENCE_WEEKS: int = 4

# Segment confidence blend (fixed, independent of the vote weights)
SEGMENT_VOLUME_WEIGHT: float = 0.30
SEGMENT_INTENSITY_WEIGHT: float = 0.40
SEGMENT_TSS_WEIGHT: float = 0.30

DETECTION_METHOD: str = "hybrid"

# Legal phase-to-phase transitions (Bompa & Haff 2009, ch. 5)
VALID_TRANSITIONS: dict[TrainingPhase, frozenset[TrainingPhase]] = {
    TrainingPhase.BASE: frozenset(
        {TrainingPhase.BUILD, TrainingPhase.RECOVERY, TrainingPhase.TRANSITION}
    ),
    TrainingPhase.BUILD: frozenset(
        {TrainingPhase.PEAK, TrainingPhase.TAPER, TrainingPhase.RECOVERY, TrainingPhase.BUILD}
    ),
    TrainingPhase.PEAK: frozenset(
        {TrainingPhase.TAPER, TrainingPhase.RECOVERY, TrainingPhase.TRANSITION}
    ),
    TrainingPhase.TAPER: frozenset(
        {TrainingPhase.PEAK, TrainingPhase.RECOVERY, TrainingPhase.TRANSITION}
    ),
    TrainingPhase.RECOVERY: frozenset(
        {TrainingPhase.BASE, TrainingPhase.BUILD, TrainingPhase.TRANSITION}
    ),
    TrainingPhase.TRANSITION: frozenset({TrainingPhase.BASE, TrainingPhase.BUILD}),
}

# ---------------------------------------------------------------------------
# Form zones (TSB), before CTL scaling
# ---------------------------------------------------------------------------

FORM_OVERREACHED_MAX: float = -30.0
FORM_FATIGUED_MAX: float = -20.0
FORM_PRODUCTIVE_MAX: float = -5.0
FORM_MAINTENANCE_MAX: float = 10.0
FORM_OPTIMAL_RACE_MAX: float = 25.0

# CTL bands that scale the zone thresholds
FORM_LOW_FITNESS_CTL: float = 40.0
FORM_HIGH_FITNESS_CTL: float = 80.0
FORM_LOW_FITNESS_FACTOR: float = 0.8
FORM_HIGH_FITNESS_FACTOR: float = 1.2

# ---------------------------------------------------------------------------
# Effectiveness scoring
# ---------------------------------------------------------------------------

OVERREACHING_TSB: float = -30.0
ADEQUATE_RECOVERY_TSB: float = 15.0
RAPID_VOLUME_INCREASE_PCT: float = 15.0  # Gabbett (2016) ~10-15 %/week ceiling
SAFE_VOLUME_INCREASE_PCT: float = 10.0

DEFAULT_MIN_PHASE_LENGTH: int = 2
DEFAULT_MAX_PHASE_LENGTH: int = 16
DEFAULT_MIN_BASE_WEEKS: int = 6
DEFAULT_MIN_BUILD_WEEKS: int = 4
MIN_WEEKS_FOR_RECOVERY_CHECK: int = 8
WEEKS_PER_EXPECTED_RECOVERY: int = 4

# Overall score weights (sum to 1.0)
STRUCTURE_WEIGHT: float = 0.18
PROGRESSION_WEIGHT: float = 0.22
RECOVERY_WEIGHT: float = 0.22
PERFORMANCE_WEIGHT: float = 0.26
FORM_MANAGEMENT_WEIGHT: float = 0.12

# Overall score weights when no phase carries form data
STRUCTURE_WEIGHT_NO_FORM: float = 0.20
PROGRESSION_WEIGHT_NO_FORM: float = 0.25
RECOVERY_WEIGHT_NO_FORM: float = 0.25
PERFORMANCE_WEIGHT_NO_FORM: float = 0.30

# Optimal average TSB per phase, used for form-management scoring
OPTIMAL_TSB_BY_PHASE: dict[TrainingPhase, float] = {
    TrainingPhase.BASE: 0.0,
    TrainingPhase.BUILD: -10.0,
    TrainingPhase.PEAK: 15.0,
    TrainingPhase.TAPER: 18.0,
    TrainingPhase.RECOVERY: 20.0,
    TrainingPhase.TRANSITION: 10.0,
}

# Letter grades, highest first: (minimum score, grade)
GRADE_BANDS: tuple[tuple[int, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (85, "B+"),
    (80, "B"),
    (75, "C+"),
    (70, "C"),
    (60, "D"),
)
FAILING_GRADE: str = "F"

# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------

VOLUME_SPIKE_CRITICAL_PCT: float = 25.0
VOLUME_SPIKE_WARNING_PCT: float = 15.0
CHRONIC_FATIGUE_CRITICAL_WEEKS: int = 8
CHRONIC_FATIGUE_WARNING_WEEKS: int = 6
NO_RECOVERY_CRITICAL_WEEKS: int = 12
RECOVERY_INTERVAL_WARNING_WEEKS: float = 6.0
RECOVERY_INTERVAL_MIN_WEEKS: int = 16
DETRAINING_WEEKS: int = 4
DETRAINING_TSB: float = 25.0
MONOTONY_WEEKS: int = 8
MONOTONY_CV_PCT: float = 10.0
MONOTONY_MIN_HOURS: float = 3.0
MAX_PEAK_WEEKS: int = 4
POOR_BALANCE_SCORE: float = 60.0
PROLONGED_OVERREACHING_DAYS: int = 10
SEVERE_OVERREACHING_DAYS: int = 21
EXTENDED_FRESH_PCT: float = 70.0
EXTENDED_FRESH_MIN_WEEKS: int = 2
BUILD_END_FATIGUE_TSB: float = -15.0
BUILD_START_FATIGUE_TSB: float = -10.0
MIN_TAPER_TSB_RISE: float = 3.0
FAILED_TAPER_TSB_DROP: float = -5.0

# Minimum history the analysis command accepts
MIN_ANALYSIS_WEEKS: int = 8
