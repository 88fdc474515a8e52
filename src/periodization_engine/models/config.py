"""Detection and scoring configuration.

Every threshold the pipeline uses is read from these objects, so detection
and scoring are pure functions of (input, config). Defaults come from
``periodization_engine.models.enums``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from periodization_engine.exceptions import ConfigurationError
from periodization_engine.models.enums import (
    DEFAULT_MAX_PHASE_LENGTH,
    DEFAULT_MIN_BASE_WEEKS,
    DEFAULT_MIN_BUILD_WEEKS,
    DEFAULT_MIN_PHASE_LENGTH,
    DEFAULT_MIN_PHASE_WEEKS,
    INTENSITY_WEIGHT,
    OPTIMAL_TSB_BY_PHASE,
    TREND_WINDOW_WEEKS,
    TSS_HIGH,
    TSS_LOW,
    TSS_MEDIUM,
    TSS_WEIGHT,
    VALID_TRANSITIONS,
    VOLUME_HIGH_HOURS,
    VOLUME_LOW_HOURS,
    VOLUME_MEDIUM_HOURS,
    VOLUME_WEIGHT,
    PeriodizationModel,
    TrainingPhase,
)
from periodization_engine.models.periodization_model import (
    PeriodizationModelDefinition,
    get_model,
    parse_model,
)

TransitionTable = Mapping[TrainingPhase, frozenset[TrainingPhase]]


def _check_ordered_bands(name: str, low: float, medium: float, high: float) -> None:
    if low < 0 or not (low <= medium <= high):
        raise ConfigurationError(
            f"{name} must satisfy 0 <= low <= medium <= high, "
            f"got low={low}, medium={medium}, high={high}"
        )


@dataclass(frozen=True)
class VolumeThresholds:
    """Weekly volume bands in hours."""

    low: float = VOLUME_LOW_HOURS
    medium: float = VOLUME_MEDIUM_HOURS
    high: float = VOLUME_HIGH_HOURS

    def __post_init__(self) -> None:
        _check_ordered_bands("volume thresholds", self.low, self.medium, self.high)


@dataclass(frozen=True)
class TSSThresholds:
    """Weekly TSS bands."""

    low: float = TSS_LOW
    medium: float = TSS_MEDIUM
    high: float = TSS_HIGH

    def __post_init__(self) -> None:
        _check_ordered_bands("TSS thresholds", self.low, self.medium, self.high)


@dataclass(frozen=True)
class ConfidenceWeights:
    """Consensus weight per classifier (need not sum to 1)."""

    volume: float = VOLUME_WEIGHT
    intensity: float = INTENSITY_WEIGHT
    tss: float = TSS_WEIGHT

    def __post_init__(self) -> None:
        for name in ("volume", "intensity", "tss"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"confidence weight {name!r} must be >= 0")

    def weight_for(self, classifier_id: str) -> float:
        if classifier_id not in ("volume", "intensity", "tss"):
            raise ConfigurationError(f"No confidence weight for classifier {classifier_id!r}")
        return getattr(self, classifier_id)


def _default_transitions() -> dict[TrainingPhase, frozenset[TrainingPhase]]:
    return dict(VALID_TRANSITIONS)


@dataclass(frozen=True)
class DetectionConfig:
    """Options for the phase detector.

    Attributes:
        min_phase_weeks: Shortest run of weeks that stands as its own phase.
        volume_thresholds: Volume bands for the volume classifier.
        tss_thresholds: TSS bands for the TSS classifier.
        confidence_weights: Consensus weight per classifier.
        trend_window_weeks: Look-back used for per-week trends (at most 4).
        transitions: Legal phase-to-phase transitions.
        include_form_metrics: Attach TSB form statistics to each phase.
    """

    min_phase_weeks: int = DEFAULT_MIN_PHASE_WEEKS
    volume_thresholds: VolumeThresholds = field(default_factory=VolumeThresholds)
    tss_thresholds: TSSThresholds = field(default_factory=TSSThresholds)
    confidence_weights: ConfidenceWeights = field(default_factory=ConfidenceWeights)
    trend_window_weeks: int = TREND_WINDOW_WEEKS
    transitions: TransitionTable = field(default_factory=_default_transitions)
    include_form_metrics: bool = True

    def __post_init__(self) -> None:
        if self.min_phase_weeks < 1:
            raise ConfigurationError("min_phase_weeks must be at least 1")
        if not 1 <= self.trend_window_weeks <= TREND_WINDOW_WEEKS:
            raise ConfigurationError(
                f"trend_window_weeks must be between 1 and {TREND_WINDOW_WEEKS}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DetectionConfig:
        """Build a config from the external camelCase option names.

        Recognised keys: ``minPhaseWeeks``, ``volumeThresholds``,
        ``intensityThresholds`` (``lowTSS``/``mediumTSS``/``highTSS``),
        ``confidenceWeights`` and ``includeFormMetrics``. Unknown keys are
        ignored; missing keys keep their defaults.
        """
        kwargs: dict[str, Any] = {}
        try:
            if "minPhaseWeeks" in data:
                kwargs["min_phase_weeks"] = int(data["minPhaseWeeks"])
            if "volumeThresholds" in data:
                v = data["volumeThresholds"]
                defaults = VolumeThresholds()
                kwargs["volume_thresholds"] = VolumeThresholds(
                    low=float(v.get("low", defaults.low)),
                    medium=float(v.get("medium", defaults.medium)),
                    high=float(v.get("high", defaults.high)),
                )
            if "intensityThresholds" in data:
                t = data["intensityThresholds"]
                defaults_tss = TSSThresholds()
                kwargs["tss_thresholds"] = TSSThresholds(
                    low=float(t.get("lowTSS", defaults_tss.low)),
                    medium=float(t.get("mediumTSS", defaults_tss.medium)),
                    high=float(t.get("highTSS", defaults_tss.high)),
                )
            if "confidenceWeights" in data:
                w = data["confidenceWeights"]
                defaults_w = ConfidenceWeights()
                kwargs["confidence_weights"] = ConfidenceWeights(
                    volume=float(w.get("volume", defaults_w.volume)),
                    intensity=float(w.get("intensity", defaults_w.intensity)),
                    tss=float(w.get("tss", defaults_w.tss)),
                )
            if "includeFormMetrics" in data:
                kwargs["include_form_metrics"] = bool(data["includeFormMetrics"])
        except (TypeError, ValueError, AttributeError) as exc:
            raise ConfigurationError(f"Invalid detection configuration: {exc}") from exc
        return cls(**kwargs)


@dataclass(frozen=True)
class CTLGainBand:
    """Score awarded when weeks-per-CTL-point is below (or at) ``upper``."""

    upper: float
    score: int
    inclusive: bool = False

    def matches(self, weeks_per_point: float) -> bool:
        if self.inclusive:
            return weeks_per_point <= self.upper
        return weeks_per_point < self.upper


# Optimal gain is ~1.25-2 CTL points/week (Coggan & Allen 2010)
DEFAULT_CTL_GAIN_BANDS: tuple[CTLGainBand, ...] = (
    CTLGainBand(0.25, 40),  # > 4 points/week, too fast
    CTLGainBand(0.5, 75),
    CTLGainBand(0.8, 95, inclusive=True),  # optimal
    CTLGainBand(1.0, 90, inclusive=True),
    CTLGainBand(2.0, 80, inclusive=True),
    CTLGainBand(3.0, 70, inclusive=True),
)
CTL_LOSS_SCORE: int = 30
CTL_MAINTENANCE_SCORE: int = 50
CTL_SLOW_GAIN_SCORE: int = 60


def _default_optimal_tsb() -> dict[TrainingPhase, float]:
    return dict(OPTIMAL_TSB_BY_PHASE)


@dataclass(frozen=True)
class ScoringConfig:
    """Options for the effectiveness scorer.

    Attributes:
        target_model: Optional model whose phase durations and minimum
            base/build lengths replace the generic defaults.
        transitions: Legal phase-to-phase transitions.
        ctl_gain_bands: Banded lookup on weeks per CTL point gained.
        optimal_tsb: Target average TSB per phase for form management.
    """

    target_model: PeriodizationModel | None = None
    transitions: TransitionTable = field(default_factory=_default_transitions)
    ctl_gain_bands: tuple[CTLGainBand, ...] = DEFAULT_CTL_GAIN_BANDS
    optimal_tsb: Mapping[TrainingPhase, float] = field(default_factory=_default_optimal_tsb)
    min_phase_length: int = DEFAULT_MIN_PHASE_LENGTH
    max_phase_length: int = DEFAULT_MAX_PHASE_LENGTH
    min_base_weeks: int = DEFAULT_MIN_BASE_WEEKS
    min_build_weeks: int = DEFAULT_MIN_BUILD_WEEKS

    def __post_init__(self) -> None:
        if self.min_phase_length > self.max_phase_length:
            raise ConfigurationError("min_phase_length must not exceed max_phase_length")

    @property
    def model(self) -> PeriodizationModelDefinition | None:
        return get_model(self.target_model) if self.target_model is not None else None

    def phase_length_bounds(self, phase: TrainingPhase) -> tuple[int, int]:
        """(min, max) weeks for a phase, from the target model when it defines one."""
        model = self.model
        duration = model.duration_for(phase) if model else None
        if duration is None:
            return self.min_phase_length, self.max_phase_length
        return (
            duration.min_weeks or self.min_phase_length,
            duration.max_weeks or self.max_phase_length,
        )

    def min_base_phase_weeks(self) -> int:
        model = self.model
        if model and model.effectiveness_criteria.min_base_phase_weeks:
            return model.effectiveness_criteria.min_base_phase_weeks
        return self.min_base_weeks

    def min_build_phase_weeks(self) -> int:
        model = self.model
        if model and model.effectiveness_criteria.min_build_phase_weeks:
            return model.effectiveness_criteria.min_build_phase_weeks
        return self.min_build_weeks

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ScoringConfig:
        """Build a config from external options; only ``targetModel`` is read.

        Raises:
            UnknownModelError: If ``targetModel`` names no known model.
        """
        target = data.get("targetModel")
        if not target:
            return cls()
        return cls(target_model=parse_model(str(target)))
