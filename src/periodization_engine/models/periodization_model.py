"""Target periodization model definitions.

The structure scorer uses each model's per-phase typical durations and its
minimum base/build lengths instead of the generic defaults.

References:
    - Bompa & Haff (2009). Periodization: Theory and Methodology of Training.
    - Issurin (2010). New horizons for the methodology and physiology of
      training periodization (block model).
    - Seiler (2010). What is best practice for training intensity and
      duration distribution in endurance athletes? (polarized model)
"""

from __future__ import annotations

from dataclasses import dataclass

from periodization_engine.exceptions import UnknownModelError
from periodization_engine.models.enums import PeriodizationModel, TrainingPhase

_BASE = TrainingPhase.BASE
_BUILD = TrainingPhase.BUILD
_PEAK = TrainingPhase.PEAK
_TAPER = TrainingPhase.TAPER
_RECOVERY = TrainingPhase.RECOVERY


@dataclass(frozen=True)
class DurationRange:
    min_weeks: int
    max_weeks: int


@dataclass(frozen=True)
class TSBRange:
    min_tsb: float
    max_tsb: float


@dataclass(frozen=True)
class PhaseCharacteristics:
    """Typical shape of one phase within a model."""

    typical_duration: DurationRange
    volume_level: str  # "low" | "medium" | "high"
    intensity_level: str  # "low" | "medium" | "high"
    hr_zone_emphasis: tuple[int, ...]
    tsb_range: TSBRange


@dataclass(frozen=True)
class EffectivenessCriteria:
    min_base_phase_weeks: int
    min_build_phase_weeks: int
    min_recovery_weeks: int
    max_volume_increase_per_week: float  # percent
    target_tsb_before_peak: TSBRange


@dataclass(frozen=True)
class PeriodizationModelDefinition:
    model: PeriodizationModel
    name: str
    description: str
    phase_characteristics: dict[TrainingPhase, PhaseCharacteristics]
    typical_progression: tuple[TrainingPhase, ...]
    effectiveness_criteria: EffectivenessCriteria

    def duration_for(self, phase: TrainingPhase) -> DurationRange | None:
        characteristics = self.phase_characteristics.get(phase)
        return characteristics.typical_duration if characteristics else None


def _phase(
    min_weeks: int,
    max_weeks: int,
    volume: str,
    intensity: str,
    zones: tuple[int, ...],
    tsb: tuple[float, float],
) -> PhaseCharacteristics:
    return PhaseCharacteristics(
        typical_duration=DurationRange(min_weeks, max_weeks),
        volume_level=volume,
        intensity_level=intensity,
        hr_zone_emphasis=zones,
        tsb_range=TSBRange(*tsb),
    )


LINEAR_MODEL = PeriodizationModelDefinition(
    model=PeriodizationModel.LINEAR,
    name="Linear Periodization",
    description="Traditional progressive model with distinct phases building from base to peak",
    phase_characteristics={
        _BASE: _phase(8, 16, "high", "low", (1, 2), (-10, 10)),
        _BUILD: _phase(6, 12, "high", "medium", (2, 3), (-15, 5)),
        _PEAK: _phase(2, 4, "medium", "high", (4, 5), (-10, 10)),
        _TAPER: _phase(1, 3, "low", "medium", (3, 4), (10, 25)),
        _RECOVERY: _phase(1, 2, "low", "low", (1, 2), (15, 35)),
    },
    typical_progression=(_BASE, _BUILD, _PEAK, _TAPER, _RECOVERY),
    effectiveness_criteria=EffectivenessCriteria(
        min_base_phase_weeks=8,
        min_build_phase_weeks=6,
        min_recovery_weeks=1,
        max_volume_increase_per_week=10,
        target_tsb_before_peak=TSBRange(10, 25),
    ),
)

UNDULATING_MODEL = PeriodizationModelDefinition(
    model=PeriodizationModel.UNDULATING,
    name="Undulating Periodization",
    description="Non-linear model with frequent volume and intensity variations",
    phase_characteristics={
        _BASE: _phase(4, 8, "medium", "low", (1, 2, 3), (-15, 15)),
        _BUILD: _phase(4, 8, "medium", "medium", (2, 3, 4), (-20, 10)),
        _PEAK: _phase(2, 4, "medium", "high", (3, 4, 5), (-10, 15)),
        _RECOVERY: _phase(1, 1, "low", "low", (1, 2), (10, 30)),
    },
    typical_progression=(_BASE, _BUILD, _RECOVERY, _BUILD, _PEAK, _RECOVERY),
    effectiveness_criteria=EffectivenessCriteria(
        min_base_phase_weeks=4,
        min_build_phase_weeks=4,
        min_recovery_weeks=1,
        max_volume_increase_per_week=15,
        target_tsb_before_peak=TSBRange(5, 20),
    ),
)

BLOCK_MODEL = PeriodizationModelDefinition(
    model=PeriodizationModel.BLOCK,
    name="Block Periodization",
    description="Concentrated training blocks targeting specific adaptations",
    phase_characteristics={
        _BASE: _phase(3, 6, "high", "low", (1, 2), (-15, 5)),
        _BUILD: _phase(3, 6, "medium", "high", (3, 4), (-20, 0)),
        _PEAK: _phase(2, 4, "low", "high", (4, 5), (-10, 10)),
        _RECOVERY: _phase(1, 2, "low", "low", (1, 2), (15, 30)),
    },
    typical_progression=(_BASE, _RECOVERY, _BUILD, _RECOVERY, _PEAK, _RECOVERY),
    effectiveness_criteria=EffectivenessCriteria(
        min_base_phase_weeks=3,
        min_build_phase_weeks=3,
        min_recovery_weeks=1,
        max_volume_increase_per_week=12,
        target_tsb_before_peak=TSBRange(5, 15),
    ),
)

POLARIZED_MODEL = PeriodizationModelDefinition(
    model=PeriodizationModel.POLARIZED,
    name="Polarized Training",
    description="80/20 model with emphasis on low and high intensity, avoiding moderate zones",
    phase_characteristics={
        _BASE: _phase(8, 16, "high", "low", (1, 2), (-10, 10)),
        _BUILD: _phase(6, 12, "high", "medium", (1, 2, 5), (-15, 5)),
        _PEAK: _phase(3, 6, "medium", "medium", (2, 4, 5), (-10, 10)),
        _RECOVERY: _phase(1, 2, "low", "low", (1,), (15, 30)),
    },
    typical_progression=(_BASE, _BUILD, _PEAK, _RECOVERY),
    effectiveness_criteria=EffectivenessCriteria(
        min_base_phase_weeks=8,
        min_build_phase_weeks=6,
        min_recovery_weeks=1,
        max_volume_increase_per_week=10,
        target_tsb_before_peak=TSBRange(10, 20),
    ),
)

PERIODIZATION_MODELS: dict[PeriodizationModel, PeriodizationModelDefinition] = {
    PeriodizationModel.LINEAR: LINEAR_MODEL,
    PeriodizationModel.UNDULATING: UNDULATING_MODEL,
    PeriodizationModel.BLOCK: BLOCK_MODEL,
    PeriodizationModel.POLARIZED: POLARIZED_MODEL,
}


def parse_model(name: str) -> PeriodizationModel:
    """Parse an external model name such as ``"linear"``.

    Raises:
        UnknownModelError: If the name is not one of the four models.
    """
    try:
        return PeriodizationModel[name.strip().upper()]
    except KeyError:
        valid = ", ".join(m.label for m in PeriodizationModel)
        raise UnknownModelError(
            f"Unknown periodization model {name!r} (expected one of: {valid})"
        ) from None


def get_model(model: PeriodizationModel) -> PeriodizationModelDefinition:
    return PERIODIZATION_MODELS[model]
