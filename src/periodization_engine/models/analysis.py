"""Full periodization analysis: phases, score, warnings and summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from periodization_engine.models.effectiveness import EffectivenessAnalysis
from periodization_engine.models.enums import TrainingPhase, WarningSeverity, WarningType
from periodization_engine.models.phase import DetectedPhase


@dataclass(frozen=True)
class TrainingWarning:
    """A detected training risk with suggested actions."""

    type: WarningType
    severity: WarningSeverity
    title: str
    description: str
    detected_at: date | None = None
    metrics: dict[str, Any] = field(default_factory=dict)
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisPeriod:
    start_date: date
    end_date: date
    total_weeks: int
    data_quality: str  # "excellent" | "good" | "fair" | "insufficient"


@dataclass(frozen=True)
class AnalysisSummary:
    total_activities: int
    total_volume: float  # hours
    total_distance: float  # km
    avg_weekly_tss: float
    fitness_gain: float
    total_prs: int
    primary_phase: TrainingPhase | None


@dataclass(frozen=True)
class PeriodizationAnalysis:
    period: AnalysisPeriod
    phases: tuple[DetectedPhase, ...]
    effectiveness: EffectivenessAnalysis
    warnings: tuple[TrainingWarning, ...]
    summary: AnalysisSummary
