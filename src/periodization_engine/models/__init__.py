"""Data models for the periodization engine."""

from periodization_engine.models.analysis import (
    AnalysisPeriod,
    AnalysisSummary,
    PeriodizationAnalysis,
    TrainingWarning,
)
from periodization_engine.models.config import (
    ConfidenceWeights,
    DetectionConfig,
    ScoringConfig,
    TSSThresholds,
    VolumeThresholds,
)
from periodization_engine.models.effectiveness import (
    EffectivenessAnalysis,
    FormManagementScore,
    PerformanceScore,
    PhaseBalance,
    ProgressionScore,
    RecoveryScore,
    StructureScore,
)
from periodization_engine.models.enums import (
    FormZone,
    PeriodizationModel,
    TrainingPhase,
    TrendDirection,
    WarningSeverity,
    WarningType,
)
from periodization_engine.models.personal_record import PersonalRecord, PRCategory
from periodization_engine.models.phase import (
    ConfidenceFactors,
    DetectedPhase,
    FormMetrics,
    HRZoneProfile,
    PerformanceMetrics,
    PhaseVote,
    WeekConsensus,
)
from periodization_engine.models.weekly_metric import (
    ActivityRef,
    HRZoneDistribution,
    WeeklyMetric,
)

__all__ = [
    "ActivityRef",
    "AnalysisPeriod",
    "AnalysisSummary",
    "ConfidenceFactors",
    "ConfidenceWeights",
    "DetectedPhase",
    "DetectionConfig",
    "EffectivenessAnalysis",
    "FormManagementScore",
    "FormMetrics",
    "FormZone",
    "HRZoneDistribution",
    "HRZoneProfile",
    "PRCategory",
    "PerformanceMetrics",
    "PerformanceScore",
    "PeriodizationAnalysis",
    "PeriodizationModel",
    "PersonalRecord",
    "PhaseBalance",
    "PhaseVote",
    "ProgressionScore",
    "RecoveryScore",
    "ScoringConfig",
    "StructureScore",
    "TSSThresholds",
    "TrainingPhase",
    "TrainingWarning",
    "TrendDirection",
    "VolumeThresholds",
    "WarningSeverity",
    "WarningType",
    "WeekConsensus",
    "WeeklyMetric",
]
