"""Effectiveness scoring of a detected phase sequence."""

from periodization_engine.scoring.balance import calculate_phase_balance
from periodization_engine.scoring.effectiveness import (
    calculate_effectiveness,
    get_grade,
    identify_findings,
)
from periodization_engine.scoring.form_management import calculate_form_management_score
from periodization_engine.scoring.performance import calculate_performance_score
from periodization_engine.scoring.progression import calculate_progression_score
from periodization_engine.scoring.recovery import calculate_recovery_score
from periodization_engine.scoring.structure import calculate_structure_score

__all__ = [
    "calculate_effectiveness",
    "calculate_form_management_score",
    "calculate_performance_score",
    "calculate_phase_balance",
    "calculate_progression_score",
    "calculate_recovery_score",
    "calculate_structure_score",
    "get_grade",
    "identify_findings",
]
