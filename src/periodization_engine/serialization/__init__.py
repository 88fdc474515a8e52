"""Serialization module: JSON export of results and parsing of JSON input."""

from periodization_engine.serialization.parsing import (
    activities_from_json,
    daily_tss_from_json,
    personal_records_from_json,
    weekly_metrics_from_json,
)
from periodization_engine.serialization.report import to_json_dict, to_json_string

__all__ = [
    "activities_from_json",
    "daily_tss_from_json",
    "personal_records_from_json",
    "to_json_dict",
    "to_json_string",
    "weekly_metrics_from_json",
]
