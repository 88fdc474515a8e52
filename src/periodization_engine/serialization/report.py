"""JSON export of detection and analysis results.

Every output record is a frozen dataclass; export walks it field by field
and produces plain JSON types:

* field names become camelCase, with training-load acronyms upper-cased
  after the first word (``avg_weekly_tss`` -> ``avgWeeklyTSS``,
  ``total_prs`` -> ``totalPRs``);
* enums become their lowercase label, also when used as dict keys;
* dates become ISO-8601 strings and tuples become lists.

All functions are pure (no I/O).
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date
from enum import Enum
from typing import Any

_ACRONYMS = {
    "tss": "TSS",
    "ctl": "CTL",
    "atl": "ATL",
    "tsb": "TSB",
    "hr": "HR",
    "pr": "PR",
    "prs": "PRs",
}


def camel_case(name: str) -> str:
    """``avg_weekly_tss`` -> ``avgWeeklyTSS``."""
    first, *rest = name.split("_")
    return first + "".join(_ACRONYMS.get(part, part.capitalize()) for part in rest)


def _key(key: Any) -> str:
    if isinstance(key, Enum):
        return key.label
    return str(key)


def to_json_dict(value: Any) -> Any:
    """Convert a result record (or any nesting of them) to JSON-ready data."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            camel_case(f.name): to_json_dict(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.label
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {_key(k): to_json_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_dict(v) for v in value]
    return value


def to_json_string(value: Any, indent: int | None = 2) -> str:
    """Serialize a result record to a JSON string."""
    return json.dumps(to_json_dict(value), indent=indent)
