"""Parse JSON input records into engine models.

Accepts the camelCase records a fitness-data pipeline produces: weekly
metrics, daily TSS entries, Garmin-style activity summaries and personal
records. Malformed records raise InvalidInputError carrying the index of
the offending record.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, timedelta
from typing import Any, TypeVar

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.models.enums import DAYS_PER_WEEK
from periodization_engine.models.personal_record import PersonalRecord, PRCategory
from periodization_engine.models.weekly_metric import (
    ActivityRef,
    HRZoneDistribution,
    WeeklyMetric,
)

T = TypeVar("T")

_HR_ZONE_KEYS = tuple(f"hrTimeInZone_{zone}" for zone in range(1, 6))


def parse_date(value: Any) -> date:
    """Date from ``YYYY-MM-DD`` or an ISO timestamp (the date part is used)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value).replace("Z", "+00:00")
    if "T" not in text and " " not in text:
        return datetime.combine(date.fromisoformat(text), datetime.min.time())
    return datetime.fromisoformat(text)


def _parse_all(
    records: Sequence[Mapping[str, Any]], parse: Callable[[Mapping[str, Any]], T], kind: str
) -> tuple[T, ...]:
    parsed: list[T] = []
    for index, record in enumerate(records):
        try:
            parsed.append(parse(record))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise InvalidInputError(
                f"Invalid {kind} record at index {index}: {exc!r}", record_index=index
            ) from exc
    return tuple(parsed)


def _zone_share(data: Mapping[str, Any], zone: int) -> float:
    """Percent for one zone, keyed ``zoneN`` or ``zoneNPercentage``."""
    for key in (f"zone{zone}", f"zone{zone}Percentage"):
        if key in data:
            return float(data[key])
    raise KeyError(f"zone{zone}")


def _hr_zones(data: Mapping[str, Any] | None) -> HRZoneDistribution | None:
    """HR-zone percentages; a non-empty mapping must name all five zones."""
    if not data:
        return None
    return HRZoneDistribution(*(_zone_share(data, z) for z in range(1, 6)))


def _weekly_metric(record: Mapping[str, Any]) -> WeeklyMetric:
    week_start = parse_date(record["weekStart"])
    week_end = (
        parse_date(record["weekEnd"])
        if record.get("weekEnd")
        else week_start + timedelta(days=DAYS_PER_WEEK - 1)
    )
    return WeeklyMetric(
        week_start=week_start,
        week_end=week_end,
        total_duration=float(record.get("totalDuration", 0.0)),
        total_distance=float(record.get("totalDistance", 0.0)),
        avg_weekly_tss=float(record.get("avgWeeklyTSS", 0.0)),
        avg_ctl=float(record.get("avgCTL", 0.0)),
        avg_atl=float(record.get("avgATL", 0.0)),
        avg_tsb=float(record.get("avgTSB", 0.0)),
        total_elevation=float(record.get("totalElevation", 0.0)),
        activity_count=int(record.get("activityCount", 0)),
        hr_zone_distribution=_hr_zones(record.get("hrZoneDistribution")),
    )


def weekly_metrics_from_json(records: Sequence[Mapping[str, Any]]) -> tuple[WeeklyMetric, ...]:
    """Weekly metric records, sorted by ``weekStart``."""
    weeks = _parse_all(records, _weekly_metric, "weekly metric")
    return tuple(sorted(weeks, key=lambda w: w.week_start))


def _personal_record(record: Mapping[str, Any]) -> PersonalRecord:
    category = record.get("category")
    if isinstance(category, Mapping):
        category_id = str(category["id"])
        name = str(category.get("name", category_id))
    else:
        category_id = str(record["categoryId"])
        name = str(record.get("categoryName", category_id))
    value = record.get("value")
    return PersonalRecord(
        category=PRCategory(category_id=category_id, name=name),
        timestamp=parse_timestamp(record["timestamp"]),
        activity_id=int(record.get("activityId", 0)),
        value=float(value) if value is not None else None,
    )


def personal_records_from_json(
    records: Sequence[Mapping[str, Any]],
) -> tuple[PersonalRecord, ...]:
    return _parse_all(records, _personal_record, "personal record")


def _daily_tss(record: Mapping[str, Any]) -> tuple[date, float]:
    tss = record["totalTSS"] if "totalTSS" in record else record["tss"]
    return parse_date(record["date"]), float(tss)


def daily_tss_from_json(records: Sequence[Mapping[str, Any]]) -> dict[date, float]:
    """``[{date, totalTSS}]`` entries to TSS per day; repeated days add up."""
    daily: dict[date, float] = {}
    for day, tss in _parse_all(records, _daily_tss, "daily TSS"):
        daily[day] = daily.get(day, 0.0) + tss
    return daily


def _activity(record: Mapping[str, Any]) -> ActivityRef:
    activity_type = record.get("activityType", "unknown")
    if isinstance(activity_type, Mapping):
        activity_type = activity_type.get("typeKey", "unknown")
    zones: tuple[float, float, float, float, float] | None = None
    if any(key in record for key in _HR_ZONE_KEYS):
        zones = tuple(float(record.get(key) or 0.0) for key in _HR_ZONE_KEYS)  # type: ignore[assignment]
    avg_hr = record.get("averageHR")
    return ActivityRef(
        activity_id=int(record["activityId"]),
        activity_type=str(activity_type).lower(),
        date=parse_date(record.get("startTimeLocal") or record["date"]),
        duration=float(record.get("duration") or 0.0),
        distance=float(record.get("distance") or 0.0),
        elevation_gain=float(record.get("elevationGain") or 0.0),
        tss=float(record.get("tss") or 0.0),
        avg_hr=float(avg_hr) if avg_hr is not None else None,
        hr_zone_seconds=zones,
    )


def activities_from_json(records: Sequence[Mapping[str, Any]]) -> tuple[ActivityRef, ...]:
    """Garmin-style activity summaries (``startTimeLocal``, ``hrTimeInZone_N``)."""
    return _parse_all(records, _activity, "activity")
