"""Personal records supplied by the PR detector."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class PRCategory:
    """A PR category such as a 5K run or a 20-minute power best."""

    category_id: str
    name: str


@dataclass(frozen=True)
class PersonalRecord:
    """A single personal best achieved in an activity."""

    category: PRCategory
    timestamp: datetime
    activity_id: int
    value: float | None = None

    @property
    def date(self) -> date:
        return self.timestamp.date()
