"""Domain models for calorie logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class EntryKind(str, Enum):
    """Whether an entry adds or burns calories."""

    FOOD = "food"
    ACTIVITY = "activity"


class ActivityType(str, Enum):
    """Activity subtypes offered by the entry form."""

    WALKING = "Walking"
    RUNNING = "Running"
    BIKING = "Biking"
    HIIT = "HIIT"
    DAILY_CHORES = "Daily Chores"
    OTHERS = "Others"


@dataclass(frozen=True)
class LogEntry:
    """A single food or activity entry."""

    id: UUID
    kind: EntryKind
    name: str
    calories: float
    timestamp: datetime
    activity_type: ActivityType | None = None


@dataclass(frozen=True)
class DailySummary:
    """Calorie totals for one calendar day against a target."""

    consumed: float
    burned: float
    net: float
    remaining: float
    percentage: float
    is_over_limit: bool
