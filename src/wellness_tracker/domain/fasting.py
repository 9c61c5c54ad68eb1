"""Domain models for fasting sessions."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID


@dataclass(frozen=True)
class FastingState:
    """The in-progress fasting session, if any."""

    is_active: bool
    start_time: datetime | None


@dataclass(frozen=True)
class FastingLog:
    """A completed fasting session."""

    id: UUID
    start_time: datetime
    end_time: datetime
    duration: timedelta


@dataclass(frozen=True)
class FastingStageInfo:
    """A metabolic stage covering [start_hours, end_hours)."""

    name: str
    description: str
    start_hours: float
    end_hours: float | None


@dataclass(frozen=True)
class Milestone:
    """A stage in the milestone list and whether it has been reached."""

    stage: FastingStageInfo
    reached: bool


@dataclass(frozen=True)
class FastingStatus:
    """Display snapshot of the fasting timer."""

    is_active: bool
    start_time: datetime | None
    elapsed: timedelta
    elapsed_hours: float
    stage: FastingStageInfo
    progress: float
    formatted: str
