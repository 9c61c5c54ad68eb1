"""Fasting session state machine and metabolic stage table."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from uuid import uuid4

from wellness_tracker.domain.fasting import (
    FastingLog,
    FastingStageInfo,
    FastingState,
    FastingStatus,
    Milestone,
)
from wellness_tracker.timeutils import utc_now

DEFAULT_GOAL_HOURS = 16.0

IDLE = FastingState(is_active=False, start_time=None)

# Half-open brackets, lower bound inclusive. Shared by the live stage and the
# milestone list.
STAGES: tuple[FastingStageInfo, ...] = (
    FastingStageInfo(
        "Fed State", "Insulin is high, body is processing food.", 0, 4
    ),
    FastingStageInfo(
        "Early Fasting", "Blood sugar begins to normalize.", 4, 12
    ),
    FastingStageInfo(
        "Glycogen Depletion", "Liver glycogen stores are being used up.", 12, 24
    ),
    FastingStageInfo(
        "Ketosis Initiation", "Body starts burning fat for fuel.", 24, 48
    ),
    FastingStageInfo(
        "Deep Ketosis", "Fat burning is maximized; hunger often fades.", 48, 72
    ),
    FastingStageInfo(
        "Autophagy Activation", "Cells recycle damaged components.", 72, 96
    ),
    FastingStageInfo(
        "Protein Conservation",
        "Metabolism shifts to protect muscle mass.",
        96,
        None,
    ),
)

_HOUR = timedelta(hours=1)

_logger = logging.getLogger(__name__)


class FastingRepository(Protocol):
    """Persistence interface for the fasting session and its history."""

    def get_state(self) -> FastingState:
        """Return the current session state, or idle."""

    def save_state(self, state: FastingState) -> None:
        """Persist the current session state."""

    def list_logs(self) -> list[FastingLog]:
        """Return completed fasts, newest first."""

    def record_completed_fast(self, log: FastingLog) -> None:
        """Prepend ``log`` to the history and reset the session to idle together."""


def start(state: FastingState, at: datetime) -> FastingState:
    """Begin a session at ``at``; an active session is left untouched."""
    if state.is_active and state.start_time is not None:
        return state
    return FastingState(is_active=True, start_time=at)


def end(state: FastingState, now: datetime) -> tuple[FastingState, FastingLog | None]:
    """Finish the session, returning idle and the completed log if any."""
    if not state.is_active or state.start_time is None:
        return IDLE, None
    log = FastingLog(
        id=uuid4(),
        start_time=state.start_time,
        end_time=now,
        duration=max(now - state.start_time, timedelta(0)),
    )
    return IDLE, log


def elapsed(state: FastingState, now: datetime) -> timedelta:
    """Return time since the session started, never negative."""
    if not state.is_active or state.start_time is None:
        return timedelta(0)
    return max(now - state.start_time, timedelta(0))


def stage(elapsed_hours: float) -> FastingStageInfo:
    """Return the stage whose bracket contains ``elapsed_hours``."""
    current = STAGES[0]
    for info in STAGES:
        if elapsed_hours >= info.start_hours:
            current = info
    return current


def milestones(elapsed_hours: float) -> list[Milestone]:
    """Return every stage flagged by whether it has been reached."""
    return [
        Milestone(stage=info, reached=elapsed_hours >= info.start_hours)
        for info in STAGES
    ]


def progress(elapsed_hours: float, goal_hours: float = DEFAULT_GOAL_HOURS) -> float:
    """Return percent of the goal reached, capped at 100."""
    if goal_hours <= 0:
        return 0.0
    return min(100.0, max(elapsed_hours, 0.0) / goal_hours * 100)


def format_elapsed(value: timedelta) -> str:
    """Format a duration as HH:MM:SS; hours may exceed two digits."""
    total_seconds = max(int(value.total_seconds()), 0)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def status(
    state: FastingState, now: datetime, goal_hours: float = DEFAULT_GOAL_HOURS
) -> FastingStatus:
    """Build the display snapshot for a session at ``now``."""
    duration = elapsed(state, now)
    hours = duration / _HOUR
    return FastingStatus(
        is_active=state.is_active,
        start_time=state.start_time,
        elapsed=duration,
        elapsed_hours=hours,
        stage=stage(hours),
        progress=progress(hours, goal_hours) if state.is_active else 0.0,
        formatted=format_elapsed(duration),
    )


@dataclass
class FastingService:
    """Service that transacts fasting state transitions."""

    repository: FastingRepository
    goal_hours: float = DEFAULT_GOAL_HOURS

    def get_state(self) -> FastingState:
        """Return the current session state."""
        return self.repository.get_state()

    def start_fast(self, at: datetime | None = None) -> FastingState:
        """Start a fast now or at a backdated instant."""
        current = self.repository.get_state()
        updated = start(current, at or utc_now())
        if updated is current:
            _logger.info("Fast already active: start_time=%s", current.start_time)
            return current
        self.repository.save_state(updated)
        _logger.info("Fast started: start_time=%s", updated.start_time)
        return updated

    def end_fast(self, now: datetime | None = None) -> FastingLog | None:
        """End the active fast and record it; idle sessions yield None."""
        current = self.repository.get_state()
        updated, log = end(current, now or utc_now())
        if log is None:
            self.repository.save_state(updated)
            return None
        self.repository.record_completed_fast(log)
        _logger.info("Fast ended: duration=%s", log.duration)
        return log

    def status(self, now: datetime | None = None) -> FastingStatus:
        """Return the display snapshot for the stored session."""
        return status(self.repository.get_state(), now or utc_now(), self.goal_hours)

    def history(self) -> list[FastingLog]:
        """Return completed fasts, newest first."""
        return self.repository.list_logs()
