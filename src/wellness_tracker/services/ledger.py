"""Calorie ledger: day-scoped aggregation of food and activity entries."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Protocol
from uuid import UUID, uuid4

from wellness_tracker.domain.ledger import (
    ActivityType,
    DailySummary,
    EntryKind,
    LogEntry,
)
from wellness_tracker.timeutils import to_local, utc_now

_logger = logging.getLogger(__name__)


class CalorieLogRepository(Protocol):
    """Persistence interface for calorie log entries."""

    def list_entries(self) -> list[LogEntry]:
        """Return all entries, newest first."""

    def replace_entries(self, entries: list[LogEntry]) -> None:
        """Persist the full entry list, newest first."""


def is_same_day(first: datetime, second: datetime, tz: tzinfo | None = None) -> bool:
    """Return True when both instants share a local calendar date."""
    return to_local(first, tz).date() == to_local(second, tz).date()


def entries_for_day(
    logs: Iterable[LogEntry], reference: datetime, tz: tzinfo | None = None
) -> list[LogEntry]:
    """Return the entries logged on the reference instant's calendar day."""
    return [log for log in logs if is_same_day(log.timestamp, reference, tz)]


def summarize(
    logs: Iterable[LogEntry],
    reference: datetime,
    daily_target: float,
    tz: tzinfo | None = None,
) -> DailySummary:
    """Aggregate the reference day's entries against a daily target."""
    consumed = 0.0
    burned = 0.0
    for log in entries_for_day(logs, reference, tz):
        if log.kind == EntryKind.FOOD:
            consumed += log.calories
        else:
            burned += log.calories
    net = consumed - burned
    remaining = daily_target - net
    percentage = net / daily_target * 100 if daily_target else 0.0
    return DailySummary(
        consumed=consumed,
        burned=burned,
        net=net,
        remaining=remaining,
        percentage=percentage,
        is_over_limit=remaining <= 0,
    )


def add_entry(logs: list[LogEntry], entry: LogEntry) -> list[LogEntry]:
    """Return a new list with the entry first."""
    return [entry, *logs]


def remove_entry(logs: list[LogEntry], entry_id: UUID) -> list[LogEntry]:
    """Return a new list without the matching entry, order preserved."""
    return [log for log in logs if log.id != entry_id]


@dataclass
class CalorieLogService:
    """Service for recording and summarizing calorie entries."""

    repository: CalorieLogRepository
    tz: tzinfo | None = None

    def list_entries(self) -> list[LogEntry]:
        """Return all entries, newest first."""
        return self.repository.list_entries()

    def entries_today(self, now: datetime | None = None) -> list[LogEntry]:
        """Return entries logged on the current calendar day."""
        return entries_for_day(
            self.repository.list_entries(), now or utc_now(), self.tz
        )

    def add_entry(
        self,
        kind: EntryKind,
        name: str,
        calories: float,
        activity_type: ActivityType | None = None,
        now: datetime | None = None,
    ) -> LogEntry:
        """Create an entry with a fresh id and timestamp and persist it."""
        entry = LogEntry(
            id=uuid4(),
            kind=kind,
            name=name,
            calories=calories,
            timestamp=now or utc_now(),
            activity_type=activity_type if kind == EntryKind.ACTIVITY else None,
        )
        entries = add_entry(self.repository.list_entries(), entry)
        self.repository.replace_entries(entries)
        _logger.info(
            "Entry logged: kind=%s calories=%s", entry.kind.value, entry.calories
        )
        return entry

    def add_food(
        self, name: str, calories: float, now: datetime | None = None
    ) -> LogEntry:
        """Log a meal that adds to the day's intake."""
        return self.add_entry(EntryKind.FOOD, name, calories, now=now)

    def add_activity(
        self,
        name: str,
        calories: float,
        activity_type: ActivityType | None = None,
        now: datetime | None = None,
    ) -> LogEntry:
        """Log exercise whose calories offset the day's intake."""
        return self.add_entry(
            EntryKind.ACTIVITY, name, calories, activity_type=activity_type, now=now
        )

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry by id; return False when it does not exist."""
        entries = self.repository.list_entries()
        remaining = remove_entry(entries, entry_id)
        if len(remaining) == len(entries):
            return False
        self.repository.replace_entries(remaining)
        _logger.info("Entry deleted: id=%s", entry_id)
        return True

    def today_summary(
        self, daily_target: float, now: datetime | None = None
    ) -> DailySummary:
        """Summarize today's entries against the daily target."""
        return summarize(
            self.repository.list_entries(), now or utc_now(), daily_target, self.tz
        )
