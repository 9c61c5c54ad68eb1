"""Daily rollover tracking."""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Protocol

from wellness_tracker.services.ledger import is_same_day
from wellness_tracker.timeutils import utc_now

_logger = logging.getLogger(__name__)


class ResetMarkerRepository(Protocol):
    """Persistence interface for the last-reset marker."""

    def get_last_reset(self) -> datetime:
        """Return the last-reset instant."""

    def set_last_reset(self, value: datetime) -> None:
        """Persist the last-reset instant."""


@dataclass
class DayRolloverService:
    """Moves the last-reset marker forward when the calendar day changes.

    Logs are never cleared here; day-scoped summaries simply stop counting
    yesterday's entries.
    """

    repository: ResetMarkerRepository
    tz: tzinfo | None = None

    def last_reset(self) -> datetime:
        return self.repository.get_last_reset()

    def check(self, now: datetime | None = None) -> bool:
        """Return True when a new day started and the marker was updated."""
        current = now or utc_now()
        marker = self.repository.get_last_reset()
        if is_same_day(current, marker, self.tz):
            return False
        self.repository.set_last_reset(current)
        _logger.info("Day rollover: previous=%s current=%s", marker, current)
        return True
