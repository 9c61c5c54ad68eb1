"""Local storage repository for calorie log entries."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from wellness_tracker.adapters.local_storage import LOGS_KEY, LocalStorage
from wellness_tracker.adapters.storage_models import LOG_ENTRIES, StoredLogEntry
from wellness_tracker.domain.ledger import LogEntry
from wellness_tracker.services.ledger import CalorieLogRepository
from wellness_tracker.timeutils import from_millis, to_millis

_logger = logging.getLogger(__name__)


@dataclass
class LocalCalorieLogRepository(CalorieLogRepository):
    """Calorie log record backed by local storage."""

    storage: LocalStorage

    def list_entries(self) -> list[LogEntry]:
        """Return stored entries newest first, or an empty list."""
        raw = self.storage.get(LOGS_KEY)
        if raw is None:
            return []
        try:
            rows = LOG_ENTRIES.validate_python(raw)
        except ValidationError:
            _logger.warning("Invalid stored calorie logs, using default")
            return []
        return [
            LogEntry(
                id=row.id,
                kind=row.kind,
                name=row.name,
                calories=row.calories,
                timestamp=from_millis(row.timestamp),
                activity_type=row.activity_type,
            )
            for row in rows
        ]

    def replace_entries(self, entries: list[LogEntry]) -> None:
        """Persist the full entry list."""
        rows = [
            StoredLogEntry(
                id=entry.id,
                kind=entry.kind,
                name=entry.name,
                calories=entry.calories,
                timestamp=to_millis(entry.timestamp),
                activity_type=entry.activity_type,
            )
            for entry in entries
        ]
        with self.storage.session() as storage:
            storage.set(
                LOGS_KEY,
                LOG_ENTRIES.dump_python(
                    rows, mode="json", by_alias=True, exclude_none=True
                ),
            )
