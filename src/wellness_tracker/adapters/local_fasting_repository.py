"""Local storage repository for the fasting session and history."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from pydantic import ValidationError

from wellness_tracker.adapters.local_storage import (
    FASTING_LOGS_KEY,
    FASTING_STATE_KEY,
    LocalStorage,
)
from wellness_tracker.adapters.storage_models import (
    FASTING_LOGS,
    StoredFastingLog,
    StoredFastingState,
)
from wellness_tracker.domain.fasting import FastingLog, FastingState
from wellness_tracker.services.fasting import IDLE, FastingRepository
from wellness_tracker.timeutils import (
    duration_to_millis,
    from_millis,
    to_millis,
)

_logger = logging.getLogger(__name__)


@dataclass
class LocalFastingRepository(FastingRepository):
    """Fasting state and history records backed by local storage."""

    storage: LocalStorage

    def get_state(self) -> FastingState:
        """Return the stored session state, or idle."""
        raw = self.storage.get(FASTING_STATE_KEY)
        if raw is None:
            return IDLE
        try:
            stored = StoredFastingState.model_validate(raw)
        except ValidationError:
            _logger.warning("Invalid stored fasting state, using idle")
            return IDLE
        if stored.start_time is None:
            return IDLE
        return FastingState(is_active=True, start_time=from_millis(stored.start_time))

    def save_state(self, state: FastingState) -> None:
        """Persist the session state."""
        with self.storage.session() as storage:
            storage.set(FASTING_STATE_KEY, _state_payload(state))

    def list_logs(self) -> list[FastingLog]:
        """Return completed fasts newest first, or an empty list."""
        raw = self.storage.get(FASTING_LOGS_KEY)
        if raw is None:
            return []
        try:
            rows = FASTING_LOGS.validate_python(raw)
        except ValidationError:
            _logger.warning("Invalid stored fasting logs, using default")
            return []
        return [
            FastingLog(
                id=row.id,
                start_time=from_millis(row.start_time),
                end_time=from_millis(row.end_time),
                duration=timedelta(milliseconds=row.duration),
            )
            for row in rows
        ]

    def record_completed_fast(self, log: FastingLog) -> None:
        """Reset the session and prepend ``log`` in a single flush.

        The idle state is written before the history, so a failed state write
        leaves both records as they were.
        """
        logs = [log, *self.list_logs()]
        with self.storage.session() as storage:
            storage.set(FASTING_STATE_KEY, _state_payload(IDLE))
            storage.set(FASTING_LOGS_KEY, _logs_payload(logs))


def _state_payload(state: FastingState) -> dict[str, Any]:
    stored = StoredFastingState(
        is_active=state.is_active,
        start_time=(
            to_millis(state.start_time) if state.start_time is not None else None
        ),
    )
    return stored.model_dump(mode="json", by_alias=True)


def _logs_payload(logs: list[FastingLog]) -> list[dict[str, Any]]:
    rows = [
        StoredFastingLog(
            id=log.id,
            start_time=to_millis(log.start_time),
            end_time=to_millis(log.end_time),
            duration=duration_to_millis(log.duration),
        )
        for log in logs
    ]
    return FASTING_LOGS.dump_python(rows, mode="json", by_alias=True)
