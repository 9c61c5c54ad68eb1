"""Local storage repository for the last-reset marker."""

import logging
from dataclasses import dataclass
from datetime import datetime

from pydantic import ValidationError

from wellness_tracker.adapters.local_storage import LAST_RESET_KEY, LocalStorage
from wellness_tracker.adapters.storage_models import LAST_RESET
from wellness_tracker.services.rollover import ResetMarkerRepository
from wellness_tracker.timeutils import from_millis, to_millis, utc_now

_logger = logging.getLogger(__name__)


@dataclass
class LocalResetMarkerRepository(ResetMarkerRepository):
    """Last-reset marker backed by local storage, as epoch milliseconds."""

    storage: LocalStorage

    def get_last_reset(self) -> datetime:
        """Return the marker, initializing it to now when missing or invalid."""
        raw = self.storage.get(LAST_RESET_KEY)
        if raw is not None:
            try:
                return from_millis(LAST_RESET.validate_python(raw))
            except ValidationError:
                _logger.warning("Invalid stored last-reset marker, using now")
        now = utc_now()
        self.set_last_reset(now)
        return now

    def set_last_reset(self, value: datetime) -> None:
        """Persist the marker."""
        with self.storage.session() as storage:
            storage.set(LAST_RESET_KEY, to_millis(value))
