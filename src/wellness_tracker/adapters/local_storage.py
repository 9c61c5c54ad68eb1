"""File-backed key-value storage, one JSON document per key."""

import json
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

PROFILE_KEY = "wellflow_profile"
LOGS_KEY = "wellflow_logs"
FASTING_LOGS_KEY = "wellflow_fasting_logs"
FASTING_STATE_KEY = "wellflow_fasting_state"
LAST_RESET_KEY = "wellflow_last_reset"

_logger = logging.getLogger(__name__)


@dataclass
class LocalStorage:
    """Key-value store with an in-memory copy and buffered, atomic writes.

    Writes made inside ``session()`` are flushed when the outermost session
    exits, including on error. Writes outside a session flush immediately.
    Keys flush in the order they were first written; a failed write leaves it
    and every later key pending.
    """

    directory: Path
    _values: dict[str, object] = field(default_factory=dict, init=False)
    _loaded: set[str] = field(default_factory=set, init=False)
    _dirty: dict[str, None] = field(default_factory=dict, init=False)
    _depth: int = field(default=0, init=False)

    def get(self, key: str) -> object | None:
        """Return the decoded value for a key, or None if missing or corrupt."""
        if key not in self._loaded:
            self._values[key] = self._read(key)
            self._loaded.add(key)
        return self._values.get(key)

    def set(self, key: str, value: object) -> None:
        """Store a JSON-compatible value for a key."""
        self._values[key] = value
        self._loaded.add(key)
        self._dirty.setdefault(key, None)
        if self._depth == 0:
            self.flush()

    @contextmanager
    def session(self) -> Iterator["LocalStorage"]:
        """Buffer writes until the outermost session exits."""
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1
            if self._depth == 0:
                self.flush()

    def flush(self) -> None:
        """Write every pending key to disk."""
        for key in list(self._dirty):
            try:
                self._write(key, self._values.get(key))
            except OSError:
                _logger.exception("Failed to persist key: key=%s", key)
                return
            del self._dirty[key]

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> object | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _logger.warning("Unreadable stored value, using default: key=%s", key)
            return None

    def _write(self, key: str, value: object) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(json.dumps(value), encoding="utf-8")
        os.replace(tmp_path, path)
