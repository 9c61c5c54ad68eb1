"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from wellness_tracker.config import Settings
from wellness_tracker.containers import AppContainer
from wellness_tracker.domain.fasting import FastingLog, FastingState
from wellness_tracker.domain.ledger import LogEntry
from wellness_tracker.domain.profiles import DEFAULT_PROFILE, UserProfile
from wellness_tracker.services.fasting import IDLE, FastingRepository, FastingService
from wellness_tracker.services.ledger import CalorieLogRepository, CalorieLogService
from wellness_tracker.services.profiles import ProfileRepository, ProfileService
from wellness_tracker.services.rollover import (
    DayRolloverService,
    ResetMarkerRepository,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profile: UserProfile = DEFAULT_PROFILE
    saves: int = 0

    def get_profile(self) -> UserProfile:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile
        self.saves += 1


@dataclass
class InMemoryCalorieLogRepository(CalorieLogRepository):
    """In-memory calorie log repository for tests."""

    entries: list[LogEntry] = field(default_factory=list)

    def list_entries(self) -> list[LogEntry]:
        return list(self.entries)

    def replace_entries(self, entries: list[LogEntry]) -> None:
        self.entries = list(entries)


@dataclass
class InMemoryFastingRepository(FastingRepository):
    """In-memory fasting repository for tests."""

    state: FastingState = IDLE
    logs: list[FastingLog] = field(default_factory=list)

    def get_state(self) -> FastingState:
        return self.state

    def save_state(self, state: FastingState) -> None:
        self.state = state

    def list_logs(self) -> list[FastingLog]:
        return list(self.logs)

    def record_completed_fast(self, log: FastingLog) -> None:
        self.state = IDLE
        self.logs = [log, *self.logs]


@dataclass
class InMemoryResetMarkerRepository(ResetMarkerRepository):
    """In-memory last-reset marker for tests."""

    last_reset: datetime = NOW
    writes: list[datetime] = field(default_factory=list)

    def get_last_reset(self) -> datetime:
        return self.last_reset

    def set_last_reset(self, value: datetime) -> None:
        self.last_reset = value
        self.writes.append(value)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_dir=tmp_path / "storage",
        timezone="UTC",
        tick_interval_seconds=0.01,
        rollover_interval_seconds=0.01,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        tz=UTC,
        profile_service=ProfileService(InMemoryProfileRepository()),
        calorie_log_service=CalorieLogService(InMemoryCalorieLogRepository(), tz=UTC),
        fasting_service=FastingService(InMemoryFastingRepository()),
        rollover_service=DayRolloverService(InMemoryResetMarkerRepository(), tz=UTC),
        close_resources=close_resources,
    )
