"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import tzinfo

from wellness_tracker.adapters.local_calorie_log_repository import (
    LocalCalorieLogRepository,
)
from wellness_tracker.adapters.local_fasting_repository import LocalFastingRepository
from wellness_tracker.adapters.local_profile_repository import LocalProfileRepository
from wellness_tracker.adapters.local_reset_marker_repository import (
    LocalResetMarkerRepository,
)
from wellness_tracker.adapters.local_storage import LocalStorage
from wellness_tracker.config import Settings, parse_timezone
from wellness_tracker.services.fasting import FastingService
from wellness_tracker.services.ledger import CalorieLogService
from wellness_tracker.services.profiles import ProfileService
from wellness_tracker.services.rollover import DayRolloverService
from wellness_tracker.timeutils import resolve_timezone


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tz: tzinfo | None
    profile_service: ProfileService
    calorie_log_service: CalorieLogService
    fasting_service: FastingService
    rollover_service: DayRolloverService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tz = resolve_timezone(parse_timezone(resolved_settings.timezone))
    storage = LocalStorage(resolved_settings.storage_dir)
    profile_service = ProfileService(
        LocalProfileRepository(storage),
        default_target=resolved_settings.default_daily_target,
    )
    calorie_log_service = CalorieLogService(LocalCalorieLogRepository(storage), tz=tz)
    fasting_service = FastingService(
        LocalFastingRepository(storage),
        goal_hours=resolved_settings.fasting_goal_hours,
    )
    rollover_service = DayRolloverService(LocalResetMarkerRepository(storage), tz=tz)

    async def close_resources() -> None:
        storage.flush()

    return AppContainer(
        settings=resolved_settings,
        tz=tz,
        profile_service=profile_service,
        calorie_log_service=calorie_log_service,
        fasting_service=fasting_service,
        rollover_service=rollover_service,
        close_resources=close_resources,
    )
