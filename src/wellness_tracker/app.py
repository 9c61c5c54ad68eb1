"""Application host: owns state, timers and the dashboard snapshot."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from wellness_tracker.app_logging import configure_logging
from wellness_tracker.containers import AppContainer
from wellness_tracker.domain.fasting import (
    FastingLog,
    FastingState,
    FastingStatus,
    Milestone,
)
from wellness_tracker.domain.ledger import DailySummary, EntryKind, LogEntry
from wellness_tracker.domain.profiles import DailyTarget, UserProfile
from wellness_tracker.forms import FastStartForm, LogEntryForm, ProfileForm
from wellness_tracker.services import fasting
from wellness_tracker.services.timers import RepeatingTimer
from wellness_tracker.timeutils import to_local, utc_now

TickListener = Callable[[FastingStatus], None]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dashboard:
    """Everything the views render at one instant."""

    profile: UserProfile
    target: DailyTarget
    summary: DailySummary
    entries: list[LogEntry]
    fasting: FastingStatus
    milestones: list[Milestone]
    fasting_history: list[FastingLog]


class WellnessApp:
    """Single root object holding the state container and host timers."""

    def __init__(
        self, container: AppContainer, on_tick: TickListener | None = None
    ) -> None:
        self.container = container
        self.on_tick = on_tick
        settings = container.settings
        self._fasting_state = container.fasting_service.get_state()
        self._started = False
        self._tick_timer = RepeatingTimer(
            interval=settings.tick_interval_seconds,
            callback=self._tick,
            name="fasting-tick",
        )
        self._rollover_timer = RepeatingTimer(
            interval=settings.rollover_interval_seconds,
            callback=self._check_rollover,
            name="day-rollover",
            run_immediately=True,
        )

    @property
    def fasting_state(self) -> FastingState:
        return self._fasting_state

    @property
    def is_ticking(self) -> bool:
        return self._tick_timer.is_running

    async def start(self) -> None:
        """Start the rollover check and resume the tick for an active fast."""
        self._started = True
        self._rollover_timer.start()
        if self._fasting_state.is_active:
            self._tick_timer.start()

    async def close(self) -> None:
        """Stop both timers and flush storage."""
        self._started = False
        self._tick_timer.stop()
        self._rollover_timer.stop()
        await self._tick_timer.wait_closed()
        await self._rollover_timer.wait_closed()
        await self.container.close_resources()

    async def __aenter__(self) -> "WellnessApp":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def save_profile(self, form: ProfileForm) -> UserProfile:
        """Replace the profile from a validated form."""
        return self.container.profile_service.save_profile(form.to_profile())

    def set_manual_limit(self, enabled: bool) -> UserProfile:
        """Toggle the manual calorie limit."""
        return self.container.profile_service.set_manual_limit(
            enabled, today=self._today(utc_now())
        )

    def daily_target(self, now: datetime | None = None) -> DailyTarget:
        """Return the effective daily target."""
        return self.container.profile_service.daily_target(
            today=self._today(now or utc_now())
        )

    def add_log(self, form: LogEntryForm, now: datetime | None = None) -> LogEntry:
        """Record a food or activity entry."""
        service = self.container.calorie_log_service
        if form.kind == EntryKind.FOOD:
            return service.add_food(form.name, form.calories, now=now)
        return service.add_activity(
            form.name, form.calories, activity_type=form.activity_type, now=now
        )

    def delete_log(self, entry_id: UUID) -> bool:
        """Delete an entry by id; unknown ids are ignored."""
        return self.container.calorie_log_service.delete_entry(entry_id)

    def start_fast(
        self, form: FastStartForm | None = None, now: datetime | None = None
    ) -> FastingState:
        """Start a fast and begin ticking the display."""
        at = (form or FastStartForm()).resolve_start(now or utc_now())
        self._fasting_state = self.container.fasting_service.start_fast(at)
        if self._started and self._fasting_state.is_active:
            self._tick_timer.start()
        return self._fasting_state

    def end_fast(self, now: datetime | None = None) -> FastingLog | None:
        """End the fast, stop ticking and return the recorded log."""
        log = self.container.fasting_service.end_fast(now)
        self._fasting_state = fasting.IDLE
        self._tick_timer.stop()
        return log

    def fasting_status(self, now: datetime | None = None) -> FastingStatus:
        return fasting.status(
            self._fasting_state,
            now or utc_now(),
            self.container.fasting_service.goal_hours,
        )

    def dashboard(self, now: datetime | None = None) -> Dashboard:
        """Build the full display snapshot at ``now``."""
        current = now or utc_now()
        services = self.container
        target = self.daily_target(current)
        status = self.fasting_status(current)
        return Dashboard(
            profile=services.profile_service.get_profile(),
            target=target,
            summary=services.calorie_log_service.today_summary(target.value, current),
            entries=services.calorie_log_service.entries_today(current),
            fasting=status,
            milestones=fasting.milestones(status.elapsed_hours),
            fasting_history=services.fasting_service.history(),
        )

    def _today(self, now: datetime) -> date:
        return to_local(now, self.container.tz).date()

    def _tick(self) -> None:
        if not self._fasting_state.is_active:
            self._tick_timer.stop()
            return
        status = self.fasting_status()
        if self.on_tick is not None:
            self.on_tick(status)

    def _check_rollover(self) -> None:
        self.container.rollover_service.check()


def create_app(
    container: AppContainer, on_tick: TickListener | None = None
) -> WellnessApp:
    """Create the application host configured with dependencies."""
    configure_logging(container.settings.log_level)
    _logger.info(
        "Wellness tracker ready: storage_dir=%s", container.settings.storage_dir
    )
    return WellnessApp(container, on_tick=on_tick)
