"""Profile metrics and the daily calorie target."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol

from wellness_tracker.domain.profiles import (
    DailyTarget,
    Gender,
    TargetSource,
    UserProfile,
)

DEFAULT_DAILY_TARGET = 2000.0

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the user profile."""

    def get_profile(self) -> UserProfile:
        """Return the stored profile, or the default one."""

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""


def calculate_age(dob: str, today: date | None = None) -> int:
    """Return age in whole years, adjusted for whether the birthday has passed.

    Raises ValueError when ``dob`` is not an ISO date.
    """
    birthday = date.fromisoformat(dob)
    current = today or date.today()
    age = current.year - birthday.year
    if (current.month, current.day) < (birthday.month, birthday.day):
        age -= 1
    return age


def calculate_bmr(profile: UserProfile, today: date | None = None) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    age = calculate_age(profile.dob, today)
    base = 10 * profile.weight + 6.25 * profile.height - 5 * age
    if profile.gender == Gender.MALE:
        return base + 5
    return base - 161


def compute_daily_target(
    profile: UserProfile,
    today: date | None = None,
    default: float = DEFAULT_DAILY_TARGET,
) -> float:
    """Return the computed daily target in kcal.

    BMR is scaled by the activity multiplier and reduced by the deficit goal
    when an activity level is set; otherwise BMR is the target. The manual
    limit is not applied here. Degenerate profiles yield ``default``.
    """
    if profile.weight <= 0 or profile.height <= 0:
        return default
    try:
        bmr = calculate_bmr(profile, today)
    except ValueError:
        _logger.warning("Unparseable date of birth: dob=%r", profile.dob)
        return default
    if profile.activity_level is None:
        target = bmr
    else:
        target = bmr * profile.activity_level.multiplier - profile.deficit_goal
    if not math.isfinite(target) or target <= 0:
        return default
    return target


def effective_daily_target(
    profile: UserProfile,
    today: date | None = None,
    default: float = DEFAULT_DAILY_TARGET,
) -> DailyTarget:
    """Return the manual limit when set, else the computed target."""
    if profile.manual_limit is not None:
        return DailyTarget(value=profile.manual_limit, source=TargetSource.MANUAL)
    return DailyTarget(
        value=compute_daily_target(profile, today, default),
        source=TargetSource.COMPUTED,
    )


@dataclass
class ProfileService:
    """Application service for the user profile."""

    repository: ProfileRepository
    default_target: float = DEFAULT_DAILY_TARGET

    def get_profile(self) -> UserProfile:
        """Return the current profile."""
        return self.repository.get_profile()

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Replace the profile wholesale and return it."""
        self.repository.save_profile(profile)
        _logger.info(
            "Profile saved: manual_limit=%s activity_level=%s",
            profile.manual_limit,
            profile.activity_level,
        )
        return profile

    def daily_target(self, today: date | None = None) -> DailyTarget:
        """Return the effective daily target for the stored profile."""
        return effective_daily_target(
            self.repository.get_profile(), today, self.default_target
        )

    def suggested_target(self, today: date | None = None) -> float:
        """Return the computed target, ignoring any manual limit."""
        return compute_daily_target(
            self.repository.get_profile(), today, self.default_target
        )

    def set_manual_limit(
        self, enabled: bool, today: date | None = None
    ) -> UserProfile:
        """Toggle the manual limit, seeding it with the suggested target."""
        profile = self.repository.get_profile()
        if enabled:
            limit = (
                profile.manual_limit
                if profile.manual_limit is not None
                else round(compute_daily_target(profile, today, self.default_target))
            )
            updated = replace(profile, manual_limit=float(limit))
        else:
            updated = replace(profile, manual_limit=None)
        return self.save_profile(updated)
