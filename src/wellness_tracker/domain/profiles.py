"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    """Sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Activity levels with their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @property
    def multiplier(self) -> float:
        return ACTIVITY_MULTIPLIERS[self]


ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


class TargetSource(str, Enum):
    """Where the effective daily target came from."""

    MANUAL = "manual"
    COMPUTED = "computed"


@dataclass(frozen=True)
class UserProfile:
    """Body metrics and goals for the single local user."""

    name: str
    dob: str
    height: float
    weight: float
    gender: Gender
    activity_level: ActivityLevel | None = None
    deficit_goal: float = 0.0
    manual_limit: float | None = None
    address: str = ""


@dataclass(frozen=True)
class DailyTarget:
    """Effective daily calorie target."""

    value: float
    source: TargetSource


DEFAULT_PROFILE = UserProfile(
    name="New User",
    dob="1990-01-01",
    height=175.0,
    weight=70.0,
    gender=Gender.MALE,
)
