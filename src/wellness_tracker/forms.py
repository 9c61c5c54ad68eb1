"""Validated input forms accepted from the user interface."""

from datetime import UTC, date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wellness_tracker.domain.ledger import ActivityType, EntryKind
from wellness_tracker.domain.profiles import ActivityLevel, Gender, UserProfile


class _Form(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, allow_inf_nan=False)


class ProfileForm(_Form):
    """Profile edit form."""

    name: str = Field(min_length=1)
    dob: date
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel | None = None
    deficit_goal: float = Field(default=0.0, ge=0)
    manual_limit: float | None = Field(default=None, ge=0)
    address: str = ""

    def to_profile(self) -> UserProfile:
        return UserProfile(
            name=self.name,
            dob=self.dob.isoformat(),
            height=self.height,
            weight=self.weight,
            gender=self.gender,
            activity_level=self.activity_level,
            deficit_goal=self.deficit_goal,
            manual_limit=self.manual_limit,
            address=self.address,
        )


class LogEntryForm(_Form):
    """Food or activity entry form."""

    kind: EntryKind
    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    activity_type: ActivityType | None = None

    @model_validator(mode="after")
    def _check_activity_type(self) -> "LogEntryForm":
        if self.kind == EntryKind.FOOD and self.activity_type is not None:
            raise ValueError("activity_type only applies to activity entries")
        return self


class FastStartForm(_Form):
    """Fast start form; the start time defaults to now."""

    start_time: datetime | None = None

    def resolve_start(self, now: datetime) -> datetime:
        """Return the chosen start as UTC, reading naive values as local time."""
        if self.start_time is None:
            return now
        value = self.start_time
        if value.tzinfo is None:
            value = value.astimezone()
        value = value.astimezone(UTC)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)
