"""Pydantic schemas for persisted records.

Field names are camelCase on disk and instants are epoch milliseconds.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from wellness_tracker.domain.ledger import ActivityType, EntryKind
from wellness_tracker.domain.profiles import ActivityLevel, Gender


class _StoredModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredProfile(_StoredModel):
    """Persisted user profile."""

    name: str
    dob: str
    height: float
    weight: float
    gender: Gender
    activity_level: ActivityLevel | None = None
    deficit_goal: float = 0.0
    manual_limit: float | None = None
    address: str = ""


class StoredLogEntry(_StoredModel):
    """Persisted calorie log entry."""

    id: UUID
    kind: EntryKind = Field(alias="type")
    name: str
    calories: float = Field(ge=0)
    timestamp: int
    activity_type: ActivityType | None = None


class StoredFastingLog(_StoredModel):
    """Persisted completed fast."""

    id: UUID
    start_time: int
    end_time: int
    duration: int = Field(ge=0)


class StoredFastingState(_StoredModel):
    """Persisted fasting session state."""

    is_active: bool
    start_time: int | None = None

    @model_validator(mode="after")
    def _check_start_time(self) -> "StoredFastingState":
        if self.is_active != (self.start_time is not None):
            raise ValueError("startTime must be set exactly when isActive is true")
        return self


LOG_ENTRIES = TypeAdapter(list[StoredLogEntry])
FASTING_LOGS = TypeAdapter(list[StoredFastingLog])
LAST_RESET = TypeAdapter(int)
