"""Tests for input form validation."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from wellness_tracker.domain.ledger import ActivityType, EntryKind
from wellness_tracker.domain.profiles import ActivityLevel, Gender
from wellness_tracker.forms import FastStartForm, LogEntryForm, ProfileForm
from tests.conftest import NOW


def test_profile_form_builds_profile() -> None:
    form = ProfileForm(
        name="  Robin ",
        dob="1992-05-17",
        height="180",
        weight=82.5,
        gender="male",
        activity_level="light",
        deficit_goal=250,
    )

    profile = form.to_profile()

    assert profile.name == "Robin"
    assert profile.dob == "1992-05-17"
    assert profile.height == 180
    assert profile.gender == Gender.MALE
    assert profile.activity_level == ActivityLevel.LIGHT
    assert profile.manual_limit is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"dob": "someday"},
        {"height": "tall"},
        {"weight": 0},
        {"weight": float("nan")},
        {"gender": "other"},
        {"deficit_goal": -100},
        {"manual_limit": -1},
    ],
)
def test_profile_form_rejects_invalid_fields(overrides: dict[str, object]) -> None:
    fields = {
        "name": "Robin",
        "dob": "1992-05-17",
        "height": 180,
        "weight": 80,
        "gender": "female",
    }
    fields.update(overrides)

    with pytest.raises(ValidationError):
        ProfileForm(**fields)


def test_log_entry_form_accepts_activity_subtype() -> None:
    form = LogEntryForm(
        kind="activity", name="Chores", calories="120", activity_type="Daily Chores"
    )

    assert form.kind == EntryKind.ACTIVITY
    assert form.calories == 120
    assert form.activity_type == ActivityType.DAILY_CHORES


@pytest.mark.parametrize(
    "fields",
    [
        {"kind": "food", "name": "Rice", "calories": "lots"},
        {"kind": "food", "name": "Rice", "calories": -10},
        {"kind": "food", "name": "", "calories": 10},
        {"kind": "drink", "name": "Tea", "calories": 0},
        {"kind": "food", "name": "Rice", "calories": 10, "activity_type": "HIIT"},
    ],
)
def test_log_entry_form_rejects_invalid_input(fields: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        LogEntryForm(**fields)


def test_fast_start_defaults_to_now() -> None:
    assert FastStartForm().resolve_start(NOW) == NOW


def test_fast_start_converts_aware_times_to_utc() -> None:
    local = datetime(2026, 10, 19, 8, 30, tzinfo=timezone(timedelta(hours=2)))

    resolved = FastStartForm(start_time=local).resolve_start(NOW)

    assert resolved == datetime(2026, 10, 19, 6, 30, tzinfo=UTC)
    assert resolved.tzinfo == UTC


def test_fast_start_reads_naive_times_as_local() -> None:
    naive = datetime(2026, 10, 19, 8, 30, 0, 999)

    resolved = FastStartForm(start_time=naive).resolve_start(NOW)

    assert resolved == naive.astimezone().replace(microsecond=0)
