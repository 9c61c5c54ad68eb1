"""Local storage repository for the user profile."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from wellness_tracker.adapters.local_storage import PROFILE_KEY, LocalStorage
from wellness_tracker.adapters.storage_models import StoredProfile
from wellness_tracker.domain.profiles import DEFAULT_PROFILE, UserProfile
from wellness_tracker.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


@dataclass
class LocalProfileRepository(ProfileRepository):
    """Profile record backed by local storage."""

    storage: LocalStorage

    def get_profile(self) -> UserProfile:
        """Return the stored profile, or the default one."""
        raw = self.storage.get(PROFILE_KEY)
        if raw is None:
            return DEFAULT_PROFILE
        try:
            stored = StoredProfile.model_validate(raw)
        except ValidationError:
            _logger.warning("Invalid stored profile, using default")
            return DEFAULT_PROFILE
        return UserProfile(
            name=stored.name,
            dob=stored.dob,
            height=stored.height,
            weight=stored.weight,
            gender=stored.gender,
            activity_level=stored.activity_level,
            deficit_goal=stored.deficit_goal,
            manual_limit=stored.manual_limit,
            address=stored.address,
        )

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""
        stored = StoredProfile(
            name=profile.name,
            dob=profile.dob,
            height=profile.height,
            weight=profile.weight,
            gender=profile.gender,
            activity_level=profile.activity_level,
            deficit_goal=profile.deficit_goal,
            manual_limit=profile.manual_limit,
            address=profile.address,
        )
        with self.storage.session() as storage:
            storage.set(PROFILE_KEY, stored.model_dump(mode="json", by_alias=True))
