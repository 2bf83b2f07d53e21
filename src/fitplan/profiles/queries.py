"""Store queries for user goal profiles."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fitplan.db.schema import PROFILES
from fitplan.db.store import DocumentStore
from fitplan.profiles.models import UserGoalProfile

logger = logging.getLogger(__name__)


class ProfileQueries:
    """Document store queries for the ``profiles`` collection."""

    @staticmethod
    def get_profile(store: DocumentStore, user_id: str) -> Optional[UserGoalProfile]:
        """Get a user's goal profile, or None if it was never created."""
        data = store.get(PROFILES, user_id)
        if data is None:
            return None
        return UserGoalProfile.from_dict(data)

    @staticmethod
    def save_profile(store: DocumentStore, profile: UserGoalProfile) -> None:
        """Create or fully replace a profile."""
        if profile.created_at is None:
            profile.created_at = datetime.now(timezone.utc)
        store.set(PROFILES, profile.user_id, profile.to_dict())

    @staticmethod
    def get_or_create_profile(
        store: DocumentStore, user_id: str
    ) -> tuple[UserGoalProfile, bool]:
        """Return the user's profile, persisting a default one if missing.

        The default is general / beginner with three weekly workouts.

        Returns:
            (profile, created) where created is True if a default was written
        """
        profile = ProfileQueries.get_profile(store, user_id)
        if profile is not None:
            return profile, False

        profile = UserGoalProfile(
            user_id=user_id, created_at=datetime.now(timezone.utc)
        )
        if not store.create_if_absent(PROFILES, user_id, profile.to_dict()):
            # Another request created it first
            existing = ProfileQueries.get_profile(store, user_id)
            if existing is not None:
                return existing, False

        logger.warning("No profile for user %s; created default profile", user_id)
        return profile, True
