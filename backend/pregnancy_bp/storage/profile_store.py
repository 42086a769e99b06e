"""
Single-record profile storage.
"""
import json
import logging

from pregnancy_bp.models.profile import UserProfile

logger = logging.getLogger(__name__)

PROFILE_KEY = 'userProfile'


class ProfileStore:

    def __init__(self, blob_store, key: str = PROFILE_KEY):
        self.blob_store = blob_store
        self.key = key

    def load(self):
        """Stored profile, or None when absent or unreadable."""
        raw = self.blob_store.get(self.key)
        if not raw:
            return None
        try:
            return UserProfile.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Discarding unreadable {self.key!r} blob: {e}")
            return None

    def save(self, profile: UserProfile) -> UserProfile:
        self.blob_store.set(self.key, json.dumps(profile.to_dict()))
        return profile

    def clear(self):
        self.blob_store.clear(self.key)
