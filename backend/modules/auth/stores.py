"""
Profile store implementations.

- SupabaseProfileStore: ``user_profiles`` table through PostgREST
- InMemoryProfileStore: dictionary-backed, for tests and local runs
"""

from typing import Optional

import httpx
from supabase import PostgrestAPIError

from shared.exceptions import error_message
from shared.repository import BaseRepository

from .exceptions import ProfileLoadError, ProfileWriteError
from .models import UserProfile


class SupabaseProfileStore(BaseRepository[UserProfile]):
    """
    Profile store backed by the hosted database.

    Row-level security applies when the underlying client is an
    anon-key client carrying a user session.
    """

    TABLE = "user_profiles"

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            row = self._fetch_single(self.TABLE, "*", user_id)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise ProfileLoadError(user_id, error_message(e)) from e
        if row is None:
            return None
        return UserProfile(**row)

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        data = profile.model_dump(exclude_none=True)
        try:
            result = self._db.table(self.TABLE).upsert(data).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise ProfileWriteError(profile.id, error_message(e)) from e
        if result.data:
            return UserProfile(**result.data[0])
        return profile


class InMemoryProfileStore:
    """Profile store kept in a dictionary owned by the instance."""

    def __init__(self, profiles: Optional[list[UserProfile]] = None):
        self._profiles: dict[str, UserProfile] = {}
        for profile in profiles or []:
            self._profiles[profile.id] = profile

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        existing = self._profiles.get(profile.id)
        if existing is not None:
            merged = existing.model_dump()
            merged.update(profile.model_dump(exclude_none=True))
            profile = UserProfile(**merged)
        self._profiles[profile.id] = profile
        return profile

    def __len__(self) -> int:
        return len(self._profiles)
