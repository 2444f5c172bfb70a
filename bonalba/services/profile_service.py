from typing import Dict, Any, List, Optional, Tuple
import logging

from ..database.kv_store import kv_store
from ..database.collections import profile_key, PROFILE_PREFIX
from ..models.user import Profile, normalize_role

logger = logging.getLogger(__name__)


class ProfileService:
    """One profile document per user, keyed profile:<uid>"""

    def __init__(self):
        self.db = kv_store

    @staticmethod
    def _to_profile(data: Dict[str, Any]) -> Profile:
        role, area = normalize_role(data.get("role"), data.get("area"))
        return Profile(**{**data, "role": role, "area": area})

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        data = await self.db.get(profile_key(user_id))
        if not data:
            return None
        return self._to_profile(data)

    async def list_profiles(self, active: Optional[bool] = None) -> List[Profile]:
        docs = await self.db.get_by_prefix(PROFILE_PREFIX)
        profiles = [self._to_profile(d) for d in docs if d]
        if active is not None:
            profiles = [p for p in profiles if p.active == active]
        profiles.sort(key=lambda p: p.created_at or "")
        return profiles

    async def find_by_username(self, username: str) -> Optional[Profile]:
        needle = (username or "").strip().lower()
        for profile in await self.list_profiles():
            if profile.username.lower() == needle:
                return profile
        return None

    async def find_by_email(self, email: str) -> Optional[Profile]:
        needle = (email or "").strip().lower()
        for profile in await self.list_profiles():
            if profile.email.lower() == needle:
                return profile
        return None

    async def save_profile(self, profile: Profile) -> Profile:
        await self.db.set(profile_key(profile.id), profile.model_dump())
        return profile

    async def update_profile(self, user_id: str, changes: Dict[str, Any]) -> Tuple[bool, Optional[Profile], Optional[str]]:
        def _apply(current):
            if not current:
                return current, None
            current.update(changes)
            return current, current

        updated = await self.db.update(profile_key(user_id), _apply)
        if updated is None:
            return False, None, "Usuario no encontrado"
        return True, self._to_profile(updated), None

    async def delete_profile(self, user_id: str) -> None:
        await self.db.delete(profile_key(user_id))


profile_service = ProfileService()
