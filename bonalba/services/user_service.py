from typing import Dict, Any, List, Optional, Tuple
import logging

from ..auth.firebase_auth import firebase_auth, AuthProviderError
from ..core.clock import now_iso
from ..models.user import Profile, UserCreate, UserApprove
from .profile_service import profile_service

logger = logging.getLogger(__name__)

NOT_FOUND = "Usuario no encontrado"


class UserService:
    """Admin-side account management: provider account + profile document"""

    def __init__(self):
        self.auth = firebase_auth
        self.profiles = profile_service

    async def list_users(self) -> List[Dict[str, Any]]:
        return [p.model_dump() for p in await self.profiles.list_profiles()]

    async def list_pending(self) -> List[Dict[str, Any]]:
        return [p.model_dump() for p in await self.profiles.list_profiles(active=False)]

    async def create_user(self, data: UserCreate, created_by: str) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        if await self.profiles.find_by_username(data.username):
            return False, None, "El nombre de usuario ya existe"

        role = data.role.value
        area = data.area.value if data.area else None

        try:
            created = await self.auth.create_user(
                email=data.email,
                password=data.password,
                display_name=data.full_name or data.username,
            )
            await self.auth.set_custom_claims(created["uid"], {"role": role, "name": data.full_name})
        except AuthProviderError as e:
            logger.error(f"Provider rejected user {data.email}: {e}")
            return False, None, f"Error al crear usuario: {e}"

        profile = Profile(
            id=created["uid"],
            email=str(data.email).lower(),
            username=data.username,
            full_name=data.full_name,
            role=role,
            area=area,
            active=True,
            created_at=now_iso(),
        )
        await self.profiles.save_profile(profile)

        logger.info(f"User {profile.username} ({role}) created by {created_by}")
        return True, {
            "success": True,
            "id": profile.id,
            "email": profile.email,
            "username": profile.username,
            "role": role,
            "area": area,
            "full_name": profile.full_name,
        }, None

    async def delete_user(self, user_id: str, deleted_by: str) -> Tuple[bool, Optional[str]]:
        profile = await self.profiles.get_profile(user_id)
        if not profile:
            return False, NOT_FOUND

        try:
            await self.auth.delete_user(user_id)
        except AuthProviderError as e:
            logger.error(f"Provider rejected deletion of {user_id}: {e}")
            return False, f"Error al eliminar usuario: {e}"

        await self.profiles.delete_profile(user_id)
        logger.info(f"User {user_id} deleted by {deleted_by}")
        return True, None

    async def approve_user(self, user_id: str, data: UserApprove, approved_by: str) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        """Activate a self-registered account with the chosen role and area"""
        role = data.role.value
        area = data.area.value if data.area else None

        pending = await self.profiles.get_profile(user_id)
        if not pending:
            return False, None, NOT_FOUND

        try:
            # Self-registered provider accounts start disabled
            await self.auth.update_user(user_id, disabled=False)
            await self.auth.set_custom_claims(user_id, {"role": role, "name": pending.full_name})
        except AuthProviderError as e:
            logger.error(f"Provider rejected approval of {user_id}: {e}")
            return False, None, f"Error al aprobar usuario: {e}"

        success, profile, error = await self.profiles.update_profile(
            user_id, {"role": role, "area": area, "active": True}
        )
        if not success:
            return False, None, error

        logger.info(f"User {profile.username} approved as {role} by {approved_by}")
        return True, profile.model_dump(), None


user_service = UserService()
