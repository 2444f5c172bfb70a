from typing import Dict, Any, Optional, Tuple
import logging

from ..auth.firebase_auth import firebase_auth
from ..core.clock import now_iso
from ..core.config import settings
from ..models.user import Profile, RegisterRequest, UserRole
from .profile_service import profile_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales incorrectas"


class AuthService:
    def __init__(self):
        self.auth = firebase_auth
        self.profiles = profile_service

    async def _find_login_profile(self, username: str) -> Optional[Profile]:
        username = (username or "").strip()
        if "@" in username:
            return await self.profiles.find_by_email(username)
        profile = await self.profiles.find_by_username(username)
        if profile:
            return profile
        # Accounts seeded before usernames were stored only exist by e-mail
        return await self.profiles.find_by_email(f"{username}@{settings.EMAIL_DOMAIN}")

    async def login(self, username: str, password: str) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        """Resolve username -> profile, then verify the password with the provider"""
        profile = await self._find_login_profile(username)
        if not profile or not profile.active:
            logger.info(f"Login rejected for '{username}': unknown or inactive profile")
            return False, None, INVALID_CREDENTIALS

        token_data = await self.auth.sign_in_with_password(profile.email, password)
        if not token_data or not token_data.get("idToken"):
            return False, None, INVALID_CREDENTIALS

        logger.info(f"Login ok: {profile.username} ({profile.role})")
        return True, {"user": profile.to_user(), "accessToken": token_data["idToken"]}, None

    async def resolve_token(self, token: str) -> Optional[Profile]:
        """Bearer token -> active profile, or None"""
        if not token:
            return None
        decoded = await self.auth.verify_token(token)
        if not decoded:
            return None
        uid = decoded.get("uid") or decoded.get("user_id") or decoded.get("sub")
        if not uid:
            return None
        profile = await self.profiles.get_profile(uid)
        if not profile or not profile.active:
            logger.warning(f"Token for uid {uid} has no active profile")
            return None
        return profile

    async def register(self, body: RegisterRequest) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        """Create the provider account plus an inactive profile pending approval"""
        if await self.profiles.find_by_email(body.email):
            return False, None, "El correo ya está registrado"
        if await self.auth.get_user_by_email(body.email):
            return False, None, "El correo ya está registrado"

        full_name = f"{body.nombre.strip()} {body.apellidos.strip()}"
        created = await self.auth.create_user(
            email=body.email,
            password=body.password,
            display_name=full_name,
            disabled=True,
        )

        username = body.email.split("@")[0]
        if await self.profiles.find_by_username(username):
            username = f"{username}-{created['uid'][:6]}"

        profile = Profile(
            id=created["uid"],
            email=body.email,
            username=username,
            full_name=full_name,
            role=UserRole.EMPLEADO.value,
            area=None,
            active=False,
            created_at=now_iso(),
            phone=body.telefono,
            address=body.direccion,
        )
        await self.profiles.save_profile(profile)
        await self.auth.set_custom_claims(profile.id, {"role": profile.role, "name": full_name})

        logger.info(f"Registration pending approval: {body.email}")
        return True, {"ok": True, "id": profile.id}, None


auth_service = AuthService()
