import logging
from typing import Optional, Dict, Any

import httpx
from firebase_admin import auth

from ..core.config import settings
from ..core.firebase_init import initialize_firebase, is_firebase_available

logger = logging.getLogger(__name__)


class AuthProviderError(Exception):
    """Raised when the identity provider rejects an operation"""


class FirebaseAuth:
    def _ensure_initialized(self):
        if not is_firebase_available():
            if not initialize_firebase():
                raise AuthProviderError("Firebase initialization failed - Auth not available")

    async def sign_in_with_password(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """
        Server-side password verification using the Identity Toolkit REST API.
        Returns {idToken, refreshToken, expiresIn, localId, ...} or None on bad credentials.
        """
        if not settings.FIREBASE_WEB_API_KEY:
            raise AuthProviderError("Missing FIREBASE_WEB_API_KEY")
        url = (
            "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
            f"?key={settings.FIREBASE_WEB_API_KEY}"
        )
        payload = {"email": email, "password": password, "returnSecureToken": True}
        async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            resp = await client.post(url, json=payload)
        if resp.status_code != 200:
            logger.info(f"Password sign-in rejected for {email}: HTTP {resp.status_code}")
            return None
        return resp.json()

    async def verify_token(self, token: str) -> Optional[dict]:
        self._ensure_initialized()
        try:
            return auth.verify_id_token(token)
        except Exception as e:
            logger.info(f"Token verification failed: {e}")
            return None

    async def create_user(self, email: str, password: str, display_name: str = None, disabled: bool = False) -> dict:
        self._ensure_initialized()
        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                email_verified=True,
                disabled=disabled,
            )
            return {"uid": user.uid, "email": user.email}
        except Exception as e:
            raise AuthProviderError(f"User creation failed: {e}") from e

    async def set_custom_claims(self, uid: str, claims: dict):
        self._ensure_initialized()
        try:
            auth.set_custom_user_claims(uid, claims)
        except Exception as e:
            raise AuthProviderError(f"Setting custom claims failed: {e}") from e

    async def get_user_by_email(self, email: str):
        self._ensure_initialized()
        try:
            return auth.get_user_by_email(email)
        except auth.UserNotFoundError:
            return None

    async def update_user(self, uid: str, **kwargs):
        """Update user properties in Firebase Auth"""
        self._ensure_initialized()
        try:
            auth.update_user(uid, **kwargs)
        except Exception as e:
            raise AuthProviderError(f"User update failed: {e}") from e

    async def delete_user(self, uid: str):
        """Delete a user from Firebase Auth"""
        self._ensure_initialized()
        try:
            auth.delete_user(uid)
        except Exception as e:
            raise AuthProviderError(f"User deletion failed: {e}") from e


firebase_auth = FirebaseAuth()
