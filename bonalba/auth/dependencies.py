from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import logging

from ..models.user import Profile, UserRole
from ..services.auth_service import auth_service

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

UNAUTHORIZED = "No autorizado"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Profile:
    """
    Resolve the bearer token to an active profile.
    Raises 401 if the token is missing, invalid, or has no active profile.
    """
    if credentials is None or not credentials.credentials:
        logger.warning("[Auth] Missing bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        profile = await auth_service.resolve_token(credentials.credentials)
    except Exception as e:
        logger.error(f"[Auth] Authentication error: {str(e)}")
        profile = None

    if profile is None:
        logger.warning("[Auth] Token verification failed - invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"[Auth] Authenticated user: {profile.username} with role: {profile.role}")
    return profile


def require_role(required_roles: list):
    allowed = [r.value if isinstance(r, UserRole) else r for r in required_roles]

    async def role_checker(current_user: Profile = Depends(get_current_user)) -> Profile:
        if current_user.role not in allowed:
            logger.warning(f"[Auth] Role check failed: user role '{current_user.role}' not in required roles {allowed}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)
        return current_user

    return role_checker


require_admin = require_role([UserRole.ADMIN])
require_manager = require_role([UserRole.ADMIN, UserRole.ENCARGADO])
