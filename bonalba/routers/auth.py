"""
Authentication routes.

- Login: username (or e-mail) + password. The username is resolved to a
  profile first, the password is then checked by Firebase (REST sign-in).
  Returns {user, accessToken}.
- Me: the profile behind the bearer token.
- Register: self-service sign-up, stored inactive until an admin approves it.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status, Depends

from ..auth.dependencies import get_current_user
from ..models.user import LoginRequest, RegisterRequest, Profile
from ..services.auth_service import auth_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=Dict[str, Any])
async def login(body: LoginRequest):
    try:
        success, data, error = await auth_service.login(body.username, body.password)
        if not success:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=error)
        return data
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Login failed for {body.username}")
        raise HTTPException(status_code=500, detail=f"Error al iniciar sesión: {e}")


@router.get("/me", response_model=Dict[str, Any])
async def me(current_user: Profile = Depends(get_current_user)):
    return {"user": current_user.to_user()}


@router.post("/register", response_model=Dict[str, Any])
async def register(body: RegisterRequest):
    try:
        success, data, error = await auth_service.register(body)
        if not success:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
        return data
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Registration failed for {body.email}")
        raise HTTPException(status_code=500, detail=f"Error al registrar: {e}")
