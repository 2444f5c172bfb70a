from fastapi import APIRouter, HTTPException, Depends, Path
from typing import Dict, Any, List
from ..auth.dependencies import require_admin
from ..services.user_service import user_service, NOT_FOUND
from ..models.user import Profile, UserCreate, UserApprove
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[Dict[str, Any]])
async def list_users(current_user: Profile = Depends(require_admin)):
    try:
        return await user_service.list_users()
    except Exception as e:
        logger.error(f"Error fetching users: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener usuarios: {e}")


@router.get("/pending", response_model=List[Dict[str, Any]])
async def list_pending_users(current_user: Profile = Depends(require_admin)):
    """Self-registered accounts waiting for approval"""
    try:
        return await user_service.list_pending()
    except Exception as e:
        logger.error(f"Error fetching pending users: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener usuarios pendientes: {e}")


@router.post("", response_model=Dict[str, Any])
async def create_user(
    body: UserCreate,
    current_user: Profile = Depends(require_admin)
):
    try:
        success, data, error = await user_service.create_user(body, current_user.username)
        if not success:
            raise HTTPException(status_code=400, detail=error)
        return data
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating user: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al crear usuario: {e}")


@router.post("/{user_id}/approve", response_model=Dict[str, Any])
async def approve_user(
    body: UserApprove,
    user_id: str = Path(..., description="Profile ID"),
    current_user: Profile = Depends(require_admin)
):
    try:
        success, profile, error = await user_service.approve_user(user_id, body, current_user.username)
        if not success:
            code = 404 if error == NOT_FOUND else 400
            raise HTTPException(status_code=code, detail=error)
        return profile
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error approving user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al aprobar usuario: {e}")


@router.delete("/{user_id}", response_model=Dict[str, Any])
async def delete_user(
    user_id: str,
    current_user: Profile = Depends(require_admin)
):
    try:
        success, error = await user_service.delete_user(user_id, current_user.username)
        if not success:
            code = 404 if error == NOT_FOUND else 400
            raise HTTPException(status_code=code, detail=error)
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al eliminar usuario: {e}")
