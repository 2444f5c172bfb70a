from fastapi import APIRouter, HTTPException, Depends, Path
from typing import Dict, Any, List
from ..auth.dependencies import get_current_user, require_admin
from ..services.message_service import message_service
from ..models.database_models import MessageCreate
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("", response_model=List[Dict[str, Any]])
async def list_messages(current_user: Profile = Depends(get_current_user)):
    try:
        return await message_service.list_messages(current_user)
    except Exception as e:
        logger.error(f"Error fetching messages: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener mensajes: {e}")


@router.post("", response_model=Dict[str, Any])
async def send_message(
    body: MessageCreate,
    current_user: Profile = Depends(require_admin)
):
    try:
        return await message_service.send_message(body, current_user)
    except Exception as e:
        logger.error(f"Error sending message: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al enviar mensaje: {e}")


@router.put("/{message_id}/read", response_model=Dict[str, Any])
async def mark_message_read(
    message_id: str = Path(..., description="Message ID"),
    current_user: Profile = Depends(get_current_user)
):
    try:
        success, error = await message_service.mark_read(message_id)
        if not success:
            raise HTTPException(status_code=404, detail=error)
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error marking message {message_id} read: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al marcar mensaje: {e}")
