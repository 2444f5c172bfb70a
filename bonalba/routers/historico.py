from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Dict, Any, List, Optional
from ..auth.dependencies import get_current_user
from ..services.historico_service import historico_service
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/historico", tags=["Historico"])


@router.get("", response_model=List[Dict[str, Any]])
async def list_historico(
    type: Optional[str] = Query(None, description="checklist, incidencia, appcc or todos"),
    current_user: Profile = Depends(get_current_user)
):
    try:
        return await historico_service.list_entries(type)
    except Exception as e:
        logger.error(f"Error fetching historico: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener histórico: {e}")


@router.get("/summary", response_model=Dict[str, int])
async def historico_summary(current_user: Profile = Depends(get_current_user)):
    try:
        return await historico_service.summary()
    except Exception as e:
        logger.error(f"Error computing historico summary: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener resumen: {e}")
