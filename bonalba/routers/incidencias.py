from fastapi import APIRouter, HTTPException, Depends, Path
from typing import Dict, Any, List
from ..auth.dependencies import get_current_user, require_manager
from ..services.incidencia_service import incidencia_service
from ..models.database_models import IncidenciaCreate, IncidenciaStatusUpdate
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/incidencias",
    tags=["Incidencias"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[Dict[str, Any]])
async def list_incidencias(current_user: Profile = Depends(get_current_user)):
    try:
        return await incidencia_service.list_incidencias()
    except Exception as e:
        logger.error(f"Error fetching incidencias: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener incidencias: {e}")


@router.post("", response_model=Dict[str, Any])
async def create_incidencia(
    body: IncidenciaCreate,
    current_user: Profile = Depends(get_current_user)
):
    try:
        return await incidencia_service.create_incidencia(body, current_user)
    except Exception as e:
        logger.error(f"Error creating incidencia: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al crear incidencia: {e}")


@router.put("/{incidencia_id}/status", response_model=Dict[str, Any])
async def update_incidencia_status(
    body: IncidenciaStatusUpdate,
    incidencia_id: str = Path(..., description="Incidencia ID"),
    current_user: Profile = Depends(get_current_user)
):
    try:
        success, incidencia, error = await incidencia_service.update_status(
            incidencia_id, body.status, body.comment, current_user
        )
        if not success:
            raise HTTPException(status_code=404, detail=error)
        return incidencia
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating incidencia {incidencia_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al actualizar incidencia: {e}")


@router.delete("/{incidencia_id}", response_model=Dict[str, Any])
async def delete_incidencia(
    incidencia_id: str,
    current_user: Profile = Depends(require_manager)
):
    """Remove an incidencia (admin or encargado)"""
    try:
        success, error = await incidencia_service.delete_incidencia(incidencia_id)
        if not success:
            raise HTTPException(status_code=404, detail=error)
        logger.info(f"Incidencia {incidencia_id} deleted by {current_user.username}")
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting incidencia {incidencia_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al eliminar incidencia: {e}")
