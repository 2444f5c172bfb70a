from fastapi import APIRouter, HTTPException, Depends, Query, Path
from typing import Dict, Any, List, Optional
from ..auth.dependencies import get_current_user, require_admin
from ..services.equipment_service import equipment_service
from ..models.database_models import EquipmentCreate, EquipmentType
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/equipment",
    tags=["Equipment"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[Dict[str, Any]])
async def list_equipment(
    type: Optional[EquipmentType] = Query(None),
    current_user: Profile = Depends(get_current_user)
):
    try:
        return await equipment_service.list_equipment(type.value if type else None)
    except Exception as e:
        logger.error(f"Error fetching equipment: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener equipos: {e}")


@router.post("", response_model=Dict[str, Any])
async def create_equipment(
    body: EquipmentCreate,
    current_user: Profile = Depends(require_admin)
):
    """Create a new equipment record (Admin only)"""
    try:
        return await equipment_service.create_equipment(body, current_user.username)
    except Exception as e:
        logger.error(f"Error creating equipment: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al crear equipo: {e}")


@router.delete("/{equipment_id}", response_model=Dict[str, Any])
async def delete_equipment(
    equipment_id: str = Path(..., description="Equipment ID"),
    current_user: Profile = Depends(require_admin)
):
    """Delete equipment (Admin only)"""
    try:
        success, error = await equipment_service.delete_equipment(equipment_id, current_user.username)
        if not success:
            raise HTTPException(status_code=404, detail=error)
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting equipment {equipment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al eliminar equipo: {e}")
