from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Dict, Any, List, Optional
from ..auth.dependencies import get_current_user
from ..services.appcc_service import appcc_service
from ..models.database_models import TemperaturaCreate, AceiteCreate, RegistroType
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/appcc",
    tags=["APPCC"],
)


@router.get("/registros", response_model=List[Dict[str, Any]])
async def list_registros(
    type: Optional[RegistroType] = Query(None, description="temperatura or aceite"),
    equipmentId: Optional[str] = Query(None),
    current_user: Profile = Depends(get_current_user)
):
    try:
        return await appcc_service.list_registros(type.value if type else None, equipmentId)
    except Exception as e:
        logger.error(f"Error fetching APPCC registros: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener registros: {e}")


@router.post("/temperatura", response_model=Dict[str, Any])
async def record_temperature(
    body: TemperaturaCreate,
    current_user: Profile = Depends(get_current_user)
):
    try:
        return await appcc_service.record_temperature(body, current_user)
    except Exception as e:
        logger.error(f"Error recording temperature: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al registrar temperatura: {e}")


@router.post("/aceite", response_model=Dict[str, Any])
async def record_oil_change(
    body: AceiteCreate,
    current_user: Profile = Depends(get_current_user)
):
    try:
        return await appcc_service.record_oil_change(body, current_user)
    except Exception as e:
        logger.error(f"Error recording oil change: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al registrar cambio de aceite: {e}")
