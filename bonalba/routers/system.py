from fastapi import APIRouter, HTTPException
from typing import Dict, Any
import logging

from ..services.seed_service import seed_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/init", response_model=Dict[str, Any])
async def init_data():
    """Seed the checklist catalogue, equipment and demo users (safe to repeat)"""
    try:
        return await seed_service.initialize()
    except Exception as e:
        logger.error(f"Error initializing data: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al inicializar datos: {e}")
