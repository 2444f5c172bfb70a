from fastapi import APIRouter, HTTPException, Depends, Path
from typing import Dict, Any, List
from ..auth.dependencies import get_current_user
from ..services.checklist_service import checklist_service
from ..models.database_models import TaskComplete
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/checklists",
    tags=["Checklists"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[Dict[str, Any]])
async def list_checklists(current_user: Profile = Depends(get_current_user)):
    """All checklists with today's progress"""
    try:
        return await checklist_service.list_checklists()
    except Exception as e:
        logger.error(f"Error fetching checklists: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener checklists: {e}")


@router.get("/{checklist_id}", response_model=Dict[str, Any])
async def get_checklist(
    checklist_id: str = Path(..., description="Checklist ID"),
    current_user: Profile = Depends(get_current_user)
):
    try:
        success, tasks, error = await checklist_service.get_checklist_tasks(checklist_id)
        if not success:
            raise HTTPException(status_code=404, detail=error)
        return {"tasks": tasks}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching checklist {checklist_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener tareas: {e}")


@router.post("/{checklist_id}/tasks/{task_id}/complete", response_model=Dict[str, Any])
async def complete_task(
    checklist_id: str,
    task_id: str,
    body: TaskComplete = TaskComplete(),
    current_user: Profile = Depends(get_current_user)
):
    try:
        success, data, error = await checklist_service.complete_task(
            checklist_id, task_id, body.observations, current_user
        )
        if not success:
            raise HTTPException(status_code=404, detail=error)
        return data
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error completing task {checklist_id}/{task_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al completar tarea: {e}")
