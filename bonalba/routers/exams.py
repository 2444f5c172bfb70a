from fastapi import APIRouter, HTTPException, Depends, Path
from typing import Dict, Any, List
from ..auth.dependencies import get_current_user, require_admin
from ..services.exam_service import exam_service
from ..models.database_models import ExamCreate, ExamSubmit
from ..models.user import Profile
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exams",
    tags=["Exams"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[Dict[str, Any]])
async def list_exams(current_user: Profile = Depends(get_current_user)):
    try:
        return await exam_service.list_exams()
    except Exception as e:
        logger.error(f"Error fetching exams: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener exámenes: {e}")


@router.post("", response_model=Dict[str, Any])
async def create_exam(
    body: ExamCreate,
    current_user: Profile = Depends(require_admin)
):
    try:
        return await exam_service.create_exam(body, current_user)
    except Exception as e:
        logger.error(f"Error creating exam: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al crear examen: {e}")


# Result routes are registered before /{exam_id}/... so "results" is never read as an id
@router.get("/results", response_model=List[Dict[str, Any]])
async def list_results(current_user: Profile = Depends(require_admin)):
    try:
        return await exam_service.list_results()
    except Exception as e:
        logger.error(f"Error fetching exam results: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener resultados: {e}")


@router.get("/results/me", response_model=List[Dict[str, Any]])
async def list_my_results(current_user: Profile = Depends(get_current_user)):
    try:
        return await exam_service.list_results(user_id=current_user.id)
    except Exception as e:
        logger.error(f"Error fetching results for {current_user.id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al obtener resultados: {e}")


@router.post("/{exam_id}/submit", response_model=Dict[str, Any])
async def submit_exam(
    body: ExamSubmit,
    exam_id: str = Path(..., description="Exam ID"),
    current_user: Profile = Depends(get_current_user)
):
    try:
        success, result, error = await exam_service.submit_exam(exam_id, body.answers, current_user)
        if not success:
            raise HTTPException(status_code=404, detail=error)
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error submitting exam {exam_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error al enviar examen: {e}")
