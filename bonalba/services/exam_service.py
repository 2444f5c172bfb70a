from typing import Dict, Any, List, Optional, Tuple
import logging

from ..core.clock import now_iso
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS
from ..models.database_models import ExamCreate
from ..models.user import Profile
from .id_service import id_service

logger = logging.getLogger(__name__)


def score_answers(questions: List[Dict[str, Any]], answers: List[Optional[int]]) -> Dict[str, Any]:
    """
    Positional comparison against each question's correctAnswer.
    Missing answers count as wrong; an exam without questions scores 0.
    """
    total = len(questions)
    correct = 0
    for index, question in enumerate(questions):
        if index < len(answers) and answers[index] is not None and answers[index] == question.get("correctAnswer"):
            correct += 1
    score = (correct / total) * 100 if total else 0.0
    return {"score": score, "correct": correct, "total": total}


class ExamService:
    def __init__(self):
        self.db = kv_store

    async def list_exams(self) -> List[Dict[str, Any]]:
        return await self.db.get(COLLECTIONS['exams']) or []

    async def create_exam(self, data: ExamCreate, user: Profile) -> Dict[str, Any]:
        exam = {
            "id": id_service.generate("exam"),
            "title": data.title,
            "description": data.description or "",
            "questions": [q.model_dump() for q in data.questions],
            "createdBy": user.display_name,
            "createdAt": now_iso(),
        }

        def _append(exams):
            exams.append(exam)
            return exams, exam

        await self.db.update(COLLECTIONS['exams'], _append, default=[])
        logger.info(f"Exam {exam['id']} created by {user.username} with {len(exam['questions'])} questions")
        return exam

    async def submit_exam(
        self, exam_id: str, answers: List[Optional[int]], user: Profile
    ) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        exams = await self.list_exams()
        exam = next((e for e in exams if e.get("id") == exam_id), None)
        if not exam:
            return False, None, "Examen no encontrado"

        result = {
            "id": id_service.generate("result"),
            "examId": exam_id,
            "userId": user.id,
            "userName": user.display_name,
            "answers": answers,
            **score_answers(exam.get("questions", []), answers),
            "date": now_iso(),
        }

        def _append(results):
            results.append(result)
            return results, result

        await self.db.update(COLLECTIONS['exam_results'], _append, default=[])
        logger.info(f"Exam {exam_id} submitted by {user.username}: {result['correct']}/{result['total']}")
        return True, result, None

    async def list_results(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        results = await self.db.get(COLLECTIONS['exam_results']) or []
        if user_id:
            results = [r for r in results if r.get("userId") == user_id]
        return results


exam_service = ExamService()
