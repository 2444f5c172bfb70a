from typing import Dict, Any, List, Optional, Tuple
import logging

from ..core.clock import now_iso, today
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS, daily_progress_key
from ..models.database_models import TaskStatus, HistoricoType
from ..models.user import Profile
from .historico_service import historico_service
from .incidencia_service import incidencia_service

logger = logging.getLogger(__name__)


def count_completed(tasks: Dict[str, Dict[str, Any]]) -> int:
    """Only tasks whose status is exactly 'completed' count toward progress"""
    return sum(1 for t in tasks.values() if t.get("status") == TaskStatus.COMPLETED.value)


class ChecklistService:
    def __init__(self):
        self.db = kv_store
        self.historico = historico_service
        self.incidencias = incidencia_service

    async def _catalogue(self) -> Tuple[List[Dict[str, Any]], Dict[str, List[Dict[str, Any]]]]:
        checklists = await self.db.get(COLLECTIONS['checklists']) or []
        all_tasks = await self.db.get(COLLECTIONS['checklist_tasks']) or {}
        return checklists, all_tasks

    async def list_checklists(self) -> List[Dict[str, Any]]:
        """Every checklist with today's progress and today's incidencia count"""
        day = today()
        checklists, all_tasks = await self._catalogue()
        day_progress = await self.db.get(daily_progress_key(day)) or {}
        incidencias = await self.incidencias.list_incidencias()

        result = []
        for checklist in checklists:
            stored = day_progress.get(checklist["id"]) or {}
            progress = {
                "completed": stored.get("completed", 0),
                "total": stored.get("total", len(all_tasks.get(checklist["id"], []))),
            }
            reported_today = [
                inc for inc in incidencias
                if inc.get("checklistId") == checklist["id"] and str(inc.get("date", "")).startswith(day)
            ]
            result.append({**checklist, "progress": progress, "incidencias": len(reported_today)})
        return result

    async def get_checklist_tasks(self, checklist_id: str) -> Tuple[bool, Optional[List[Dict[str, Any]]], Optional[str]]:
        checklists, all_tasks = await self._catalogue()
        if checklist_id not in all_tasks and not any(c.get("id") == checklist_id for c in checklists):
            return False, None, "Checklist no encontrado"

        day_progress = await self.db.get(daily_progress_key(today())) or {}
        task_progress = (day_progress.get(checklist_id) or {}).get("tasks", {})

        tasks = []
        for task in all_tasks.get(checklist_id, []):
            state = task_progress.get(task["id"]) or {}
            tasks.append({
                **task,
                "status": state.get("status") or TaskStatus.PENDING.value,
                "observations": state.get("observations") or "",
                "completedBy": state.get("completedBy"),
                "completedAt": state.get("completedAt"),
            })
        return True, tasks, None

    async def complete_task(
        self, checklist_id: str, task_id: str, observations: Optional[str], user: Profile
    ) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        """Mark a task completed for today and recompute the checklist's counters"""
        _, all_tasks = await self._catalogue()
        if checklist_id not in all_tasks:
            return False, None, "Checklist no encontrado"
        tasks = all_tasks[checklist_id]
        if not any(t.get("id") == task_id for t in tasks):
            return False, None, "Tarea no encontrada"

        day = today()
        state = {
            "status": TaskStatus.COMPLETED.value,
            "observations": observations or "",
            "completedBy": user.display_name,
            "completedAt": now_iso(),
        }

        def _mark(day_progress):
            entry = day_progress.setdefault(checklist_id, {"tasks": {}})
            entry.setdefault("tasks", {})[task_id] = state
            entry["completed"] = count_completed(entry["tasks"])
            entry["total"] = len(tasks)
            return day_progress, {"completed": entry["completed"], "total": entry["total"]}

        progress = await self.db.update(daily_progress_key(day), _mark, default={})

        await self.historico.record(
            HistoricoType.CHECKLIST.value,
            "Tarea completada",
            user,
            checklistId=checklist_id,
            taskId=task_id,
            observations=observations or "",
        )
        logger.info(f"Task {checklist_id}/{task_id} completed by {user.username} ({progress['completed']}/{progress['total']})")
        return True, {"success": True, "progress": progress}, None


checklist_service = ChecklistService()
