from typing import Dict, Any, List, Optional, Tuple
import logging

from ..core.clock import now_iso
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS, incidencia_key
from ..models.database_models import IncidenciaCreate, IncidenciaStatus, HistoricoType
from ..models.user import Profile
from .historico_service import historico_service
from .id_service import id_service

logger = logging.getLogger(__name__)

NOT_FOUND = "Incidencia no encontrada"


class IncidenciaService:
    """Each incidencia lives under incidencia:<id> with its photo inline; the incidencias key only holds ids, newest first"""

    def __init__(self):
        self.db = kv_store
        self.historico = historico_service

    async def list_incidencias(self) -> List[Dict[str, Any]]:
        ids = await self.db.get(COLLECTIONS['incidencias']) or []
        records = await self.db.mget([incidencia_key(i) for i in ids])
        return [r for r in records if r is not None]

    async def create_incidencia(self, data: IncidenciaCreate, user: Profile) -> Dict[str, Any]:
        incidencia = {
            "id": id_service.generate("incidencia"),
            "title": data.title,
            "description": data.description or "",
            "priority": data.priority.value,
            "status": IncidenciaStatus.ABIERTA.value,
            "checklistId": data.checklistId,
            "taskId": data.taskId,
            "userId": user.id,
            "userName": user.display_name,
            "photoData": data.photoData or None,
            "date": now_iso(),
            "updates": [],
        }

        await self.db.set(incidencia_key(incidencia["id"]), incidencia)

        def _prepend(ids):
            ids.insert(0, incidencia["id"])
            return ids, None

        await self.db.update(COLLECTIONS['incidencias'], _prepend, default=[])

        await self.historico.record(
            HistoricoType.INCIDENCIA.value,
            "Incidencia creada",
            user,
            incidenciaId=incidencia["id"],
            title=data.title,
        )
        logger.info(f"Incidencia {incidencia['id']} created by {user.username}")
        return incidencia

    async def update_status(
        self, incidencia_id: str, status: IncidenciaStatus, comment: Optional[str], user: Profile
    ) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        """Free-form status change plus one entry in the update log"""
        log_entry = {
            "date": now_iso(),
            "user": user.display_name,
            "action": f"Estado cambiado a: {status.value}",
            "comment": comment,
        }

        def _apply(inc):
            if inc is None:
                return None, None
            inc["status"] = status.value
            inc.setdefault("updates", []).append(log_entry)
            return inc, inc

        updated = await self.db.update(incidencia_key(incidencia_id), _apply)
        if updated is None:
            return False, None, NOT_FOUND
        return True, updated, None

    async def delete_incidencia(self, incidencia_id: str) -> Tuple[bool, Optional[str]]:
        def _remove(ids):
            if incidencia_id not in ids:
                return None, False
            return [i for i in ids if i != incidencia_id], True

        removed = await self.db.update(COLLECTIONS['incidencias'], _remove, default=[])
        if not removed:
            return False, NOT_FOUND
        await self.db.delete(incidencia_key(incidencia_id))
        return True, None


incidencia_service = IncidenciaService()
