from typing import Dict, Any, List, Optional
from datetime import datetime, timedelta, timezone
import logging

from ..core.clock import now_iso, parse_iso
from ..core.config import settings
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS
from ..models.database_models import HistoricoType
from ..models.user import Profile
from .id_service import id_service

logger = logging.getLogger(__name__)


class HistoricoService:
    """Capped audit log fed by checklist, incidencia and APPCC writes. Newest first."""

    def __init__(self):
        self.db = kv_store

    async def record(self, entry_type: str, action: str, user: Profile, **fields) -> Dict[str, Any]:
        entry = {
            "id": id_service.generate("historico"),
            "type": entry_type,
            "action": action,
            "user": user.display_name,
            "userId": user.id,
            **fields,
            "date": now_iso(),
        }
        limit = settings.HISTORICO_LIMIT

        def _prepend(historico):
            historico.insert(0, entry)
            return historico[:limit], entry

        await self.db.update(COLLECTIONS['historico'], _prepend, default=[])
        return entry

    async def list_entries(self, entry_type: Optional[str] = None) -> List[Dict[str, Any]]:
        historico = await self.db.get(COLLECTIONS['historico']) or []
        if entry_type and entry_type != "todos":
            historico = [h for h in historico if h.get("type") == entry_type]
        return historico

    async def summary(self) -> Dict[str, int]:
        """Dashboard KPIs over the stored entries"""
        historico = await self.db.get(COLLECTIONS['historico']) or []
        week_start = datetime.now(timezone.utc) - timedelta(days=7)

        this_week = 0
        for item in historico:
            try:
                if parse_iso(item.get("date", "")) >= week_start:
                    this_week += 1
            except (ValueError, TypeError):
                logger.debug(f"Skipping historico entry with bad date: {item.get('id')}")

        return {
            "total": len(historico),
            "thisWeek": this_week,
            "completedTasks": sum(
                1 for h in historico
                if h.get("type") == HistoricoType.CHECKLIST.value and h.get("action") == "Tarea completada"
            ),
            "incidencias": sum(1 for h in historico if h.get("type") == HistoricoType.INCIDENCIA.value),
        }


historico_service = HistoricoService()
