from typing import Dict, Any, List, Optional, Tuple
import logging

from ..core.clock import now_iso
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS
from ..models.database_models import EquipmentCreate
from .id_service import id_service

logger = logging.getLogger(__name__)


class EquipmentService:
    def __init__(self):
        self.db = kv_store

    async def list_equipment(self, equipment_type: Optional[str] = None) -> List[Dict[str, Any]]:
        equipment = await self.db.get(COLLECTIONS['equipment']) or []
        if equipment_type:
            equipment = [eq for eq in equipment if eq.get("type") == equipment_type]
        return equipment

    async def create_equipment(self, data: EquipmentCreate, created_by: str) -> Dict[str, Any]:
        """Create a new equipment record"""
        equipment = {
            "id": id_service.generate("equipment"),
            "name": data.name,
            "type": data.type.value,
            "status": "ok",
            "lastCheck": now_iso(),
        }

        def _append(items):
            items.append(equipment)
            return items, equipment

        await self.db.update(COLLECTIONS['equipment'], _append, default=[])
        logger.info(f"Equipment {equipment['id']} created by {created_by}")
        return equipment

    async def delete_equipment(self, equipment_id: str, deleted_by: str) -> Tuple[bool, Optional[str]]:
        """Hard delete: the record is filtered out of the collection"""
        def _remove(items):
            remaining = [eq for eq in items if eq.get("id") != equipment_id]
            if len(remaining) == len(items):
                return None, False
            return remaining, True

        removed = await self.db.update(COLLECTIONS['equipment'], _remove, default=[])
        if not removed:
            return False, "Equipo no encontrado"
        logger.info(f"Equipment {equipment_id} deleted by {deleted_by}")
        return True, None


equipment_service = EquipmentService()
