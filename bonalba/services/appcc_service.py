from typing import Dict, Any, List, Optional
import logging

from ..core.clock import now_iso
from ..core.config import settings
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS
from ..models.database_models import TemperaturaCreate, AceiteCreate, RegistroType, HistoricoType
from ..models.user import Profile
from .historico_service import historico_service
from .id_service import id_service

logger = logging.getLogger(__name__)


def is_out_of_range(temperature: float) -> bool:
    return temperature < settings.TEMPERATURE_MIN or temperature > settings.TEMPERATURE_MAX


class APPCCService:
    """Food-safety readings: cold-room temperatures and fryer oil changes"""

    def __init__(self):
        self.db = kv_store
        self.historico = historico_service

    async def list_registros(self, registro_type: Optional[str] = None, equipment_id: Optional[str] = None) -> List[Dict[str, Any]]:
        registros = await self.db.get(COLLECTIONS['appcc_registros']) or []
        if registro_type:
            registros = [r for r in registros if r.get("type") == registro_type]
        if equipment_id:
            registros = [r for r in registros if r.get("equipmentId") == equipment_id]
        return registros

    async def _store(self, registro: Dict[str, Any]) -> Dict[str, Any]:
        limit = settings.APPCC_LIMIT

        def _prepend(registros):
            registros.insert(0, registro)
            return registros[:limit], registro

        return await self.db.update(COLLECTIONS['appcc_registros'], _prepend, default=[])

    async def record_temperature(self, data: TemperaturaCreate, user: Profile) -> Dict[str, Any]:
        registro = {
            "id": id_service.generate("registro"),
            "type": RegistroType.TEMPERATURA.value,
            "equipmentId": data.equipmentId,
            "temperature": data.temperature,
            "outOfRange": is_out_of_range(data.temperature),
            "observations": data.observations or "",
            "userId": user.id,
            "userName": user.display_name,
            "date": now_iso(),
        }
        await self._store(registro)
        await self.historico.record(
            HistoricoType.APPCC.value,
            "Temperatura registrada",
            user,
            equipmentId=data.equipmentId,
            temperature=data.temperature,
        )
        if registro["outOfRange"]:
            logger.warning(f"Temperature out of range on {data.equipmentId}: {data.temperature}°C")
        return registro

    async def record_oil_change(self, data: AceiteCreate, user: Profile) -> Dict[str, Any]:
        registro = {
            "id": id_service.generate("registro"),
            "type": RegistroType.ACEITE.value,
            "equipmentId": data.equipmentId,
            "tipo": data.tipo,
            "motivo": data.motivo or "",
            "observations": data.observations or "",
            "userId": user.id,
            "userName": user.display_name,
            "date": now_iso(),
        }
        await self._store(registro)
        await self.historico.record(
            HistoricoType.APPCC.value,
            "Cambio de aceite registrado",
            user,
            equipmentId=data.equipmentId,
            tipo=data.tipo,
        )
        return registro


appcc_service = APPCCService()
