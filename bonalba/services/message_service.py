from typing import Dict, Any, List, Optional, Tuple
import logging

from ..core.clock import now_iso
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS
from ..models.database_models import MessageCreate
from ..models.user import Profile, UserRole
from .id_service import id_service

logger = logging.getLogger(__name__)

BROADCAST = "all"


class MessageService:
    def __init__(self):
        self.db = kv_store

    async def list_messages(self, user: Profile) -> List[Dict[str, Any]]:
        """Admins see every message; everyone else their own plus broadcasts"""
        messages = await self.db.get(COLLECTIONS['messages']) or []
        if user.role == UserRole.ADMIN.value:
            return messages
        return [m for m in messages if m.get("recipientId") in (user.id, BROADCAST)]

    async def send_message(self, data: MessageCreate, sender: Profile) -> Dict[str, Any]:
        message = {
            "id": id_service.generate("message"),
            "senderId": sender.id,
            "senderName": sender.display_name,
            "recipientId": data.recipientId,
            "subject": data.subject,
            "message": data.message,
            "read": False,
            "date": now_iso(),
        }

        def _prepend(messages):
            messages.insert(0, message)
            return messages, message

        await self.db.update(COLLECTIONS['messages'], _prepend, default=[])
        logger.info(f"Message {message['id']} sent by {sender.username} to {data.recipientId}")
        return message

    async def mark_read(self, message_id: str) -> Tuple[bool, Optional[str]]:
        def _read(messages):
            for msg in messages:
                if msg.get("id") == message_id:
                    if msg.get("read"):
                        return None, True
                    msg["read"] = True
                    return messages, True
            return None, False

        found = await self.db.update(COLLECTIONS['messages'], _read, default=[])
        if not found:
            return False, "Mensaje no encontrado"
        return True, None


message_service = MessageService()
