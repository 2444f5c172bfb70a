from typing import Dict, Any, List
import logging

from ..auth.firebase_auth import firebase_auth, AuthProviderError
from ..core.clock import now_iso
from ..core.config import settings
from ..database.kv_store import kv_store
from ..database.collections import COLLECTIONS
from ..database import seed_data
from ..models.database_models import Checklist, ChecklistTask
from ..models.user import Profile
from .profile_service import profile_service

logger = logging.getLogger(__name__)


class SeedService:
    """
    Populates the static catalogue and demo accounts.
    Keys that already hold a value and e-mails that already exist are skipped,
    so running it twice leaves stored data untouched.
    """

    def __init__(self):
        self.db = kv_store
        self.auth = firebase_auth
        self.profiles = profile_service

    async def _seed_key(self, key: str, value: Any, seeded: List[str]) -> None:
        def _create(current):
            if current is not None:
                return None, False
            return value, True

        if await self.db.update(key, _create):
            seeded.append(key)
            logger.info(f"Seeded {key}")

    async def _seed_user(self, user: Dict[str, Any], seeded: List[str]) -> None:
        if await self.profiles.find_by_email(user["email"]):
            return

        existing = await self.auth.get_user_by_email(user["email"])
        if existing:
            uid = existing.uid
        else:
            created = await self.auth.create_user(
                email=user["email"],
                password=settings.DEMO_PASSWORD,
                display_name=user["full_name"],
            )
            uid = created["uid"]
        await self.auth.set_custom_claims(uid, {"role": user["role"], "name": user["full_name"]})

        await self.profiles.save_profile(Profile(
            id=uid,
            email=user["email"],
            username=user["username"],
            full_name=user["full_name"],
            role=user["role"],
            area=user["area"],
            active=True,
            created_at=now_iso(),
        ))
        seeded.append(f"user:{user['username']}")
        logger.info(f"Seeded demo user {user['username']}")

    async def initialize(self) -> Dict[str, Any]:
        seeded: List[str] = []

        checklists = [Checklist(**c).model_dump(mode="json") for c in seed_data.CHECKLISTS]
        tasks = {
            checklist_id: [ChecklistTask(**t).model_dump(mode="json") for t in items]
            for checklist_id, items in seed_data.CHECKLIST_TASKS.items()
        }
        await self._seed_key(COLLECTIONS['checklists'], checklists, seeded)
        await self._seed_key(COLLECTIONS['checklist_tasks'], tasks, seeded)

        stamp = now_iso()
        equipment = [{**eq, "lastCheck": stamp} for eq in seed_data.EQUIPMENT]
        await self._seed_key(COLLECTIONS['equipment'], equipment, seeded)

        for user in seed_data.DEMO_USERS:
            try:
                await self._seed_user(user, seeded)
            except AuthProviderError as e:
                logger.error(f"Could not seed demo user {user['username']}: {e}")

        return {
            "success": True,
            "message": "Datos inicializados correctamente" if seeded else "Los datos ya estaban inicializados",
            "seeded": seeded,
        }


seed_service = SeedService()
