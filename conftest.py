import os

# Must be set before bonalba is imported: the KV singleton is built at import time
os.environ["KV_BACKEND"] = "memory"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from bonalba.auth.firebase_auth import AuthProviderError
from bonalba.core.config import settings
from bonalba.database.kv_store import MemoryKVStore
from bonalba.models.user import Profile
from bonalba.services.appcc_service import appcc_service
from bonalba.services.auth_service import auth_service
from bonalba.services.checklist_service import checklist_service
from bonalba.services.equipment_service import equipment_service
from bonalba.services.exam_service import exam_service
from bonalba.services.historico_service import historico_service
from bonalba.services.incidencia_service import incidencia_service
from bonalba.services.message_service import message_service
from bonalba.services.profile_service import profile_service
from bonalba.services.seed_service import seed_service
from bonalba.services.user_service import user_service


class FakeAuth:
    """In-process stand-in for the Firebase wrapper: tokens are 'token-<uid>'"""

    def __init__(self):
        self.users = {}
        self.claims = {}
        self._next = 0

    def add_user(self, email, password, uid=None, disabled=False):
        self._next += 1
        uid = uid or f"uid-{self._next}"
        self.users[uid] = {"email": email.lower(), "password": password, "disabled": disabled}
        return uid

    async def sign_in_with_password(self, email, password):
        for uid, user in self.users.items():
            if user["email"] == email.lower() and user["password"] == password and not user["disabled"]:
                return {"idToken": f"token-{uid}", "localId": uid}
        return None

    async def verify_token(self, token):
        uid = token[len("token-"):] if token.startswith("token-") else None
        if uid in self.users:
            return {"uid": uid}
        return None

    async def create_user(self, email, password, display_name=None, disabled=False):
        if any(u["email"] == email.lower() for u in self.users.values()):
            raise AuthProviderError("User creation failed: EMAIL_EXISTS")
        uid = self.add_user(email, password, disabled=disabled)
        return {"uid": uid, "email": email}

    async def set_custom_claims(self, uid, claims):
        self.claims[uid] = claims

    async def get_user_by_email(self, email):
        for uid, user in self.users.items():
            if user["email"] == email.lower():
                return SimpleNamespace(uid=uid, email=user["email"])
        return None

    async def update_user(self, uid, **kwargs):
        if uid not in self.users:
            raise AuthProviderError("User update failed: USER_NOT_FOUND")
        self.users[uid].update(kwargs)

    async def delete_user(self, uid):
        if uid not in self.users:
            raise AuthProviderError("User deletion failed: USER_NOT_FOUND")
        del self.users[uid]


@pytest.fixture
def kv(monkeypatch):
    store = MemoryKVStore()
    for service in (
        appcc_service, checklist_service, equipment_service, exam_service,
        historico_service, incidencia_service, message_service, profile_service,
        seed_service,
    ):
        monkeypatch.setattr(service, "db", store)
    return store


@pytest.fixture
def fake_auth(monkeypatch):
    fake = FakeAuth()
    for service in (auth_service, user_service, seed_service):
        monkeypatch.setattr(service, "auth", fake)
    return fake


@pytest.fixture
def client(kv, fake_auth):
    from bonalba.main import app
    return TestClient(app)


@pytest.fixture
def api(client):
    """Client with the catalogue and demo users seeded"""
    response = client.post("/api/init")
    assert response.status_code == 200
    return client


def login(client, username, password=None):
    response = client.post("/api/auth/login", json={
        "username": username,
        "password": password or settings.DEMO_PASSWORD,
    })
    assert response.status_code == 200, response.text
    return response.json()


def auth_headers(client, username):
    token = login(client, username)["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(api):
    return auth_headers(api, "admin")


@pytest.fixture
def empleado_headers(api):
    return auth_headers(api, "empleado")


@pytest.fixture
def encargado_headers(api):
    return auth_headers(api, "encargado_cocina")


def make_profile(uid="uid-test", role="empleado", area="sala", **overrides):
    data = {
        "id": uid,
        "email": f"{uid}@bonalba.com",
        "username": uid,
        "full_name": "Ana Pérez",
        "role": role,
        "area": area,
        "active": True,
        "created_at": "2025-01-01T00:00:00.000Z",
    }
    data.update(overrides)
    return Profile(**data)
