import asyncio

import pytest

from bonalba.models.user import normalize_role, UserCreate
from bonalba.services.profile_service import profile_service
from conftest import login, make_profile


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_init_is_idempotent(client, kv, fake_auth):
    first = client.post("/api/init").json()
    assert first["success"] is True
    assert "checklists" in first["seeded"]
    assert "user:admin" in first["seeded"]
    users_after_first = dict(fake_auth.users)

    second = client.post("/api/init").json()
    assert second["success"] is True
    assert second["seeded"] == []
    assert fake_auth.users == users_after_first


def test_init_keeps_existing_equipment(client, kv):
    client.post("/api/init")
    asyncio.run(kv.set("equipment", [{"id": "eq-custom", "name": "Horno", "type": "freidora"}]))
    client.post("/api/init")
    assert asyncio.run(kv.get("equipment")) == [{"id": "eq-custom", "name": "Horno", "type": "freidora"}]


def test_login_then_me_returns_same_identity(api):
    data = login(api, "encargado_cocina")
    assert data["user"]["role"] == "encargado"
    assert data["user"]["area"] == "cocina"
    assert data["user"]["name"] == "Luis Fernández"

    response = api.get("/api/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"})
    assert response.status_code == 200
    me = response.json()["user"]
    assert me["id"] == data["user"]["id"]
    assert me["role"] == data["user"]["role"]


def test_login_by_email(api):
    data = login(api, "cocina@bonalba.com")
    assert data["user"]["username"] == "cocinero"


def test_login_wrong_password(api):
    response = api.post("/api/auth/login", json={"username": "admin", "password": "bad"})
    assert response.status_code == 401
    assert response.json() == {"error": "Credenciales incorrectas"}


def test_login_unknown_user(api):
    response = api.post("/api/auth/login", json={"username": "ghost", "password": "123456"})
    assert response.status_code == 401
    assert response.json() == {"error": "Credenciales incorrectas"}


def test_login_missing_fields_is_validation_error(api):
    response = api.post("/api/auth/login", json={"username": "admin"})
    assert response.status_code == 422
    assert "error" in response.json()


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer token-nobody"}])
def test_me_requires_valid_token(api, headers):
    response = api.get("/api/auth/me", headers=headers)
    assert response.status_code == 401
    assert response.json() == {"error": "No autorizado"}


def test_register_creates_inactive_profile(api, fake_auth):
    response = api.post("/api/auth/register", json={
        "nombre": "Ana",
        "apellidos": "Pérez López",
        "email": "Ana.Perez@Restaurante.es",
        "direccion": "Calle Mayor 1",
        "password": "secreto1",
        "telefono": "600000000",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True

    profile = asyncio.run(profile_service.get_profile(body["id"]))
    assert profile.active is False
    assert profile.role == "empleado"
    assert profile.email == "ana.perez@restaurante.es"
    assert profile.full_name == "Ana Pérez López"
    assert fake_auth.users[body["id"]]["disabled"] is True

    # Not usable until an admin approves it
    rejected = api.post("/api/auth/login", json={"username": "ana.perez@restaurante.es", "password": "secreto1"})
    assert rejected.status_code == 401


def test_register_duplicate_email(api):
    response = api.post("/api/auth/register", json={
        "nombre": "Otro",
        "apellidos": "Admin",
        "email": "admin@bonalba.com",
        "password": "secreto1",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "El correo ya está registrado"}


def test_token_of_inactive_profile_is_rejected(api, fake_auth):
    data = login(api, "empleado")
    asyncio.run(profile_service.update_profile(data["user"]["id"], {"active": False}))
    response = api.get("/api/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"})
    assert response.status_code == 401


@pytest.mark.parametrize("stored, expected", [
    (("encargado_cocina", None), ("encargado", "cocina")),
    (("personal_sala", None), ("empleado", "sala")),
    (("personal_sala", "cocina"), ("empleado", "cocina")),
    (("Admin", None), ("admin", None)),
    ((None, "sala"), (None, "sala")),
])
def test_normalize_role(stored, expected):
    assert normalize_role(*stored) == expected


def test_user_create_folds_legacy_payload():
    body = UserCreate(
        email="nuevo@bonalba.com",
        password="123456",
        username="nuevo",
        role="encargado_sala",
        area="",
        name="Nuevo Encargado",
    )
    assert body.role.value == "encargado"
    assert body.area.value == "sala"
    assert body.full_name == "Nuevo Encargado"


def test_profile_display_name_falls_back_to_username():
    assert make_profile(full_name=None, username="pepe").display_name == "pepe"
