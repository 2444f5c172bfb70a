import pytest

from bonalba.core.config import settings
from bonalba.services.appcc_service import is_out_of_range


@pytest.mark.parametrize("temperature, expected", [
    (0, False), (3.5, False), (4, False), (4.1, True), (-1, True), (-18, True),
])
def test_out_of_range(temperature, expected):
    assert is_out_of_range(temperature) is expected


def test_temperature_record(api, empleado_headers):
    response = api.post("/api/appcc/temperatura", json={
        "equipmentId": "camara-1",
        "temperature": 6.5,
        "observations": "Puerta mal cerrada",
    }, headers=empleado_headers)
    assert response.status_code == 200
    registro = response.json()
    assert registro["id"].startswith("appcc-")
    assert registro["type"] == "temperatura"
    assert registro["outOfRange"] is True
    assert registro["userName"] == "María García"

    historico = api.get("/api/historico", params={"type": "appcc"}, headers=empleado_headers).json()
    assert historico[0]["action"] == "Temperatura registrada"
    assert historico[0]["equipmentId"] == "camara-1"
    assert historico[0]["temperature"] == 6.5


def test_oil_change_record(api, empleado_headers):
    response = api.post("/api/appcc/aceite", json={
        "equipmentId": "freidora-1",
        "tipo": "girasol",
        "motivo": "Color oscuro",
    }, headers=empleado_headers)
    assert response.status_code == 200
    registro = response.json()
    assert registro["type"] == "aceite"
    assert registro["tipo"] == "girasol"
    assert "outOfRange" not in registro

    historico = api.get("/api/historico", headers=empleado_headers).json()
    assert historico[0]["action"] == "Cambio de aceite registrado"
    assert historico[0]["tipo"] == "girasol"


def test_temperature_must_be_numeric(api, empleado_headers):
    response = api.post("/api/appcc/temperatura", json={"equipmentId": "camara-1", "temperature": "frío"},
                        headers=empleado_headers)
    assert response.status_code == 422


def test_registros_filters_and_order(api, empleado_headers):
    api.post("/api/appcc/temperatura", json={"equipmentId": "camara-1", "temperature": 2}, headers=empleado_headers)
    api.post("/api/appcc/aceite", json={"equipmentId": "freidora-2", "tipo": "oliva"}, headers=empleado_headers)
    api.post("/api/appcc/temperatura", json={"equipmentId": "camara-2", "temperature": 3}, headers=empleado_headers)

    everything = api.get("/api/appcc/registros", headers=empleado_headers).json()
    assert [r["equipmentId"] for r in everything] == ["camara-2", "freidora-2", "camara-1"]

    temperatures = api.get("/api/appcc/registros", params={"type": "temperatura"}, headers=empleado_headers).json()
    assert [r["equipmentId"] for r in temperatures] == ["camara-2", "camara-1"]

    camara_1 = api.get("/api/appcc/registros", params={"equipmentId": "camara-1"}, headers=empleado_headers).json()
    assert len(camara_1) == 1


def test_registros_are_capped(api, empleado_headers, monkeypatch):
    monkeypatch.setattr(settings, "APPCC_LIMIT", 3)
    for value in range(5):
        api.post("/api/appcc/temperatura", json={"equipmentId": "camara-1", "temperature": value},
                 headers=empleado_headers)
    registros = api.get("/api/appcc/registros", headers=empleado_headers).json()
    assert [r["temperature"] for r in registros] == [4, 3, 2]


def test_historico_is_capped(api, empleado_headers, monkeypatch):
    monkeypatch.setattr(settings, "HISTORICO_LIMIT", 2)
    for value in range(4):
        api.post("/api/appcc/temperatura", json={"equipmentId": "camara-1", "temperature": value},
                 headers=empleado_headers)
    historico = api.get("/api/historico", headers=empleado_headers).json()
    assert [h["temperature"] for h in historico] == [3, 2]


def test_historico_summary(api, empleado_headers):
    api.post("/api/checklists/apertura-sala/tasks/1/complete", json={}, headers=empleado_headers)
    api.post("/api/checklists/apertura-sala/tasks/2/complete", json={}, headers=empleado_headers)
    api.post("/api/incidencias", json={"title": "Silla rota"}, headers=empleado_headers)
    api.post("/api/appcc/temperatura", json={"equipmentId": "camara-1", "temperature": 2}, headers=empleado_headers)

    summary = api.get("/api/historico/summary", headers=empleado_headers).json()
    assert summary == {"total": 4, "thisWeek": 4, "completedTasks": 2, "incidencias": 1}

    todos = api.get("/api/historico", params={"type": "todos"}, headers=empleado_headers).json()
    assert len(todos) == 4
