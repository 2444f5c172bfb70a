import json

from bonalba.core.config import settings
from conftest import login


def _create(client, headers, **fields):
    payload = {"title": "Fuga en fregadero", "description": "Agua bajo la pila", "priority": "media"}
    payload.update(fields)
    response = client.post("/api/incidencias", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_incidencia_writes_record_and_historico(api):
    session = login(api, "cocinero")
    headers = {"Authorization": f"Bearer {session['accessToken']}"}

    incidencia = _create(api, headers, photoData="data:image/png;base64,AAAA")
    assert incidencia["id"].startswith("inc-")
    assert incidencia["status"] == "abierta"
    assert incidencia["updates"] == []
    assert incidencia["userName"] == "Carlos Martínez"
    assert incidencia["photoData"] == "data:image/png;base64,AAAA"

    incidencias = api.get("/api/incidencias", headers=headers).json()
    assert len(incidencias) == 1

    historico = api.get("/api/historico", params={"type": "incidencia"}, headers=headers).json()
    assert len(historico) == 1
    assert historico[0]["action"] == "Incidencia creada"
    assert historico[0]["incidenciaId"] == incidencia["id"]
    assert historico[0]["userId"] == incidencias[0]["userId"] == session["user"]["id"]


def test_incidencias_are_newest_first(api, empleado_headers):
    first = _create(api, empleado_headers, title="Primera")
    second = _create(api, empleado_headers, title="Segunda")
    ids = [i["id"] for i in api.get("/api/incidencias", headers=empleado_headers).json()]
    assert ids == [second["id"], first["id"]]
    assert first["id"] != second["id"]


def test_invalid_priority_is_rejected(api, empleado_headers):
    response = api.post("/api/incidencias", json={"title": "x", "priority": "urgente"}, headers=empleado_headers)
    assert response.status_code == 422
    assert "priority" in response.json()["error"]


def test_status_update_appends_to_log(api, empleado_headers, encargado_headers):
    incidencia = _create(api, empleado_headers)

    response = api.put(
        f"/api/incidencias/{incidencia['id']}/status",
        json={"status": "en_proceso", "comment": "Avisado el fontanero"},
        headers=encargado_headers,
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "en_proceso"
    assert len(updated["updates"]) == 1
    assert updated["updates"][0]["action"] == "Estado cambiado a: en_proceso"
    assert updated["updates"][0]["comment"] == "Avisado el fontanero"
    assert updated["updates"][0]["user"] == "Luis Fernández"

    api.put(f"/api/incidencias/{incidencia['id']}/status", json={"status": "resuelta"}, headers=encargado_headers)
    stored = api.get("/api/incidencias", headers=empleado_headers).json()[0]
    assert stored["status"] == "resuelta"
    assert [u["action"] for u in stored["updates"]] == ["Estado cambiado a: en_proceso", "Estado cambiado a: resuelta"]


def test_status_update_unknown_id(api, empleado_headers):
    response = api.put("/api/incidencias/inc-missing/status", json={"status": "resuelta"}, headers=empleado_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Incidencia no encontrada"}


def test_status_update_rejects_unknown_status(api, empleado_headers):
    incidencia = _create(api, empleado_headers)
    response = api.put(f"/api/incidencias/{incidencia['id']}/status", json={"status": "cerrada"}, headers=empleado_headers)
    assert response.status_code == 422


def test_empleado_cannot_delete(api, empleado_headers):
    incidencia = _create(api, empleado_headers)
    response = api.delete(f"/api/incidencias/{incidencia['id']}", headers=empleado_headers)
    assert response.status_code == 401
    assert response.json() == {"error": "No autorizado"}
    assert len(api.get("/api/incidencias", headers=empleado_headers).json()) == 1


def test_encargado_deletes(api, empleado_headers, encargado_headers):
    incidencia = _create(api, empleado_headers)
    assert api.delete(f"/api/incidencias/{incidencia['id']}", headers=encargado_headers).status_code == 200
    assert api.get("/api/incidencias", headers=empleado_headers).json() == []
    assert api.delete(f"/api/incidencias/{incidencia['id']}", headers=encargado_headers).status_code == 404


def test_each_incidencia_is_its_own_document(api, empleado_headers, kv):
    first = _create(api, empleado_headers, photoData="data:image/jpeg;base64," + "A" * 5000)
    second = _create(api, empleado_headers, photoData="data:image/jpeg;base64," + "B" * 5000)

    assert json.loads(kv._data["incidencias"]) == [second["id"], first["id"]]
    assert json.loads(kv._data[f"incidencia:{first['id']}"])["photoData"] == first["photoData"]
    assert "AAAA" not in kv._data[f"incidencia:{second['id']}"]

    api.put(f"/api/incidencias/{first['id']}/status", json={"status": "resuelta"}, headers=empleado_headers)
    assert json.loads(kv._data[f"incidencia:{first['id']}"])["status"] == "resuelta"
    assert json.loads(kv._data[f"incidencia:{second['id']}"])["status"] == "abierta"


def test_delete_removes_document_and_index_entry(api, empleado_headers, encargado_headers, kv):
    incidencia = _create(api, empleado_headers)
    api.delete(f"/api/incidencias/{incidencia['id']}", headers=encargado_headers)
    assert f"incidencia:{incidencia['id']}" not in kv._data
    assert json.loads(kv._data["incidencias"]) == []


def test_oversized_photo_is_rejected(api, empleado_headers, kv, monkeypatch):
    monkeypatch.setattr(settings, "PHOTO_MAX_CHARS", 100)
    response = api.post("/api/incidencias", json={
        "title": "Cámara con hielo",
        "photoData": "data:image/jpeg;base64," + "A" * 200,
    }, headers=empleado_headers)
    assert response.status_code == 422
    assert "photoData" in response.json()["error"]
    assert "incidencias" not in kv._data
