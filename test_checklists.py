def _checklist(client, headers, checklist_id):
    checklists = client.get("/api/checklists", headers=headers).json()
    return next(c for c in checklists if c["id"] == checklist_id)


def test_list_checklists_with_empty_progress(api, empleado_headers):
    response = api.get("/api/checklists", headers=empleado_headers)
    assert response.status_code == 200
    checklists = response.json()
    assert [c["id"] for c in checklists] == ["apertura-cocina", "apertura-sala", "cierre-cocina", "cierre-sala"]
    for checklist in checklists:
        assert checklist["progress"] == {"completed": 0, "total": 5}
        assert checklist["incidencias"] == 0


def test_tasks_default_to_pending(api, empleado_headers):
    response = api.get("/api/checklists/apertura-sala", headers=empleado_headers)
    assert response.status_code == 200
    tasks = response.json()["tasks"]
    assert len(tasks) == 5
    assert {t["status"] for t in tasks} == {"pending"}
    assert all(t["observations"] == "" for t in tasks)


def test_complete_task_increments_progress_and_detail(api, empleado_headers):
    before = _checklist(api, empleado_headers, "apertura-cocina")["progress"]["completed"]

    response = api.post(
        "/api/checklists/apertura-cocina/tasks/1/complete",
        json={"observations": "Cámara 1 a 3°C"},
        headers=empleado_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "progress": {"completed": before + 1, "total": 5}}

    assert _checklist(api, empleado_headers, "apertura-cocina")["progress"]["completed"] == before + 1

    tasks = api.get("/api/checklists/apertura-cocina", headers=empleado_headers).json()["tasks"]
    task = next(t for t in tasks if t["id"] == "1")
    assert task["status"] == "completed"
    assert task["observations"] == "Cámara 1 a 3°C"
    assert task["completedBy"] == "María García"
    assert task["completedAt"].endswith("Z")


def test_completing_same_task_twice_counts_once(api, empleado_headers):
    for _ in range(2):
        api.post("/api/checklists/cierre-sala/tasks/3/complete", json={}, headers=empleado_headers)
    assert _checklist(api, empleado_headers, "cierre-sala")["progress"]["completed"] == 1


def test_complete_task_without_body(api, empleado_headers):
    response = api.post("/api/checklists/cierre-sala/tasks/2/complete", headers=empleado_headers)
    assert response.status_code == 200


def test_completion_is_logged_in_historico(api, empleado_headers):
    api.post("/api/checklists/apertura-sala/tasks/4/complete", json={"observations": "ok"}, headers=empleado_headers)
    historico = api.get("/api/historico", params={"type": "checklist"}, headers=empleado_headers).json()
    assert len(historico) == 1
    entry = historico[0]
    assert entry["action"] == "Tarea completada"
    assert entry["checklistId"] == "apertura-sala"
    assert entry["taskId"] == "4"
    assert entry["user"] == "María García"


def test_unknown_checklist_or_task(api, empleado_headers):
    assert api.get("/api/checklists/nope", headers=empleado_headers).status_code == 404

    response = api.post("/api/checklists/nope/tasks/1/complete", json={}, headers=empleado_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Checklist no encontrado"}

    response = api.post("/api/checklists/apertura-sala/tasks/99/complete", json={}, headers=empleado_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Tarea no encontrada"}


def test_incidencias_reported_today_are_counted(api, empleado_headers):
    api.post("/api/incidencias", json={
        "title": "Cámara sin frío",
        "priority": "alta",
        "checklistId": "apertura-cocina",
        "taskId": "1",
    }, headers=empleado_headers)
    assert _checklist(api, empleado_headers, "apertura-cocina")["incidencias"] == 1
    assert _checklist(api, empleado_headers, "apertura-sala")["incidencias"] == 0


def test_checklists_require_login(api):
    response = api.get("/api/checklists")
    assert response.status_code == 401
    assert response.json() == {"error": "No autorizado"}
