# bonalba/client/api_client.py
import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from . import auth_events, token_store

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed call to the Bonalba API (error status or unreadable body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def error_message(response: httpx.Response) -> str:
    """error -> message -> detail field, then the raw body, then HTTP <status>."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for field in ("error", "message", "detail"):
            if data.get(field):
                return str(data[field])
    if response.text:
        return response.text
    return f"HTTP {response.status_code}"


class ApiClient:
    """Talks to the Bonalba backend on behalf of one logged-in user."""

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None,
                 timeout: float = 15.0):
        self.base_url = (base_url or os.getenv("BONALBA_API_BASE", "")).rstrip("/")
        if not self.base_url:
            raise ValueError("Missing BONALBA_API_BASE")
        self._client = httpx.Client(base_url=self.base_url, transport=transport, timeout=timeout)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def request(self, method: str, path: str, json_data: Any = None, params: Optional[Dict[str, Any]] = None,
                auth: bool = True) -> Any:
        """
        Perform a request and return the decoded JSON body.
        A 401 on an authenticated call clears the stored token and emits the
        global logout event before raising.
        """
        headers = {}
        if auth:
            token = token_store.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = self._client.request(method.upper(), path, json=json_data, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Network error calling {method} {path}: {e}")
            raise ApiError(f"Error de conexión: {e}") from e

        if response.status_code == 401 and auth:
            logger.info("Session rejected by the server, logging out")
            token_store.clear_token()
            auth_events.emit_logout()

        if response.is_error:
            raise ApiError(error_message(response), response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from {method} {path}")
            raise ApiError(response.text, response.status_code) from e

    # --- auth ---
    def login(self, username: str, password: str) -> Dict[str, Any]:
        data = self.request("POST", "/auth/login", {"username": username, "password": password}, auth=False)
        token_store.save_token(data["accessToken"])
        return data

    def logout(self):
        token_store.clear_token()
        auth_events.emit_logout()

    def me(self) -> Dict[str, Any]:
        return self.request("GET", "/auth/me")["user"]

    def register(self, nombre: str, apellidos: str, email: str, password: str,
                 direccion: Optional[str] = None, telefono: Optional[str] = None) -> Dict[str, Any]:
        payload = {
            "nombre": nombre,
            "apellidos": apellidos,
            "email": email,
            "password": password,
            "direccion": direccion,
            "telefono": telefono,
        }
        return self.request("POST", "/auth/register", payload, auth=False)

    # --- checklists ---
    def list_checklists(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/checklists")

    def get_checklist_tasks(self, checklist_id: str) -> List[Dict[str, Any]]:
        return self.request("GET", f"/checklists/{checklist_id}")["tasks"]

    def complete_task(self, checklist_id: str, task_id: str, observations: str = "") -> Dict[str, Any]:
        return self.request("POST", f"/checklists/{checklist_id}/tasks/{task_id}/complete",
                            {"observations": observations})

    # --- incidencias ---
    def list_incidencias(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/incidencias")

    def create_incidencia(self, title: str, description: str = "", priority: str = "media",
                          checklist_id: Optional[str] = None, task_id: Optional[str] = None,
                          photo_data: Optional[str] = None) -> Dict[str, Any]:
        payload = {
            "title": title,
            "description": description,
            "priority": priority,
            "checklistId": checklist_id,
            "taskId": task_id,
            "photoData": photo_data,
        }
        return self.request("POST", "/incidencias", payload)

    def update_incidencia_status(self, incidencia_id: str, status: str, comment: Optional[str] = None) -> Dict[str, Any]:
        return self.request("PUT", f"/incidencias/{incidencia_id}/status", {"status": status, "comment": comment})

    def delete_incidencia(self, incidencia_id: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/incidencias/{incidencia_id}")

    # --- APPCC ---
    def list_registros(self, registro_type: Optional[str] = None, equipment_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.request("GET", "/appcc/registros", params={"type": registro_type, "equipmentId": equipment_id})

    def record_temperature(self, equipment_id: str, temperature: float, observations: str = "") -> Dict[str, Any]:
        return self.request("POST", "/appcc/temperatura",
                            {"equipmentId": equipment_id, "temperature": temperature, "observations": observations})

    def record_oil_change(self, equipment_id: str, tipo: str, motivo: str = "", observations: str = "") -> Dict[str, Any]:
        return self.request("POST", "/appcc/aceite",
                            {"equipmentId": equipment_id, "tipo": tipo, "motivo": motivo, "observations": observations})

    # --- equipment ---
    def list_equipment(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/equipment")

    def create_equipment(self, name: str, equipment_type: str) -> Dict[str, Any]:
        return self.request("POST", "/equipment", {"name": name, "type": equipment_type})

    def delete_equipment(self, equipment_id: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/equipment/{equipment_id}")

    # --- historico ---
    def list_historico(self, entry_type: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.request("GET", "/historico", params={"type": entry_type})

    def historico_summary(self) -> Dict[str, int]:
        return self.request("GET", "/historico/summary")

    # --- users ---
    def list_users(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/users")

    def list_pending_users(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/users/pending")

    def create_user(self, email: str, password: str, username: str, role: str,
                    area: Optional[str] = None, full_name: Optional[str] = None) -> Dict[str, Any]:
        payload = {
            "email": email,
            "password": password,
            "username": username,
            "role": role,
            "area": area,
            "full_name": full_name,
        }
        return self.request("POST", "/users", payload)

    def approve_user(self, user_id: str, role: str = "empleado", area: Optional[str] = None) -> Dict[str, Any]:
        return self.request("POST", f"/users/{user_id}/approve", {"role": role, "area": area})

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/users/{user_id}")

    # --- exams ---
    def list_exams(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/exams")

    def create_exam(self, title: str, questions: List[Dict[str, Any]], description: str = "") -> Dict[str, Any]:
        return self.request("POST", "/exams", {"title": title, "description": description, "questions": questions})

    def submit_exam(self, exam_id: str, answers: List[Optional[int]]) -> Dict[str, Any]:
        return self.request("POST", f"/exams/{exam_id}/submit", {"answers": answers})

    def list_exam_results(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/exams/results")

    def my_exam_results(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/exams/results/me")

    # --- messages ---
    def list_messages(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/messages")

    def send_message(self, recipient_id: str, subject: str, message: str) -> Dict[str, Any]:
        return self.request("POST", "/messages", {"recipientId": recipient_id, "subject": subject, "message": message})

    def mark_message_read(self, message_id: str) -> Dict[str, Any]:
        return self.request("PUT", f"/messages/{message_id}/read")
