import uuid


class IdService:
    # Record prefixes per collection
    PREFIXES = {
        "incidencia": "inc",
        "registro": "appcc",
        "equipment": "eq",
        "historico": "hist",
        "exam": "exam",
        "result": "result",
        "message": "msg",
    }

    @staticmethod
    def generate(kind: str) -> str:
        """Collision-resistant record id, e.g. inc-3f9c2a7d4b1e4e8fa0c1d2e3f4a5b6c7"""
        prefix = IdService.PREFIXES.get(kind, kind)
        return f"{prefix}-{uuid.uuid4().hex}"


id_service = IdService()
