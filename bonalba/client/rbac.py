from typing import Optional

# Logical sections of the dashboard and the roles that may open them
ROLE_ACCESS = {
    "admin": ("common", "admin", "manager", "staff"),
    "encargado": ("common", "manager", "staff"),
    "empleado": ("common", "staff"),
}


def can_access(role: Optional[str], section: str) -> bool:
    if not role:
        return False
    return section in ROLE_ACCESS.get(role, ())
