from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, Tuple, Dict, Any
from enum import Enum

# ──────────────────────────────────────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────────────────────────────────────

class UserRole(str, Enum):
    ADMIN = "admin"
    ENCARGADO = "encargado"
    EMPLEADO = "empleado"


class UserArea(str, Enum):
    COCINA = "cocina"
    SALA = "sala"


# Older accounts carry area-specific role names in their metadata
LEGACY_ROLES: Dict[str, Tuple[UserRole, Optional[UserArea]]] = {
    "encargado_cocina": (UserRole.ENCARGADO, UserArea.COCINA),
    "encargado_sala":   (UserRole.ENCARGADO, UserArea.SALA),
    "personal_cocina":  (UserRole.EMPLEADO, UserArea.COCINA),
    "personal_sala":    (UserRole.EMPLEADO, UserArea.SALA),
}


def normalize_role(role: Optional[str], area: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Map a stored role (current or legacy) to (role, area).
    An explicit area wins over the one implied by a legacy role name.
    """
    if not role:
        return None, area
    key = role.strip().lower()
    if key in LEGACY_ROLES:
        legacy_role, legacy_area = LEGACY_ROLES[key]
        return legacy_role.value, area or (legacy_area.value if legacy_area else None)
    return key, area


# ──────────────────────────────────────────────────────────────────────────────
# Request payloads
# ──────────────────────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Self-service sign-up; the account stays inactive until an admin approves it"""
    nombre: str = Field(..., min_length=1)
    apellidos: str = Field(..., min_length=1)
    email: EmailStr
    direccion: Optional[str] = None
    password: str = Field(..., min_length=6)
    telefono: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    username: str = Field(..., min_length=1)
    role: UserRole
    area: Optional[UserArea] = None
    full_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy(cls, v: Any) -> Any:
        if isinstance(v, dict):
            v = dict(v)
            v.setdefault("full_name", v.get("name"))
            if v.get("role") in LEGACY_ROLES:
                role, area = normalize_role(v["role"], v.get("area"))
                v["role"], v["area"] = role, area
            if v.get("area") == "":
                v["area"] = None
        return v


class UserApprove(BaseModel):
    role: UserRole = UserRole.EMPLEADO
    area: Optional[UserArea] = None

    @field_validator("area", mode="before")
    @classmethod
    def _blank_area(cls, v):
        return v or None


# ──────────────────────────────────────────────────────────────────────────────
# Stored profile
# ──────────────────────────────────────────────────────────────────────────────

class Profile(BaseModel):
    id: str
    email: str
    username: str
    full_name: Optional[str] = None
    role: Optional[str] = None
    area: Optional[str] = None
    active: bool = True
    created_at: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    def to_user(self) -> Dict[str, Any]:
        """Public shape returned by /auth/login and /auth/me"""
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "role": self.role,
            "area": self.area,
            "name": self.full_name,
        }
