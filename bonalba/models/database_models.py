from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from enum import Enum

from ..core.config import settings


class ChecklistType(str, Enum):
    COCINA = "cocina"
    SALA = "sala"


class Shift(str, Enum):
    APERTURA = "apertura"
    CIERRE = "cierre"


class Priority(str, Enum):
    ALTA = "alta"
    MEDIA = "media"
    BAJA = "baja"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    WITH_ISSUE = "with_issue"


class IncidenciaStatus(str, Enum):
    ABIERTA = "abierta"
    EN_PROCESO = "en_proceso"
    RESUELTA = "resuelta"


class RegistroType(str, Enum):
    TEMPERATURA = "temperatura"
    ACEITE = "aceite"


class EquipmentType(str, Enum):
    CAMARA = "camara"
    FREIDORA = "freidora"


class HistoricoType(str, Enum):
    CHECKLIST = "checklist"
    INCIDENCIA = "incidencia"
    APPCC = "appcc"


# Checklist catalogue
class Checklist(BaseModel):
    id: str
    name: str
    type: ChecklistType
    shift: Shift


class ChecklistTask(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIA


class TaskComplete(BaseModel):
    observations: Optional[str] = ""


# Incidencias
class IncidenciaCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = ""
    priority: Priority = Priority.MEDIA
    checklistId: Optional[str] = None
    taskId: Optional[str] = None
    photoData: Optional[str] = None  # inline base64 data URL

    @field_validator("photoData")
    @classmethod
    def _photo_size(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) > settings.PHOTO_MAX_CHARS:
            raise ValueError(f"photo exceeds {settings.PHOTO_MAX_CHARS} characters")
        return v


class IncidenciaStatusUpdate(BaseModel):
    status: IncidenciaStatus
    comment: Optional[str] = None


# APPCC
class TemperaturaCreate(BaseModel):
    equipmentId: str = Field(..., min_length=1)
    temperature: float
    observations: Optional[str] = ""


class AceiteCreate(BaseModel):
    equipmentId: str = Field(..., min_length=1)
    tipo: str = Field(..., min_length=1)  # girasol, oliva, vegetal
    motivo: Optional[str] = ""
    observations: Optional[str] = ""


# Equipment
class EquipmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: EquipmentType


# Exams
class Question(BaseModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correctAnswer: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _answer_in_options(self):
        if self.correctAnswer >= len(self.options):
            raise ValueError("correctAnswer must index into options")
        return self


class ExamCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = ""
    questions: List[Question] = Field(..., min_length=1)


class ExamSubmit(BaseModel):
    answers: List[Optional[int]] = Field(default_factory=list)


# Messages
class MessageCreate(BaseModel):
    recipientId: str = Field(..., min_length=1)  # "all" or a user id
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

    @field_validator("recipientId")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()
