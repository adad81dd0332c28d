from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Optional
from uuid import UUID
import base64

from pydantic import BaseModel, ConfigDict, Field, AfterValidator, BeforeValidator, PlainSerializer, model_validator

# ==========================================
# Part 1: Enums (values are the strings written to backups)
# ==========================================

class ProfessorTitle(str, Enum):
    NONE = "Nenhum"
    DR = "Dr."
    DRA = "Dra."
    PROF = "Prof."
    PROFA = "Profa."
    MSC = "MSc."
    ESP = "Esp."

class HolidayType(str, Enum):
    NATIONAL = "Nacional"
    MUNICIPAL = "Municipal"
    SCHOOL = "Escolar/Institucional"
    OTHER = "Outro"

class ExamType(str, Enum):
    THEORETICAL = "Teórica (Múltipla Escolha)"
    PRACTICAL = "Prática (Laboratório/Clínica)"
    OSCE = "OSCE"
    SEMINAR = "Seminário"
    ESSAY = "Trabalho Escrito"


def to_utc(value: datetime) -> datetime:
    """
    Normalize to UTC at one-second precision (the precision of the backup format).
    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)

def utc_now() -> datetime:
    return to_utc(datetime.now(timezone.utc))

def _format_datetime(value: datetime) -> str:
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")

def _decode_photo(value):
    # JSON carries base64 text; Python callers pass raw bytes
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    return value

def _encode_photo(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


UtcDatetime = Annotated[datetime, AfterValidator(to_utc), PlainSerializer(_format_datetime, return_type=str, when_used="json")]
Photo = Annotated[bytes, BeforeValidator(_decode_photo), PlainSerializer(_encode_photo, return_type=str, when_used="json")]

# ==========================================
# Part 2: Backup DTOs (one per entity, references replaced by ids)
# ==========================================

class BackupModel(BaseModel):
    # Attribute names are Python-side, aliases are the keys of the backup file
    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        # Older apps may write null for an optional key: treat it as absent so the default applies
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class SemesterDTO(BackupModel):
    id: UUID
    name: str = Field(alias="nome")
    start_date: UtcDatetime = Field(alias="dataInicio")
    end_date: UtcDatetime = Field(alias="dataFim")
    is_active: bool = Field(alias="isAtivo")

class DisciplineDTO(BackupModel):
    id: UUID
    name: str = Field(alias="nome")
    code: str = Field(alias="sigla")
    instructor: Optional[str] = Field(default=None, alias="professor")
    color_hex: str = Field(alias="corHexCode")
    total_hours: Optional[int] = Field(default=None, alias="cargaHorariaTotal")
    absence_limit: Optional[float] = Field(default=None, alias="limiteFaltasPercentual")
    semester_id: Optional[UUID] = Field(default=None, alias="semestreId")

class TaskDTO(BackupModel):
    id: UUID
    title: str = Field(alias="titulo")
    description: str = Field(alias="descricao")
    due_date: UtcDatetime = Field(alias="dataEntrega")
    is_completed: bool = Field(alias="isConcluida")
    discipline_id: Optional[UUID] = Field(default=None, alias="disciplinaId")

class ExamDTO(BackupModel):
    id: UUID
    title: str = Field(alias="titulo")
    description: str = Field(alias="descricao")
    exam_date: UtcDatetime = Field(alias="dataProva")
    score: Optional[float] = Field(default=None, alias="notaAlcancada")
    # Added in 1.4
    exam_type: str = Field(default=ExamType.THEORETICAL.value, alias="tipo")
    discipline_id: Optional[UUID] = Field(default=None, alias="disciplinaId")

class AbsenceDTO(BackupModel):
    id: UUID
    date: UtcDatetime = Field(alias="data")
    hours: int = Field(alias="quantidadeHoras")
    remark: Optional[str] = Field(default=None, alias="observacao")
    discipline_id: Optional[UUID] = Field(default=None, alias="disciplinaId")

class NoteDTO(BackupModel):
    id: UUID
    title: str = Field(alias="titulo")
    content: str = Field(alias="conteudo")
    created_at: UtcDatetime = Field(alias="dataCriacao")
    modified_at: UtcDatetime = Field(alias="dataModificacao")
    discipline_id: Optional[UUID] = Field(default=None, alias="disciplinaId")

class EvaluationDTO(BackupModel):
    id: UUID
    title: str = Field(alias="titulo")
    score: float = Field(alias="notaObtida")
    weight: float = Field(alias="peso")
    date: UtcDatetime = Field(alias="data")
    discipline_id: Optional[UUID] = Field(default=None, alias="disciplinaId")

class ProfessorDTO(BackupModel):
    id: UUID
    name: str = Field(alias="nome")
    email: str
    department: str = Field(alias="departamento")
    remarks: str = Field(alias="anotacoes")
    # Fields below are missing from exports older than 1.3.6
    title: str = Field(default=ProfessorTitle.NONE.value, alias="titulo")
    specialty: str = Field(default="", alias="especialidade")
    phone: str = Field(default="", alias="telefone")
    whatsapp: str = ""
    office_hours: str = Field(default="", alias="horarioAtendimento")
    room: str = Field(default="", alias="sala")
    photo: Optional[Photo] = Field(default=None, alias="foto")
    # Added in 1.4
    discipline_ids: List[UUID] = Field(default_factory=list, alias="disciplinaIds")

class HolidayDTO(BackupModel):
    id: UUID
    name: str = Field(alias="nome")
    date: UtcDatetime = Field(alias="data")
    # Fields below are missing from exports older than 1.3.6
    holiday_type: str = Field(default=HolidayType.NATIONAL.value, alias="tipo")
    is_recurring: bool = Field(default=False, alias="recorrente")
    blocks_classes: bool = Field(default=True, alias="bloqueiaAulas")
