import logging
from pathlib import Path
from typing import List, Union

from pydantic import Field, ValidationError, field_validator

from medplanner.core.errors import FileIOFailure, MalformedBackup
from medplanner.core.models import (
    BackupModel, UtcDatetime, SemesterDTO, DisciplineDTO, TaskDTO, ExamDTO, AbsenceDTO,
    NoteDTO, EvaluationDTO, ProfessorDTO, HolidayDTO,
)

logger = logging.getLogger(__name__)

# Written into every export; any 1.x file can be read back
BACKUP_FORMAT_VERSION = "1.4"
SUPPORTED_MAJOR_VERSION = "1"


class BackupBundle(BackupModel):
    """
    Full planner snapshot
    Version, export time, and one list per entity type. All keys are required
    """
    version: str
    export_date: UtcDatetime = Field(alias="exportDate")
    semesters: List[SemesterDTO] = Field(alias="semestres")
    disciplines: List[DisciplineDTO] = Field(alias="disciplinas")
    tasks: List[TaskDTO] = Field(alias="tarefas")
    exams: List[ExamDTO] = Field(alias="provas")
    absences: List[AbsenceDTO] = Field(alias="faltas")
    notes: List[NoteDTO] = Field(alias="anotacoes")
    evaluations: List[EvaluationDTO] = Field(alias="avaliacoes")
    professors: List[ProfessorDTO] = Field(alias="professores")
    holidays: List[HolidayDTO] = Field(alias="feriados")

    @field_validator("version")
    @classmethod
    def check_version(cls, value: str) -> str:
        if value.split(".")[0] != SUPPORTED_MAJOR_VERSION:
            raise ValueError(f"unsupported backup version {value!r}")
        return value


class SerializationService:
    def serialize(self, bundle: BackupBundle) -> bytes:
        """
        Turn a bundle into pretty-printed JSON bytes (wire keys, empty optionals left out)
        """
        return bundle.model_dump_json(indent=4, by_alias=True, exclude_none=True).encode("utf-8")

    def deserialize(self, data: Union[bytes, str]) -> BackupBundle:
        """
        Parse JSON back into a bundle; anything invalid becomes MalformedBackup
        """
        try:
            return BackupBundle.model_validate_json(data)
        except ValidationError as e:
            logger.error(f"Invalid backup: {e.error_count()} error(s), first: {e.errors()[0]['msg']}")
            raise MalformedBackup(str(e)) from e

    def save_to_file(self, bundle: BackupBundle, filepath: Union[str, Path]) -> Path:
        """Serialize and write to disk"""
        path = Path(filepath)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self.serialize(bundle))
        except OSError as e:
            logger.error(f"Could not write backup to {path}: {e}")
            raise FileIOFailure(f"could not write {path}: {e}") from e
        return path

    def load_from_file(self, filepath: Union[str, Path]) -> BackupBundle:
        """Read from disk and deserialize"""
        path = Path(filepath)
        try:
            content = path.read_bytes()
        except OSError as e:
            logger.error(f"Could not read backup from {path}: {e}")
            raise FileIOFailure(f"could not read {path}: {e}") from e
        return self.deserialize(content)
