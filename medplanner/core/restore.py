import logging
from enum import Enum
from typing import Dict, Optional, Type
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medplanner.core.errors import StoreWriteFailure
from medplanner.core.models import ExamType, HolidayType, ProfessorTitle
from medplanner.db.models import Semester, Discipline, Task, Exam, Absence, Note, Evaluation, Professor, Holiday
from medplanner.db.serialization import BackupBundle

logger = logging.getLogger(__name__)

# Children before parents so FK constraints never see a dangling row mid-flush
DELETE_ORDER = (Task, Exam, Absence, Note, Evaluation, Professor, Holiday, Discipline, Semester)


def _coerce(enum_cls: Type[Enum], raw: Optional[str], default: Enum) -> str:
    """Map a stored enum value back; unknown or missing values fall back to the default case"""
    try:
        return enum_cls(raw).value
    except ValueError:
        return default.value

def _resolve(lookup: Dict[str, object], ref: Optional[UUID]):
    # Missing parent -> no link
    if ref is None:
        return None
    return lookup.get(str(ref))


class RestoreEngine:
    """
    Replaces the whole store with the content of a bundle.

    Everything happens in the session's transaction: on any error the session is
    rolled back and the previous data stays. Database errors surface as
    StoreWriteFailure, anything else is re-raised as is.
    Once started the restore cannot be cancelled.
    """

    def restore(self, db: Session, bundle: BackupBundle) -> None:
        try:
            # 1. Wipe every table
            self._delete_all(db)

            # 2. Semesters (lookup: id -> Semester)
            semesters: Dict[str, Semester] = {}
            for dto in bundle.semesters:
                semester = Semester(
                    id=str(dto.id),
                    name=dto.name,
                    start_date=dto.start_date,
                    end_date=dto.end_date,
                    is_active=dto.is_active
                )
                db.add(semester)
                semesters[semester.id] = semester

            # 3. Disciplines (lookup: id -> Discipline)
            disciplines: Dict[str, Discipline] = {}
            for dto in bundle.disciplines:
                discipline = Discipline(
                    id=str(dto.id),
                    name=dto.name,
                    code=dto.code,
                    instructor=dto.instructor,
                    color_hex=dto.color_hex,
                    total_hours=dto.total_hours,
                    absence_limit=dto.absence_limit,
                    semester=_resolve(semesters, dto.semester_id)
                )
                db.add(discipline)
                disciplines[discipline.id] = discipline

            # 4. Discipline children
            for dto in bundle.tasks:
                db.add(Task(
                    id=str(dto.id),
                    title=dto.title,
                    description=dto.description,
                    due_date=dto.due_date,
                    is_completed=dto.is_completed,
                    discipline=_resolve(disciplines, dto.discipline_id)
                ))

            for dto in bundle.exams:
                db.add(Exam(
                    id=str(dto.id),
                    title=dto.title,
                    description=dto.description,
                    exam_date=dto.exam_date,
                    score=dto.score,
                    exam_type=_coerce(ExamType, dto.exam_type, ExamType.THEORETICAL),
                    discipline=_resolve(disciplines, dto.discipline_id)
                ))

            for dto in bundle.absences:
                db.add(Absence(
                    id=str(dto.id),
                    date=dto.date,
                    hours=dto.hours,
                    remark=dto.remark,
                    discipline=_resolve(disciplines, dto.discipline_id)
                ))

            for dto in bundle.notes:
                db.add(Note(
                    id=str(dto.id),
                    title=dto.title,
                    content=dto.content,
                    created_at=dto.created_at,
                    modified_at=dto.modified_at,
                    discipline=_resolve(disciplines, dto.discipline_id)
                ))

            for dto in bundle.evaluations:
                db.add(Evaluation(
                    id=str(dto.id),
                    title=dto.title,
                    score=dto.score,
                    weight=dto.weight,
                    date=dto.date,
                    discipline=_resolve(disciplines, dto.discipline_id)
                ))

            # 5. Independent entities
            for dto in bundle.professors:
                # Same discipline listed twice -> one association row
                refs = dict.fromkeys(str(ref) for ref in dto.discipline_ids)
                linked = [disciplines[ref] for ref in refs if ref in disciplines]
                db.add(Professor(
                    id=str(dto.id),
                    name=dto.name,
                    title=_coerce(ProfessorTitle, dto.title, ProfessorTitle.NONE),
                    specialty=dto.specialty,
                    department=dto.department,
                    email=dto.email,
                    phone=dto.phone,
                    whatsapp=dto.whatsapp,
                    office_hours=dto.office_hours,
                    room=dto.room,
                    remarks=dto.remarks,
                    photo=dto.photo,
                    disciplines=linked
                ))

            for dto in bundle.holidays:
                db.add(Holiday(
                    id=str(dto.id),
                    name=dto.name,
                    date=dto.date,
                    holiday_type=_coerce(HolidayType, dto.holiday_type, HolidayType.NATIONAL),
                    is_recurring=dto.is_recurring,
                    blocks_classes=dto.blocks_classes
                ))

            # 6. Commit
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Restore failed, store rolled back: {e}")
            raise StoreWriteFailure(f"restore failed: {e}") from e
        except Exception:
            # Never leave the flushed deletes pending in the caller's session
            db.rollback()
            raise

        logger.info(
            f"Restore complete: {len(bundle.semesters)} semesters, {len(bundle.disciplines)} disciplines, "
            f"{len(bundle.professors)} professors, {len(bundle.holidays)} holidays"
        )

    def _delete_all(self, db: Session) -> None:
        for model in DELETE_ORDER:
            for obj in db.query(model).all():
                db.delete(obj)
        # Rows must be gone before rows with the same ids are inserted
        db.flush()
