import logging
from sqlalchemy.orm import Session

from medplanner.core.models import (
    SemesterDTO, DisciplineDTO, TaskDTO, ExamDTO, AbsenceDTO, NoteDTO, EvaluationDTO,
    ProfessorDTO, HolidayDTO, utc_now,
)
from medplanner.db.models import Semester, Discipline, Task, Exam, Absence, Note, Evaluation, Professor, Holiday
from medplanner.db.serialization import BackupBundle, BACKUP_FORMAT_VERSION

logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """
    Reads the whole store and flattens it into DTOs (object links -> ids).
    Read-only: nothing is written to the session.
    """

    def build_snapshot(self, db: Session) -> BackupBundle:
        # Ordered by id so the same store always gives the same document
        def fetch(model):
            return db.query(model).order_by(model.id).all()

        semesters = [
            SemesterDTO(id=s.id, name=s.name, start_date=s.start_date, end_date=s.end_date, is_active=s.is_active)
            for s in fetch(Semester)
        ]
        disciplines = [
            DisciplineDTO(
                id=d.id, name=d.name, code=d.code, instructor=d.instructor, color_hex=d.color_hex,
                total_hours=d.total_hours, absence_limit=d.absence_limit, semester_id=d.semester_id,
            )
            for d in fetch(Discipline)
        ]
        tasks = [
            TaskDTO(id=t.id, title=t.title, description=t.description, due_date=t.due_date,
                    is_completed=t.is_completed, discipline_id=t.discipline_id)
            for t in fetch(Task)
        ]
        exams = [
            ExamDTO(id=e.id, title=e.title, description=e.description, exam_date=e.exam_date,
                    score=e.score, exam_type=e.exam_type, discipline_id=e.discipline_id)
            for e in fetch(Exam)
        ]
        absences = [
            AbsenceDTO(id=a.id, date=a.date, hours=a.hours, remark=a.remark, discipline_id=a.discipline_id)
            for a in fetch(Absence)
        ]
        notes = [
            NoteDTO(id=n.id, title=n.title, content=n.content, created_at=n.created_at,
                    modified_at=n.modified_at, discipline_id=n.discipline_id)
            for n in fetch(Note)
        ]
        evaluations = [
            EvaluationDTO(id=e.id, title=e.title, score=e.score, weight=e.weight, date=e.date,
                          discipline_id=e.discipline_id)
            for e in fetch(Evaluation)
        ]
        professors = [
            ProfessorDTO(
                id=p.id, name=p.name, email=p.email, department=p.department, remarks=p.remarks,
                title=p.title, specialty=p.specialty, phone=p.phone, whatsapp=p.whatsapp,
                office_hours=p.office_hours, room=p.room, photo=p.photo,
                discipline_ids=sorted(d.id for d in p.disciplines),
            )
            for p in fetch(Professor)
        ]
        holidays = [
            HolidayDTO(id=h.id, name=h.name, date=h.date, holiday_type=h.holiday_type,
                       is_recurring=h.is_recurring, blocks_classes=h.blocks_classes)
            for h in fetch(Holiday)
        ]

        bundle = BackupBundle(
            version=BACKUP_FORMAT_VERSION,
            export_date=utc_now(),
            semesters=semesters,
            disciplines=disciplines,
            tasks=tasks,
            exams=exams,
            absences=absences,
            notes=notes,
            evaluations=evaluations,
            professors=professors,
            holidays=holidays,
        )
        logger.info(
            f"Snapshot built: {len(semesters)} semesters, {len(disciplines)} disciplines, "
            f"{len(tasks)} tasks, {len(exams)} exams, {len(absences)} absences, {len(notes)} notes, "
            f"{len(evaluations)} evaluations, {len(professors)} professors, {len(holidays)} holidays"
        )
        return bundle
