import uuid
from typing import Optional, List
from datetime import datetime
from sqlalchemy.orm import Session
from medplanner.core.models import ExamType, HolidayType, ProfessorTitle, to_utc, utc_now
from medplanner.db.models import Semester, Discipline, Task, Exam, Absence, Note, Evaluation, Professor, Holiday


def _new_id(explicit_id: Optional[str]) -> str:
    # Callers may pin the id (e.g. when re-creating an object); otherwise generate one
    return str(uuid.UUID(str(explicit_id))) if explicit_id else str(uuid.uuid4())

def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


class SemesterRepository:
    """
    Semesters (the top of the planner graph)
    """
    def create_semester(self, db: Session, name: str, start_date: datetime, end_date: datetime,
                        is_active: bool = False, id: Optional[str] = None) -> Semester:
        semester = Semester(
            id=_new_id(id),
            name=name,
            start_date=to_utc(start_date),
            end_date=to_utc(end_date),
            is_active=is_active
        )
        return _save(db, semester)

    def get_all(self, db: Session) -> List[Semester]:
        return db.query(Semester).order_by(Semester.start_date).all()

    def get_by_id(self, db: Session, semester_id: str) -> Optional[Semester]:
        return db.get(Semester, semester_id)

    def get_active(self, db: Session) -> Optional[Semester]:
        return db.query(Semester).filter(Semester.is_active.is_(True)).first()

    def set_active(self, db: Session, semester_id: str) -> Semester:
        """
        Mark one semester as active and clear the flag on every other one
        """
        target = None
        for semester in db.query(Semester).all():
            semester.is_active = semester.id == semester_id
            if semester.is_active:
                target = semester
        if target is None:
            db.rollback()
            raise LookupError(f"Semester not found: {semester_id}")
        db.commit()
        db.refresh(target)
        return target

    def delete(self, db: Session, semester: Semester) -> None:
        # Disciplines stay, with semester_id set to NULL
        db.delete(semester)
        db.commit()


class DisciplineRepository:
    def create_discipline(self, db: Session, name: str, code: str, instructor: Optional[str] = None,
                          color_hex: str = "#1B3FE8", total_hours: Optional[int] = None,
                          absence_limit: Optional[float] = 0.25, semester: Optional[Semester] = None,
                          id: Optional[str] = None) -> Discipline:
        discipline = Discipline(
            id=_new_id(id),
            name=name,
            code=code,
            instructor=instructor,
            color_hex=color_hex,
            total_hours=total_hours,
            absence_limit=absence_limit,
            semester=semester
        )
        return _save(db, discipline)

    def get_all(self, db: Session) -> List[Discipline]:
        return db.query(Discipline).order_by(Discipline.name).all()

    def get_by_id(self, db: Session, discipline_id: str) -> Optional[Discipline]:
        return db.get(Discipline, discipline_id)

    def get_by_semester(self, db: Session, semester_id: str) -> List[Discipline]:
        return db.query(Discipline).filter(Discipline.semester_id == semester_id).all()

    def delete(self, db: Session, discipline: Discipline) -> None:
        # Tasks, exams, absences, notes and evaluations go with it
        db.delete(discipline)
        db.commit()


class TaskRepository:
    def create_task(self, db: Session, title: str, due_date: datetime, description: str = "",
                    is_completed: bool = False, discipline: Optional[Discipline] = None,
                    id: Optional[str] = None) -> Task:
        task = Task(
            id=_new_id(id),
            title=title,
            description=description,
            due_date=to_utc(due_date),
            is_completed=is_completed,
            discipline=discipline
        )
        return _save(db, task)

    def get_all(self, db: Session) -> List[Task]:
        return db.query(Task).order_by(Task.due_date).all()

    def get_by_id(self, db: Session, task_id: str) -> Optional[Task]:
        return db.get(Task, task_id)

    def set_completed(self, db: Session, task: Task, is_completed: bool = True) -> Task:
        task.is_completed = is_completed
        return _save(db, task)

    def delete(self, db: Session, task: Task) -> None:
        db.delete(task)
        db.commit()


class ExamRepository:
    def create_exam(self, db: Session, title: str, exam_date: datetime, description: str = "",
                    score: Optional[float] = None, exam_type: ExamType = ExamType.THEORETICAL,
                    discipline: Optional[Discipline] = None, id: Optional[str] = None) -> Exam:
        exam = Exam(
            id=_new_id(id),
            title=title,
            description=description,
            exam_date=to_utc(exam_date),
            score=score,
            exam_type=ExamType(exam_type).value,
            discipline=discipline
        )
        return _save(db, exam)

    def get_all(self, db: Session) -> List[Exam]:
        return db.query(Exam).order_by(Exam.exam_date).all()

    def get_by_id(self, db: Session, exam_id: str) -> Optional[Exam]:
        return db.get(Exam, exam_id)

    def delete(self, db: Session, exam: Exam) -> None:
        db.delete(exam)
        db.commit()


class AbsenceRepository:
    def create_absence(self, db: Session, date: datetime, hours: int = 1, remark: Optional[str] = None,
                       discipline: Optional[Discipline] = None, id: Optional[str] = None) -> Absence:
        absence = Absence(
            id=_new_id(id),
            date=to_utc(date),
            hours=hours,
            remark=remark,
            discipline=discipline
        )
        return _save(db, absence)

    def get_all(self, db: Session) -> List[Absence]:
        return db.query(Absence).order_by(Absence.date).all()

    def get_by_id(self, db: Session, absence_id: str) -> Optional[Absence]:
        return db.get(Absence, absence_id)

    def delete(self, db: Session, absence: Absence) -> None:
        db.delete(absence)
        db.commit()


class NoteRepository:
    def create_note(self, db: Session, title: str, content: str = "", discipline: Optional[Discipline] = None,
                    id: Optional[str] = None) -> Note:
        now = utc_now()
        note = Note(
            id=_new_id(id),
            title=title,
            content=content,
            created_at=now,
            modified_at=now,
            discipline=discipline
        )
        return _save(db, note)

    def update_content(self, db: Session, note: Note, content: str) -> Note:
        note.content = content
        note.modified_at = utc_now()
        return _save(db, note)

    def get_all(self, db: Session) -> List[Note]:
        return db.query(Note).order_by(Note.modified_at).all()

    def get_by_id(self, db: Session, note_id: str) -> Optional[Note]:
        return db.get(Note, note_id)

    def delete(self, db: Session, note: Note) -> None:
        db.delete(note)
        db.commit()


class EvaluationRepository:
    def create_evaluation(self, db: Session, title: str, score: float, weight: float = 1.0,
                          date: Optional[datetime] = None, discipline: Optional[Discipline] = None,
                          id: Optional[str] = None) -> Evaluation:
        evaluation = Evaluation(
            id=_new_id(id),
            title=title,
            score=score,
            weight=weight,
            date=to_utc(date) if date is not None else utc_now(),
            discipline=discipline
        )
        return _save(db, evaluation)

    def get_all(self, db: Session) -> List[Evaluation]:
        return db.query(Evaluation).order_by(Evaluation.date).all()

    def get_by_id(self, db: Session, evaluation_id: str) -> Optional[Evaluation]:
        return db.get(Evaluation, evaluation_id)

    def delete(self, db: Session, evaluation: Evaluation) -> None:
        db.delete(evaluation)
        db.commit()


class ProfessorRepository:
    def create_professor(self, db: Session, name: str, title: ProfessorTitle = ProfessorTitle.NONE,
                         specialty: str = "", department: str = "", email: str = "", phone: str = "",
                         whatsapp: str = "", office_hours: str = "", room: str = "", remarks: str = "",
                         photo: Optional[bytes] = None, id: Optional[str] = None) -> Professor:
        professor = Professor(
            id=_new_id(id),
            name=name,
            title=ProfessorTitle(title).value,
            specialty=specialty,
            department=department,
            email=email,
            phone=phone,
            whatsapp=whatsapp,
            office_hours=office_hours,
            room=room,
            remarks=remarks,
            photo=photo
        )
        return _save(db, professor)

    def assign_discipline(self, db: Session, professor: Professor, discipline: Discipline) -> Professor:
        if discipline not in professor.disciplines:
            professor.disciplines.append(discipline)
        return _save(db, professor)

    def get_all(self, db: Session) -> List[Professor]:
        return db.query(Professor).order_by(Professor.name).all()

    def get_by_id(self, db: Session, professor_id: str) -> Optional[Professor]:
        return db.get(Professor, professor_id)

    def delete(self, db: Session, professor: Professor) -> None:
        db.delete(professor)
        db.commit()


class HolidayRepository:
    def create_holiday(self, db: Session, name: str, date: datetime, holiday_type: HolidayType = HolidayType.NATIONAL,
                       is_recurring: bool = False, blocks_classes: bool = True, id: Optional[str] = None) -> Holiday:
        holiday = Holiday(
            id=_new_id(id),
            name=name,
            date=to_utc(date),
            holiday_type=HolidayType(holiday_type).value,
            is_recurring=is_recurring,
            blocks_classes=blocks_classes
        )
        return _save(db, holiday)

    def get_all(self, db: Session) -> List[Holiday]:
        return db.query(Holiday).order_by(Holiday.date).all()

    def get_by_id(self, db: Session, holiday_id: str) -> Optional[Holiday]:
        return db.get(Holiday, holiday_id)

    def delete(self, db: Session, holiday: Holiday) -> None:
        db.delete(holiday)
        db.commit()
