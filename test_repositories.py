from datetime import datetime, timezone

import pytest

from medplanner.core.models import ExamType
from medplanner.db.models import Discipline, Task, Exam, Absence, Note, Evaluation, Professor
from medplanner.db.repositories import (
    SemesterRepository, DisciplineRepository, TaskRepository, ExamRepository, AbsenceRepository,
    NoteRepository, EvaluationRepository, ProfessorRepository,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)

@pytest.fixture
def anatomy(db_session):
    semester = SemesterRepository().create_semester(db_session, "2024.1", utc(2024, 2, 1), utc(2024, 6, 30))
    discipline = DisciplineRepository().create_discipline(db_session, "Anatomy", "ANA", total_hours=60, semester=semester)
    TaskRepository().create_task(db_session, "Read ch.3", utc(2024, 3, 10), discipline=discipline)
    ExamRepository().create_exam(db_session, "P1", utc(2024, 4, 1), discipline=discipline)
    AbsenceRepository().create_absence(db_session, utc(2024, 3, 1), hours=2, discipline=discipline)
    NoteRepository().create_note(db_session, "Bones", discipline=discipline)
    EvaluationRepository().create_evaluation(db_session, "Lab", 9.0, discipline=discipline)
    return discipline


def test_explicit_id_is_kept(db_session):
    wanted = "0b9e3f0c-7d2a-4c55-9a51-52c1f3c0a001"
    semester = SemesterRepository().create_semester(db_session, "2024.1", utc(2024, 2, 1), utc(2024, 6, 30), id=wanted)
    assert semester.id == wanted
    assert SemesterRepository().get_by_id(db_session, wanted) is semester

def test_explicit_id_must_be_uuid(db_session):
    with pytest.raises(ValueError):
        SemesterRepository().create_semester(db_session, "x", utc(2024, 2, 1), utc(2024, 6, 30), id="S1")

def test_deleting_discipline_cascades_to_children(db_session, anatomy):
    DisciplineRepository().delete(db_session, anatomy)

    for model in (Discipline, Task, Exam, Absence, Note, Evaluation):
        assert db_session.query(model).count() == 0

def test_deleting_semester_detaches_disciplines(db_session, anatomy):
    SemesterRepository().delete(db_session, anatomy.semester)

    db_session.refresh(anatomy)
    assert anatomy.semester_id is None
    assert db_session.query(Task).count() == 1

def test_deleting_professor_keeps_disciplines(db_session, anatomy):
    repo = ProfessorRepository()
    professor = repo.create_professor(db_session, "Ana Souza")
    repo.assign_discipline(db_session, professor, anatomy)
    repo.assign_discipline(db_session, professor, anatomy)
    assert [d.id for d in professor.disciplines] == [anatomy.id]

    repo.delete(db_session, professor)

    db_session.refresh(anatomy)
    assert anatomy.professors == []
    assert db_session.query(Professor).count() == 0

def test_set_active_is_exclusive(db_session):
    repo = SemesterRepository()
    first = repo.create_semester(db_session, "2023.2", utc(2023, 8, 1), utc(2023, 12, 1), is_active=True)
    second = repo.create_semester(db_session, "2024.1", utc(2024, 2, 1), utc(2024, 6, 30))

    repo.set_active(db_session, second.id)

    assert repo.get_active(db_session) is second
    assert first.is_active is False
    with pytest.raises(LookupError):
        repo.set_active(db_session, "00000000-0000-4000-8000-000000000000")

def test_note_update_touches_modified_at(db_session):
    repo = NoteRepository()
    note = repo.create_note(db_session, "Draft")
    note.modified_at = utc(2020, 1, 1)
    db_session.commit()

    repo.update_content(db_session, note, "Final text")

    assert note.content == "Final text"
    assert note.modified_at.year > 2020

def test_task_completion_and_exam_type(db_session, anatomy):
    task = TaskRepository().get_all(db_session)[0]
    TaskRepository().set_completed(db_session, task)
    assert TaskRepository().get_by_id(db_session, task.id).is_completed is True

    exam = ExamRepository().create_exam(db_session, "OSCE 1", utc(2024, 5, 1), exam_type=ExamType.OSCE)
    assert exam.exam_type == "OSCE"
    assert exam.discipline is None
