from datetime import datetime, timezone

import pytest

from medplanner.core.academics import (
    AttendanceStatus, absence_hours, attendance_status, filter_by_semester, has_passed,
    is_attendance_critical, overall_average, pending_tasks, weighted_average,
)
from medplanner.db.models import Absence, Discipline, Evaluation, Task


def discipline_with_absences(hours, total_hours=80, absence_limit=0.25, **kwargs):
    return Discipline(
        name="Anatomy", code="ANA", total_hours=total_hours, absence_limit=absence_limit,
        absences=[Absence(hours=h) for h in hours], **kwargs
    )


def test_weighted_average():
    evaluations = [Evaluation(score=8.0, weight=2.0), Evaluation(score=5.0, weight=1.0)]
    assert weighted_average(evaluations) == pytest.approx(7.0)

def test_weighted_average_without_weight():
    assert weighted_average([]) is None
    assert weighted_average([Evaluation(score=9.0, weight=0.0)]) is None

def test_overall_average_skips_ungraded():
    graded = Discipline(name="A", code="A", evaluations=[Evaluation(score=6.0, weight=1.0)])
    other = Discipline(name="B", code="B", evaluations=[Evaluation(score=9.0, weight=1.0)])
    ungraded = Discipline(name="C", code="C")
    assert overall_average([graded, other, ungraded]) == pytest.approx(7.5)
    assert overall_average([ungraded]) == 0.0

def test_has_passed():
    assert has_passed(60.0)
    assert not has_passed(59.9)
    assert has_passed(6.0, passing_grade=6.0)

@pytest.mark.parametrize("hours, expected", [
    ([], AttendanceStatus.OK),
    ([5, 4], AttendanceStatus.OK),
    ([10], AttendanceStatus.ATTENTION),
    ([16], AttendanceStatus.AT_RISK),
    ([10, 10], AttendanceStatus.FAILED),
])
def test_attendance_status(hours, expected):
    # 80h * 25% = 20 allowed hours
    assert attendance_status(discipline_with_absences(hours)) == expected

def test_attendance_status_defaults_and_missing_workload():
    assert attendance_status(discipline_with_absences([10], absence_limit=None)) == AttendanceStatus.ATTENTION
    assert attendance_status(discipline_with_absences([10], total_hours=None)) is None
    assert attendance_status(discipline_with_absences([10], total_hours=0)) is None

def test_attendance_critical_at_three_quarters_of_limit():
    assert absence_hours(discipline_with_absences([7, 8])) == 15
    assert is_attendance_critical(discipline_with_absences([15]))
    assert not is_attendance_critical(discipline_with_absences([14]))
    assert not is_attendance_critical(discipline_with_absences([40], absence_limit=None))

def test_filter_by_semester():
    first = Discipline(name="A", code="A", semester_id="s-1")
    second = Discipline(name="B", code="B", semester_id="s-2")
    loose = Discipline(name="C", code="C")

    assert filter_by_semester([first, second, loose], "s-2") == [second]
    assert filter_by_semester([first, second, loose], "") == [first, second, loose]
    assert filter_by_semester([first, second, loose]) == [first, second, loose]

def test_pending_tasks_sorted_by_due_date():
    late = Task(title="late", due_date=datetime(2024, 5, 1, tzinfo=timezone.utc), is_completed=False)
    soon = Task(title="soon", due_date=datetime(2024, 3, 1, tzinfo=timezone.utc), is_completed=False)
    done = Task(title="done", due_date=datetime(2024, 1, 1, tzinfo=timezone.utc), is_completed=True)

    assert [t.title for t in pending_tasks([late, done, soon])] == ["soon", "late"]
