from enum import Enum
from typing import Iterable, List, Optional

from medplanner import config
from medplanner.db.models import Discipline, Evaluation, Task

# Used when a discipline has no limit of its own
DEFAULT_ABSENCE_LIMIT = 0.25


class AttendanceStatus(str, Enum):
    OK = "ok"
    ATTENTION = "attention"
    AT_RISK = "at_risk"
    FAILED = "failed"


def weighted_average(evaluations: Iterable[Evaluation]) -> Optional[float]:
    """
    sum(score * weight) / sum(weight); None without evaluations or with zero total weight
    """
    total_weight = 0.0
    total = 0.0
    for ev in evaluations:
        total_weight += ev.weight
        total += ev.score * ev.weight
    if total_weight <= 0:
        return None
    return total / total_weight

def overall_average(disciplines: Iterable[Discipline]) -> float:
    # Disciplines without grades do not count
    averages = [avg for avg in (weighted_average(d.evaluations) for d in disciplines) if avg is not None]
    if not averages:
        return 0.0
    return sum(averages) / len(averages)

def has_passed(score: float, passing_grade: Optional[float] = None) -> bool:
    threshold = config.PASSING_GRADE if passing_grade is None else passing_grade
    return score >= threshold

def absence_hours(discipline: Discipline) -> int:
    return sum(a.hours for a in discipline.absences)

def attendance_status(discipline: Discipline) -> Optional[AttendanceStatus]:
    """
    Compare missed hours with the allowed hours (total_hours * limit).
    None when the discipline has no workload set.
    """
    if not discipline.total_hours:
        return None
    limit = discipline.absence_limit if discipline.absence_limit is not None else DEFAULT_ABSENCE_LIMIT
    allowed_hours = discipline.total_hours * limit
    if allowed_hours <= 0:
        return AttendanceStatus.FAILED if absence_hours(discipline) > 0 else AttendanceStatus.OK

    ratio = absence_hours(discipline) / allowed_hours
    if ratio >= 1.0:
        return AttendanceStatus.FAILED
    if ratio >= 0.8:
        return AttendanceStatus.AT_RISK
    if ratio >= 0.5:
        return AttendanceStatus.ATTENTION
    return AttendanceStatus.OK

def is_attendance_critical(discipline: Discipline) -> bool:
    # Dashboard alert: 75% of the allowed share already missed
    if discipline.absence_limit is None or not discipline.total_hours:
        return False
    missed_share = absence_hours(discipline) / discipline.total_hours
    return missed_share >= discipline.absence_limit * 0.75

def filter_by_semester(disciplines: Iterable[Discipline], active_semester_id: Optional[str] = None) -> List[Discipline]:
    """
    Keep the disciplines of the given semester. The caller passes the active
    semester explicitly (e.g. config.ACTIVE_SEMESTER_ID); empty means no filter.
    """
    if not active_semester_id:
        return list(disciplines)
    return [d for d in disciplines if d.semester_id == active_semester_id]

def pending_tasks(tasks: Iterable[Task]) -> List[Task]:
    return sorted((t for t in tasks if not t.is_completed), key=lambda t: t.due_date)
