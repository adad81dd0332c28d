import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from medplanner.core.models import HolidayType
from medplanner.db.models import Holiday
from medplanner.db.repositories import HolidayRepository

logger = logging.getLogger(__name__)

# Paraguayan fixed-date national holidays (month, day)
NATIONAL_HOLIDAYS = [
    ("Ano Novo", 1, 1),
    ("Dia dos Heróis", 3, 1),
    ("Dia do Trabalhador", 5, 1),
    ("Independência do Paraguai", 5, 14),
    ("Independência do Paraguai (Dia das Mães)", 5, 15),
    ("Paz do Chaco", 6, 12),
    ("Fundação de Assunção", 8, 15),
    ("Batalha de Boquerón", 9, 29),
    ("Dia da Virgem de Caacupé", 12, 8),
    ("Natal", 12, 25),
]


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value

def occurs_on(holiday: Holiday, day: Union[date, datetime]) -> bool:
    """Recurring holidays match the same month/day every year, the others only their exact date"""
    target = _as_date(day)
    stored = _as_date(holiday.date)
    if holiday.is_recurring:
        return (stored.month, stored.day) == (target.month, target.day)
    return stored == target

def holidays_on(holidays: Iterable[Holiday], day: Union[date, datetime]) -> List[Holiday]:
    return [h for h in holidays if occurs_on(h, day)]

def blocks_classes_on(holidays: Iterable[Holiday], day: Union[date, datetime]) -> bool:
    return any(h.blocks_classes for h in holidays_on(holidays, day))


def seed_national_holidays(db: Session, year: int, repo: Optional[HolidayRepository] = None) -> List[Holiday]:
    """
    Insert the national list for `year`. An entry with the same name on the
    same day is skipped, so calling this twice adds nothing new.
    """
    repo = repo or HolidayRepository()
    existing = repo.get_all(db)
    created = []

    for name, month, day in NATIONAL_HOLIDAYS:
        when = datetime(year, month, day, tzinfo=timezone.utc)
        if any(h.name == name and _as_date(h.date) == when.date() for h in existing):
            continue
        created.append(repo.create_holiday(
            db,
            name=name,
            date=when,
            holiday_type=HolidayType.NATIONAL,
            is_recurring=True,
            blocks_classes=True
        ))

    logger.info(f"Seeded {len(created)} national holidays for {year}")
    return created
