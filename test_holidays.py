from datetime import date, datetime, timezone

from medplanner.core.holidays import NATIONAL_HOLIDAYS, blocks_classes_on, holidays_on, occurs_on, seed_national_holidays
from medplanner.db.models import Holiday
from medplanner.db.repositories import HolidayRepository


def test_recurring_holiday_matches_every_year():
    christmas = Holiday(name="Natal", date=datetime(2020, 12, 25, tzinfo=timezone.utc), is_recurring=True)
    assert occurs_on(christmas, date(2031, 12, 25))
    assert occurs_on(christmas, datetime(2024, 12, 25, 15, 0))
    assert not occurs_on(christmas, date(2031, 12, 24))

def test_single_holiday_matches_exact_date_only():
    strike = Holiday(name="Greve", date=datetime(2024, 4, 10, tzinfo=timezone.utc), is_recurring=False)
    assert occurs_on(strike, date(2024, 4, 10))
    assert not occurs_on(strike, date(2025, 4, 10))

def test_blocks_classes_on():
    week = Holiday(name="Semana Acadêmica", date=datetime(2024, 5, 20), is_recurring=False, blocks_classes=False)
    labour = Holiday(name="Dia do Trabalhador", date=datetime(2019, 5, 1), is_recurring=True, blocks_classes=True)

    assert holidays_on([week, labour], date(2024, 5, 20)) == [week]
    assert not blocks_classes_on([week, labour], date(2024, 5, 20))
    assert blocks_classes_on([week, labour], date(2024, 5, 1))
    assert not blocks_classes_on([], date(2024, 5, 1))

def test_seed_national_holidays_is_idempotent(db_session):
    created = seed_national_holidays(db_session, 2025)
    assert len(created) == len(NATIONAL_HOLIDAYS)
    assert all(h.is_recurring and h.blocks_classes and h.holiday_type == "Nacional" for h in created)

    assert seed_national_holidays(db_session, 2025) == []
    assert len(HolidayRepository().get_all(db_session)) == len(NATIONAL_HOLIDAYS)
