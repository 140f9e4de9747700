"""
Утилиты для работы с датами и временем.
В БД время хранится в UTC без tzinfo, даты рождения - как date.
"""
from datetime import date, datetime, timezone
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class TimezoneUtils:
    """Утилиты для работы с датами"""

    @staticmethod
    def now_utc() -> datetime:
        """Текущее время в UTC (naive, как хранится в БД)"""
        return datetime.now(timezone.utc).replace(tzinfo=None)

    @staticmethod
    def today() -> date:
        return date.today()

    @staticmethod
    def years_ago(years: int, from_date: Optional[date] = None) -> date:
        """
        Дата ровно `years` лет назад.
        29 февраля в невисокосный год превращается в 28 февраля.
        """
        base = from_date or TimezoneUtils.today()
        try:
            return base.replace(year=base.year - years)
        except ValueError:
            return base.replace(year=base.year - years, day=28)

    @staticmethod
    def calculate_age(date_of_birth: date, on_date: Optional[date] = None) -> int:
        """Полных лет на дату"""
        today = on_date or TimezoneUtils.today()
        age = today.year - date_of_birth.year
        if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
            age -= 1
        return age
