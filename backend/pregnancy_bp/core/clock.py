"""
Time source used by the tracker.

Handlers never call datetime.now() directly; they ask the clock stored in
app.config['CLOCK'] so tests can pin "now".
"""
from datetime import date, datetime


class SystemClock:
    """Wall-clock time in the server's local timezone."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()


class FixedClock(SystemClock):
    """Clock frozen at a given instant."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def parse_iso_date(value) -> date:
    """Parse a YYYY-MM-DD string (or pass through a date). Raises ValueError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value), '%Y-%m-%d').date()


def format_iso_date(value: date) -> str:
    return value.strftime('%Y-%m-%d')


def format_time_of_day(value: datetime) -> str:
    return value.strftime('%H:%M')
