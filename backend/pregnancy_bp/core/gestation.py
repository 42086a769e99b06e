"""
Gestational week calculation from the due date.
"""
from datetime import datetime, timedelta

PREGNANCY_LENGTH = timedelta(days=280)
MIN_WEEK = 1
MAX_WEEK = 42
DEFAULT_WEEK = 20


def current_week(due_date, now) -> int:
    """
    Weeks elapsed since estimated conception (due date minus 40 weeks),
    clamped to [1, 42]. Without a due date the mid-pregnancy default is used.
    """
    if due_date is None:
        return DEFAULT_WEEK

    if not isinstance(now, datetime):
        now = datetime.combine(now, datetime.min.time())
    if isinstance(due_date, datetime):
        due_date = due_date.date()

    conception = datetime.combine(due_date, datetime.min.time()) - PREGNANCY_LENGTH
    # Anything before conception clamps to MIN_WEEK, so floor == truncate here
    weeks = (now - conception) // timedelta(weeks=1)

    return max(MIN_WEEK, min(MAX_WEEK, weeks))
