from datetime import datetime, time, timedelta


def get_week_bounds(reference: datetime) -> tuple[datetime, datetime]:
    """
    Monday 00:00:00.000 and Sunday 23:59:59.999 of the calendar week
    that contains ``reference``.

    The reference instant is always passed in so callers (and tests)
    decide what "now" is.
    """
    monday = reference.date() - timedelta(days=reference.weekday())
    week_start = datetime.combine(monday, time.min)
    week_end = datetime.combine(monday + timedelta(days=6), time(23, 59, 59, 999000))
    return week_start, week_end
