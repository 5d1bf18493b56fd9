from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta


def week_bounds(today: date) -> tuple[date, date]:
    # Minggu(Sunday) .. Sabtu(Saturday)
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    last_day = monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def resolve_range(
    filter_type: str | None,
    start: date | None,
    end: date | None,
    today: date | None = None,
) -> tuple[date, date]:
    """Turn a dashboard filter into inclusive (start, end) departure dates.

    ``custom`` (or no filter type) uses the explicit bounds and falls back to
    today when either bound is missing.
    """
    today = today or date.today()
    if filter_type == "today":
        return today, today
    if filter_type == "this_week":
        return week_bounds(today)
    if filter_type == "this_month":
        return month_bounds(today)
    if filter_type not in (None, "custom"):
        raise ValueError(f"Unknown filter type: {filter_type}")
    if start is None or end is None:
        return today, today
    return start, end
