"""Release-date windows for RAWG listing requests.

RAWG expects ``dates=YYYY-MM-DD,YYYY-MM-DD``. Callers either pass that pair
directly (``dates``) or name a preset window (``range``).
"""

from datetime import date, timedelta

# Lower bound used when no window is requested
EPOCH_START = date(2000, 1, 1)

# Lower bound of the trending fallback listing
TRENDING_START = date(2024, 1, 1)

UPCOMING_DAYS = 90


def _one_year_before(day: date) -> date:
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        # Feb 29 has no counterpart in the previous year
        return day.replace(year=day.year - 1, day=28)


def resolve_date_range(
    dates: str | None,
    range_name: str | None,
    today: date | None = None,
) -> tuple[str, str]:
    """Return the ``(start, end)`` ISO dates for a listing request.

    An explicit ``dates`` pair wins over ``range_name``. Components of
    ``dates`` are passed through as given; a missing end defaults to today.
    Unknown or absent range names select everything since 2000-01-01.
    """
    today = today or date.today()
    today_str = today.isoformat()

    if dates:
        parts = [p.strip() for p in dates.split(",")]
        start = parts[0]
        end = parts[1] if len(parts) > 1 and parts[1] else today_str
        return start, end

    if range_name == "today":
        start, end = today, today
    elif range_name == "week":
        start, end = today - timedelta(days=7), today
    elif range_name == "year":
        start, end = _one_year_before(today), today
    elif range_name == "upcoming":
        start, end = today, today + timedelta(days=UPCOMING_DAYS)
    else:
        start, end = EPOCH_START, today

    return start.isoformat(), end.isoformat()


def format_dates_param(start: str, end: str) -> str:
    return f"{start},{end}"


def trending_dates(today: date | None = None) -> str:
    """``dates`` value for the trending fallback: 2024-01-01 through today."""
    today = today or date.today()
    return format_dates_param(TRENDING_START.isoformat(), today.isoformat())
