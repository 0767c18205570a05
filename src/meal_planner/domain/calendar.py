"""Calendar helpers for day keys and week windows."""

from datetime import date, timedelta

from meal_planner.domain.errors import InvalidInputError

DAYS_PER_WEEK = 7


def format_day_key(day: date) -> str:
    """Format a calendar date as a ``YYYY-MM-DD`` key."""
    return day.isoformat()


def parse_day_key(raw: str) -> date:
    """Parse a ``YYYY-MM-DD`` key into a date."""
    try:
        return date.fromisoformat(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid date: {raw!r}") from exc


def week_day_keys(start: date) -> list[str]:
    """Return the seven consecutive day keys starting at ``start``."""
    return [
        format_day_key(start + timedelta(days=offset))
        for offset in range(DAYS_PER_WEEK)
    ]


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())
