from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import tzinfo
from zoneinfo import ZoneInfo


Instant = int | float | datetime


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Return the configured display zone, or None for the process-local zone."""

    if not name:
        return None
    return ZoneInfo(name)


def parse_instant(raw_value: str, tz: tzinfo | None = None) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing `Z`.

    Naive values are read as wall-clock time in `tz` (process-local when None).
    """

    if not isinstance(raw_value, str):
        raise TypeError("timestamp must be a string")

    parsed = datetime.fromisoformat(raw_value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None and tz is not None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def to_local_datetime(instant: Instant, tz: tzinfo | None = None) -> datetime:
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant
        return instant.astimezone(tz)
    return datetime.fromtimestamp(instant, tz=tz)


def to_epoch_seconds(instant: Instant) -> int:
    if isinstance(instant, datetime):
        return int(instant.timestamp())
    return int(instant)


def truncate_to_day(instant: Instant, tz: tzinfo | None = None) -> str:
    """Drop the time of day, keeping the local calendar date as YYYY-MM-DD."""

    return to_local_datetime(instant, tz).date().isoformat()


def year_label(instant: Instant, tz: tzinfo | None = None) -> str:
    return f"{to_local_datetime(instant, tz).year:04d}"


def rolling_window(end: date, days: int) -> list[str]:
    """Return `days` consecutive ISO dates ending at `end`, ascending."""

    if days < 0:
        raise ValueError("days must be non-negative")

    end_day = end.date() if isinstance(end, datetime) else end
    start_day = end_day - timedelta(days=days - 1)
    return [(start_day + timedelta(days=offset)).isoformat() for offset in range(days)]


def local_today(tz: tzinfo | None = None) -> date:
    return datetime.now(tz).date()


def format_month_year(instant: Instant, tz: tzinfo | None = None) -> str:
    """Render an instant as e.g. `March 2020`."""

    return to_local_datetime(instant, tz).strftime("%B %Y")


def format_short_date(instant: Instant, tz: tzinfo | None = None) -> str:
    """Render an instant as e.g. `Mar 4, 2020`."""

    local = to_local_datetime(instant, tz)
    return f"{local.strftime('%b')} {local.day}, {local.year}"
