"""Date Formatting: render date-like inputs with strftime formats.

Invariants:
    - Epoch numbers below EPOCH_MILLIS_THRESHOLD are seconds, otherwise milliseconds
    - Strings are tried as ISO 8601, then SQL, then RFC 2822, in that order
    - Timezone-aware values parsed from strings are rendered in local time
    - An unparseable string is the only input that raises (UnparseableDateError);
      every other invalid input returns None

Design Decisions:
    - Standard library datetime only: strftime formats replace a date library's tokens
    - Objects exposing to_pydatetime() (pandas and friends) are accepted as-is
"""

from datetime import date, datetime
from email.utils import parsedate_to_datetime

from qnd_utils.core.domain_types import DateLike
from qnd_utils.core.errors import UnparseableDateError
from qnd_utils.core.numbers import round_half_up


DATE_FORMAT: str = "%Y-%m-%d"
DATE_TIME_FORMAT: str = "%d/%m/%y %H:%M"

# Epoch seconds above this would be year 2128+, so larger numbers are milliseconds.
# Millisecond values before 28 Feb 1970 are therefore read as seconds.
EPOCH_MILLIS_THRESHOLD: int = 5_000_000_000

DEFAULT_SERVER_OFFSET_MIN: int = 600

_SQL_FORMATS = (
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def format_date(value: DateLike | None, date_format: str = DATE_FORMAT) -> str | None:
    """Format a date-like value, or return None if it is not a valid date.

    Raises UnparseableDateError for strings none of the parsers accept.
    """
    parsed = to_datetime(value)
    if parsed is None:
        return None
    try:
        return parsed.strftime(date_format)
    except ValueError:
        # NaT-style sentinels pass the isinstance check but cannot render
        return None


def format_date_time(
    value: DateLike | None, date_time_format: str = DATE_TIME_FORMAT,
) -> str | None:
    """format_date with the date/time default format."""
    return format_date(value, date_time_format)


def to_datetime(value: DateLike | None) -> date | None:
    """Normalise a date-like value into a date/datetime, None if not a date."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, str):
        return _parse_string(value)
    to_pydatetime = getattr(value, "to_pydatetime", None)
    if callable(to_pydatetime):
        converted = to_pydatetime()
        return converted if isinstance(converted, datetime) else None
    return None


def _from_epoch(number: int | float) -> datetime | None:
    seconds = number if number < EPOCH_MILLIS_THRESHOLD else number / 1000
    try:
        return datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        return None


def _parse_string(text: str) -> datetime:
    for parser in (_parse_iso, _parse_sql, _parse_rfc2822):
        parsed = parser(text.strip())
        if parsed is not None:
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone()
            return parsed
    raise UnparseableDateError(text)


def _parse_iso(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_sql(text: str) -> datetime | None:
    for fmt in _SQL_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_rfc2822(text: str) -> datetime | None:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def local_timezone_offset_minutes() -> int:
    """Minutes the local timezone is behind UTC (UTC+10 gives -600)."""
    offset = datetime.now().astimezone().utcoffset()
    if offset is None:
        return 0
    return -round(offset.total_seconds() / 60)


def apply_time_zone_offset(
    timestamp: int | float, server_offset_min: int = DEFAULT_SERVER_OFFSET_MIN,
) -> int:
    """Shift an epoch-seconds timestamp so local rendering shows the server's wall clock.

    server_offset_min is the server's offset from UTC in minutes (+10:00 is 600).
    Convert every timestamp of a series received from the server, then render the
    results in local time to display them in the server's timezone.
    """
    offset_minutes = local_timezone_offset_minutes() + server_offset_min
    return round_half_up(timestamp) + offset_minutes * 60
