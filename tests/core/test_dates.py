"""Date formatting: format_date, format_date_time, apply_time_zone_offset.

Tests cover:
    - date/datetime objects rendered with strftime formats
    - epoch numbers read as seconds below the threshold, milliseconds above
    - ISO, SQL and RFC 2822 strings; aware values rendered in local time
    - Unparseable strings raise UnparseableDateError; other invalid input gives None
    - Objects exposing to_pydatetime()
    - Timezone offset shift with a pinned local offset
"""

from datetime import date, datetime, timezone

import pytest

import qnd_utils.core.dates as dates_module
from qnd_utils.core.dates import (
    DATE_FORMAT,
    DATE_TIME_FORMAT,
    format_date,
    format_date_time,
    apply_time_zone_offset,
    local_timezone_offset_minutes,
)
from qnd_utils.core.errors import UnparseableDateError


class FakeTimestamp:
    """Stands in for an external date-library instance (e.g. pandas.Timestamp)."""

    def __init__(self, value: datetime):
        self.value = value

    def to_pydatetime(self) -> datetime:
        return self.value


# ─── Native objects ──────────────────────────────────────────────

def test_formats_date_with_default_format():
    assert format_date(date(2020, 1, 5)) == "2020-01-05"


def test_formats_datetime_with_custom_format():
    assert format_date(datetime(2020, 1, 5, 13, 45), "%H:%M") == "13:45"


def test_format_date_time_uses_date_time_default():
    assert format_date_time(datetime(2020, 1, 5, 13, 45)) == "05/01/20 13:45"


def test_format_date_time_accepts_custom_format():
    assert format_date_time(datetime(2020, 1, 5, 13, 45), "%Y") == "2020"


def test_formats_external_date_library_instance():
    assert format_date(FakeTimestamp(datetime(2022, 2, 2))) == "2022-02-02"


# ─── Epoch numbers ───────────────────────────────────────────────

def test_formats_epoch_seconds_in_local_time():
    ts = 1_600_000_000
    expected = datetime.fromtimestamp(ts).strftime(DATE_TIME_FORMAT)
    assert format_date_time(ts) == expected


def test_formats_epoch_milliseconds_in_local_time():
    ts_ms = 1_600_000_000_000
    expected = datetime.fromtimestamp(ts_ms / 1000).strftime(DATE_TIME_FORMAT)
    assert format_date_time(ts_ms) == expected


def test_out_of_range_epoch_returns_none():
    assert format_date(10 ** 20) is None


# ─── Strings ─────────────────────────────────────────────────────

def test_formats_iso_date_string():
    assert format_date("2021-03-04") == "2021-03-04"


def test_formats_iso_datetime_string():
    assert format_date_time("2021-03-04T10:20:30") == "04/03/21 10:20"


def test_formats_sql_datetime_string():
    assert format_date_time("2021-03-04 10:20:30") == "04/03/21 10:20"


def test_iso_string_with_offset_renders_in_local_time():
    expected = datetime(2021, 3, 4, 10, 20, 30, tzinfo=timezone.utc).astimezone()
    assert format_date_time("2021-03-04T10:20:30Z") == expected.strftime(DATE_TIME_FORMAT)


def test_formats_rfc2822_string_in_local_time():
    expected = datetime(2021, 3, 4, 10, 20, 30, tzinfo=timezone.utc).astimezone()
    result = format_date_time("Thu, 04 Mar 2021 10:20:30 +0000")
    assert result == expected.strftime(DATE_TIME_FORMAT)


def test_unparseable_string_raises():
    with pytest.raises(UnparseableDateError) as exc_info:
        format_date("not a date")
    assert exc_info.value.value == "not a date"
    assert exc_info.value.code == "UNPARSEABLE_DATE"


def test_empty_string_raises():
    with pytest.raises(UnparseableDateError):
        format_date("")


# ─── Invalid inputs fail soft ────────────────────────────────────

@pytest.mark.parametrize("value", [None, True, object(), [2020, 1, 1]])
def test_invalid_inputs_return_none(value):
    assert format_date(value) is None


def test_default_format_constant():
    assert DATE_FORMAT == "%Y-%m-%d"


# ─── apply_time_zone_offset ──────────────────────────────────────

def test_apply_offset_from_utc_client(monkeypatch):
    monkeypatch.setattr(dates_module, "local_timezone_offset_minutes", lambda: 0)
    assert apply_time_zone_offset(1_000_000, 600) == 1_000_000 + 600 * 60


def test_apply_offset_is_noop_when_client_matches_server(monkeypatch):
    # UTC+10 client: offset is reported as -600
    monkeypatch.setattr(dates_module, "local_timezone_offset_minutes", lambda: -600)
    assert apply_time_zone_offset(1_000_000, 600) == 1_000_000


def test_apply_offset_default_server_offset_is_600(monkeypatch):
    monkeypatch.setattr(dates_module, "local_timezone_offset_minutes", lambda: 0)
    assert apply_time_zone_offset(0) == 36_000


def test_apply_offset_rounds_timestamp(monkeypatch):
    monkeypatch.setattr(dates_module, "local_timezone_offset_minutes", lambda: 0)
    assert apply_time_zone_offset(1000.5, 0) == 1001
    assert apply_time_zone_offset(1000.4, 0) == 1000


def test_local_timezone_offset_matches_utcoffset_sign():
    offset = datetime.now().astimezone().utcoffset()
    assert local_timezone_offset_minutes() == -round(offset.total_seconds() / 60)
