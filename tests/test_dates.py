"""日付正規化のユニットテスト"""

from datetime import date, datetime, timedelta, timezone

import pytest
from bca_api_client.dates import format_iso, to_iso, to_utc_datetime
from bca_api_client.exceptions import BcaApiErrorCodes, InvalidDateError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=10))), "2024-03-01T00:00:00.000Z"),
        (datetime(2024, 3, 1, 0, 0, 0, 123456, tzinfo=timezone.utc), "2024-03-01T00:00:00.123Z"),
        (datetime(2024, 3, 1, 8, 30), "2024-03-01T08:30:00.000Z"),
        (date(2024, 1, 2), "2024-01-02T00:00:00.000Z"),
        ("2024-06-30T23:59:59Z", "2024-06-30T23:59:59.000Z"),
        ("2024-07-01T09:00:00+09:30", "2024-06-30T23:30:00.000Z"),
        ("2024-07-01", "2024-07-01T00:00:00.000Z"),
    ],
)
def test_to_iso(value, expected) -> None:
    assert to_iso(value) == expected


def test_to_utc_datetime_is_aware() -> None:
    assert to_utc_datetime("2024-01-01T00:00:00").tzinfo == timezone.utc


@pytest.mark.parametrize("value", ["yesterday", "2024-13-01", ""])
def test_invalid_string_raises(value: str) -> None:
    """解析できない文字列は値を保持した InvalidDateError になること。"""
    with pytest.raises(InvalidDateError) as exc_info:
        to_iso(value)
    assert exc_info.value.value == value
    assert exc_info.value.code == BcaApiErrorCodes.INVALID_DATE
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_non_date_value_raises() -> None:
    with pytest.raises(InvalidDateError):
        to_iso(1700000000)  # type: ignore[arg-type]


def test_format_iso_uses_z_suffix() -> None:
    assert format_iso(datetime(2024, 1, 1, tzinfo=timezone.utc)).endswith(".000Z")
