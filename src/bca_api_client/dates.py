"""ISO-8601 日付の正規化"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Union

from .exceptions import InvalidDateError

DateLike = Union[str, date, datetime]


def _as_utc(value: datetime) -> datetime:
    # naive な値は UTC とみなす
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_iso(value: datetime) -> str:
    """datetime を ``YYYY-MM-DDTHH:MM:SS.mmmZ`` 形式に整形する。"""
    return _as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_utc_datetime(value: DateLike) -> datetime:
    """日付らしき値を aware な UTC datetime に変換する。

    Raises:
        InvalidDateError: ISO-8601 でない文字列、または日付として扱えない値。
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidDateError(value, cause=e) from e
        return _as_utc(parsed)
    raise InvalidDateError(value)


def to_iso(value: DateLike) -> str:
    """日付らしき値を UTC の ISO-8601 文字列に正規化する。"""
    return format_iso(to_utc_datetime(value))


def utc_now_iso() -> str:
    return format_iso(datetime.now(timezone.utc))
