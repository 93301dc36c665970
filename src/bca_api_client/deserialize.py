"""ドメインレコードの ``from_dict`` が共有するフィールド変換関数"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Iterable, TypeVar, Union

T = TypeVar("T")


class _Unset:
    """ペイロードに存在しなかったフィールドを表す（null とは区別する）。"""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()
Unset = _Unset

OptionalDecimal = Union[Decimal, None, _Unset]
OptionalTimestamp = Union[datetime, None, _Unset]


def to_decimal(value: Any) -> Decimal:
    """JSON の文字列または数値を float を経由せずに Decimal へ変換する。"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Expected a decimal value, got {value!r}")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def decimal_or_none(value: Any) -> Decimal | None:
    return None if value is None else to_decimal(value)


def optional_decimal(data: dict[str, Any], key: str) -> OptionalDecimal:
    if key not in data:
        return UNSET
    return decimal_or_none(data[key])


def to_timestamp(value: str) -> datetime:
    """ISO-8601 文字列を aware な UTC datetime に解析する。"""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def timestamp_or_none(value: str | None) -> datetime | None:
    return None if not value else to_timestamp(value)


def optional_timestamp(data: dict[str, Any], key: str) -> OptionalTimestamp:
    if key not in data:
        return UNSET
    return timestamp_or_none(data[key])


def deserialize_list(items: Iterable[dict[str, Any]], deserializer: Callable[[dict[str, Any]], T]) -> list[T]:
    """JSON 配列の全要素に ``deserializer`` を適用する。"""
    return [deserializer(item) for item in items]
