"""クライアント操作の戻り値の型定義

ステータスのみの操作は ``StatusResponse`` を返す。トークン・データ・ファイルの
操作は成功型か ``Failure`` のどちらかを返し、``ok`` で判別する。``Failure`` は
ステータス以外を持たない。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Literal, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class APIResponse:
    """HTTP 往復 1 回分の正規化済み結果。"""

    ok: bool
    status: int
    body: dict[str, Any] | list[Any] | str | bytes | None = None


@dataclass(frozen=True)
class DownloadedFile:
    """API が返す名前付きのバイナリ文書。"""

    name: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class StatusResponse:
    ok: bool
    status: int


@dataclass(frozen=True)
class Failure:
    status: int
    ok: Literal[False] = False


@dataclass(frozen=True)
class TokenSuccess:
    status: int
    token: str | None
    ok: Literal[True] = True


@dataclass(frozen=True)
class DataSuccess(Generic[T]):
    status: int
    data: T
    ok: Literal[True] = True


@dataclass(frozen=True)
class FileSuccess:
    status: int
    file: DownloadedFile | None
    ok: Literal[True] = True


TokenResponse = Union[TokenSuccess, Failure]
DataResponse = Union[DataSuccess[T], Failure]
FileResponse = Union[FileSuccess, Failure]


def status_response(response: APIResponse) -> StatusResponse:
    return StatusResponse(ok=response.ok, status=response.status)


def token_response(response: APIResponse) -> TokenResponse:
    """レスポンスをトークン形式に射影する。

    ``token`` フィールドのない 2xx は ``token=None`` の ``TokenSuccess`` になり、
    トークンキャッシュはこれを交換失敗として扱う。
    """
    if not response.ok:
        return Failure(status=response.status)
    body = response.body if isinstance(response.body, dict) else {}
    token = body.get("token")
    return TokenSuccess(status=response.status, token=token if isinstance(token, str) else None)


def data_response(response: APIResponse, deserializer: Callable[[Any], T]) -> DataResponse[T]:
    """成功レスポンスの ``data`` フィールドをデシリアライズする。

    本文が空、または data がない 2xx はデシリアライザを呼ばず ``data=None`` になる。
    """
    if not response.ok:
        return Failure(status=response.status)
    body = response.body if isinstance(response.body, dict) else {}
    data = body.get("data")
    if data is None:
        return DataSuccess(status=response.status, data=None)
    return DataSuccess(status=response.status, data=deserializer(data))


def file_response(response: APIResponse, filename: str, content_type: str) -> FileResponse:
    if not response.ok:
        return Failure(status=response.status)
    if not isinstance(response.body, bytes):
        return FileSuccess(status=response.status, file=None)
    return FileSuccess(
        status=response.status,
        file=DownloadedFile(name=filename, content_type=content_type, content=response.body),
    )
