"""リクエスト記述子をワイヤレベルのリクエストへ変換する。

署名付きリクエストは JSON エンベロープ ``{endpoint, payload, date}`` を本文とし、
そのバイト列に対する ``Content-Signature`` ヘッダーを付与する。サーバーは同じ
エンベロープを再構築して署名を検証するため、キー順と区切り文字は変更しない。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Mapping
from urllib.parse import quote

from .dates import to_iso, utc_now_iso
from .exceptions import ConfigurationError
from .signing import Signer
from .token_cache import TokenCache

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

# httpx の files 引数の要素: (パート名, (ファイル名 or None, 内容, Content-Type))
MultipartPart = tuple[str, tuple[str | None, bytes | str, str]]


@dataclass(frozen=True)
class UploadFile:
    """multipart リクエストに添付するファイル。"""

    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"


@dataclass
class MultipartForm:
    """multipart 本文。Content-Type と境界文字列はトランスポートが設定する。

    テキストフィールドはファイル名なしの JSON パートとして送るため、添付が
    ゼロ件でも常に multipart/form-data になる。
    """

    fields: dict[str, str] = field(default_factory=dict)
    files: list[tuple[str, UploadFile]] = field(default_factory=list)

    def add_field(self, name: str, value: str) -> None:
        self.fields[name] = value

    def add_file(self, name: str, file: UploadFile) -> None:
        self.files.append((name, file))

    def parts(self) -> list[MultipartPart]:
        """httpx に渡すパート列を返す。フィールドが先、ファイルが後。"""
        result: list[MultipartPart] = [
            (name, (None, value, JSON_CONTENT_TYPE)) for name, value in self.fields.items()
        ]
        result.extend(
            (name, (upload.filename, upload.content, upload.content_type)) for name, upload in self.files
        )
        return result


@dataclass(frozen=True)
class RequestDescriptor:
    """1 回の論理的な API 呼び出し。

    ``payload`` は署名付きリクエスト専用で、署名エンベロープに包まれる。
    ``body`` は署名なしリクエスト専用。
    """

    method: str
    path: str
    query_params: Mapping[str, Any] | None = None
    payload: Any = None
    body: Any = None
    auth: bool = False
    signed: bool = False

    def __post_init__(self) -> None:
        if self.signed and self.body is not None:
            raise ValueError("signed requests take a payload, not a body")
        if not self.signed and self.payload is not None:
            raise ValueError("unsigned requests take a body, not a payload")


@dataclass(frozen=True)
class PreparedRequest:
    """送信可能な状態のリクエスト。"""

    method: str
    path: str
    headers: dict[str, str]
    params: dict[str, str] = field(default_factory=dict)
    content: str | None = None
    files: list[MultipartPart] | None = None


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (datetime, date)):
        return to_iso(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any) -> str:
    """キー順を保ったままコンパクトな JSON にシリアライズする。"""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def stringify_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (datetime, date)):
        return to_iso(value)
    return str(value)


def encode_path_segment(value: Any) -> str:
    """パスパラメータを ``encodeURIComponent`` と同じ規則でエスケープする。"""
    return quote(str(value), safe="!~*'()")


class RequestBuilder:
    """トークンキャッシュと署名者を参照してヘッダーと本文を組み立てる。"""

    def __init__(
        self,
        signer: Signer | None,
        token_cache: TokenCache,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._signer = signer
        self._token_cache = token_cache
        self._clock = clock

    def envelope(self, method: str, path: str, payload: Any = None) -> str:
        """現在時刻で ``method path`` の署名エンベロープをシリアライズする。"""
        doc: dict[str, Any] = {"endpoint": f"{method} {path}"}
        if payload is not None:
            doc["payload"] = payload
        doc["date"] = self._clock()
        return dumps(doc)

    async def build(self, descriptor: RequestDescriptor) -> PreparedRequest:
        """``descriptor`` からワイヤリクエストを組み立てる。

        Raises:
            ConfigurationError: 署名付きリクエストだが署名者が設定されていない。
            AuthenticationError: トークンが必要だが取得できなかった。
        """
        method = descriptor.method.upper()
        signer: Signer | None = None
        if descriptor.signed:
            signer = self._signer
            if signer is None:
                raise ConfigurationError(
                    "Cannot sign message - no signing function or signing key supplied."
                )

        headers: dict[str, str] = {}
        if descriptor.auth:
            token = await self._token_cache.get_token()
            if token:
                headers["Authorization"] = token

        content: str | None = None
        files: list[MultipartPart] | None = None

        if signer is not None:
            content = self.envelope(method, descriptor.path, descriptor.payload)
            headers["Content-Type"] = JSON_CONTENT_TYPE
            headers["Content-Signature"] = await signer.sign(content)
        elif isinstance(descriptor.body, MultipartForm):
            files = descriptor.body.parts()
        else:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            if descriptor.body is not None:
                content = dumps(descriptor.body)

        params = {
            key: stringify_query_value(value)
            for key, value in (descriptor.query_params or {}).items()
            if value is not None
        }

        logger.debug(
            "Built request",
            extra={
                "method": method,
                "path": descriptor.path,
                "auth": descriptor.auth,
                "signed": descriptor.signed,
            },
        )
        return PreparedRequest(
            method=method,
            path=descriptor.path,
            headers=headers,
            params=params,
            content=content,
            files=files,
        )
