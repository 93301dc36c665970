"""レスポンスを APIResponse に正規化する HTTP トランスポート"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any

import httpx

from .request_builder import PreparedRequest
from .responses import APIResponse

logger = logging.getLogger(__name__)

_BINARY_CONTENT_TYPES = ("application/pdf", "application/vnd", "application/octet-stream")


def _read_body(resp: httpx.Response) -> dict[str, Any] | list[Any] | str | bytes | None:
    content_type = resp.headers.get("Content-Type", "").lower()
    if "text/plain" in content_type:
        return resp.text
    if "application/json" in content_type:
        try:
            parsed: dict[str, Any] | list[Any] = json.loads(resp.content, parse_float=Decimal)
        except ValueError:
            # 本文が空の 2xx を返すエンドポイントがある
            logger.warning(
                "Ignoring malformed JSON body on successful response",
                extra={"status": resp.status_code, "url": str(resp.request.url)},
            )
            return {}
        return parsed
    if any(binary in content_type for binary in _BINARY_CONTENT_TYPES):
        return resp.content
    return None


class Transport:
    """httpx で組み立て済みリクエストを送る。1 呼び出しにつき送信は 1 回。

    HTTP エラーステータスは ``APIResponse(ok=False)`` として返す。
    ``httpx.ConnectError`` や ``httpx.TimeoutException`` などの通信障害は
    そのまま伝播させる。
    """

    def __init__(self, api_url: str, transport_options: dict[str, Any] | None = None) -> None:
        self._api_url = api_url
        self._transport_options = dict(transport_options or {})

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self._api_url, **self._transport_options)

    async def execute(self, request: PreparedRequest) -> APIResponse:
        logger.debug(
            "Sending request",
            extra={"method": request.method, "path": request.path},
        )
        async with self._make_client() as client:
            resp = await client.request(
                request.method,
                request.path,
                params=request.params or None,
                headers=request.headers,
                content=request.content,
                files=request.files,
            )
        ok = resp.is_success
        logger.debug(
            "Received response",
            extra={"method": request.method, "path": request.path, "status": resp.status_code},
        )
        return APIResponse(
            ok=ok,
            status=resp.status_code,
            body=_read_body(resp) if ok else None,
        )
