"""有効期限を考慮した認証トークンキャッシュ"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

import jwt

from .exceptions import AuthenticationError
from .responses import TokenResponse, TokenSuccess

logger = logging.getLogger(__name__)

TokenRefresher = Callable[[], Awaitable[TokenResponse]]


def decode_expiry(token: str) -> float | None:
    """署名を検証せずに JWT の ``exp`` クレームを読む。

    デコードできない場合や数値の exp がない場合は None を返す。
    """
    try:
        claims = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
        )
    except jwt.InvalidTokenError:
        return None
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    return float(exp)


class TokenCache:
    """クライアント 1 つ分の認証トークンを保持し、失効時に再取得する。

    refresher があれば空のキャッシュはそれを呼んで埋める。なければ
    ``get_token`` は None を返し、リクエストは未認証で送られる。
    空のキャッシュに同時アクセスした呼び出しは 1 回の再取得を共有する。
    """

    def __init__(
        self,
        token: str | None = None,
        refresher: TokenRefresher | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._token = token
        self._refresher = refresher
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None

    def _valid_cached_token(self) -> str | None:
        if self._token is None:
            return None
        exp = decode_expiry(self._token)
        if exp is None:
            logger.warning("Discarding auth token without a readable expiry")
            self._token = None
            return None
        if exp > self._clock():
            return self._token
        logger.debug("Cached auth token expired", extra={"exp": exp})
        self._token = None
        return None

    async def get_token(self) -> str | None:
        """有効なトークンを返す。可能なら新しいトークンを取得する。

        Raises:
            AuthenticationError: トークン交換でトークンが得られなかった。
        """
        token = self._valid_cached_token()
        if token is not None:
            logger.debug("Auth token cache hit")
            return token
        if self._refresher is None:
            return None

        async with self._lock:
            # 待機中に別タスクが更新済みの場合がある
            token = self._valid_cached_token()
            if token is not None:
                return token

            response = await self._refresher()
            if not isinstance(response, TokenSuccess) or not response.token:
                raise AuthenticationError(
                    "Failed to obtain new auth token.",
                    status=response.status,
                )
            self._token = response.token
            logger.info("Obtained new auth token", extra={"status": response.status})
            return self._token
