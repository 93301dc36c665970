"""TokenCache のユニットテスト"""

import asyncio
import logging
import time

import jwt
import pytest
from bca_api_client.exceptions import AuthenticationError, BcaApiErrorCodes
from bca_api_client.responses import Failure, TokenSuccess
from bca_api_client.token_cache import TokenCache, decode_expiry
from conftest import JWT_SECRET, make_token


class CountingRefresher:
    def __init__(self, response=None) -> None:
        self.calls = 0
        self.response = response

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        if self.response is not None:
            return self.response
        return TokenSuccess(status=200, token=make_token(3600, jti=str(self.calls)))


def test_decode_expiry_reads_exp() -> None:
    now = time.time()
    assert decode_expiry(make_token(60, now=now)) == float(int(now + 60))


def test_decode_expiry_invalid_token() -> None:
    assert decode_expiry("not-a-jwt") is None


def test_decode_expiry_without_exp() -> None:
    token = jwt.encode({"sub": "x"}, JWT_SECRET, algorithm="HS256")
    assert decode_expiry(token) is None


async def test_valid_token_is_reused(valid_token: str) -> None:
    """失効していないトークンは更新なしで返ること。"""
    refresher = CountingRefresher()
    cache = TokenCache(token=valid_token, refresher=refresher)
    assert await cache.get_token() == valid_token
    assert await cache.get_token() == valid_token
    assert refresher.calls == 0


async def test_expired_token_triggers_one_refresh(expired_token: str) -> None:
    """失効したトークンが 1 回の更新で置き換えられること。"""
    refresher = CountingRefresher()
    cache = TokenCache(token=expired_token, refresher=refresher)
    first = await cache.get_token()
    second = await cache.get_token()
    assert first != expired_token
    assert first == second
    assert refresher.calls == 1


async def test_expiry_is_strict() -> None:
    """exp が現在時刻と等しいトークンは失効済みとみなすこと。"""
    now = 1_700_000_000.0
    token = make_token(0, now=now)
    cache = TokenCache(token=token, clock=lambda: now)
    assert await cache.get_token() is None
    assert cache.token is None


async def test_without_refresher_returns_none(expired_token: str) -> None:
    """更新手段がない場合、失効トークンを破棄して None を返すこと。"""
    cache = TokenCache(token=expired_token)
    assert await cache.get_token() is None
    assert cache.token is None


async def test_empty_cache_without_refresher() -> None:
    assert await TokenCache().get_token() is None


async def test_undecodable_token_is_discarded(caplog: pytest.LogCaptureFixture) -> None:
    """有効期限を読めないトークンは存在しないものとして扱うこと。"""
    refresher = CountingRefresher()
    cache = TokenCache(token="garbage", refresher=refresher)
    with caplog.at_level(logging.WARNING, logger="bca_api_client.token_cache"):
        token = await cache.get_token()
    assert token != "garbage"
    assert refresher.calls == 1
    assert "garbage" not in caplog.text


async def test_failed_refresh_raises() -> None:
    """交換の失敗がステータス付きの AuthenticationError になること。"""
    cache = TokenCache(refresher=CountingRefresher(Failure(status=401)))
    with pytest.raises(AuthenticationError) as exc_info:
        await cache.get_token()
    assert exc_info.value.status == 401
    assert exc_info.value.code == BcaApiErrorCodes.TOKEN_REQUEST_FAILED


async def test_refresh_without_token_raises() -> None:
    """トークンを含まない 2xx 応答も交換失敗とみなすこと。"""
    cache = TokenCache(refresher=CountingRefresher(TokenSuccess(status=200, token=None)))
    with pytest.raises(AuthenticationError):
        await cache.get_token()
    assert cache.token is None


async def test_concurrent_refreshes_are_coalesced() -> None:
    """空のキャッシュに同時アクセスした呼び出しが 1 回の更新を共有すること。"""
    refresher = CountingRefresher()
    cache = TokenCache(refresher=refresher)
    tokens = await asyncio.gather(*(cache.get_token() for _ in range(5)))
    assert refresher.calls == 1
    assert len(set(tokens)) == 1


async def test_set_token_and_clear(valid_token: str) -> None:
    cache = TokenCache()
    cache.set_token(valid_token)
    assert await cache.get_token() == valid_token
    cache.clear()
    assert cache.token is None
