"""共通フィクスチャとヘルパー。"""

import time

import jwt
import pytest
from eth_account import Account

API_URL = "https://api.example.com"
SIGNING_KEY = "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcaf784d7bf4f2ff80"
SIGNER_ADDRESS = Account.from_key("0x" + SIGNING_KEY).address
JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


def make_token(expires_in: float = 3600, now: float | None = None, **claims) -> str:
    """``now`` から ``expires_in`` 秒後に失効する HS256 JWT を発行する。"""
    issued = time.time() if now is None else now
    return jwt.encode({"sub": "admin", "exp": int(issued + expires_in), **claims}, JWT_SECRET, algorithm="HS256")


@pytest.fixture
def valid_token() -> str:
    return make_token(3600)


@pytest.fixture
def expired_token() -> str:
    return make_token(-3600)
