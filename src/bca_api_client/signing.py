"""署名付きリクエストと自己認証で使うメッセージ署名者"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Union

from eth_account import Account
from eth_account.messages import encode_defunct

SigningFunction = Callable[[str], Union[str, Awaitable[str]]]


def sign_message_with_ethereum_private_key(message: str, private_key: str) -> str:
    """``message`` を Ethereum personal message（EIP-191）として署名する。

    65 バイトの署名を ``0x`` 付き 16 進文字列で返す。同じ鍵とメッセージなら
    署名は常に同一になる。
    """
    key = private_key if private_key.startswith("0x") else "0x" + private_key
    signed = Account.sign_message(encode_defunct(text=message), private_key=key)
    return "0x" + bytes(signed.signature).hex()


class Signer(ABC):
    """任意のメッセージ文字列に署名する抽象基底クラス。"""

    @abstractmethod
    async def sign(self, message: str) -> str: ...


class FunctionSigner(Signer):
    """呼び出し元が渡した署名関数に委譲する。

    関数は同期でも awaitable を返してもよい（カストディサービスや
    ハードウェアウォレットを呼ぶ場合など）。
    """

    def __init__(self, function: SigningFunction) -> None:
        self._function = function

    async def sign(self, message: str) -> str:
        result = self._function(message)
        if inspect.isawaitable(result):
            result = await result
        return result


class PrivateKeySigner(Signer):
    """secp256k1 の生の秘密鍵で署名する。"""

    def __init__(self, private_key: str) -> None:
        self._private_key = private_key

    @property
    def address(self) -> str:
        """署名鍵のチェックサム付きアドレス。"""
        key = self._private_key if self._private_key.startswith("0x") else "0x" + self._private_key
        return Account.from_key(key).address

    async def sign(self, message: str) -> str:
        return sign_message_with_ethereum_private_key(message, self._private_key)


def resolve_signer(
    signing_key: str | None = None,
    signing_function: SigningFunction | None = None,
) -> Signer | None:
    """クライアントの署名者を選ぶ。署名関数が秘密鍵より優先される。"""
    if signing_function is not None:
        return FunctionSigner(signing_function)
    if signing_key:
        return PrivateKeySigner(signing_key)
    return None
