"""BCA API クライアントの例外定義"""

from __future__ import annotations

from typing import Any


class BcaApiError(Exception):
    """クライアントが送出する例外の基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class BcaApiErrorCodes:
    """BcaApiError のエラーコード定数。"""

    NO_SIGNING_CAPABILITY: str = "NO_SIGNING_CAPABILITY"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    SIGNING_KEY_NOT_FOUND: str = "SIGNING_KEY_NOT_FOUND"
    TOKEN_REQUEST_FAILED: str = "TOKEN_REQUEST_FAILED"
    INVALID_DATE: str = "INVALID_DATE"


class ConfigurationError(BcaApiError):
    """呼び出しに必要な設定（署名情報や設定ファイル）が不足している。"""

    def __init__(
        self,
        message: str,
        code: str = BcaApiErrorCodes.NO_SIGNING_CAPABILITY,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code=code, message=message, cause=cause)


class AuthenticationError(BcaApiError):
    """新しい認証トークンを取得できなかった。"""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(code=BcaApiErrorCodes.TOKEN_REQUEST_FAILED, message=message)
        self.status = status


class InvalidDateError(BcaApiError):
    """日付らしき値を ISO-8601 UTC 文字列に正規化できなかった。"""

    def __init__(self, value: Any, cause: Exception | None = None) -> None:
        super().__init__(
            code=BcaApiErrorCodes.INVALID_DATE,
            message=f"The provided value could not be parsed to a valid date: {value!r}",
            cause=cause,
        )
        self.value = value
