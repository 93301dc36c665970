"""クライアント設定（pydantic BaseModel）と設定ファイルの読み込み。

署名鍵は設定ファイルに直接書かせず、環境変数名か鍵ファイルのパスで参照する。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, model_validator

from .exceptions import BcaApiErrorCodes, ConfigurationError


class ClientOptions(BaseModel):
    """``BcaApiClient`` の生成オプション。

    ``transport_options`` はそのまま ``httpx.AsyncClient`` に渡す
    （``timeout``、``verify``、``proxy``、独自の ``transport`` など）。
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    auth_token: str | None = None
    signing_key: SecretStr | None = None
    signing_function: Callable[[str], Any] | None = Field(default=None, exclude=True)
    transport_options: dict[str, Any] = Field(default_factory=dict)


class ClientConfig(BaseModel):
    """解決済みのクライアント設定。"""

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(min_length=1)
    options: ClientOptions = Field(default_factory=ClientOptions)


class ConfigFile(BaseModel):
    """設定ファイルの形式。

    ``signing_key_env`` と ``signing_key_file`` は排他。鍵そのものを書く
    ``signing_key`` キーは受け付けない。
    """

    model_config = ConfigDict(extra="forbid")

    api_url: str = Field(min_length=1)
    auth_token: str | None = None
    signing_key_env: str | None = None
    signing_key_file: Path | None = None
    transport_options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _one_key_source(self) -> ConfigFile:
        if self.signing_key_env and self.signing_key_file:
            raise ValueError("signing_key_env and signing_key_file are mutually exclusive")
        return self


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            code=BcaApiErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            code=BcaApiErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            code=BcaApiErrorCodes.PARSE_YAML,
            message=f"Config file must contain a mapping: {path}",
        )
    return data


def _resolve_signing_key(
    settings: ConfigFile,
    base_dir: Path,
    environ: Mapping[str, str],
) -> str | None:
    """環境変数または鍵ファイルから署名鍵を取り出す。どちらも未指定なら None。"""
    if settings.signing_key_env:
        value = environ.get(settings.signing_key_env, "").strip()
        if not value:
            raise ConfigurationError(
                code=BcaApiErrorCodes.SIGNING_KEY_NOT_FOUND,
                message=f"Environment variable {settings.signing_key_env} is not set",
            )
        return value
    if settings.signing_key_file is not None:
        key_path = settings.signing_key_file
        if not key_path.is_absolute():
            key_path = base_dir / key_path
        try:
            value = key_path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigurationError(
                code=BcaApiErrorCodes.READ_FILE,
                message=f"Failed to read signing key file: {key_path}",
                cause=e,
            ) from e
        if not value:
            raise ConfigurationError(
                code=BcaApiErrorCodes.SIGNING_KEY_NOT_FOUND,
                message=f"Signing key file is empty: {key_path}",
            )
        return value
    return None


def load_config(path: Path | str, environ: Mapping[str, str] | None = None) -> ClientConfig:
    """YAML 設定ファイルから ClientConfig を組み立てる。

    path: 設定ファイル。相対パスの ``signing_key_file`` はこのファイルの
        ディレクトリを基準に解決する。
    environ: ``signing_key_env`` の参照先（省略時は ``os.environ``）。
    """
    config_path = Path(path)
    data = _read_yaml(config_path)
    try:
        settings = ConfigFile.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            code=BcaApiErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
    signing_key = _resolve_signing_key(
        settings,
        config_path.parent,
        os.environ if environ is None else environ,
    )
    return ClientConfig(
        api_url=settings.api_url,
        options=ClientOptions(
            auth_token=settings.auth_token,
            signing_key=SecretStr(signing_key) if signing_key is not None else None,
            transport_options=settings.transport_options,
        ),
    )
