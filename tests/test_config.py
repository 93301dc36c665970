"""設定読み込みのユニットテスト"""

from pathlib import Path

import pytest
from bca_api_client.client import BcaApiClient
from bca_api_client.config import ClientConfig, ClientOptions, load_config
from bca_api_client.exceptions import BcaApiErrorCodes, ConfigurationError
from bca_api_client.signing import FunctionSigner, PrivateKeySigner
from conftest import SIGNING_KEY


def write_config(tmp_path: Path, text: str) -> Path:
    config_file = tmp_path / "client.yaml"
    config_file.write_text(text)
    return config_file


def test_load_minimal_config(tmp_path: Path) -> None:
    config = load_config(write_config(tmp_path, "api_url: https://api.example.com\n"), environ={})
    assert config.api_url == "https://api.example.com"
    assert config.options.auth_token is None
    assert config.options.signing_key is None
    assert config.options.transport_options == {}


def test_load_transport_options_and_token(tmp_path: Path) -> None:
    config_file = write_config(
        tmp_path,
        "api_url: https://api.example.com\nauth_token: tok\ntransport_options:\n  timeout: 30\n  verify: false\n",
    )
    config = load_config(str(config_file), environ={})
    assert config.options.auth_token == "tok"
    assert config.options.transport_options == {"timeout": 30, "verify": False}


def test_signing_key_from_environment(tmp_path: Path) -> None:
    """signing_key_env が指す環境変数から署名鍵を読み込むこと。"""
    config_file = write_config(tmp_path, "api_url: https://api.example.com\nsigning_key_env: BCA_SIGNING_KEY\n")
    config = load_config(config_file, environ={"BCA_SIGNING_KEY": f"  {SIGNING_KEY}\n"})
    assert config.options.signing_key.get_secret_value() == SIGNING_KEY


def test_signing_key_env_unset(tmp_path: Path) -> None:
    config_file = write_config(tmp_path, "api_url: https://api.example.com\nsigning_key_env: BCA_SIGNING_KEY\n")
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(config_file, environ={})
    assert exc_info.value.code == BcaApiErrorCodes.SIGNING_KEY_NOT_FOUND
    assert "BCA_SIGNING_KEY" in str(exc_info.value)


def test_signing_key_from_relative_file(tmp_path: Path) -> None:
    """相対パスの鍵ファイルは設定ファイルのディレクトリを基準に解決されること。"""
    secrets = tmp_path / "secrets"
    secrets.mkdir()
    (secrets / "signing.key").write_text(SIGNING_KEY + "\n")
    config_file = write_config(tmp_path, "api_url: https://api.example.com\nsigning_key_file: secrets/signing.key\n")
    config = load_config(config_file, environ={})
    assert config.options.signing_key.get_secret_value() == SIGNING_KEY


def test_signing_key_file_missing(tmp_path: Path) -> None:
    config_file = write_config(tmp_path, "api_url: https://api.example.com\nsigning_key_file: missing.key\n")
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(config_file, environ={})
    assert exc_info.value.code == BcaApiErrorCodes.READ_FILE


def test_signing_key_file_empty(tmp_path: Path) -> None:
    (tmp_path / "signing.key").write_text("\n")
    config_file = write_config(tmp_path, "api_url: https://api.example.com\nsigning_key_file: signing.key\n")
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(config_file, environ={})
    assert exc_info.value.code == BcaApiErrorCodes.SIGNING_KEY_NOT_FOUND


def test_load_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(tmp_path / "missing.yaml")
    assert exc_info.value.code == BcaApiErrorCodes.READ_FILE


@pytest.mark.parametrize("text", ["api_url: {invalid: yaml: content:\n", "", "- a\n- b\n"])
def test_load_invalid_yaml(tmp_path: Path, text: str) -> None:
    """YAML として不正、またはマッピングでない場合は PARSE_YAML_ERROR になること。"""
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(write_config(tmp_path, text))
    assert exc_info.value.code == BcaApiErrorCodes.PARSE_YAML


@pytest.mark.parametrize(
    "text",
    [
        "api_url: ''\n",
        "auth_token: abc\n",
        f"api_url: https://api.example.com\nsigning_key: '{SIGNING_KEY}'\n",
        "api_url: https://api.example.com\nsigning_key_env: KEY\nsigning_key_file: key.txt\n",
    ],
)
def test_load_validation_error(tmp_path: Path, text: str) -> None:
    """api_url の欠落、鍵の直書き、鍵の参照先の重複は検証エラーになること。"""
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(write_config(tmp_path, text), environ={"KEY": SIGNING_KEY})
    assert exc_info.value.code == BcaApiErrorCodes.VALIDATION
    assert str(exc_info.value).startswith("VALIDATION_ERROR: ")


def test_signing_key_is_not_exposed() -> None:
    options = ClientOptions(signing_key=SIGNING_KEY)
    assert SIGNING_KEY not in repr(options)


def test_from_config_uses_key(tmp_path: Path) -> None:
    config_file = write_config(tmp_path, "api_url: https://api.example.com\nsigning_key_env: BCA_SIGNING_KEY\n")
    client = BcaApiClient.from_config(load_config(config_file, environ={"BCA_SIGNING_KEY": SIGNING_KEY}))
    assert isinstance(client._signer, PrivateKeySigner)


def test_from_config_injects_signing_function() -> None:
    """生成時に渡した署名関数が設定済みの鍵より優先されること。"""
    config = ClientConfig(api_url="https://api.example.com", options=ClientOptions(signing_key=SIGNING_KEY))
    client = BcaApiClient.from_config(config, signing_function=lambda message: "0xsig")
    assert isinstance(client._signer, FunctionSigner)
