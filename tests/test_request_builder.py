"""RequestBuilder のユニットテスト"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from bca_api_client.exceptions import ConfigurationError
from bca_api_client.models import DeliveryMethod, StreamedTax, TaxAttribution
from bca_api_client.request_builder import (
    MultipartForm,
    RequestBuilder,
    RequestDescriptor,
    UploadFile,
    dumps,
    encode_path_segment,
    stringify_query_value,
)
from bca_api_client.signing import PrivateKeySigner
from bca_api_client.token_cache import TokenCache
from conftest import SIGNER_ADDRESS, SIGNING_KEY
from eth_account import Account
from eth_account.messages import encode_defunct

FIXED_DATE = "2024-01-01T00:00:00.000Z"


def make_builder(signer=None, token=None, clock=lambda: FIXED_DATE) -> RequestBuilder:
    return RequestBuilder(signer, TokenCache(token=token), clock=clock)


def test_envelope_without_payload() -> None:
    """ペイロードがない場合は payload キーが省略されること。"""
    builder = make_builder()
    assert builder.envelope("POST", "/v1/token/verify_signature") == (
        '{"endpoint":"POST /v1/token/verify_signature","date":"2024-01-01T00:00:00.000Z"}'
    )


def test_envelope_key_order_and_values() -> None:
    """キー順が endpoint, payload, date で、null が保持されること。"""
    builder = make_builder()
    envelope = builder.envelope(
        "PUT",
        "/v1/assets/settings/BTC",
        {"assetName": "BTC", "assetSymbol": "BTC", "manualBalance": None, "manualPrice": Decimal("0.10")},
    )
    assert envelope == (
        '{"endpoint":"PUT /v1/assets/settings/BTC",'
        '"payload":{"assetName":"BTC","assetSymbol":"BTC","manualBalance":null,"manualPrice":"0.10"},'
        '"date":"2024-01-01T00:00:00.000Z"}'
    )


def test_envelope_keeps_empty_payload() -> None:
    assert '"payload":{}' in make_builder().envelope("POST", "/v1/assets/snapshots", {})


def test_dumps_encodes_inputs() -> None:
    """Decimal・日時・入力レコードが決まった JSON 表現になること。"""
    doc = {
        "when": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        "amount": Decimal("1E+3"),
        "streamed": [StreamedTax(7, TaxAttribution(Decimal("1"), Decimal("2"), Decimal("3")))],
        "name": "Zoë",
    }
    assert json.loads(dumps(doc)) == {
        "when": "2024-05-01T12:00:00.000Z",
        "amount": "1000",
        "streamed": [
            {"accountId": 7, "discountedCapitalGains": "1", "otherCapitalGains": "2", "otherIncome": "3"}
        ],
        "name": "Zoë",
    }
    assert "Zoë" in dumps(doc)


def test_dumps_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        dumps({"x": object()})


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, "true"),
        (False, "false"),
        (7, "7"),
        (Decimal("12.50"), "12.50"),
        ("abc", "abc"),
    ],
)
def test_stringify_query_value(value, expected) -> None:
    assert stringify_query_value(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("BTC", "BTC"),
        ("BTC/USD", "BTC%2FUSD"),
        ("Wrapped Ether", "Wrapped%20Ether"),
        ("a&b?c#d", "a%26b%3Fc%23d"),
        ("it's(ok)!*~", "it's(ok)!*~"),
        (42, "42"),
    ],
)
def test_encode_path_segment(value, expected) -> None:
    assert encode_path_segment(value) == expected


def test_descriptor_rejects_mismatched_body() -> None:
    with pytest.raises(ValueError):
        RequestDescriptor(method="POST", path="/x", body={"a": 1}, signed=True)
    with pytest.raises(ValueError):
        RequestDescriptor(method="POST", path="/x", payload={"a": 1})


async def test_signed_request_carries_verifiable_signature() -> None:
    """Content-Signature が本文バイト列そのものに対する署名であること。"""
    builder = make_builder(signer=PrivateKeySigner(SIGNING_KEY))
    request = await builder.build(
        RequestDescriptor(method="put", path="/v1/assets/prices/BTC", payload={"price": Decimal("1.5")}, signed=True)
    )
    assert request.method == "PUT"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "endpoint": "PUT /v1/assets/prices/BTC",
        "payload": {"price": "1.5"},
        "date": FIXED_DATE,
    }
    recovered = Account.recover_message(
        encode_defunct(text=request.content), signature=request.headers["Content-Signature"]
    )
    assert recovered == SIGNER_ADDRESS
    assert "Authorization" not in request.headers


async def test_signatures_are_fresh_per_instant() -> None:
    """異なる時刻の組み立ては異なり、同じエンベロープの再署名は一致すること。"""
    dates = iter(["2024-01-01T00:00:00.000Z", "2024-01-01T00:00:01.000Z"])
    signer = PrivateKeySigner(SIGNING_KEY)
    builder = make_builder(signer=signer, clock=lambda: next(dates))
    descriptor = RequestDescriptor(method="POST", path="/v1/jobs", payload={"jobType": "x"}, signed=True)

    first = await builder.build(descriptor)
    second = await builder.build(descriptor)

    assert first.content != second.content
    assert first.headers["Content-Signature"] != second.headers["Content-Signature"]
    assert await signer.sign(first.content) == first.headers["Content-Signature"]


async def test_signed_request_without_signer_raises() -> None:
    """署名者がない場合はトークンキャッシュを参照する前に失敗すること。"""
    calls = 0

    async def refresher():
        nonlocal calls
        calls += 1

    builder = RequestBuilder(None, TokenCache(refresher=refresher))
    with pytest.raises(ConfigurationError):
        await builder.build(RequestDescriptor(method="PUT", path="/x", payload={}, auth=True, signed=True))
    assert calls == 0


async def test_auth_header_carries_raw_token(valid_token: str) -> None:
    request = await make_builder(token=valid_token).build(RequestDescriptor(method="GET", path="/v1/assets", auth=True))
    assert request.headers["Authorization"] == valid_token
    assert request.headers["Content-Type"] == "application/json"
    assert request.content is None


async def test_auth_header_omitted_without_token() -> None:
    request = await make_builder().build(RequestDescriptor(method="GET", path="/v1/assets", auth=True))
    assert "Authorization" not in request.headers


async def test_unsigned_json_body() -> None:
    request = await make_builder().build(
        RequestDescriptor(method="POST", path="/v1/documents/generate/aiir", body=DeliveryMethod.as_download())
    )
    assert json.loads(request.content) == {"download": True, "emailRecipients": None}
    assert "Content-Signature" not in request.headers


async def test_query_params_are_stringified_and_nulls_dropped() -> None:
    request = await make_builder().build(
        RequestDescriptor(
            method="GET",
            path="/v1/liabilities",
            query_params={"outstandingOnly": True, "aum": Decimal("10.0"), "skip": None},
        )
    )
    assert request.params == {"outstandingOnly": "true", "aum": "10.0"}


async def test_multipart_body() -> None:
    """multipart リクエストは Content-Type をトランスポートに任せること。"""
    form = MultipartForm()
    form.add_field("applicationForm", '{"entityType":"Individual"}')
    form.add_file("file_idDocuments_0", UploadFile("passport.pdf", b"%PDF", "application/pdf"))

    request = await make_builder().build(RequestDescriptor(method="POST", path="/upload", body=form))

    assert "Content-Type" not in request.headers
    assert request.content is None
    assert request.files == [
        ("applicationForm", (None, '{"entityType":"Individual"}', "application/json")),
        ("file_idDocuments_0", ("passport.pdf", b"%PDF", "application/pdf")),
    ]


async def test_multipart_without_files_keeps_fields_as_parts() -> None:
    """添付ゼロ件でもフィールドは multipart パートとして送られること。"""
    form = MultipartForm()
    form.add_field("deliveryMethod", '{"download":true,"emailRecipients":null}')

    request = await make_builder().build(RequestDescriptor(method="POST", path="/upload", body=form))

    assert request.files == [
        ("deliveryMethod", (None, '{"download":true,"emailRecipients":null}', "application/json")),
    ]
