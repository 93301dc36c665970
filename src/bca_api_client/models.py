"""API が返すドメインレコードと構造化されたリクエスト入力"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from .deserialize import (
    UNSET,
    OptionalDecimal,
    OptionalTimestamp,
    decimal_or_none,
    deserialize_list,
    optional_decimal,
    optional_timestamp,
    timestamp_or_none,
    to_decimal,
    to_timestamp,
)
from .request_builder import UploadFile


class StatementType(StrEnum):
    """口座ごとに生成できるステートメントの種類。"""

    ACCOUNT_STATEMENT = "Account Statement"
    TAX_STATEMENT = "Tax Statement"


@dataclass
class Administrator:
    """管理者アカウント。"""

    id: int
    first_name: str
    last_name: str
    email: str
    ethereum_address: str | None = None
    telegram_username: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Administrator:
        return cls(
            id=data["id"],
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            email=data.get("email", ""),
            ethereum_address=data.get("ethereumAddress"),
            telegram_username=data.get("telegramUsername"),
        )


@dataclass
class Bot:
    """API を利用するボット。"""

    id: int
    name: str
    ethereum_address: str | None = None
    api_key: str | None = None
    read_only: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Bot:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            ethereum_address=data.get("ethereumAddress"),
            api_key=data.get("apiKey"),
            read_only=data.get("readOnly", True),
        )


@dataclass
class Asset:
    """ファンドが保有するアセットと残高・価格。"""

    asset_name: str
    asset_symbol: str | None
    balance: Decimal | None
    price: Decimal | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Asset:
        return cls(
            asset_name=data["assetName"],
            asset_symbol=data.get("assetSymbol"),
            balance=decimal_or_none(data.get("balance")),
            price=decimal_or_none(data.get("price")),
        )


@dataclass
class AssetSettings:
    """アセットごとの手動残高・手動価格の設定。"""

    asset_name: str
    asset_symbol: str | None
    manual_balance: Decimal | None
    manual_price: Decimal | None
    display_rank: int | None = None
    cmc_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssetSettings:
        return cls(
            asset_name=data["assetName"],
            asset_symbol=data.get("assetSymbol"),
            manual_balance=decimal_or_none(data.get("manualBalance")),
            manual_price=decimal_or_none(data.get("manualPrice")),
            display_rank=data.get("displayRank"),
            cmc_id=data.get("cmcId"),
        )


@dataclass
class AssetPrice:
    """アセットの価格。"""

    asset_name: str
    price: Decimal
    last_updated_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssetPrice:
        return cls(
            asset_name=data["assetName"],
            price=to_decimal(data["price"]),
            last_updated_at=to_timestamp(data["lastUpdatedAt"]),
        )


@dataclass
class AssetBalance:
    """アセットの残高。"""

    asset_name: str
    source_id: int
    balance: Decimal
    last_updated_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssetBalance:
        return cls(
            asset_name=data["assetName"],
            source_id=data["sourceId"],
            balance=to_decimal(data["balance"]),
            last_updated_at=to_timestamp(data["lastUpdatedAt"]),
        )


@dataclass
class AssetSource:
    """アセット残高の取得元（取引所やウォレットなど）。"""

    id: int
    name: str
    type: str
    description: str | None = None
    read_balances: bool = False
    address: str | None = None
    network: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssetSource:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            type=data.get("type", ""),
            description=data.get("description"),
            read_balances=data.get("readBalances", False),
            address=data.get("address"),
            network=data.get("network"),
        )


@dataclass
class AssetSnapshotsEntry:
    """特定時点のアセットスナップショット。"""

    date: datetime
    asset_name: str
    balance: Decimal
    price: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssetSnapshotsEntry:
        return cls(
            date=to_timestamp(data["date"]),
            asset_name=data["assetName"],
            balance=to_decimal(data["balance"]),
            price=to_decimal(data["price"]),
        )


@dataclass
class UnitHoldersRegisterEntry:
    """ユニット保有者名簿の 1 行（取得または償還）。"""

    date: datetime
    vintage: int
    account_id: int
    type: str
    units_acquired_or_redeemed: Decimal
    unit_price: Decimal
    funds_in_or_out: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UnitHoldersRegisterEntry:
        return cls(
            date=to_timestamp(data["date"]),
            vintage=data["vintage"],
            account_id=data["accountId"],
            type=data["type"],
            units_acquired_or_redeemed=to_decimal(data["unitsAcquiredOrRedeemed"]),
            unit_price=to_decimal(data["unitPrice"]),
            funds_in_or_out=to_decimal(data["fundsInOrOut"]),
        )


@dataclass
class Account:
    """投資家口座。

    ``units_held``、``net_remaining_capital``、``initial_investment_date`` は
    一部のエンドポイントでのみ返され、欠落時は ``UNSET`` になる。
    """

    id: int
    name: str
    entity_type: str
    address_line1: str
    address_line2: str | None
    suburb: str
    state: str
    postcode: str
    country: str
    distribution_reinvestment_percentage: Decimal
    old_id: int | None = None
    units_held: OptionalDecimal = UNSET
    net_remaining_capital: OptionalDecimal = UNSET
    initial_investment_date: OptionalTimestamp = UNSET
    tfn_provided: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            entity_type=data.get("entityType", ""),
            address_line1=data.get("addressLine1", ""),
            address_line2=data.get("addressLine2"),
            suburb=data.get("suburb", ""),
            state=data.get("state", ""),
            postcode=data.get("postcode", ""),
            country=data.get("country", ""),
            distribution_reinvestment_percentage=to_decimal(data["distributionReinvestmentPercentage"]),
            old_id=data.get("oldId"),
            units_held=optional_decimal(data, "unitsHeld"),
            net_remaining_capital=optional_decimal(data, "netRemainingCapital"),
            initial_investment_date=optional_timestamp(data, "initialInvestmentDate"),
            tfn_provided=data.get("tfnProvided"),
        )


@dataclass
class AccountPartition:
    """口座ユニットのパーティション。"""

    account_id: int
    order: int
    units: Decimal
    average_unit_price: Decimal
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccountPartition:
        return cls(
            account_id=int(data["accountId"]),
            order=int(data["order"]),
            units=to_decimal(data["units"]),
            average_unit_price=to_decimal(data["averageUnitPrice"]),
            name=data.get("name", ""),
        )


@dataclass
class Client:
    """投資家クライアント。"""

    id: int
    first_name: str
    last_name: str
    email: str
    ethereum_address: str | None = None
    last_accessed_at: OptionalTimestamp = UNSET
    accesses_in_last_7_days: int | None = None
    total_accesses: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Client:
        return cls(
            id=data["id"],
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            email=data.get("email", ""),
            ethereum_address=data.get("ethereumAddress"),
            last_accessed_at=optional_timestamp(data, "lastAccessedAt"),
            accesses_in_last_7_days=data.get("accessesInLast7Days"),
            total_accesses=data.get("totalAccesses"),
        )


@dataclass
class RegisteredClient:
    """口座に登録されたクライアント。特定パーティションに制限される場合がある。"""

    client: Client
    restrict_to_partition: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegisteredClient:
        return cls(client=Client.from_dict(data), restrict_to_partition=data.get("restrictToPartition"))


@dataclass
class RegisteredAccount:
    """クライアントに紐づく口座。"""

    account: Account
    restrict_to_partition: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegisteredAccount:
        return cls(account=Account.from_dict(data), restrict_to_partition=data.get("restrictToPartition"))


@dataclass
class FundMetricsEntry:
    """ファンド指標の 1 時点分。"""

    date: datetime
    unit_price: Decimal | None
    aum: Decimal | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FundMetricsEntry:
        return cls(
            date=to_timestamp(data["date"]),
            unit_price=decimal_or_none(data.get("unitPrice")),
            aum=decimal_or_none(data.get("aum")),
        )


@dataclass
class InvestorPortalAccessLogEntry:
    """投資家ポータルのアクセスログ 1 件。"""

    session_started_at: datetime
    client_id: int
    last_activity_at: datetime
    device_type: str | None = None
    os: str | None = None
    browser: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InvestorPortalAccessLogEntry:
        return cls(
            session_started_at=to_timestamp(data["sessionStartedAt"]),
            client_id=data["clientId"],
            last_activity_at=to_timestamp(data["lastActivityAt"]),
            device_type=data.get("deviceType"),
            os=data.get("os"),
            browser=data.get("browser"),
        )


@dataclass
class InvestorPortalOptions:
    """投資家ポータルの表示設定。"""

    maintenance_mode: bool
    soapbox_title: str = ""
    soapbox_body: str = ""
    soapbox_html: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InvestorPortalOptions:
        return cls(
            maintenance_mode=data.get("maintenanceMode", False),
            soapbox_title=data.get("soapboxTitle", ""),
            soapbox_body=data.get("soapboxBody", ""),
            soapbox_html=data.get("soapboxHtml", ""),
        )


@dataclass
class FundOverview:
    """投資家ポータル向けのファンド概要。"""

    last_updated_at: datetime
    unit_price: Decimal
    aum: Decimal
    assets: list[Asset] = field(default_factory=list)
    historical_fund_metrics: list[FundMetricsEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FundOverview:
        return cls(
            last_updated_at=to_timestamp(data["lastUpdatedAt"]),
            unit_price=to_decimal(data["unitPrice"]),
            aum=to_decimal(data["aum"]),
            assets=deserialize_list(data.get("assets", []), Asset.from_dict),
            historical_fund_metrics=deserialize_list(
                data.get("historicalFundMetrics", []), FundMetricsEntry.from_dict
            ),
        )


@dataclass
class ModificationLogEntry:
    """変更イベントログ 1 件。"""

    date: datetime
    admin_id: int | None
    client_id: int | None
    bot_id: int | None
    data: Any
    signature: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModificationLogEntry:
        return cls(
            date=to_timestamp(data["date"]),
            admin_id=data.get("adminId"),
            client_id=data.get("clientId"),
            bot_id=data.get("botId"),
            data=data.get("data"),
            signature=data.get("signature"),
        )


@dataclass
class FeeCapitalisationsEntry:
    """手数料の資本化 1 件。"""

    date: datetime
    vintage: int
    value_at_capitalisation_date: Decimal
    management_fee: Decimal
    high_water_mark: Decimal
    performance_fee: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeeCapitalisationsEntry:
        return cls(
            date=to_timestamp(data["date"]),
            vintage=data["vintage"],
            value_at_capitalisation_date=to_decimal(data["valueAtCapitalisationDate"]),
            management_fee=to_decimal(data["managementFee"]),
            high_water_mark=to_decimal(data["highWaterMark"]),
            performance_fee=to_decimal(data["performanceFee"]),
        )


# VintageData の Decimal フィールドとワイヤ上の camelCase 名の対応
_VINTAGE_DECIMAL_FIELDS = {
    "initial_capital_invested": "initialCapitalInvested",
    "initial_units_acquired": "initialUnitsAcquired",
    "units_remaining_at_valuation_date": "unitsRemainingAtValuationDate",
    "units_redeemed_on_valuation_date": "unitsRedeemedOnValuationDate",
    "previous_money_redeemed_on_valuation_date": "previousMoneyRedeemedOnValuationDate",
    "previous_net_value_before_pf": "previousNetValueBeforePF",
    "previous_net_value_after_pf": "previousNetValueAfterPF",
    "previous_high_water_mark": "previousHighWaterMark",
    "value_at_valuation_date": "valueAtValuationDate",
    "accrued_management_fee_gst_exclusive": "accruedManagementFeeGstExclusive",
    "accrued_management_fee_gst_inclusive": "accruedManagementFeeGstInclusive",
    "redeemed_units_management_fee_gst_exclusive": "redeemedUnitsManagementFeeGstExclusive",
    "redeemed_units_management_fee_gst_inclusive": "redeemedUnitsManagementFeeGstInclusive",
    "payable_management_fee_gst_exclusive": "payableManagementFeeGstExclusive",
    "payable_management_fee_gst_inclusive": "payableManagementFeeGstInclusive",
    "net_value_before_pf": "netValueBeforePF",
    "high_water_mark": "highWaterMark",
    "pre_tax_investment_return": "preTaxInvestmentReturn",
    "benchmark_portfolio": "benchmarkPortfolio",
    "benchmark_return_on_capital": "benchmarkReturnOnCapital",
    "benchmark_investment_return": "benchmarkInvestmentReturn",
    "out_performance": "outPerformance",
    "indicative_performance_fee_gst_exclusive": "indicativePerformanceFeeGstExclusive",
    "indicative_performance_fee_gst_inclusive": "indicativePerformanceFeeGstInclusive",
    "redeemed_units_performance_fee_gst_exclusive": "redeemedUnitsPerformanceFeeGstExclusive",
    "redeemed_units_performance_fee_gst_inclusive": "redeemedUnitsPerformanceFeeGstInclusive",
    "payable_performance_fee_gst_exclusive": "payablePerformanceFeeGstExclusive",
    "payable_performance_fee_gst_inclusive": "payablePerformanceFeeGstInclusive",
    "net_value_after_pf": "netValueAfterPF",
    "units_outstanding_at_beginning_of_next_valuation_period": "unitsOutstandingAtBeginningOfNextValuationPeriod",
}


@dataclass
class VintageData:
    """手数料計算のヴィンテージ別内訳。"""

    id: int
    creation_date: datetime
    uhr_entries: list[UnitHoldersRegisterEntry]
    latest_fc_entry: FeeCapitalisationsEntry | None
    was_previous_performance_fee_paid_out: bool
    initial_capital_invested: Decimal
    initial_units_acquired: Decimal
    units_remaining_at_valuation_date: Decimal
    units_redeemed_on_valuation_date: Decimal
    previous_money_redeemed_on_valuation_date: Decimal
    previous_net_value_before_pf: Decimal
    previous_net_value_after_pf: Decimal
    previous_high_water_mark: Decimal
    value_at_valuation_date: Decimal
    accrued_management_fee_gst_exclusive: Decimal
    accrued_management_fee_gst_inclusive: Decimal
    redeemed_units_management_fee_gst_exclusive: Decimal
    redeemed_units_management_fee_gst_inclusive: Decimal
    payable_management_fee_gst_exclusive: Decimal
    payable_management_fee_gst_inclusive: Decimal
    net_value_before_pf: Decimal
    high_water_mark: Decimal
    pre_tax_investment_return: Decimal
    benchmark_portfolio: Decimal
    benchmark_return_on_capital: Decimal
    benchmark_investment_return: Decimal
    out_performance: Decimal
    indicative_performance_fee_gst_exclusive: Decimal
    indicative_performance_fee_gst_inclusive: Decimal
    redeemed_units_performance_fee_gst_exclusive: Decimal
    redeemed_units_performance_fee_gst_inclusive: Decimal
    payable_performance_fee_gst_exclusive: Decimal
    payable_performance_fee_gst_inclusive: Decimal
    net_value_after_pf: Decimal
    units_outstanding_at_beginning_of_next_valuation_period: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VintageData:
        latest = data.get("latestFcEntry")
        return cls(
            id=data["id"],
            creation_date=to_timestamp(data["creationDate"]),
            uhr_entries=deserialize_list(data.get("uhrEntries", []), UnitHoldersRegisterEntry.from_dict),
            latest_fc_entry=FeeCapitalisationsEntry.from_dict(latest) if latest else None,
            was_previous_performance_fee_paid_out=data.get("wasPreviousPerformanceFeePaidOut", False),
            **{name: to_decimal(data[key]) for name, key in _VINTAGE_DECIMAL_FIELDS.items()},
        )


@dataclass
class FeeRates:
    """手数料率。"""

    management_fee: Decimal
    benchmark_return: Decimal
    performance_fee: Decimal
    gst: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeeRates:
        return cls(
            management_fee=to_decimal(data["managementFee"]),
            benchmark_return=to_decimal(data["benchmarkReturn"]),
            performance_fee=to_decimal(data["performanceFee"]),
            gst=to_decimal(data["gst"]),
        )


@dataclass
class FeeCalculation:
    """手数料計算の結果。"""

    valuation_date: datetime
    aum: Decimal
    rates: FeeRates
    vintages: list[VintageData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeeCalculation:
        return cls(
            valuation_date=to_timestamp(data["valuationDate"]),
            aum=to_decimal(data["aum"]),
            rates=FeeRates.from_dict(data["rates"]),
            vintages=deserialize_list(data.get("vintages", []), VintageData.from_dict),
        )


@dataclass
class TaxAttribution:
    """税の帰属額の内訳。"""

    discounted_capital_gains: Decimal
    other_capital_gains: Decimal
    other_income: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxAttribution:
        return cls(
            discounted_capital_gains=to_decimal(data["discountedCapitalGains"]),
            other_capital_gains=to_decimal(data["otherCapitalGains"]),
            other_income=to_decimal(data["otherIncome"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "discountedCapitalGains": self.discounted_capital_gains,
            "otherCapitalGains": self.other_capital_gains,
            "otherIncome": self.other_income,
        }


@dataclass
class StreamedTax:
    """特定の口座へ直接振り分ける税額。"""

    account_id: int
    attribution: TaxAttribution

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StreamedTax:
        return cls(account_id=data["accountId"], attribution=TaxAttribution.from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        return {"accountId": self.account_id, **self.attribution.to_dict()}


@dataclass
class TaxLedgerEntry:
    """税台帳の 1 行。"""

    date: datetime
    account_id: int
    discounted_capital_gains: Decimal
    other_capital_gains: Decimal
    other_income: Decimal
    cash_redeemed: Decimal
    cash_reinvested: Decimal
    cash_paid_out: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxLedgerEntry:
        attribution = TaxAttribution.from_dict(data)
        return cls(
            date=to_timestamp(data["date"]),
            account_id=int(data["accountId"]),
            discounted_capital_gains=attribution.discounted_capital_gains,
            other_capital_gains=attribution.other_capital_gains,
            other_income=attribution.other_income,
            cash_redeemed=to_decimal(data["cashRedeemed"]),
            cash_reinvested=to_decimal(data["cashReinvested"]),
            cash_paid_out=to_decimal(data["cashPaidOut"]),
        )


@dataclass
class AttributionCalculation:
    """税帰属計算の結果。"""

    date: datetime
    tax_pool: TaxAttribution
    cash_pool: Decimal
    streamed_tax: list[StreamedTax] = field(default_factory=list)
    attributions: list[TaxLedgerEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AttributionCalculation:
        return cls(
            date=to_timestamp(data["date"]),
            tax_pool=TaxAttribution.from_dict(data["taxPool"]),
            cash_pool=to_decimal(data["cashPool"]),
            streamed_tax=deserialize_list(data.get("streamedTax", []), StreamedTax.from_dict),
            attributions=deserialize_list(data.get("attributions", []), TaxLedgerEntry.from_dict),
        )


@dataclass
class Job:
    """サーバー側で実行中または完了済みのジョブ。"""

    id: str
    type: str
    parameters: dict[str, Any]
    progress: Any
    error: str | None
    running: bool
    start_date: datetime
    finish_date: datetime | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Job:
        return cls(
            id=data["id"],
            type=data["type"],
            parameters=data.get("parameters") or {},
            progress=data.get("progress"),
            error=data.get("error"),
            running=data.get("running", False),
            start_date=to_timestamp(data["startDate"]),
            finish_date=timestamp_or_none(data.get("finishDate")),
        )


@dataclass
class JobType:
    """起動可能なジョブの種類。"""

    type: str
    parameter_names: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobType:
        return cls(type=data["type"], parameter_names=list(data.get("parameterNames", [])))


@dataclass
class Liability:
    """ファンドの負債。"""

    id: int
    balance: Decimal
    description: str
    open_date: datetime
    close_date: OptionalTimestamp = UNSET

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Liability:
        return cls(
            id=data["id"],
            balance=to_decimal(data["balance"]),
            description=data.get("description", ""),
            open_date=to_timestamp(data["openDate"]),
            close_date=optional_timestamp(data, "closeDate"),
        )


@dataclass
class TaxFileNumber:
    """口座に登録された TFN。"""

    tax_file_number: str
    account_id: int | None = None
    client_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxFileNumber:
        return cls(
            tax_file_number=data["taxFileNumber"],
            account_id=data.get("accountId"),
            client_id=data.get("clientId"),
        )


# リクエスト入力


@dataclass(frozen=True)
class DeliveryMethod:
    """生成文書の受け取り方法（ダウンロードまたはメール送信）。"""

    download: bool
    email_recipients: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.download and self.email_recipients:
            raise ValueError("a downloaded document cannot also be emailed")
        if not self.download and not self.email_recipients:
            raise ValueError("email delivery needs at least one recipient")

    @classmethod
    def as_download(cls) -> DeliveryMethod:
        return cls(download=True)

    @classmethod
    def by_email(cls, recipients: list[str]) -> DeliveryMethod:
        return cls(download=False, email_recipients=tuple(recipients))

    def to_dict(self) -> dict[str, Any]:
        return {
            "download": self.download,
            "emailRecipients": list(self.email_recipients) if self.email_recipients else None,
        }


@dataclass(frozen=True)
class ClientForAccount:
    """口座に登録するクライアントとパーティション制限。"""

    client_id: int
    restrict_to_partition: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"clientId": self.client_id, "restrictToPartition": self.restrict_to_partition}


@dataclass(frozen=True)
class PartitionSpec:
    """パーティション更新時に送る口座ユニットの区分。"""

    order: int
    units: Decimal
    average_unit_price: Decimal
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": self.order,
            "units": self.units,
            "averageUnitPrice": self.average_unit_price,
            "name": self.name,
        }


@dataclass(frozen=True)
class PartnershipTfn:
    """パートナーシップ口座のパートナーごとの TFN。"""

    tax_file_number: str
    client_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"taxFileNumber": self.tax_file_number, "clientId": self.client_id}


@dataclass
class RedemptionFormData:
    """償還申込書の内容。償還するユニット数と金額はどちらか一方のみ指定する。

    ``bank`` と ``signatories`` は渡された内容をそのまま送る。
    """

    entity_name: str
    registered_address: str
    bank: dict[str, Any]
    signatories: list[dict[str, Any]]
    units_to_redeem: Decimal | None = None
    value_to_redeem: Decimal | None = None

    def __post_init__(self) -> None:
        if (self.units_to_redeem is None) == (self.value_to_redeem is None):
            raise ValueError("set exactly one of units_to_redeem or value_to_redeem")

    def to_dict(self) -> dict[str, Any]:
        return {
            "entityName": self.entity_name,
            "registeredAddress": self.registered_address,
            "redemption": {
                "unitsToRedeem": self.units_to_redeem,
                "valueToRedeem": self.value_to_redeem,
            },
            "bank": self.bank,
            "signatories": self.signatories,
        }


@dataclass
class ApplicationFormAttachments:
    """申込書に添付する書類。"""

    id_documents: list[UploadFile] = field(default_factory=list)
    qualified_accountant_certificates: list[UploadFile] = field(default_factory=list)
    trust_deed: UploadFile | None = None
    company_extract: UploadFile | None = None

    def parts(self) -> list[tuple[str, UploadFile]]:
        """multipart のパート名とファイルの組を返す。"""
        parts = [(f"file_idDocuments_{i}", f) for i, f in enumerate(self.id_documents)]
        parts += [
            (f"file_qualifiedAccountantCertificates_{i}", f)
            for i, f in enumerate(self.qualified_accountant_certificates)
        ]
        if self.trust_deed is not None:
            parts.append(("file_trustDeed", self.trust_deed))
        if self.company_extract is not None:
            parts.append(("file_companyExtract", self.company_extract))
        return parts
