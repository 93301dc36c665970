"""BCA ファンド管理 API の非同期クライアント"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Mapping, TypeVar

from . import endpoints
from .config import ClientConfig, ClientOptions
from .dates import DateLike, to_iso
from .deserialize import deserialize_list
from .models import (
    Account,
    AccountPartition,
    Administrator,
    ApplicationFormAttachments,
    Asset,
    AssetBalance,
    AssetPrice,
    AssetSettings,
    AssetSnapshotsEntry,
    AssetSource,
    AttributionCalculation,
    Bot,
    Client,
    ClientForAccount,
    DeliveryMethod,
    FeeCalculation,
    FeeCapitalisationsEntry,
    FundMetricsEntry,
    FundOverview,
    InvestorPortalAccessLogEntry,
    InvestorPortalOptions,
    Job,
    JobType,
    Liability,
    ModificationLogEntry,
    PartitionSpec,
    PartnershipTfn,
    RedemptionFormData,
    RegisteredAccount,
    RegisteredClient,
    StatementType,
    StreamedTax,
    TaxAttribution,
    TaxFileNumber,
    TaxLedgerEntry,
    UnitHoldersRegisterEntry,
)
from .request_builder import MultipartForm, RequestBuilder, RequestDescriptor, dumps
from .responses import (
    APIResponse,
    DataResponse,
    FileResponse,
    StatusResponse,
    TokenResponse,
    data_response,
    file_response,
    status_response,
    token_response,
)
from .signing import SigningFunction, resolve_signer
from .token_cache import TokenCache
from .transport import Transport

T = TypeVar("T")

PDF = "application/pdf"
SPREADSHEET = "application/vnd"


def _list_of(deserializer: Callable[[dict[str, Any]], T]) -> Callable[[list[dict[str, Any]]], list[T]]:
    return lambda data: deserialize_list(data, deserializer)


def _date_range(start_date: DateLike, end_date: DateLike) -> dict[str, str]:
    return {"startDate": to_iso(start_date), "endDate": to_iso(end_date)}


def _account_payload(
    account_name: str,
    entity_type: str,
    address_line1: str,
    address_line2: str | None,
    suburb: str,
    state: str,
    postcode: str,
    country: str,
    distribution_reinvestment_percentage: Decimal,
    account_tfn: str | None,
    partnership_tfns: list[PartnershipTfn] | None,
) -> dict[str, Any]:
    return {
        "accountName": account_name,
        "entityType": entity_type,
        "addressLine1": address_line1,
        "addressLine2": address_line2 or None,
        "suburb": suburb,
        "state": state,
        "postcode": postcode,
        "country": country,
        "distributionReinvestmentPercentage": distribution_reinvestment_percentage,
        "accountTFN": account_tfn,
        "partnershipTFNs": partnership_tfns,
    }


def _tax_payload(
    financial_year: int,
    tax_pool: TaxAttribution,
    cash_pool: Decimal,
    streamed_tax: list[StreamedTax],
) -> dict[str, Any]:
    return {
        "financialYear": financial_year,
        "taxPool": tax_pool,
        "cashPool": cash_pool,
        "streamedTax": streamed_tax,
    }


class BcaApiClient:
    """型付きの BCA API 非同期クライアント。

    各操作はリクエストを 1 回だけ送る。署名可能で有効なトークンを持たない
    場合に限り、その前に自己署名のトークン交換を 1 回行う。HTTP エラーは
    ``Failure`` または ``StatusResponse`` の値として返し、httpx の通信障害は
    そのまま伝播させる。

    Args:
        api_url: API のベース URL（例: ``https://api.example.com``）。
        options: トークン、署名情報、httpx オプション。
    """

    def __init__(self, api_url: str, options: ClientOptions | None = None) -> None:
        options = options or ClientOptions()
        signing_key = options.signing_key.get_secret_value() if options.signing_key else None
        self._signer = resolve_signer(signing_key, options.signing_function)
        self._token_cache = TokenCache(
            token=options.auth_token,
            refresher=self.submit_signed_auth_request if self._signer is not None else None,
        )
        self._builder = RequestBuilder(self._signer, self._token_cache)
        self._transport = Transport(api_url, options.transport_options)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        signing_function: SigningFunction | None = None,
    ) -> BcaApiClient:
        """読み込んだ設定からクライアントを生成する。署名関数は引数で注入する。"""
        options = config.options
        if signing_function is not None:
            options = options.model_copy(update={"signing_function": signing_function})
        return cls(config.api_url, options)

    @property
    def auth_token(self) -> str | None:
        """現在キャッシュしているトークン（失効している場合もある）。"""
        return self._token_cache.token

    def set_auth_token(self, token: str | None) -> None:
        """キャッシュ中のトークンを置き換える（``submit_email_challenge`` の結果など）。"""
        self._token_cache.set_token(token)

    async def _fetch(
        self,
        method: str,
        path: str,
        *,
        query_params: Mapping[str, Any] | None = None,
        payload: Any = None,
        body: Any = None,
        auth: bool = False,
        signed: bool = False,
    ) -> APIResponse:
        """リクエストを組み立てて送信し、正規化済みレスポンスを返す。"""
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            query_params=query_params,
            payload=payload,
            body=body,
            auth=auth,
            signed=signed,
        )
        request = await self._builder.build(descriptor)
        return await self._transport.execute(request)

    async def _get_data(
        self,
        path: str,
        deserializer: Callable[[Any], T],
        query_params: Mapping[str, Any] | None = None,
    ) -> DataResponse[T]:
        """認証付き GET を送り、data をデシリアライズする。"""
        response = await self._fetch("GET", path, query_params=query_params, auth=True)
        return data_response(response, deserializer)

    async def _signed_write(self, method: str, path: str, payload: Any = None) -> StatusResponse:
        """署名付き・認証付きの書き込みを送る。"""
        response = await self._fetch(method, path, payload=payload, auth=True, signed=True)
        return status_response(response)

    # トークン

    async def submit_signed_auth_request(self) -> TokenResponse:
        """新しいエンベロープへの署名をセッショントークンと交換する。"""
        response = await self._fetch("POST", endpoints.VERIFY_SIGNATURE, signed=True)
        return token_response(response)

    async def get_email_challenge(self, email: str) -> StatusResponse:
        """メールアドレス宛てにログイン用チャレンジを送らせる。"""
        response = await self._fetch("GET", endpoints.EMAIL_CHALLENGE, query_params={"email": email})
        return status_response(response)

    async def submit_email_challenge(self, challenge: str) -> TokenResponse:
        """メールで受け取ったチャレンジをトークンと交換する。"""
        response = await self._fetch("POST", endpoints.VERIFY_EMAIL, query_params={"challenge": challenge})
        return token_response(response)

    async def get_refresh_token(self) -> TokenResponse:
        """現在のトークンから新しいトークンを発行させる。"""
        response = await self._fetch("POST", endpoints.REFRESH, auth=True)
        return token_response(response)

    async def generate_investor_portal_link(self, client_id: int, expires_in: str) -> DataResponse[str]:
        """クライアント用のログインリンクを発行する。``expires_in`` は ``"7d"`` などの期間。"""
        response = await self._fetch(
            "POST",
            endpoints.GENERATE_INVESTOR_PORTAL_LINK,
            payload={"clientId": client_id, "expiresIn": expires_in},
            auth=True,
            signed=True,
        )
        return data_response(response, str)

    # 管理者・ボット

    async def get_administrators(self) -> DataResponse[list[Administrator]]:
        """管理者一覧を取得する。"""
        return await self._get_data(endpoints.ADMINISTRATORS, _list_of(Administrator.from_dict))

    async def get_administrator_info(self, admin_id: int) -> DataResponse[Administrator]:
        """管理者 1 件を取得する。"""
        return await self._get_data(endpoints.administrator(admin_id), Administrator.from_dict)

    async def get_bots(self) -> DataResponse[list[Bot]]:
        """ボット一覧を取得する。"""
        return await self._get_data(endpoints.BOTS, _list_of(Bot.from_dict))

    async def get_bot_info(self, bot_id: int) -> DataResponse[Bot]:
        """ボット 1 件を取得する。"""
        return await self._get_data(endpoints.bot(bot_id), Bot.from_dict)

    # アセット

    async def get_assets(self) -> DataResponse[list[Asset]]:
        """アセット一覧を取得する。"""
        return await self._get_data(endpoints.ASSETS, _list_of(Asset.from_dict))

    async def get_asset_settings(self) -> DataResponse[list[AssetSettings]]:
        """アセットごとの設定一覧を取得する。"""
        return await self._get_data(endpoints.ASSET_SETTINGS, _list_of(AssetSettings.from_dict))

    async def update_asset_settings_for_asset(
        self,
        asset_name: str,
        asset_symbol: str | None,
        manual_balance: Decimal | None,
        manual_price: Decimal | None,
    ) -> StatusResponse:
        """アセットの手動残高・手動価格を更新する。"""
        return await self._signed_write(
            "PUT",
            endpoints.settings_for_asset(asset_name),
            {
                "assetName": asset_name,
                "assetSymbol": asset_symbol,
                "manualBalance": manual_balance,
                "manualPrice": manual_price,
            },
        )

    async def get_asset_prices(self) -> DataResponse[list[AssetPrice]]:
        """アセット価格一覧を取得する。"""
        return await self._get_data(endpoints.PRICES, _list_of(AssetPrice.from_dict))

    async def create_asset_price(self, asset_name: str, price: Decimal) -> StatusResponse:
        """アセット価格を登録する。"""
        return await self._signed_write("PUT", endpoints.price_for_asset(asset_name), {"price": price})

    async def delete_asset_price(self, asset_name: str) -> StatusResponse:
        """アセット価格を削除する。"""
        return await self._signed_write("DELETE", endpoints.price_for_asset(asset_name))

    async def get_asset_balances(self) -> DataResponse[list[AssetBalance]]:
        """アセット残高一覧を取得する。"""
        return await self._get_data(endpoints.BALANCES, _list_of(AssetBalance.from_dict))

    async def create_asset_balance(self, asset_name: str, source_id: int, balance: Decimal) -> StatusResponse:
        """アセット残高を登録する。"""
        return await self._signed_write(
            "PUT",
            endpoints.balance_for_asset(asset_name),
            {"sourceId": source_id, "balance": balance},
        )

    async def delete_asset_balance(self, asset_name: str, source_id: int) -> StatusResponse:
        """アセット残高を削除する。"""
        return await self._signed_write(
            "DELETE",
            endpoints.balance_for_asset(asset_name),
            {"sourceId": source_id},
        )

    async def get_asset_sources(self) -> DataResponse[list[AssetSource]]:
        """アセット残高の取得元一覧を取得する。"""
        return await self._get_data(endpoints.SOURCES, _list_of(AssetSource.from_dict))

    async def get_asset_snapshots(
        self, start_date: DateLike, end_date: DateLike
    ) -> DataResponse[list[AssetSnapshotsEntry]]:
        """期間内のアセットスナップショットを取得する。"""
        return await self._get_data(
            endpoints.ASSET_SNAPSHOTS,
            _list_of(AssetSnapshotsEntry.from_dict),
            _date_range(start_date, end_date),
        )

    async def take_snapshot_of_assets(self) -> StatusResponse:
        """現時点のアセットスナップショットを記録させる。"""
        return await self._signed_write("POST", endpoints.ASSET_SNAPSHOTS, {})

    # ユニット保有者名簿

    async def get_unit_holders_register(self) -> DataResponse[list[UnitHoldersRegisterEntry]]:
        """ユニット保有者名簿を取得する。"""
        return await self._get_data(endpoints.UNIT_HOLDERS_REGISTER, _list_of(UnitHoldersRegisterEntry.from_dict))

    async def perform_unit_acquisition(
        self, acquisition_date: DateLike, account_id: int, funds_invested: Decimal
    ) -> StatusResponse:
        """ユニットの取得を記録する。"""
        return await self._signed_write(
            "POST",
            endpoints.ACQUISITION,
            {
                "acquisitionDate": to_iso(acquisition_date),
                "accountId": account_id,
                "fundsInvested": funds_invested,
            },
        )

    async def perform_unit_redemption(
        self, redemption_date: DateLike, account_id: int, redeemed_units: Decimal
    ) -> StatusResponse:
        """ユニットの償還を記録する。"""
        return await self._signed_write(
            "POST",
            endpoints.REDEMPTION,
            {
                "redemptionDate": to_iso(redemption_date),
                "accountId": account_id,
                "redeemedUnits": redeemed_units,
            },
        )

    async def get_unit_redemption_preview(
        self, redemption_date: DateLike, account_id: int, redeemed_units: Decimal
    ) -> DataResponse[list[UnitHoldersRegisterEntry]]:
        """償還で生じる名簿の行を確定せずに計算する。"""
        return await self._get_data(
            endpoints.REDEMPTION_PREVIEW,
            _list_of(UnitHoldersRegisterEntry.from_dict),
            {
                "redemptionDate": to_iso(redemption_date),
                "accountId": account_id,
                "redeemedUnits": redeemed_units,
            },
        )

    # 手数料

    async def get_fee_calculation(self, valuation_date: DateLike, aum: Decimal) -> DataResponse[FeeCalculation]:
        """評価日と運用資産額から手数料を計算させる。"""
        return await self._get_data(
            endpoints.CALCULATE_FEES,
            FeeCalculation.from_dict,
            {"valuationDate": to_iso(valuation_date), "aum": aum},
        )

    async def get_fee_capitalisations_entries(
        self, start_date: DateLike, end_date: DateLike
    ) -> DataResponse[list[FeeCapitalisationsEntry]]:
        """手数料の資本化履歴を取得する。"""
        return await self._get_data(
            endpoints.CAPITALISATIONS,
            _list_of(FeeCapitalisationsEntry.from_dict),
            _date_range(start_date, end_date),
        )

    async def capitalise_fees(self, capitalisation_date: DateLike) -> StatusResponse:
        """手数料を資本化する。"""
        return await self._signed_write(
            "POST",
            endpoints.CAPITALISATIONS,
            {"capitalisationDate": to_iso(capitalisation_date)},
        )

    # 税

    async def get_tax_ledger_entries(self, start_date: DateLike, end_date: DateLike) -> DataResponse[list[TaxLedgerEntry]]:
        """期間内の税台帳を取得する。"""
        return await self._get_data(
            endpoints.TAX_LEDGER,
            _list_of(TaxLedgerEntry.from_dict),
            _date_range(start_date, end_date),
        )

    async def calculate_tax_attributions(
        self,
        financial_year: int,
        tax_pool: TaxAttribution,
        cash_pool: Decimal,
        streamed_tax: list[StreamedTax],
    ) -> DataResponse[AttributionCalculation]:
        """税の帰属を記録せずに試算する。"""
        response = await self._fetch(
            "POST",
            endpoints.CALCULATE_TAX,
            body=_tax_payload(financial_year, tax_pool, cash_pool, streamed_tax),
            auth=True,
        )
        return data_response(response, AttributionCalculation.from_dict)

    async def perform_tax_attribution(
        self,
        financial_year: int,
        tax_pool: TaxAttribution,
        cash_pool: Decimal,
        streamed_tax: list[StreamedTax],
    ) -> StatusResponse:
        """税の帰属を確定して記録する。"""
        return await self._signed_write(
            "POST",
            endpoints.SUBMIT_TAX,
            _tax_payload(financial_year, tax_pool, cash_pool, streamed_tax),
        )

    # 口座

    async def get_accounts(self) -> DataResponse[list[Account]]:
        """口座一覧を取得する。"""
        return await self._get_data(endpoints.ACCOUNTS, _list_of(Account.from_dict))

    async def create_account(
        self,
        account_name: str,
        entity_type: str,
        address_line1: str,
        address_line2: str | None,
        suburb: str,
        state: str,
        postcode: str,
        country: str,
        distribution_reinvestment_percentage: Decimal,
        account_tfn: str | None = None,
        partnership_tfns: list[PartnershipTfn] | None = None,
    ) -> DataResponse[Account]:
        """口座を作成する。空の ``address_line2`` は null として送る。"""
        response = await self._fetch(
            "POST",
            endpoints.ACCOUNTS,
            payload=_account_payload(
                account_name,
                entity_type,
                address_line1,
                address_line2,
                suburb,
                state,
                postcode,
                country,
                distribution_reinvestment_percentage,
                account_tfn,
                partnership_tfns,
            ),
            auth=True,
            signed=True,
        )
        return data_response(response, Account.from_dict)

    async def update_account(
        self,
        account_id: int,
        account_name: str,
        entity_type: str,
        address_line1: str,
        address_line2: str | None,
        suburb: str,
        state: str,
        postcode: str,
        country: str,
        distribution_reinvestment_percentage: Decimal,
        account_tfn: str | None = None,
        partnership_tfns: list[PartnershipTfn] | None = None,
    ) -> StatusResponse:
        """口座情報を更新する。"""
        return await self._signed_write(
            "PUT",
            endpoints.account(account_id),
            _account_payload(
                account_name,
                entity_type,
                address_line1,
                address_line2,
                suburb,
                state,
                postcode,
                country,
                distribution_reinvestment_percentage,
                account_tfn,
                partnership_tfns,
            ),
        )

    async def get_clients_for_account(self, account_id: int) -> DataResponse[list[RegisteredClient]]:
        """口座に登録されたクライアントを取得する。"""
        return await self._get_data(endpoints.registered_clients(account_id), _list_of(RegisteredClient.from_dict))

    async def update_clients_for_account(
        self, account_id: int, clients_for_account: list[ClientForAccount]
    ) -> StatusResponse:
        """口座に登録するクライアントを置き換える。"""
        return await self._signed_write(
            "PUT",
            endpoints.registered_clients(account_id),
            {"clientsForAccount": clients_for_account},
        )

    async def get_tax_file_numbers_for_account(self, account_id: int) -> DataResponse[list[TaxFileNumber]]:
        """口座に登録された TFN を取得する。"""
        return await self._get_data(endpoints.registered_tfns(account_id), _list_of(TaxFileNumber.from_dict))

    async def get_account_partitions(self) -> DataResponse[list[AccountPartition]]:
        """全口座のパーティションを取得する。"""
        return await self._get_data(endpoints.ACCOUNT_PARTITIONS, _list_of(AccountPartition.from_dict))

    async def get_partitions_for_account(self, account_id: int) -> DataResponse[list[AccountPartition]]:
        """口座のパーティションを取得する。"""
        return await self._get_data(endpoints.partitions_for_account(account_id), _list_of(AccountPartition.from_dict))

    async def update_partitions_for_account(self, account_id: int, partitions: list[PartitionSpec]) -> StatusResponse:
        """口座のパーティションを置き換える。"""
        return await self._signed_write(
            "PUT",
            endpoints.partitions_for_account(account_id),
            {"partitions": partitions},
        )

    # クライアント

    async def get_clients(self) -> DataResponse[list[Client]]:
        """クライアント一覧を取得する。"""
        return await self._get_data(endpoints.CLIENTS, _list_of(Client.from_dict))

    async def create_client(self, email: str, first_name: str, last_name: str) -> DataResponse[Client]:
        """クライアントを作成する。"""
        response = await self._fetch(
            "POST",
            endpoints.CLIENTS,
            payload={"email": email, "firstName": first_name, "lastName": last_name},
            auth=True,
            signed=True,
        )
        return data_response(response, Client.from_dict)

    async def get_client_info(self, client_id: int) -> DataResponse[Client]:
        """クライアント 1 件を取得する。"""
        return await self._get_data(endpoints.client(client_id), Client.from_dict)

    async def update_client(self, client_id: int, email: str, first_name: str, last_name: str) -> StatusResponse:
        """クライアント情報を更新する。"""
        return await self._signed_write(
            "PUT",
            endpoints.client(client_id),
            {"email": email, "firstName": first_name, "lastName": last_name},
        )

    async def get_accounts_for_client(self, client_id: int) -> DataResponse[list[RegisteredAccount]]:
        """クライアントに紐づく口座を取得する。"""
        return await self._get_data(endpoints.registered_accounts(client_id), _list_of(RegisteredAccount.from_dict))

    async def get_partitions_for_client(self, client_id: int) -> DataResponse[list[AccountPartition]]:
        """クライアントが参照できるパーティションを取得する。"""
        return await self._get_data(endpoints.partitions_for_client(client_id), _list_of(AccountPartition.from_dict))

    # ファンド指標

    async def get_historical_fund_metrics(
        self, start_date: DateLike, end_date: DateLike
    ) -> DataResponse[list[FundMetricsEntry]]:
        """過去のファンド指標を取得する。"""
        return await self._get_data(
            endpoints.HISTORICAL_FUND_METRICS,
            _list_of(FundMetricsEntry.from_dict),
            _date_range(start_date, end_date),
        )

    async def record_historical_fund_metrics_entry(self) -> StatusResponse:
        """過去のファンド指標を 1 件記録する。"""
        return await self._signed_write("POST", endpoints.HISTORICAL_FUND_METRICS)

    async def get_recent_fund_metrics(
        self, start_date: DateLike, end_date: DateLike
    ) -> DataResponse[list[FundMetricsEntry]]:
        """直近のファンド指標を取得する。"""
        return await self._get_data(
            endpoints.RECENT_FUND_METRICS,
            _list_of(FundMetricsEntry.from_dict),
            _date_range(start_date, end_date),
        )

    async def record_recent_fund_metrics_entry(self) -> StatusResponse:
        """直近のファンド指標を 1 件記録する。"""
        return await self._signed_write("POST", endpoints.RECENT_FUND_METRICS)

    # 投資家ポータル

    async def get_investor_portal_access_log(
        self, start_date: DateLike, end_date: DateLike
    ) -> DataResponse[list[InvestorPortalAccessLogEntry]]:
        """投資家ポータルのアクセスログを取得する。"""
        return await self._get_data(
            endpoints.INVESTOR_PORTAL_ACCESS_LOG,
            _list_of(InvestorPortalAccessLogEntry.from_dict),
            _date_range(start_date, end_date),
        )

    async def get_investor_portal_active_sessions(self) -> DataResponse[list[InvestorPortalAccessLogEntry]]:
        """投資家ポータルの有効なセッションを取得する。"""
        return await self._get_data(
            endpoints.INVESTOR_PORTAL_ACTIVE_SESSIONS,
            _list_of(InvestorPortalAccessLogEntry.from_dict),
        )

    async def get_investor_portal_options(self) -> DataResponse[InvestorPortalOptions]:
        """投資家ポータルの表示設定を取得する。"""
        return await self._get_data(endpoints.INVESTOR_PORTAL_OPTIONS, InvestorPortalOptions.from_dict)

    async def update_investor_portal_options(
        self,
        maintenance_mode: bool,
        soapbox_title: str,
        soapbox_body: str,
        soapbox_html: str,
    ) -> StatusResponse:
        """投資家ポータルの表示設定を更新する。"""
        return await self._signed_write(
            "PUT",
            endpoints.INVESTOR_PORTAL_OPTIONS,
            {
                "maintenanceMode": maintenance_mode,
                "soapboxTitle": soapbox_title,
                "soapboxBody": soapbox_body,
                "soapboxHtml": soapbox_html,
            },
        )

    async def get_investor_portal_fund_overview(self) -> DataResponse[FundOverview]:
        """投資家ポータル向けのファンド概要を取得する。"""
        return await self._get_data(endpoints.INVESTOR_PORTAL_FUND_OVERVIEW, FundOverview.from_dict)

    async def send_heartbeat(self) -> StatusResponse:
        """投資家ポータルのセッションを延長する。"""
        response = await self._fetch("GET", endpoints.HEARTBEAT, auth=True)
        return status_response(response)

    # 監査

    async def get_modification_event_log(
        self, start_date: DateLike, end_date: DateLike
    ) -> DataResponse[list[ModificationLogEntry]]:
        """変更イベントログを取得する。"""
        return await self._get_data(
            endpoints.MODIFICATION_EVENT_LOG,
            _list_of(ModificationLogEntry.from_dict),
            _date_range(start_date, end_date),
        )

    # 文書

    async def get_available_statements(self, account_id: int) -> DataResponse[dict[str, list[int]]]:
        """ステートメント種別ごとに、生成可能な会計年度を返す。"""
        return await self._get_data(
            endpoints.available_statements(account_id),
            lambda data: {statement_type: list(years) for statement_type, years in data.items()},
        )

    async def request_statement(
        self,
        delivery_method: DeliveryMethod,
        statement_type: StatementType | str,
        financial_year: int,
        account_id: int,
    ) -> FileResponse:
        """会計年度 1 年分の口座ステートメントまたは税ステートメントを生成する。

        Raises:
            ValueError: ``statement_type`` が既知の種別ではない。
        """
        statement_type = StatementType(statement_type)
        if statement_type is StatementType.ACCOUNT_STATEMENT:
            path = endpoints.generate_account_statement(account_id)
        else:
            path = endpoints.generate_tax_statement(account_id)
        response = await self._fetch(
            "POST",
            path,
            query_params={"financialYear": financial_year},
            body=delivery_method,
            auth=True,
        )
        return file_response(response, f"FY{financial_year % 100} {statement_type.value}", PDF)

    async def request_aiir(self, delivery_method: DeliveryMethod, financial_year: int) -> FileResponse:
        """年次投資収益報告書（AIIR）のスプレッドシートを生成する。"""
        response = await self._fetch(
            "POST",
            endpoints.GENERATE_AIIR,
            query_params={"financialYear": financial_year},
            body=delivery_method,
            auth=True,
        )
        return file_response(response, f"FY{financial_year % 100} AIIR", SPREADSHEET)

    async def request_application_form(
        self,
        delivery_method: DeliveryMethod,
        application_form: dict[str, Any],
        attachments: ApplicationFormAttachments | None = None,
    ) -> FileResponse:
        """申込書を添付書類とともに送り、PDF を生成する。

        ``application_form`` は JSON として送り、``entityType`` を必ず含む。
        本文は添付の有無にかかわらず multipart/form-data になる。
        """
        entity_type = application_form.get("entityType")
        if not entity_type:
            raise ValueError("application form is missing its entityType")
        form = MultipartForm()
        form.add_field("applicationForm", dumps(application_form))
        form.add_field("deliveryMethod", dumps(delivery_method))
        for name, upload in (attachments or ApplicationFormAttachments()).parts():
            form.add_file(name, upload)
        response = await self._fetch("POST", endpoints.GENERATE_APPLICATION_FORM, body=form)
        return file_response(response, f"{entity_type} Application Form", PDF)

    async def request_redemption_form(
        self,
        delivery_method: DeliveryMethod,
        redemption_form_data: RedemptionFormData | None = None,
    ) -> FileResponse:
        """償還申込書の PDF を生成する。"""
        response = await self._fetch(
            "POST",
            endpoints.GENERATE_REDEMPTION_FORM,
            body={**delivery_method.to_dict(), "redemptionFormData": redemption_form_data},
        )
        return file_response(response, "Redemption Form", PDF)

    async def request_certificate_by_a_qualified_accountant_template(self) -> FileResponse:
        """有資格会計士証明書のテンプレート PDF を取得する。"""
        response = await self._fetch("GET", endpoints.CERTIFICATE_BY_A_QUALIFIED_ACCOUNTANT_TEMPLATE)
        return file_response(response, "Certificate by a Qualified Accountant", PDF)

    # ジョブ

    async def get_jobs(self) -> DataResponse[list[Job]]:
        """ジョブ一覧を取得する。"""
        return await self._get_data(endpoints.JOBS, _list_of(Job.from_dict))

    async def start_job(self, job_type: str, parameters: dict[str, Any]) -> StatusResponse:
        """ジョブを起動する。"""
        return await self._signed_write("POST", endpoints.JOBS, {"jobType": job_type, "parameters": parameters})

    async def get_job_info(self, job_id: str) -> DataResponse[Job]:
        """ジョブ 1 件を取得する。"""
        return await self._get_data(endpoints.job(job_id), Job.from_dict)

    async def stop_job(self, job_id: str) -> StatusResponse:
        """ジョブを停止する。"""
        return await self._signed_write("POST", endpoints.job(job_id))

    async def delete_job(self, job_id: str) -> StatusResponse:
        """ジョブを削除する。"""
        response = await self._fetch("DELETE", endpoints.job(job_id), auth=True)
        return status_response(response)

    async def get_job_types(self) -> DataResponse[list[JobType]]:
        """起動可能なジョブの種類を取得する。"""
        return await self._get_data(endpoints.JOB_TYPES, _list_of(JobType.from_dict))

    # 負債

    async def get_liabilities(self, outstanding_only: bool = False) -> DataResponse[list[Liability]]:
        """負債一覧を取得する。"""
        return await self._get_data(
            endpoints.LIABILITIES,
            _list_of(Liability.from_dict),
            {"outstandingOnly": outstanding_only},
        )

    async def clear_liability(self, liability_id: int) -> StatusResponse:
        """負債を消し込む。"""
        return await self._signed_write("POST", endpoints.clear_liability(liability_id))
