"""BCA ファンド管理 API の非同期クライアントライブラリ"""

from .client import BcaApiClient
from .config import ClientConfig, ClientOptions, load_config
from .dates import DateLike, to_iso
from .deserialize import UNSET, Unset
from .exceptions import (
    AuthenticationError,
    BcaApiError,
    BcaApiErrorCodes,
    ConfigurationError,
    InvalidDateError,
)
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
    FeeRates,
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
    VintageData,
)
from .request_builder import UploadFile
from .responses import (
    DataResponse,
    DataSuccess,
    DownloadedFile,
    Failure,
    FileResponse,
    FileSuccess,
    StatusResponse,
    TokenResponse,
    TokenSuccess,
)
from .signing import (
    FunctionSigner,
    PrivateKeySigner,
    Signer,
    SigningFunction,
    sign_message_with_ethereum_private_key,
)

__all__ = [
    "BcaApiClient",
    "ClientOptions",
    "ClientConfig",
    "load_config",
    "DateLike",
    "to_iso",
    "UNSET",
    "Unset",
    "BcaApiError",
    "BcaApiErrorCodes",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidDateError",
    "Signer",
    "SigningFunction",
    "FunctionSigner",
    "PrivateKeySigner",
    "sign_message_with_ethereum_private_key",
    "StatusResponse",
    "TokenResponse",
    "TokenSuccess",
    "DataResponse",
    "DataSuccess",
    "FileResponse",
    "FileSuccess",
    "Failure",
    "DownloadedFile",
    "UploadFile",
    "Account",
    "AccountPartition",
    "Administrator",
    "ApplicationFormAttachments",
    "Asset",
    "AssetBalance",
    "AssetPrice",
    "AssetSettings",
    "AssetSnapshotsEntry",
    "AssetSource",
    "AttributionCalculation",
    "Bot",
    "Client",
    "ClientForAccount",
    "DeliveryMethod",
    "FeeCalculation",
    "FeeCapitalisationsEntry",
    "FeeRates",
    "FundMetricsEntry",
    "FundOverview",
    "InvestorPortalAccessLogEntry",
    "InvestorPortalOptions",
    "Job",
    "JobType",
    "Liability",
    "ModificationLogEntry",
    "PartitionSpec",
    "PartnershipTfn",
    "RedemptionFormData",
    "RegisteredAccount",
    "RegisteredClient",
    "StatementType",
    "StreamedTax",
    "TaxAttribution",
    "TaxFileNumber",
    "TaxLedgerEntry",
    "UnitHoldersRegisterEntry",
    "VintageData",
]
