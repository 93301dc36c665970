"""API のパス定義"""

from __future__ import annotations

from .request_builder import encode_path_segment

VERIFY_SIGNATURE = "/v1/token/verify_signature"
EMAIL_CHALLENGE = "/v1/token/email_challenge"
VERIFY_EMAIL = "/v1/token/verify_email"
REFRESH = "/v1/token/refresh"
GENERATE_INVESTOR_PORTAL_LINK = "/v1/token/generate_investor_portal_link"

ADMINISTRATORS = "/v1/administrators"
BOTS = "/v1/bots"

ASSETS = "/v1/assets"
ASSET_SETTINGS = "/v1/assets/settings"
PRICES = "/v1/assets/prices"
BALANCES = "/v1/assets/balances"
SOURCES = "/v1/assets/sources"
ASSET_SNAPSHOTS = "/v1/assets/snapshots"

UNIT_HOLDERS_REGISTER = "/v1/unit_holders_register"
ACQUISITION = "/v1/unit_holders_register/acquisition"
REDEMPTION = "/v1/unit_holders_register/redemption"
REDEMPTION_PREVIEW = "/v1/unit_holders_register/redemption/preview"

CALCULATE_FEES = "/v1/fees/calculate"
CAPITALISATIONS = "/v1/fees/capitalisations"
TAX_LEDGER = "/v1/tax/ledger"
CALCULATE_TAX = "/v1/tax/calculate"
SUBMIT_TAX = "/v1/tax/submit"

ACCOUNTS = "/v1/accounts"
ACCOUNT_PARTITIONS = "/v1/accounts/partitions"
CLIENTS = "/v1/clients"

HISTORICAL_FUND_METRICS = "/v1/fund_metrics/historical"
RECENT_FUND_METRICS = "/v1/fund_metrics/recent"

INVESTOR_PORTAL_ACCESS_LOG = "/v1/investor_portal/access_log"
INVESTOR_PORTAL_ACTIVE_SESSIONS = "/v1/investor_portal/active_sessions"
INVESTOR_PORTAL_OPTIONS = "/v1/investor_portal/options"
INVESTOR_PORTAL_FUND_OVERVIEW = "/v1/investor_portal/fund_overview"
HEARTBEAT = "/v1/investor_portal/heartbeat"

MODIFICATION_EVENT_LOG = "/v1/audit/modification_event_log"

GENERATE_AIIR = "/v1/documents/generate/aiir"
GENERATE_APPLICATION_FORM = "/v1/documents/generate/application_form"
GENERATE_REDEMPTION_FORM = "/v1/documents/generate/redemption_form"
CERTIFICATE_BY_A_QUALIFIED_ACCOUNTANT_TEMPLATE = "/v1/documents/templates/certificate_by_a_qualified_accountant"

JOBS = "/v1/jobs"
JOB_TYPES = "/v1/job_types"
LIABILITIES = "/v1/liabilities"


def administrator(admin_id: int) -> str:
    return f"{ADMINISTRATORS}/{encode_path_segment(admin_id)}"


def bot(bot_id: int) -> str:
    return f"{BOTS}/{encode_path_segment(bot_id)}"


def settings_for_asset(asset_name: str) -> str:
    return f"{ASSET_SETTINGS}/{encode_path_segment(asset_name)}"


def price_for_asset(asset_name: str) -> str:
    return f"{PRICES}/{encode_path_segment(asset_name)}"


def balance_for_asset(asset_name: str) -> str:
    return f"{BALANCES}/{encode_path_segment(asset_name)}"


def account(account_id: int) -> str:
    return f"{ACCOUNTS}/{encode_path_segment(account_id)}"


def registered_clients(account_id: int) -> str:
    return f"{account(account_id)}/registered_clients"


def registered_tfns(account_id: int) -> str:
    return f"{account(account_id)}/registered_tfns"


def partitions_for_account(account_id: int) -> str:
    return f"{ACCOUNT_PARTITIONS}/{encode_path_segment(account_id)}"


def client(client_id: int) -> str:
    return f"{CLIENTS}/{encode_path_segment(client_id)}"


def registered_accounts(client_id: int) -> str:
    return f"{client(client_id)}/registered_accounts"


def partitions_for_client(client_id: int) -> str:
    return f"{client(client_id)}/account_partitions"


def available_statements(account_id: int) -> str:
    return f"/v1/documents/available_statements/{encode_path_segment(account_id)}"


def generate_account_statement(account_id: int) -> str:
    return f"/v1/documents/generate/account_statement/{encode_path_segment(account_id)}"


def generate_tax_statement(account_id: int) -> str:
    return f"/v1/documents/generate/tax_statement/{encode_path_segment(account_id)}"


def job(job_id: str) -> str:
    return f"{JOBS}/{encode_path_segment(job_id)}"


def clear_liability(liability_id: int) -> str:
    return f"{LIABILITIES}/{encode_path_segment(liability_id)}/clear"
