"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from desk.models import Period


class BackendSettings(BaseSettings):
    """Marketplace backend connection settings."""

    model_config = SettingsConfigDict(env_prefix="BACKEND_")

    base_url: str = "http://localhost:5000/api"
    api_token: SecretStr = SecretStr("")
    timeout_seconds: float = 10.0


class PurchaseSettings(BaseSettings):
    """Deposit/buy workflow parameters."""

    model_config = SettingsConfigDict(env_prefix="PURCHASE_")

    coin_rate: Decimal = Decimal("1")  # 1 USD = 1 coin
    # Legacy clients always submitted "wallet" regardless of the configured method
    force_wallet_method: bool = False


class ChartSettings(BaseSettings):
    """Chart period controller defaults."""

    model_config = SettingsConfigDict(env_prefix="CHART_")

    default_period: Period = Period.SIX_MONTHS


class StorageSettings(BaseSettings):
    """Local settings store holding the admin payment configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    db_path: str = "data/settings.db"
    settings_key: str = "adminBuySettings"


class ServerSettings(BaseSettings):
    """HTTP surface configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = "127.0.0.1"
    port: int = 8080


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    backend: BackendSettings = BackendSettings()
    purchase: PurchaseSettings = PurchaseSettings()
    chart: ChartSettings = ChartSettings()
    storage: StorageSettings = StorageSettings()
    server: ServerSettings = ServerSettings()
