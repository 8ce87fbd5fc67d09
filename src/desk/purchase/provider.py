"""Payment configuration providers.

The admin payment target is owned by an administrative surface; the
workflow receives a provider and reads one immutable snapshot per entry.
"""

from abc import ABC, abstractmethod

from desk.exceptions import ConfigurationError
from desk.logging import get_logger
from desk.models import PaymentConfiguration, PaymentMethod
from desk.storage.database import SettingsDatabase

logger = get_logger(__name__)

DEFAULT_SETTINGS_KEY = "adminBuySettings"


def parse_payment_configuration(record: dict) -> PaymentConfiguration:
    """Build a configuration snapshot from the stored admin record.

    Accepts {"qrCodeImage": str, "paymentMethod": "wallet" | "upi"}; a missing
    method defaults to wallet.

    Raises:
        ConfigurationError: the payment method is not recognised.
    """
    raw_method = record.get("paymentMethod") or PaymentMethod.WALLET.value
    try:
        method = PaymentMethod(raw_method)
    except ValueError as e:
        raise ConfigurationError(f"Unknown payment method: {raw_method!r}") from e

    return PaymentConfiguration(
        qr_code_image=str(record.get("qrCodeImage") or ""),
        payment_method=method,
    )


class ConfigurationProvider(ABC):
    """Read-only access to the admin payment configuration."""

    @abstractmethod
    async def get_payment_configuration(self) -> PaymentConfiguration | None:
        """Return the current configuration, or None if never saved.

        Raises:
            ConfigurationError: the stored configuration cannot be read.
        """
        ...


class StaticConfigurationProvider(ConfigurationProvider):
    """Provider returning a fixed snapshot (or None)."""

    def __init__(self, configuration: PaymentConfiguration | None = None) -> None:
        self._configuration = configuration

    async def get_payment_configuration(self) -> PaymentConfiguration | None:
        return self._configuration


class SqliteConfigurationProvider(ConfigurationProvider):
    """Provider reading the admin record from the local settings database."""

    def __init__(self, database: SettingsDatabase, key: str = DEFAULT_SETTINGS_KEY) -> None:
        self._database = database
        self._key = key

    async def get_payment_configuration(self) -> PaymentConfiguration | None:
        try:
            record = await self._database.get_record(self._key)
        except ValueError as e:
            logger.warning("payment_configuration_unreadable", key=self._key, error=str(e))
            raise ConfigurationError(f"Stored payment configuration is corrupt: {e}") from e

        if record is None:
            return None
        return parse_payment_configuration(record)

    async def save_payment_configuration(self, configuration: PaymentConfiguration) -> None:
        """Persist a configuration. Called by the administrative surface, never by the workflow."""
        await self._database.put_record(
            self._key,
            {
                "qrCodeImage": configuration.qr_code_image,
                "paymentMethod": configuration.payment_method.value,
            },
        )
        logger.info("payment_configuration_saved", method=configuration.payment_method.value)
