"""Tests for payment configuration providers and the SQLite settings store."""

from pathlib import Path

import pytest

from desk.exceptions import ConfigurationError
from desk.models import PaymentConfiguration, PaymentMethod
from desk.purchase.provider import (
    SqliteConfigurationProvider,
    StaticConfigurationProvider,
    parse_payment_configuration,
)
from desk.storage.database import SettingsDatabase


class TestParse:
    def test_full_record(self) -> None:
        config = parse_payment_configuration({"qrCodeImage": "qr", "paymentMethod": "upi"})
        assert config == PaymentConfiguration("qr", PaymentMethod.UPI)
        assert config.is_configured

    def test_method_defaults_to_wallet(self) -> None:
        config = parse_payment_configuration({"qrCodeImage": "qr"})
        assert config.payment_method is PaymentMethod.WALLET

    def test_missing_qr_code_is_unconfigured(self) -> None:
        assert parse_payment_configuration({"paymentMethod": "wallet"}).is_configured is False

    def test_unknown_method_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_payment_configuration({"qrCodeImage": "qr", "paymentMethod": "card"})


@pytest.mark.asyncio
async def test_static_provider_returns_snapshot() -> None:
    config = PaymentConfiguration("qr")
    assert await StaticConfigurationProvider(config).get_payment_configuration() is config
    assert await StaticConfigurationProvider().get_payment_configuration() is None


class TestSqliteProvider:
    @pytest.mark.asyncio
    async def test_absent_record_returns_none(self, tmp_path: Path) -> None:
        async with SettingsDatabase(str(tmp_path / "settings.db")) as db:
            provider = SqliteConfigurationProvider(db)
            assert await provider.get_payment_configuration() is None

    @pytest.mark.asyncio
    async def test_saved_configuration_is_read_back(self, tmp_path: Path) -> None:
        db_path = str(tmp_path / "nested" / "settings.db")
        async with SettingsDatabase(db_path) as db:
            await SqliteConfigurationProvider(db).save_payment_configuration(
                PaymentConfiguration("data:image/png;base64,AAA", PaymentMethod.UPI)
            )

        # Reopen to prove persistence across connections
        async with SettingsDatabase(db_path) as db:
            config = await SqliteConfigurationProvider(db).get_payment_configuration()
            assert config == PaymentConfiguration("data:image/png;base64,AAA", PaymentMethod.UPI)
            assert await db.get_record("adminBuySettings") == {
                "qrCodeImage": "data:image/png;base64,AAA",
                "paymentMethod": "upi",
            }

    @pytest.mark.asyncio
    async def test_corrupt_record_raises_configuration_error(self, tmp_path: Path) -> None:
        async with SettingsDatabase(str(tmp_path / "settings.db")) as db:
            await db.db.execute(
                "INSERT INTO settings (key, value, updated_at) VALUES (?, ?, ?)",
                ("adminBuySettings", "{not json", 0),
            )
            await db.db.commit()
            with pytest.raises(ConfigurationError):
                await SqliteConfigurationProvider(db).get_payment_configuration()

    @pytest.mark.asyncio
    async def test_custom_key(self, tmp_path: Path) -> None:
        async with SettingsDatabase(str(tmp_path / "settings.db")) as db:
            await db.put_record("otherKey", {"qrCodeImage": "qr"})
            assert await SqliteConfigurationProvider(db).get_payment_configuration() is None
            config = await SqliteConfigurationProvider(db, "otherKey").get_payment_configuration()
            assert config.qr_code_image == "qr"


@pytest.mark.asyncio
async def test_database_requires_connect(tmp_path: Path) -> None:
    db = SettingsDatabase(str(tmp_path / "settings.db"))
    with pytest.raises(RuntimeError):
        await db.get_record("anything")
