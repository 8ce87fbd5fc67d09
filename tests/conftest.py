"""Shared test fixtures for the marketplace dashboard core."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from desk.backend.client import BackendClient
from desk.config import PurchaseSettings
from desk.models import ChartPoint, Company, PaymentConfiguration, PaymentMethod
from desk.purchase.provider import StaticConfigurationProvider
from desk.purchase.workflow import PurchaseWorkflow
from desk.ui import RecordingInterface


def make_company(
    company_id: str = "c1",
    symbol: str = "BTC",
    name: str = "Bitcoin",
    category: str = "Cryptocurrency",
    description: str = "Peer-to-peer electronic cash",
    current_price: str | None = "100",
    prices: list[str] | None = None,
    daily_increase_rate: str = "0.02",
    market_cap: str = "1200000",
) -> Company:
    """Build a Company with an optional price history on consecutive days."""
    chart = tuple(
        ChartPoint(date=f"2024-01-{i + 1:02d}", price=Decimal(p), volume=Decimal("10"))
        for i, p in enumerate(prices or [])
    )
    return Company(
        id=company_id,
        symbol=symbol,
        name=name,
        category=category,
        description=description,
        current_price=Decimal(current_price) if current_price is not None else None,
        market_cap=Decimal(market_cap),
        daily_increase_rate=Decimal(daily_increase_rate),
        chart_data=chart,
    )


@pytest.fixture
def companies() -> list[Company]:
    """A small mixed catalog."""
    return [
        make_company("c1", "BTC", "Bitcoin", "Cryptocurrency", "Digital gold", prices=["95", "100"]),
        make_company("c2", "NVX", "Novatech", "Technology", "Chips and accelerators"),
        make_company("c3", "USDX", "Dollar Token", "Stablecoin", "Pegged to the US dollar"),
        make_company("c4", "ETH", "Ethereum", "Cryptocurrency", "Smart contract platform"),
    ]


@pytest.fixture
def ui() -> RecordingInterface:
    return RecordingInterface()


@pytest.fixture
def backend() -> AsyncMock:
    """Mock BackendClient; tests set return values per call."""
    return AsyncMock(spec=BackendClient)


@pytest.fixture
def payment_configuration() -> PaymentConfiguration:
    return PaymentConfiguration(qr_code_image="data:image/png;base64,QR", payment_method=PaymentMethod.WALLET)


@pytest.fixture
def purchase_settings() -> PurchaseSettings:
    return PurchaseSettings()


@pytest.fixture
def workflow(
    backend: AsyncMock,
    ui: RecordingInterface,
    payment_configuration: PaymentConfiguration,
    purchase_settings: PurchaseSettings,
) -> PurchaseWorkflow:
    """Workflow with a valid wallet configuration."""
    return PurchaseWorkflow(
        backend,
        StaticConfigurationProvider(payment_configuration),
        ui,
        purchase_settings,
    )
