"""Tests for DashboardAggregator and the shared buy-coins action."""

from decimal import Decimal
from unittest.mock import AsyncMock

import httpx
import pytest

from desk.backend.http_client import HttpBackendClient
from desk.config import BackendSettings
from desk.dashboard.aggregator import MSG_DASHBOARD_FAILED, DashboardAggregator
from desk.exceptions import AuthorizationError, TransportError
from desk.models import DashboardSnapshot, DepositResult, Statistics
from desk.purchase.workflow import PurchaseWorkflow, WorkflowState
from desk.ui import LOGIN_PATH, NoticeLevel, RecordingInterface


def _snapshot(balance: str) -> DashboardSnapshot:
    return DashboardSnapshot(
        balance=Decimal(balance),
        wallet_id="W-001",
        name="Ada",
        statistics=Statistics(total_transactions=3),
    )


def _http_backend(handler) -> HttpBackendClient:  # type: ignore[no-untyped-def]
    return HttpBackendClient(
        BackendSettings(base_url="http://backend.test/api"),
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def aggregator(
    backend: AsyncMock, workflow: PurchaseWorkflow, ui: RecordingInterface
) -> DashboardAggregator:
    return DashboardAggregator(backend, workflow, ui)


class TestLoad:
    @pytest.mark.asyncio
    async def test_each_load_replaces_snapshot(
        self, aggregator: DashboardAggregator, backend: AsyncMock
    ) -> None:
        backend.get_dashboard.side_effect = [_snapshot("10"), _snapshot("20")]

        first = await aggregator.load()
        second = await aggregator.load()

        assert first.balance == Decimal("10")
        assert aggregator.snapshot is second
        assert aggregator.snapshot.balance == Decimal("20")
        assert aggregator.retry_available is False

    @pytest.mark.asyncio
    async def test_unauthorized_triggers_session_exit(
        self, aggregator: DashboardAggregator, backend: AsyncMock, ui: RecordingInterface
    ) -> None:
        backend.get_dashboard.side_effect = AuthorizationError("Unauthorized")

        assert await aggregator.load() is None

        assert ui.navigation == LOGIN_PATH
        assert ui.notices[-1].message == "Session expired. Please login again."
        assert aggregator.retry_available is False

    @pytest.mark.asyncio
    async def test_transport_failure_offers_retry(
        self, aggregator: DashboardAggregator, backend: AsyncMock, ui: RecordingInterface
    ) -> None:
        backend.get_dashboard.side_effect = TransportError("Service unavailable")

        assert await aggregator.load() is None

        assert aggregator.snapshot is None
        assert aggregator.retry_available is True
        assert ui.navigation is None
        assert ui.notices[-1].message == "Service unavailable"

    @pytest.mark.asyncio
    async def test_retry_after_failure_succeeds(
        self, aggregator: DashboardAggregator, backend: AsyncMock
    ) -> None:
        backend.get_dashboard.side_effect = [TransportError(""), _snapshot("5")]
        await aggregator.load()
        await aggregator.load()
        assert aggregator.snapshot.balance == Decimal("5")
        assert aggregator.retry_available is False


@pytest.mark.asyncio
async def test_buy_coins_reloads_dashboard_on_success(
    aggregator: DashboardAggregator, backend: AsyncMock, workflow: PurchaseWorkflow
) -> None:
    backend.get_dashboard.return_value = _snapshot("100")
    backend.request_deposit.return_value = DepositResult(accepted=True)

    assert await aggregator.buy_coins() is WorkflowState.AMOUNT_ENTRY
    assert workflow.company is None
    workflow.set_amount("40")
    await workflow.submit()

    backend.get_dashboard.assert_awaited_once()
    assert aggregator.snapshot.balance == Decimal("100")


class TestMalformedDashboard:
    @pytest.mark.asyncio
    async def test_bad_statistics_offers_retry(
        self, workflow: PurchaseWorkflow, ui: RecordingInterface
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": {"statistics": "n/a"}})

        aggregator = DashboardAggregator(_http_backend(handler), workflow, ui)

        assert await aggregator.load() is None
        assert aggregator.retry_available is True
        assert ui.notices[-1].level is NoticeLevel.ERROR

    @pytest.mark.asyncio
    async def test_blank_unsuccessful_envelope_uses_default_notice(
        self, workflow: PurchaseWorkflow, ui: RecordingInterface
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False})

        aggregator = DashboardAggregator(_http_backend(handler), workflow, ui)
        await aggregator.load()

        assert ui.notices[-1].message == MSG_DASHBOARD_FAILED
        assert aggregator.retry_available is True


@pytest.mark.asyncio
async def test_reset_drops_snapshot(aggregator: DashboardAggregator, backend: AsyncMock) -> None:
    backend.get_dashboard.return_value = _snapshot("1")
    await aggregator.load()
    aggregator.reset()
    assert aggregator.snapshot is None
    assert aggregator.retry_available is False
