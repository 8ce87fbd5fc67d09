"""Dashboard aggregator -- balance, lifetime statistics, and recent transactions.

Each load() replaces the snapshot wholesale; there is no incremental merge.
Shares the purchase workflow for the "buy coins" quick action.
"""

from desk.backend.client import BackendClient
from desk.exceptions import AuthorizationError, TransportError
from desk.logging import get_logger
from desk.models import DashboardSnapshot
from desk.purchase.workflow import PurchaseWorkflow, WorkflowState
from desk.session import expire_session
from desk.ui import UserInterface

logger = get_logger(__name__)

MSG_DASHBOARD_FAILED = "Failed to load dashboard data"


class DashboardAggregator:
    """Loads and holds the account dashboard snapshot."""

    def __init__(
        self,
        backend: BackendClient,
        workflow: PurchaseWorkflow,
        ui: UserInterface,
    ) -> None:
        self._backend = backend
        self._workflow = workflow
        self._ui = ui
        self._snapshot: DashboardSnapshot | None = None
        self._retry_available = False

    @property
    def snapshot(self) -> DashboardSnapshot | None:
        return self._snapshot

    @property
    def retry_available(self) -> bool:
        """True after a failed load until the next successful one."""
        return self._retry_available

    async def load(self) -> DashboardSnapshot | None:
        """Fetch the dashboard. Safe to call repeatedly.

        An unauthorized session triggers the session-expired redirect; any
        other failure leaves the previous snapshot in place and offers a retry.
        """
        try:
            snapshot = await self._backend.get_dashboard()
        except AuthorizationError:
            expire_session(self._ui)
            return None
        except TransportError as e:
            logger.warning("dashboard_load_failed", error=str(e))
            self._ui.error(str(e) or MSG_DASHBOARD_FAILED)
            self._retry_available = True
            return None

        self._snapshot = snapshot
        self._retry_available = False
        logger.info(
            "dashboard_loaded",
            wallet_id=snapshot.wallet_id,
            transactions=len(snapshot.recent_transactions),
        )
        return snapshot

    def reset(self) -> None:
        self._snapshot = None
        self._retry_available = False

    async def buy_coins(self) -> WorkflowState:
        """Start the generic coin purchase; a successful deposit reloads the dashboard."""
        return await self._workflow.open(on_success=self.load)
