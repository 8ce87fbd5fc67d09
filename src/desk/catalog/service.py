"""Catalog service -- the company list snapshot behind the companies page.

Loads the catalog from the backend, replaces it wholesale on every
successful refresh, and is the entry point for buying a listed company.
"""

from desk.backend.client import BackendClient
from desk.catalog.filter import ALL_CATEGORIES, filter_companies
from desk.exceptions import AuthorizationError, TransportError
from desk.logging import get_logger
from desk.models import Company
from desk.purchase.workflow import PurchaseWorkflow, WorkflowState
from desk.session import expire_session
from desk.ui import UserInterface

logger = get_logger(__name__)


class CatalogService:
    """Company list snapshot with refresh, lookup, filtering, and buy entry."""

    def __init__(
        self,
        backend: BackendClient,
        workflow: PurchaseWorkflow,
        ui: UserInterface,
    ) -> None:
        self._backend = backend
        self._workflow = workflow
        self._ui = ui
        self._companies: list[Company] = []
        self._loaded = False
        self._retry_available = False

    @property
    def companies(self) -> list[Company]:
        return list(self._companies)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def retry_available(self) -> bool:
        """True after a failed refresh until the next successful one."""
        return self._retry_available

    async def refresh(self) -> bool:
        """Reload the catalog. Keeps the previous snapshot on failure.

        Returns:
            True if a fresh snapshot was applied.
        """
        try:
            companies = await self._backend.list_companies()
        except AuthorizationError:
            expire_session(self._ui)
            return False
        except TransportError as e:
            logger.warning("catalog_refresh_failed", error=str(e))
            self._ui.error("Failed to load companies")
            self._retry_available = True
            return False

        self._companies = companies
        self._loaded = True
        self._retry_available = False
        logger.info("catalog_refreshed", count=len(companies))
        return True

    def reset(self) -> None:
        """Drop the snapshot; the next listing loads it again."""
        self._companies = []
        self._loaded = False
        self._retry_available = False

    def get(self, company_id: str) -> Company | None:
        for company in self._companies:
            if company.id == company_id:
                return company
        return None

    def visible(self, query: str = "", category: str = ALL_CATEGORIES) -> list[Company]:
        """Companies matching the search query and category, in catalog order."""
        return filter_companies(self._companies, query, category)

    async def buy(self, company: Company) -> WorkflowState:
        """Start the purchase workflow; a successful deposit refreshes the catalog."""
        return await self._workflow.open(company, on_success=self.refresh)
