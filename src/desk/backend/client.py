"""Abstract marketplace backend interface.

Defines the contract for all backend implementations. Catalog, chart,
workflow, and dashboard code depend only on this interface, keeping
transport and authentication details isolated in the concrete adapter.
"""

from abc import ABC, abstractmethod

from desk.models import ChartPoint, Company, DashboardSnapshot, DepositRequest, DepositResult, Period


class BackendClient(ABC):
    """Abstract base class for marketplace backend clients.

    Implementations raise AuthorizationError for an invalid session and
    TransportError for any other failed call.
    """

    @abstractmethod
    async def list_companies(self) -> list[Company]:
        """Fetch the full company catalog."""
        ...

    @abstractmethod
    async def get_company_chart(self, company_id: str, period: Period) -> list[ChartPoint]:
        """Fetch the price series of one company for a chart period."""
        ...

    @abstractmethod
    async def request_deposit(self, request: DepositRequest) -> DepositResult:
        """Submit a deposit request for admin approval.

        A business-level rejection is returned as DepositResult(accepted=False),
        not raised.
        """
        ...

    @abstractmethod
    async def get_dashboard(self) -> DashboardSnapshot:
        """Fetch balance, statistics, and recent transactions."""
        ...

    @abstractmethod
    async def logout(self) -> None:
        """End the current session on the backend."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...
