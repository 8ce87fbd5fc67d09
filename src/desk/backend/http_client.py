"""Marketplace backend client implementation via httpx async.

Every endpoint answers with a JSON envelope {"success": bool, "data": ..., "message": str}.
HTTP 401 maps to AuthorizationError; network failures, other non-2xx
responses, and unsuccessful envelopes map to TransportError.
"""

from typing import Any

import httpx

from desk.backend.client import BackendClient
from desk.backend.parsing import parse_chart_points, parse_companies, parse_dashboard
from desk.config import BackendSettings
from desk.exceptions import AuthorizationError, TransportError, ValidationError
from desk.logging import get_logger
from desk.models import ChartPoint, Company, DashboardSnapshot, DepositRequest, DepositResult, Period

logger = get_logger(__name__)


class HttpBackendClient(BackendClient):
    """Concrete backend client using httpx.AsyncClient.

    Args:
        settings: Base URL, bearer token, and timeout.
        transport: Optional httpx transport override (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        settings: BackendSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        token = settings.api_token.get_secret_value()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers=headers,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send a request and return the decoded envelope.

        Raises:
            AuthorizationError: the backend answered 401.
            TransportError: network error, other non-2xx status, or a non-JSON body.
        """
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("backend_request_failed", method=method, path=path, error=str(e))
            raise TransportError(f"Request to {path} failed: {e}") from e

        if response.status_code == 401:
            logger.warning("backend_unauthorized", method=method, path=path)
            raise AuthorizationError("Unauthorized")

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"success": True, "data": body}

        if response.is_error:
            message = body.get("message") or f"HTTP {response.status_code}"
            logger.warning(
                "backend_error_status",
                method=method,
                path=path,
                status=response.status_code,
                message=message,
            )
            raise TransportError(message)

        return body

    async def _get_data(self, path: str, **kwargs: Any) -> Any:
        """GET an endpoint and unwrap the envelope's data field.

        An unsuccessful envelope raises TransportError carrying the backend's
        message, or an empty message so callers can supply their own text.
        """
        body = await self._request("GET", path, **kwargs)
        if not body.get("success") or body.get("data") is None:
            message = body.get("message") or ""
            logger.warning("backend_unsuccessful_response", path=path, message=message)
            raise TransportError(message)
        return body["data"]

    async def list_companies(self) -> list[Company]:
        data = await self._get_data("/companies")
        try:
            companies = parse_companies(data)
        except ValidationError as e:
            raise TransportError(f"Malformed company listing: {e}") from e
        logger.debug("companies_fetched", count=len(companies))
        return companies

    async def get_company_chart(self, company_id: str, period: Period) -> list[ChartPoint]:
        data = await self._get_data(
            f"/companies/{company_id}/chart", params={"period": period.value}
        )
        if not isinstance(data, dict):
            raise TransportError(f"Malformed chart for {company_id}: expected an object")
        try:
            return parse_chart_points(data.get("chart"))
        except ValidationError as e:
            raise TransportError(f"Malformed chart for {company_id}: {e}") from e

    async def request_deposit(self, request: DepositRequest) -> DepositResult:
        logger.info(
            "requesting_deposit",
            amount=str(request.amount),
            payment_method=request.payment_method,
        )
        body = await self._request(
            "POST",
            "/transactions/deposit",
            json={
                "amount": float(request.amount),
                "paymentMethod": request.payment_method,
            },
        )
        return DepositResult(
            accepted=bool(body.get("success")),
            message=body.get("message"),
        )

    async def get_dashboard(self) -> DashboardSnapshot:
        data = await self._get_data("/dashboard")
        try:
            return parse_dashboard(data)
        except ValidationError as e:
            raise TransportError(f"Malformed dashboard: {e}") from e

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
        logger.info("backend_client_closed")
