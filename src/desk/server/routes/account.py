"""Dashboard and session endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from desk.dashboard.aggregator import DashboardAggregator
from desk.exceptions import WorkflowStateError
from desk.server.serializers import error_response, respond, workflow_view
from desk.session import Session

router = APIRouter()


@router.get("/dashboard")
async def get_dashboard(request: Request) -> JSONResponse:
    """Reload and return the dashboard snapshot (null with retry_available on failure)."""
    dashboard: DashboardAggregator = request.app.state.dashboard
    await dashboard.load()
    return respond(request, {
        "snapshot": dashboard.snapshot,
        "retry_available": dashboard.retry_available,
    })


@router.post("/dashboard/buy")
async def buy_coins(request: Request) -> JSONResponse:
    """Quick action: open the generic coin purchase from the dashboard."""
    dashboard: DashboardAggregator = request.app.state.dashboard
    try:
        outcome = await dashboard.buy_coins()
    except WorkflowStateError as e:
        return error_response(request, str(e), 409)
    return respond(request, {"outcome": outcome.value, **workflow_view(request.app.state.workflow)})


@router.post("/logout")
async def logout(request: Request) -> JSONResponse:
    session: Session = request.app.state.session
    logged_out = await session.logout()
    return respond(request, {"logged_out": logged_out})
