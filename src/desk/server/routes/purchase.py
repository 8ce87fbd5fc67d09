"""Buy/deposit dialog endpoints driving the purchase workflow."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from desk.catalog.service import CatalogService
from desk.dashboard.aggregator import DashboardAggregator
from desk.exceptions import WorkflowStateError
from desk.purchase.workflow import PurchaseWorkflow
from desk.server.serializers import error_response, respond, workflow_view

log = structlog.get_logger(__name__)

router = APIRouter()


async def _json_body(request: Request) -> dict | None:
    try:
        body = await request.json()
    except Exception:
        return None
    return body if isinstance(body, dict) else None


@router.get("/purchase")
async def get_purchase(request: Request) -> JSONResponse:
    return respond(request, workflow_view(request.app.state.workflow))


@router.post("/purchase/open")
async def open_purchase(request: Request) -> JSONResponse:
    """Start buying a company ({"company_id": ...}) or generic coins (empty body)."""
    workflow: PurchaseWorkflow = request.app.state.workflow
    catalog: CatalogService = request.app.state.catalog
    dashboard: DashboardAggregator = request.app.state.dashboard

    body = await _json_body(request) or {}
    company_id = body.get("company_id")

    try:
        if company_id:
            company = catalog.get(company_id)
            if company is None:
                return error_response(request, f"Unknown company: {company_id}", 404)
            await catalog.buy(company)
        else:
            await dashboard.buy_coins()
    except WorkflowStateError as e:
        return error_response(request, str(e), 409)

    return respond(request, workflow_view(workflow))


@router.post("/purchase/amount")
async def set_amount(request: Request) -> JSONResponse:
    workflow: PurchaseWorkflow = request.app.state.workflow
    body = await _json_body(request)
    if body is None:
        return error_response(request, "Invalid JSON body", 400)
    if "amount" not in body:
        return error_response(request, "Missing required field: amount", 400)

    try:
        workflow.set_amount(str(body["amount"]))
    except WorkflowStateError as e:
        return error_response(request, str(e), 409)
    return respond(request, workflow_view(workflow))


@router.post("/purchase/submit")
async def submit_purchase(request: Request) -> JSONResponse:
    workflow: PurchaseWorkflow = request.app.state.workflow
    try:
        outcome = await workflow.submit()
    except WorkflowStateError as e:
        return error_response(request, str(e), 409)
    log.info("purchase_submit_handled", outcome=outcome.value)
    return respond(request, {"outcome": outcome.value, **workflow_view(workflow)})


@router.post("/purchase/cancel")
async def cancel_purchase(request: Request) -> JSONResponse:
    workflow: PurchaseWorkflow = request.app.state.workflow
    try:
        workflow.cancel()
    except WorkflowStateError as e:
        return error_response(request, str(e), 409)
    return respond(request, workflow_view(workflow))
