"""JSON rendering of domain records for the HTTP surface.

Decimals are rendered as strings to keep full precision on the wire.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from desk.analytics.market import change_24h, daily_growth_percent, format_market_cap, price_range
from desk.catalog.favorites import FavoritesStore
from desk.exceptions import ValidationError
from desk.models import Company
from desk.purchase.workflow import PurchaseWorkflow
from desk.ui import RecordingInterface


def to_jsonable(obj: Any) -> Any:
    """Recursively convert dataclasses, Decimals, enums, and tuples to JSON types."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    return obj


def company_card(company: Company, favorites: FavoritesStore) -> dict:
    """List-view summary of a company with derived analytics."""
    try:
        change: str | None = str(change_24h(company).quantize(Decimal("0.01")))
    except ValidationError:
        change = None
    try:
        band = price_range(company)
        range_: dict | None = {"min": str(band.min), "max": str(band.max)}
    except ValidationError:
        range_ = None
    try:
        market_cap: str | None = format_market_cap(company.market_cap)
    except ValueError:
        market_cap = None

    return {
        "id": company.id,
        "symbol": company.symbol,
        "name": company.name,
        "logo": company.logo,
        "category": company.category,
        "current_price": str(company.current_price) if company.current_price is not None else None,
        "change_24h": change,
        "price_range": range_,
        "market_cap": market_cap,
        "favorite": company.id in favorites,
    }


def company_detail(company: Company, favorites: FavoritesStore) -> dict:
    """Detail-view record: the card plus supply and growth figures."""
    return {
        **company_card(company, favorites),
        "description": company.description,
        "starting_price": str(company.starting_price),
        "daily_growth_percent": str(daily_growth_percent(company)),
        "total_supply": str(company.total_supply),
        "circulating_supply": str(company.circulating_supply),
    }


def workflow_view(workflow: PurchaseWorkflow) -> dict:
    """Current purchase dialog state."""
    configuration = workflow.configuration
    company = workflow.company
    return {
        "state": workflow.state.value,
        "last_outcome": workflow.last_outcome.value if workflow.last_outcome else None,
        "company_id": company.id if company else None,
        "qr_code_image": configuration.qr_code_image if configuration else None,
        "payment_method": configuration.payment_method.value if configuration else None,
        "intent": to_jsonable(workflow.intent) if workflow.intent else None,
        "coin_rate": str(workflow.coin_rate),
        "can_submit": workflow.can_submit,
    }


def respond(request: Request, data: Any, status_code: int = 200) -> JSONResponse:
    """Wrap data with the notices and navigation produced while handling the request."""
    ui: RecordingInterface = request.app.state.ui
    notices, navigation = ui.drain()
    return JSONResponse(
        content={
            "data": to_jsonable(data),
            "notices": to_jsonable(notices),
            "navigate": navigation,
        },
        status_code=status_code,
    )


def error_response(request: Request, message: str, status_code: int) -> JSONResponse:
    ui: RecordingInterface = request.app.state.ui
    notices, navigation = ui.drain()
    return JSONResponse(
        content={
            "error": message,
            "notices": to_jsonable(notices),
            "navigate": navigation,
        },
        status_code=status_code,
    )
