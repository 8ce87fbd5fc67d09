"""Catalog, favorites, and chart endpoints for the companies page."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from desk.catalog.favorites import FavoritesStore, ToggleResult
from desk.catalog.filter import ALL_CATEGORIES, CATEGORIES
from desk.catalog.service import CatalogService
from desk.charts.controller import ChartPeriodController
from desk.exceptions import ValidationError
from desk.server.serializers import company_card, company_detail, error_response, respond

log = structlog.get_logger(__name__)

router = APIRouter()


def _chart_view(charts: ChartPeriodController) -> dict:
    series = charts.series
    return {
        "company_id": charts.selected_company.id if charts.selected_company else None,
        "period": charts.selected_period.value,
        "points": series.points if series else [],
        "is_fallback": series.is_fallback if series else False,
        "error": str(charts.last_error) if charts.last_error else None,
    }


@router.get("/companies")
async def list_companies(
    request: Request, q: str = "", category: str = ALL_CATEGORIES
) -> JSONResponse:
    """Filtered company cards. Loads the catalog on first use."""
    catalog: CatalogService = request.app.state.catalog
    favorites: FavoritesStore = request.app.state.favorites

    if not catalog.loaded:
        await catalog.refresh()

    cards = [company_card(c, favorites) for c in catalog.visible(q, category)]
    return respond(request, {
        "categories": list(CATEGORIES),
        "companies": cards,
        "retry_available": catalog.retry_available,
    })


@router.post("/companies/refresh")
async def refresh_companies(request: Request) -> JSONResponse:
    catalog: CatalogService = request.app.state.catalog
    refreshed = await catalog.refresh()
    return respond(request, {"refreshed": refreshed, "count": len(catalog.companies)})


@router.post("/favorites/{company_id}")
async def toggle_favorite(request: Request, company_id: str) -> JSONResponse:
    favorites: FavoritesStore = request.app.state.favorites
    result = favorites.toggle(company_id)
    if result is ToggleResult.ADDED:
        request.app.state.ui.success("Added to favorites")
    else:
        request.app.state.ui.success("Removed from favorites")
    log.debug("favorite_toggled", company_id=company_id, result=result.value)
    return respond(request, {"company_id": company_id, "result": result.value})


@router.post("/companies/{company_id}/open")
async def open_company(request: Request, company_id: str) -> JSONResponse:
    """Open the detail view and load the chart for the selected period."""
    catalog: CatalogService = request.app.state.catalog
    charts: ChartPeriodController = request.app.state.charts
    favorites: FavoritesStore = request.app.state.favorites

    company = catalog.get(company_id)
    if company is None:
        return error_response(request, f"Unknown company: {company_id}", 404)

    await charts.select_company(company)
    return respond(request, {
        "company": company_detail(company, favorites),
        "chart": _chart_view(charts),
    })


@router.post("/chart/period")
async def select_period(request: Request) -> JSONResponse:
    charts: ChartPeriodController = request.app.state.charts
    try:
        body = await request.json()
    except Exception:
        return error_response(request, "Invalid JSON body", 400)

    period = body.get("period") if isinstance(body, dict) else None
    if not period:
        return error_response(request, "Missing required field: period", 400)

    try:
        await charts.select_period(period)
    except ValidationError as e:
        return error_response(request, str(e), 400)
    return respond(request, _chart_view(charts))


@router.get("/chart")
async def get_chart(request: Request) -> JSONResponse:
    return respond(request, _chart_view(request.app.state.charts))


@router.post("/chart/close")
async def close_chart(request: Request) -> JSONResponse:
    charts: ChartPeriodController = request.app.state.charts
    charts.close()
    return respond(request, _chart_view(charts))
