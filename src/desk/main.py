"""Entry point for the marketplace dashboard service.

Wires all components together and serves the JSON surface with uvicorn.
Backend client and settings database share the server's event loop and
are opened/closed by the FastAPI lifespan.

Component wiring order (in build_components):
1. UI collaborator (RecordingInterface)
2. Backend client (HttpBackendClient)
3. Settings database + payment configuration provider
4. Purchase workflow (shared by catalog and dashboard)
5. Catalog service, favorites store, chart period controller
6. Dashboard aggregator
7. Session
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from desk.backend.client import BackendClient
from desk.backend.http_client import HttpBackendClient
from desk.catalog.favorites import FavoritesStore
from desk.catalog.service import CatalogService
from desk.charts.controller import ChartPeriodController
from desk.config import AppSettings
from desk.dashboard.aggregator import DashboardAggregator
from desk.logging import get_logger, setup_logging
from desk.purchase.provider import ConfigurationProvider, SqliteConfigurationProvider
from desk.purchase.workflow import PurchaseWorkflow
from desk.server.app import create_app
from desk.session import Session
from desk.storage.database import SettingsDatabase
from desk.ui import RecordingInterface


def build_components(
    settings: AppSettings,
    backend: BackendClient | None = None,
    provider: ConfigurationProvider | None = None,
) -> dict[str, Any]:
    """Build the component graph from settings.

    Does NOT open the settings database or any connection; the lifespan
    does that. backend and provider may be injected (tests, embedding).

    Returns:
        Dict mapping component names to instances.
    """
    ui = RecordingInterface()

    if backend is None:
        backend = HttpBackendClient(settings.backend)

    database: SettingsDatabase | None = None
    if provider is None:
        database = SettingsDatabase(settings.storage.db_path)
        provider = SqliteConfigurationProvider(database, settings.storage.settings_key)

    workflow = PurchaseWorkflow(backend, provider, ui, settings.purchase)
    catalog = CatalogService(backend, workflow, ui)
    favorites = FavoritesStore()
    charts = ChartPeriodController(backend, settings.chart.default_period)
    dashboard = DashboardAggregator(backend, workflow, ui)

    return {
        "ui": ui,
        "backend": backend,
        "database": database,
        "provider": provider,
        "workflow": workflow,
        "catalog": catalog,
        "favorites": favorites,
        "charts": charts,
        "dashboard": dashboard,
        "session": Session(backend, ui, [workflow, charts, favorites, catalog, dashboard]),
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the settings database on startup; close it and the backend client on shutdown."""
    logger = get_logger("desk.main")

    database: SettingsDatabase | None = app.state.database
    if database is not None:
        await database.connect()
    logger.info("lifespan_started")

    yield

    await app.state.backend.close()
    if database is not None:
        await database.close()
    logger.info("dashboard_service_stopped")


async def run() -> None:
    """Load settings, configure logging, and serve until interrupted."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("desk.main")

    app = create_app(build_components(settings), lifespan=lifespan)

    logger.info(
        "starting_dashboard_service",
        host=settings.server.host,
        port=settings.server.port,
        backend=settings.backend.base_url,
    )

    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
