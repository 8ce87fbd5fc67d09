"""FastAPI application factory exposing the dashboard core as JSON."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from desk.server.routes import account, catalog, purchase


def create_app(components: dict[str, Any] | None = None, lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        components: Core components keyed by name (see main.build_components);
                    each one is stored on app.state for route handlers.
        lifespan: Optional async context manager for startup/shutdown.

    Returns:
        Configured FastAPI application with all routers registered.
    """
    app = FastAPI(title="Asset Marketplace Dashboard", lifespan=lifespan)

    for name, component in (components or {}).items():
        setattr(app.state, name, component)

    app.include_router(catalog.router, prefix="/api")
    app.include_router(purchase.router, prefix="/api")
    app.include_router(account.router, prefix="/api")

    return app
