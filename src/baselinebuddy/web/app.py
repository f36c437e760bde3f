"""FastAPI application factory for the Baseline Buddy HTTP API."""

from __future__ import annotations

from fastapi import FastAPI

from baselinebuddy import __version__
from baselinebuddy.config import BaselineConfig
from baselinebuddy.fixes.engine import AutoFixEngine
from baselinebuddy.registry.registry import load_default_registry
from baselinebuddy.scanner.engine import ScanEngine


def create_app(
    config: BaselineConfig | None = None,
    engine: ScanEngine | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config or BaselineConfig.load()

    app = FastAPI(
        title="Baseline Buddy",
        version=__version__,
        docs_url="/api/docs",
    )

    # Shared read-only collaborators
    app.state.config = config
    app.state.registry = engine.registry if engine else load_default_registry()
    app.state.engine = engine or ScanEngine()
    app.state.fix_engine = app.state.engine.fix_engine

    # Register API routers
    from baselinebuddy.web.api.analysis import router as analysis_router
    from baselinebuddy.web.api.features import router as features_router
    from baselinebuddy.web.api.fixes import router as fixes_router
    from baselinebuddy.web.api.health import router as health_router

    app.include_router(features_router, prefix="/api")
    app.include_router(analysis_router, prefix="/api")
    app.include_router(fixes_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    return app
