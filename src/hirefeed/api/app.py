"""FastAPI application with lifespan, dependency wiring and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hirefeed.api.routes import batches, errors, health, mappings, records
from hirefeed.core.config import AppSettings
from hirefeed.core.exceptions import (
    CorrectionTargetError,
    HireFeedError,
    MappingError,
    StorageError,
    UnknownErrorIdError,
    UnknownProviderError,
)
from hirefeed.core.logging_setup import configure_logging
from hirefeed.core.protocols import IKeyValueStore
from hirefeed.ledger.error_ledger import ErrorLedger
from hirefeed.persistence import create_persistence
from hirefeed.persistence.mapping_store import MappingRepository

_STATUS_BY_ERROR: list[tuple[type[HireFeedError], int]] = [
    (UnknownProviderError, 404),
    (UnknownErrorIdError, 404),
    (CorrectionTargetError, 422),
    (MappingError, 422),
    (StorageError, 503),
]


async def hirefeed_error_handler(request: Request, exc: HireFeedError) -> JSONResponse:
    status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 400)
    return JSONResponse(status_code=status, content={"detail": str(exc), "error": type(exc).__name__})


def create_app(settings: AppSettings | None = None, store: IKeyValueStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend chosen by ``settings.storage.backend``.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        app_settings = settings or AppSettings()
        configure_logging(app_settings.log_level)
        kv_store = store if store is not None else create_persistence(app_settings)
        app.state.settings = app_settings
        app.state.store = kv_store
        app.state.mappings = MappingRepository(kv_store)
        app.state.ledger = ErrorLedger(kv_store if app_settings.storage.persist_ledger else None)
        yield

    app = FastAPI(
        title="HireFeed New-Hire Payroll Pipeline",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(HireFeedError, hirefeed_error_handler)
    app.include_router(health.router)
    app.include_router(batches.router, prefix="/batches")
    app.include_router(records.router, prefix="/records")
    app.include_router(mappings.router)
    app.include_router(errors.router, prefix="/errors")
    return app
