"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zenager.api.dependencies import close_board_service, init_board_service
from zenager.api.models import APIResponse
from zenager.api.routes import columns, credentials, issues, sources, sync
from zenager.board import (
    ColumnExistsError,
    ColumnNotFoundError,
    InvalidColumnOrderError,
    IssueNotFoundError,
)
from zenager.config import get_settings
from zenager.registry import ConfigurationError, SourceExistsError, SourceNotFoundError
from zenager.service import BoardService
from zenager.state_store import StateStore, StateStoreError
from zenager.sync import SyncInProgressError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from zenager.config import Settings


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings: Settings = app.state.settings or get_settings()
    store = StateStore(settings.db_path)
    init_board_service(BoardService.load(store, settings))

    yield
    # Shutdown
    close_board_service()


def register_exception_handlers(app: FastAPI) -> None:
    """Map core errors onto HTTP status codes."""

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        _request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(SourceNotFoundError)
    async def source_not_found_handler(
        _request: Request, _exc: SourceNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Source not found")

    @app.exception_handler(SourceExistsError)
    async def source_exists_handler(_request: Request, _exc: SourceExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Source already exists")

    @app.exception_handler(ColumnNotFoundError)
    async def column_not_found_handler(
        _request: Request, _exc: ColumnNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Column not found")

    @app.exception_handler(ColumnExistsError)
    async def column_exists_handler(_request: Request, _exc: ColumnExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Column with this id already exists")

    @app.exception_handler(IssueNotFoundError)
    async def issue_not_found_handler(_request: Request, _exc: IssueNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Issue not found")

    @app.exception_handler(InvalidColumnOrderError)
    async def invalid_order_handler(
        _request: Request, exc: InvalidColumnOrderError
    ) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(SyncInProgressError)
    async def sync_in_progress_handler(
        _request: Request, _exc: SyncInProgressError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "A sync is already running")

    @app.exception_handler(StateStoreError)
    async def state_store_error_handler(_request: Request, _exc: StateStoreError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Zenager API",
        description="REST API for Zenager - Kanban board for GitHub and GitLab issues",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(columns.router, prefix="/api/v1")
    app.include_router(issues.router, prefix="/api/v1")
    app.include_router(sources.router, prefix="/api/v1")
    app.include_router(credentials.router, prefix="/api/v1")
    app.include_router(sync.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
