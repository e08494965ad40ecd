"""FastAPI application for the LandScore parcel viewer backend.

Provides the parcel map/search/statistics API, the assistant tool
endpoints and a health check.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from landscore import __version__
from landscore.assistant.tools import ParcelToolDispatcher
from landscore.auth.middleware import AuthMiddleware
from landscore.auth.provider import FixtureRoleProvider, RoleProvider
from landscore.core.config import Settings
from landscore.db.engine import DatabaseManager
from landscore.query.engine import ParcelQueryEngine
from landscore.repositories.postgres.parcels import (
    PostgresParcelRepository,
    PostgresQueryStore,
)
from landscore.web.assistant_router import router as assistant_router
from landscore.web.parcel_router import router as parcel_router

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    service: str
    version: str = __version__
    query_engine: bool = False


def create_app(
    settings: Settings | None = None,
    query_engine: ParcelQueryEngine | None = None,
    role_provider: RoleProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with mock dependencies.

    Args:
        settings: Application settings. Defaults to Settings().
        query_engine: Optional pre-built engine. When omitted and a database
            URL is configured, one is built on a ``DatabaseManager``.
        role_provider: Optional pre-built role provider.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("landscore").setLevel(settings.log_level.upper())

    db_manager: DatabaseManager | None = None
    if query_engine is None and settings.db.database_url:
        db_manager = DatabaseManager.from_config(settings.db)
        query_engine = ParcelQueryEngine(
            store=PostgresQueryStore(db_manager),
            repository=PostgresParcelRepository(db_manager),
            config=settings.query,
        )
    elif query_engine is None:
        logger.warning("No database URL configured; parcel endpoints will return 503")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if db_manager is not None:
            await db_manager.close()

    app = FastAPI(
        title="LandScore Parcel API",
        description="Parcel map, search and statistics queries",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if role_provider is None:
        role_provider = FixtureRoleProvider(fixtures_path=settings.auth.fixtures_path)

    # Store on app state for access in route handlers
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.query_engine = query_engine
    app.state.tool_dispatcher = (
        ParcelToolDispatcher(query_engine) if query_engine is not None else None
    )
    app.state.role_provider = role_provider

    app.add_middleware(AuthMiddleware)

    app.include_router(parcel_router)
    app.include_router(assistant_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            service="landscore-parcel-api",
            query_engine=app.state.query_engine is not None,
        )

    return app
