"""
Main FastAPI application for the moviegraph service
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store.base import Stores

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


def create_app(stores: Stores | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        stores: Stores to serve; created from settings at startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting moviegraph API...")

        if stores is None:
            from ..store.factory import create_stores

            app.state.stores = await create_stores(settings)
        else:
            app.state.stores = stores
        logger.info("Stores ready", backend=app.state.stores.backend)

        yield

        logger.info("Shutting down moviegraph API...")
        if stores is None and app.state.stores.backend == "database":
            from ..database.connection import dispose_database

            await dispose_database()

    app = FastAPI(
        title="moviegraph API",
        description="GraphQL API over movies and actors",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    # Fail fast on a broken schema
    logger.info("Validating GraphQL schema...")
    validate_schema()

    app.include_router(create_graphql_router(), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


# Create the main application instance
app = create_app()
