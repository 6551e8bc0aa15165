#!/usr/bin/env python3
"""
Main CLI entry point for the moviegraph server.
"""

import asyncio
import json
import os
import sys
from pathlib import Path

import click
import uvicorn

from moviegraph import __version__
from moviegraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="moviegraph")
def cli() -> None:
    """moviegraph CLI - serve, query, and seed the movie graph."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option(
    "--port",
    default=lambda: int(os.environ.get("PORT", 4000)),
    type=int,
    help="Port to bind to (default: $PORT or 4000)",
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the GraphQL API server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info("Starting moviegraph API server", host=host, port=port, reload=reload)

    # The app module reads settings at import time
    if log_level == "debug":
        os.environ["MOVIEGRAPH_DEBUG"] = "true"
    os.environ.setdefault("MOVIEGRAPH_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "moviegraph.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
@click.argument("document")
@click.option("--variables", default=None, help="Operation variables as a JSON object")
@click.option("--operation-name", default=None, help="Operation to run from the document")
@click.option("--user", "caller_id", default=None, help="Caller identity for the operation")
def query(
    document: str,
    variables: str | None,
    operation_name: str | None,
    caller_id: str | None,
) -> None:
    """Run one GraphQL operation against the configured store and print the result."""
    from moviegraph.config import settings
    from moviegraph.graphql.context import build_context
    from moviegraph.graphql.schema import execute_operation, result_to_dict
    from moviegraph.store.factory import create_stores

    # Only the JSON response goes to stdout
    configure_logging(debug=False, log_level="critical")

    if document.startswith("@"):
        document = Path(document[1:]).read_text()

    try:
        parsed_variables = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--variables") from e

    async def do_query():
        stores = await create_stores(settings)
        context = build_context(stores, caller_id=caller_id)
        result = await execute_operation(
            document, context, variables=parsed_variables, operation_name=operation_name
        )
        return result_to_dict(result)

    response = asyncio.run(do_query())
    click.echo(json.dumps(response, indent=2, default=str))
    if response.get("data") is None:
        sys.exit(1)


@cli.command()
@click.option(
    "--create-tables",
    is_flag=True,
    default=False,
    help="Create tables from the ORM models before seeding (database backend, development only)",
)
def seed(create_tables: bool) -> None:
    """Load the seed movies and actors into the configured store."""
    from moviegraph.config import settings
    from moviegraph.database.connection import check_database_connection, dispose_database
    from moviegraph.database.connection import create_tables as do_create_tables
    from moviegraph.store.factory import create_stores
    from moviegraph.store.seed_data import seed_stores

    configure_logging(log_level=settings.log_level)

    async def do_seed():
        stores = await create_stores(settings.model_copy(update={"seed_on_startup": False}))
        if stores.backend != "database":
            logger.warning("Seeding a non-durable store", backend=stores.backend)
            return await seed_stores(stores)

        try:
            ok, error = await check_database_connection()
            if not ok:
                raise click.ClickException(error or "Database unreachable")
            if create_tables:
                await do_create_tables()
            return await seed_stores(stores)
        finally:
            await dispose_database()

    try:
        created = asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed store", backend=settings.store_backend, error=str(e))
        click.echo(f"✗ Error seeding store: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Seeded {created['movies']} movie(s) and {created['actors']} actor(s)")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
