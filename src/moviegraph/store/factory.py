"""Factory for creating entity stores."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import Settings
from ..logging import get_logger
from .base import Stores
from .memory import InMemoryActorStore, InMemoryMovieStore
from .seed_data import seed_stores
from .sql import SqlActorStore, SqlMovieStore

logger = get_logger(__name__)

STORE_BACKENDS = ("memory", "database")


def create_memory_stores() -> Stores:
    """Create empty in-memory stores."""
    return Stores(movies=InMemoryMovieStore(), actors=InMemoryActorStore(), backend="memory")


def create_database_stores(session_factory: async_sessionmaker[AsyncSession]) -> Stores:
    """Create durable stores bound to an already-established session factory."""
    return Stores(
        movies=SqlMovieStore(session_factory),
        actors=SqlActorStore(session_factory),
        backend="database",
    )


async def create_stores(settings: Settings) -> Stores:
    """Create the stores selected by configuration.

    Args:
        settings: Application settings; ``store_backend`` picks the variant

    Returns:
        Stores, seeded when ``seed_on_startup`` is set

    Raises:
        ValueError: If the configured backend is unknown
    """
    backend = settings.store_backend.lower()
    if backend == "memory":
        stores = create_memory_stores()
    elif backend == "database":
        from ..database.connection import get_session_factory, init_database

        init_database()
        stores = create_database_stores(get_session_factory())
    else:
        raise ValueError(
            f"Unknown store backend '{settings.store_backend}'. "
            f"Expected one of: {', '.join(STORE_BACKENDS)}"
        )

    logger.info("Stores created", backend=stores.backend)

    if settings.seed_on_startup:
        await seed_stores(stores)

    return stores
