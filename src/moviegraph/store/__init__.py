"""Entity stores for moviegraph.

Main components:
- EntityStore: Abstract base class shared by every store variant
- InMemoryMovieStore / InMemoryActorStore: Process-local stores
- SqlMovieStore / SqlActorStore: SQLAlchemy-backed durable stores
- Stores: Per-process container handed to the GraphQL layer
"""

from .base import (
    ActorStore,
    DuplicateEntity,
    EntityStore,
    MovieStore,
    StoreError,
    Stores,
    StoreUnavailable,
)
from .factory import create_database_stores, create_memory_stores, create_stores
from .memory import InMemoryActorStore, InMemoryMovieStore, InMemoryStore
from .seed_data import seed_stores
from .sql import SqlActorStore, SqlMovieStore

__all__ = [
    # Base classes and exceptions
    "EntityStore",
    "MovieStore",
    "ActorStore",
    "Stores",
    "StoreError",
    "StoreUnavailable",
    "DuplicateEntity",
    # Implementations
    "InMemoryStore",
    "InMemoryMovieStore",
    "InMemoryActorStore",
    "SqlMovieStore",
    "SqlActorStore",
    # Factory functions
    "create_stores",
    "create_memory_stores",
    "create_database_stores",
    "seed_stores",
]
