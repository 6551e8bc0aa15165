"""Core entity store interfaces and errors."""

import uuid
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..entities import ActorPayload, ActorRecord, MoviePayload, MovieRecord
from ..logging import get_logger

logger = get_logger(__name__)

RecordT = TypeVar("RecordT")
PayloadT = TypeVar("PayloadT")


class StoreError(Exception):
    """Base exception for store operations."""

    pass


class StoreUnavailable(StoreError):
    """The backing store could not be reached or the query failed."""

    pass


class DuplicateEntity(StoreError):
    """An entity with the same id already exists."""

    pass


def new_entity_id() -> str:
    """Generate an opaque, stable entity id."""
    return uuid.uuid4().hex


class EntityStore(ABC, Generic[RecordT, PayloadT]):
    """Abstract base class for all entity stores.

    In-memory and durable stores share this contract so resolvers never
    depend on the backend in use.
    """

    @abstractmethod
    async def find_all(self) -> Sequence[RecordT]:
        """Return every entity, in an order that is stable within one store.

        Raises:
            StoreUnavailable: On backend connectivity or query failure
        """
        pass

    @abstractmethod
    async def find_by_id(self, id: str) -> RecordT | None:
        """Return the entity with the given id, or None when there is none.

        Raises:
            StoreUnavailable: On backend connectivity or query failure
        """
        pass

    @abstractmethod
    async def create(self, payload: PayloadT) -> RecordT:
        """Persist a new entity built from the payload and return it.

        Raises:
            StoreUnavailable: On backend connectivity or query failure
            DuplicateEntity: When the backend rejects an id collision
        """
        pass


MovieStore = EntityStore[MovieRecord, MoviePayload]
ActorStore = EntityStore[ActorRecord, ActorPayload]


@dataclass
class Stores:
    """Stores for every entity kind, created once per process."""

    movies: MovieStore
    actors: ActorStore
    backend: str = "memory"


def build_movie_record(payload: MoviePayload) -> MovieRecord:
    """Build a movie record from a write payload, assigning an id if missing."""
    return MovieRecord(
        id=payload.id or new_entity_id(),
        title=payload.title,
        release_date=payload.release_date,
        rating=payload.rating,
        status=payload.status,
        actor=tuple(payload.actor),
    )


def build_actor_record(payload: ActorPayload) -> ActorRecord:
    """Build an actor record from a write payload, assigning an id if missing."""
    return ActorRecord(id=payload.id or new_entity_id(), name=payload.name)
