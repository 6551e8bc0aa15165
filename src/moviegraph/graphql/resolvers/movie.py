from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import strawberry

from ...entities import ActorRef, MoviePayload, MovieRecord
from ...logging import get_logger
from ...store.base import StoreError
from ..access_control import can_write, get_operation_context, get_stores

if TYPE_CHECKING:
    from ..mutations.root import MovieInput
    from ..types.movie import Movie

logger = get_logger(__name__)


def movie_from_record(record: MovieRecord) -> Movie:
    """Convert a store record to the GraphQL type."""
    from ..types.movie import Movie as MovieType

    return MovieType(
        id=strawberry.ID(record.id),
        title=record.title,
        release_date=record.release_date,
        rating=record.rating,
        status=record.status,
        actor_ids=tuple(record.actor_ids),
    )


def movies_from_records(records: Sequence[MovieRecord]) -> list[Movie]:
    return [movie_from_record(record) for record in records]


def payload_from_input(movie_input: MovieInput) -> MoviePayload:
    """Convert mutation input to a store payload. Actor sub-objects carry ids only."""
    return MoviePayload(
        id=str(movie_input.id) if movie_input.id else None,
        title=movie_input.title,
        release_date=movie_input.release_date,
        rating=movie_input.rating,
        status=movie_input.status,
        actor=tuple(ActorRef(id=str(ref.id)) for ref in movie_input.actor or []),
    )


# Query resolvers
async def resolve_movies(info: strawberry.Info) -> list[Movie]:
    """
    Resolve all movies.

    A store failure yields an empty list rather than failing the operation.
    """
    stores = get_stores(info)
    try:
        records = await stores.movies.find_all()
    except StoreError as e:
        logger.error("Failed to load movies", error=str(e))
        return []

    return movies_from_records(records)


async def resolve_movie_by_id(info: strawberry.Info, id: str) -> Movie | None:
    """
    Resolve a movie by its ID.

    Returns None when no movie has the id or the store is unavailable.
    """
    stores = get_stores(info)
    try:
        record = await stores.movies.find_by_id(id)
    except StoreError as e:
        logger.error("Failed to load movie", movie_id=id, error=str(e))
        return None

    if record is None:
        logger.info("Movie not found", movie_id=id)
        return None

    return movie_from_record(record)


# Mutation resolvers
async def add_movie(info: strawberry.Info, movie_input: MovieInput) -> list[Movie]:
    """
    Add a movie and return the full movie collection.

    Callers without write access get the unchanged collection back. Store
    failures during the write or the refresh yield an empty list.
    """
    context = get_operation_context(info)
    stores = get_stores(info)

    if not can_write(context):
        try:
            return movies_from_records(await stores.movies.find_all())
        except StoreError as e:
            logger.error("Failed to load movies", error=str(e))
            return []

    try:
        created = await stores.movies.create(payload_from_input(movie_input))
        records = await stores.movies.find_all()
    except StoreError as e:
        logger.error("Failed to add movie", error=str(e))
        return []

    logger.info("Movie added", movie_id=created.id, total=len(records))
    return movies_from_records(records)
