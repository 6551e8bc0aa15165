from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import strawberry

from ...entities import ActorRecord
from ...logging import get_logger
from ...store.base import ActorStore, StoreError
from ..access_control import get_loaders

if TYPE_CHECKING:
    from ..types.actor import Actor
    from ..types.movie import Movie

logger = get_logger(__name__)


class ReferencesActors(Protocol):
    @property
    def actor_ids(self) -> Sequence[str]: ...


def join_actors(actor_ids: Sequence[str], actors: Sequence[ActorRecord]) -> list[ActorRecord]:
    """
    Join actor references to the actors of a store.

    Output follows actor-store order, not reference order. Each actor appears
    at most once and references without a matching actor are dropped.
    """
    wanted = set(actor_ids)
    seen: set[str] = set()
    matched: list[ActorRecord] = []
    for actor in actors:
        if actor.id in wanted and actor.id not in seen:
            seen.add(actor.id)
            matched.append(actor)

    if len(matched) < len(wanted):
        logger.debug(
            "Dropped dangling actor references",
            missing=sorted(wanted - seen),
        )
    return matched


async def resolve_actors_for(movie: ReferencesActors, actor_store: ActorStore) -> list[ActorRecord]:
    """Join a movie's actor references to the actor store."""
    if not movie.actor_ids:
        return []
    return join_actors(movie.actor_ids, await actor_store.find_all())


# Field resolvers
async def resolve_movie_actors(movie: Movie, info: strawberry.Info) -> list[Actor]:
    """
    Resolve `Movie.actor` through the operation's batching loader.

    Every movie in one operation shares a single actor store read. Store
    failures yield an empty list.
    """
    from ..types.actor import Actor as ActorType

    loaders = get_loaders(info)
    try:
        records = await loaders.movie_actors.load(tuple(movie.actor_ids))
    except StoreError as e:
        logger.error("Failed to resolve movie actors", movie_id=str(movie.id), error=str(e))
        return []

    return [ActorType(id=strawberry.ID(record.id), name=record.name) for record in records]
