from collections.abc import Sequence
from functools import partial

from strawberry.dataloader import DataLoader

from ..entities import ActorRecord
from ..store.base import ActorStore, Stores
from .resolvers.actor import join_actors


async def load_movie_actors(
    actor_store: ActorStore, keys: list[tuple[str, ...]]
) -> list[list[ActorRecord]]:
    """Batch load actors for many movies with one read of the actor store.

    Each key is the ordered tuple of actor ids a movie references.
    """
    if not any(keys):
        return [[] for _ in keys]

    actors: Sequence[ActorRecord] = await actor_store.find_all()
    return [join_actors(key, actors) for key in keys]


class Loaders:
    """Batching loaders scoped to one operation."""

    def __init__(self, stores: Stores):
        self.movie_actors = DataLoader(load_fn=partial(load_movie_actors, stores.actors))
