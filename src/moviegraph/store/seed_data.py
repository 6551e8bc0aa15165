"""
Reusable seed data for store initialization.

Seeding goes through the store ``create`` contract, so the same data loads
into the in-memory and the durable stores.
"""

from __future__ import annotations

from datetime import UTC, datetime

from ..entities import ActorPayload, ActorRef, MoviePayload
from ..logging import get_logger
from .base import Stores

logger = get_logger(__name__)

SEED_ACTORS: tuple[ActorPayload, ...] = (ActorPayload(id="robin", name="Robin Williams"),)

SEED_MOVIES: tuple[MoviePayload, ...] = (
    MoviePayload(
        id="naeeurehnin",
        title="Aladdin",
        release_date=datetime(1992, 11, 25, tzinfo=UTC),
        rating=4,
        actor=(ActorRef(id="robin"),),
    ),
    MoviePayload(
        id="vnyhiorvn",
        title="The Little Mermaid",
        release_date=datetime(1989, 11, 17, tzinfo=UTC),
        rating=3,
    ),
)


async def seed_stores(stores: Stores) -> dict[str, int]:
    """
    Load the seed actors and movies into the given stores.

    Records whose id already exists are skipped, so seeding is idempotent.

    Returns:
        Number of created records per entity kind
    """
    created = {"actors": 0, "movies": 0}

    for actor in SEED_ACTORS:
        if actor.id and await stores.actors.find_by_id(actor.id) is not None:
            continue
        await stores.actors.create(actor)
        created["actors"] += 1

    for movie in SEED_MOVIES:
        if movie.id and await stores.movies.find_by_id(movie.id) is not None:
            continue
        await stores.movies.create(movie)
        created["movies"] += 1

    logger.info("Seed data loaded", backend=stores.backend, **created)
    return created
