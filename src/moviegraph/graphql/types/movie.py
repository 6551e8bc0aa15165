"""
Movie GraphQL type definitions
"""

import strawberry

from ...entities import MovieStatus
from ..scalars import Date
from .actor import Actor

Status = strawberry.enum(MovieStatus, name="Status", description="Viewing status of a movie")


@strawberry.type
class Movie:
    """Movie type for GraphQL API."""

    id: strawberry.ID
    title: str | None = None
    release_date: Date | None = None
    rating: int | None = None
    status: Status | None = None

    # Referenced actor ids; only exposed through the resolved `actor` field
    actor_ids: strawberry.Private[tuple[str, ...]] = ()

    @strawberry.field
    async def actor(self, info: strawberry.Info) -> list[Actor] | None:
        """Get the actors referenced by this movie."""
        from ..resolvers.actor import resolve_movie_actors

        return await resolve_movie_actors(self, info)
