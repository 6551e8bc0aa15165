"""
Root GraphQL mutation definitions
"""

import strawberry

from ..scalars import Date
from ..types.movie import Movie, Status


# Input types for mutations
@strawberry.input
class ActorRefInput:
    """Reference to an existing actor by id."""

    id: strawberry.ID


@strawberry.input
class MovieInput:
    """Input for adding a movie. Every field is optional."""

    id: strawberry.ID | None = None
    title: str | None = None
    release_date: Date | None = None
    rating: int | None = None
    status: Status | None = None
    actor: list[ActorRefInput] | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="addMovie")
    async def add_movie(self, info: strawberry.Info, movie: MovieInput) -> list[Movie] | None:
        """Add a movie and return the full movie collection."""
        from ..resolvers.movie import add_movie

        return await add_movie(info, movie)
