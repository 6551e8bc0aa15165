"""
Root GraphQL query definitions
"""

import strawberry

from ..types.movie import Movie


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def movies(self, info: strawberry.Info) -> list[Movie] | None:
        """Get all movies."""
        from ..resolvers.movie import resolve_movies

        return await resolve_movies(info)

    @strawberry.field
    async def movie(self, info: strawberry.Info, id: strawberry.ID | None = None) -> Movie | None:
        """Get a movie by ID."""
        if id is None:
            return None
        from ..resolvers.movie import resolve_movie_by_id

        return await resolve_movie_by_id(info, str(id))
