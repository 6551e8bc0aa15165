"""
Integration tests for movie queries executed against the schema
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from moviegraph.entities import ActorRecord, ActorRef, MovieRecord, MovieStatus
from moviegraph.graphql.context import build_context
from moviegraph.graphql.schema import execute_operation
from moviegraph.store.base import Stores, StoreUnavailable
from moviegraph.store.memory import InMemoryActorStore, InMemoryMovieStore

MOVIE_QUERY = """
    query GetMovie($id: ID) {
        movie(id: $id) {
            id
            title
            releaseDate
            rating
            status
            actor {
                id
                name
            }
        }
    }
"""

MOVIES_QUERY = """
    query {
        movies {
            id
            title
            releaseDate
            actor { name }
        }
    }
"""


class TestMovieQuery:
    @pytest.mark.asyncio
    async def test_movie_by_id_resolves_actors(self, make_context):
        result = await execute_operation(
            MOVIE_QUERY, make_context(), variables={"id": "naeeurehnin"}
        )

        assert result.errors is None
        assert result.data == {
            "movie": {
                "id": "naeeurehnin",
                "title": "Aladdin",
                "releaseDate": 722649600000,
                "rating": 4,
                "status": None,
                "actor": [{"id": "robin", "name": "Robin Williams"}],
            }
        }

    @pytest.mark.asyncio
    async def test_missing_movie_is_null(self, make_context):
        result = await execute_operation(
            MOVIE_QUERY, make_context(), variables={"id": "doesnotexist"}
        )

        assert result.errors is None
        assert result.data == {"movie": None}

    @pytest.mark.asyncio
    async def test_movie_without_id_is_null(self, make_context):
        result = await execute_operation("{ movie { id } }", make_context())

        assert result.errors is None
        assert result.data == {"movie": None}

    @pytest.mark.asyncio
    async def test_store_failure_on_movie_is_null(self, make_context, stores):
        stores.movies.find_by_id = AsyncMock(side_effect=StoreUnavailable("down"))

        result = await execute_operation(
            MOVIE_QUERY, make_context(), variables={"id": "naeeurehnin"}
        )

        assert result.errors is None
        assert result.data == {"movie": None}

    @pytest.mark.asyncio
    async def test_status_enum_is_exposed_by_name(self):
        stores = Stores(
            movies=InMemoryMovieStore(
                [MovieRecord(id="m1", title="Watched", status=MovieStatus.WATCHED)]
            ),
            actors=InMemoryActorStore(),
        )

        result = await execute_operation('{ movie(id: "m1") { status } }', build_context(stores))

        assert result.data == {"movie": {"status": "WATCHED"}}


class TestMoviesQuery:
    @pytest.mark.asyncio
    async def test_movies_returns_seed_data(self, make_context):
        result = await execute_operation(MOVIES_QUERY, make_context())

        assert result.errors is None
        assert result.data == {
            "movies": [
                {
                    "id": "naeeurehnin",
                    "title": "Aladdin",
                    "releaseDate": 722649600000,
                    "actor": [{"name": "Robin Williams"}],
                },
                {
                    "id": "vnyhiorvn",
                    "title": "The Little Mermaid",
                    "releaseDate": 627264000000,
                    "actor": [],
                },
            ]
        }

    @pytest.mark.asyncio
    async def test_store_failure_yields_empty_list(self, make_context, stores):
        stores.movies.find_all = AsyncMock(side_effect=StoreUnavailable("down"))

        result = await execute_operation(MOVIES_QUERY, make_context())

        assert result.errors is None
        assert result.data == {"movies": []}

    @pytest.mark.asyncio
    async def test_actor_store_failure_only_empties_actor_field(self, make_context, stores):
        stores.actors.find_all = AsyncMock(side_effect=StoreUnavailable("down"))

        result = await execute_operation(MOVIES_QUERY, make_context())

        assert result.errors is None
        assert [movie["title"] for movie in result.data["movies"]] == [
            "Aladdin",
            "The Little Mermaid",
        ]
        assert all(movie["actor"] == [] for movie in result.data["movies"])


class TestFieldFailureIsolation:
    @pytest.mark.asyncio
    async def test_unserializable_date_nulls_only_that_field(self):
        broken = MovieRecord(id="broken", title="Broken", release_date="not-a-date")  # type: ignore[arg-type]
        healthy = MovieRecord(
            id="healthy",
            title="Healthy",
            release_date=datetime(1992, 11, 25, tzinfo=UTC),
            actor=(ActorRef(id="robin"),),
        )
        stores = Stores(
            movies=InMemoryMovieStore([broken, healthy]),
            actors=InMemoryActorStore([ActorRecord(id="robin", name="Robin Williams")]),
        )

        result = await execute_operation(MOVIES_QUERY, build_context(stores))

        assert result.data["movies"][0] == {
            "id": "broken",
            "title": "Broken",
            "releaseDate": None,
            "actor": [],
        }
        assert result.data["movies"][1]["releaseDate"] == 722649600000
        assert result.data["movies"][1]["actor"] == [{"name": "Robin Williams"}]
        assert len(result.errors) == 1
        assert result.errors[0].path == ["movies", 0, "releaseDate"]
