"""
Tests for the in-memory entity stores
"""

import asyncio

import pytest

from moviegraph.entities import ActorPayload, ActorRecord, ActorRef, MoviePayload, MovieRecord
from moviegraph.store.memory import InMemoryActorStore, InMemoryMovieStore


@pytest.fixture
def movie_store():
    return InMemoryMovieStore(
        [
            MovieRecord(id="m1", title="First"),
            MovieRecord(id="m2", title="Second", actor=(ActorRef(id="a1"),)),
        ]
    )


class TestInMemoryMovieStore:
    @pytest.mark.asyncio
    async def test_find_all_keeps_insertion_order(self, movie_store):
        movies = await movie_store.find_all()
        assert [movie.id for movie in movies] == ["m1", "m2"]

    @pytest.mark.asyncio
    async def test_find_all_returns_snapshot(self, movie_store):
        snapshot = await movie_store.find_all()
        await movie_store.create(MoviePayload(id="m3"))

        assert len(snapshot) == 2
        assert len(await movie_store.find_all()) == 3

    @pytest.mark.asyncio
    async def test_find_by_id(self, movie_store):
        movie = await movie_store.find_by_id("m2")
        assert movie is not None
        assert movie.title == "Second"
        assert movie.actor_ids == ["a1"]

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, movie_store):
        assert await movie_store.find_by_id("doesnotexist") is None

    @pytest.mark.asyncio
    async def test_create_appends(self, movie_store):
        created = await movie_store.create(
            MoviePayload(id="m3", title="Third", rating=5, actor=(ActorRef(id="a2"),))
        )

        assert created == MovieRecord(id="m3", title="Third", rating=5, actor=(ActorRef(id="a2"),))
        movies = await movie_store.find_all()
        assert movies[-1] == created

    @pytest.mark.asyncio
    async def test_create_assigns_id_when_missing(self, movie_store):
        created = await movie_store.create(MoviePayload(title="No id"))

        assert created.id
        assert await movie_store.find_by_id(created.id) == created

    @pytest.mark.asyncio
    async def test_create_does_not_check_collisions(self, movie_store):
        await movie_store.create(MoviePayload(id="m1", title="Duplicate"))

        movies = await movie_store.find_all()
        assert [movie.id for movie in movies] == ["m1", "m2", "m1"]

    @pytest.mark.asyncio
    async def test_concurrent_creates_are_not_lost(self):
        store = InMemoryMovieStore()

        await asyncio.gather(
            *(store.create(MoviePayload(id=f"m{i}")) for i in range(50))
        )

        movies = await store.find_all()
        assert len(movies) == 50
        assert {movie.id for movie in movies} == {f"m{i}" for i in range(50)}


class TestInMemoryActorStore:
    @pytest.mark.asyncio
    async def test_create_and_find(self):
        store = InMemoryActorStore()
        created = await store.create(ActorPayload(id="robin", name="Robin Williams"))

        assert created == ActorRecord(id="robin", name="Robin Williams")
        assert await store.find_by_id("robin") == created
        assert await store.find_all() == [created]

    @pytest.mark.asyncio
    async def test_actor_requires_name(self):
        store = InMemoryActorStore()

        with pytest.raises(ValueError):
            await store.create(ActorPayload(id="nameless", name=""))

        assert await store.find_all() == []
