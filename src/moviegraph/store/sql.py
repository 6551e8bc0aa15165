"""SQLAlchemy-backed entity stores."""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from ..dbmodels import Actors, MovieActors, Movies
from ..entities import (
    ActorPayload,
    ActorRecord,
    ActorRef,
    MoviePayload,
    MovieRecord,
    MovieStatus,
)
from ..logging import get_logger
from .base import (
    DuplicateEntity,
    EntityStore,
    StoreUnavailable,
    build_actor_record,
    build_movie_record,
)

logger = get_logger(__name__)


class SqlStore:
    """Shared session handling for stores over an established session factory.

    Backend failures are translated to store errors at this boundary.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except IntegrityError as e:
            logger.warning("Store rejected write", store=type(self).__name__, error=str(e))
            raise DuplicateEntity(str(e.orig) if e.orig else str(e)) from e
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            logger.error(
                "Store operation failed",
                store=type(self).__name__,
                operation=operation,
                error=str(e),
            )
            raise StoreUnavailable(f"{operation} failed: {e}") from e


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_movie_record(row: Movies) -> MovieRecord:
    return MovieRecord(
        id=row.id,
        title=row.title,
        release_date=_as_utc(row.release_date),
        rating=row.rating,
        status=MovieStatus(row.status) if row.status else None,
        actor=tuple(ActorRef(id=link.actor_id) for link in row.actor_links),
    )


def _to_actor_record(row: Actors) -> ActorRecord:
    return ActorRecord(id=row.id, name=row.name)


class SqlMovieStore(SqlStore, EntityStore[MovieRecord, MoviePayload]):
    """Movie store persisting actor references as ordered link rows."""

    async def find_all(self) -> Sequence[MovieRecord]:
        async with self._session("movies.find_all") as session:
            stmt = (
                select(Movies)
                .options(selectinload(Movies.actor_links))
                .order_by(Movies.seq)
            )
            result = await session.execute(stmt)
            return [_to_movie_record(row) for row in result.scalars().all()]

    async def find_by_id(self, id: str) -> MovieRecord | None:
        async with self._session("movies.find_by_id") as session:
            stmt = select(Movies).where(Movies.id == id).options(selectinload(Movies.actor_links))
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
            return _to_movie_record(row) if row else None

    async def create(self, payload: MoviePayload) -> MovieRecord:
        record = build_movie_record(payload)
        async with self._session("movies.create") as session:
            row = Movies(
                id=record.id,
                title=record.title,
                release_date=record.release_date,
                rating=record.rating,
                status=record.status.value if record.status else None,
                actor_links=[
                    MovieActors(position=position, actor_id=ref.id)
                    for position, ref in enumerate(record.actor)
                ],
            )
            session.add(row)
            await session.commit()

        logger.info("Movie created", movie_id=record.id, actor_refs=len(record.actor))
        return record


class SqlActorStore(SqlStore, EntityStore[ActorRecord, ActorPayload]):
    async def find_all(self) -> Sequence[ActorRecord]:
        async with self._session("actors.find_all") as session:
            result = await session.execute(select(Actors).order_by(Actors.seq))
            return [_to_actor_record(row) for row in result.scalars().all()]

    async def find_by_id(self, id: str) -> ActorRecord | None:
        async with self._session("actors.find_by_id") as session:
            result = await session.execute(select(Actors).where(Actors.id == id))
            row = result.scalar_one_or_none()
            return _to_actor_record(row) if row else None

    async def create(self, payload: ActorPayload) -> ActorRecord:
        record = build_actor_record(payload)
        async with self._session("actors.create") as session:
            session.add(Actors(id=record.id, name=record.name))
            await session.commit()

        logger.info("Actor created", actor_id=record.id)
        return record
