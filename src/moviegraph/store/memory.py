"""In-memory entity stores."""

import asyncio
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic

from ..entities import ActorPayload, ActorRecord, MoviePayload, MovieRecord
from ..logging import get_logger
from .base import (
    EntityStore,
    PayloadT,
    RecordT,
    build_actor_record,
    build_movie_record,
)

logger = get_logger(__name__)


class InMemoryStore(EntityStore[RecordT, PayloadT], Generic[RecordT, PayloadT]):
    """Entity store backed by one ordered list.

    Writers are serialized by a lock so concurrent ``create`` calls never lose
    an append. Readers get a snapshot and never observe a partial write.
    Ids are not checked for collisions.
    """

    def __init__(
        self,
        build: Callable[[PayloadT], RecordT],
        records: Iterable[RecordT] | None = None,
    ):
        self._build = build
        self._records: list[RecordT] = list(records or [])
        self._write_lock = asyncio.Lock()

    async def find_all(self) -> Sequence[RecordT]:
        return list(self._records)

    async def find_by_id(self, id: str) -> RecordT | None:
        for record in self._records:
            if _record_id(record) == id:
                return record
        return None

    async def create(self, payload: PayloadT) -> RecordT:
        record = self._build(payload)
        async with self._write_lock:
            self._records = [*self._records, record]
        logger.debug("Record created", store=type(self).__name__, record_id=_record_id(record))
        return record

    def __len__(self) -> int:
        return len(self._records)


class InMemoryMovieStore(InMemoryStore[MovieRecord, MoviePayload]):
    def __init__(self, records: Iterable[MovieRecord] | None = None):
        super().__init__(build_movie_record, records)


class InMemoryActorStore(InMemoryStore[ActorRecord, ActorPayload]):
    def __init__(self, records: Iterable[ActorRecord] | None = None):
        super().__init__(build_actor_record, records)


def _record_id(record: Any) -> str:
    return record.id
