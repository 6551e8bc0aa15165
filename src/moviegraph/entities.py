"""
Entity records owned by the stores.

Records are immutable once built; resolvers convert them to GraphQL types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MovieStatus(Enum):
    """Viewing status of a movie."""

    WATCHED = "WATCHED"
    INTERESTED = "INTERESTED"
    NOT_INTERESTED = "NOT_INTERESTED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ActorRef:
    """Reference from a movie to an actor. Holds the actor id only."""

    id: str


@dataclass(frozen=True)
class ActorRecord:
    id: str
    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("Actor name is required")


@dataclass(frozen=True)
class MovieRecord:
    id: str
    title: str | None = None
    release_date: datetime | None = None
    rating: int | None = None
    status: MovieStatus | None = None
    actor: tuple[ActorRef, ...] = field(default_factory=tuple)

    @property
    def actor_ids(self) -> list[str]:
        """Referenced actor ids in reference order."""
        return [ref.id for ref in self.actor]


@dataclass(frozen=True)
class MoviePayload:
    """Write payload for a movie. Every field is optional."""

    id: str | None = None
    title: str | None = None
    release_date: datetime | None = None
    rating: int | None = None
    status: MovieStatus | None = None
    actor: tuple[ActorRef, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ActorPayload:
    name: str
    id: str | None = None
