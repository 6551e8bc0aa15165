"""
Database models for moviegraph (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Actors(Base):
    __tablename__ = "actors"
    __table_args__ = (
        PrimaryKeyConstraint("seq", name="actors_pkey"),
        UniqueConstraint("id", name="uq_actors_id"),
    )

    # Insertion order; listings follow it
    seq: Mapped[int] = mapped_column(Integer, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("CURRENT_TIMESTAMP")
    )


class Movies(Base):
    __tablename__ = "movies"
    __table_args__ = (
        PrimaryKeyConstraint("seq", name="movies_pkey"),
        UniqueConstraint("id", name="uq_movies_id"),
    )

    seq: Mapped[int] = mapped_column(Integer, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str | None] = mapped_column(Text)
    release_date: Mapped[datetime | None] = mapped_column(DateTime(True))
    rating: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str | None] = mapped_column(String(32))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("CURRENT_TIMESTAMP")
    )

    actor_links: Mapped[list["MovieActors"]] = relationship(
        "MovieActors",
        uselist=True,
        back_populates="movie",
        order_by="MovieActors.position",
        cascade="all, delete-orphan",
    )


class MovieActors(Base):
    """Actor references of a movie, one row per reference.

    ``actor_id`` carries no foreign key: a reference may dangle.
    """

    __tablename__ = "movie_actors"
    __table_args__ = (
        ForeignKeyConstraint(
            ["movie_id"],
            ["movies.id"],
            ondelete="CASCADE",
            name="movie_actors_movie_id_fkey",
        ),
        PrimaryKeyConstraint("movie_id", "position", name="movie_actors_pkey"),
        Index("idx_movie_actors_actor", "actor_id"),
    )

    movie_id: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    actor_id: Mapped[str] = mapped_column(String(64), nullable=False)

    movie: Mapped["Movies"] = relationship("Movies", back_populates="actor_links")


target_metadata = Base.metadata

__all__ = ["Base", "Actors", "Movies", "MovieActors", "target_metadata"]
