"""
Initial schema with movies, actors, and movie actor references.

Revision ID: 20250101_000000_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20250101_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # actors
    op.create_table(
        "actors",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("seq", name="actors_pkey"),
        sa.UniqueConstraint("id", name="uq_actors_id"),
    )

    # movies
    op.create_table(
        "movies",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("release_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("seq", name="movies_pkey"),
        sa.UniqueConstraint("id", name="uq_movies_id"),
    )

    # movie_actors (actor_id has no foreign key; references may dangle)
    op.create_table(
        "movie_actors",
        sa.Column("movie_id", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("actor_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(
            ["movie_id"],
            ["movies.id"],
            ondelete="CASCADE",
            name="movie_actors_movie_id_fkey",
        ),
        sa.PrimaryKeyConstraint("movie_id", "position", name="movie_actors_pkey"),
    )
    op.create_index("idx_movie_actors_actor", "movie_actors", ["actor_id"])


def downgrade() -> None:
    op.drop_index("idx_movie_actors_actor", table_name="movie_actors")
    op.drop_table("movie_actors")
    op.drop_table("movies")
    op.drop_table("actors")
