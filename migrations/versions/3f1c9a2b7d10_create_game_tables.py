"""create user, game and climbing problem tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

game_status = sa.Enum("LOBBY", "ACTIVE", "COMPLETED", name="gamestatus")


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)

    op.create_table(
        "game_session",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("host_id", sa.Uuid(), nullable=False),
        sa.Column("room_code", sqlmodel.sql.sqltypes.AutoString(length=6), nullable=False),
        sa.Column("location", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("status", game_status, nullable=False),
        sa.Column("current_turn_user_id", sa.Uuid(), nullable=True),
        sa.Column("max_players", sa.Integer(), nullable=False),
        sa.Column("move_count", sa.Integer(), nullable=False),
        sa.Column(
            "idempotency_key", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True
        ),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["host_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("host_id", "idempotency_key"),
    )
    op.create_index(
        op.f("ix_game_session_room_code"), "game_session", ["room_code"], unique=False
    )
    op.create_index(
        op.f("ix_game_session_status"), "game_session", ["status"], unique=False
    )
    op.create_index(
        "uq_game_session_lobby_room_code",
        "game_session",
        ["room_code"],
        unique=True,
        postgresql_where=sa.text("status = 'LOBBY'"),
        sqlite_where=sa.text("status = 'LOBBY'"),
    )

    op.create_table(
        "game_player",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("turn_order", sa.Integer(), nullable=False),
        sa.Column("is_eliminated", sa.Boolean(), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("eliminated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["game_id"], ["game_session.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("game_id", "user_id"),
        sa.UniqueConstraint("game_id", "turn_order"),
    )
    op.create_index(
        op.f("ix_game_player_game_id"), "game_player", ["game_id"], unique=False
    )

    op.create_table(
        "game_move",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("move_number", sa.Integer(), nullable=False),
        sa.Column("added_by_user_id", sa.Uuid(), nullable=False),
        sa.Column("added_by_username", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column(
            "hold_description", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False
        ),
        sa.Column("photo_url", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column(
            "idempotency_key", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["added_by_user_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["game_id"], ["game_session.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("game_id", "move_number"),
        sa.UniqueConstraint("game_id", "added_by_user_id", "idempotency_key"),
    )
    op.create_index(op.f("ix_game_move_game_id"), "game_move", ["game_id"], unique=False)

    op.create_table(
        "climbing_problem",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("creator_id", sa.Uuid(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("location", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("difficulty", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column("wall_photo_url", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("holds", sa.JSON(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["creator_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_climbing_problem_creator_id"),
        "climbing_problem",
        ["creator_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_climbing_problem_location"),
        "climbing_problem",
        ["location"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_climbing_problem_location"), table_name="climbing_problem")
    op.drop_index(op.f("ix_climbing_problem_creator_id"), table_name="climbing_problem")
    op.drop_table("climbing_problem")
    op.drop_index(op.f("ix_game_move_game_id"), table_name="game_move")
    op.drop_table("game_move")
    op.drop_index(op.f("ix_game_player_game_id"), table_name="game_player")
    op.drop_table("game_player")
    op.drop_index("uq_game_session_lobby_room_code", table_name="game_session")
    op.drop_index(op.f("ix_game_session_status"), table_name="game_session")
    op.drop_index(op.f("ix_game_session_room_code"), table_name="game_session")
    op.drop_table("game_session")
    op.drop_index(op.f("ix_user_email"), table_name="user")
    op.drop_table("user")
    game_status.drop(op.get_bind(), checkfirst=True)
