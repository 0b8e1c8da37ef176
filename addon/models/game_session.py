from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, Index, UniqueConstraint, text
from sqlmodel import Field, SQLModel

from addon.models.time_stamp_mixin import TimeStampMixin


class GameStatus(str, Enum):
    LOBBY = "lobby"
    ACTIVE = "active"
    # Declared for the schema; no operation transitions a game here yet.
    COMPLETED = "completed"


class GameSession(TimeStampMixin, SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "game_session"

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
    )
    host_id: UUID = Field(foreign_key="user.id")
    room_code: str = Field(max_length=6, index=True)
    location: str = Field(max_length=100)
    status: GameStatus = Field(default=GameStatus.LOBBY, index=True)
    current_turn_user_id: UUID | None = Field(default=None)
    max_players: int = Field(default=4)
    move_count: int = Field(default=0)
    idempotency_key: str | None = Field(default=None, max_length=64)

    started_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    ended_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )

    # Room codes only need to be unique while a game is still joinable.
    __table_args__ = (
        UniqueConstraint("host_id", "idempotency_key"),
        Index(
            "uq_game_session_lobby_room_code",
            "room_code",
            unique=True,
            postgresql_where=text("status = 'LOBBY'"),
            sqlite_where=text("status = 'LOBBY'"),
        ),
    )
