from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from addon.models.time_stamp_mixin import utc_now


class GamePlayer(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "game_player"

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
    )
    game_id: UUID = Field(foreign_key="game_session.id", index=True)
    user_id: UUID = Field(foreign_key="user.id")
    username: str
    turn_order: int = Field(default=0)
    is_eliminated: bool = Field(default=False)

    joined_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    eliminated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )

    __table_args__ = (
        UniqueConstraint("game_id", "user_id"),
        UniqueConstraint("game_id", "turn_order"),
    )
