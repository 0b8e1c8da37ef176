from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from addon.models.time_stamp_mixin import TimeStampMixin


class GameMove(TimeStampMixin, SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "game_move"

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
    )
    game_id: UUID = Field(foreign_key="game_session.id", index=True)
    move_number: int
    added_by_user_id: UUID = Field(foreign_key="user.id")
    added_by_username: str
    hold_description: str = Field(max_length=200)
    photo_url: str | None = Field(default=None)
    idempotency_key: str | None = Field(default=None, max_length=64)

    __table_args__ = (
        UniqueConstraint("game_id", "move_number"),
        UniqueConstraint("game_id", "added_by_user_id", "idempotency_key"),
    )
