from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from addon.models.time_stamp_mixin import TimeStampMixin


class ClimbingProblem(TimeStampMixin, SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "climbing_problem"

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
    )
    creator_id: UUID = Field(foreign_key="user.id", index=True)
    name: str = Field(max_length=100)
    location: str = Field(max_length=100, index=True)
    description: str | None = Field(default=None)
    difficulty: str | None = Field(default=None, max_length=20)
    wall_photo_url: str | None = Field(default=None)
    holds: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    is_public: bool = Field(default=True)
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
