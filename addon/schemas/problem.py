from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

HoldType = Literal["start", "middle", "finish", "feet_only"]


class Hold(BaseModel):
    id: str
    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)
    description: str = ""
    color: str | None = None
    type: HoldType | None = None


class CreateProblemRequest(BaseModel):
    name: str
    location: str
    description: str | None = None
    difficulty: str | None = None
    wall_photo_url: str | None = None
    holds: list[Hold] = []
    is_public: bool = True
    tags: list[str] = []


class UpdateProblemRequest(BaseModel):
    name: str | None = None
    location: str | None = None
    description: str | None = None
    difficulty: str | None = None
    wall_photo_url: str | None = None
    holds: list[Hold] | None = None
    is_public: bool | None = None
    tags: list[str] | None = None


class ProblemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    creator_id: UUID
    name: str
    location: str
    description: str | None = None
    difficulty: str | None = None
    wall_photo_url: str | None = None
    holds: list[Hold] = []
    is_public: bool
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
