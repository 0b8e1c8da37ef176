from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from addon.models.game_session import GameStatus


class CreateGameRequest(BaseModel):
    location: str
    max_players: int = 4
    idempotency_key: str | None = Field(default=None, max_length=64)


class JoinGameRequest(BaseModel):
    room_code: str


class AddMoveRequest(BaseModel):
    hold_description: str
    photo_url: str | None = None
    idempotency_key: str | None = Field(default=None, max_length=64)


class GameSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    host_id: UUID
    room_code: str
    location: str
    status: GameStatus
    current_turn_user_id: UUID | None = None
    max_players: int
    move_count: int = 0
    created_at: datetime | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None


class GamePlayerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    game_id: UUID
    user_id: UUID
    username: str
    turn_order: int
    is_eliminated: bool = False
    joined_at: datetime | None = None
    eliminated_at: datetime | None = None


class GameMoveResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    game_id: UUID
    move_number: int
    added_by_user_id: UUID
    added_by_username: str
    hold_description: str
    photo_url: str | None = None
    created_at: datetime | None = None


class GameStateResponse(BaseModel):
    session: GameSessionResponse
    players: list[GamePlayerResponse]
    moves: list[GameMoveResponse]
    current_player: GamePlayerResponse | None = None
