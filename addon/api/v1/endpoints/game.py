from uuid import UUID

from fastapi import APIRouter, Depends, status

from addon.dependencies.auth import get_current_user
from addon.dependencies.services import get_game_service
from addon.models.user import User
from addon.schemas.game import (
    AddMoveRequest,
    CreateGameRequest,
    GameMoveResponse,
    GameSessionResponse,
    GameStateResponse,
    JoinGameRequest,
)
from addon.services.game_service import GameService

router = APIRouter()


@router.post(
    "",
    response_model=GameSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_game(
    request: CreateGameRequest,
    current_user: User = Depends(get_current_user),
    game_service: GameService = Depends(get_game_service),
):
    game = await game_service.create_session(
        host=current_user,
        location=request.location,
        max_players=request.max_players,
        idempotency_key=request.idempotency_key,
    )
    return GameSessionResponse.model_validate(game)


@router.post(
    "/join",
    response_model=GameSessionResponse,
    status_code=status.HTTP_200_OK,
)
async def join_game(
    request: JoinGameRequest,
    current_user: User = Depends(get_current_user),
    game_service: GameService = Depends(get_game_service),
):
    game = await game_service.join_session(current_user, request.room_code)
    return GameSessionResponse.model_validate(game)


@router.get(
    "/{game_id}",
    response_model=GameSessionResponse,
    status_code=status.HTTP_200_OK,
)
async def read_game(
    game_id: UUID,
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    game_service: GameService = Depends(get_game_service),
):
    game = await game_service.get_session(game_id)
    return GameSessionResponse.model_validate(game)


@router.get(
    "/{game_id}/state",
    response_model=GameStateResponse,
    status_code=status.HTTP_200_OK,
)
async def read_game_state(
    game_id: UUID,
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    game_service: GameService = Depends(get_game_service),
):
    return await game_service.get_game_state(game_id)


@router.post(
    "/{game_id}/start",
    response_model=GameSessionResponse,
    status_code=status.HTTP_200_OK,
)
async def start_game(
    game_id: UUID,
    current_user: User = Depends(get_current_user),
    game_service: GameService = Depends(get_game_service),
):
    game = await game_service.start_session(current_user.id, game_id)
    return GameSessionResponse.model_validate(game)


@router.post(
    "/{game_id}/moves",
    response_model=GameMoveResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_move(
    game_id: UUID,
    request: AddMoveRequest,
    current_user: User = Depends(get_current_user),
    game_service: GameService = Depends(get_game_service),
):
    move = await game_service.add_move(
        current_user,
        game_id,
        request.hold_description,
        photo_url=request.photo_url,
        idempotency_key=request.idempotency_key,
    )
    return GameMoveResponse.model_validate(move)
