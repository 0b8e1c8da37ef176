import uuid
from datetime import UTC, datetime

import pytest

from addon.models.game_session import GameStatus
from addon.schemas.game import (
    GameMoveResponse,
    GamePlayerResponse,
    GameSessionResponse,
    GameStateResponse,
)


def _make_state(
    game_id: uuid.UUID,
    user_ids: list[uuid.UUID],
    status: GameStatus = GameStatus.ACTIVE,
    current_turn_user_id: uuid.UUID | None = None,
    move_count: int = 0,
) -> GameStateResponse:
    players = [
        GamePlayerResponse(
            game_id=game_id,
            user_id=user_id,
            username=f"Climber{index}",
            turn_order=index,
        )
        for index, user_id in enumerate(user_ids)
    ]
    moves = [
        GameMoveResponse(
            id=uuid.uuid4(),
            game_id=game_id,
            move_number=number,
            added_by_user_id=user_ids[(number - 1) % len(user_ids)],
            added_by_username=f"Climber{(number - 1) % len(user_ids)}",
            hold_description=f"hold {number}",
        )
        for number in range(1, move_count + 1)
    ]
    session = GameSessionResponse(
        id=game_id,
        host_id=user_ids[0],
        room_code="ABC123",
        location="Gym A",
        status=status,
        current_turn_user_id=current_turn_user_id,
        max_players=4,
        move_count=move_count,
        created_at=datetime.now(UTC),
    )
    return GameStateResponse(
        session=session,
        players=players,
        moves=moves,
        current_player=next(
            (p for p in players if p.user_id == current_turn_user_id), None
        ),
    )


@pytest.fixture
def user_ids():
    return [uuid.uuid4() for _ in range(3)]


@pytest.fixture
def make_state():
    return _make_state
