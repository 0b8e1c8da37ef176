from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from addon.db.session import get_session
from addon.repositories.climbing_problem_repository import ClimbingProblemRepository
from addon.repositories.game_move_repository import GameMoveRepository
from addon.repositories.game_player_repository import GamePlayerRepository
from addon.repositories.game_session_repository import GameSessionRepository
from addon.repositories.user_repository import UserRepository


def get_user_repository(session: AsyncSession = Depends(get_session)) -> UserRepository:
    return UserRepository(session)


def get_game_session_repository(
    session: AsyncSession = Depends(get_session),
) -> GameSessionRepository:
    return GameSessionRepository(session)


def get_game_player_repository(
    session: AsyncSession = Depends(get_session),
) -> GamePlayerRepository:
    return GamePlayerRepository(session)


def get_game_move_repository(
    session: AsyncSession = Depends(get_session),
) -> GameMoveRepository:
    return GameMoveRepository(session)


def get_problem_repository(
    session: AsyncSession = Depends(get_session),
) -> ClimbingProblemRepository:
    return ClimbingProblemRepository(session)
