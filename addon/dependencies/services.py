from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from addon.db.session import get_session
from addon.dependencies.repositories import (
    get_game_move_repository,
    get_game_player_repository,
    get_game_session_repository,
    get_problem_repository,
    get_user_repository,
)
from addon.repositories.climbing_problem_repository import ClimbingProblemRepository
from addon.repositories.game_move_repository import GameMoveRepository
from addon.repositories.game_player_repository import GamePlayerRepository
from addon.repositories.game_session_repository import GameSessionRepository
from addon.repositories.user_repository import UserRepository
from addon.services.game_service import GameService
from addon.services.problem_service import ProblemService
from addon.services.user_service import UserService


def get_user_service(
    user_repository: UserRepository = Depends(get_user_repository),
    session: AsyncSession = Depends(get_session),
) -> UserService:
    return UserService(session, user_repository)


def get_game_service(
    session: AsyncSession = Depends(get_session),
    game_session_repository: GameSessionRepository = Depends(
        get_game_session_repository
    ),
    game_player_repository: GamePlayerRepository = Depends(get_game_player_repository),
    game_move_repository: GameMoveRepository = Depends(get_game_move_repository),
) -> GameService:
    return GameService(
        session=session,
        game_session_repository=game_session_repository,
        game_player_repository=game_player_repository,
        game_move_repository=game_move_repository,
    )


def get_problem_service(
    session: AsyncSession = Depends(get_session),
    problem_repository: ClimbingProblemRepository = Depends(get_problem_repository),
) -> ProblemService:
    return ProblemService(session, problem_repository)
