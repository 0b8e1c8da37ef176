from addon.models.climbing_problem import ClimbingProblem
from addon.models.game_move import GameMove
from addon.models.game_player import GamePlayer
from addon.models.game_session import GameSession, GameStatus
from addon.models.user import User

__all__ = [
    "ClimbingProblem",
    "GameMove",
    "GamePlayer",
    "GameSession",
    "GameStatus",
    "User",
]
