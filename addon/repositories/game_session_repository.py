from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainErrorCode
from addon.models.game_session import GameSession, GameStatus
from addon.models.time_stamp_mixin import utc_now
from addon.repositories.base_repository import BaseRepository


class GameSessionRepository(BaseRepository[GameSession]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, GameSession, DomainErrorCode.GAME_NOT_FOUND)

    async def is_room_code_in_use(self, room_code: str) -> bool:
        return await self.exists(room_code=room_code, status=GameStatus.LOBBY)

    async def get_lobby_by_room_code(self, room_code: str) -> GameSession | None:
        return await self.filter_one(room_code=room_code, status=GameStatus.LOBBY)

    async def touch_lobby(self, game_id: UUID) -> GameSession | None:
        """Bump ``updated_at`` while the game is still a lobby.

        The row is locked until the caller's transaction ends, so a
        concurrent start has to wait for it and a join after a start sees
        ``None``.
        """
        return await self.compare_and_swap(
            game_id,
            expected={"status": GameStatus.LOBBY},
            values={"updated_at": utc_now()},
        )

    async def mark_started(
        self, game_id: UUID, first_turn_user_id: UUID
    ) -> GameSession | None:
        return await self.compare_and_swap(
            game_id,
            expected={"status": GameStatus.LOBBY},
            values={
                "status": GameStatus.ACTIVE,
                "started_at": datetime.now(UTC),
                "current_turn_user_id": first_turn_user_id,
            },
        )

    async def advance_turn(
        self,
        game_id: UUID,
        *,
        expected_turn_user_id: UUID,
        expected_move_count: int,
        next_turn_user_id: UUID,
    ) -> GameSession | None:
        return await self.compare_and_swap(
            game_id,
            expected={
                "status": GameStatus.ACTIVE,
                "current_turn_user_id": expected_turn_user_id,
                "move_count": expected_move_count,
            },
            values={
                "current_turn_user_id": next_turn_user_id,
                "move_count": expected_move_count + 1,
            },
        )
