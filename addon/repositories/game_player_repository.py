from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainErrorCode
from addon.models.game_player import GamePlayer
from addon.repositories.base_repository import BaseRepository


class GamePlayerRepository(BaseRepository[GamePlayer]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, GamePlayer, DomainErrorCode.PLAYER_NOT_FOUND)

    async def list_in_turn_order(self, game_id: UUID) -> list[GamePlayer]:
        return await self.filter(game_id=game_id, order_by=GamePlayer.turn_order)

    async def list_active_in_turn_order(self, game_id: UUID) -> list[GamePlayer]:
        return await self.filter(
            game_id=game_id,
            is_eliminated=False,
            order_by=GamePlayer.turn_order,
        )

    async def get_player(self, game_id: UUID, user_id: UUID) -> GamePlayer | None:
        return await self.filter_one(game_id=game_id, user_id=user_id)
