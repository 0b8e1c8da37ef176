from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainErrorCode
from addon.models.game_move import GameMove
from addon.repositories.base_repository import BaseRepository


class GameMoveRepository(BaseRepository[GameMove]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, GameMove, DomainErrorCode.MOVE_NOT_FOUND)

    async def list_in_move_order(self, game_id: UUID) -> list[GameMove]:
        return await self.filter(game_id=game_id, order_by=GameMove.move_number)

    async def get_by_idempotency_key(
        self, game_id: UUID, user_id: UUID, idempotency_key: str
    ) -> GameMove | None:
        return await self.filter_one(
            game_id=game_id,
            added_by_user_id=user_id,
            idempotency_key=idempotency_key,
        )
