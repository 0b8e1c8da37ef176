from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainErrorCode
from addon.models.climbing_problem import ClimbingProblem
from addon.repositories.base_repository import BaseRepository


class ClimbingProblemRepository(BaseRepository[ClimbingProblem]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ClimbingProblem, DomainErrorCode.PROBLEM_NOT_FOUND)

    async def list_public(
        self,
        location: str | None = None,
        difficulty: str | None = None,
        limit: int = 50,
    ) -> list[ClimbingProblem]:
        filters = []
        if location:
            filters.append(ClimbingProblem.location.ilike(f"%{location}%"))
        if difficulty:
            filters.append(ClimbingProblem.difficulty == difficulty)

        return await self.filter(
            *filters,
            is_public=True,
            order_by=ClimbingProblem.created_at.desc(),
            limit=limit,
        )

    async def search_public(self, query: str, limit: int = 20) -> list[ClimbingProblem]:
        pattern = f"%{query}%"
        return await self.filter(
            or_(
                ClimbingProblem.name.ilike(pattern),
                ClimbingProblem.location.ilike(pattern),
                ClimbingProblem.description.ilike(pattern),
                ClimbingProblem.difficulty.ilike(pattern),
            ),
            is_public=True,
            order_by=ClimbingProblem.created_at.desc(),
            limit=limit,
        )

    async def list_by_creator(
        self, creator_id: UUID, limit: int = 50
    ) -> list[ClimbingProblem]:
        return await self.filter(
            creator_id=creator_id,
            order_by=ClimbingProblem.created_at.desc(),
            limit=limit,
        )
