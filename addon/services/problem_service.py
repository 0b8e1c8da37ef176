import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainError, DomainErrorCode
from addon.models.climbing_problem import ClimbingProblem
from addon.repositories.climbing_problem_repository import ClimbingProblemRepository
from addon.schemas.problem import CreateProblemRequest, Hold, UpdateProblemRequest
from addon.util.validators import validate_location, validate_problem_name

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 100


def _validate_holds(holds: list[Hold]) -> list[dict]:
    seen: set[str] = set()
    for hold in holds:
        if hold.id in seen:
            raise DomainError(
                code=DomainErrorCode.INVALID_HOLD,
                message=f"Duplicate hold id {hold.id}",
                details={"hold_id": hold.id},
            )
        seen.add(hold.id)
    return [hold.model_dump() for hold in holds]


class ProblemService:
    def __init__(
        self,
        session: AsyncSession,
        problem_repository: ClimbingProblemRepository | None = None,
    ):
        self.session = session
        self.problem_repository = problem_repository or ClimbingProblemRepository(
            session
        )

    async def create_problem(
        self, creator_id: UUID, data: CreateProblemRequest
    ) -> ClimbingProblem:
        problem = ClimbingProblem(
            creator_id=creator_id,
            name=validate_problem_name(data.name),
            location=validate_location(data.location),
            description=data.description,
            difficulty=data.difficulty,
            wall_photo_url=data.wall_photo_url,
            holds=_validate_holds(data.holds),
            is_public=data.is_public,
            tags=list(data.tags),
        )

        created = await self.problem_repository.create(problem)
        await self.session.commit()

        logger.info("Problem %s created by %s", created.id, creator_id)
        return created

    async def get_problem(self, problem_id: UUID, viewer_id: UUID) -> ClimbingProblem:
        problem = await self.problem_repository.filter_one_or_raise(id=problem_id)
        if not problem.is_public and problem.creator_id != viewer_id:
            raise DomainError(
                code=DomainErrorCode.PROBLEM_NOT_FOUND,
                message="ClimbingProblem not found",
                details={"problem_id": str(problem_id)},
            )
        return problem

    async def list_problems(
        self,
        location: str | None = None,
        difficulty: str | None = None,
        limit: int = 50,
    ) -> list[ClimbingProblem]:
        return await self.problem_repository.list_public(
            location=location,
            difficulty=difficulty,
            limit=min(limit, MAX_LIST_LIMIT),
        )

    async def search_problems(self, query: str) -> list[ClimbingProblem]:
        query = query.strip()
        if not query:
            return []
        return await self.problem_repository.search_public(query)

    async def list_user_problems(self, creator_id: UUID) -> list[ClimbingProblem]:
        return await self.problem_repository.list_by_creator(creator_id)

    async def update_problem(
        self, problem_id: UUID, user_id: UUID, data: UpdateProblemRequest
    ) -> ClimbingProblem:
        problem = await self._get_owned_problem(problem_id, user_id)

        changes = data.model_dump(exclude_unset=True)
        if data.name is not None:
            problem.name = validate_problem_name(data.name)
        if data.location is not None:
            problem.location = validate_location(data.location)
        if data.is_public is not None:
            problem.is_public = data.is_public
        for key in ("description", "difficulty", "wall_photo_url"):
            if key in changes:
                setattr(problem, key, changes[key])
        if data.holds is not None:
            problem.holds = _validate_holds(data.holds)
        if data.tags is not None:
            problem.tags = list(data.tags)

        updated = await self.problem_repository.update(problem)
        await self.session.commit()
        return updated

    async def delete_problem(self, problem_id: UUID, user_id: UUID) -> None:
        await self._get_owned_problem(problem_id, user_id)
        await self.problem_repository.delete(problem_id)
        await self.session.commit()
        logger.info("Problem %s deleted by %s", problem_id, user_id)

    async def _get_owned_problem(
        self, problem_id: UUID, user_id: UUID
    ) -> ClimbingProblem:
        problem = await self.problem_repository.filter_one_or_raise(id=problem_id)
        if problem.creator_id != user_id:
            raise DomainError(
                code=DomainErrorCode.NOT_PROBLEM_OWNER,
                message="Only the creator can change this problem",
                details={
                    "problem_id": str(problem_id),
                    "user_id": str(user_id),
                },
            )
        return problem
