from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from addon.dependencies.auth import get_current_user
from addon.dependencies.services import get_problem_service
from addon.models.user import User
from addon.schemas.common import MessageResponse
from addon.schemas.problem import (
    CreateProblemRequest,
    ProblemResponse,
    UpdateProblemRequest,
)
from addon.services.problem_service import ProblemService

router = APIRouter()


@router.post(
    "",
    response_model=ProblemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_problem(
    request: CreateProblemRequest,
    current_user: User = Depends(get_current_user),
    problem_service: ProblemService = Depends(get_problem_service),
):
    problem = await problem_service.create_problem(current_user.id, request)
    return ProblemResponse.model_validate(problem)


@router.get(
    "",
    response_model=list[ProblemResponse],
    status_code=status.HTTP_200_OK,
)
async def list_problems(
    location: str | None = None,
    difficulty: str | None = None,
    limit: int = Query(default=50, ge=1, le=100),
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    problem_service: ProblemService = Depends(get_problem_service),
):
    problems = await problem_service.list_problems(
        location=location, difficulty=difficulty, limit=limit
    )
    return [ProblemResponse.model_validate(p) for p in problems]


@router.get(
    "/search",
    response_model=list[ProblemResponse],
    status_code=status.HTTP_200_OK,
)
async def search_problems(
    q: str,
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    problem_service: ProblemService = Depends(get_problem_service),
):
    problems = await problem_service.search_problems(q)
    return [ProblemResponse.model_validate(p) for p in problems]


@router.get(
    "/mine",
    response_model=list[ProblemResponse],
    status_code=status.HTTP_200_OK,
)
async def list_my_problems(
    current_user: User = Depends(get_current_user),
    problem_service: ProblemService = Depends(get_problem_service),
):
    problems = await problem_service.list_user_problems(current_user.id)
    return [ProblemResponse.model_validate(p) for p in problems]


@router.get(
    "/{problem_id}",
    response_model=ProblemResponse,
    status_code=status.HTTP_200_OK,
)
async def read_problem(
    problem_id: UUID,
    current_user: User = Depends(get_current_user),
    problem_service: ProblemService = Depends(get_problem_service),
):
    problem = await problem_service.get_problem(problem_id, current_user.id)
    return ProblemResponse.model_validate(problem)


@router.patch(
    "/{problem_id}",
    response_model=ProblemResponse,
    status_code=status.HTTP_200_OK,
)
async def update_problem(
    problem_id: UUID,
    request: UpdateProblemRequest,
    current_user: User = Depends(get_current_user),
    problem_service: ProblemService = Depends(get_problem_service),
):
    problem = await problem_service.update_problem(
        problem_id, current_user.id, request
    )
    return ProblemResponse.model_validate(problem)


@router.delete(
    "/{problem_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_problem(
    problem_id: UUID,
    current_user: User = Depends(get_current_user),
    problem_service: ProblemService = Depends(get_problem_service),
):
    await problem_service.delete_problem(problem_id, current_user.id)
    return MessageResponse(message="Problem deleted successfully")
