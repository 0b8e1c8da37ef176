import uuid

import pytest
import pytest_asyncio

from addon.core.error import DomainError, DomainErrorCode
from addon.models.climbing_problem import ClimbingProblem
from addon.schemas.problem import CreateProblemRequest, Hold, UpdateProblemRequest
from addon.services.problem_service import ProblemService


@pytest_asyncio.fixture
async def mock_problem_service(mocker):
    session = mocker.AsyncMock()
    problem_repository = mocker.AsyncMock()

    return ProblemService(session=session, problem_repository=problem_repository)


@pytest.fixture
def problem_id():
    return uuid.uuid4()


def _make_problem(problem_id, creator_id, **kwargs) -> ClimbingProblem:
    values = {
        "id": problem_id,
        "creator_id": creator_id,
        "name": "Crimp Line",
        "location": "Gym A",
        "difficulty": "V3",
        "is_public": True,
    }
    values.update(kwargs)
    return ClimbingProblem(**values)


class TestProblemServiceCreate:
    @pytest.mark.asyncio
    async def test_create_problem(self, mock_problem_service, user_id):
        mock_problem_service.problem_repository.create.side_effect = lambda p: p
        data = CreateProblemRequest(
            name=" Crimp Line ",
            location="Gym A",
            difficulty="V3",
            holds=[
                Hold(id="h1", x=10, y=90, type="start"),
                Hold(id="h2", x=50.5, y=10, type="finish", color="red"),
            ],
            tags=["crimpy"],
        )

        problem = await mock_problem_service.create_problem(user_id, data)

        assert problem.creator_id == user_id
        assert problem.name == "Crimp Line"
        assert [h["id"] for h in problem.holds] == ["h1", "h2"]
        assert problem.holds[1]["color"] == "red"
        assert problem.tags == ["crimpy"]
        mock_problem_service.session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_problem_duplicate_hold(self, mock_problem_service, user_id):
        data = CreateProblemRequest(
            name="Crimp Line",
            location="Gym A",
            holds=[Hold(id="h1", x=1, y=1), Hold(id="h1", x=2, y=2)],
        )

        with pytest.raises(DomainError) as exc_info:
            await mock_problem_service.create_problem(user_id, data)

        assert exc_info.value.code == DomainErrorCode.INVALID_HOLD
        mock_problem_service.problem_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_problem_blank_name(self, mock_problem_service, user_id):
        data = CreateProblemRequest(name="  ", location="Gym A")

        with pytest.raises(DomainError) as exc_info:
            await mock_problem_service.create_problem(user_id, data)

        assert exc_info.value.code == DomainErrorCode.INVALID_PROBLEM


class TestProblemServiceRead:
    @pytest.mark.asyncio
    async def test_get_private_problem_as_owner(
        self, mock_problem_service, problem_id, user_id
    ):
        problem = _make_problem(problem_id, user_id, is_public=False)
        mock_problem_service.problem_repository.filter_one_or_raise.return_value = (
            problem
        )

        assert await mock_problem_service.get_problem(problem_id, user_id) is problem

    @pytest.mark.asyncio
    async def test_get_private_problem_as_stranger(
        self, mock_problem_service, problem_id, user_id
    ):
        problem = _make_problem(problem_id, uuid.uuid4(), is_public=False)
        mock_problem_service.problem_repository.filter_one_or_raise.return_value = (
            problem
        )

        with pytest.raises(DomainError) as exc_info:
            await mock_problem_service.get_problem(problem_id, user_id)

        assert exc_info.value.code == DomainErrorCode.PROBLEM_NOT_FOUND

    @pytest.mark.asyncio
    async def test_list_problems_caps_limit(self, mock_problem_service):
        mock_problem_service.problem_repository.list_public.return_value = []

        await mock_problem_service.list_problems(location="Gym", limit=500)

        mock_problem_service.problem_repository.list_public.assert_awaited_once_with(
            location="Gym", difficulty=None, limit=100
        )

    @pytest.mark.asyncio
    async def test_search_blank_query(self, mock_problem_service):
        assert await mock_problem_service.search_problems("   ") == []
        mock_problem_service.problem_repository.search_public.assert_not_awaited()


class TestProblemServiceUpdate:
    @pytest.mark.asyncio
    async def test_update_problem(self, mock_problem_service, problem_id, user_id):
        problem = _make_problem(problem_id, user_id, description="old")
        repo = mock_problem_service.problem_repository
        repo.filter_one_or_raise.return_value = problem
        repo.update.side_effect = lambda p: p

        updated = await mock_problem_service.update_problem(
            problem_id,
            user_id,
            UpdateProblemRequest(name="Renamed", description=None, is_public=False),
        )

        assert updated.name == "Renamed"
        assert updated.description is None
        assert updated.is_public is False
        assert updated.location == "Gym A"
        mock_problem_service.session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_problem_not_owner(
        self, mock_problem_service, problem_id, user_id
    ):
        problem = _make_problem(problem_id, uuid.uuid4())
        repo = mock_problem_service.problem_repository
        repo.filter_one_or_raise.return_value = problem

        with pytest.raises(DomainError) as exc_info:
            await mock_problem_service.update_problem(
                problem_id, user_id, UpdateProblemRequest(name="Mine now")
            )

        assert exc_info.value.code == DomainErrorCode.NOT_PROBLEM_OWNER
        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_problem(self, mock_problem_service, problem_id, user_id):
        repo = mock_problem_service.problem_repository
        repo.filter_one_or_raise.return_value = _make_problem(problem_id, user_id)

        await mock_problem_service.delete_problem(problem_id, user_id)

        repo.delete.assert_awaited_once_with(problem_id)
        mock_problem_service.session.commit.assert_awaited_once()
