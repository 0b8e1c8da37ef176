import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from addon.db.session import get_session
from addon.dependencies.auth import get_current_user
from addon.dependencies.repositories import (
    get_game_move_repository,
    get_game_player_repository,
    get_game_session_repository,
    get_problem_repository,
    get_user_repository,
)
from addon.dependencies.services import (
    get_game_service,
    get_problem_service,
    get_user_service,
)
from addon.main import app
from addon.models.user import User


@pytest_asyncio.fixture
async def client(mocker):
    mock_session = mocker.AsyncMock()

    mock_user_repository = mocker.AsyncMock()
    mock_game_session_repository = mocker.AsyncMock()
    mock_game_player_repository = mocker.AsyncMock()
    mock_game_move_repository = mocker.AsyncMock()
    mock_problem_repository = mocker.AsyncMock()

    mock_user_service = mocker.AsyncMock()
    mock_game_service = mocker.AsyncMock()
    mock_problem_service = mocker.AsyncMock()

    app.dependency_overrides[get_session] = lambda: mock_session

    app.dependency_overrides[get_user_repository] = lambda: mock_user_repository
    app.dependency_overrides[get_game_session_repository] = (
        lambda: mock_game_session_repository
    )
    app.dependency_overrides[get_game_player_repository] = (
        lambda: mock_game_player_repository
    )
    app.dependency_overrides[get_game_move_repository] = (
        lambda: mock_game_move_repository
    )
    app.dependency_overrides[get_problem_repository] = lambda: mock_problem_repository

    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    app.dependency_overrides[get_game_service] = lambda: mock_game_service
    app.dependency_overrides[get_problem_service] = lambda: mock_problem_service

    mocks = {
        "session": mock_session,
        "repositories": {
            "user": mock_user_repository,
            "game_session": mock_game_session_repository,
            "game_player": mock_game_player_repository,
            "game_move": mock_game_move_repository,
            "problem": mock_problem_repository,
        },
        "services": {
            "user_service": mock_user_service,
            "game_service": mock_game_service,
            "problem_service": mock_problem_service,
        },
    }

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client_instance:
        yield client_instance, mocks

    app.dependency_overrides.clear()


@pytest.fixture
def mock_user():
    return User(
        id=uuid.uuid4(),
        username="Climber",
        email="climber@example.com",
    )


@pytest_asyncio.fixture
async def login_client(client, mock_user):
    _, mocks = client

    app.dependency_overrides[get_current_user] = lambda: mock_user

    auth_client = AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": "Bearer test_token"},
    )

    try:
        yield auth_client, mocks
    finally:
        await auth_client.aclose()
