import json
import uuid

import httpx
import pytest
import pytest_asyncio

from addon.client.api_client import AddOnApiClient
from addon.core.error import DomainError, DomainErrorCode


def _session_json(game_id, host_id, **kwargs):
    data = {
        "id": str(game_id),
        "host_id": str(host_id),
        "room_code": "ABC123",
        "location": "Gym A",
        "status": "lobby",
        "current_turn_user_id": None,
        "max_players": 4,
        "move_count": 0,
    }
    data.update(kwargs)
    return data


def _move_json(game_id, user_id, move_number=1):
    return {
        "id": str(uuid.uuid4()),
        "game_id": str(game_id),
        "move_number": move_number,
        "added_by_user_id": str(user_id),
        "added_by_username": "Host",
        "hold_description": "red jug",
    }


def _error(status_code, code, detail="error"):
    return httpx.Response(
        status_code,
        json={"detail": detail, "code": code, "error_details": {}},
    )


class RecordingTransport:
    """Replays queued responses and records every request it receives."""

    def __init__(self):
        self.responses: list[httpx.Response | Exception] = []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest_asyncio.fixture
async def api_client(transport):
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(transport),
        base_url="http://test",
    )
    client = AddOnApiClient(
        "http://test",
        "access-token",
        http_client=http_client,
        retry_backoff=0,
    )
    yield client
    await http_client.aclose()


class TestApiClientRequests:
    @pytest.mark.asyncio
    async def test_create_game(self, api_client, transport, game_id, user_id):
        transport.responses.append(
            httpx.Response(201, json=_session_json(game_id, user_id))
        )

        game = await api_client.create_game("Gym A", 4)

        assert game.id == game_id
        assert game.room_code == "ABC123"
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v1/games"
        assert request.headers["Authorization"] == "Bearer access-token"
        body = transport.bodies()[0]
        assert body["location"] == "Gym A"
        assert body["max_players"] == 4
        assert body["idempotency_key"]

    @pytest.mark.asyncio
    async def test_join_game(self, api_client, transport, game_id, user_id):
        transport.responses.append(
            httpx.Response(200, json=_session_json(game_id, user_id))
        )

        await api_client.join_game("abc123")

        assert transport.requests[0].url.path == "/api/v1/games/join"
        assert transport.bodies()[0] == {"room_code": "abc123"}

    @pytest.mark.asyncio
    async def test_get_game_state(self, api_client, transport, game_id, user_id):
        transport.responses.append(
            httpx.Response(
                200,
                json={
                    "session": _session_json(
                        game_id,
                        user_id,
                        status="active",
                        current_turn_user_id=str(user_id),
                        move_count=1,
                    ),
                    "players": [
                        {
                            "game_id": str(game_id),
                            "user_id": str(user_id),
                            "username": "Host",
                            "turn_order": 0,
                        }
                    ],
                    "moves": [_move_json(game_id, user_id)],
                    "current_player": None,
                },
            )
        )

        state = await api_client.get_game_state(game_id)

        assert transport.requests[0].url.path == f"/api/v1/games/{game_id}/state"
        assert state.session.current_turn_user_id == user_id
        assert state.moves[0].hold_description == "red jug"


class TestApiClientErrors:
    @pytest.mark.asyncio
    async def test_add_move_retries_turn_conflict_with_same_key(
        self, api_client, transport, game_id, user_id
    ):
        transport.responses.extend(
            [
                _error(409, "TURN_CONFLICT"),
                httpx.Response(201, json=_move_json(game_id, user_id)),
            ]
        )

        move = await api_client.add_move(game_id, "red jug")

        assert move.move_number == 1
        assert len(transport.requests) == 2
        first, second = transport.bodies()
        assert first["idempotency_key"] == second["idempotency_key"]

    @pytest.mark.asyncio
    async def test_not_your_turn_is_not_retried(
        self, api_client, transport, game_id
    ):
        transport.responses.append(_error(400, "NOT_YOUR_TURN", "Not your turn"))

        with pytest.raises(DomainError) as exc_info:
            await api_client.add_move(game_id, "red jug")

        assert exc_info.value.code == DomainErrorCode.NOT_YOUR_TURN
        assert exc_info.value.message == "Not your turn"
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_store_unavailable_retried_once(self, api_client, transport, game_id):
        transport.responses.extend(
            [_error(503, "STORE_UNAVAILABLE"), _error(503, "STORE_UNAVAILABLE")]
        )

        with pytest.raises(DomainError) as exc_info:
            await api_client.get_game_state(game_id)

        assert exc_info.value.code == DomainErrorCode.STORE_UNAVAILABLE
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_join_conflict_retried(
        self, api_client, transport, game_id, user_id
    ):
        transport.responses.extend(
            [
                _error(409, "JOIN_CONFLICT"),
                httpx.Response(200, json=_session_json(game_id, user_id)),
            ]
        )

        game = await api_client.join_game("ABC123")

        assert game.id == game_id
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_start_game_is_not_retried(self, api_client, transport, game_id):
        transport.responses.append(_error(409, "GAME_ALREADY_STARTED"))

        with pytest.raises(DomainError) as exc_info:
            await api_client.start_game(game_id)

        assert exc_info.value.code == DomainErrorCode.GAME_ALREADY_STARTED
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error_is_store_unavailable(
        self, api_client, transport, game_id
    ):
        transport.responses.extend(
            [httpx.ConnectError("refused"), httpx.ConnectError("refused")]
        )

        with pytest.raises(DomainError) as exc_info:
            await api_client.get_game_state(game_id)

        assert exc_info.value.code == DomainErrorCode.STORE_UNAVAILABLE
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_server_error_without_code(self, api_client, transport, game_id):
        transport.responses.append(httpx.Response(500, text="Internal Server Error"))

        with pytest.raises(DomainError) as exc_info:
            await api_client.start_game(game_id)

        assert exc_info.value.code == DomainErrorCode.STORE_UNAVAILABLE
        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_unauthorized_raises_http_error(
        self, api_client, transport, game_id
    ):
        transport.responses.append(
            httpx.Response(401, json={"detail": "Not authenticated"})
        )

        with pytest.raises(httpx.HTTPStatusError):
            await api_client.start_game(game_id)
