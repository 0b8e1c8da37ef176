import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import UUID, uuid4

import httpx

from addon.core.config import settings
from addon.core.error import DomainError, DomainErrorCode
from addon.schemas.game import GameMoveResponse, GameSessionResponse, GameStateResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AddOnApiClient:
    """Async HTTP client for the game API.

    Error responses are raised as ``DomainError`` carrying the server's code.
    Retryable failures (store outages and write conflicts) are retried once
    after a short backoff; create and add-move requests carry an idempotency
    key that is reused on the retry.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        retry_backoff: float | None = None,
    ):
        self.access_token = access_token
        self.retry_backoff = (
            settings.CLIENT_RETRY_BACKOFF_SECONDS
            if retry_backoff is None
            else retry_backoff
        )
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.CLIENT_TIMEOUT_SECONDS,
        )

    async def __aenter__(self) -> "AddOnApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def create_game(self, location: str, max_players: int) -> GameSessionResponse:
        body = {
            "location": location,
            "max_players": max_players,
            "idempotency_key": uuid4().hex,
        }
        data = await self._with_retry(lambda: self._request("POST", "/games", body))
        return GameSessionResponse.model_validate(data)

    async def join_game(self, room_code: str) -> GameSessionResponse:
        body = {"room_code": room_code}
        data = await self._with_retry(
            lambda: self._request("POST", "/games/join", body)
        )
        return GameSessionResponse.model_validate(data)

    async def start_game(self, game_id: UUID) -> GameSessionResponse:
        data = await self._request("POST", f"/games/{game_id}/start")
        return GameSessionResponse.model_validate(data)

    async def add_move(
        self,
        game_id: UUID,
        hold_description: str,
        photo_url: str | None = None,
    ) -> GameMoveResponse:
        body = {
            "hold_description": hold_description,
            "photo_url": photo_url,
            "idempotency_key": uuid4().hex,
        }
        data = await self._with_retry(
            lambda: self._request("POST", f"/games/{game_id}/moves", body)
        )
        return GameMoveResponse.model_validate(data)

    async def get_game_state(self, game_id: UUID) -> GameStateResponse:
        data = await self._with_retry(
            lambda: self._request("GET", f"/games/{game_id}/state")
        )
        return GameStateResponse.model_validate(data)

    async def _with_retry(self, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except DomainError as e:
            if not e.is_retryable:
                raise
            logger.warning("Retrying after %s in %.2fs", e.code, self.retry_backoff)

        await asyncio.sleep(self.retry_backoff)
        return await call()

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> Any:
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = await self._client.request(
                method,
                f"{settings.API_V1_STR}{path}",
                json=body,
                headers=headers,
            )
        except httpx.TransportError as e:
            raise DomainError(
                code=DomainErrorCode.STORE_UNAVAILABLE,
                message="Could not reach the game server",
                details={"path": path, "error": str(e)},
            ) from e

        if response.is_error:
            raise self._to_domain_error(response)
        return response.json()

    @staticmethod
    def _to_domain_error(response: httpx.Response) -> DomainError:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            payload = {}

        if response.status_code >= 500 and "code" not in payload:
            return DomainError(
                code=DomainErrorCode.STORE_UNAVAILABLE,
                details={"status_code": response.status_code},
            )

        try:
            code = DomainErrorCode(payload.get("code"))
        except ValueError:
            # Not a domain error body (auth or request validation failure).
            response.raise_for_status()
            raise

        detail = payload.get("detail")
        return DomainError(
            code=code,
            message=detail if isinstance(detail, str) else None,
            details=payload.get("error_details") or {},
        )
