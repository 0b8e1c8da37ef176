import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID

import httpx

from addon.core.config import settings
from addon.core.error import DomainError
from addon.models.game_session import GameStatus
from addon.schemas.game import (
    GameMoveResponse,
    GamePlayerResponse,
    GameSessionResponse,
    GameStateResponse,
)

logger = logging.getLogger(__name__)


class GameStateSource(Protocol):
    async def get_game_state(self, game_id: UUID) -> GameStateResponse: ...


@dataclass(frozen=True)
class GameView:
    session: GameSessionResponse | None = None
    players: list[GamePlayerResponse] = field(default_factory=list)
    moves: list[GameMoveResponse] = field(default_factory=list)
    current_player: GamePlayerResponse | None = None
    is_my_turn: bool = False
    my_player: GamePlayerResponse | None = None
    is_host: bool = False
    can_start: bool = False

    @classmethod
    def from_state(cls, state: GameStateResponse, viewer_id: UUID) -> "GameView":
        session = state.session
        players = sorted(state.players, key=lambda p: p.turn_order)
        moves = sorted(state.moves, key=lambda m: m.move_number)
        is_host = session.host_id == viewer_id

        return cls(
            session=session,
            players=players,
            moves=moves,
            current_player=next(
                (p for p in players if p.user_id == session.current_turn_user_id),
                None,
            ),
            is_my_turn=session.current_turn_user_id == viewer_id,
            my_player=next((p for p in players if p.user_id == viewer_id), None),
            is_host=is_host,
            can_start=(
                is_host
                and session.status == GameStatus.LOBBY
                and len(players) >= settings.MIN_PLAYERS
            ),
        )


class GameStateObserver:
    """Polling projection of one game for one viewing user.

    Polls only while the game is active and it is someone else's turn. Fetches
    are serialized, and nothing is published once ``stop`` has been called.
    """

    def __init__(
        self,
        source: GameStateSource,
        game_id: UUID,
        viewer_id: UUID,
        *,
        interval: float | None = None,
        on_change: Callable[[GameView], Awaitable[None] | None] | None = None,
    ):
        self.source = source
        self.game_id = game_id
        self.viewer_id = viewer_id
        self.interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval
        self.on_change = on_change

        self.view = GameView()
        self._fetch_lock = asyncio.Lock()
        self._poll_task: asyncio.Task | None = None
        self._stopped = False

    @property
    def is_running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    @property
    def should_poll(self) -> bool:
        session = self.view.session
        if session is None:
            return False
        return session.status == GameStatus.ACTIVE and not self.view.is_my_turn

    async def start(self) -> GameView:
        if self._stopped:
            raise RuntimeError("observer has been stopped")
        if self.is_running:
            return self.view

        view = await self.refresh()
        self._poll_task = asyncio.create_task(self._poll_loop())
        return view

    async def stop(self) -> None:
        self._stopped = True
        if self._poll_task is None:
            return

        self._poll_task.cancel()
        with suppress(asyncio.CancelledError):
            await self._poll_task
        self._poll_task = None

    async def refresh(self) -> GameView:
        async with self._fetch_lock:
            state = await self.source.get_game_state(self.game_id)
            if self._stopped:
                return self.view

            self.view = GameView.from_state(state, self.viewer_id)
            await self._notify(self.view)
            return self.view

    async def _poll_loop(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self.interval)
            if not self.should_poll:
                continue
            try:
                await self.refresh()
            except DomainError as e:
                logger.warning(
                    "Polling game %s failed with %s: %s",
                    self.game_id,
                    e.code,
                    e.message,
                )
            except httpx.HTTPError as e:
                logger.warning("Polling game %s failed: %s", self.game_id, e)
            except Exception:
                logger.exception("Polling game %s failed unexpectedly", self.game_id)

    async def _notify(self, view: GameView) -> None:
        if self.on_change is None:
            return
        result = self.on_change(view)
        if asyncio.iscoroutine(result):
            await result

    async def __aenter__(self) -> "GameStateObserver":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()
