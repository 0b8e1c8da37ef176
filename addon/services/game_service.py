import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.config import settings
from addon.core.error import DomainError, DomainErrorCode
from addon.models.game_move import GameMove
from addon.models.game_player import GamePlayer
from addon.models.game_session import GameSession, GameStatus
from addon.models.user import User
from addon.repositories.game_move_repository import GameMoveRepository
from addon.repositories.game_player_repository import GamePlayerRepository
from addon.repositories.game_session_repository import GameSessionRepository
from addon.schemas.game import (
    GameMoveResponse,
    GamePlayerResponse,
    GameSessionResponse,
    GameStateResponse,
)
from addon.util.room_code import generate_room_code, normalize_room_code
from addon.util.validators import (
    validate_hold_description,
    validate_location,
    validate_max_players,
)

logger = logging.getLogger(__name__)


class GameService:
    """Turn-based add-on game engine.

    Every public operation runs as a single transaction that is committed at
    its end, so a failure or cancellation part way through leaves no rows
    behind. Mutations of the turn pointer go through compare-and-swap updates
    on the session row.
    """

    def __init__(
        self,
        session: AsyncSession,
        game_session_repository: GameSessionRepository | None = None,
        game_player_repository: GamePlayerRepository | None = None,
        game_move_repository: GameMoveRepository | None = None,
    ):
        self.session = session
        self.game_session_repository = (
            game_session_repository or GameSessionRepository(session)
        )
        self.game_player_repository = (
            game_player_repository or GamePlayerRepository(session)
        )
        self.game_move_repository = game_move_repository or GameMoveRepository(
            session
        )

    async def generate_unique_room_code(self, max_attempts: int | None = None) -> str:
        attempts = max_attempts or settings.ROOM_CODE_MAX_ATTEMPTS
        for _ in range(attempts):
            room_code = generate_room_code()
            if not await self.game_session_repository.is_room_code_in_use(room_code):
                return room_code

        raise DomainError(
            code=DomainErrorCode.ROOM_CODE_CREATE_FAILED,
            message=f"Cannot create room code after {attempts} tries",
            details={
                "max_attempts": attempts,
            },
        )

    async def create_session(
        self,
        host: User,
        location: str,
        max_players: int,
        idempotency_key: str | None = None,
    ) -> GameSession:
        location = validate_location(location)
        max_players = validate_max_players(max_players)
        host_id, host_username = host.id, host.username

        if idempotency_key:
            existing = await self.game_session_repository.filter_one(
                host_id=host_id, idempotency_key=idempotency_key
            )
            if existing:
                return existing

        attempts = settings.ROOM_CODE_MAX_ATTEMPTS
        for _ in range(attempts):
            room_code = await self.generate_unique_room_code()
            game = GameSession(
                host_id=host_id,
                room_code=room_code,
                location=location,
                status=GameStatus.LOBBY,
                current_turn_user_id=None,
                max_players=max_players,
                idempotency_key=idempotency_key,
            )

            try:
                created_game = await self.game_session_repository.create(game)
                await self._add_player(
                    game_id=created_game.id,
                    user_id=host_id,
                    username=host_username,
                    turn_order=0,
                )
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                if idempotency_key:
                    existing = await self.game_session_repository.filter_one(
                        host_id=host_id, idempotency_key=idempotency_key
                    )
                    if existing:
                        return existing
                logger.warning(
                    "Room code %s was taken concurrently, retrying", room_code
                )
                continue

            logger.info(
                "Game %s created by %s with room code %s",
                created_game.id,
                host_id,
                created_game.room_code,
            )
            return created_game

        raise DomainError(
            code=DomainErrorCode.ROOM_CODE_CREATE_FAILED,
            message=f"Cannot create room code after {attempts} tries",
            details={
                "max_attempts": attempts,
            },
        )

    async def join_session(self, user: User, room_code: str) -> GameSession:
        normalized_code = normalize_room_code(room_code)

        game = await self.game_session_repository.get_lobby_by_room_code(
            normalized_code
        )
        if not game:
            raise DomainError(
                code=DomainErrorCode.GAME_NOT_FOUND,
                message="Game not found or already started",
                details={"room_code": normalized_code},
            )

        existing_player = await self.game_player_repository.get_player(
            game.id, user.id
        )
        if existing_player:
            return game

        player_count = await self.game_player_repository.count(game_id=game.id)
        if player_count >= game.max_players:
            raise DomainError(
                code=DomainErrorCode.GAME_FULL,
                message=f"Game {game.room_code} is full",
                details={
                    "game_id": str(game.id),
                    "max_players": game.max_players,
                },
            )

        game_id, user_id, username = game.id, user.id, user.username
        if await self.game_session_repository.touch_lobby(game_id) is None:
            await self.session.rollback()
            raise DomainError(
                code=DomainErrorCode.GAME_NOT_FOUND,
                message="Game not found or already started",
                details={"room_code": normalized_code},
            )

        try:
            await self._add_player(
                game_id=game_id,
                user_id=user_id,
                username=username,
                turn_order=player_count,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Join race on game %s for user %s", game_id, user_id)
            raise DomainError(
                code=DomainErrorCode.JOIN_CONFLICT,
                message="Another player joined at the same time, try again",
                details={"game_id": str(game_id)},
            ) from e

        logger.info(
            "User %s joined game %s at turn order %d", user_id, game_id, player_count
        )
        return game

    async def start_session(self, host_user_id: UUID, game_id: UUID) -> GameSession:
        game = await self.game_session_repository.filter_one_or_raise(id=game_id)

        if game.host_id != host_user_id:
            raise DomainError(
                code=DomainErrorCode.NOT_HOST,
                message="Only the host can start the game",
                details={
                    "user_id": str(host_user_id),
                    "host_id": str(game.host_id),
                    "game_id": str(game_id),
                },
            )

        if game.status != GameStatus.LOBBY:
            raise DomainError(
                code=DomainErrorCode.GAME_ALREADY_STARTED,
                message=f"Game {game_id} has already started",
                details={"game_id": str(game_id), "status": game.status.value},
            )

        players = await self.game_player_repository.list_active_in_turn_order(game_id)
        if len(players) < settings.MIN_PLAYERS:
            raise DomainError(
                code=DomainErrorCode.NOT_ENOUGH_PLAYERS,
                message=f"Need at least {settings.MIN_PLAYERS} players to start",
                details={
                    "game_id": str(game_id),
                    "current_players": len(players),
                },
            )

        started = await self.game_session_repository.mark_started(
            game_id, first_turn_user_id=players[0].user_id
        )
        if started is None:
            await self.session.rollback()
            raise DomainError(
                code=DomainErrorCode.GAME_ALREADY_STARTED,
                message=f"Game {game_id} has already started",
                details={"game_id": str(game_id)},
            )

        await self.session.commit()
        logger.info("Game %s started, first turn %s", game_id, players[0].user_id)
        return started

    async def add_move(
        self,
        user: User,
        game_id: UUID,
        hold_description: str,
        photo_url: str | None = None,
        idempotency_key: str | None = None,
    ) -> GameMove:
        user_id, username = user.id, user.username
        game = await self.game_session_repository.filter_one_or_raise(id=game_id)

        if idempotency_key:
            previous = await self.game_move_repository.get_by_idempotency_key(
                game_id, user_id, idempotency_key
            )
            if previous:
                return previous

        if game.current_turn_user_id != user_id:
            raise DomainError(
                code=DomainErrorCode.NOT_YOUR_TURN,
                message="Not your turn",
                details={
                    "game_id": str(game_id),
                    "user_id": str(user_id),
                    "current_turn_user_id": (
                        str(game.current_turn_user_id)
                        if game.current_turn_user_id
                        else None
                    ),
                },
            )

        hold_description = validate_hold_description(hold_description)

        players = await self.game_player_repository.list_active_in_turn_order(game_id)
        next_turn_user_id = self._next_player(players, user_id, game_id).user_id

        observed_move_count = game.move_count
        advanced = await self.game_session_repository.advance_turn(
            game_id,
            expected_turn_user_id=user_id,
            expected_move_count=observed_move_count,
            next_turn_user_id=next_turn_user_id,
        )
        if advanced is None:
            await self.session.rollback()
            logger.warning("Turn conflict on game %s for user %s", game_id, user_id)
            raise DomainError(
                code=DomainErrorCode.TURN_CONFLICT,
                message="The turn changed while your move was being saved",
                details={"game_id": str(game_id), "user_id": str(user_id)},
            )

        move = GameMove(
            game_id=game_id,
            move_number=observed_move_count + 1,
            added_by_user_id=user_id,
            added_by_username=username,
            hold_description=hold_description,
            photo_url=photo_url,
            idempotency_key=idempotency_key,
        )
        try:
            created_move = await self.game_move_repository.create(move)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Move number race on game %s", game_id)
            raise DomainError(
                code=DomainErrorCode.TURN_CONFLICT,
                message="The move sequence changed while your move was being saved",
                details={"game_id": str(game_id), "user_id": str(user_id)},
            ) from e

        logger.info(
            "Move %d added to game %s by %s, next turn %s",
            created_move.move_number,
            game_id,
            user_id,
            next_turn_user_id,
        )
        return created_move

    async def get_session(self, game_id: UUID) -> GameSession:
        return await self.game_session_repository.filter_one_or_raise(id=game_id)

    async def get_game_state(self, game_id: UUID) -> GameStateResponse:
        game = await self.game_session_repository.filter_one_or_raise(id=game_id)
        players = await self.game_player_repository.list_in_turn_order(game_id)
        moves = await self.game_move_repository.list_in_move_order(game_id)

        current_player = next(
            (p for p in players if p.user_id == game.current_turn_user_id), None
        )

        return GameStateResponse(
            session=GameSessionResponse.model_validate(game),
            players=[GamePlayerResponse.model_validate(p) for p in players],
            moves=[GameMoveResponse.model_validate(m) for m in moves],
            current_player=(
                GamePlayerResponse.model_validate(current_player)
                if current_player
                else None
            ),
        )

    async def _add_player(
        self, game_id: UUID, user_id: UUID, username: str, turn_order: int
    ) -> GamePlayer:
        player = GamePlayer(
            game_id=game_id,
            user_id=user_id,
            username=username,
            turn_order=turn_order,
            is_eliminated=False,
        )
        return await self.game_player_repository.create(player)

    @staticmethod
    def _next_player(
        players: list[GamePlayer], current_user_id: UUID, game_id: UUID
    ) -> GamePlayer:
        position = next(
            (i for i, p in enumerate(players) if p.user_id == current_user_id), None
        )
        if position is None:
            raise DomainError(
                code=DomainErrorCode.PLAYER_NOT_FOUND,
                message="Current player not found in players list",
                details={"game_id": str(game_id), "user_id": str(current_user_id)},
            )
        return players[(position + 1) % len(players)]
