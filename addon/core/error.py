from enum import Enum
from typing import Any


class DomainErrorCode(str, Enum):
    INVALID_LOCATION = "INVALID_LOCATION"
    INVALID_MAX_PLAYERS = "INVALID_MAX_PLAYERS"
    INVALID_MOVE = "INVALID_MOVE"
    INVALID_ROOM_CODE = "INVALID_ROOM_CODE"
    INVALID_USERNAME = "INVALID_USERNAME"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PROBLEM = "INVALID_PROBLEM"
    INVALID_HOLD = "INVALID_HOLD"

    USER_NOT_FOUND = "USER_NOT_FOUND"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    MOVE_NOT_FOUND = "MOVE_NOT_FOUND"
    PROBLEM_NOT_FOUND = "PROBLEM_NOT_FOUND"

    NOT_HOST = "NOT_HOST"
    NOT_PROBLEM_OWNER = "NOT_PROBLEM_OWNER"

    GAME_FULL = "GAME_FULL"
    NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"

    TURN_CONFLICT = "TURN_CONFLICT"
    JOIN_CONFLICT = "JOIN_CONFLICT"

    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    ROOM_CODE_CREATE_FAILED = "ROOM_CODE_CREATE_FAILED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


RETRYABLE_ERROR_CODES = frozenset(
    {
        DomainErrorCode.STORE_UNAVAILABLE,
        DomainErrorCode.TURN_CONFLICT,
        DomainErrorCode.JOIN_CONFLICT,
    }
)


class DomainError(Exception):
    def __init__(
        self,
        code: DomainErrorCode,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message or code.name
        self.details = details or {}
        super().__init__(self.message)

    @property
    def is_retryable(self) -> bool:
        return self.code in RETRYABLE_ERROR_CODES
