import re

from addon.core.config import settings
from addon.core.error import DomainError, DomainErrorCode

MAX_LOCATION_LENGTH = 100
MAX_HOLD_DESCRIPTION_LENGTH = 200
MAX_USERNAME_LENGTH = 20
MAX_PROBLEM_NAME_LENGTH = 100


def validate_username(username: str) -> str:
    if not username or username.isspace():
        raise DomainError(
            code=DomainErrorCode.INVALID_USERNAME,
            message="Username cannot be empty",
            details={
                "username": username,
            },
        )

    if len(username) > MAX_USERNAME_LENGTH:
        raise DomainError(
            code=DomainErrorCode.INVALID_USERNAME,
            message=f"Username must be {MAX_USERNAME_LENGTH} characters or less",
            details={
                "username": username,
                "length": len(username),
            },
        )

    if not re.match(r"^\w+$", username):
        raise DomainError(
            code=DomainErrorCode.INVALID_USERNAME,
            message="Username can only contain letters, numbers and underscores",
            details={
                "username": username,
            },
        )

    return username


def validate_email(email: str | None) -> str | None:
    if email is None:
        return email

    if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
        raise DomainError(
            code=DomainErrorCode.INVALID_EMAIL,
            message="Email address is not valid",
            details={
                "email": email,
            },
        )
    return email.lower()


def validate_location(location: str) -> str:
    stripped = location.strip()
    if not stripped:
        raise DomainError(
            code=DomainErrorCode.INVALID_LOCATION,
            message="Location cannot be empty",
            details={
                "location": location,
            },
        )

    if len(stripped) > MAX_LOCATION_LENGTH:
        raise DomainError(
            code=DomainErrorCode.INVALID_LOCATION,
            message=f"Location must be {MAX_LOCATION_LENGTH} characters or less",
            details={
                "location": location,
                "length": len(stripped),
            },
        )

    return stripped


def validate_max_players(max_players: int) -> int:
    if not settings.MIN_PLAYERS <= max_players <= settings.MAX_PLAYERS_LIMIT:
        raise DomainError(
            code=DomainErrorCode.INVALID_MAX_PLAYERS,
            message=(
                f"Max players must be between {settings.MIN_PLAYERS} "
                f"and {settings.MAX_PLAYERS_LIMIT}"
            ),
            details={
                "max_players": max_players,
                "min": settings.MIN_PLAYERS,
                "max": settings.MAX_PLAYERS_LIMIT,
            },
        )
    return max_players


def validate_hold_description(hold_description: str) -> str:
    stripped = hold_description.strip()
    if not stripped:
        raise DomainError(
            code=DomainErrorCode.INVALID_MOVE,
            message="Hold description cannot be empty",
            details={
                "hold_description": hold_description,
            },
        )

    if len(stripped) > MAX_HOLD_DESCRIPTION_LENGTH:
        raise DomainError(
            code=DomainErrorCode.INVALID_MOVE,
            message=(
                f"Hold description must be {MAX_HOLD_DESCRIPTION_LENGTH} "
                "characters or less"
            ),
            details={
                "length": len(stripped),
            },
        )

    return stripped


def validate_problem_name(name: str) -> str:
    stripped = name.strip()
    if not stripped or len(stripped) > MAX_PROBLEM_NAME_LENGTH:
        raise DomainError(
            code=DomainErrorCode.INVALID_PROBLEM,
            message=(
                f"Problem name must be between 1 and {MAX_PROBLEM_NAME_LENGTH} "
                "characters"
            ),
            details={
                "name": name,
            },
        )
    return stripped
