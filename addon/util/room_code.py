import random
import re
import string

from addon.core.config import settings
from addon.core.error import DomainError, DomainErrorCode

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length: int | None = None) -> str:
    return "".join(
        random.choices(ROOM_CODE_ALPHABET, k=length or settings.ROOM_CODE_LENGTH)
    )


def normalize_room_code(room_code: str) -> str:
    normalized = room_code.strip().upper()
    pattern = rf"^[A-Z0-9]{{{settings.ROOM_CODE_LENGTH}}}$"
    if not re.match(pattern, normalized):
        raise DomainError(
            code=DomainErrorCode.INVALID_ROOM_CODE,
            message=(
                f"Room code must be {settings.ROOM_CODE_LENGTH} letters or digits"
            ),
            details={
                "room_code": room_code,
            },
        )
    return normalized
