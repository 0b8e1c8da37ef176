from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import jwt
from jose.exceptions import JWTError
from pydantic import ValidationError

from addon.core.config import settings
from addon.schemas.auth import JwtTokenPayload, TokenType


def _create_token(user_id: UUID, typ: TokenType, expires_delta: timedelta) -> str:
    payload = JwtTokenPayload(
        sub=str(user_id),
        typ=typ,
        exp=int((datetime.now(UTC) + expires_delta).timestamp()),
    )
    return str(
        jwt.encode(
            payload.model_dump(),
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    )


def create_access_token(user_id: UUID) -> str:
    return _create_token(
        user_id, "access", timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def create_refresh_token(user_id: UUID) -> str:
    return _create_token(
        user_id, "refresh", timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    )


def decode_token(token: str) -> JwtTokenPayload | None:
    """Verify signature and expiry; ``None`` for anything that does not check out."""
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
        return JwtTokenPayload.model_validate(claims)
    except (JWTError, ValidationError):
        return None


def get_user_id_from_token(token: str, typ: TokenType = "access") -> UUID | None:
    payload = decode_token(token)
    if payload is None or payload.typ != typ:
        return None
    try:
        return UUID(payload.sub)
    except ValueError:
        return None
