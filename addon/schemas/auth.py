from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

TokenType = Literal["access", "refresh"]


class JwtTokenPayload(BaseModel):
    sub: str
    typ: TokenType
    exp: int
    iat: int = Field(default_factory=lambda: int(datetime.now(UTC).timestamp()))


class RegisterRequest(BaseModel):
    username: str
    email: str | None = None


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    user_id: str
    token_type: str = "bearer"
