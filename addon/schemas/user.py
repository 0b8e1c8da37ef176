from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserInfoResponse(BaseModel):
    id: UUID
    username: str
    email: str | None = None
    created_at: datetime | None = None
