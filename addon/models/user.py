from uuid import UUID, uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from addon.models.time_stamp_mixin import TimeStampMixin
from addon.util.validators import validate_email, validate_username


class User(TimeStampMixin, SQLModel, table=True):  # type: ignore[call-arg]
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
    )
    username: str = Field(max_length=20)
    email: str | None = Field(default=None, unique=True, index=True)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:  # pragma: no cover
        return validate_username(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:  # pragma: no cover
        return validate_email(v)
