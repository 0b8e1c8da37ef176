import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainError, DomainErrorCode
from addon.models.user import User
from addon.repositories.user_repository import UserRepository
from addon.util.validators import validate_email, validate_username

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        session: AsyncSession,
        user_repository: UserRepository | None = None,
    ):
        self.session = session
        self.user_repository = user_repository or UserRepository(session)

    async def register(self, username: str, email: str | None = None) -> User:
        username = validate_username(username.strip())
        email = validate_email(email.strip() if email else None)

        if email and await self.user_repository.get_by_email(email):
            raise DomainError(
                code=DomainErrorCode.EMAIL_ALREADY_REGISTERED,
                message="Email is already registered",
                details={
                    "email": email,
                },
            )

        created_user = await self.user_repository.create(
            User(username=username, email=email)
        )
        await self.session.commit()

        logger.info("Registered user %s (%s)", created_user.id, username)
        return created_user

    async def get_user_by_id(self, user_id: UUID) -> User | None:
        return await self.user_repository.get_by_uuid(user_id)
