from sqlalchemy.ext.asyncio import AsyncSession

from addon.core.error import DomainErrorCode
from addon.models.user import User
from addon.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User, DomainErrorCode.USER_NOT_FOUND)

    async def get_by_email(self, email: str) -> User | None:
        return await self.filter_one(email=email)
