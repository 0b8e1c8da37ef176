from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from addon.core.jwt import get_user_id_from_token
from addon.dependencies.services import get_user_service
from addon.models.user import User
from addon.services.user_service import UserService

auth_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    auth: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Resolve the bearer access token to a stored user, or answer 401."""
    if auth is None:
        raise _unauthorized("Not authenticated")

    user_id = get_user_id_from_token(auth.credentials)
    if user_id is None:
        raise _unauthorized("Could not validate credentials")

    user = await user_service.get_user_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user
