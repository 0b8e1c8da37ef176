from fastapi import APIRouter, Depends, status

from addon.dependencies.auth import get_current_user
from addon.models.user import User
from addon.schemas.user import UserInfoResponse

router = APIRouter()


@router.get(
    "/me",
    response_model=UserInfoResponse,
    status_code=status.HTTP_200_OK,
)
async def read_current_user(
    current_user: User = Depends(get_current_user),
) -> UserInfoResponse:
    return UserInfoResponse(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        created_at=current_user.created_at,
    )
