from fastapi import APIRouter, Depends, HTTPException, status

from addon.core.jwt import (
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
)
from addon.dependencies.services import get_user_service
from addon.schemas.auth import RefreshRequest, RegisterRequest, TokenResponse
from addon.services.user_service import UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
):
    user = await user_service.register(request.username, request.email)
    return TokenResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
        user_id=str(user.id),
    )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
)
async def refresh(
    request: RefreshRequest,
    user_service: UserService = Depends(get_user_service),
):
    user_id = get_user_id_from_token(request.refresh_token, typ="refresh")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    user = await user_service.get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return TokenResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
        user_id=str(user.id),
    )
