import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from addon.api.v1.endpoints import api_router
from addon.core.config import settings
from addon.core.error import DomainError, DomainErrorCode
from addon.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

app = FastAPI(
    title="AddOn-Core",
    description="Backend for collaborative add-on bouldering games",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> MessageResponse:
    return MessageResponse(message="healthy")


DOMAIN_ERROR_STATUS_CODES = {
    DomainErrorCode.INVALID_LOCATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_MAX_PLAYERS: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_MOVE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_ROOM_CODE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_USERNAME: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_EMAIL: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_PROBLEM: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.INVALID_HOLD: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.GAME_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.PLAYER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.MOVE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.PROBLEM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DomainErrorCode.NOT_HOST: status.HTTP_403_FORBIDDEN,
    DomainErrorCode.NOT_PROBLEM_OWNER: status.HTTP_403_FORBIDDEN,
    DomainErrorCode.GAME_FULL: status.HTTP_400_BAD_REQUEST,
    DomainErrorCode.NOT_ENOUGH_PLAYERS: status.HTTP_400_BAD_REQUEST,
    DomainErrorCode.NOT_YOUR_TURN: status.HTTP_400_BAD_REQUEST,
    DomainErrorCode.GAME_ALREADY_STARTED: status.HTTP_409_CONFLICT,
    DomainErrorCode.TURN_CONFLICT: status.HTTP_409_CONFLICT,
    DomainErrorCode.JOIN_CONFLICT: status.HTTP_409_CONFLICT,
    DomainErrorCode.EMAIL_ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    DomainErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(DomainError)
async def domain_error_handler(
    _request: Request,
    exc: DomainError,
) -> JSONResponse:
    status_code = DOMAIN_ERROR_STATUS_CODES.get(
        exc.code,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {
                "detail": exc.message,
                "code": exc.code,
                "error_details": exc.details,
            }
        ),
    )


@app.exception_handler(DBAPIError)
async def store_error_handler(
    request: Request,
    exc: DBAPIError,
) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return await domain_error_handler(
        request,
        DomainError(
            code=DomainErrorCode.STORE_UNAVAILABLE,
            message="The game store is unavailable, try again",
        ),
    )
