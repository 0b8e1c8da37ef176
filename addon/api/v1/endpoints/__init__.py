from fastapi import APIRouter

from addon.api.v1.endpoints import auth, game, problem, user

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

api_router.include_router(user.router, prefix="/user", tags=["users"])

api_router.include_router(game.router, prefix="/games", tags=["games"])

api_router.include_router(problem.router, prefix="/problems", tags=["problems"])
