"""Auth Routes — /api/v2/auth: register, login, me."""

from fastapi import APIRouter, Depends, status

from tasker_api.api.dependencies import get_auth_handlers, get_current_user
from tasker_api.core.authorization import Requester
from tasker_api.schemas.user import LoginRequest, RegisterRequest
from tasker_api.services.handle_auth import AuthHandlers

router = APIRouter(prefix="/api/v2/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, auth: AuthHandlers = Depends(get_auth_handlers)):
    return await auth.register(body)


@router.post("/login")
async def login(body: LoginRequest, auth: AuthHandlers = Depends(get_auth_handlers)):
    return await auth.login(body)


@router.get("/me")
async def me(
    requester: Requester = Depends(get_current_user),
    auth: AuthHandlers = Depends(get_auth_handlers),
):
    return await auth.me(requester)
