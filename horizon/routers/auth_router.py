# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Request

from horizon.schemas.user_schemas import LoginRequest, SignUpRequest
from horizon.utils.auth_utils import get_registry, get_workspace, require_token
from horizon.utils.errors import AuthError, InputValidationError, as_http_error
from horizon.utils.jwt_utils import create_access_token  # ✅ JWT added
from horizon.workspace import Workspace, WorkspaceRegistry

router = APIRouter(prefix="/auth", tags=["Auth"])


def _session_response(request: Request, workspace: Workspace, message: str) -> dict:
    settings = request.app.state.backend.settings
    user = workspace.gate.require_user()
    token = create_access_token({"sub": user.uid}, settings.jwt_secret_key, settings.access_token_expire_minutes)
    return {
        "message": message,
        "token": token,
        "user": user.model_dump(),
        "screen": workspace.navigator.screen.value,
    }


@router.post("/signup")
async def sign_up(request: Request, payload: SignUpRequest, registry: WorkspaceRegistry = Depends(get_registry)):
    workspace = await registry.create()
    try:
        await workspace.sign_up(payload)
    except (AuthError, InputValidationError) as e:
        workspace.close()
        raise as_http_error(e)

    registry.register(workspace)
    return _session_response(request, workspace, "🆕 Account created")


@router.post("/login")
async def login(request: Request, payload: LoginRequest, registry: WorkspaceRegistry = Depends(get_registry)):
    workspace = await registry.create()
    try:
        await workspace.sign_in(payload.email, payload.password)
    except AuthError as e:
        workspace.close()
        raise as_http_error(e)

    registry.register(workspace)
    return _session_response(request, workspace, "🔁 Welcome back")


@router.post("/logout")
async def logout(user_data: dict = Depends(require_token), registry: WorkspaceRegistry = Depends(get_registry)):
    await registry.sign_out(str(user_data["sub"]))
    return {"message": "👋 Signed out", "screen": "login"}


@router.get("/me")
def me(workspace: Workspace = Depends(get_workspace)):
    user = workspace.gate.require_user()
    return {
        "user": user.model_dump(),
        "welcome_name": user.welcome_name,
        "screen": workspace.navigator.screen.value,
    }
