# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import Depends, Header, HTTPException, Request

from horizon.utils.jwt_utils import verify_access_token
from horizon.workspace import Workspace, WorkspaceRegistry


def get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.registry


def decode_token(request: Request, token: str) -> dict:
    return verify_access_token(token, request.app.state.backend.settings.jwt_secret_key)


# ✅ Dependency to extract token payload
def require_token(request: Request, authorization: str = Header(...)) -> dict:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization format")
    token = authorization.replace("Bearer ", "")
    return decode_token(request, token)


# ✅ Dependency resolving the caller's live workspace
def get_workspace(
    user_data: dict = Depends(require_token),
    registry: WorkspaceRegistry = Depends(get_registry),
) -> Workspace:
    workspace = registry.get(str(user_data.get("sub")))
    if workspace is None or workspace.user is None:
        raise HTTPException(status_code=401, detail="Session expired. Please log in again.")
    return workspace
