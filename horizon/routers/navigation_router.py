# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException

from horizon.services.navigation import NAV_LINKS, Screen
from horizon.utils.auth_utils import get_workspace
from horizon.workspace import Workspace

router = APIRouter(prefix="/navigation", tags=["Navigation"])


def _navigation_state(workspace: Workspace) -> dict:
    navigator = workspace.navigator
    return {
        "screen": navigator.screen.value,
        "links": [{"name": name, "screen": screen.value} for name, screen in NAV_LINKS],
        "allowed": sorted(s.value for s in Screen if s != navigator.screen and navigator.can_go(s)),
    }


@router.get("")
def current_screen(workspace: Workspace = Depends(get_workspace)):
    return _navigation_state(workspace)


@router.post("/{screen}")
async def go_to_screen(screen: Screen, workspace: Workspace = Depends(get_workspace)):
    try:
        workspace.navigator.go(screen)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _navigation_state(workspace)
