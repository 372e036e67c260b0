# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends

from horizon.schemas.user_schemas import ProfileSummary
from horizon.utils.auth_utils import get_workspace
from horizon.workspace import Workspace

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/summary", response_model=ProfileSummary)
def profile_summary(workspace: Workspace = Depends(get_workspace)):
    return workspace.stats.summary()
