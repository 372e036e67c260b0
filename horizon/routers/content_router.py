# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends

from horizon.services.exercises import EXERCISE_TITLES
from horizon.utils.auth_utils import get_workspace
from horizon.utils.wellness_content import AFFIRMATIONS, CRISIS_RESOURCES, LEARN_CARDS
from horizon.workspace import Workspace

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("/affirmations")
def affirmations(workspace: Workspace = Depends(get_workspace)):
    carousel = workspace.carousel
    return {
        "current": carousel.current,
        "index": carousel.index,
        "affirmations": AFFIRMATIONS,
    }


@router.get("/learn")
def learn_cards():
    return LEARN_CARDS


@router.get("/crisis")
def crisis_resources():
    return CRISIS_RESOURCES


@router.get("/exercises")
def exercise_catalogue():
    return [{"kind": kind.value, "title": title} for kind, title in EXERCISE_TITLES.items()]
