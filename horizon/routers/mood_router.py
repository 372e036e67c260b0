# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import MAXYEAR, MINYEAR
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from horizon.schemas.record_schemas import MoodLogRequest
from horizon.services.calendar_view import CalendarView
from horizon.services.mood_journal import DEFAULT_MOOD_VALUE
from horizon.utils.auth_utils import get_workspace
from horizon.utils.wellness_content import MOOD_QUESTIONS
from horizon.workspace import Workspace

router = APIRouter(prefix="/mood", tags=["Mood Check"])


def _calendar(workspace: Workspace, year: Optional[int], month: Optional[int]) -> CalendarView:
    tz = workspace.backend.settings.app_timezone
    if year is not None and month is not None:
        return CalendarView(workspace.records.mood_logs, year, month, tz=tz)
    return CalendarView.current(workspace.records.mood_logs, tz=tz)


@router.get("/prompts")
def mood_prompts():
    return {"questions": MOOD_QUESTIONS, "default_value": DEFAULT_MOOD_VALUE}


@router.post("/logs")
async def add_mood_log(payload: MoodLogRequest, workspace: Workspace = Depends(get_workspace)):
    doc_id = await workspace.records.submit_mood_log(payload.mood_value, payload.answers)
    return {
        "id": doc_id,
        "saved": workspace.records.mood_saved.value,
        "message": "✅ Your mood has been saved.",
    }


@router.get("/logs")
def list_mood_logs(workspace: Workspace = Depends(get_workspace)):
    return [log.model_dump() for log in workspace.records.mood_logs]


@router.get("/calendar")
def mood_calendar(
    year: Optional[int] = Query(None, ge=MINYEAR, le=MAXYEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    workspace: Workspace = Depends(get_workspace),
):
    return _calendar(workspace, year, month).as_payload(lambda log: log.model_dump())


@router.get("/calendar/{year}/{month}/{day}")
def mood_for_day(year: int, month: int, day: int, workspace: Workspace = Depends(get_workspace)):
    if not MINYEAR <= year <= MAXYEAR:
        raise HTTPException(status_code=400, detail="Invalid year")
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="Invalid month")
    log = _calendar(workspace, year, month).select(day)
    if log is None:
        raise HTTPException(status_code=404, detail="No mood logged on this day")
    return log.model_dump()
