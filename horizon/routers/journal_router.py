# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import MAXYEAR, MINYEAR
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from horizon.schemas.record_schemas import JournalDraftRequest, JournalEntryRequest
from horizon.services.calendar_view import CalendarView
from horizon.utils.auth_utils import get_workspace
from horizon.workspace import Workspace

router = APIRouter(prefix="/journal", tags=["Heart Journal"])


def _calendar(workspace: Workspace, year: Optional[int], month: Optional[int]) -> CalendarView:
    tz = workspace.backend.settings.app_timezone
    if year is not None and month is not None:
        return CalendarView(workspace.records.journal_entries, year, month, tz=tz)
    return CalendarView.current(workspace.records.journal_entries, tz=tz)


@router.post("/entries")
async def add_journal_entry(payload: JournalEntryRequest, workspace: Workspace = Depends(get_workspace)):
    doc_id = await workspace.records.submit_journal_entry(payload.text)
    if doc_id is None:
        raise HTTPException(status_code=400, detail="Please write something before saving.")
    return {
        "id": doc_id,
        "saved": workspace.records.journal_saved.value,
        "message": "✅ Your entry has been saved.",
    }


@router.get("/entries")
def list_journal_entries(workspace: Workspace = Depends(get_workspace)):
    return [entry.model_dump() for entry in workspace.records.journal_entries]


@router.get("/draft")
def get_draft(workspace: Workspace = Depends(get_workspace)):
    records = workspace.records
    return {"draft": records.draft, "is_loading_prompt": records.is_loading_prompt}


@router.put("/draft")
async def update_draft(payload: JournalDraftRequest, workspace: Workspace = Depends(get_workspace)):
    workspace.records.draft = payload.text
    return {"draft": workspace.records.draft}


@router.post("/prompt")
async def writing_prompt(workspace: Workspace = Depends(get_workspace)):
    draft = await workspace.records.request_writing_prompt()
    return {"draft": draft}


@router.get("/calendar")
def journal_calendar(
    year: Optional[int] = Query(None, ge=MINYEAR, le=MAXYEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    workspace: Workspace = Depends(get_workspace),
):
    return _calendar(workspace, year, month).as_payload(lambda entry: entry.model_dump())


@router.get("/calendar/{year}/{month}/{day}")
def entry_for_day(year: int, month: int, day: int, workspace: Workspace = Depends(get_workspace)):
    if not MINYEAR <= year <= MAXYEAR:
        raise HTTPException(status_code=400, detail="Invalid year")
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="Invalid month")
    entry = _calendar(workspace, year, month).select(day)
    if entry is None:
        raise HTTPException(status_code=404, detail="No journal entry on this day")
    return entry.model_dump()
