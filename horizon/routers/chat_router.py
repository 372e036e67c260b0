# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException

from horizon.schemas.chat_schemas import SendRequest
from horizon.utils.auth_utils import get_workspace
from horizon.utils.prompt_templates import ASSISTANT_NAME
from horizon.workspace import Workspace

router = APIRouter(prefix="/chat", tags=["AI Friend"])


def _state(workspace: Workspace) -> dict:
    state = workspace.chat.state().model_dump()
    state["assistant_name"] = ASSISTANT_NAME
    return state


@router.get("/state")
async def chat_state(workspace: Workspace = Depends(get_workspace)):
    return _state(workspace)


@router.post("/new")
async def new_chat(workspace: Workspace = Depends(get_workspace)):
    workspace.chat.new_chat()
    return _state(workspace)


@router.post("/sessions/{chat_id}/open")
async def open_session(chat_id: str, workspace: Workspace = Depends(get_workspace)):
    if not any(session.id == chat_id for session in workspace.chat.sessions):
        raise HTTPException(status_code=404, detail="Chat not found")
    workspace.chat.select_session(chat_id)
    return _state(workspace)


@router.put("/input")
async def set_input(payload: SendRequest, workspace: Workspace = Depends(get_workspace)):
    workspace.chat.set_input(payload.text)
    return _state(workspace)


@router.post("/send")
async def send_message(payload: SendRequest, workspace: Workspace = Depends(get_workspace)):
    sent = await workspace.chat.send(payload.text)
    return {"sent": sent, **_state(workspace)}


@router.post("/sessions/{chat_id}/delete")
async def request_delete(chat_id: str, workspace: Workspace = Depends(get_workspace)):
    workspace.chat.request_delete(chat_id)
    return _state(workspace)


@router.post("/delete/confirm")
async def confirm_delete(workspace: Workspace = Depends(get_workspace)):
    deleted = await workspace.chat.confirm_delete()
    return {"deleted": deleted, **_state(workspace)}


@router.post("/delete/cancel")
async def cancel_delete(workspace: Workspace = Depends(get_workspace)):
    workspace.chat.cancel_delete()
    return _state(workspace)
