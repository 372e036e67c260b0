# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect

from horizon.models.document_store import query_stream
from horizon.schemas.chat_schemas import ChatSession
from horizon.schemas.record_schemas import JournalEntry, MoodLog
from horizon.services.exercises import ExerciseKind, MeditationTimer
from horizon.utils.jwt_utils import verify_access_token
from horizon.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ws", tags=["WebSocket"])

# action -> method name on the exercise
EXERCISE_COMMANDS = {
    "start": "start",
    "stop": "stop",
    "toggle": "toggle",
    "next": "next_step",
    "previous": "previous_step",
}

# collection -> (paths attribute, order field, descending, model)
RECORD_STREAMS = {
    "mood-logs": ("mood_logs", "timestamp", True, MoodLog),
    "journal-entries": ("journal_entries", "timestamp", True, JournalEntry),
    "chats": ("chats", "createdAt", True, ChatSession),
}


# ✅ Helper for resolving the workspace inside a WebSocket
def _authenticate(websocket: WebSocket) -> Optional[Workspace]:
    token = websocket.headers.get("authorization", "").replace("Bearer ", "")
    if not token:
        token = websocket.query_params.get("token", "")
    if not token:
        return None

    try:
        user_data = verify_access_token(token, websocket.app.state.backend.settings.jwt_secret_key)
    except HTTPException:
        return None

    workspace = websocket.app.state.registry.get(str(user_data.get("sub")))
    if workspace is None or workspace.user is None:
        return None
    return workspace


async def _reject(websocket: WebSocket, message: str):
    await websocket.send_json({"error": message})
    await websocket.close()


def apply_command(exercise, command: dict) -> Optional[str]:
    """Runs one client command against an exercise; returns an error message or None."""
    action = command.get("action")

    if action == "duration":
        if not isinstance(exercise, MeditationTimer):
            return "Only the meditation timer has a duration"
        try:
            changed = exercise.set_duration(int(command.get("value")))
        except (TypeError, ValueError) as e:
            return str(e)
        if not changed:
            return "Stop the timer before changing its duration"
        return None

    method = getattr(exercise, EXERCISE_COMMANDS.get(action, ""), None)
    if method is None:
        return f"Unsupported action: {action}"
    method()
    return None


async def _forward(websocket: WebSocket, queue: asyncio.Queue):
    while True:
        await websocket.send_json(await queue.get())


@router.websocket("/exercises/{kind}")
async def exercise_stream(websocket: WebSocket, kind: str):
    await websocket.accept()

    workspace = _authenticate(websocket)
    if workspace is None:
        await _reject(websocket, "Invalid auth token")
        return

    try:
        exercise_kind = ExerciseKind(kind)
    except ValueError:
        await _reject(websocket, f"Unknown exercise: {kind}")
        return

    exercise = workspace.exercise(exercise_kind)
    queue: asyncio.Queue = asyncio.Queue()
    unsubscribe = exercise.subscribe(queue.put_nowait)
    queue.put_nowait(exercise.state())
    sender = asyncio.create_task(_forward(websocket, queue))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                command = json.loads(raw)
            except ValueError:
                queue.put_nowait({"error": "Commands must be JSON"})
                continue
            if not isinstance(command, dict):
                queue.put_nowait({"error": "Commands must be JSON objects"})
                continue
            error = apply_command(exercise, command)
            if error:
                queue.put_nowait({"error": error})
    except WebSocketDisconnect:
        logger.info(f"🔌 Exercise stream closed: {exercise_kind.value}")
    finally:
        unsubscribe()
        sender.cancel()
        # Leaving the exercise stops its timers
        workspace.release_exercise(exercise_kind, exercise)


async def _forward_records(websocket: WebSocket, workspace: Workspace, collection: str):
    attribute, order_by, descending, model = RECORD_STREAMS[collection]
    path = getattr(workspace.gate.paths(), attribute)
    async for docs in query_stream(workspace.backend.store, path, order_by, descending=descending):
        await websocket.send_json([model.from_snapshot(doc).model_dump(mode="json") for doc in docs])


@router.websocket("/records/{collection}")
async def record_stream(websocket: WebSocket, collection: str):
    await websocket.accept()

    workspace = _authenticate(websocket)
    if workspace is None:
        await _reject(websocket, "Invalid auth token")
        return
    if collection not in RECORD_STREAMS:
        await _reject(websocket, f"Unknown collection: {collection}")
        return

    forward = asyncio.create_task(_forward_records(websocket, workspace, collection))
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info(f"🔌 Record stream closed: {collection}")
    finally:
        # Cancelling the forwarder ends the subscription
        forward.cancel()
