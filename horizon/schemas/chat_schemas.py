# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from horizon.models.document_store import DocumentSnapshot


class Sender(str, enum.Enum):
    user = "user"
    ai = "ai"  # the assistant, stored as "ai" in chat documents


class ChatSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_snapshot(cls, snap: DocumentSnapshot) -> "ChatSession":
        return cls(id=snap.id, **snap.data)


class ChatMessage(BaseModel):
    id: str
    text: str
    sender: Sender
    timestamp: Optional[datetime] = None

    @classmethod
    def from_snapshot(cls, snap: DocumentSnapshot) -> "ChatMessage":
        return cls(id=snap.id, **snap.data)


class SendRequest(BaseModel):
    text: str = ""


class ChatState(BaseModel):
    active_chat_id: Optional[str]
    is_loading: bool
    input: str = ""
    messages: List[ChatMessage]
    sessions: List[ChatSession]
    delete_prompt: Optional[str] = None
