# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from horizon.models.document_store import DocumentSnapshot


class MoodLogRequest(BaseModel):
    mood_value: int = Field(50, ge=0, le=100)
    answers: Dict[str, str] = Field(default_factory=dict)


class JournalEntryRequest(BaseModel):
    # Omitted text saves the current draft
    text: Optional[str] = None


class JournalDraftRequest(BaseModel):
    text: str = ""


class MoodLog(BaseModel):
    """Stored as {mood, moodValue, answers, timestamp}."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    mood: str
    mood_value: int = Field(alias="moodValue", ge=0, le=100)
    answers: Dict[str, str] = Field(default_factory=dict)
    timestamp: Optional[datetime] = None

    @classmethod
    def from_snapshot(cls, snap: DocumentSnapshot) -> "MoodLog":
        return cls(id=snap.id, **snap.data)


class JournalEntry(BaseModel):
    id: str
    text: str
    timestamp: Optional[datetime] = None

    @classmethod
    def from_snapshot(cls, snap: DocumentSnapshot) -> "JournalEntry":
        return cls(id=snap.id, **snap.data)
