# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from horizon.models.document_store import DocumentSnapshot, DocumentStore
from horizon.schemas.record_schemas import JournalEntry, MoodLog
from horizon.services.gemini_service import GeminiClient, GenerativeTextError, turn
from horizon.services.identity_gate import IdentityGate
from horizon.utils.prompt_templates import (
    JOURNAL_PROMPT_FALLBACK,
    JOURNAL_PROMPT_INSTRUCTION,
    JOURNAL_PROMPT_PLACEHOLDER,
    journal_prompt_draft,
)
from horizon.utils.timers import Sleep, TransientFlag

logger = logging.getLogger(__name__)

DEFAULT_MOOD_VALUE = 50
SAVED_ACK_SECONDS = 3

# (exclusive upper bound, label)
MOOD_THRESHOLDS = [
    (20, "Very Bad"),
    (40, "Bad"),
    (60, "Okay"),
    (80, "Good"),
]


def mood_label(value: int) -> str:
    if not 0 <= value <= 100:
        raise ValueError(f"Mood value must be between 0 and 100, got {value}")
    for upper, label in MOOD_THRESHOLDS:
        if value < upper:
            return label
    return "Great"


class MoodJournalWriter:
    """
    Append-only writer for mood logs and journal entries, plus the live
    newest-first lists the calendars read from.
    """

    def __init__(self, gate: IdentityGate, store: DocumentStore, generator: GeminiClient,
                 sleep: Sleep = asyncio.sleep):
        self.gate = gate
        self.store = store
        self.generator = generator

        # Mood form
        self.mood_value = DEFAULT_MOOD_VALUE
        self.answers: Dict[str, str] = {}
        self.mood_saved = TransientFlag(SAVED_ACK_SECONDS, sleep=sleep)

        # Journal editor
        self.draft = ""
        self.is_loading_prompt = False
        self.journal_saved = TransientFlag(SAVED_ACK_SECONDS, sleep=sleep)

        self.mood_logs: List[MoodLog] = []
        self.journal_entries: List[JournalEntry] = []
        self._unsubscribers: List[Callable[[], None]] = []

    def open(self):
        if not self.gate.is_authenticated:
            return
        paths = self.gate.paths()
        self._unsubscribers.append(
            self.store.subscribe_to_query(paths.mood_logs, "timestamp", self._on_mood_logs, descending=True)
        )
        self._unsubscribers.append(
            self.store.subscribe_to_query(paths.journal_entries, "timestamp", self._on_journal_entries,
                                          descending=True)
        )

    def _on_mood_logs(self, docs: List[DocumentSnapshot]):
        self.mood_logs = [MoodLog.from_snapshot(doc) for doc in docs]

    def _on_journal_entries(self, docs: List[DocumentSnapshot]):
        self.journal_entries = [JournalEntry.from_snapshot(doc) for doc in docs]

    # -------------------------
    # Mood
    # -------------------------

    def set_answer(self, question: str, text: str):
        self.answers[question] = text

    async def submit_mood_log(self, value: Optional[int] = None,
                              answers: Optional[Dict[str, str]] = None) -> Optional[str]:
        if not self.gate.is_authenticated:
            return None

        value = self.mood_value if value is None else value
        answers = dict(self.answers if answers is None else answers)
        label = mood_label(value)

        doc_id = await self.store.create(self.gate.paths().mood_logs, {
            "mood": label,
            "moodValue": value,
            "answers": answers,
            "timestamp": self.store.server_timestamp(),
        })
        logger.info(f"😊 Mood logged for {self.gate.current_user.uid}: {label} ({value})")

        self.mood_value = DEFAULT_MOOD_VALUE
        self.answers = {}
        self.mood_saved.show()
        return doc_id

    # -------------------------
    # Journal
    # -------------------------

    async def submit_journal_entry(self, text: Optional[str] = None) -> Optional[str]:
        text = self.draft if text is None else text
        if not text.strip() or not self.gate.is_authenticated:
            return None

        doc_id = await self.store.create(self.gate.paths().journal_entries, {
            "text": text,
            "timestamp": self.store.server_timestamp(),
        })
        logger.info(f"📓 Journal entry saved for {self.gate.current_user.uid}")

        self.draft = ""
        self.journal_saved.show()
        return doc_id

    async def request_writing_prompt(self) -> str:
        self.is_loading_prompt = True
        self.draft = JOURNAL_PROMPT_PLACEHOLDER
        try:
            generated = await self.generator.generate([turn("user", JOURNAL_PROMPT_INSTRUCTION)])
            self.draft = journal_prompt_draft(generated)
        except GenerativeTextError as e:
            logger.warning(f"⚠️ Journal prompt unavailable: {e}")
            self.draft = JOURNAL_PROMPT_FALLBACK
        finally:
            self.is_loading_prompt = False
        return self.draft

    def close(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.mood_saved.close()
        self.journal_saved.close()
