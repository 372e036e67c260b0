# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Callable, List

from horizon.models.document_store import DocumentStore
from horizon.schemas.user_schemas import ProfileSummary
from horizon.services.identity_gate import IdentityGate


class ProfileStats:
    """Live counts of the user's mood logs and journal entries."""

    def __init__(self, gate: IdentityGate, store: DocumentStore):
        self.gate = gate
        self.store = store
        self.mood_log_count = 0
        self.journal_entry_count = 0
        self._unsubscribers: List[Callable[[], None]] = []

    def open(self):
        if not self.gate.is_authenticated:
            return
        paths = self.gate.paths()
        self._unsubscribers = [
            self.store.subscribe_to_collection(paths.mood_logs, self._on_mood_logs),
            self.store.subscribe_to_collection(paths.journal_entries, self._on_journal_entries),
        ]

    def _on_mood_logs(self, docs):
        self.mood_log_count = len(docs)

    def _on_journal_entries(self, docs):
        self.journal_entry_count = len(docs)

    def summary(self) -> ProfileSummary:
        user = self.gate.require_user()
        return ProfileSummary(
            name=user.name,
            email=user.email,
            age=user.age,
            mood_log_count=self.mood_log_count,
            journal_entry_count=self.journal_entry_count,
        )

    def close(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
