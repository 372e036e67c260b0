# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from horizon.config import Settings
from horizon.models.document_store import DocumentStore
from horizon.schemas.user_schemas import SignUpRequest, UserProfile
from horizon.services.auth_service import AuthProvider
from horizon.services.chat_manager import ChatSessionManager
from horizon.services.exercises import AffirmationCarousel, ExerciseKind, build_exercise
from horizon.services.gemini_service import GeminiClient
from horizon.services.identity_gate import IdentityGate
from horizon.services.mood_journal import MoodJournalWriter
from horizon.services.navigation import Navigator
from horizon.services.profile_stats import ProfileStats
from horizon.utils.timers import Sleep

logger = logging.getLogger(__name__)


@dataclass
class Backend:
    """Backend handles built once at startup and shared by every workspace."""
    settings: Settings
    store: DocumentStore
    chat_generator: GeminiClient
    prompt_generator: GeminiClient
    auth_factory: Callable[[], AuthProvider]
    sleep: Sleep = field(default=asyncio.sleep)


class Workspace:
    """
    Everything one signed-in client sees: identity, navigation, records,
    chat, profile counts and running exercises. close() releases every
    subscription and timer it owns.
    """

    def __init__(self, backend: Backend):
        self.backend = backend
        self.auth = backend.auth_factory()
        self.gate = IdentityGate(self.auth, backend.store, backend.settings.app_id)
        self.navigator = Navigator()
        self.gate.subscribe(self.navigator.on_user_change)

        self.records = MoodJournalWriter(self.gate, backend.store, backend.prompt_generator, sleep=backend.sleep)
        self.chat = ChatSessionManager(self.gate, backend.store, backend.chat_generator)
        self.stats = ProfileStats(self.gate, backend.store)
        self.carousel = AffirmationCarousel(sleep=backend.sleep)
        # Each exercise socket gets its own instance
        self._exercises: Dict[ExerciseKind, List[object]] = {}

    @property
    def user(self) -> Optional[UserProfile]:
        return self.gate.current_user

    async def open(self):
        await self.gate.open()

    def _open_views(self):
        self.records.open()
        self.chat.open()
        self.stats.open()
        self.carousel.start()

    async def sign_up(self, request: SignUpRequest) -> UserProfile:
        profile = await self.gate.sign_up(request)
        self._open_views()
        return profile

    async def sign_in(self, email: str, password: str) -> UserProfile:
        profile = await self.gate.sign_in(email, password)
        self._open_views()
        return profile

    async def sign_out(self):
        await self.gate.sign_out()
        self.close()

    def exercise(self, kind: ExerciseKind):
        exercise = build_exercise(kind, sleep=self.backend.sleep)
        self._exercises.setdefault(kind, []).append(exercise)
        return exercise

    def open_exercises(self, kind: ExerciseKind) -> List[object]:
        return list(self._exercises.get(kind, []))

    def release_exercise(self, kind: ExerciseKind, exercise):
        instances = self._exercises.get(kind, [])
        if exercise in instances:
            instances.remove(exercise)
        if not instances:
            self._exercises.pop(kind, None)
        exercise.close()

    def close(self):
        for kind, instances in list(self._exercises.items()):
            for exercise in list(instances):
                self.release_exercise(kind, exercise)
        self.carousel.close()
        self.records.close()
        self.chat.close()
        self.stats.close()
        self.gate.close()


class WorkspaceRegistry:
    """Live workspaces keyed by uid."""

    def __init__(self, backend: Backend):
        self.backend = backend
        self._workspaces: Dict[str, Workspace] = {}

    async def create(self) -> Workspace:
        workspace = Workspace(self.backend)
        await workspace.open()
        return workspace

    def register(self, workspace: Workspace):
        uid = workspace.gate.require_user().uid
        previous = self._workspaces.get(uid)
        if previous is not None and previous is not workspace:
            previous.close()
        self._workspaces[uid] = workspace
        logger.info(f"🔓 Workspace opened for {uid}")

    def __len__(self):
        return len(self._workspaces)

    def get(self, uid: str) -> Optional[Workspace]:
        return self._workspaces.get(uid)

    async def sign_out(self, uid: str):
        workspace = self._workspaces.pop(uid, None)
        if workspace is not None:
            await workspace.sign_out()
            logger.info(f"🔒 Workspace closed for {uid}")

    def close_all(self):
        for workspace in self._workspaces.values():
            workspace.close()
        self._workspaces.clear()
