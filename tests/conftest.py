# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import heapq
import itertools

import pytest

from horizon.config import Settings
from horizon.models.memory_store import InMemoryDocumentStore
from horizon.schemas.user_schemas import SignUpRequest
from horizon.services.auth_service import LocalAccounts, LocalAuthProvider
from horizon.services.gemini_service import GenerativeTextError
from horizon.workspace import Backend, Workspace

PASSWORD = "secret123"


class ManualClock:
    """Replacement for asyncio.sleep whose time only moves on advance()."""

    def __init__(self):
        self.now = 0.0
        self._sleepers = []
        self._seq = itertools.count()

    async def sleep(self, seconds: float):
        future = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self.now + seconds, next(self._seq), future))
        await future

    async def advance(self, seconds: float):
        target = self.now + seconds
        await settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            wake, _, future = heapq.heappop(self._sleepers)
            self.now = wake
            if not future.done():
                future.set_result(None)
            await settle()
        self.now = target


async def settle(rounds: int = 5):
    for _ in range(rounds):
        await asyncio.sleep(0)


class ScriptedGenerator:
    """Stands in for GeminiClient; replies are handed out in order."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []
        self.gate = None

    async def generate(self, contents, system_instruction=None):
        self.calls.append({"contents": contents, "system_instruction": system_instruction})
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise GenerativeTextError(self.error)
        if self.replies:
            return self.replies.pop(0)
        return "I'm here for you."


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def chat_generator():
    return ScriptedGenerator()


@pytest.fixture
def prompt_generator():
    return ScriptedGenerator()


@pytest.fixture
def settings():
    return Settings(store_backend="memory", jwt_secret_key="test-secret", app_timezone="UTC")


@pytest.fixture
def backend(settings, store, chat_generator, prompt_generator, clock):
    accounts = LocalAccounts()
    return Backend(
        settings=settings,
        store=store,
        chat_generator=chat_generator,
        prompt_generator=prompt_generator,
        auth_factory=lambda: LocalAuthProvider(accounts),
        sleep=clock.sleep,
    )


def signup_request(**overrides) -> SignUpRequest:
    fields = {
        "name": "Asha",
        "age": "19",
        "email": "asha@example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
    }
    fields.update(overrides)
    return SignUpRequest(**fields)


@pytest.fixture
async def workspace(backend):
    ws = Workspace(backend)
    await ws.open()
    await ws.sign_up(signup_request())
    yield ws
    ws.close()
