# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
from typing import Awaitable, Callable, List, Optional

Sleep = Callable[[float], Awaitable[None]]
Listener = Callable[[dict], None]


class Observable:
    """Minimal listener registry; listeners receive the state dict."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def state(self) -> dict:
        raise NotImplementedError

    def _emit(self):
        snapshot = self.state()
        for listener in list(self._listeners):
            listener(snapshot)


class TransientFlag:
    """A boolean that switches itself off again after ``seconds``."""

    def __init__(self, seconds: float = 3.0, sleep: Sleep = asyncio.sleep):
        self.seconds = seconds
        self.value = False
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    def show(self):
        self._cancel()
        self.value = True
        self._task = asyncio.get_running_loop().create_task(self._expire())

    async def _expire(self):
        await self._sleep(self.seconds)
        self.value = False
        self._task = None

    def _cancel(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def close(self):
        self._cancel()
        self.value = False
