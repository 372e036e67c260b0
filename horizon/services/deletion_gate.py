# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Awaitable, Callable, Optional

DestructiveAction = Callable[[str], Awaitable[None]]


class DeletionGate:
    """
    Two-step guard for destructive actions: arm a target, then confirm or
    cancel. Arming again replaces the previous target.
    """

    def __init__(self, message: str):
        self.message = message
        self.armed: Optional[str] = None
        self._action: Optional[DestructiveAction] = None

    @property
    def prompt(self) -> Optional[str]:
        return self.message if self.armed is not None else None

    def arm(self, target: str, action: DestructiveAction):
        self.armed = target
        self._action = action

    async def confirm(self):
        if self.armed is None:
            return
        target, action = self.armed, self._action
        try:
            await action(target)
        finally:
            self.cancel()

    def cancel(self):
        self.armed = None
        self._action = None
