# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from horizon.utils.timers import Observable, Sleep
from horizon.utils.wellness_content import AFFIRMATIONS, AFFIRMATION_INTERVAL_SECONDS

logger = logging.getLogger(__name__)

IDLE_STEP = "Start"


class ExerciseKind(str, enum.Enum):
    box = "box"
    four_seven_eight = "478"
    paced = "paced"
    grounding = "grounding"
    meditation = "meditation"


EXERCISE_TITLES = {
    ExerciseKind.box: "Box Breathing",
    ExerciseKind.four_seven_eight: "4-7-8 Breathing",
    ExerciseKind.paced: "Paced Breathing",
    ExerciseKind.grounding: "5-4-3-2-1 Grounding",
    ExerciseKind.meditation: "Meditation Timer",
}


@dataclass(frozen=True)
class Phase:
    name: str
    duration: float  # seconds


BREATHING_PATTERNS: Dict[ExerciseKind, List[Phase]] = {
    ExerciseKind.box: [Phase("Inhale", 4), Phase("Hold", 4), Phase("Exhale", 4), Phase("Hold", 4)],
    ExerciseKind.four_seven_eight: [Phase("Inhale", 4), Phase("Hold", 7), Phase("Exhale", 8)],
    ExerciseKind.paced: [Phase("Inhale", 5), Phase("Exhale", 5)],
}


class PhaseSequencer(Observable):
    """
    Drives a current phase through a looping sequence until stopped.

    start() shows phase 0 at once and then advances after each phase's
    duration, wrapping to the start forever. stop() and close() cancel the
    pending advance and put the display back on the idle step.
    """

    def __init__(self, phases: Sequence[Phase], sleep: Sleep = asyncio.sleep, idle: str = IDLE_STEP):
        super().__init__()
        if not phases:
            raise ValueError("A sequence needs at least one phase")
        self.phases = list(phases)
        self.idle = idle
        self.index = 0
        self.current = idle
        self.is_active = False
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    def state(self) -> dict:
        return {
            "step": self.current,
            "index": self.index if self.is_active else None,
            "is_active": self.is_active,
            "duration": self.phases[self.index].duration if self.is_active else None,
        }

    def start(self):
        # Restarting while running begins again from the first phase
        self._cancel()
        self.is_active = True
        self._show(0)
        self._task = asyncio.get_running_loop().create_task(self._advance())

    def stop(self):
        self._cancel()
        self.is_active = False
        self.index = 0
        self.current = self.idle
        self._emit()

    def close(self):
        self._cancel()
        self.is_active = False
        self.current = self.idle

    def toggle(self):
        if self.is_active:
            self.stop()
        else:
            self.start()

    def _show(self, index: int):
        self.index = index
        self.current = self.phases[index].name
        self._emit()

    async def _advance(self):
        while True:
            await self._sleep(self.phases[self.index].duration)
            self._show((self.index + 1) % len(self.phases))

    def _cancel(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None


# -------------------------
# Grounding
# -------------------------

@dataclass(frozen=True)
class GroundingStep:
    count: int
    text: str
    icon: str


GROUNDING_STEPS = [
    GroundingStep(5, "things you can SEE", "👁️"),
    GroundingStep(4, "things you can TOUCH", "🖐️"),
    GroundingStep(3, "things you can HEAR", "👂"),
    GroundingStep(2, "things you can SMELL", "👃"),
    GroundingStep(1, "thing you can TASTE", "👅"),
]


class GroundingWalker(Observable):
    """Manually paged 5-4-3-2-1 steps, clamped at both ends."""

    def __init__(self, steps: Sequence[GroundingStep] = tuple(GROUNDING_STEPS)):
        super().__init__()
        self.steps = list(steps)
        self.index = 0

    @property
    def current(self) -> GroundingStep:
        return self.steps[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self.steps) - 1

    def next_step(self):
        self.index = min(self.index + 1, len(self.steps) - 1)
        self._emit()

    def previous_step(self):
        self.index = max(self.index - 1, 0)
        self._emit()

    def state(self) -> dict:
        step = self.current
        return {
            "index": self.index,
            "count": step.count,
            "text": step.text,
            "icon": step.icon,
            "is_first": self.is_first,
            "is_last": self.is_last,
        }

    def close(self):
        pass


# -------------------------
# Meditation
# -------------------------

MEDITATION_DURATIONS = (600, 1200)


def format_time(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


class MeditationTimer(Observable):
    """
    One-second countdown over a fixed duration. Reaching zero stops the
    timer and resets it; stopping early resets it too. Nothing is saved.
    """

    def __init__(self, duration: int = MEDITATION_DURATIONS[0], sleep: Sleep = asyncio.sleep):
        super().__init__()
        if duration not in MEDITATION_DURATIONS:
            raise ValueError(f"Unsupported meditation duration: {duration}")
        self.duration = duration
        self.time_left = duration
        self.is_active = False
        self.completed = False
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def display(self) -> str:
        return format_time(self.time_left)

    @property
    def progress(self) -> float:
        return (self.duration - self.time_left) / self.duration * 100

    def state(self) -> dict:
        return {
            "duration": self.duration,
            "time_left": self.time_left,
            "display": self.display,
            "progress": self.progress,
            "is_active": self.is_active,
            "completed": self.completed,
        }

    def set_duration(self, duration: int) -> bool:
        if duration not in MEDITATION_DURATIONS:
            raise ValueError(f"Unsupported meditation duration: {duration}")
        if self.is_active:
            return False
        self.duration = duration
        self.time_left = duration
        self.completed = False
        self._emit()
        return True

    def start(self):
        if self.is_active:
            return
        self.is_active = True
        self.completed = False
        self._emit()
        self._task = asyncio.get_running_loop().create_task(self._countdown())

    def stop(self):
        self._cancel()
        self.is_active = False
        self.time_left = self.duration
        self._emit()

    def close(self):
        self._cancel()
        self.is_active = False
        self.time_left = self.duration

    async def _countdown(self):
        while True:
            await self._sleep(1)
            if self.time_left <= 1:
                self._task = None
                self.is_active = False
                self.completed = True
                self.time_left = self.duration
                logger.info("🧘 Meditation session completed")
                self._emit()
                return
            self.time_left -= 1
            self._emit()

    def _cancel(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None


# -------------------------
# Home affirmations
# -------------------------

class AffirmationCarousel(PhaseSequencer):
    """Rotates through the affirmations every few seconds."""

    def __init__(self, affirmations: Sequence[str] = tuple(AFFIRMATIONS),
                 interval: float = AFFIRMATION_INTERVAL_SECONDS, sleep: Sleep = asyncio.sleep):
        super().__init__([Phase(text, interval) for text in affirmations], sleep=sleep, idle=affirmations[0])


def build_exercise(kind: ExerciseKind, sleep: Sleep = asyncio.sleep):
    if kind in BREATHING_PATTERNS:
        return PhaseSequencer(BREATHING_PATTERNS[kind], sleep=sleep)
    if kind == ExerciseKind.grounding:
        return GroundingWalker()
    return MeditationTimer(sleep=sleep)
