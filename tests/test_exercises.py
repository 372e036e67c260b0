# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import pytest

from horizon.services.exercises import (
    AFFIRMATIONS,
    BREATHING_PATTERNS,
    AffirmationCarousel,
    ExerciseKind,
    GroundingWalker,
    MeditationTimer,
    PhaseSequencer,
    build_exercise,
    format_time,
)


async def test_box_breathing_cycles_through_phases(clock):
    breathing = PhaseSequencer(BREATHING_PATTERNS[ExerciseKind.box], sleep=clock.sleep)
    seen = []
    breathing.subscribe(lambda state: seen.append(state["step"]))

    breathing.start()
    assert breathing.current == "Inhale"

    await clock.advance(4)
    assert breathing.current == "Hold"
    await clock.advance(4)
    assert breathing.current == "Exhale"
    await clock.advance(4)
    assert breathing.current == "Hold"
    await clock.advance(4)
    assert breathing.current == "Inhale"
    assert breathing.index == 0

    assert seen == ["Inhale", "Hold", "Exhale", "Hold", "Inhale"]
    breathing.close()


async def test_four_seven_eight_uses_its_own_timings(clock):
    breathing = PhaseSequencer(BREATHING_PATTERNS[ExerciseKind.four_seven_eight], sleep=clock.sleep)
    breathing.start()

    await clock.advance(4)
    assert breathing.current == "Hold"
    await clock.advance(6)
    assert breathing.current == "Hold"
    await clock.advance(1)
    assert breathing.current == "Exhale"
    await clock.advance(8)
    assert breathing.current == "Inhale"
    breathing.close()


async def test_stop_returns_to_idle_and_cancels_timer(clock):
    breathing = PhaseSequencer(BREATHING_PATTERNS[ExerciseKind.paced], sleep=clock.sleep)
    breathing.start()
    await clock.advance(5)
    assert breathing.current == "Exhale"

    breathing.stop()
    assert breathing.state() == {"step": "Start", "index": None, "is_active": False, "duration": None}

    await clock.advance(20)
    assert breathing.current == "Start"


async def test_toggle_restarts_from_first_phase(clock):
    breathing = PhaseSequencer(BREATHING_PATTERNS[ExerciseKind.box], sleep=clock.sleep)
    breathing.toggle()
    await clock.advance(8)
    assert breathing.current == "Exhale"

    breathing.toggle()
    assert not breathing.is_active
    breathing.toggle()
    assert breathing.current == "Inhale"
    breathing.close()


def test_sequencer_needs_phases():
    with pytest.raises(ValueError):
        PhaseSequencer([])


def test_grounding_steps_are_clamped():
    walker = GroundingWalker()
    walker.previous_step()
    assert walker.is_first
    assert walker.current.count == 5

    for _ in range(10):
        walker.next_step()
    assert walker.is_last
    assert walker.state()["count"] == 1
    assert walker.state()["text"] == "thing you can TASTE"


def test_format_time():
    assert format_time(600) == "10:00"
    assert format_time(59) == "0:59"
    assert format_time(0) == "0:00"


async def test_meditation_counts_down_and_resets_on_completion(clock):
    timer = MeditationTimer(600, sleep=clock.sleep)
    timer.start()

    await clock.advance(1)
    assert timer.time_left == 599
    assert timer.display == "9:59"

    await clock.advance(599)
    assert not timer.is_active
    assert timer.completed
    assert timer.time_left == 600


async def test_meditation_stop_resets(clock):
    timer = MeditationTimer(sleep=clock.sleep)
    timer.start()
    await clock.advance(30)
    assert timer.time_left == 570
    assert timer.progress == pytest.approx(5.0)

    timer.stop()
    assert timer.time_left == 600
    assert not timer.is_active
    assert not timer.completed


async def test_meditation_duration_locked_while_running(clock):
    timer = MeditationTimer(sleep=clock.sleep)
    assert timer.set_duration(1200)
    assert timer.display == "20:00"

    timer.start()
    assert timer.set_duration(600) is False
    assert timer.duration == 1200
    timer.close()

    with pytest.raises(ValueError):
        timer.set_duration(300)


async def test_affirmation_carousel_rotates_every_five_seconds(clock):
    carousel = AffirmationCarousel(sleep=clock.sleep)
    assert carousel.current == AFFIRMATIONS[0]

    carousel.start()
    await clock.advance(5)
    assert carousel.current == AFFIRMATIONS[1]
    await clock.advance(5 * (len(AFFIRMATIONS) - 1))
    assert carousel.current == AFFIRMATIONS[0]
    carousel.close()


def test_build_exercise_by_kind():
    assert isinstance(build_exercise(ExerciseKind.box), PhaseSequencer)
    assert isinstance(build_exercise(ExerciseKind.grounding), GroundingWalker)
    assert isinstance(build_exercise(ExerciseKind.meditation), MeditationTimer)


async def test_workspace_tracks_each_exercise_instance(workspace):
    first = workspace.exercise(ExerciseKind.box)
    second = workspace.exercise(ExerciseKind.box)
    assert first is not second
    first.start()
    second.start()

    workspace.release_exercise(ExerciseKind.box, first)
    assert not first.is_active
    assert second.is_active
    assert workspace.open_exercises(ExerciseKind.box) == [second]

    workspace.close()
    assert not second.is_active
    assert workspace.open_exercises(ExerciseKind.box) == []
