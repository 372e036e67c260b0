# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import pytest

from horizon.services.mood_journal import mood_label
from horizon.utils.prompt_templates import JOURNAL_PROMPT_FALLBACK
from horizon.workspace import Workspace


@pytest.mark.parametrize(
    "value, label",
    [(0, "Very Bad"), (19, "Very Bad"), (20, "Bad"), (39, "Bad"), (40, "Okay"),
     (59, "Okay"), (60, "Good"), (79, "Good"), (80, "Great"), (100, "Great")],
)
def test_mood_label_thresholds(value, label):
    assert mood_label(value) == label


@pytest.mark.parametrize("value", [-1, 101])
def test_mood_label_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        mood_label(value)


async def test_submit_mood_log_writes_and_resets_form(workspace, clock, store):
    records = workspace.records
    records.mood_value = 72
    records.set_answer("What made you smile today?", "My cat")

    doc_id = await records.submit_mood_log()

    data = await store.get_at_path(f"{workspace.gate.paths().mood_logs}/{doc_id}")
    assert data["mood"] == "Good"
    assert data["moodValue"] == 72
    assert data["answers"] == {"What made you smile today?": "My cat"}
    assert data["timestamp"] is not None

    assert records.mood_value == 50
    assert records.answers == {}
    assert records.mood_logs[0].mood_value == 72


async def test_mood_saved_ack_clears_after_three_seconds(workspace, clock):
    await workspace.records.submit_mood_log(45)
    assert workspace.records.mood_saved.value

    await clock.advance(2.9)
    assert workspace.records.mood_saved.value
    await clock.advance(0.2)
    assert not workspace.records.mood_saved.value


async def test_default_mood_is_okay(workspace):
    await workspace.records.submit_mood_log()
    assert workspace.records.mood_logs[0].mood == "Okay"


async def test_mood_logs_newest_first(workspace):
    await workspace.records.submit_mood_log(10)
    await workspace.records.submit_mood_log(90)
    assert [log.mood for log in workspace.records.mood_logs] == ["Great", "Very Bad"]


async def test_signed_out_writes_are_ignored(backend, store):
    ws = Workspace(backend)
    await ws.open()
    assert await ws.records.submit_mood_log(50) is None
    assert await ws.records.submit_journal_entry("hello") is None
    ws.close()


async def test_blank_journal_entry_is_rejected(workspace):
    assert await workspace.records.submit_journal_entry("   \n ") is None
    assert workspace.records.journal_entries == []
    assert not workspace.records.journal_saved.value


async def test_journal_entry_saves_draft(workspace):
    workspace.records.draft = "Today I walked by the sea."

    assert await workspace.records.submit_journal_entry() is not None

    assert workspace.records.draft == ""
    assert workspace.records.journal_saved.value
    assert workspace.records.journal_entries[0].text == "Today I walked by the sea."


async def test_writing_prompt_fills_draft(workspace, prompt_generator):
    prompt_generator.replies = ['"What are you grateful for today?"']

    draft = await workspace.records.request_writing_prompt()

    assert draft == "What are you grateful for today?\n\n"
    assert workspace.records.draft == draft
    assert not workspace.records.is_loading_prompt
    assert prompt_generator.calls[0]["contents"][0]["role"] == "user"


async def test_writing_prompt_falls_back(workspace, prompt_generator):
    prompt_generator.error = "quota exceeded"

    draft = await workspace.records.request_writing_prompt()

    assert draft == JOURNAL_PROMPT_FALLBACK
    assert not workspace.records.is_loading_prompt


async def test_profile_counts_follow_writes(workspace):
    await workspace.records.submit_mood_log(30)
    await workspace.records.submit_mood_log(70)
    await workspace.records.submit_journal_entry("one")

    summary = workspace.stats.summary()
    assert summary.mood_log_count == 2
    assert summary.journal_entry_count == 1
    assert summary.name == "Asha"
    assert summary.age == "19"
