# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


ASSISTANT_NAME = "Echo"

# -------------------------
# Chat
# -------------------------

ECHO_PERSONA = (
    f"You are an empathetic and supportive AI friend named '{ASSISTANT_NAME}' for a young person. "
    "Your primary language for conversation is English. Only switch to another language like "
    "Hinglish if the user explicitly asks you to or consistently messages you in that language. "
    "Be warm, non-judgmental, and use simple, encouraging language. "
    "AVOID giving any medical or clinical advice. Focus on being a supportive listener."
)

GREETING_TEXT = (
    f"Hello! I'm {ASSISTANT_NAME}. Think of me as a friendly ear, here to listen without judgment. "
    "What's on your mind today?"
)

CHAT_FALLBACK_REPLY = "I'm having a little trouble connecting right now. Please try again."

DELETE_CHAT_PROMPT = "Are you sure you want to delete this chat forever? This action cannot be undone."

# -------------------------
# Journal
# -------------------------

JOURNAL_PROMPT_INSTRUCTION = (
    "Give me a single, thoughtful journal prompt for self-reflection. "
    "Make it concise and open-ended."
)

JOURNAL_PROMPT_PLACEHOLDER = "Generating a prompt for you..."

JOURNAL_PROMPT_FALLBACK = (
    "I couldn't get a prompt right now. Feel free to write about anything on your mind."
)


def journal_prompt_draft(generated: str) -> str:
    """Quote marks are stripped and two newlines leave room to start writing."""
    return generated.replace('"', "") + "\n\n"
