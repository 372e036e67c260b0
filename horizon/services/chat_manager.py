# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Callable, List, Optional

from horizon.models.document_store import DocumentSnapshot, DocumentStore
from horizon.schemas.chat_schemas import ChatMessage, ChatSession, ChatState, Sender
from horizon.services.deletion_gate import DeletionGate
from horizon.services.gemini_service import GeminiClient, GenerativeTextError, turn
from horizon.services.identity_gate import IdentityGate
from horizon.utils.prompt_templates import (
    CHAT_FALLBACK_REPLY,
    DELETE_CHAT_PROMPT,
    ECHO_PERSONA,
    GREETING_TEXT,
)

logger = logging.getLogger(__name__)

GREETING_ID = "initial"
TITLE_MAX_CHARS = 35


def greeting() -> ChatMessage:
    return ChatMessage(id=GREETING_ID, text=GREETING_TEXT, sender=Sender.ai)


def derive_title(text: str) -> str:
    if len(text) <= TITLE_MAX_CHARS:
        return text
    return text[:TITLE_MAX_CHARS] + "…"


def build_history(prior: List[ChatMessage], latest: str) -> List[dict]:
    """Role-tagged turns for the API, oldest first, ending with the new user text."""
    history = [
        turn("model" if message.sender == Sender.ai else "user", message.text)
        for message in prior
        if message.id != GREETING_ID
    ]
    history.append(turn("user", latest))
    return history


class ChatSessionManager:
    """
    Conversation threads for the signed-in user.

    With no active session the view holds only the local greeting. The
    first send creates the session; from then on messages come from the
    store subscription for that session.
    """

    def __init__(self, gate: IdentityGate, store: DocumentStore, generator: GeminiClient):
        self.gate = gate
        self.store = store
        self.generator = generator

        self.active_chat_id: Optional[str] = None
        self.messages: List[ChatMessage] = [greeting()]
        self.sessions: List[ChatSession] = []
        self.is_loading = False
        self.input = ""
        # Session with a reply still being generated
        self._sending_chat_id: Optional[str] = None
        self._deleting_chat_id: Optional[str] = None
        self.deletion = DeletionGate(DELETE_CHAT_PROMPT)

        self._sessions_unsubscribe: Optional[Callable[[], None]] = None
        self._messages_unsubscribe: Optional[Callable[[], None]] = None

    # ---------------------- subscriptions ----------------------

    def open(self):
        if not self.gate.is_authenticated:
            return
        self._sessions_unsubscribe = self.store.subscribe_to_query(
            self.gate.paths().chats, "createdAt", self._on_sessions, descending=True
        )
        self._watch_messages()

    def _on_sessions(self, docs: List[DocumentSnapshot]):
        self.sessions = [ChatSession.from_snapshot(doc) for doc in docs]

    def _watch_messages(self):
        if self._messages_unsubscribe is not None:
            self._messages_unsubscribe()
            self._messages_unsubscribe = None

        chat_id = self.active_chat_id
        if chat_id is None or not self.gate.is_authenticated:
            self.messages = [greeting()]
            return

        def on_messages(docs: List[DocumentSnapshot]):
            # Ignore a late delivery for a session that is no longer shown
            if chat_id == self.active_chat_id:
                self.messages = [ChatMessage.from_snapshot(doc) for doc in docs]

        self._messages_unsubscribe = self.store.subscribe_to_query(
            self.gate.paths().messages(chat_id), "timestamp", on_messages
        )

    def _activate(self, chat_id: Optional[str]):
        self.active_chat_id = chat_id
        self._watch_messages()

    # ---------------------- transitions ----------------------

    def new_chat(self):
        self._activate(None)
        self.input = ""

    def select_session(self, chat_id: str):
        self._activate(chat_id)

    def set_input(self, text: str):
        self.input = text

    def can_send(self, text: str) -> bool:
        return bool(text and text.strip()) and not self.is_loading and self.gate.is_authenticated

    async def send(self, text: str) -> bool:
        if not self.can_send(text):
            return False
        if self.active_chat_id is not None and self.active_chat_id == self._deleting_chat_id:
            return False

        paths = self.gate.paths()
        timestamp = self.store.server_timestamp
        self.input = ""
        self.is_loading = True
        try:
            chat_id = self.active_chat_id
            if chat_id is None:
                prior: List[ChatMessage] = []
                try:
                    chat_id = await self.store.create(paths.chats, {
                        "title": derive_title(text),
                        "createdAt": timestamp(),
                    })
                except Exception:
                    logger.error("🛑 Error creating new chat session", exc_info=True)
                    return False
                self._activate(chat_id)
            else:
                prior = list(self.messages)
            self._sending_chat_id = chat_id

            messages_path = paths.messages(chat_id)
            try:
                await self.store.create(messages_path, {"text": text, "sender": Sender.user.value,
                                                        "timestamp": timestamp()})
            except Exception:
                logger.error(f"🛑 Error saving user message in chat {chat_id}", exc_info=True)
                return False

            try:
                reply = await self.generator.generate(build_history(prior, text),
                                                      system_instruction=ECHO_PERSONA)
            except GenerativeTextError as e:
                logger.warning(f"⚠️ Error fetching AI response for chat {chat_id}: {e}")
                reply = CHAT_FALLBACK_REPLY

            # Written even if the user has moved to another session meanwhile
            try:
                await self.store.create(messages_path, {"text": reply, "sender": Sender.ai.value,
                                                        "timestamp": timestamp()})
            except Exception:
                logger.error(f"🛑 Error saving AI reply in chat {chat_id}", exc_info=True)
            return True
        finally:
            self.is_loading = False
            self._sending_chat_id = None

    # ---------------------- deletion ----------------------

    def request_delete(self, chat_id: str):
        self.deletion.arm(chat_id, self._delete_session)

    def cancel_delete(self):
        self.deletion.cancel()

    async def confirm_delete(self) -> bool:
        if self.deletion.armed is None:
            return False
        if not self.gate.is_authenticated:
            self.deletion.cancel()
            return False
        chat_id = self.deletion.armed
        if chat_id == self._sending_chat_id:
            # The pending reply would land under a deleted session
            logger.warning(f"⚠️ Chat {chat_id} still has a reply pending; not deleting")
            self.deletion.cancel()
            return False
        try:
            await self.deletion.confirm()
        except Exception:
            logger.error(f"🛑 Error deleting chat {chat_id}", exc_info=True)
            return False
        return True

    async def _delete_session(self, chat_id: str):
        paths = self.gate.paths()
        self._deleting_chat_id = chat_id
        try:
            message_paths = await self.store.list_documents(paths.messages(chat_id))
            # Messages go first; if that fails the session stays so nothing is orphaned
            await self.store.batch_delete(message_paths)
            await self.store.delete_at_path(paths.chat(chat_id))
        finally:
            self._deleting_chat_id = None
        logger.info(f"🗑️ Deleted chat {chat_id} and {len(message_paths)} messages")
        if self.active_chat_id == chat_id:
            self.new_chat()

    # ---------------------- view ----------------------

    def state(self) -> ChatState:
        return ChatState(
            active_chat_id=self.active_chat_id,
            is_loading=self.is_loading,
            input=self.input,
            messages=self.messages,
            sessions=self.sessions,
            delete_prompt=self.deletion.prompt,
        )

    def close(self):
        for unsubscribe in (self._sessions_unsubscribe, self._messages_unsubscribe):
            if unsubscribe is not None:
                unsubscribe()
        self._sessions_unsubscribe = None
        self._messages_unsubscribe = None
        self.deletion.cancel()
