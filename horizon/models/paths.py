# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


class UserPaths:
    """
    Document paths for one user, namespaced under the application id so
    several deployments can share one Firestore project.
    """

    def __init__(self, app_id: str, uid: str):
        self.app_id = app_id
        self.uid = uid

    @property
    def users(self) -> str:
        return f"artifacts/{self.app_id}/users"

    @property
    def profile(self) -> str:
        return f"{self.users}/{self.uid}"

    @property
    def mood_logs(self) -> str:
        return f"{self.profile}/mood_logs"

    @property
    def journal_entries(self) -> str:
        return f"{self.profile}/journal_entries"

    @property
    def chats(self) -> str:
        return f"{self.profile}/chats"

    def chat(self, chat_id: str) -> str:
        return f"{self.chats}/{chat_id}"

    def messages(self, chat_id: str) -> str:
        return f"{self.chat(chat_id)}/messages"
