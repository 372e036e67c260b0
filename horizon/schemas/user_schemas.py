# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import Optional


class SignUpRequest(BaseModel):
    name: str = ""
    age: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthSession(BaseModel):
    uid: str
    email: Optional[str] = None
    id_token: Optional[str] = None


class UserProfile(BaseModel):
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    age: Optional[str] = None

    @property
    def welcome_name(self) -> str:
        return self.name or "there"


class ProfileSummary(BaseModel):
    name: Optional[str]
    email: Optional[str]
    age: Optional[str]
    mood_log_count: int
    journal_entry_count: int
