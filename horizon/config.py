# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from typing import Optional

from pydantic import BaseModel

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()

DEFAULT_APP_ID = "horizon-mvp-final"


class Settings(BaseModel):
    env: str = "development"
    app_id: str = DEFAULT_APP_ID

    # "firestore" in production, "memory" for local runs without Firebase
    store_backend: str = "firestore"
    firebase_admin_json: Optional[str] = None
    firebase_web_api_key: Optional[str] = None

    gemini_api_key: Optional[str] = None
    gemini_chat_model: str = "gemini-1.5-flash"
    gemini_prompt_model: str = "gemini-2.0-flash"
    gemini_timeout: float = 30.0

    jwt_secret_key: str = "change-me"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days

    app_timezone: str = "Asia/Kolkata"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            env=os.getenv("ENV", "development"),
            app_id=os.getenv("APP_ID", DEFAULT_APP_ID),
            store_backend=os.getenv("STORE_BACKEND", "firestore").lower(),
            firebase_admin_json=os.getenv("FIREBASE_ADMIN_JSON"),
            firebase_web_api_key=os.getenv("FIREBASE_WEB_API_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            gemini_chat_model=os.getenv("GEMINI_CHAT_MODEL", "gemini-1.5-flash"),
            gemini_prompt_model=os.getenv("GEMINI_PROMPT_MODEL", "gemini-2.0-flash"),
            gemini_timeout=float(os.getenv("GEMINI_TIMEOUT", "30")),
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", "change-me"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 30))),
            app_timezone=os.getenv("APP_TIMEZONE", "Asia/Kolkata"),
        )
