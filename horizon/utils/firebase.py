# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials

logger = logging.getLogger(__name__)


def init_firebase(raw_json: Optional[str]) -> firebase_admin.App:
    """
    Initialize the Firebase Admin SDK once per process.
    Accepts either stringified service-account JSON or a path to the file.
    """
    # ✅ Detect and initialize Firebase only once
    if firebase_admin._apps:
        return firebase_admin.get_app()

    if not raw_json:
        raise ValueError("FIREBASE_ADMIN_JSON is not set in environment variables")

    try:
        if raw_json.strip().startswith("{"):
            # 🧠 Stringified JSON (e.g., hosted secrets)
            cred = credentials.Certificate(json.loads(raw_json))
        else:
            # 🧪 Local path to JSON (for dev)
            cred = credentials.Certificate(raw_json)

        app = firebase_admin.initialize_app(cred)
        logger.info("🔥 Firebase Admin SDK initialized")
        return app

    except Exception as e:
        raise RuntimeError("❌ Failed to initialize Firebase Admin SDK") from e
