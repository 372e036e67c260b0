# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import re

from fastapi import HTTPException


class AuthError(Exception):
    """Raised by the auth provider; message is shown to the user as-is."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InputValidationError(Exception):
    """Local validation failure that blocks a submission."""


def clean_auth_message(message: str) -> str:
    # Provider messages arrive as "Firebase: <reason>"
    cleaned = re.sub(r"^Firebase:\s*", "", message or "").strip()
    return cleaned or "Authentication failed."


def as_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, AuthError):
        return HTTPException(status_code=exc.status_code, detail=exc.message)
    return HTTPException(status_code=400, detail=str(exc))
