# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GenerativeTextError(Exception):
    """Any failure to obtain generated text: transport, non-2xx or bad payload."""


def turn(role: str, text: str) -> Dict:
    return {"role": role, "parts": [{"text": text}]}


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {response.status_code}"


class GeminiClient:
    """
    Stateless request/response client for the Gemini generateContent endpoint.
    One attempt per call; callers own the fallback text.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        base_url: str = GEMINI_BASE_URL,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url
        self._transport = transport

    async def generate(self, contents: List[Dict], system_instruction: Optional[str] = None) -> str:
        if not self.api_key:
            logger.error("❌ Missing GEMINI_API_KEY.")
            raise GenerativeTextError("Generative API key not configured")

        payload = {"contents": contents}
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        url = f"{self.base_url}/{self.model}:generateContent"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                logger.info(f"🔁 Sending {len(contents)} turn(s) to {self.model}")
                response = await client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ Gemini request failed: {e}")
            raise GenerativeTextError(str(e)) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"⚠️ Gemini returned {response.status_code}: {message}")
            raise GenerativeTextError(message)

        try:
            return response.json()["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("⚠️ Unexpected Gemini response format: %s", response.text[:500])
            raise GenerativeTextError("Malformed generative API response") from e
