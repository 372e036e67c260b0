# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import inspect
import logging
import uuid
from typing import Awaitable, Callable, List, Optional, Union

import bcrypt
import httpx
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from horizon.schemas.user_schemas import AuthSession
from horizon.utils.errors import AuthError, clean_auth_message

logger = logging.getLogger(__name__)

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

AuthCallback = Callable[[Optional[AuthSession]], Union[None, Awaitable[None]]]


class AuthProvider:
    """
    Email/password auth with a current session and change listeners.
    Listeners may be plain functions or coroutine functions.
    """

    def __init__(self):
        self.current: Optional[AuthSession] = None
        self._listeners: List[AuthCallback] = []

    async def sign_up(self, email: str, password: str) -> str:
        raise NotImplementedError

    async def sign_in(self, email: str, password: str) -> AuthSession:
        raise NotImplementedError

    async def sign_out(self):
        await self._set_current(None)

    async def on_auth_state_change(self, callback: AuthCallback) -> Callable[[], None]:
        """Registers the callback and delivers the current state to it right away."""
        self._listeners.append(callback)
        await self._deliver(callback, self.current)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def _set_current(self, session: Optional[AuthSession]):
        self.current = session
        for callback in list(self._listeners):
            await self._deliver(callback, session)

    @staticmethod
    async def _deliver(callback: AuthCallback, session: Optional[AuthSession]):
        result = callback(session)
        if inspect.isawaitable(result):
            await result


class FirebaseAuthProvider(AuthProvider):
    """
    Accounts are created through the Admin SDK; password sign-in goes
    through the Identity Toolkit REST endpoint with the web API key.
    """

    def __init__(self, web_api_key: Optional[str], timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__()
        self.web_api_key = web_api_key
        self.timeout = timeout
        self._transport = transport

    async def sign_up(self, email: str, password: str) -> str:
        try:
            user = await asyncio.to_thread(firebase_auth.create_user, email=email, password=password)
        except (firebase_exceptions.FirebaseError, ValueError) as e:
            logger.info(f"🚫 Sign-up rejected for {email}: {e}")
            raise AuthError(clean_auth_message(str(e)), status_code=400) from e
        logger.info(f"🆕 Account created: {user.uid}")
        return user.uid

    async def sign_in(self, email: str, password: str) -> AuthSession:
        if not self.web_api_key:
            logger.error("❌ Missing FIREBASE_WEB_API_KEY.")
            raise AuthError("Sign-in is not configured.", status_code=503)

        body = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(SIGN_IN_URL, params={"key": self.web_api_key}, json=body)
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ Sign-in request failed: {e}")
            raise AuthError("Unable to reach the sign-in service.", status_code=503) from e

        if response.is_error:
            try:
                message = response.json()["error"]["message"]
            except (ValueError, KeyError, TypeError):
                message = f"HTTP {response.status_code}"
            raise AuthError(clean_auth_message(message))

        data = response.json()
        session = AuthSession(uid=data["localId"], email=data.get("email", email), id_token=data.get("idToken"))
        await self._set_current(session)
        return session


class LocalAccounts:
    """Process-local account table backing LocalAuthProvider."""

    def __init__(self):
        self._by_email = {}

    def hashed_password(self, email: str) -> Optional[bytes]:
        record = self._by_email.get(email.strip().lower())
        return record[1] if record is not None else None

    def create(self, email: str, password: str) -> str:
        key = email.strip().lower()
        if key in self._by_email:
            raise AuthError("The email address is already in use by another account.", status_code=400)
        if len(password) < 6:
            raise AuthError("Password should be at least 6 characters.", status_code=400)
        uid = uuid.uuid4().hex[:28]
        self._by_email[key] = (uid, bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()))
        return uid

    def verify(self, email: str, password: str) -> str:
        record = self._by_email.get(email.strip().lower())
        if record is None or not bcrypt.checkpw(password.encode("utf-8"), record[1]):
            raise AuthError("INVALID_LOGIN_CREDENTIALS")
        return record[0]


class LocalAuthProvider(AuthProvider):
    """Auth for STORE_BACKEND=memory runs, where no Firebase project is configured."""

    def __init__(self, accounts: LocalAccounts):
        super().__init__()
        self.accounts = accounts

    async def sign_up(self, email: str, password: str) -> str:
        return self.accounts.create(email, password)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        uid = self.accounts.verify(email, password)
        session = AuthSession(uid=uid, email=email)
        await self._set_current(session)
        return session
