# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Callable, List, Optional

from horizon.models.document_store import DocumentStore
from horizon.models.paths import UserPaths
from horizon.schemas.user_schemas import AuthSession, SignUpRequest, UserProfile
from horizon.services.auth_service import AuthProvider
from horizon.utils.errors import AuthError, InputValidationError

logger = logging.getLogger(__name__)

UserListener = Callable[[Optional[UserProfile]], None]


class IdentityGate:
    """
    Tracks whether a user is signed in and exposes their merged profile
    (auth session + profile document) to the other components.
    """

    def __init__(self, auth: AuthProvider, store: DocumentStore, app_id: str):
        self.auth = auth
        self.store = store
        self.app_id = app_id
        self.current_user: Optional[UserProfile] = None
        self.ready = False
        self._listeners: List[UserListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def paths(self) -> UserPaths:
        user = self.require_user()
        return UserPaths(self.app_id, user.uid)

    def require_user(self) -> UserProfile:
        if self.current_user is None:
            raise AuthError("Not signed in")
        return self.current_user

    async def open(self):
        self._unsubscribe = await self.auth.on_auth_state_change(self._on_auth_change)

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _on_auth_change(self, session: Optional[AuthSession]):
        if session is None:
            self.current_user = None
        else:
            profile = await self.store.get_at_path(UserPaths(self.app_id, session.uid).profile) or {}
            age = profile.get("age")
            self.current_user = UserProfile(
                uid=session.uid,
                email=profile.get("email") or session.email,
                name=profile.get("name"),
                age=str(age) if age is not None else None,
            )
        self.ready = True
        for listener in list(self._listeners):
            listener(self.current_user)

    # ---------------------- account actions ----------------------

    async def sign_up(self, request: SignUpRequest) -> UserProfile:
        missing = [f for f in ("name", "age", "email", "password") if not getattr(request, f).strip()]
        if missing:
            raise InputValidationError(f"Please fill in: {', '.join(missing)}.")
        if request.password != request.confirm_password:
            raise InputValidationError("Passwords do not match.")

        uid = await self.auth.sign_up(request.email, request.password)
        await self.store.set_at_path(
            UserPaths(self.app_id, uid).profile,
            {"name": request.name, "age": request.age, "email": request.email},
        )
        await self.auth.sign_in(request.email, request.password)
        logger.info(f"✅ New user signed up: {uid}")
        return self.require_user()

    async def sign_in(self, email: str, password: str) -> UserProfile:
        await self.auth.sign_in(email, password)
        return self.require_user()

    async def sign_out(self):
        await self.auth.sign_out()

    def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()
