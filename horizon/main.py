# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from horizon.config import Settings
from horizon.models.firestore_store import FirestoreDocumentStore
from horizon.models.memory_store import InMemoryDocumentStore
from horizon.routers import (
    auth_router,
    chat_router,
    content_router,
    healthz_router,
    journal_router,
    mood_router,
    navigation_router,
    profile_router,
    stream_router,
)
from horizon.services.auth_service import FirebaseAuthProvider, LocalAccounts, LocalAuthProvider
from horizon.services.gemini_service import GeminiClient
from horizon.utils.firebase import init_firebase
from horizon.workspace import Backend, WorkspaceRegistry

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_backend(settings: Settings) -> Backend:
    if settings.env == "production" and settings.jwt_secret_key == "change-me":
        raise RuntimeError("❌ JWT_SECRET_KEY must be set in production")

    chat_generator = GeminiClient(settings.gemini_api_key, settings.gemini_chat_model, timeout=settings.gemini_timeout)
    prompt_generator = GeminiClient(settings.gemini_api_key, settings.gemini_prompt_model, timeout=settings.gemini_timeout)

    if settings.store_backend == "memory":
        # 🧪 Local runs without a Firebase project
        accounts = LocalAccounts()
        logger.info("🧪 Using the in-memory document store")
        return Backend(
            settings=settings,
            store=InMemoryDocumentStore(),
            chat_generator=chat_generator,
            prompt_generator=prompt_generator,
            auth_factory=lambda: LocalAuthProvider(accounts),
        )

    if settings.store_backend != "firestore":
        raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend}")

    init_firebase(settings.firebase_admin_json)
    return Backend(
        settings=settings,
        store=FirestoreDocumentStore(),
        chat_generator=chat_generator,
        prompt_generator=prompt_generator,
        auth_factory=lambda: FirebaseAuthProvider(settings.firebase_web_api_key, timeout=settings.gemini_timeout),
    )


def create_app(settings: Optional[Settings] = None, backend: Optional[Backend] = None) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.backend = backend or build_backend(settings or Settings.from_env())
        app.state.registry = WorkspaceRegistry(app.state.backend)
        logger.info(f"🚀 Horizon started (app id: {app.state.backend.settings.app_id})")
        yield
        app.state.registry.close_all()
        logger.info("🛑 Horizon stopped")

    app = FastAPI(
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        title="Horizon Mental Wellness API",
        description="Mood, journal, breathing and AI companion backend",
        version="1.0",
    )

    # Include routers
    app.include_router(auth_router.router)
    app.include_router(navigation_router.router)
    app.include_router(mood_router.router)
    app.include_router(journal_router.router)
    app.include_router(chat_router.router)
    app.include_router(profile_router.router)
    app.include_router(content_router.router)
    app.include_router(stream_router.router)
    app.include_router(healthz_router.router)

    return app


app = create_app()
