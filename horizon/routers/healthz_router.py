# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
def read_root():
    return {"message": "Welcome to Horizon - Mental Wellness Companion backend Live"}


@router.get("/health", tags=["Infra"])
def health_check(request: Request):
    backend = request.app.state.backend
    return {
        "status": "ok",
        "details": {
            "store": backend.settings.store_backend,
            "gemini_configured": bool(backend.settings.gemini_api_key),
            "active_workspaces": len(request.app.state.registry),
        },
    }
