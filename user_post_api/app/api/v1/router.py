"""
Top-level router for version 1 of the API.

This router aggregates domain-specific routers (users, assistant,
session) under a unified prefix.  When new domains are introduced,
update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import assistant, session, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(assistant.router, prefix="/assistant", tags=["assistant"])
router.include_router(session.router, prefix="/session", tags=["session"])
