"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import search, todos, users

router = APIRouter()

router.include_router(todos.router, prefix="/todos", tags=["todos"])
router.include_router(search.router, prefix="/search/todos", tags=["search"])
router.include_router(users.router, prefix="/users", tags=["users"])
