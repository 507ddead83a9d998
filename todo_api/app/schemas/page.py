"""
Paging request and response shapes.

A ``PageWindow`` is handed through the services untouched and only
interpreted by the repositories.  Sort keys are validated there
against a per-table allow list.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PageWindow(BaseModel):
    limit: int = Field(20, ge=1)
    offset: int = Field(0, ge=0)
    sort_by: Optional[str] = None
    order: str = "asc"


class PageMeta(BaseModel):
    """Paging metadata shared by all page responses."""

    total: int
    limit: int
    offset: int
