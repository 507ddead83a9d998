"""
Pydantic models for todo items.

``TodoDraft`` is what clients submit on create and update.  It has no
``id`` and no ``owner_name``: both are server controlled.  ``TodoRead``
is the stored record, returned from every read path.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .page import PageMeta


class TodoBase(BaseModel):
    name: str = Field(..., examples=["Buy milk"])
    priority: Optional[str] = Field(None, examples=["high"])
    description: Optional[str] = Field(None, examples=["Two litres, skimmed"])
    completed: bool = Field(False, examples=[False])


class TodoDraft(TodoBase):
    """Schema for creating or replacing a todo item.

    Unknown keys such as ``id`` or ``owner_name`` are ignored by
    pydantic, so clients cannot set them.
    """

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty")
        return v


class TodoRead(TodoBase):
    """Schema for a stored todo item."""

    id: int
    owner_name: str

    model_config = {
        "from_attributes": True,
    }


class TodoCreated(BaseModel):
    id: int


class TodoPage(PageMeta):
    items: List[TodoRead]


class SearchFilters(BaseModel):
    """Optional search criteria; blank values count as absent."""

    name: Optional[str] = None
    priority: Optional[str] = None
