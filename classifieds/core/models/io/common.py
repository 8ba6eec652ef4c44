"""
Shared I/O envelopes.

Mutating endpoints answer with ``ActionResult``; failures never reach this
model because they are raised as ``MarketplaceError`` and rendered by the
exception handler as ``{"success": false, "error": ...}``.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ActionResult(BaseModel, Generic[DataT]):
    """Result of a successful action."""

    success: bool = Field(default=True, description="Always true; failures are returned as errors")
    data: Optional[DataT] = Field(default=None, description="Payload of the action, if any")


class CountRead(BaseModel):
    """A single counter."""

    count: int


class ErrorResponse(BaseModel):
    """Body of a failed action."""

    success: bool = False
    error: str = Field(description="Human readable message (French)")
