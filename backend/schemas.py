"""
Pydantic schemas for the search and sheets proxy API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ItemResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
    details: Optional[str] = None


class SheetValuesResponse(BaseModel):
    """Shape of a Sheets `values.get` payload. Passed through unvalidated."""

    range: Optional[str] = None
    majorDimension: Optional[str] = None
    values: Optional[list[list]] = None
