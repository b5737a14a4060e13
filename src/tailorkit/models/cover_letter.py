"""Pydantic model for cover letter output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CoverLetter(BaseModel):
    body: str
    company: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
