"""
API Schemas — Request and Response Models

Pydantic models for the dictagger API.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


# ============================================================
# TAG
# ============================================================

class TagRequest(BaseModel):
    """POST /tag request body."""
    text: str = Field(..., max_length=200_000,
                      description="Text to tag. Each line is tagged independently.")
    format: Optional[str] = Field(None, pattern="^(iob|IOB|bioes|BIOES)$",
                                  description="Tagging scheme: iob or bioes (default from config).")

    model_config = {"json_schema_extra": {"examples": [
        {"text": "patient had myocardial infarction yesterday", "format": "bioes"},
    ]}}


class TagBatchRequest(BaseModel):
    """POST /tag/batch request body."""
    items: list[TagRequest] = Field(..., min_length=1, max_length=100)


class TokenTag(BaseModel):
    token: str
    tag: str                    # "B-GENE", "O", ...
    label: Optional[str] = None
    start: int                  # UTF-8 byte offset in the line
    end: int


class TaggedLine(BaseModel):
    text: str
    tags: list[TokenTag]


class TagResponse(BaseModel):
    """POST /tag response body."""
    format: str
    lines: list[TaggedLine]
    tag_count: int
    chunk_count: int


class TagBatchResponse(BaseModel):
    """POST /tag/batch response body."""
    results: list[TagResponse]
    total: int


# ============================================================
# DICTIONARY
# ============================================================

class DictionaryResponse(BaseModel):
    entries: int
    classes: list[str]


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    version: str
    dictionary_loaded: bool
    dictionary_entries: int
    case_sensitive: bool
    word_matching: bool
    match_kind: str
    default_format: str
