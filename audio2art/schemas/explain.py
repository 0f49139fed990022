"""Explainability schemas passed through to the client untouched."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class MappingNote(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    signal: str
    effect: str


class Explain(BaseModel):
    """Why the analysis model chose the imagery it did."""
    model_config = ConfigDict(strict=True, frozen=True)

    inferred_genre: str
    instrumentation: List[str]
    mapping_notes: List[MappingNote]
