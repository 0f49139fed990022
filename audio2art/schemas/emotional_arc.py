"""Emotional arc schemas: the mood/intensity timeline of a track."""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

ArcLabel = Literal["intro", "build", "chorus", "bridge", "drop", "outro", "peak"]

MIN_ARC_SEGMENTS = 3
MAX_ARC_SEGMENTS = 7


class ArcSegment(BaseModel):
    """One time-bounded slice of the emotional trajectory."""
    model_config = ConfigDict(strict=True, frozen=True)

    label: ArcLabel
    start_sec: float = Field(ge=0)
    end_sec: float = Field(ge=0)
    valence: float = Field(ge=-1, le=1)
    arousal: float = Field(ge=0, le=1)
    keywords: List[str]
    palette_words: List[str]
    visual_motifs: List[str]


EmotionalArc = List[ArcSegment]
