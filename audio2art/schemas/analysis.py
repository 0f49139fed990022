"""Top-level analysis result returned by the audio analysis model."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .brief import VisualBrief
from .emotional_arc import MAX_ARC_SEGMENTS, MIN_ARC_SEGMENTS, ArcSegment
from .explain import Explain


class AnalysisResult(BaseModel):
    """Full analysis: visual brief, emotional arc and explainability notes."""
    model_config = ConfigDict(strict=True, frozen=True)

    brief: VisualBrief
    emotional_arc: List[ArcSegment] = Field(
        min_length=MIN_ARC_SEGMENTS, max_length=MAX_ARC_SEGMENTS
    )
    explain: Explain


# Name used by the analysis prompt and older callers
GeminiAnalysis = AnalysisResult
