"""Response schemas for the generate endpoint."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from .brief import VisualBrief
from .emotional_arc import ArcSegment
from .explain import Explain
from .modes import DirectorMode, InterpretationMode, OutputMode, StoryboardFrameName

ImageMime = Literal["image/png", "image/jpeg"]


class ImageResult(BaseModel):
    """Image payload returned by the image model."""
    base64: str
    mime: ImageMime = "image/png"


class SingleResult(BaseModel):
    image_base64: str
    image_mime: ImageMime
    prompt: str


class StoryboardFrame(BaseModel):
    """One frame of a three-frame storyboard."""
    frame: StoryboardFrameName
    image_base64: str
    image_mime: ImageMime
    prompt: str


class Timings(BaseModel):
    """Wall-clock timings in milliseconds."""
    total: int
    gemini: int
    imagen: int


class GenerateResponse(BaseModel):
    """Full response for an audio-to-artwork request."""
    request_id: str
    output_mode: OutputMode
    director_mode: DirectorMode
    interpretation_mode: InterpretationMode
    brief: VisualBrief
    emotional_arc: List[ArcSegment]
    explain: Explain
    single: Optional[SingleResult] = None
    storyboard: Optional[List[StoryboardFrame]] = None
    timings_ms: Timings
