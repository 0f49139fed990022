"""Visual brief schemas extracted from audio analysis."""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict

Energy = Literal["low", "medium", "high"]
Medium = Literal["photography", "illustration", "3d", "anime", "painterly", "collage"]


class Mood(BaseModel):
    """Dominant emotional tone of the audio."""
    model_config = ConfigDict(strict=True, frozen=True)

    primary: str
    secondary: List[str]
    energy: Energy


class Style(BaseModel):
    """Rendering style suggested by the analysis model."""
    model_config = ConfigDict(strict=True, frozen=True)

    medium: Medium
    cinematic: bool
    camera_lens: str
    composition: str


class VisualBrief(BaseModel):
    """Structured scene description used as the source for prompt composition."""
    model_config = ConfigDict(strict=True, frozen=True)

    title: str
    summary: str
    themes: List[str]
    entities: List[str]
    mood: Mood
    setting: str
    time_of_day: str
    color_palette_words: List[str]
    visual_motifs: List[str]
    style: Style
    negative_prompts: List[str]
