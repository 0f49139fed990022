"""Deterministic image-prompt composition from a visual brief."""
from __future__ import annotations

from typing import Optional, Sequence

from ..schemas.brief import VisualBrief
from ..schemas.emotional_arc import ArcSegment
from ..schemas.modes import (
    DIRECTOR_STYLE_RULES,
    DirectorMode,
    InterpretationMode,
    coerce_director_mode,
    coerce_interpretation_mode,
)
from .storyboard import select_peak_segment

MAX_PROMPT_LENGTH = 1200
ELLIPSIS = "..."
SAFETY_SUFFIX = "No text, no logos, no watermark."

LITERAL_SCENE_RULE = "Depict a concrete, realistic scene grounded in the imagery of the audio."
ABSTRACT_RULE = "Create a symbolic, non-literal interpretation rather than a literal scene."
ABSTRACT_EXPRESSION_RULE = (
    "Express emotion through shape, color, light, texture, and composition "
    "instead of recognizable objects."
)
ABSTRACT_FOCUS_RULE = "Focus on atmosphere, texture, contrast, and color fields."


def _listing(items: Sequence[str]) -> str:
    return ", ".join(items)


def _mood_sentence(brief: VisualBrief) -> str:
    moods = [brief.mood.primary, *brief.mood.secondary]
    return f"Mood: {_listing(moods)}. Energy: {brief.mood.energy}."


def _lighting_sentence(segment: ArcSegment) -> str:
    if segment.valence > 0.3:
        valence_desc = "warm, inviting lighting"
    elif segment.valence < -0.3:
        valence_desc = "cold, stark lighting with deep shadows"
    else:
        valence_desc = "neutral balanced lighting"

    if segment.arousal > 0.7:
        arousal_desc = "High contrast, dynamic energy"
    elif segment.arousal < 0.3:
        arousal_desc = "Soft, diffused, calm"
    else:
        arousal_desc = "Moderate intensity"

    return f"{arousal_desc}. {valence_desc}."


def _literal_parts(brief: VisualBrief, segment: Optional[ArcSegment]) -> list[str]:
    motifs = segment.visual_motifs if segment is not None else brief.visual_motifs
    palette = segment.palette_words if segment is not None else brief.color_palette_words

    parts = [LITERAL_SCENE_RULE]
    summary = brief.summary.strip().rstrip(".")
    if summary:
        parts.append(f"{summary}.")
    if brief.entities:
        parts.append(f"Key entities: {_listing(brief.entities)}.")
    parts.append(f"Setting: {brief.setting}, {brief.time_of_day}.")
    if motifs:
        parts.append(f"Visual elements: {_listing(motifs)}.")
    if palette:
        parts.append(f"Color palette: {_listing(palette)}.")

    if segment is not None:
        parts.append(_lighting_sentence(segment))
        if segment.keywords:
            parts.append(f"Emotional tone: {_listing(segment.keywords)}.")
    else:
        parts.append(_mood_sentence(brief))
    return parts


def _abstract_parts(
    brief: VisualBrief,
    segment: Optional[ArcSegment],
    emotional_arc: Optional[Sequence[ArcSegment]],
) -> list[str]:
    palette = segment.palette_words if segment is not None else brief.color_palette_words
    peak = segment if segment is not None else select_peak_segment(emotional_arc)

    parts = [ABSTRACT_RULE, ABSTRACT_EXPRESSION_RULE, _mood_sentence(brief)]
    if peak is not None:
        if peak.keywords:
            parts.append(f"Peak emotional tone: {_listing(peak.keywords)}.")
        if peak.palette_words:
            parts.append(f"Peak palette cues: {_listing(peak.palette_words)}.")
    if palette:
        parts.append(f"Palette focus: {_listing(palette)}.")
    parts.append(ABSTRACT_FOCUS_RULE)
    return parts


def _cap_length(body: str) -> str:
    """Join body and safety suffix, cutting the body so the suffix always survives."""
    prompt = f"{body} {SAFETY_SUFFIX}"
    if len(prompt) <= MAX_PROMPT_LENGTH:
        return prompt
    keep = MAX_PROMPT_LENGTH - len(SAFETY_SUFFIX) - len(ELLIPSIS) - 1
    return f"{body[:keep]}{ELLIPSIS} {SAFETY_SUFFIX}"


def compose_prompt(
    brief: VisualBrief,
    *,
    director_mode: DirectorMode | str | None = DirectorMode.album_cover,
    arc_segment: Optional[ArcSegment] = None,
    interpretation_mode: InterpretationMode | str | None = InterpretationMode.literal,
    emotional_arc: Optional[Sequence[ArcSegment]] = None,
    custom_director: Optional[str] = None,
) -> str:
    """
    Compose the image-generation prompt for a brief.

    Args:
        brief: Validated visual brief.
        director_mode: Style preset; unknown values fall back to album_cover.
        arc_segment: Storyboard frame segment. Overrides the brief's motifs and
            palette and drives lighting in literal mode.
        interpretation_mode: literal or abstract; unknown values fall back to literal.
        emotional_arc: Full arc, used in abstract mode to find the peak segment
            when no ``arc_segment`` is given.
        custom_director: Free-text style direction for the custom director mode.

    Returns:
        A prompt of at most 1200 characters that always ends with the safety suffix.
    """
    director = coerce_director_mode(director_mode)
    interpretation = coerce_interpretation_mode(interpretation_mode)

    parts = [DIRECTOR_STYLE_RULES[director]]
    if director is DirectorMode.custom and custom_director and custom_director.strip():
        parts.append(f"Custom direction: {custom_director.strip().rstrip('.')}.")

    if interpretation is InterpretationMode.abstract:
        parts.extend(_abstract_parts(brief, arc_segment, emotional_arc))
    else:
        parts.extend(_literal_parts(brief, arc_segment))

    # Other director modes carry their style in the rule text
    if director is DirectorMode.album_cover:
        parts.append(f"Style: {brief.style.medium}{', cinematic' if brief.style.cinematic else ''}.")
    parts.append(f"Lens: {brief.style.camera_lens}. {brief.style.composition}.")

    return _cap_length(" ".join(parts))
