"""Selection of representative emotional-arc segments."""
from __future__ import annotations

import math
from typing import NamedTuple, Optional, Sequence

from ..schemas.emotional_arc import MIN_ARC_SEGMENTS, ArcSegment


class InsufficientSegmentsError(ValueError):
    """Raised when an arc is too short to pick storyboard frames from."""
    pass


class StoryboardSegments(NamedTuple):
    intro: ArcSegment
    peak: ArcSegment
    resolution: ArcSegment


def select_storyboard_segments(arc: Sequence[ArcSegment]) -> StoryboardSegments:
    """
    Pick the three storyboard frames from an emotional arc.

    Segments are ordered by ``start_sec`` first (stable, so ties keep input order):
    - intro: lowest arousal within the first half (ceil(n/2) segments)
    - peak: highest arousal overall
    - resolution: the last segment

    Ties in arousal resolve to the earliest segment.

    Raises:
        InsufficientSegmentsError: If the arc has fewer than 3 segments.
    """
    if len(arc) < MIN_ARC_SEGMENTS:
        raise InsufficientSegmentsError(
            f"Emotional arc must have at least {MIN_ARC_SEGMENTS} segments for storyboard mode"
        )

    ordered = sorted(arc, key=lambda seg: seg.start_sec)

    first_half = ordered[: math.ceil(len(ordered) / 2)]
    intro = min(first_half, key=lambda seg: seg.arousal)
    peak = max(ordered, key=lambda seg: seg.arousal)
    resolution = ordered[-1]

    return StoryboardSegments(intro=intro, peak=peak, resolution=resolution)


def select_peak_segment(arc: Sequence[ArcSegment] | None) -> Optional[ArcSegment]:
    """Return the highest-arousal segment in input order, or None for an empty arc."""
    if not arc:
        return None
    return max(arc, key=lambda seg: seg.arousal)
