"""Shared test fixtures."""

from __future__ import annotations

import copy
import json
import os

import pytest

# Keep test runs from writing logs/app.log
os.environ.setdefault("LOG_FILE", "")

from audio2art.schemas.analysis import AnalysisResult  # noqa: E402
from audio2art.schemas.brief import VisualBrief  # noqa: E402
from audio2art.schemas.emotional_arc import ArcSegment  # noqa: E402
from audio2art.schemas.generate import ImageResult  # noqa: E402


VALID_BRIEF = {
    "title": "Neon Rain",
    "summary": "A lone figure walks through a neon-lit rainy street at night",
    "themes": ["solitude", "urban life", "reflection"],
    "entities": ["person", "street", "neon signs", "rain"],
    "mood": {
        "primary": "melancholic",
        "secondary": ["contemplative", "peaceful"],
        "energy": "low",
    },
    "setting": "Tokyo side street with glowing signs",
    "time_of_day": "night",
    "color_palette_words": ["neon blue", "pink", "deep purple", "wet asphalt gray"],
    "visual_motifs": ["reflections", "rain drops", "glowing signs"],
    "style": {
        "medium": "photography",
        "cinematic": True,
        "camera_lens": "wide-angle",
        "composition": "rule of thirds",
    },
    "negative_prompts": ["text", "logos", "watermark"],
}


def make_segment_data(
    label: str = "build",
    start_sec: float = 0.0,
    arousal: float = 0.5,
    valence: float = 0.0,
    keywords: list[str] | None = None,
    palette_words: list[str] | None = None,
    visual_motifs: list[str] | None = None,
) -> dict:
    return {
        "label": label,
        "start_sec": start_sec,
        "end_sec": start_sec + 30.0,
        "valence": valence,
        "arousal": arousal,
        "keywords": keywords if keywords is not None else [f"{label} mood"],
        "palette_words": palette_words if palette_words is not None else [f"{label} color"],
        "visual_motifs": visual_motifs if visual_motifs is not None else [f"{label} motif"],
    }


# Chronological arc with arousals 0.2, 0.5, 0.9, 0.4, 0.3
VALID_ARC = [
    make_segment_data("intro", 0.0, arousal=0.2, valence=-0.1),
    make_segment_data("build", 30.0, arousal=0.5, valence=0.2),
    make_segment_data("chorus", 60.0, arousal=0.9, valence=0.6),
    make_segment_data("bridge", 90.0, arousal=0.4, valence=-0.4),
    make_segment_data("outro", 120.0, arousal=0.3, valence=0.1),
]

VALID_EXPLAIN = {
    "inferred_genre": "synthwave",
    "instrumentation": ["analog synth", "drum machine"],
    "mapping_notes": [
        {"signal": "slow tempo", "effect": "night setting with soft light"},
        {"signal": "minor key", "effect": "cool, desaturated palette"},
    ],
}


class FakeGenAIClient:
    """In-process stand-in for GenAIClient."""

    def __init__(self, responses: list[str] | None = None, image: ImageResult | None = None) -> None:
        self.responses = list(responses or [])
        self.image = image or ImageResult(base64="dGVzdA==", mime="image/png")
        self.analyze_calls: list[dict] = []
        self.image_prompts: list[str] = []
        self.image_error: Exception | None = None

    def analyze_audio(self, audio_bytes, mime_type, title=None, artist=None, repair=None) -> str:
        self.analyze_calls.append(
            {"mime_type": mime_type, "title": title, "artist": artist, "repair": repair}
        )
        return self.responses.pop(0)

    def generate_image(self, prompt: str) -> ImageResult:
        self.image_prompts.append(prompt)
        if self.image_error is not None:
            raise self.image_error
        return self.image


@pytest.fixture
def brief_data() -> dict:
    return copy.deepcopy(VALID_BRIEF)


@pytest.fixture
def arc_data() -> list[dict]:
    return copy.deepcopy(VALID_ARC)


@pytest.fixture
def analysis_data(brief_data, arc_data) -> dict:
    return {
        "brief": brief_data,
        "emotional_arc": arc_data,
        "explain": copy.deepcopy(VALID_EXPLAIN),
    }


@pytest.fixture
def analysis_json(analysis_data) -> str:
    return json.dumps(analysis_data)


@pytest.fixture
def brief(brief_data) -> VisualBrief:
    return VisualBrief.model_validate(brief_data)


@pytest.fixture
def arc(arc_data) -> list[ArcSegment]:
    return [ArcSegment.model_validate(item) for item in arc_data]


@pytest.fixture
def analysis(analysis_data) -> AnalysisResult:
    return AnalysisResult.model_validate(analysis_data)


@pytest.fixture
def segment_factory():
    def _make(**kwargs) -> ArcSegment:
        return ArcSegment.model_validate(make_segment_data(**kwargs))
    return _make


@pytest.fixture
def fake_client(analysis_json) -> FakeGenAIClient:
    return FakeGenAIClient(responses=[analysis_json])
