"""Tests for prompt composition."""

from __future__ import annotations

import itertools

import pytest

from audio2art.schemas.brief import VisualBrief
from audio2art.schemas.modes import DIRECTOR_STYLE_RULES, DirectorMode, InterpretationMode
from audio2art.services.prompt import (
    ABSTRACT_FOCUS_RULE,
    ABSTRACT_RULE,
    LITERAL_SCENE_RULE,
    MAX_PROMPT_LENGTH,
    SAFETY_SUFFIX,
    compose_prompt,
)


def test_default_prompt_is_album_cover_literal(brief):
    prompt = compose_prompt(brief)
    assert prompt.startswith(DIRECTOR_STYLE_RULES[DirectorMode.album_cover])
    assert LITERAL_SCENE_RULE in prompt
    assert "A lone figure walks through a neon-lit rainy street at night." in prompt
    assert "Key entities: person, street, neon signs, rain." in prompt
    assert "Setting: Tokyo side street with glowing signs, night." in prompt
    assert "Visual elements: reflections, rain drops, glowing signs." in prompt
    assert "Color palette: neon blue, pink, deep purple, wet asphalt gray." in prompt
    assert "Mood: melancholic, contemplative, peaceful. Energy: low." in prompt
    assert "Style: photography, cinematic." in prompt
    assert "Lens: wide-angle. rule of thirds." in prompt
    assert prompt.endswith(SAFETY_SUFFIX)


def test_literal_sentence_order(brief):
    prompt = compose_prompt(brief)
    markers = [
        "Album cover artwork.",
        LITERAL_SCENE_RULE,
        "A lone figure",
        "Key entities:",
        "Setting:",
        "Visual elements:",
        "Color palette:",
        "Mood:",
        "Style:",
        "Lens:",
        SAFETY_SUFFIX,
    ]
    positions = [prompt.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_style_sentence_only_for_album_cover(brief):
    for mode in DirectorMode:
        prompt = compose_prompt(brief, director_mode=mode)
        assert ("Style: photography" in prompt) == (mode is DirectorMode.album_cover)
        assert "Lens: wide-angle. rule of thirds." in prompt


def test_style_without_cinematic(brief_data):
    brief_data["style"]["cinematic"] = False
    prompt = compose_prompt(VisualBrief.model_validate(brief_data))
    assert "Style: photography." in prompt
    assert "cinematic." not in prompt.split("Style:")[1].split("Lens:")[0]


@pytest.mark.parametrize("mode,marker", [
    (DirectorMode.cinematic_still, "Cinematic film still"),
    (DirectorMode.anime_frame, "Anime key frame"),
    (DirectorMode.surreal_dream, "Surrealist dreamscape"),
    (DirectorMode.game_concept_art, "Video game concept art"),
    (DirectorMode.minimal_poster, "Minimalist poster design"),
    (DirectorMode.custom, "Custom director mode"),
])
def test_director_rule_leads_prompt(brief, mode, marker):
    prompt = compose_prompt(brief, director_mode=mode)
    assert prompt.startswith(marker)


def test_director_modes_differ(brief):
    prompts = {
        mode: compose_prompt(brief, director_mode=mode)
        for mode in ("cinematic_still", "anime_frame", "surreal_dream")
    }
    assert len(set(prompts.values())) == 3


def test_every_director_mode_has_rule():
    assert set(DIRECTOR_STYLE_RULES) == set(DirectorMode)


def test_unknown_director_mode_falls_back(brief):
    assert compose_prompt(brief, director_mode="vaporwave") == compose_prompt(brief)
    assert compose_prompt(brief, director_mode=None) == compose_prompt(brief)


def test_custom_director_text(brief):
    prompt = compose_prompt(brief, director_mode="custom", custom_director="Ukiyo-e woodblock print.")
    assert "Custom direction: Ukiyo-e woodblock print." in prompt
    assert prompt.index("Custom director mode") < prompt.index("Custom direction:")


def test_custom_director_text_ignored_for_other_modes(brief):
    prompt = compose_prompt(brief, director_mode="anime_frame", custom_director="Ukiyo-e")
    assert "Ukiyo-e" not in prompt


def test_blank_custom_director_text_ignored(brief):
    prompt = compose_prompt(brief, director_mode="custom", custom_director="   ")
    assert "Custom direction" not in prompt


def test_segment_override_propagates(brief, segment_factory):
    segment = segment_factory(
        label="bridge",
        visual_motifs=["rain"],
        palette_words=["indigo"],
        keywords=["nostalgic"],
    )
    prompt = compose_prompt(brief, arc_segment=segment)
    assert "Visual elements: rain." in prompt
    assert "Color palette: indigo." in prompt
    assert "Emotional tone: nostalgic." in prompt
    assert "reflections" not in prompt
    assert "Mood:" not in prompt


@pytest.mark.parametrize("valence,arousal,expected", [
    (0.8, 0.9, "High contrast, dynamic energy. warm, inviting lighting."),
    (-0.8, 0.1, "Soft, diffused, calm. cold, stark lighting with deep shadows."),
    (0.0, 0.5, "Moderate intensity. neutral balanced lighting."),
    (0.3, 0.7, "Moderate intensity. neutral balanced lighting."),
    (-0.3, 0.3, "Moderate intensity. neutral balanced lighting."),
])
def test_segment_lighting(brief, segment_factory, valence, arousal, expected):
    segment = segment_factory(valence=valence, arousal=arousal)
    assert expected in compose_prompt(brief, arc_segment=segment)


def test_segment_without_keywords_skips_tone(brief, segment_factory):
    segment = segment_factory(keywords=[])
    assert "Emotional tone" not in compose_prompt(brief, arc_segment=segment)


def test_empty_lists_are_omitted(brief_data):
    brief_data["entities"] = []
    brief_data["visual_motifs"] = []
    brief_data["color_palette_words"] = []
    brief_data["mood"]["secondary"] = []
    prompt = compose_prompt(VisualBrief.model_validate(brief_data))
    assert "Key entities" not in prompt
    assert "Visual elements" not in prompt
    assert "Color palette" not in prompt
    assert "Mood: melancholic. Energy: low." in prompt


def test_abstract_mode_uses_peak_segment(brief, arc):
    prompt = compose_prompt(brief, interpretation_mode="abstract", emotional_arc=arc)
    assert prompt.index(ABSTRACT_RULE) < prompt.index(ABSTRACT_FOCUS_RULE)
    assert LITERAL_SCENE_RULE not in prompt
    assert "Mood: melancholic, contemplative, peaceful. Energy: low." in prompt
    assert "Peak emotional tone: chorus mood." in prompt
    assert "Peak palette cues: chorus color." in prompt
    assert "Palette focus: neon blue, pink, deep purple, wet asphalt gray." in prompt
    assert "Setting:" not in prompt
    assert prompt.endswith(SAFETY_SUFFIX)


def test_abstract_mode_without_arc(brief):
    prompt = compose_prompt(brief, interpretation_mode=InterpretationMode.abstract)
    assert ABSTRACT_RULE in prompt
    assert "Peak emotional tone" not in prompt
    assert "Palette focus: neon blue" in prompt


def test_abstract_mode_segment_override(brief, arc, segment_factory):
    segment = segment_factory(palette_words=["indigo"], keywords=["nostalgic"])
    prompt = compose_prompt(
        brief, interpretation_mode="abstract", arc_segment=segment, emotional_arc=arc
    )
    assert "Peak emotional tone: nostalgic." in prompt
    assert "Peak palette cues: indigo." in prompt
    assert "Palette focus: indigo." in prompt
    assert "chorus" not in prompt


@pytest.mark.parametrize("value", [None, "", "poetic", 42])
def test_invalid_interpretation_mode_defaults_to_literal(brief, value):
    prompt = compose_prompt(brief, interpretation_mode=value)
    assert prompt == compose_prompt(brief, interpretation_mode="literal")
    assert LITERAL_SCENE_RULE in prompt


def test_prompt_bound_for_all_modes(brief, arc):
    for director, interpretation in itertools.product(DirectorMode, InterpretationMode):
        prompt = compose_prompt(
            brief,
            director_mode=director,
            interpretation_mode=interpretation,
            emotional_arc=arc,
        )
        assert len(prompt) <= MAX_PROMPT_LENGTH
        assert prompt.endswith(SAFETY_SUFFIX)


def test_long_brief_is_truncated_keeping_suffix(brief_data):
    brief_data["summary"] = "An endless corridor of mirrors " * 80
    brief_data["visual_motifs"] = [f"motif {i}" for i in range(100)]
    prompt = compose_prompt(VisualBrief.model_validate(brief_data))
    assert len(prompt) == MAX_PROMPT_LENGTH
    assert prompt.endswith("... " + SAFETY_SUFFIX)
    assert prompt.startswith("Album cover artwork.")


def test_prompt_at_limit_is_untouched(brief_data):
    base = compose_prompt(VisualBrief.model_validate(brief_data))
    brief_data["summary"] += "x" * (MAX_PROMPT_LENGTH - len(base))
    prompt = compose_prompt(VisualBrief.model_validate(brief_data))
    assert len(prompt) == MAX_PROMPT_LENGTH
    assert "..." not in prompt


def test_composition_is_deterministic(brief, arc):
    first = compose_prompt(brief, director_mode="anime_frame", interpretation_mode="abstract", emotional_arc=arc)
    second = compose_prompt(brief, director_mode="anime_frame", interpretation_mode="abstract", emotional_arc=arc)
    assert first == second
