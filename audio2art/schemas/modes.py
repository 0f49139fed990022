"""Request option enumerations and the director style table."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, TypeVar


class DirectorMode(str, Enum):
    album_cover = "album_cover"
    cinematic_still = "cinematic_still"
    surreal_dream = "surreal_dream"
    anime_frame = "anime_frame"
    game_concept_art = "game_concept_art"
    minimal_poster = "minimal_poster"
    custom = "custom"


class OutputMode(str, Enum):
    single = "single"
    storyboard = "storyboard"


class InterpretationMode(str, Enum):
    literal = "literal"
    abstract = "abstract"


class StoryboardFrameName(str, Enum):
    intro = "intro"
    peak = "peak"
    resolution = "resolution"


# Injected verbatim as the first sentence of every composed prompt.
DIRECTOR_STYLE_RULES: Mapping[DirectorMode, str] = MappingProxyType({
    DirectorMode.album_cover: (
        "Album cover artwork. Bold graphic composition, iconic central subject, "
        "strong color blocking, high visual impact suitable for a vinyl record sleeve. "
        "Square framing."
    ),
    DirectorMode.cinematic_still: (
        "Cinematic film still. Anamorphic widescreen framing, dramatic lighting with "
        "volumetric rays, shallow depth of field, film grain, color-graded with "
        "teal-and-orange split toning. 2.39:1 aspect feel."
    ),
    DirectorMode.surreal_dream: (
        "Surrealist dreamscape. Impossible geometry, melting forms, floating elements "
        "defying gravity, Salvador Dali meets digital art. Hyper-detailed textures on "
        "impossible objects, iridescent lighting."
    ),
    DirectorMode.anime_frame: (
        "Anime key frame. Studio Ghibli-inspired cel shading, expressive character poses, "
        "vibrant saturated palette, dynamic speed lines for energy, soft ambient occlusion. "
        "Japanese animation aesthetic."
    ),
    DirectorMode.game_concept_art: (
        "Video game concept art. Epic scale environment painting, atmospheric perspective, "
        "painterly digital brushwork, detailed foreground props, lore-rich world-building "
        "details. Unreal Engine aesthetic."
    ),
    DirectorMode.minimal_poster: (
        "Minimalist poster design. Flat geometric shapes, limited 3-color palette, bold "
        "negative space, Swiss design grid, no gradients, clean vector-like edges. "
        "Typographic composition without actual text."
    ),
    DirectorMode.custom: (
        "Custom director mode. Follow the user's custom instruction as the primary style directive."
    ),
})


E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value: Any, default: E) -> E:
    """Return the enum member for ``value``, or ``default`` when it is missing or unknown."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default


def coerce_director_mode(value: Any) -> DirectorMode:
    return _coerce(DirectorMode, value, DirectorMode.album_cover)


def coerce_output_mode(value: Any) -> OutputMode:
    return _coerce(OutputMode, value, OutputMode.single)


def coerce_interpretation_mode(value: Any) -> InterpretationMode:
    return _coerce(InterpretationMode, value, InterpretationMode.literal)
