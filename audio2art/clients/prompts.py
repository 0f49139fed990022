"""Fixed instructions sent to the audio analysis model."""
from __future__ import annotations

ANALYSIS_SYSTEM_PROMPT = """You are an audio analyst that produces structured visual briefs for image generation.
You will receive an audio file (music, speech, or ambient sound).
Analyze it for themes, mood, imagery, style, and how its emotion evolves over time.

RULES:
- Return ONLY valid JSON matching the schema below. No markdown, no prose, no explanation.
- Focus on themes and mood rather than reproducing copyrighted lyrics verbatim.
- Be creative and visually descriptive.
- "emotional_arc" MUST contain between 3 and 7 segments in chronological order.

REQUIRED JSON SCHEMA:
{
  "brief": {
    "title": "string - a short evocative title for the visual",
    "summary": "string - one-sentence visual scene description",
    "themes": ["string - 3-5 abstract themes"],
    "entities": ["string - concrete objects/people/places mentioned or evoked"],
    "mood": {
      "primary": "string - dominant emotional tone",
      "secondary": ["string - 1-3 supporting moods"],
      "energy": "low|medium|high"
    },
    "setting": "string - where the scene takes place",
    "time_of_day": "string - dawn|morning|noon|afternoon|golden_hour|dusk|night|midnight",
    "color_palette_words": ["string - 4-6 color descriptors"],
    "visual_motifs": ["string - 3-5 recurring visual symbols or elements"],
    "style": {
      "medium": "photography|illustration|3d|anime|painterly|collage",
      "cinematic": true|false,
      "camera_lens": "string - e.g. wide-angle, telephoto, macro, fisheye",
      "composition": "string - e.g. rule of thirds, centered, symmetrical, diagonal"
    },
    "negative_prompts": ["string - things to avoid in the image"]
  },
  "emotional_arc": [
    {
      "label": "intro|build|chorus|bridge|drop|outro|peak",
      "start_sec": "number >= 0",
      "end_sec": "number >= 0",
      "valence": "number from -1 (negative) to 1 (positive)",
      "arousal": "number from 0 (calm) to 1 (intense)",
      "keywords": ["string - 2-4 emotional keywords"],
      "palette_words": ["string - 2-4 color descriptors for this section"],
      "visual_motifs": ["string - 2-4 visual elements for this section"]
    }
  ],
  "explain": {
    "inferred_genre": "string",
    "instrumentation": ["string - instruments or sound sources heard"],
    "mapping_notes": [
      {"signal": "string - audio feature", "effect": "string - visual decision it drove"}
    ]
  }
}"""

ANALYSIS_REPAIR_PROMPT = """Your previous response could not be used: it was not valid JSON or did not match the required schema.
Analyze the audio again and return ONLY a single JSON object that matches the schema exactly.
- No markdown fences, no comments, no trailing commas.
- Every field is required; use empty arrays rather than omitting lists.
- "energy" must be one of low, medium, high. "medium" must be one of photography, illustration, 3d, anime, painterly, collage.
- "label" must be one of intro, build, chorus, bridge, drop, outro, peak.
- "valence" must be within [-1, 1] and "arousal" within [0, 1].
- "emotional_arc" must contain between 3 and 7 segments."""


def analysis_user_prompt(title: str | None = None, artist: str | None = None) -> str:
    """User turn for the analysis request, with optional track hints."""
    prompt = "Analyze this audio and return the visual brief, emotional arc, and explanation as strict JSON. No markdown fences, no extra text."
    hints = []
    if title and title.strip():
        hints.append(f'Track title: "{title.strip()}".')
    if artist and artist.strip():
        hints.append(f'Artist: "{artist.strip()}".')
    if hints:
        prompt += " Context from the uploader (use as a hint, the audio takes precedence): " + " ".join(hints)
    return prompt


def repair_context(previous_text: str, error: str) -> str:
    """Describe the failed response for the repair attempt."""
    return f"Previous response that failed ({error}):\n{previous_text}"
