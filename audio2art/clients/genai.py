"""Google GenAI client for audio analysis and image generation."""
from __future__ import annotations

import base64
from typing import Any

from google import genai
from google.genai import types

from ..core.config import settings
from ..core.logging import get_logger
from ..schemas.generate import ImageResult
from .prompts import (
    ANALYSIS_REPAIR_PROMPT,
    ANALYSIS_SYSTEM_PROMPT,
    analysis_user_prompt,
)

logger = get_logger(__name__)

SUPPORTED_IMAGE_MIME_TYPES = ("image/png", "image/jpeg")
NO_IMAGE_MESSAGE = (
    "Image model response did not contain an image. "
    "The configured model or API key may not support image output."
)


class UpstreamImageError(RuntimeError):
    """Raised when the image model returns no usable image."""
    pass


def _image_mime(mime_type: str | None) -> str:
    if mime_type and mime_type.lower() in SUPPORTED_IMAGE_MIME_TYPES:
        return mime_type.lower()
    return "image/png"


def _to_image_result(data: bytes, mime_type: str | None) -> ImageResult:
    return ImageResult(
        base64=base64.b64encode(data).decode("ascii"),
        mime=_image_mime(mime_type),
    )


class GenAIClient:
    """Client for Google Generative AI (Gemini)."""

    def __init__(
        self,
        api_key: str | None = None,
        analysis_model: str | None = None,
        image_model: str | None = None,
    ) -> None:
        self.api_key = api_key or settings.genai_api_key
        self.analysis_model = analysis_model or settings.analysis_model
        self.image_model = image_model or settings.image_model

        if not self.api_key:
            raise RuntimeError(
                "GOOGLE_API_KEY is not set. Add it to the repository .env file before starting the API."
            )

        self._client = genai.Client(api_key=self.api_key)
        logger.info(
            "GenAI client initialized (analysis=%s, image=%s, API key length: %d)",
            self.analysis_model,
            self.image_model,
            len(self.api_key),
        )

    def _log_interaction(self, method: str, request: Any, response: Any) -> None:
        """Log request and response from Gemini."""
        logger.debug("-" * 40)
        logger.debug(f"GEMINI INTERACTION: {method}")
        logger.debug(f"REQUEST:\n{request}")
        logger.debug(f"RESPONSE:\n{response}")
        logger.debug("-" * 40)

    def analyze_audio(
        self,
        audio_bytes: bytes,
        mime_type: str,
        title: str | None = None,
        artist: str | None = None,
        repair: str | None = None,
    ) -> str:
        """
        Send audio to the analysis model and return its raw text response.

        Args:
            audio_bytes: Raw uploaded audio.
            mime_type: MIME type of the audio.
            title: Optional track title hint.
            artist: Optional artist hint.
            repair: Description of a previously failed response. When given, the
                request uses the repair instruction instead of the normal prompt.

        Raises:
            RuntimeError: If the model returns an empty response.
        """
        audio_part = types.Part.from_bytes(data=audio_bytes, mime_type=mime_type)
        if repair is None:
            instruction = analysis_user_prompt(title, artist)
            contents = [instruction, audio_part]
        else:
            instruction = ANALYSIS_REPAIR_PROMPT
            contents = [instruction, repair, audio_part]

        response = self._client.models.generate_content(
            model=self.analysis_model,
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=ANALYSIS_SYSTEM_PROMPT,
                response_mime_type="application/json",
            ),
        )
        text = response.text or ""
        self._log_interaction(
            "analyze_audio",
            f"{instruction} <audio: {mime_type}, {len(audio_bytes)} bytes>",
            text,
        )

        if not text.strip():
            raise RuntimeError("Gemini returned an empty response")
        return text

    def generate_image(self, prompt: str) -> ImageResult:
        """
        Generate an image from a prompt.

        Raises:
            UpstreamImageError: If the response carries no image data.
        """
        # Imagen models use the dedicated image endpoint
        if "imagen" in self.image_model.lower():
            response = self._client.models.generate_images(
                model=self.image_model,
                prompt=prompt,
            )
            for generated in response.generated_images or []:
                image = generated.image
                if image and image.image_bytes:
                    self._log_interaction("generate_image (Imagen)", prompt, f"<{len(image.image_bytes)} bytes>")
                    return _to_image_result(image.image_bytes, image.mime_type)
            raise UpstreamImageError(NO_IMAGE_MESSAGE)

        # Gemini image models return inline image parts
        response = self._client.models.generate_content(
            model=self.image_model,
            contents=[prompt],
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
        for candidate in response.candidates or []:
            if candidate.content is None or not candidate.content.parts:
                continue
            for part in candidate.content.parts:
                if part.inline_data and part.inline_data.data:
                    data = part.inline_data.data
                    self._log_interaction("generate_image (Gemini)", prompt, f"<{len(data)} bytes>")
                    return _to_image_result(data, part.inline_data.mime_type)

        raise UpstreamImageError(NO_IMAGE_MESSAGE)
