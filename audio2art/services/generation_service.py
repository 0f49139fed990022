"""Audio-to-artwork generation: analysis, prompt composition and image calls."""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol
from uuid import uuid4

from ..core.config import settings
from ..core.logging import get_logger
from ..schemas.analysis import AnalysisResult
from ..schemas.generate import (
    GenerateResponse,
    ImageResult,
    SingleResult,
    StoryboardFrame,
    Timings,
)
from ..schemas.modes import (
    DirectorMode,
    InterpretationMode,
    OutputMode,
    StoryboardFrameName,
    coerce_director_mode,
    coerce_interpretation_mode,
    coerce_output_mode,
)
from .analysis_service import AnalysisService
from .prompt import compose_prompt
from .storyboard import select_storyboard_segments

logger = get_logger(__name__)


class ImageGenerator(Protocol):
    def generate_image(self, prompt: str) -> ImageResult: ...


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class GenerationService:
    """Service that turns uploaded audio into one image or a three-frame storyboard."""

    def __init__(
        self,
        analysis_service: AnalysisService,
        image_generator: ImageGenerator,
        image_concurrency: int | None = None,
    ) -> None:
        self.analysis = analysis_service
        self.images = image_generator
        self.image_concurrency = max(1, image_concurrency or settings.image_concurrency)

    def generate(
        self,
        audio_bytes: bytes,
        mime_type: str,
        director_mode: DirectorMode | str | None = None,
        output_mode: OutputMode | str | None = None,
        interpretation_mode: InterpretationMode | str | None = None,
        custom_director: str | None = None,
        title: str | None = None,
        artist: str | None = None,
        request_id: str | None = None,
    ) -> GenerateResponse:
        """
        Run the full pipeline for one request.

        Mode options fall back to their defaults when missing or unknown.
        Any analysis or image failure propagates; no partial result is returned.
        """
        request_id = request_id or str(uuid4())
        director = coerce_director_mode(director_mode)
        output = coerce_output_mode(output_mode)
        interpretation = coerce_interpretation_mode(interpretation_mode)
        start = time.perf_counter()

        analysis = self.analysis.analyze(audio_bytes, mime_type, title=title, artist=artist)
        gemini_ms = _elapsed_ms(start)
        logger.info(f"[{request_id}] Gemini completed in {gemini_ms}ms")

        imagen_start = time.perf_counter()
        single = None
        storyboard = None
        if output is OutputMode.storyboard:
            storyboard = self._generate_storyboard(
                analysis, director, interpretation, custom_director, request_id
            )
        else:
            single = self._generate_single(
                analysis, director, interpretation, custom_director, request_id
            )
        imagen_ms = _elapsed_ms(imagen_start)
        total_ms = _elapsed_ms(start)
        logger.info(f"[{request_id}] Imagen {imagen_ms}ms | Total {total_ms}ms")

        return GenerateResponse(
            request_id=request_id,
            output_mode=output,
            director_mode=director,
            interpretation_mode=interpretation,
            brief=analysis.brief,
            emotional_arc=analysis.emotional_arc,
            explain=analysis.explain,
            single=single,
            storyboard=storyboard,
            timings_ms=Timings(total=total_ms, gemini=gemini_ms, imagen=imagen_ms),
        )

    def _generate_single(
        self,
        analysis: AnalysisResult,
        director: DirectorMode,
        interpretation: InterpretationMode,
        custom_director: str | None,
        request_id: str,
    ) -> SingleResult:
        prompt = compose_prompt(
            analysis.brief,
            director_mode=director,
            interpretation_mode=interpretation,
            emotional_arc=analysis.emotional_arc,
            custom_director=custom_director,
        )
        logger.info(f"[{request_id}] Prompt ({len(prompt)} chars): {prompt[:100]}...")
        image = self.images.generate_image(prompt)
        return SingleResult(image_base64=image.base64, image_mime=image.mime, prompt=prompt)

    def _generate_storyboard(
        self,
        analysis: AnalysisResult,
        director: DirectorMode,
        interpretation: InterpretationMode,
        custom_director: str | None,
        request_id: str,
    ) -> list[StoryboardFrame]:
        segments = select_storyboard_segments(analysis.emotional_arc)
        frames = [
            (StoryboardFrameName.intro, segments.intro),
            (StoryboardFrameName.peak, segments.peak),
            (StoryboardFrameName.resolution, segments.resolution),
        ]

        prompts = []
        for frame, segment in frames:
            prompt = compose_prompt(
                analysis.brief,
                director_mode=director,
                arc_segment=segment,
                interpretation_mode=interpretation,
                emotional_arc=analysis.emotional_arc,
                custom_director=custom_director,
            )
            logger.info(f"[{request_id}] Storyboard {frame.value} prompt ({len(prompt)} chars)")
            prompts.append(prompt)

        # All frames must succeed; the first failure propagates
        with ThreadPoolExecutor(max_workers=min(self.image_concurrency, len(prompts))) as executor:
            futures = [executor.submit(self.images.generate_image, prompt) for prompt in prompts]
            images = [future.result() for future in futures]

        return [
            StoryboardFrame(
                frame=frame,
                image_base64=image.base64,
                image_mime=image.mime,
                prompt=prompt,
            )
            for (frame, _), prompt, image in zip(frames, prompts, images)
        ]
