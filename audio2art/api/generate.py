"""Audio-to-artwork API routes."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..clients.genai import GenAIClient, UpstreamImageError
from ..core.audio_utils import (
    AudioTooLargeError,
    AudioValidationError,
    validate_audio_format,
    validate_audio_size,
)
from ..core.config import settings
from ..core.logging import get_logger
from ..schemas.common import ErrorResponse
from ..schemas.generate import GenerateResponse
from ..schemas.modes import (
    coerce_director_mode,
    coerce_interpretation_mode,
    coerce_output_mode,
)
from ..services.analysis_service import AnalysisService
from ..services.generation_service import GenerationService
from ..services.parser import ParseError
from ..services.storyboard import InsufficientSegmentsError

logger = get_logger(__name__)

router = APIRouter(tags=["generate"])


@lru_cache(maxsize=1)
def get_genai_client() -> GenAIClient:
    return GenAIClient()


def get_generation_service() -> GenerationService:
    try:
        client = get_genai_client()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return GenerationService(AnalysisService(client), client)


def _error(status_code: int, message: str, request_id: str) -> JSONResponse:
    body = ErrorResponse(error=message, request_id=request_id)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate(
    audio: Optional[UploadFile] = File(None),
    director_mode: Optional[str] = Form(None),
    output_mode: Optional[str] = Form(None),
    interpretation_mode: Optional[str] = Form(None),
    custom_director: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    service: GenerationService = Depends(get_generation_service),
):
    """
    Analyze an uploaded track and generate artwork for it.

    Mode fields are optional; missing or unknown values fall back to
    album_cover / single / literal instead of rejecting the request.
    """
    request_id = str(uuid4())

    if audio is None:
        return _error(400, "No audio file uploaded", request_id)

    try:
        mime_type = validate_audio_format(audio.content_type, audio.filename)
        audio_bytes = await audio.read()
        validate_audio_size(len(audio_bytes), settings.max_upload_bytes)
    except AudioTooLargeError as e:
        return _error(413, str(e), request_id)
    except AudioValidationError as e:
        return _error(400, str(e), request_id)

    director = coerce_director_mode(director_mode)
    output = coerce_output_mode(output_mode)
    interpretation = coerce_interpretation_mode(interpretation_mode)
    logger.info(
        f"[{request_id}] file={audio.filename} ({mime_type}, {len(audio_bytes) / 1024:.1f} KB) "
        f"director={director.value} output={output.value} interpretation={interpretation.value}"
    )

    try:
        return await run_in_threadpool(
            service.generate,
            audio_bytes,
            mime_type,
            director_mode=director,
            output_mode=output,
            interpretation_mode=interpretation,
            custom_director=custom_director,
            title=title,
            artist=artist,
            request_id=request_id,
        )
    except ParseError as e:
        logger.error(f"[{request_id}] Error: {e}")
        return _error(502, str(e), request_id)
    except UpstreamImageError as e:
        logger.error(f"[{request_id}] Error: {e}")
        return _error(502, str(e), request_id)
    except InsufficientSegmentsError as e:
        logger.error(f"[{request_id}] Error: {e}")
        return _error(422, str(e), request_id)
    except Exception as e:
        logger.exception(f"[{request_id}] Error: {e}")
        return _error(500, str(e) or "Unknown error", request_id)
