"""Audio upload utilities: format and size validation."""
from __future__ import annotations

from pathlib import Path

from .logging import get_logger

logger = get_logger(__name__)

# Supported audio MIME types
ALLOWED_AUDIO_MIME_TYPES = {
    "audio/mpeg",       # MP3
    "audio/mp3",        # MP3 alternative
    "audio/wav",        # WAV
    "audio/x-wav",      # WAV alternative
    "audio/wave",       # WAV alternative
    "audio/ogg",        # OGG
    "audio/flac",       # FLAC
    "audio/x-flac",     # FLAC alternative
    "audio/aac",        # AAC
    "audio/m4a",        # M4A
    "audio/x-m4a",      # M4A alternative
    "audio/mp4",        # M4A/MP4 audio
    "audio/webm",       # browser recordings
}

# Extension fallback, mapped to the MIME type sent to the analysis model
AUDIO_EXTENSION_MIME_TYPES = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".aac": "audio/aac",
    ".m4a": "audio/mp4",
    ".mp4": "audio/mp4",
    ".webm": "audio/webm",
}


class AudioValidationError(Exception):
    """Raised when audio validation fails."""
    pass


class AudioTooLargeError(AudioValidationError):
    """Raised when an upload exceeds the configured size limit."""
    pass


def validate_audio_format(content_type: str | None, filename: str | None) -> str:
    """
    Validate audio file format by MIME type and extension.

    Args:
        content_type: MIME type from upload
        filename: Original filename

    Returns:
        The MIME type to forward to the analysis model

    Raises:
        AudioValidationError: If format is not supported
    """
    # Check MIME type
    if content_type and content_type.lower() in ALLOWED_AUDIO_MIME_TYPES:
        return content_type.lower()

    # Fallback to extension check
    if filename:
        ext = Path(filename).suffix.lower()
        if ext in AUDIO_EXTENSION_MIME_TYPES:
            logger.warning(
                f"MIME type '{content_type}' not recognized, but extension '{ext}' is valid"
            )
            return AUDIO_EXTENSION_MIME_TYPES[ext]

    # Neither MIME nor extension is valid
    raise AudioValidationError(
        f"Unsupported audio format. MIME: '{content_type}', File: '{filename}'. "
        f"Supported formats: MP3, WAV, OGG, FLAC, AAC, M4A, WEBM"
    )


def validate_audio_size(size: int, max_bytes: int) -> None:
    """Reject empty uploads and uploads larger than ``max_bytes``."""
    if size <= 0:
        raise AudioValidationError("Uploaded audio file is empty")
    if size > max_bytes:
        raise AudioTooLargeError(
            f"Audio file is too large ({size / (1024 * 1024):.1f} MB). "
            f"Maximum allowed is {max_bytes / (1024 * 1024):.0f} MB."
        )
