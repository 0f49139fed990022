"""Audio analysis service with a bounded repair policy."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..clients.prompts import repair_context
from ..core.config import settings
from ..core.logging import get_logger
from ..schemas.analysis import AnalysisResult
from .parser import ParseError, parse_analysis

logger = get_logger(__name__)


class AudioAnalyzer(Protocol):
    def analyze_audio(
        self,
        audio_bytes: bytes,
        mime_type: str,
        title: str | None = None,
        artist: str | None = None,
        repair: str | None = None,
    ) -> str: ...


@dataclass(frozen=True)
class RepairPolicy:
    """How many times the analysis model may be asked for a parseable response.

    The first attempt uses the normal prompt; every later attempt sends the
    repair instruction along with the previous failing response.
    """
    max_attempts: int = 2

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


class AnalysisService:
    """Runs the analysis call and validates its output."""

    def __init__(self, client: AudioAnalyzer, policy: RepairPolicy | None = None) -> None:
        self.client = client
        self.policy = policy or RepairPolicy(max_attempts=settings.analysis_max_attempts)

    def analyze(
        self,
        audio_bytes: bytes,
        mime_type: str,
        title: str | None = None,
        artist: str | None = None,
    ) -> AnalysisResult:
        """
        Analyze audio into a validated :class:`AnalysisResult`.

        Raises:
            ParseError: If the last allowed attempt still fails to parse or validate.
        """
        repair: str | None = None
        attempt = 1
        while True:
            text = self.client.analyze_audio(
                audio_bytes, mime_type, title=title, artist=artist, repair=repair
            )
            try:
                return parse_analysis(text)
            except ParseError as e:
                if attempt >= self.policy.max_attempts:
                    logger.error(f"Analysis attempt {attempt} failed, giving up: {e}")
                    raise
                logger.warning(f"Analysis attempt {attempt} failed, retrying with repair prompt: {e}")
                repair = repair_context(text, str(e))
                attempt += 1
