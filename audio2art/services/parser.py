"""Parsing and validation of the analysis model's JSON output."""
from __future__ import annotations

import json
import re
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..schemas.analysis import AnalysisResult
from ..schemas.brief import VisualBrief

RAW_PREVIEW_CHARS = 500

_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")

M = TypeVar("M", bound=BaseModel)


class ParseError(ValueError):
    """Raised when model output cannot be turned into a domain record."""

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class MalformedResponseError(ParseError):
    """The response text is not valid JSON."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"Gemini did not return valid JSON. Raw response:\n{raw[:RAW_PREVIEW_CHARS]}",
            raw,
        )


class SchemaValidationError(ParseError):
    """The JSON does not match the expected schema.

    ``issues`` lists every offending field as ``(path, reason)`` pairs.
    """

    def __init__(self, issues: list[tuple[str, str]], raw: str = "") -> None:
        self.issues = issues
        detail = "; ".join(f"{path}: {reason}" for path, reason in issues)
        super().__init__(f"Gemini JSON failed schema validation: {detail}", raw)


def strip_code_fence(raw: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present."""
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def _load_json(raw: str) -> Any:
    try:
        return json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise MalformedResponseError(raw) from e


def _format_issues(error: ValidationError) -> list[tuple[str, str]]:
    issues = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "(root)"
        issues.append((path, item["msg"]))
    return issues


def _validate(model: Type[M], data: Any, raw: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(_format_issues(e), raw) from e


def _looks_like_brief(data: Any) -> bool:
    return isinstance(data, dict) and any(key in data for key in VisualBrief.model_fields)


def _unwrap_flat_analysis(data: Any) -> Any:
    """Fold a flat analysis (brief fields at the top level) into the nested shape."""
    if not isinstance(data, dict) or isinstance(data.get("brief"), dict):
        return data
    if not _looks_like_brief(data):
        return data
    nested = {key: value for key, value in data.items() if key not in VisualBrief.model_fields}
    nested["brief"] = {key: value for key, value in data.items() if key in VisualBrief.model_fields}
    return nested


def parse_analysis(raw: str) -> AnalysisResult:
    """Parse the analysis model's response into an :class:`AnalysisResult`.

    Accepts the nested ``{"brief": ..., "emotional_arc": ..., "explain": ...}``
    shape and a flat shape where the brief fields sit at the top level. The
    nested shape wins when both are present.

    Raises:
        MalformedResponseError: The text is not JSON after fence stripping.
        SchemaValidationError: The JSON violates the schema; every violation is reported.
    """
    data = _load_json(raw)
    return _validate(AnalysisResult, _unwrap_flat_analysis(data), raw)


def parse_brief(raw: str) -> VisualBrief:
    """Parse a brief-only response, nested under ``brief`` or flat."""
    data = _load_json(raw)
    if isinstance(data, dict) and isinstance(data.get("brief"), dict):
        data = data["brief"]
    return _validate(VisualBrief, data, raw)
