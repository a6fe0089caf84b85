"""Extraction and decoding of JSON payloads embedded in model output.

Model responses are free-form text that is supposed to contain a single JSON
object, but in practice may be wrapped in Markdown fences or surrounded by
prose. Everything here is tolerant: missing or malformed fields fall back to
defaults, and nothing raises on bad model output.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from coursequiz.models.quiz import (
    Difficulty,
    EvaluationResult,
    Option,
    Question,
)

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

DEFAULT_FEEDBACK = "Good effort!"


def extract_payload(raw_text: str | None) -> dict[str, Any] | None:
    """Locate and decode the JSON object embedded in a model response.

    Fence markers are removed, then the text between the first ``{`` and the
    last ``}`` (inclusive) is decoded.

    Args:
        raw_text: Raw model response text.

    Returns:
        The decoded object, or None if no object could be found or decoded.
    """
    if not raw_text:
        return None

    cleaned = _FENCE.sub("", raw_text)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        payload = json.loads(cleaned[start : end + 1])
    except (ValueError, RecursionError) as e:
        logger.warning("Could not decode JSON payload: %s", e)
        return None

    if not isinstance(payload, dict):
        return None
    return payload


def _as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return default
    return str(value)


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        return default
    if isinstance(value, (int, float)):
        return value != 0
    return default


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_text_list(value: Any) -> list[str]:
    return [_as_text(item) for item in _as_list(value) if item is not None]


def _parse_option(data: Any) -> Option:
    if not isinstance(data, dict):
        return Option(text=_as_text(data))
    return Option(
        text=_as_text(data.get("text")),
        explanation=_as_text(data.get("explanation")),
    )


def parse_quiz_payload(payload: dict[str, Any]) -> list[Question]:
    """Build questions from a decoded quiz payload.

    Questions that do not have exactly four options or whose
    ``correct_option_index`` is out of range are skipped.

    Args:
        payload: Decoded JSON object with a ``questions`` array.

    Returns:
        Valid questions in payload order (possibly empty).
    """
    questions: list[Question] = []
    for i, data in enumerate(_as_list(payload.get("questions"))):
        if not isinstance(data, dict):
            logger.warning("Skipping question %d: not an object", i)
            continue
        try:
            questions.append(
                Question(
                    question_text=_as_text(data.get("question_text")),
                    options=[_parse_option(o) for o in _as_list(data.get("options"))],
                    correct_option_index=_as_int(data.get("correct_option_index")),
                    explanation=_as_text(data.get("explanation")),
                    source_context=_as_text(data.get("source_context")),
                )
            )
        except ValidationError as e:
            logger.warning("Skipping invalid question %d: %s", i, e.errors()[0]["msg"])
    return questions


def parse_quiz_response(raw_text: str | None) -> list[Question]:
    """Extract and parse questions from raw model output.

    Returns an empty list when no usable payload is present.
    """
    payload = extract_payload(raw_text)
    if payload is None:
        return []
    return parse_quiz_payload(payload)


def parse_evaluation_payload(
    payload: dict[str, Any],
    score_percentage: float,
    pass_threshold: float = 70.0,
) -> EvaluationResult:
    """Build an EvaluationResult from a decoded evaluation payload.

    Args:
        payload: Decoded JSON object.
        score_percentage: Score of the evaluated attempt, used for the
            ``validated`` default.
        pass_threshold: Minimum passing score percentage.

    Returns:
        EvaluationResult with permissive defaults applied.
    """
    return EvaluationResult(
        feedback=_as_text(payload.get("feedback"), DEFAULT_FEEDBACK),
        strengths=_as_text_list(payload.get("strengths")),
        weaknesses=_as_text_list(payload.get("weaknesses")),
        recommendations=_as_text_list(payload.get("recommendations")),
        recommended_difficulty=Difficulty.parse(payload.get("recommended_difficulty")),
        validated=_as_bool(
            payload.get("course_validated"), score_percentage >= pass_threshold
        ),
    )
