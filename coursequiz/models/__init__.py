"""Data models for the course quiz generator."""

from coursequiz.models.document import SourceDocument
from coursequiz.models.quiz import (
    MOCK_MODEL,
    MOCK_RATE_LIMITED_MODEL,
    OPTIONS_PER_QUESTION,
    Difficulty,
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
    Option,
    Question,
    QuizResult,
)
from coursequiz.models.segment import Segment

__all__ = [
    "MOCK_MODEL",
    "MOCK_RATE_LIMITED_MODEL",
    "OPTIONS_PER_QUESTION",
    "Difficulty",
    "EvaluationRequest",
    "EvaluationResult",
    "GenerationRequest",
    "Option",
    "Question",
    "QuizResult",
    "Segment",
    "SourceDocument",
]
