"""Quiz generation: prompts, model client, response parsing and fallback."""

from coursequiz.generation.cancellation import CancelToken
from coursequiz.generation.client import (
    AnthropicModelClient,
    LazyModelClient,
    ModelClient,
    create_model_client,
)
from coursequiz.generation.mock import mock_evaluation, mock_quiz
from coursequiz.generation.orchestrator import QuizGenerator
from coursequiz.generation.parser import (
    extract_payload,
    parse_evaluation_payload,
    parse_quiz_payload,
    parse_quiz_response,
)
from coursequiz.generation.prompts import build_evaluation_prompt, build_quiz_prompt
from coursequiz.generation.retry import is_retryable_error

__all__ = [
    "AnthropicModelClient",
    "CancelToken",
    "LazyModelClient",
    "ModelClient",
    "QuizGenerator",
    "build_evaluation_prompt",
    "build_quiz_prompt",
    "create_model_client",
    "extract_payload",
    "is_retryable_error",
    "mock_evaluation",
    "mock_quiz",
    "parse_evaluation_payload",
    "parse_quiz_payload",
    "parse_quiz_response",
]
