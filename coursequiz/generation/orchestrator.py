"""Quiz generation and result evaluation with retry and mock fallback.

Every request ends in a structurally valid result: model output when the call
and parse succeed, otherwise a deterministic mock tagged with its cause.
Cancellation is the one outcome that propagates, as GenerationCancelled.
"""

import logging
from collections.abc import Callable

from coursequiz.config import GenerationConfig
from coursequiz.errors import GenerationCancelled
from coursequiz.generation.cancellation import CancelToken
from coursequiz.generation.client import LazyModelClient
from coursequiz.generation.mock import mock_evaluation, mock_quiz
from coursequiz.generation.parser import (
    extract_payload,
    parse_evaluation_payload,
    parse_quiz_response,
)
from coursequiz.generation.prompts import build_evaluation_prompt, build_quiz_prompt
from coursequiz.generation.retry import create_retrying, is_retryable_error
from coursequiz.ingestion.retriever import SegmentRetriever
from coursequiz.models.quiz import (
    MOCK_MODEL,
    MOCK_RATE_LIMITED_MODEL,
    Difficulty,
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
    QuizResult,
)

logger = logging.getLogger(__name__)


class QuizGenerator:
    """Drives the model to produce quizzes and evaluations.

    Args:
        config: GenerationConfig with retry settings and pass threshold.
        client: Shared model client handle. None, or a handle without an API
            key, puts the generator in mock mode.
        sleep: Backoff wait function. Defaults to the request's CancelToken
            wait; tests inject a recorder to skip real delays.
    """

    def __init__(
        self,
        config: GenerationConfig,
        client: LazyModelClient | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._sleep = sleep

    def is_model_available(self) -> bool:
        return self._client is not None and self._client.is_configured

    def generate_quiz(
        self,
        context: str,
        count: int,
        difficulty: Difficulty,
        title: str,
        cancel: CancelToken | None = None,
    ) -> QuizResult:
        """Generate ``count`` multiple-choice questions from ``context``.

        Args:
            context: Course content to draw questions from.
            count: Number of questions requested (>= 1).
            difficulty: Requested difficulty.
            title: Course title for the prompt.
            cancel: Optional cancellation token / deadline.

        Returns:
            Model-generated QuizResult, or a mock fallback.

        Raises:
            ValueError: If count < 1.
            GenerationCancelled: If ``cancel`` fires before a result is ready.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        if not self.is_model_available():
            logger.warning("Model API key not configured - using mock mode")
            return mock_quiz(context, count)

        prompt = build_quiz_prompt(context, count, difficulty, title)
        try:
            response_text = self._call_model(prompt, cancel)
        except GenerationCancelled:
            logger.warning("Quiz generation cancelled")
            raise
        except Exception as e:
            fallback_model = self._fallback_model(e)
            return mock_quiz(context, count, model_used=fallback_model)

        questions = parse_quiz_response(response_text)
        if not questions:
            logger.warning("Model response contained no usable questions - using mock mode")
            return mock_quiz(context, count)

        logger.info("Generated quiz with %d questions", len(questions))
        return QuizResult(
            questions=questions,
            model_used=self._client.model_id,
            generated_by_model=True,
        )

    def generate_for_request(
        self,
        request: GenerationRequest,
        retriever: SegmentRetriever,
        cancel: CancelToken | None = None,
    ) -> QuizResult:
        """Generate a quiz for an indexed document.

        The context is an even sample of the document's segments, one per
        requested question. A document with no stored segments yields an
        empty mock quiz without calling the model.
        """
        context = retriever.sampled_context(request.document_id, request.count)
        if not context.strip():
            logger.warning(
                "Document %s has no indexed content - using mock mode", request.document_id
            )
            return mock_quiz(context, request.count)
        return self.generate_quiz(
            context, request.count, request.difficulty, request.title, cancel=cancel
        )

    def evaluate_results(
        self,
        request: EvaluationRequest,
        cancel: CancelToken | None = None,
    ) -> EvaluationResult:
        """Produce feedback and a next difficulty for a quiz attempt.

        Raises:
            GenerationCancelled: If ``cancel`` fires before a result is ready.
        """
        threshold = self._config.pass_threshold
        score = request.score_percentage

        if not self.is_model_available():
            return mock_evaluation(score, threshold)

        prompt = build_evaluation_prompt(
            score, request.correct_answers, request.total_questions, request.weak_topics
        )
        try:
            response_text = self._call_model(prompt, cancel)
        except GenerationCancelled:
            logger.warning("Evaluation cancelled")
            raise
        except Exception as e:
            return mock_evaluation(score, threshold, model_used=self._fallback_model(e))

        payload = extract_payload(response_text)
        if payload is None:
            logger.warning("Could not parse evaluation response - using mock mode")
            return mock_evaluation(score, threshold)

        result = parse_evaluation_payload(payload, score, threshold)
        return result.model_copy(
            update={"model_used": self._client.model_id, "generated_by_model": True}
        )

    def _call_model(self, prompt: str, cancel: CancelToken | None) -> str:
        """Call the model, retrying rate-limited attempts with backoff.

        Raises:
            GenerationCancelled: If cancelled before an attempt or during a wait.
            Exception: The last model error once retries stop.
        """
        max_attempts = self._config.max_attempts
        retrying = create_retrying(
            max_attempts=max_attempts,
            base_delay=self._config.base_delay_seconds,
            sleep=self._backoff_sleep(cancel),
        )

        response_text = ""
        for attempt in retrying:
            with attempt:
                if cancel is not None:
                    cancel.raise_if_cancelled()
                logger.info(
                    "Calling model %s - attempt %d/%d",
                    self._client.model_id,
                    attempt.retry_state.attempt_number,
                    max_attempts,
                )
                response_text = self._client.generate(prompt)
                logger.info("Received model response (%d chars)", len(response_text))
        return response_text

    def _backoff_sleep(self, cancel: CancelToken | None) -> Callable[[float], None]:
        token = cancel or CancelToken()
        if self._sleep is None:
            return token.sleep

        injected = self._sleep

        def sleep(seconds: float) -> None:
            token.raise_if_cancelled()
            injected(seconds)

        return sleep

    def _fallback_model(self, error: Exception) -> str:
        if is_retryable_error(error):
            logger.warning(
                "All %d attempts rate limited - falling back to mock mode",
                self._config.max_attempts,
            )
            return MOCK_RATE_LIMITED_MODEL
        logger.error("Non-recoverable error calling model: %s", error, exc_info=error)
        return MOCK_MODEL
