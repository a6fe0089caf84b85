"""Quiz request and result data models."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

OPTIONS_PER_QUESTION = 4

MOCK_MODEL = "mock"
MOCK_RATE_LIMITED_MODEL = "mock (rate-limited)"


class Difficulty(IntEnum):
    """Ordered quiz difficulty: EASY < MEDIUM < HARD < EXPERT."""

    EASY = 1
    MEDIUM = 2
    HARD = 3
    EXPERT = 4

    @classmethod
    def parse(cls, value: Any, default: "Difficulty | None" = None) -> "Difficulty":
        """Map a name such as ``"hard"`` to a Difficulty.

        Unrecognized values fall back to ``default`` (MEDIUM when omitted).
        """
        fallback = default if default is not None else cls.MEDIUM
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                return fallback
        return fallback


def _coerce_difficulty(value: Any) -> Any:
    if isinstance(value, str):
        return Difficulty.parse(value)
    return value


class GenerationRequest(BaseModel):
    """Parameters of a single quiz generation request."""

    document_id: str
    count: int = Field(default=5, ge=1)
    difficulty: Difficulty = Difficulty.MEDIUM
    title: str = ""

    @field_validator("difficulty", mode="before")
    @classmethod
    def _parse_difficulty(cls, value: Any) -> Any:
        return _coerce_difficulty(value)


class Option(BaseModel):
    """One answer option of a multiple-choice question."""

    text: str
    explanation: str = ""


class Question(BaseModel):
    """A multiple-choice question with exactly four options."""

    question_text: str
    options: list[Option]
    correct_option_index: int = Field(default=0, ge=0, le=OPTIONS_PER_QUESTION - 1)
    explanation: str = ""
    source_context: str = ""

    @field_validator("options")
    @classmethod
    def _exactly_four_options(cls, options: list[Option]) -> list[Option]:
        if len(options) != OPTIONS_PER_QUESTION:
            raise ValueError(
                f"expected {OPTIONS_PER_QUESTION} options, got {len(options)}"
            )
        return options

    @property
    def correct_option(self) -> Option:
        return self.options[self.correct_option_index]


class QuizResult(BaseModel):
    """Questions produced for one request, with provenance."""

    questions: list[Question] = Field(default_factory=list)
    model_used: str = MOCK_MODEL
    generated_by_model: bool = False

    @property
    def is_mock(self) -> bool:
        return self.model_used in (MOCK_MODEL, MOCK_RATE_LIMITED_MODEL)


class EvaluationRequest(BaseModel):
    """Score statistics of a completed quiz attempt."""

    score_percentage: float = Field(ge=0, le=100)
    correct_answers: int = Field(default=0, ge=0)
    total_questions: int = Field(default=0, ge=0)
    weak_topics: list[str] = Field(default_factory=list)


class EvaluationResult(BaseModel):
    """Feedback on a quiz attempt and the recommended next difficulty."""

    feedback: str = ""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    recommended_difficulty: Difficulty = Difficulty.MEDIUM
    validated: bool = False
    model_used: str = MOCK_MODEL
    generated_by_model: bool = False

    @field_validator("recommended_difficulty", mode="before")
    @classmethod
    def _parse_difficulty(cls, value: Any) -> Any:
        return _coerce_difficulty(value)

    @field_serializer("recommended_difficulty")
    def _difficulty_name(self, value: Difficulty) -> str:
        return value.name
