"""Deterministic quiz and evaluation results built without a model call."""

import re

from coursequiz.models.quiz import (
    MOCK_MODEL,
    Difficulty,
    EvaluationResult,
    Option,
    Question,
    QuizResult,
)

_PARAGRAPH_BREAK = re.compile(r"\n\n+")

SOURCE_CONTEXT_LIMIT = 100
CORRECT_OPTION_LIMIT = 50
DISTRACTOR_COUNT = 3


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _mock_question(paragraph: str, index: int) -> Question:
    main_sentence = paragraph.split(". ")[0]
    options = [
        Option(
            text="Correct: " + _truncate(main_sentence, CORRECT_OPTION_LIMIT),
            explanation="Correct answer from the course.",
        )
    ]
    options.extend(
        Option(
            text=f"Distractor option {k}",
            explanation="Incorrect - not from course content.",
        )
        for k in range(1, DISTRACTOR_COUNT + 1)
    )
    return Question(
        question_text=f"Question {index + 1}: What is the key concept in this section?",
        options=options,
        correct_option_index=0,
        explanation="This reflects the course content.",
        source_context=_truncate(main_sentence, SOURCE_CONTEXT_LIMIT),
    )


def mock_quiz(context: str, count: int, model_used: str = MOCK_MODEL) -> QuizResult:
    """Build a quiz from the paragraphs of the context.

    Question ``i`` is drawn from paragraph ``i % paragraph_count``. An empty
    context has no paragraphs and yields a quiz with no questions.

    Args:
        context: Course content.
        count: Number of questions to build.
        model_used: Provenance tag for the result.

    Returns:
        QuizResult with ``generated_by_model`` set to False.
    """
    paragraphs = [p.strip() for p in _PARAGRAPH_BREAK.split(context or "") if p.strip()]
    questions = []
    if paragraphs:
        questions = [_mock_question(paragraphs[i % len(paragraphs)], i) for i in range(count)]
    return QuizResult(questions=questions, model_used=model_used, generated_by_model=False)


def mock_evaluation(
    score_percentage: float,
    pass_threshold: float = 70.0,
    model_used: str = MOCK_MODEL,
) -> EvaluationResult:
    """Threshold-based evaluation: pass recommends HARD, fail recommends EASY."""
    if score_percentage >= pass_threshold:
        return EvaluationResult(
            feedback="Good job! You passed the quiz.",
            strengths=["Good understanding"],
            weaknesses=[],
            recommendations=["Try a harder quiz"],
            recommended_difficulty=Difficulty.HARD,
            validated=True,
            model_used=model_used,
        )
    return EvaluationResult(
        feedback="Keep studying! Review the material.",
        strengths=["Effort shown"],
        weaknesses=["Needs more review"],
        recommendations=["Re-read course content"],
        recommended_difficulty=Difficulty.EASY,
        validated=False,
        model_used=model_used,
    )
