"""Prompt templates for quiz generation and result evaluation."""

from coursequiz.models.quiz import Difficulty

QUIZ_PROMPT = """You are an expert educational quiz creator. Generate a multiple-choice quiz
based EXCLUSIVELY on the following course content.

COURSE TITLE: {title}
DIFFICULTY LEVEL: {difficulty}
NUMBER OF QUESTIONS: {count}

COURSE CONTENT:
{context}

REQUIREMENTS:
1. Each question must have exactly 4 answer options
2. Exactly ONE option must be correct
3. Questions must be derived ONLY from the provided content

Respond ONLY with valid JSON, no markdown and no text before or after it:
{{
  "questions": [
    {{
      "question_text": "Question text",
      "options": [
        {{"text": "Option A", "explanation": "Why correct/incorrect"}},
        {{"text": "Option B", "explanation": "Why correct/incorrect"}},
        {{"text": "Option C", "explanation": "Why correct/incorrect"}},
        {{"text": "Option D", "explanation": "Why correct/incorrect"}}
      ],
      "correct_option_index": 0,
      "explanation": "Overall explanation",
      "source_context": "Source from content"
    }}
  ]
}}
"""

EVALUATION_PROMPT = """Evaluate quiz results: Score: {score:.1f}%, Correct: {correct}/{total}, Weak topics: {weak_topics}

Return JSON: {{"feedback": "message", "strengths": [], "weaknesses": [],
"recommendations": [], "recommended_difficulty": "EASY|MEDIUM|HARD|EXPERT",
"course_validated": true/false}}
"""


def build_quiz_prompt(context: str, count: int, difficulty: Difficulty, title: str) -> str:
    """Render the quiz generation prompt.

    Args:
        context: Course content the questions must be drawn from.
        count: Number of questions requested.
        difficulty: Requested difficulty level.
        title: Course title.

    Returns:
        The complete prompt text.
    """
    return QUIZ_PROMPT.format(
        title=title,
        difficulty=difficulty.name,
        count=count,
        context=context,
    )


def build_evaluation_prompt(
    score_percentage: float,
    correct_answers: int,
    total_questions: int,
    weak_topics: list[str] | None = None,
) -> str:
    """Render the quiz evaluation prompt."""
    return EVALUATION_PROMPT.format(
        score=score_percentage,
        correct=correct_answers,
        total=total_questions,
        weak_topics=", ".join(weak_topics) if weak_topics else "none",
    )
