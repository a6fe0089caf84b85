"""Test doubles for the generation pipeline."""

import json


class RateLimitError(Exception):
    """Stand-in for an SDK rate-limit error carrying an HTTP status."""

    def __init__(self, message: str = "Too many requests", status_code: int = 429) -> None:
        super().__init__(message)
        self.status_code = status_code


class ScriptedModelClient:
    """ModelClient that replays responses or exceptions in order.

    The last step repeats once the script is exhausted.
    """

    def __init__(self, script: list[str | Exception]) -> None:
        self._script = list(script)
        self.calls: list[tuple[str, str]] = []

    def generate(self, model_id: str, prompt: str) -> str:
        self.calls.append((model_id, prompt))
        step = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if isinstance(step, Exception):
            raise step
        return step


def quiz_json(questions: int = 2) -> str:
    """A well-formed quiz payload with the given number of questions."""
    return json.dumps(
        {
            "questions": [
                {
                    "question_text": f"What does section {i} describe?",
                    "options": [
                        {"text": f"Answer {i}", "explanation": "Stated in the text."},
                        {"text": "Wrong 1", "explanation": "Not mentioned."},
                        {"text": "Wrong 2", "explanation": "Not mentioned."},
                        {"text": "Wrong 3", "explanation": "Not mentioned."},
                    ],
                    "correct_option_index": 0,
                    "explanation": "The section states it directly.",
                    "source_context": f"Section {i}",
                }
                for i in range(questions)
            ]
        }
    )
