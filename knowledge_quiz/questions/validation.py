from __future__ import annotations

from collections.abc import Sequence

from knowledge_quiz.questions.errors import QuestionValidationError
from knowledge_quiz.questions.types import OPTIONS_COUNT, QuestionFields


def validate_question_fields(
    *,
    question: str,
    options: Sequence[str],
    correct_answer: int,
    explanation: str,
) -> QuestionFields:
    if isinstance(options, str) or len(options) != OPTIONS_COUNT:
        raise QuestionValidationError(f"Options must be an array of exactly {OPTIONS_COUNT} items")
    # bool is an int subclass; True must not pass as index 1.
    if isinstance(correct_answer, bool) or not isinstance(correct_answer, int):
        raise QuestionValidationError("Correct answer must be an integer")
    if not 0 <= correct_answer < OPTIONS_COUNT:
        raise QuestionValidationError(f"Correct answer must be between 0 and {OPTIONS_COUNT - 1}")

    normalized_question = question.strip()
    if not normalized_question:
        raise QuestionValidationError("Question text must not be empty")

    normalized_options = tuple(option.strip() for option in options)
    return QuestionFields(
        question=normalized_question,
        options=normalized_options,  # type: ignore[arg-type]
        correct_answer=correct_answer,
        explanation=explanation.strip(),
    )
