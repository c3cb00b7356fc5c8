from __future__ import annotations

from dataclasses import dataclass

from knowledge_quiz.questions.types import OPTIONS_COUNT, QuestionFields, QuestionSnapshot

NEW_QUESTION_FIELDS = QuestionFields(
    question="New Question",
    options=("Option 1", "Option 2", "Option 3", "Option 4"),
    correct_answer=0,
    explanation="Explanation for the new question",
)


@dataclass(frozen=True, slots=True)
class Draft:
    """A question that has not been persisted yet."""

    fields: QuestionFields


@dataclass(frozen=True, slots=True)
class Existing:
    """A copy of a stored question; ``id`` is the server-assigned identity."""

    id: int
    fields: QuestionFields


EditTarget = Draft | Existing


class EditForm:
    def __init__(self, target: EditTarget) -> None:
        self._target = target
        self.question = target.fields.question
        self.options = list(target.fields.options)
        self.correct_answer = target.fields.correct_answer
        self.explanation = target.fields.explanation
        self.error: str | None = None
        self.in_flight = False

    @classmethod
    def for_new_question(cls) -> EditForm:
        return cls(Draft(fields=NEW_QUESTION_FIELDS))

    @classmethod
    def for_question(cls, question: QuestionSnapshot) -> EditForm:
        return cls(Existing(id=question.id, fields=question.fields))

    @property
    def is_new(self) -> bool:
        return isinstance(self._target, Draft)

    @property
    def title(self) -> str:
        return "Add Question" if self.is_new else "Edit Question"

    @property
    def can_delete(self) -> bool:
        return isinstance(self._target, Existing)

    @property
    def question_id(self) -> int | None:
        if isinstance(self._target, Existing):
            return self._target.id
        return None

    def set_question(self, value: str) -> None:
        self.question = value

    def set_explanation(self, value: str) -> None:
        self.explanation = value

    def set_option(self, index: int, value: str) -> None:
        if not 0 <= index < OPTIONS_COUNT:
            raise ValueError(f"option index out of range: {index}")
        self.options[index] = value

    def set_correct_answer(self, index: int) -> None:
        if not 0 <= index < OPTIONS_COUNT:
            raise ValueError(f"option index out of range: {index}")
        self.correct_answer = index

    def to_fields(self) -> QuestionFields:
        return QuestionFields(
            question=self.question,
            options=tuple(self.options),  # type: ignore[arg-type]
            correct_answer=self.correct_answer,
            explanation=self.explanation,
        )

    def to_target(self) -> EditTarget:
        """The edited values wrapped in the same variant the form was opened with."""
        fields = self.to_fields()
        if isinstance(self._target, Existing):
            return Existing(id=self._target.id, fields=fields)
        return Draft(fields=fields)
