from __future__ import annotations

from dataclasses import dataclass

OPTIONS_COUNT = 4


@dataclass(frozen=True, slots=True)
class QuestionFields:
    question: str
    options: tuple[str, str, str, str]
    correct_answer: int
    explanation: str


@dataclass(frozen=True, slots=True)
class QuestionSnapshot:
    id: int
    question: str
    options: tuple[str, str, str, str]
    correct_answer: int
    explanation: str

    @property
    def fields(self) -> QuestionFields:
        return QuestionFields(
            question=self.question,
            options=self.options,
            correct_answer=self.correct_answer,
            explanation=self.explanation,
        )

    @classmethod
    def from_fields(cls, question_id: int, fields: QuestionFields) -> QuestionSnapshot:
        return cls(
            id=question_id,
            question=fields.question,
            options=fields.options,
            correct_answer=fields.correct_answer,
            explanation=fields.explanation,
        )
