from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from knowledge_quiz.questions.types import QuestionSnapshot


class QuestionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str]
    correct_answer: int = Field(alias="correctAnswer", strict=True)
    explanation: str = ""


class QuestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question: str
    options: list[str]
    correct_answer: int = Field(alias="correctAnswer")
    explanation: str


class QuestionDeletedResponse(BaseModel):
    message: str


def as_question_response(snapshot: QuestionSnapshot) -> QuestionResponse:
    return QuestionResponse(
        id=snapshot.id,
        question=snapshot.question,
        options=list(snapshot.options),
        correct_answer=snapshot.correct_answer,
        explanation=snapshot.explanation,
    )
