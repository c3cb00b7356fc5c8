from __future__ import annotations

from fastapi import Request

from knowledge_quiz.questions.store import QuestionStore


def get_question_store(request: Request) -> QuestionStore:
    return request.app.state.question_store
