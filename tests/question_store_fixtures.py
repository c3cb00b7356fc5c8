from __future__ import annotations

from knowledge_quiz.questions.errors import LastQuestionDeleteError, QuestionNotFoundError
from knowledge_quiz.questions.seed import SAMPLE_QUESTIONS
from knowledge_quiz.questions.types import QuestionFields, QuestionSnapshot


class InMemoryQuestionStore:
    """Drop-in for ``QuestionStore`` that keeps rows in a dict."""

    def __init__(self, *, reachable: bool = True) -> None:
        self.rows: dict[int, QuestionSnapshot] = {}
        self.reachable = reachable
        self.failure: Exception | None = None
        self.opened = False
        self.closed = False
        self._next_id = 1

    def _raise_if_failing(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.closed = True

    async def ping(self) -> bool:
        return self.reachable

    async def list_questions(self) -> list[QuestionSnapshot]:
        self._raise_if_failing()
        return [self.rows[question_id] for question_id in sorted(self.rows)]

    async def count_questions(self) -> int:
        self._raise_if_failing()
        return len(self.rows)

    async def get_question(self, question_id: int) -> QuestionSnapshot:
        self._raise_if_failing()
        if question_id not in self.rows:
            raise QuestionNotFoundError(question_id)
        return self.rows[question_id]

    async def create_question(self, fields: QuestionFields) -> QuestionSnapshot:
        self._raise_if_failing()
        snapshot = QuestionSnapshot.from_fields(self._next_id, fields)
        self.rows[snapshot.id] = snapshot
        self._next_id += 1
        return snapshot

    async def update_question(self, question_id: int, fields: QuestionFields) -> QuestionSnapshot:
        self._raise_if_failing()
        if question_id not in self.rows:
            raise QuestionNotFoundError(question_id)
        snapshot = QuestionSnapshot.from_fields(question_id, fields)
        self.rows[question_id] = snapshot
        return snapshot

    async def delete_question(self, question_id: int) -> None:
        self._raise_if_failing()
        if len(self.rows) <= 1:
            raise LastQuestionDeleteError(question_id)
        if question_id not in self.rows:
            raise QuestionNotFoundError(question_id)
        del self.rows[question_id]


def seeded_store(count: int | None = None) -> InMemoryQuestionStore:
    store = InMemoryQuestionStore()
    samples = SAMPLE_QUESTIONS if count is None else SAMPLE_QUESTIONS[:count]
    for fields in samples:
        snapshot = QuestionSnapshot.from_fields(store._next_id, fields)
        store.rows[snapshot.id] = snapshot
        store._next_id += 1
    return store
