from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

import structlog

from knowledge_quiz.client.api_client import QuestionsApiError
from knowledge_quiz.client.edit_form import Draft, EditForm, Existing
from knowledge_quiz.questions.types import QuestionFields, QuestionSnapshot

logger = structlog.get_logger(__name__)

PHASE_LOADING = "LOADING"
PHASE_ERROR = "ERROR"
PHASE_ANSWERING = "ANSWERING"
PHASE_REVEALED = "REVEALED"
PHASE_COMPLETED = "COMPLETED"
PHASE_EDITING = "EDITING"
READY_PHASES = frozenset({PHASE_ANSWERING, PHASE_REVEALED, PHASE_COMPLETED})

NO_QUESTIONS_MESSAGE = "No questions available"
LAST_QUESTION_MESSAGE = "Cannot delete the last question!"


class InvalidQuizTransitionError(Exception):
    pass


class QuestionsApi(Protocol):
    async def list_questions(self) -> list[QuestionSnapshot]: ...

    async def create_question(self, fields: QuestionFields) -> QuestionSnapshot: ...

    async def update_question(self, question_id: int, fields: QuestionFields) -> QuestionSnapshot: ...

    async def delete_question(self, question_id: int) -> str: ...


def score_percentage(score: int, total: int) -> int:
    """``round(score / total * 100)`` with halves rounded up."""
    if total <= 0:
        return 0
    ratio = Decimal(score * 100) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class QuizStateMachine:
    """Client-side quiz controller.

    Holds the loaded question list plus play progress. Every transition is
    driven by one user action or one API response; nothing runs in the
    background. Editing suspends play and resumes the phase it came from.
    """

    def __init__(self, api: QuestionsApi) -> None:
        self._api = api
        self.phase = PHASE_LOADING
        self.questions: list[QuestionSnapshot] = []
        self.current_index = 0
        self.selected_answer: int | None = None
        self.score = 0
        self.load_error: str | None = None
        self.banner_error: str | None = None
        self.edit_form: EditForm | None = None
        self._resume_phase = PHASE_ANSWERING
        self._resume_question_id: int | None = None

    def _require_phase(self, action: str, *phases: str) -> None:
        if self.phase not in phases:
            raise InvalidQuizTransitionError(f"{action} is not allowed in phase {self.phase}")

    def _enter_ready(self) -> None:
        self.current_index = 0
        self.selected_answer = None
        self.score = 0
        self.phase = PHASE_ANSWERING

    @property
    def is_ready(self) -> bool:
        return self.phase in READY_PHASES

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> QuestionSnapshot | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def answered_correctly(self) -> bool:
        question = self.current_question
        return question is not None and self.selected_answer == question.correct_answer

    @property
    def percentage(self) -> int:
        return score_percentage(self.score, self.total_questions)

    async def load(self) -> bool:
        self._require_phase("load", PHASE_LOADING, PHASE_ERROR)
        self.phase = PHASE_LOADING
        self.load_error = None
        try:
            questions = await self._api.list_questions()
        except QuestionsApiError as exc:
            logger.warning("quiz_load_failed", error=exc.message)
            self.questions = []
            self.load_error = exc.message
            self.phase = PHASE_ERROR
            return False

        if not questions:
            self.questions = []
            self.load_error = NO_QUESTIONS_MESSAGE
            self.phase = PHASE_ERROR
            return False

        self.questions = questions
        self.banner_error = None
        self._enter_ready()
        return True

    async def retry(self) -> bool:
        self._require_phase("retry", PHASE_ERROR)
        return await self.load()

    async def _refetch(self) -> bool:
        try:
            questions = await self._api.list_questions()
        except QuestionsApiError as exc:
            logger.warning("quiz_refresh_failed", error=exc.message)
            self.banner_error = exc.message
            return False
        self.banner_error = None
        self.questions = questions
        return True

    async def refresh(self) -> bool:
        self._require_phase("refresh", *READY_PHASES)
        shown = self.current_question
        if not await self._refetch():
            return False
        if not self.questions:
            self.load_error = NO_QUESTIONS_MESSAGE
            self.phase = PHASE_ERROR
            return False
        self._restore_position(self.phase, shown.id if shown else None)
        return True

    def select_answer(self, option_index: int) -> None:
        self._require_phase("select", PHASE_ANSWERING)
        question = self.current_question
        if question is None or not 0 <= option_index < len(question.options):
            raise ValueError(f"option index out of range: {option_index}")
        self.selected_answer = option_index

    def submit(self) -> bool:
        self._require_phase("submit", PHASE_ANSWERING)
        question = self.current_question
        if self.selected_answer is None or question is None:
            return False
        if self.selected_answer == question.correct_answer:
            self.score += 1
        self.phase = PHASE_REVEALED
        return True

    def advance(self) -> None:
        self._require_phase("advance", PHASE_REVEALED)
        if self.is_last_question:
            self.phase = PHASE_COMPLETED
            return
        self.current_index += 1
        self.selected_answer = None
        self.phase = PHASE_ANSWERING

    def restart(self) -> None:
        self._require_phase("restart", *READY_PHASES)
        self._enter_ready()

    def begin_edit(self, question_id: int | None = None) -> EditForm:
        self._require_phase("edit", *READY_PHASES)
        if question_id is None:
            question = self.current_question
        else:
            question = next((item for item in self.questions if item.id == question_id), None)
        if question is None:
            raise ValueError(f"unknown question: {question_id}")
        return self._open_form(EditForm.for_question(question))

    def begin_add(self) -> EditForm:
        self._require_phase("add", *READY_PHASES)
        return self._open_form(EditForm.for_new_question())

    def _open_form(self, form: EditForm) -> EditForm:
        self._resume_phase = self.phase
        shown = self.current_question
        self._resume_question_id = shown.id if shown else None
        self.edit_form = form
        self.phase = PHASE_EDITING
        return form

    def cancel_edit(self) -> None:
        self._require_phase("cancel", PHASE_EDITING)
        self._close_form()

    async def save_edit(self) -> bool:
        self._require_phase("save", PHASE_EDITING)
        form = self.edit_form
        if form is None or form.in_flight:
            return False

        form.error = None
        form.in_flight = True
        try:
            target = form.to_target()
            if isinstance(target, Draft):
                await self._api.create_question(target.fields)
            else:
                await self._api.update_question(target.id, target.fields)
        except QuestionsApiError as exc:
            form.error = exc.message
            return False
        finally:
            form.in_flight = False

        await self._refetch()
        self._close_form()
        return True

    async def delete_edit(self) -> bool:
        self._require_phase("delete", PHASE_EDITING)
        form = self.edit_form
        if form is None or form.in_flight:
            return False
        target = form.to_target()
        if not isinstance(target, Existing):
            raise InvalidQuizTransitionError("delete is not offered for unsaved questions")
        if len(self.questions) <= 1:
            form.error = LAST_QUESTION_MESSAGE
            return False

        form.error = None
        form.in_flight = True
        try:
            await self._api.delete_question(target.id)
        except QuestionsApiError as exc:
            form.error = exc.message
            return False
        finally:
            form.in_flight = False

        await self._refetch()
        self._close_form()
        return True

    def _close_form(self) -> None:
        self.edit_form = None
        self._restore_position(self._resume_phase, self._resume_question_id)

    def _restore_position(self, phase: str, question_id: int | None) -> None:
        """Resume ``phase`` at the current index after the list was re-fetched.

        A missing index restarts at 0. When a delete shifted a different
        question into the index, its answer was never given, so the selection
        is cleared and play resumes in ``answering``. The score is kept.
        """
        if self.current_index >= len(self.questions):
            self.current_index = 0
            self.selected_answer = None
            self.phase = PHASE_COMPLETED if phase == PHASE_COMPLETED else PHASE_ANSWERING
            return
        if phase != PHASE_COMPLETED and self.questions[self.current_index].id != question_id:
            self.selected_answer = None
            self.phase = PHASE_ANSWERING
            return
        self.phase = phase
