from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.exc import SQLAlchemyError

from knowledge_quiz.api.dependencies import get_question_store
from knowledge_quiz.api.errors import INTERNAL_ERROR_MESSAGE
from knowledge_quiz.questions.errors import (
    LastQuestionDeleteError,
    QuestionNotFoundError,
    QuestionValidationError,
)
from knowledge_quiz.questions.store import QuestionStore
from knowledge_quiz.questions.types import QuestionFields
from knowledge_quiz.questions.validation import validate_question_fields

from .questions_models import (
    QuestionDeletedResponse,
    QuestionPayload,
    QuestionResponse,
    as_question_response,
)

router = APIRouter(prefix="/api/questions", tags=["questions"])
logger = structlog.get_logger(__name__)

INFRASTRUCTURE_ERRORS = (SQLAlchemyError, OSError)
QUESTION_NOT_FOUND_MESSAGE = "Question not found"
LAST_QUESTION_MESSAGE = "Cannot delete the last question"


def _internal_error(operation: str, exc: Exception) -> HTTPException:
    logger.error("question_storage_failed", operation=operation, error_type=type(exc).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_MESSAGE,
    )


def _validated_fields(payload: QuestionPayload) -> QuestionFields:
    try:
        return validate_question_fields(
            question=payload.question,
            options=payload.options,
            correct_answer=payload.correct_answer,
            explanation=payload.explanation,
        )
    except QuestionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=list[QuestionResponse])
async def list_questions(
    store: QuestionStore = Depends(get_question_store),
) -> list[QuestionResponse]:
    try:
        questions = await store.list_questions()
    except INFRASTRUCTURE_ERRORS as exc:
        raise _internal_error("list", exc) from exc
    return [as_question_response(question) for question in questions]


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: int = Path(gt=0),
    store: QuestionStore = Depends(get_question_store),
) -> QuestionResponse:
    try:
        question = await store.get_question(question_id)
    except QuestionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=QUESTION_NOT_FOUND_MESSAGE) from exc
    except INFRASTRUCTURE_ERRORS as exc:
        raise _internal_error("get", exc) from exc
    return as_question_response(question)


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionPayload,
    store: QuestionStore = Depends(get_question_store),
) -> QuestionResponse:
    fields = _validated_fields(payload)
    try:
        question = await store.create_question(fields)
    except INFRASTRUCTURE_ERRORS as exc:
        raise _internal_error("create", exc) from exc
    return as_question_response(question)


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    payload: QuestionPayload,
    question_id: int = Path(gt=0),
    store: QuestionStore = Depends(get_question_store),
) -> QuestionResponse:
    fields = _validated_fields(payload)
    try:
        question = await store.update_question(question_id, fields)
    except QuestionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=QUESTION_NOT_FOUND_MESSAGE) from exc
    except INFRASTRUCTURE_ERRORS as exc:
        raise _internal_error("update", exc) from exc
    return as_question_response(question)


@router.delete("/{question_id}", response_model=QuestionDeletedResponse)
async def delete_question(
    question_id: int = Path(gt=0),
    store: QuestionStore = Depends(get_question_store),
) -> QuestionDeletedResponse:
    try:
        await store.delete_question(question_id)
    except LastQuestionDeleteError as exc:
        logger.info("question_delete_refused", question_id=question_id, reason="last_question")
        raise HTTPException(status_code=400, detail=LAST_QUESTION_MESSAGE) from exc
    except QuestionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=QUESTION_NOT_FOUND_MESSAGE) from exc
    except INFRASTRUCTURE_ERRORS as exc:
        raise _internal_error("delete", exc) from exc
    return QuestionDeletedResponse(message="Question deleted successfully")
