from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from knowledge_quiz.api.dependencies import get_question_store
from knowledge_quiz.questions.store import QuestionStore

router = APIRouter(tags=["health"])


async def _check_database(store: QuestionStore) -> bool:
    try:
        return await store.ping()
    except Exception:
        return False


@router.get("/api/health")
async def health(store: QuestionStore = Depends(get_question_store)) -> JSONResponse:
    if await _check_database(store):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "status": "OK",
                "database": "Connected",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "status": "Error",
            "database": "Disconnected",
            "error": "Could not connect to database",
        },
    )


@router.get("/")
async def root() -> dict[str, object]:
    return {
        "message": "Quiz Game Server is running!",
        "endpoints": {
            "health": "/api/health",
            "questions": "/api/questions",
            "documentation": "/docs",
        },
    }
