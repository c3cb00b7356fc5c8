from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_quiz.api.errors import register_exception_handlers
from knowledge_quiz.api.routes.health import router as health_router
from knowledge_quiz.api.routes.questions import router as questions_router
from knowledge_quiz.core.config import Settings, get_settings
from knowledge_quiz.core.logging import configure_logging
from knowledge_quiz.db.database import Database, DatabaseUnavailableError
from knowledge_quiz.questions.seed import seed_if_empty
from knowledge_quiz.questions.store import QuestionStore

logger = structlog.get_logger(__name__)


def build_question_store(settings: Settings) -> QuestionStore:
    database = Database(
        settings.resolved_database_url,
        pool_size=settings.db_pool_size,
        connect_timeout_sec=settings.db_connect_timeout_sec,
    )
    return QuestionStore(database)


def create_app(question_store: QuestionStore | None = None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    store = question_store if question_store is not None else build_question_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await store.open()
        except DatabaseUnavailableError:
            logger.error("startup_failed", reason="database_unreachable")
            raise
        await seed_if_empty(store)
        logger.info("startup_complete")
        try:
            yield
        finally:
            await store.close()
            logger.info("shutdown_complete")

    app = FastAPI(
        title="Knowledge Quiz API",
        version="0.1.0",
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.question_store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(questions_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "knowledge_quiz.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
