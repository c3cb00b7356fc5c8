from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx
import structlog

from knowledge_quiz.questions.types import OPTIONS_COUNT, QuestionFields, QuestionSnapshot

logger = structlog.get_logger(__name__)


class QuestionsApiError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
        return payload["error"]
    return fallback


def _parse_question(payload: Any) -> QuestionSnapshot:
    try:
        options = tuple(str(option) for option in payload["options"])
        if len(options) != OPTIONS_COUNT:
            raise ValueError("unexpected options length")
        return QuestionSnapshot(
            id=int(payload["id"]),
            question=str(payload["question"]),
            options=options,  # type: ignore[arg-type]
            correct_answer=int(payload["correctAnswer"]),
            explanation=str(payload.get("explanation") or ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise QuestionsApiError("Malformed question in server response") from exc


def _as_payload(fields: QuestionFields) -> dict[str, Any]:
    return {
        "question": fields.question,
        "options": list(fields.options),
        "correctAnswer": fields.correct_answer,
        "explanation": fields.explanation,
    }


class QuestionsApiClient:
    """Thin async wrapper over the question REST API.

    Non-2xx responses and transport failures both surface as
    ``QuestionsApiError``. No retries and no timeout beyond httpx defaults.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> QuestionsApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback_message: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("questions_api_transport_failed", method=method, path=path, error_type=type(exc).__name__)
            raise QuestionsApiError(fallback_message) from exc

        if response.is_error:
            logger.warning("questions_api_request_failed", method=method, path=path, status_code=response.status_code)
            raise QuestionsApiError(
                _error_message(response, fallback_message),
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise QuestionsApiError(fallback_message, status_code=response.status_code) from exc

    async def list_questions(self) -> list[QuestionSnapshot]:
        payload = await self._request("GET", "/questions", fallback_message="Failed to fetch questions")
        if not isinstance(payload, list):
            raise QuestionsApiError("Failed to fetch questions")
        return [_parse_question(item) for item in payload]

    async def get_question(self, question_id: int) -> QuestionSnapshot:
        payload = await self._request(
            "GET",
            f"/questions/{question_id}",
            fallback_message="Failed to fetch question",
        )
        return _parse_question(payload)

    async def create_question(self, fields: QuestionFields) -> QuestionSnapshot:
        payload = await self._request(
            "POST",
            "/questions",
            json=_as_payload(fields),
            fallback_message="Failed to save question",
        )
        return _parse_question(payload)

    async def update_question(self, question_id: int, fields: QuestionFields) -> QuestionSnapshot:
        payload = await self._request(
            "PUT",
            f"/questions/{question_id}",
            json=_as_payload(fields),
            fallback_message="Failed to save question",
        )
        return _parse_question(payload)

    async def delete_question(self, question_id: int) -> str:
        payload = await self._request(
            "DELETE",
            f"/questions/{question_id}",
            fallback_message="Failed to delete question",
        )
        if isinstance(payload, dict):
            return str(payload.get("message", ""))
        return ""

    async def health(self) -> dict[str, Any]:
        payload = await self._request("GET", "/health", fallback_message="Health check failed")
        return payload if isinstance(payload, dict) else {}
