"""Checks that a database URL points at a disposable local test database.

Integration tests truncate ``questions`` and ``scripts/ensure_test_db.py``
issues ``CREATE DATABASE``, so both refuse anything that is not a local
PostgreSQL database whose name says it is for tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.engine import URL, make_url

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "postgres", "knowledge_quiz_postgres"})
EXAMPLE_TEST_DATABASE = "knowledge_quiz_test"

_PLAIN_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class IntegrationTarget:
    url: URL
    problems: tuple[str, ...]

    @property
    def database_name(self) -> str:
        return (self.url.database or "").strip()

    @property
    def host(self) -> str:
        # libpq and asyncpg fall back to localhost when the URL has no host.
        return (self.url.host or "localhost").strip().lower()

    @property
    def port(self) -> int:
        return int(self.url.port or 5432)

    @property
    def is_usable(self) -> bool:
        return not self.problems

    def describe(self) -> str:
        return f"db={self.database_name or '<none>'} host={self.host}:{self.port}"


def _find_problems(url: URL) -> list[str]:
    problems: list[str] = []
    if url.get_backend_name() != "postgresql":
        problems.append(f"backend '{url.get_backend_name()}' is not postgresql")

    name = (url.database or "").strip()
    if "test" not in name.lower():
        problems.append("database name does not contain 'test'")
    elif _PLAIN_IDENTIFIER_RE.fullmatch(name) is None:
        problems.append("database name is not a plain [A-Za-z0-9_] identifier")

    host = (url.host or "localhost").strip().lower()
    if host not in LOCAL_HOSTS:
        problems.append(f"host '{host}' is not a local test host")
    return problems


def inspect_integration_target(database_url: str) -> IntegrationTarget:
    url = make_url(database_url)
    return IntegrationTarget(url=url, problems=tuple(_find_problems(url)))


def require_integration_target(database_url: str) -> IntegrationTarget:
    target = inspect_integration_target(database_url)
    if target.is_usable:
        return target
    raise RuntimeError(
        f"Refusing to use {target.describe()} as a test database: "
        + "; ".join(target.problems)
        + f". Point DATABASE_URL at a local database such as '{EXAMPLE_TEST_DATABASE}'."
    )
