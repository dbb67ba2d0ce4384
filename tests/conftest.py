from collections.abc import AsyncIterator, Iterator
from typing import Any

import pytest
import pytest_asyncio
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from error_response import register_error_responses
from error_response.middleware import RequestIDMiddleware
from tests.errors import (
    LEAKED_DSN,
    CreateUserError,
    DirectoryUnavailable,
    InsertUserToDb,
    InvalidBody,
    UserNotFound,
)


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_error_responses(app, CreateUserError)

    @app.post("/users/db-failure")
    async def insert_fails() -> None:
        try:
            raise ConnectionError(f"connection refused: {LEAKED_DSN}")
        except ConnectionError as exc:
            raise InsertUserToDb() from exc

    @app.post("/users/invalid")
    async def invalid_body() -> None:
        raise InvalidBody("missing field 'name'")

    @app.get("/users/{user_id}")
    async def get_user(user_id: int) -> None:
        raise UserNotFound(user_id)

    @app.get("/directory")
    async def directory() -> None:
        raise DirectoryUnavailable()

    @app.get("/context")
    async def context() -> dict[str, Any]:
        return structlog.contextvars.get_contextvars()

    return app


app = build_app()


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """HTTP client talking to the test application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Every structlog event emitted during the test, as dicts."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def captured_logs_with_context() -> Iterator[list[dict[str, Any]]]:
    """Like captured_logs, but with request context merged into each event."""
    capture = structlog.testing.LogCapture()
    processors = structlog.get_config()["processors"]
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    try:
        yield capture.entries
    finally:
        structlog.configure(processors=processors)
