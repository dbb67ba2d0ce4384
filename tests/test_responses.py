"""End-to-end tests: errors raised in endpoints, answered over HTTP."""

from typing import Any

import pytest
from httpx import AsyncClient

from tests.errors import LEAKED_DSN
from tests.factories import server_fault_records


@pytest.mark.asyncio
async def test_undeclared_status_returns_500_with_placeholder(
    client: AsyncClient, captured_logs: list[dict[str, Any]]
) -> None:
    resp = await client.post("/users/db-failure")

    assert resp.status_code == 500
    assert resp.json() == {"code": 500, "error": "Internal server error"}
    assert "db write failed" not in resp.text
    assert LEAKED_DSN not in resp.text

    [record] = server_fault_records(captured_logs)
    assert record["error_message"] == "db write failed"
    assert record["variant"] == "InsertUserToDb"
    assert record["error_chain"] == [
        {"kind": "InsertUserToDb", "message": "db write failed"},
        {"kind": "ConnectionError", "message": f"connection refused: {LEAKED_DSN}"},
    ]


@pytest.mark.asyncio
async def test_declared_422_returns_message_without_record(
    client: AsyncClient, captured_logs: list[dict[str, Any]]
) -> None:
    resp = await client.post("/users/invalid")

    assert resp.status_code == 422
    assert resp.json() == {"code": 422, "error": "body is invalid: missing field 'name'"}
    assert server_fault_records(captured_logs) == []


@pytest.mark.asyncio
async def test_declared_404_without_cause_returns_message(
    client: AsyncClient, captured_logs: list[dict[str, Any]]
) -> None:
    resp = await client.get("/users/42")

    assert resp.status_code == 404
    assert resp.json() == {"code": 404, "error": "user with id 42 not found"}
    assert server_fault_records(captured_logs) == []


@pytest.mark.asyncio
async def test_declared_503_is_hidden_and_recorded(
    client: AsyncClient, captured_logs: list[dict[str, Any]]
) -> None:
    resp = await client.get("/directory")

    assert resp.status_code == 503
    assert resp.json() == {"code": 503, "error": "Internal server error"}
    [record] = server_fault_records(captured_logs)
    assert record["error_chain"] == [{"kind": "DirectoryUnavailable", "message": ""}]


@pytest.mark.asyncio
async def test_error_responses_carry_request_id(client: AsyncClient) -> None:
    resp = await client.post("/users/db-failure", headers={"X-Request-ID": "req-123"})

    assert resp.status_code == 500
    assert resp.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_each_request_records_once(
    client: AsyncClient, captured_logs: list[dict[str, Any]]
) -> None:
    for _ in range(3):
        await client.post("/users/db-failure")
    await client.post("/users/invalid")

    assert len(server_fault_records(captured_logs)) == 3


@pytest.mark.asyncio
async def test_server_fault_record_carries_request_identity(
    client: AsyncClient, captured_logs_with_context: list[dict[str, Any]]
) -> None:
    await client.post("/users/db-failure", headers={"X-Request-ID": "req-123"})

    [record] = server_fault_records(captured_logs_with_context)
    assert record["request_id"] == "req-123"
    assert record["method"] == "POST"
    assert record["path"] == "/users/db-failure"
    assert record["error_message"] == "db write failed"
