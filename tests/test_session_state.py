"""Tests for LogQuerySession."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from logscope_agent.agent.normalizer import NormalizedAgentResponse, error_response
from logscope_agent.providers.agent_client import AgentCallResult, AgentClient
from logscope_agent.session.state import LogQuerySession


def ok(result: dict) -> AgentCallResult:
    return AgentCallResult(success=True, response=NormalizedAgentResponse(status="success", result=result))


def failed(message: str | None) -> AgentCallResult:
    return AgentCallResult(success=False, response=error_response(message or "x"), error=message)


@pytest.fixture
def client():
    mock = MagicMock()
    mock.call_agent = AsyncMock()
    return mock


@pytest.fixture
def session(client):
    return LogQuerySession(client=client, agent_id="agent-1", session_id="session-1")


@pytest.mark.asyncio
async def test_submit_success_records_history(session, client):
    client.call_agent.return_value = ok({"logs_analyzed": 3})

    result = await session.submit("show errors")

    client.call_agent.assert_called_once_with(
        "show errors", "agent-1", user_id="cloudwatch-user", session_id="session-1"
    )
    assert result.success
    assert session.response.result == {"logs_analyzed": 3}
    assert len(session.history) == 1
    assert session.history.latest.query == "show errors"
    assert session.history.latest.response is session.response
    assert session.error is None
    assert session.loading is False


@pytest.mark.asyncio
async def test_submit_failure_sets_error_and_skips_history(session, client):
    client.call_agent.return_value = failed("rate limited")

    result = await session.submit("show errors")

    assert result.success is False
    assert session.error == "rate limited"
    assert len(session.history) == 0
    assert session.response is None


@pytest.mark.asyncio
async def test_submit_failure_without_message_uses_default(session, client):
    client.call_agent.return_value = failed(None)

    await session.submit("q")

    assert session.error == "Failed to analyze logs"


@pytest.mark.asyncio
async def test_blank_query_ignored(session, client):
    assert await session.submit("   ") is None
    client.call_agent.assert_not_called()


@pytest.mark.asyncio
async def test_submit_while_loading_ignored(session, client):
    gate = asyncio.Event()

    async def slow_call(*args, **kwargs):
        await gate.wait()
        return ok({})

    client.call_agent.side_effect = slow_call

    first = asyncio.create_task(session.submit("first"))
    await asyncio.sleep(0)
    assert session.loading is True
    assert await session.submit("second") is None

    gate.set()
    await first
    assert client.call_agent.call_count == 1
    assert session.loading is False


@pytest.mark.asyncio
async def test_submit_resets_navigator(session, client):
    client.call_agent.return_value = ok({})
    await session.submit("q1")
    session.navigator.up()
    assert session.navigator.query == "q1"

    await session.submit("q2")

    assert session.navigator.is_browsing
    assert session.navigator.query == ""


@pytest.mark.asyncio
async def test_clear_keeps_history(session, client):
    client.call_agent.return_value = ok({})
    await session.submit("q1")

    session.clear()

    assert session.response is None
    assert session.error is None
    assert len(session.history) == 1


def test_default_session_id(client):
    s = LogQuerySession(client=client, agent_id="agent-1")
    assert s.session_id.startswith("session-")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, body, expected_error",
    [
        (200, '{"success": false, "error": "agent failed"}', "agent failed"),
        (200, "1" * 5000, "Failed to parse"),
        (500, "[" * 100000 + "]" * 100000, "API returned status 500"),
    ],
)
async def test_submit_with_bad_agent_bodies_records_error(status, body, expected_error):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text=body)

    agent = AgentClient(api_url="https://agent.test/chat/", transport=httpx.MockTransport(handler))
    session = LogQuerySession(client=agent, agent_id="agent-1", session_id="session-1")

    result = await session.submit("show errors")

    assert result.success is False
    assert expected_error in session.error
    assert session.loading is False
    assert session.response is None
    assert len(session.history) == 0
