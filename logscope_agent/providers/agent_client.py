"""HTTP client for the hosted log-analysis agent."""

from __future__ import annotations

import traceback
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx
from loguru import logger

from logscope_agent.agent.normalizer import NormalizedAgentResponse, error_response, normalize_response
from logscope_agent.config.schema import Config
from logscope_agent.providers.json_parser import ParseFailure, parse_llm_json


@dataclass
class AgentCallResult:
    """
    Outcome of a single agent call.

    ``response`` is always populated, carrying an error envelope on failure,
    so callers only need to branch on ``success``.
    """

    success: bool
    response: NormalizedAgentResponse
    agent_id: str | None = None
    user_id: str | None = None
    session_id: str | None = None
    timestamp: str | None = None
    raw_response: str | None = None
    error: str | None = None
    details: str | None = None


def generate_user_id() -> str:
    return f"user-{uuid.uuid4()}"


def generate_session_id(agent_id: str) -> str:
    return f"{agent_id}-{str(uuid.uuid4())[:12]}"


def _reported_failure(parsed: object) -> str | None:
    if not isinstance(parsed, dict) or parsed.get("success") is not False:
        return None
    error = parsed.get("error")
    if isinstance(error, str) and error:
        return error
    return None


class AgentClient:
    """
    Client for the agent inference endpoint.

    Every call issues exactly one POST and never raises: HTTP errors,
    unparseable bodies and transport failures all come back as a failed
    AgentCallResult.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.transport = transport

    @classmethod
    def from_config(cls, config: Config) -> AgentClient:
        """Build a client from the agent section of the configuration."""
        return cls(
            api_url=config.agent.api_url,
            api_key=config.agent.api_key,
            timeout_s=config.agent.timeout_s,
        )

    async def call_agent(
        self,
        message: str,
        agent_id: str,
        user_id: str | None = None,
        session_id: str | None = None,
    ) -> AgentCallResult:
        """
        Send a query to the agent and normalize the answer.

        Args:
            message: Natural-language query.
            agent_id: Remote agent to invoke.
            user_id: Optional user identifier, generated when omitted.
            session_id: Optional session identifier, generated when omitted.

        Returns:
            AgentCallResult with a normalized response envelope.
        """
        user_id = user_id or generate_user_id()
        session_id = session_id or generate_session_id(agent_id)

        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
        }
        payload = {
            "message": message,
            "agent_id": agent_id,
            "user_id": user_id,
            "session_id": session_id,
        }

        logger.debug(f"Calling agent {agent_id} (session {session_id}): {message[:80]}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
                resp = await client.post(self.api_url, headers=headers, json=payload)
                raw_text = resp.text
        except Exception as exc:
            error_msg = str(exc) or type(exc).__name__ or "Network error"
            logger.warning(f"Agent call failed before a response arrived: {error_msg}")
            return AgentCallResult(
                success=False,
                response=error_response(error_msg),
                error=error_msg,
                details=traceback.format_exc(),
            )

        if resp.is_success:
            return self._handle_success(raw_text, agent_id, user_id, session_id)
        return self._handle_http_error(resp.status_code, raw_text)

    def _handle_success(
        self,
        raw_text: str,
        agent_id: str,
        user_id: str,
        session_id: str,
    ) -> AgentCallResult:
        parsed = parse_llm_json(raw_text)

        if isinstance(parsed, ParseFailure):
            logger.warning(f"Agent returned an unparseable body: {parsed.error}")
            return AgentCallResult(
                success=False,
                response=error_response(parsed.error),
                error=parsed.error,
                raw_response=raw_text,
            )

        # A {"success": false, "error": "..."} body is a failure report, not an answer.
        failure = _reported_failure(parsed)
        if failure:
            logger.warning(f"Agent reported a failure: {failure}")
            return AgentCallResult(
                success=False,
                response=error_response(failure),
                error=failure,
                raw_response=raw_text,
            )

        return AgentCallResult(
            success=True,
            response=normalize_response(parsed),
            agent_id=agent_id,
            user_id=user_id,
            session_id=session_id,
            timestamp=datetime.now(timezone.utc).isoformat(),
            raw_response=raw_text,
        )

    def _handle_http_error(self, status_code: int, raw_text: str) -> AgentCallResult:
        error_msg = f"API returned status {status_code}"

        parsed = parse_llm_json(raw_text)
        if isinstance(parsed, dict):
            error_msg = parsed.get("error") or parsed.get("message") or error_msg
            if not isinstance(error_msg, str):
                error_msg = str(error_msg)

        logger.warning(f"Agent call failed: {error_msg}")
        return AgentCallResult(
            success=False,
            response=error_response(error_msg),
            error=error_msg,
            raw_response=raw_text,
        )
