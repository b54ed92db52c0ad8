"""Normalization of agent payloads into a single response envelope."""

import json
from dataclasses import dataclass, field
from typing import Any

EMPTY_RESPONSE_MESSAGE = "Empty response from agent"

# Nested {"response": ...} wrappers unwrapped before the payload is kept as-is.
MAX_UNWRAP_DEPTH = 5


@dataclass
class NormalizedAgentResponse:
    """Canonical agent response. UI code only ever sees this shape."""

    status: str
    result: dict[str, Any] = field(default_factory=dict)
    message: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def is_error(self) -> bool:
        return self.status == "error"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status, "result": self.result}
        if self.message is not None:
            data["message"] = self.message
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data


def error_response(message: str) -> NormalizedAgentResponse:
    """Build the error envelope used for every failed agent call."""
    return NormalizedAgentResponse(status="error", result={}, message=message)


def _display_string(value: Any) -> str:
    """Render a JSON scalar or array the way the agent's web dashboard prints it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, list):
        return ",".join(_display_string(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def _coerce_status(status: Any) -> str:
    return "error" if status == "error" else "success"


def _coerce_result(result: Any) -> dict[str, Any]:
    if not result:
        return {}
    if isinstance(result, dict):
        return result
    return {"value": result}


def normalize_response(parsed: Any, _depth: int = 0) -> NormalizedAgentResponse:
    """
    Collapse any parsed JSON value into a NormalizedAgentResponse.

    The checks run in a fixed order and the first match wins, so an object
    carrying both ``message`` and ``result`` is treated as a result payload.

    Args:
        parsed: Value produced by the JSON parser.

    Returns:
        Normalized response; ``status`` and ``result`` are always set.
    """
    if parsed is None:
        return error_response(EMPTY_RESPONSE_MESSAGE)

    if isinstance(parsed, str):
        return NormalizedAgentResponse(status="success", result={"text": parsed}, message=parsed)

    if not isinstance(parsed, dict):
        return NormalizedAgentResponse(status="success", result={"value": parsed}, message=_display_string(parsed))

    if "status" in parsed and "result" in parsed:
        return NormalizedAgentResponse(
            status=_coerce_status(parsed["status"]),
            result=_coerce_result(parsed["result"]),
            message=parsed.get("message"),
            metadata=parsed.get("metadata"),
        )

    if "status" in parsed:
        rest = {k: v for k, v in parsed.items() if k not in ("status", "message", "metadata")}
        return NormalizedAgentResponse(
            status=_coerce_status(parsed["status"]),
            result=rest,
            message=parsed.get("message"),
            metadata=parsed.get("metadata"),
        )

    if "result" in parsed:
        return NormalizedAgentResponse(
            status="success",
            result=_coerce_result(parsed["result"]),
            message=parsed.get("message"),
            metadata=parsed.get("metadata"),
        )

    if isinstance(parsed.get("message"), str):
        return NormalizedAgentResponse(
            status="success",
            result={"text": parsed["message"]},
            message=parsed["message"],
        )

    if "response" in parsed and _depth < MAX_UNWRAP_DEPTH:
        return normalize_response(parsed["response"], _depth + 1)

    return NormalizedAgentResponse(status="success", result=parsed)


def extract_text(response: NormalizedAgentResponse) -> str:
    """Pull the most likely human-readable text out of a response."""
    if response.message:
        return response.message
    for key in ("text", "message", "answer", "answer_text"):
        value = response.result.get(key)
        if value:
            return str(value)
    return ""
