"""Agent response handling module."""

from logscope_agent.agent.normalizer import (
    NormalizedAgentResponse,
    error_response,
    extract_text,
    normalize_response,
)

__all__ = ["NormalizedAgentResponse", "normalize_response", "error_response", "extract_text"]
