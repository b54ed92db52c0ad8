"""Agent providers module."""

from logscope_agent.providers.agent_client import AgentCallResult, AgentClient
from logscope_agent.providers.json_parser import ParseFailure, parse_llm_json

__all__ = ["AgentClient", "AgentCallResult", "ParseFailure", "parse_llm_json"]
