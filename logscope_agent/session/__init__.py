"""Query session module."""

from logscope_agent.session.history import HistoryNavigator, QueryHistory, QueryHistoryEntry
from logscope_agent.session.state import LogQuerySession

__all__ = ["QueryHistory", "QueryHistoryEntry", "HistoryNavigator", "LogQuerySession"]
