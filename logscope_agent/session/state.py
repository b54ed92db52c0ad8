"""Per-session application state."""

import time

from loguru import logger

from logscope_agent.agent.normalizer import NormalizedAgentResponse
from logscope_agent.providers.agent_client import AgentCallResult, AgentClient
from logscope_agent.session.history import HistoryNavigator, QueryHistory, QueryHistoryEntry

DEFAULT_FAILURE_MESSAGE = "Failed to analyze logs"


class LogQuerySession:
    """
    State owned by the top-level front end for one interactive session.

    Holds the query history, the recall navigator, the latest response and
    error, and the in-flight flag. Only one query runs at a time; further
    submissions are ignored until it resolves.
    """

    def __init__(
        self,
        client: AgentClient,
        agent_id: str,
        user_id: str = "cloudwatch-user",
        session_id: str | None = None,
    ) -> None:
        self.client = client
        self.agent_id = agent_id
        self.user_id = user_id
        self.session_id = session_id or f"session-{int(time.time() * 1000)}"

        self.history = QueryHistory()
        self.navigator = HistoryNavigator(self.history)
        self.response: NormalizedAgentResponse | None = None
        self.error: str | None = None
        self.loading = False

    async def submit(self, query: str) -> AgentCallResult | None:
        """
        Send a query to the agent and record the outcome.

        Successful answers become the current response and are appended to
        history. Failures only set ``error``; they are not recorded.

        Args:
            query: Natural-language query.

        Returns:
            The call result, or None if the query was blank or a call is
            already in flight.
        """
        if not query.strip() or self.loading:
            return None

        self.loading = True
        self.error = None

        try:
            result = await self.client.call_agent(
                query,
                self.agent_id,
                user_id=self.user_id,
                session_id=self.session_id,
            )

            if result.success:
                self.response = result.response
                self.history.append(QueryHistoryEntry(query=query, response=result.response))
                logger.info(f"Query recorded ({len(self.history)} in history)")
            else:
                self.error = result.error or DEFAULT_FAILURE_MESSAGE
                logger.warning(f"Query failed: {self.error}")
        finally:
            self.loading = False
            self.navigator.reset()

        return result

    def clear(self) -> None:
        """Drop the current response and error; history is kept."""
        self.response = None
        self.error = None
