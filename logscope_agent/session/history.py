"""Query history and shell-style recall."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator

from logscope_agent.agent.normalizer import NormalizedAgentResponse


@dataclass(frozen=True)
class QueryHistoryEntry:
    """A submitted query and the response it produced."""

    query: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    response: NormalizedAgentResponse | None = None


class QueryHistory:
    """
    Append-only list of submitted queries, oldest first.

    Entries are never edited or removed for the lifetime of a session.
    """

    def __init__(self) -> None:
        self._entries: list[QueryHistoryEntry] = []

    def append(self, entry: QueryHistoryEntry) -> None:
        self._entries.append(entry)

    def recent(self, offset: int) -> QueryHistoryEntry:
        """Get an entry counting back from the newest (offset 0)."""
        if offset < 0 or offset >= len(self._entries):
            raise IndexError(f"history offset {offset} out of range")
        return self._entries[len(self._entries) - 1 - offset]

    @property
    def latest(self) -> QueryHistoryEntry | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[QueryHistoryEntry]:
        return iter(self._entries)


class HistoryNavigator:
    """
    Up/Down recall over a QueryHistory.

    ``index`` is -1 while browsing (no entry recalled); otherwise it is the
    offset back from the newest entry. ``query`` mirrors the input line.
    """

    BROWSING = -1

    def __init__(self, history: QueryHistory) -> None:
        self.history = history
        self.index = self.BROWSING
        self.query = ""

    @property
    def is_browsing(self) -> bool:
        return self.index == self.BROWSING

    def up(self) -> str:
        """Recall the next older entry, stopping at the oldest."""
        if len(self.history) == 0:
            return self.query

        if self.index < len(self.history) - 1:
            self.index += 1
        self.query = self.history.recent(self.index).query
        return self.query

    def down(self) -> str:
        """Recall the next newer entry, or clear the input past the newest."""
        if self.index > 0:
            self.index -= 1
            self.query = self.history.recent(self.index).query
        elif self.index == 0:
            self.index = self.BROWSING
            self.query = ""
        return self.query

    def reset(self) -> None:
        """Return to browsing with an empty input, as after a submission."""
        self.index = self.BROWSING
        self.query = ""
