"""Dashboard aggregation over the session's query history."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from logscope_agent.agent.normalizer import NormalizedAgentResponse
from logscope_agent.analysis.models import CloudWatchResult
from logscope_agent.session.history import QueryHistory

TOP_ERRORS_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 10


@dataclass
class Analytics:
    """Headline counters shown on the dashboard."""

    total_queries: int = 0
    total_logs_analyzed: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    total_patterns: int = 0
    total_anomalies: int = 0


@dataclass
class TopError:
    error_type: str
    count: int
    sample: str


@dataclass
class ActivityItem:
    query: str
    timestamp: str
    logs_analyzed: int
    error_count: int


@dataclass
class DashboardSnapshot:
    """Everything the dashboard view needs; ``demo`` marks placeholder data."""

    analytics: Analytics
    top_errors: list[TopError] = field(default_factory=list)
    recent_activity: list[ActivityItem] = field(default_factory=list)
    demo: bool = False


def _demo_snapshot(now: datetime) -> DashboardSnapshot:
    def ago(minutes: int) -> str:
        return (now - timedelta(minutes=minutes)).isoformat()

    return DashboardSnapshot(
        analytics=Analytics(
            total_queries=1247,
            total_logs_analyzed=523891,
            total_errors=234,
            total_warnings=67,
            total_patterns=18,
            total_anomalies=7,
        ),
        top_errors=[
            TopError("TimeoutError", 87, "Request to external payment gateway timed out after 30s"),
            TopError("NullReferenceException", 52, "Unhandled NullReferenceException in OrdersController at line 221"),
            TopError("DatabaseConnectionError", 41, "Unable to connect to user-db cluster: connection refused"),
            TopError("AuthenticationFailure", 28, "JWT token validation failed: signature expired"),
            TopError("RateLimitExceeded", 26, "API rate limit exceeded for endpoint /api/v2/users"),
        ],
        recent_activity=[
            ActivityItem("Show me all TimeoutErrors in the last hour", ago(15), 2341, 17),
            ActivityItem("Analyze database connection failures today", ago(45), 8923, 5),
            ActivityItem("What caused the spike at 2pm?", ago(120), 15672, 42),
            ActivityItem("Search for authentication errors in production", ago(180), 6234, 11),
            ActivityItem("Show API rate limit errors", ago(300), 3456, 8),
            ActivityItem("Find all errors from app-server-2", ago(360), 12890, 23),
            ActivityItem("Analyze memory usage warnings", ago(480), 4567, 0),
            ActivityItem("Show all critical errors in the last 24h", ago(720), 34521, 67),
        ],
        demo=True,
    )


def build_dashboard(
    history: QueryHistory,
    response: NormalizedAgentResponse | None = None,
    now: datetime | None = None,
) -> DashboardSnapshot:
    """
    Aggregate analytics across the session.

    With no history and no current response, a fixed demo snapshot is
    returned instead. The current response is only counted separately when
    it is not already the newest history entry.

    Args:
        history: Session query history.
        response: Response currently on screen, if any.
        now: Reference time for demo timestamps.

    Returns:
        DashboardSnapshot.
    """
    if len(history) == 0 and response is None:
        return _demo_snapshot(now or datetime.now(timezone.utc))

    results = [CloudWatchResult.from_result(e.response.result) for e in history if e.response is not None]
    latest = history.latest
    if response is not None and (latest is None or latest.response is not response):
        results.append(CloudWatchResult.from_result(response.result))

    analytics = Analytics(
        total_queries=len(history),
        total_logs_analyzed=sum(r.logs_analyzed for r in results),
        total_errors=sum(r.error_total for r in results),
        total_warnings=sum(r.warning_total for r in results),
        total_patterns=sum(len(r.findings.patterns) for r in results),
        total_anomalies=sum(len(r.findings.anomalies) for r in results),
    )

    merged: dict[str, TopError] = {}
    for result in results:
        for error in result.findings.errors:
            existing = merged.get(error.error_type)
            if existing:
                existing.count += error.count
            else:
                merged[error.error_type] = TopError(error.error_type, error.count, error.sample_message)
    top_errors = sorted(merged.values(), key=lambda e: e.count, reverse=True)[:TOP_ERRORS_LIMIT]

    recent: list[ActivityItem] = []
    for entry in reversed(list(history)):
        analysis = CloudWatchResult.from_result(entry.response.result if entry.response else None)
        recent.append(
            ActivityItem(
                query=entry.query,
                timestamp=entry.timestamp,
                logs_analyzed=analysis.logs_analyzed,
                error_count=len(analysis.findings.errors),
            )
        )
        if len(recent) == RECENT_ACTIVITY_LIMIT:
            break

    return DashboardSnapshot(analytics=analytics, top_errors=top_errors, recent_activity=recent)
