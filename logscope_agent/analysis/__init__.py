"""CloudWatch analysis models and dashboard aggregation."""

from logscope_agent.analysis.dashboard import DashboardSnapshot, build_dashboard
from logscope_agent.analysis.models import CloudWatchResult

__all__ = ["CloudWatchResult", "DashboardSnapshot", "build_dashboard"]
