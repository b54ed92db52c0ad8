"""Rich rendering for agent answers, history and the dashboard."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from logscope_agent.agent.normalizer import NormalizedAgentResponse, extract_text
from logscope_agent.analysis.dashboard import DashboardSnapshot
from logscope_agent.analysis.models import CloudWatchResult
from logscope_agent.session.history import QueryHistory
from logscope_agent.utils.helpers import format_log_timestamp, level_style, truncate_output


def render_response(console: Console, response: NormalizedAgentResponse) -> None:
    """Print the analysis banner followed by the formatted log lines."""
    if response.is_error:
        console.print(f"[red]Agent error:[/red] {escape(response.message or 'unknown error')}")
        return

    analysis = CloudWatchResult.from_result(response.result)
    if not analysis.logs_analyzed and not analysis.findings.errors and not analysis.formatted_results:
        # Not a log analysis; show whatever text the agent sent back.
        console.print(escape(truncate_output(extract_text(response) or str(response.result))))
        return

    lines = [
        f"[bold]{analysis.logs_analyzed:,}[/bold] logs analyzed, "
        f"[bold]{len(analysis.findings.errors)}[/bold] error types found",
    ]
    if analysis.query_interpretation:
        lines.append(f"[dim]{analysis.query_interpretation}[/dim]")
    if analysis.insights.summary:
        lines.append(f"\n{analysis.insights.summary}")
    for error in analysis.findings.errors:
        lines.append(f"[red]{error.error_type}[/red] x{error.count}: {error.sample_message}")
    for pattern in analysis.findings.patterns:
        lines.append(f"[cyan]Pattern[/cyan] {pattern.pattern}: {pattern.description}")
    for anomaly in analysis.findings.anomalies:
        lines.append(f"[magenta]Anomaly[/magenta] {anomaly.anomaly}: {anomaly.description}")
    for peak in analysis.insights.peak_times:
        lines.append(f"[yellow]Peak[/yellow] {peak.time} ({peak.error_count} errors): {peak.reason}")
    for rec in analysis.insights.recommendations:
        lines.append(f"[green]>[/green] {rec}")
    for trend in analysis.insights.trends:
        lines.append(f"[blue]~[/blue] {trend}")

    console.print(Panel("\n".join(lines), title="AI Analysis Complete", border_style="green", expand=False))

    if analysis.formatted_results:
        table = Table(title="Log Entries")
        table.add_column("Time", style="cyan", no_wrap=True)
        table.add_column("Level")
        table.add_column("Message")
        table.add_column("Stream", style="dim")
        table.add_column("Request ID", style="dim")
        for log in analysis.formatted_results:
            style = level_style(log.level)
            table.add_row(
                format_log_timestamp(log.timestamp),
                f"[{style}]{log.level}[/{style}]",
                escape(log.message),
                log.log_stream,
                log.request_id,
            )
        console.print(table)


def render_history(console: Console, history: QueryHistory) -> None:
    if len(history) == 0:
        console.print("[dim]No queries yet.[/dim]")
        return
    for offset in range(len(history)):
        entry = history.recent(offset)
        console.print(f"[dim]{offset:>3}[/dim]  {entry.timestamp}  {entry.query}")


def render_dashboard(console: Console, snapshot: DashboardSnapshot) -> None:
    """Print analytics counters, top errors and recent activity."""
    if snapshot.demo:
        console.print("[yellow]Demo data[/yellow]: run a query to see your own analytics.\n")

    stats = Table(title="CloudWatch Log Analytics")
    stats.add_column("Metric", style="cyan")
    stats.add_column("Value", style="green", justify="right")
    a = snapshot.analytics
    stats.add_row("Total Queries", f"{a.total_queries:,}")
    stats.add_row("Logs Analyzed", f"{a.total_logs_analyzed:,}")
    stats.add_row("Errors", f"{a.total_errors:,}")
    stats.add_row("Warnings", f"{a.total_warnings:,}")
    stats.add_row("Patterns", f"{a.total_patterns:,}")
    stats.add_row("Anomalies", f"{a.total_anomalies:,}")
    console.print(stats)

    if snapshot.top_errors:
        errors = Table(title="Top Errors")
        errors.add_column("Error Type", style="red")
        errors.add_column("Count", justify="right")
        errors.add_column("Sample")
        for error in snapshot.top_errors:
            errors.add_row(error.error_type, str(error.count), escape(error.sample))
        console.print(errors)

    if snapshot.recent_activity:
        activity = Table(title="Recent Activity")
        activity.add_column("Query")
        activity.add_column("When", style="dim")
        activity.add_column("Logs", justify="right")
        activity.add_column("Errors", justify="right")
        for item in snapshot.recent_activity:
            activity.add_row(
                item.query,
                format_log_timestamp(item.timestamp),
                f"{item.logs_analyzed:,}",
                str(item.error_count),
            )
        console.print(activity)
