"""CLI commands for logscope-agent."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from logscope_agent.analysis.dashboard import build_dashboard
from logscope_agent.cli.render import render_dashboard, render_history, render_response
from logscope_agent.config import Config, load_config, save_default_config
from logscope_agent.providers.agent_client import AgentClient
from logscope_agent.session.state import LogQuerySession
from logscope_agent.utils.helpers import mask_secret

app = typer.Typer(
    name="logscope-agent",
    help="LogScope-Agent: ask questions about your CloudWatch logs in plain language",
)
console = Console()


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _create_session(config: Config) -> LogQuerySession:
    return LogQuerySession(
        client=AgentClient.from_config(config),
        agent_id=config.agent.agent_id,
        user_id=config.agent.user_id,
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    LogScope-Agent CLI entrypoint.
    """
    ctx.obj = {"verbose": verbose}


def _load(ctx: typer.Context, config_path: Path | None) -> Config:
    config = load_config(config_path)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    configure_logging("DEBUG" if verbose else config.logging.level)
    return config


@app.command()
def onboard(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
) -> None:
    """Create the default configuration file."""
    path = save_default_config(config_path)

    console.print(f"[green]Config created at:[/green] {path}")
    console.print("\n[yellow]Next steps:[/yellow]")
    console.print("1. Edit config to add your agent API key (or set LOGSCOPE_AGENT__API_KEY)")
    console.print("2. Run: logscope-agent query -m \"Show me all errors in the last hour\"")


@app.command()
def status(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
) -> None:
    """Show current configuration."""
    config = _load(ctx, config_path)

    table = Table(title="LogScope-Agent Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Agent URL", config.agent.api_url)
    table.add_row("Agent ID", config.agent.agent_id)
    table.add_row("User ID", config.agent.user_id)
    table.add_row("Timeout", f"{config.agent.timeout_s}s")
    table.add_row("API Key", mask_secret(config.get_api_key()) or "[red]Not configured[/red]")
    table.add_row("Log Level", config.logging.level)

    console.print(table)


@app.command()
def query(
    ctx: typer.Context,
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Single query to run"),
    json_output: bool = typer.Option(False, "--json", help="Print the normalized response as JSON"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
) -> None:
    """Ask the agent about your logs, once or interactively."""
    config = _load(ctx, config_path)

    if not config.get_api_key():
        console.print("[red]Error:[/red] No API key configured. Run 'logscope-agent onboard' first.")
        raise typer.Exit(1)

    session = _create_session(config)

    if message:
        result = asyncio.run(session.submit(message))
        if result is None:
            console.print("[red]Error:[/red] Query is empty.")
            raise typer.Exit(1)
        if json_output:
            console.print_json(data=result.response.to_dict())
        else:
            render_response(console, result.response)
        if not result.success:
            raise typer.Exit(1)
        return

    _interactive(session)


def _interactive(session: LogQuerySession) -> None:
    console.print("[bold]LogScope-Agent[/bold] interactive mode. Type 'exit' to quit.")
    console.print(
        "[dim]:up / :down recall history (Enter runs the recalled query), "
        ":history, :dashboard, :clear[/dim]\n"
    )

    while True:
        try:
            user_input = console.input("[bold blue]> [/bold blue]").strip()
        except (KeyboardInterrupt, EOFError):
            break

        if user_input.lower() in ("exit", "quit"):
            break

        if user_input in (":up", ":down"):
            recalled = session.navigator.up() if user_input == ":up" else session.navigator.down()
            console.print(f"[dim]recalled:[/dim] {recalled}" if recalled else "[dim](empty)[/dim]")
            continue
        if user_input == ":history":
            render_history(console, session.history)
            continue
        if user_input == ":dashboard":
            render_dashboard(console, build_dashboard(session.history, session.response))
            continue
        if user_input == ":clear":
            session.clear()
            console.clear()
            continue

        text = user_input or session.navigator.query
        if not text:
            continue

        with console.status("Analyzing logs..."):
            result = asyncio.run(session.submit(text))
        if result is None:
            continue
        if result.success:
            render_response(console, result.response)
        else:
            console.print(f"[red]Error:[/red] {escape(session.error or '')}")
        console.print()

    console.print("\n[dim]Goodbye![/dim]")


if __name__ == "__main__":
    app()
