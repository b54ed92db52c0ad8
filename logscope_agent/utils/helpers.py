"""Common utility functions."""

from datetime import datetime

_LEVEL_STYLES = {
    "ERROR": "red",
    "WARN": "yellow",
    "WARNING": "yellow",
    "INFO": "blue",
}


def truncate_output(text: str, max_length: int = 4000) -> str:
    """
    Truncate text output to keep terminal rendering readable.

    Args:
        text: Text to truncate.
        max_length: Maximum allowed length.

    Returns:
        Truncated text with indicator if truncated.
    """
    if len(text) <= max_length:
        return text
    half = max_length // 2
    return text[:half] + f"\n\n... [truncated {len(text) - max_length} chars] ...\n\n" + text[-half:]


def mask_secret(secret: str | None, visible: int = 8) -> str | None:
    """Show only the last ``visible`` characters of a secret."""
    if not secret:
        return None
    return f"...{secret[-visible:]}"


def format_log_timestamp(ts: str) -> str:
    """
    Format an ISO-8601 log timestamp as ``MM/DD HH:MM:SS``.

    Unparseable values are returned unchanged.
    """
    try:
        parsed = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return ts
    return parsed.strftime("%m/%d %H:%M:%S")


def level_style(level: str) -> str:
    """Map a log level to a rich color name."""
    return _LEVEL_STYLES.get(level.upper(), "grey50")
