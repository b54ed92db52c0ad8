"""Utility functions module."""

from logscope_agent.utils.helpers import format_log_timestamp, level_style, mask_secret, truncate_output

__all__ = ["truncate_output", "mask_secret", "format_log_timestamp", "level_style"]
