"""Configuration module."""

from logscope_agent.config.schema import Config
from logscope_agent.config.loader import load_config, save_default_config

__all__ = ["Config", "load_config", "save_default_config"]
