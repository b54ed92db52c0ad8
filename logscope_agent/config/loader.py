"""Reading and writing the logscope-agent config file."""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from logscope_agent.config.schema import Config

DEFAULT_CONFIG_DIR = Path.home() / ".logscope-agent"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"


def _read_config_file(path: Path) -> dict[str, Any]:
    """Return the top-level object of a config file, or {} when it is unusable."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: top level is {type(data).__name__}, expected an object")
        return {}
    return data


def load_config(config_path: Path | None = None) -> Config:
    """
    Build the agent settings for a CLI run.

    The JSON file (``~/.logscope-agent/config.json`` unless ``config_path``
    is given) supplies the ``agent`` and ``logging`` sections. ``LOGSCOPE_``
    environment variables such as ``LOGSCOPE_AGENT__API_KEY`` win over the
    file, so a key can be injected without editing it. A missing, unreadable
    or invalid file yields the built-in defaults: the hosted agent URL and
    id, no API key, INFO logging.

    Args:
        config_path: Config file to read instead of the default location.

    Returns:
        Settings with environment overrides applied.
    """
    path = config_path or DEFAULT_CONFIG_FILE
    if not path.exists():
        logger.debug(f"No config at {path}, using defaults")
        return Config()

    data = _read_config_file(path)
    try:
        config = Config(**data)
    except ValidationError as e:
        logger.warning(f"Invalid agent settings in {path}: {e.error_count()} error(s), using defaults")
        return Config()

    logger.debug(f"Agent settings loaded from {path}")
    return config


def save_default_config(config_path: Path | None = None) -> Path:
    """
    Write a starter config holding the default agent settings.

    Existing files are left untouched so that a configured API key survives
    a second ``onboard``.
    """
    path = config_path or DEFAULT_CONFIG_FILE
    if path.exists():
        logger.info(f"Config already exists at {path}")
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    data = Config().model_dump(mode="json")
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    logger.info(f"Default config saved to {path}")
    return path
