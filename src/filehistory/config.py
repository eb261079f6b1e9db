"""Configuration for filehistory runs on a developer machine."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .git.history import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

ENV_MAX_DEPTH = "FILEHISTORY_MAX_DEPTH"
ENV_LOG_LEVEL = "FILEHISTORY_LOG_LEVEL"


@dataclass(slots=True)
class HistoryConfig:
    """Runtime configuration.

    Attributes
    ----------
    base_dir:
        Directory holding the optional ``config.json``. Defaults to
        ``~/.filehistory``.
    max_depth:
        Maximum number of commits inspected per history walk.
    log_level:
        Level applied to the ``filehistory`` logger by the command line.
    json_logs:
        Emit log records as JSON lines instead of plain text.
    """

    base_dir: Path = field(default_factory=lambda: Path.home() / ".filehistory")
    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "WARNING"
    json_logs: bool = False

    def config_path(self) -> Path:
        """Return path to the JSON configuration file."""
        return self.base_dir / "config.json"

    def apply(self, values: Dict[str, Any], source: str = "config") -> None:
        """Overlay known keys from ``values``.

        Unknown keys are ignored. Invalid values are logged and leave the
        current setting in place.
        """
        if "max_depth" in values:
            max_depth = _positive_int(values["max_depth"])
            if max_depth is None:
                logger.warning("Ignoring invalid max_depth %r from %s", values["max_depth"], source)
            else:
                self.max_depth = max_depth
        if "log_level" in values:
            level = _level_name(values["log_level"])
            if level is None:
                logger.warning("Ignoring unknown log_level %r from %s", values["log_level"], source)
            else:
                self.log_level = level
        if "json_logs" in values:
            if isinstance(values["json_logs"], bool):
                self.json_logs = values["json_logs"]
            else:
                logger.warning("Ignoring non-boolean json_logs %r from %s", values["json_logs"], source)

    @classmethod
    def load(cls, path: Path | None = None) -> "HistoryConfig":
        """Build a configuration from defaults, a JSON file and the environment.

        Parameters
        ----------
        path:
            Explicit configuration file. Defaults to ``~/.filehistory/config.json``.

        Returns
        -------
        The merged configuration. Environment variables win over the file.
        """
        config = cls()
        config_path = path or config.config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    values = json.load(f)
                if not isinstance(values, dict):
                    raise ValueError("top-level value must be an object")
                config.apply(values, source=str(config_path))
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable config %s: %s", config_path, e)

        env_values: Dict[str, Any] = {}
        if os.environ.get(ENV_MAX_DEPTH):
            env_values["max_depth"] = os.environ[ENV_MAX_DEPTH]
        if os.environ.get(ENV_LOG_LEVEL):
            env_values["log_level"] = os.environ[ENV_LOG_LEVEL]
        config.apply(env_values, source="environment")

        return config


def _positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if number >= 1 else None


def _level_name(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    name = value.strip().upper()
    # getLevelName maps registered names to their numeric level
    return name if isinstance(logging.getLevelName(name), int) else None


DEFAULT_CONFIG = HistoryConfig()
