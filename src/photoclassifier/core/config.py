"""
Configuration loader with environment variable support.

Settings are layered, later layers winning:
1. Built-in defaults (DEFAULTS below)
2. config/default.yaml
3. config/{PHOTOCLASSIFIER_ENV}.yaml
4. PHOTOCLASSIFIER_<SECTION>_<KEY> environment variables

Environment values are read as YAML scalars, so "true", "192" and
"[Cat, Dog]" become a bool, an int and a list.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .labels import BAR_PALETTE, CLASSES, TRACK_COLOR

logger = logging.getLogger(__name__)

ENV_PREFIX = "PHOTOCLASSIFIER_"
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"

DEFAULTS: dict[str, Any] = {
    "app": {"name": "PhotoClassifier", "debug": False},
    "model": {"path": "models/model.tflite", "size": 224, "threads": None},
    "labels": list(CLASSES),
    "camera": {"source": 0, "backend": "CAP_ANY", "warmup": 5},
    "display": {
        "scale": 3.0,
        "palette": list(BAR_PALETTE),
        "track": TRACK_COLOR,
        "radius": 15,
        "height": 50,
    },
    "logging": {"level": "INFO", "file": None},
}


def merge(base: dict, override: dict) -> dict:
    """Return base updated with override, merging nested sections."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def parse_env_value(raw: str) -> Any:
    """Interpret an environment string as a YAML scalar or flow list."""
    if raw == "":
        return raw
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Collect PHOTOCLASSIFIER_* variables into a config fragment.

    The first word after the prefix names the section and the rest is the
    key inside it, so PHOTOCLASSIFIER_MODEL_PATH sets model.path. A single
    word (PHOTOCLASSIFIER_LABELS) replaces a top-level entry.
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}

    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX) or name == f"{ENV_PREFIX}ENV":
            continue

        section, _, key = name[len(ENV_PREFIX) :].lower().partition("_")
        value = parse_env_value(raw)
        if not key:
            overrides[section] = value
            continue

        if not isinstance(overrides.get(section), dict):
            overrides[section] = {}
        overrides[section][key] = value

    return overrides


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.debug(f"No configuration file at {path}")
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    logger.debug(f"Loaded configuration from {path}")
    return data


class Config:
    """
    Layered application configuration.

    Usage:
        config = Config()
        size = config.get('model.size', 224)
        display = config['display']
    """

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory holding default.yaml. Defaults to the project config/
        """
        self.config_dir = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
        self.env = "development"
        self._config: dict[str, Any] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read the files and the environment."""
        self.env = os.getenv(f"{ENV_PREFIX}ENV", "development")

        config = copy.deepcopy(DEFAULTS)
        config = merge(config, _read_yaml(self.config_dir / "default.yaml"))
        config = merge(config, _read_yaml(self.config_dir / f"{self.env}.yaml"))
        self._config = merge(config, env_overrides())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated path like 'model.path' or 'display.scale'
            default: Returned when any part of the path is missing
        """
        value: Any = self._config
        for part in key.split("."):
            if not isinstance(value, dict) or value.get(part) is None:
                return default
            value = value[part]
        return value

    def __getitem__(self, key: str) -> Any:
        """Get top-level configuration section."""
        return self._config.get(key, {})

    @property
    def as_dict(self) -> dict[str, Any]:
        """Independent copy of the merged configuration."""
        return copy.deepcopy(self._config)
