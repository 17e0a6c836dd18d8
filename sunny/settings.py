"""Settings for native binding resolution.

Layers (later wins, dicts deep-merge):
- User global (~/.sunny/settings.yaml)
- Project (.sunny/settings.yaml)
- Environment (SUNNY_BINDING_DIR, SUNNY_LOG_PATH, SUNNY_LOG_LEVEL)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field

logger = logging.getLogger(__name__)

# env var -> (section, key)
ENV_OVERRIDES = {
    "SUNNY_BINDING_DIR": ("binding", "directory"),
    "SUNNY_LOG_PATH": ("logging", "path"),
    "SUNNY_LOG_LEVEL": ("logging", "level"),
}


class BindingSettings(BaseModel):
    """Where and how native binaries are looked up."""

    directory: Path | None = Field(None, description="Directory searched for local binaries (default: package dir)")
    product: str = Field("sunny", description="Binary name prefix")


class LoggingSettings(BaseModel):
    """JSONL log sink configuration."""

    path: str = Field("./sunny.log.jsonl", description="JSONL log file")
    level: str = Field("INFO", description="Root log level")


class SunnySettings(BaseModel):
    binding: BindingSettings = Field(default_factory=BindingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two config dicts (overlay takes precedence)."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class SettingsManager:
    """Loads settings across user/project/environment scopes."""

    def __init__(self, sunny_dir: Path | None = None, user_dir: Path | None = None, environ=None):
        """Initialize settings manager with standard paths.

        Args:
            sunny_dir: Project settings directory (for testing). Defaults to .sunny in cwd.
            user_dir: User settings directory (for testing). Defaults to ~/.sunny.
            environ: Environment mapping (for testing). Defaults to os.environ.
        """
        if sunny_dir is None:
            sunny_dir = Path(".sunny")
        if user_dir is None:
            user_dir = Path.home() / ".sunny"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = sunny_dir / "settings.yaml"
        self.environ = os.environ if environ is None else environ

    def load(self) -> SunnySettings:
        """Merge all scopes into validated settings."""
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file):
            merged = deep_merge(merged, self._read_settings(path))
        merged = deep_merge(merged, self._env_settings())
        return SunnySettings.model_validate(merged)

    def _env_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for var, (section, key) in ENV_OVERRIDES.items():
            if value := self.environ.get(var):
                settings.setdefault(section, {})[key] = value
        return settings

    def _read_settings(self, path: Path) -> dict[str, Any]:
        """Read a settings file; missing or malformed files count as empty."""
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.warning(f"Ignoring {path}: expected a mapping, got {type(data).__name__}")
            return {}
        return data
