"""
Config system - Layered site configuration with validation.

Sources are merged with precedence (later overrides earlier):
1. Config files (YAML or JSON)
2. .env file (IOSITE_* keys)
3. Environment variables (IOSITE_* prefix)
4. Manual overrides

Nested keys use a double underscore in variable names:
IOSITE_SCHEDULE__TIMEZONE=UTC -> {"schedule": {"timezone": "UTC"}}
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from glob import glob
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import dotenv_values

from .faults import ConfigFault


DEFAULT_ENV_PREFIX = "IOSITE_"
DEFAULT_SCHEDULE_START = "2015-05-28T09:00:00-07:00"
DEFAULT_SCHEDULE_TIMEZONE = "America/Los_Angeles"


@dataclass(frozen=True)
class SiteConfig:
    """
    Read-only site configuration.

    Attributes:
        env: App environment: "dev", "stage" or "prod"
        client_id: OAuth client ID exposed to pages
        prefix: URL path prefix the site is mounted under, e.g. "/io15"
        dir: Base directory holding the templates directory
        templates_dir: Templates directory, relative to dir
        schedule_start: Conference start time
        schedule_timezone: IANA zone the start time is displayed in
    """

    env: str = "dev"
    client_id: str = ""
    prefix: str = ""
    dir: str = "."
    templates_dir: str = "templates"
    schedule_start: datetime = datetime.fromisoformat(DEFAULT_SCHEDULE_START)
    schedule_timezone: str = DEFAULT_SCHEDULE_TIMEZONE

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"

    @property
    def templates_path(self) -> Path:
        return Path(self.dir) / self.templates_dir

    @property
    def schedule_location(self) -> ZoneInfo:
        return ZoneInfo(self.schedule_timezone)


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Example:
        loader = ConfigLoader.load(["site.yaml"], env_file=".env")
        config = loader.site_config()
    """

    def __init__(self, env_prefix: str = DEFAULT_ENV_PREFIX):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from all sources.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)
            environ: Environment mapping (default: os.environ)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env(os.environ if environ is None else environ)

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        matches = sorted(glob(pattern))
        if not matches and not any(ch in pattern for ch in "*?["):
            raise ConfigFault(f"config file '{pattern}' not found", key="paths")

        for path_str in matches:
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                raise ConfigFault(f"unsupported config file type '{path.suffix}'", key="paths")

    def _load_json_file(self, path: Path):
        with open(path) as f:
            data = json.load(f)
        if data:
            self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        with open(path) as f:
            data = yaml.safe_load(f)
        if data:
            self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        if not Path(path).exists():
            return
        for key, value in dotenv_values(path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set_nested(key, value)

    def _load_from_env(self, environ):
        for key, value in environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert IOSITE_SCHEDULE__TIMEZONE to a nested dict entry."""
        parts = key[len(self.env_prefix):].lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def site_config(self) -> SiteConfig:
        """
        Validate merged data and build a SiteConfig.

        Recognized keys: env, prefix, dir, templates_dir, google.auth.client
        (or client_id), schedule.start, schedule.timezone.

        Raises:
            ConfigFault: If a value has the wrong type or cannot be parsed
        """
        defaults = SiteConfig()

        tz_name = self._string("schedule.timezone", defaults.schedule_timezone)
        try:
            ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigFault(f"unknown timezone '{tz_name}'", key="schedule.timezone")

        prefix = self._string("prefix", defaults.prefix)
        if prefix and not prefix.startswith("/"):
            raise ConfigFault(f"prefix '{prefix}' must start with '/'", key="prefix")

        client_id = self.get("google.auth.client")
        if client_id is None:
            client_id = self.get("client_id", defaults.client_id)

        return SiteConfig(
            env=self._string("env", defaults.env),
            client_id=str(client_id),
            prefix=prefix.rstrip("/"),
            dir=self._string("dir", defaults.dir),
            templates_dir=self._string("templates_dir", defaults.templates_dir),
            schedule_start=self._datetime("schedule.start", defaults.schedule_start),
            schedule_timezone=tz_name,
        )

    def _string(self, path: str, default: str) -> str:
        value = self.get(path, default)
        if isinstance(value, (dict, list)):
            raise ConfigFault(f"'{path}' must be a string, got {type(value).__name__}", key=path)
        return str(value)

    def _datetime(self, path: str, default: datetime) -> datetime:
        value = self.get(path, default)
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                raise ConfigFault(f"'{path}' is not an RFC3339 timestamp: {value!r}", key=path)
        if not isinstance(value, datetime):
            raise ConfigFault(f"'{path}' must be a timestamp, got {type(value).__name__}", key=path)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> dict:
        """Export merged config as dictionary."""
        return self.config_data.copy()


def load_config(
    paths: Optional[list[str]] = None,
    env_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SiteConfig:
    """Shortcut for ConfigLoader.load(...).site_config()."""
    return ConfigLoader.load(paths, env_file=env_file, overrides=overrides).site_config()
