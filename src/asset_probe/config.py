"""
Configuration management for Asset Probe.

The probe reports to a fixed endpoint by default. A YAML file or
environment variables may override the endpoint and the logging settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_REPORT_URL = "http://localhost:8000/api/v1/asset/useragent"

DEFAULT_CONFIG_PATHS = [
    Path("/etc/asset-probe/config.yaml"),
    Path.home() / ".config" / "asset-probe" / "config.yaml",
    Path("asset-probe.yaml"),
]

# YAML section name -> prefix of the flat field names it holds
SECTION_PREFIXES = {
    "report": "report_",
    "collection": "",
    "logging": "log_",
}

TIMEOUT_FIELDS = ("report_timeout", "command_timeout")


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""

    pass


def parse_timeout(name: str, value: Any) -> float | None:
    """
    Coerce a timeout setting to seconds.

    None and empty strings mean no timeout.

    Raises:
        ConfigError: If the value is not a positive number of seconds.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ConfigError(f"Invalid {name}: {value!r} (expected seconds or null)")
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid {name}: {value!r} (expected seconds or null)") from None
    if not seconds > 0:
        raise ConfigError(f"Invalid {name}: {value!r} (must be greater than 0)")
    return seconds


@dataclass
class Config:
    """
    Configuration container for Asset Probe.

    Priority (highest to lowest):
    1. Programmatic values passed to __init__
    2. Environment variables (prefixed with ASSET_PROBE_)
    3. Config file values
    4. Default values

    Timeouts default to None, meaning the HTTP request and the inventory
    commands block until they finish.
    """

    # Report settings
    report_url: str = DEFAULT_REPORT_URL
    report_timeout: float | None = None

    # Collection settings
    command_timeout: float | None = None
    storage_path: str = "/"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        for name in TIMEOUT_FIELDS:
            setattr(self, name, parse_timeout(name, getattr(self, name)))

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create config from a dictionary."""
        # Flatten nested sections: report.url -> report_url, logging.level -> log_level
        flat = {}
        for key, value in data.items():
            if isinstance(value, dict):
                prefix = SECTION_PREFIXES.get(key, "")
                for subkey, subvalue in value.items():
                    flat[f"{prefix}{subkey}"] = subvalue
            else:
                flat[key] = value

        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in flat.items() if k in known_fields}

        return cls(**filtered)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """
        Load configuration with full resolution order.

        Args:
            config_path: Explicit path to config file. If None, searches
                        default locations.

        Returns:
            Fully resolved Config instance.
        """
        base_config: dict[str, Any] = {}

        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    base_config = yaml.safe_load(f) or {}
        else:
            for path in DEFAULT_CONFIG_PATHS:
                if path.exists():
                    with open(path) as f:
                        base_config = yaml.safe_load(f) or {}
                    break

        config = cls.from_dict(base_config) if base_config else cls()
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "ASSET_PROBE_URL": "report_url",
            "ASSET_PROBE_REPORT_TIMEOUT": "report_timeout",
            "ASSET_PROBE_COMMAND_TIMEOUT": "command_timeout",
            "ASSET_PROBE_STORAGE_PATH": "storage_path",
            "ASSET_PROBE_LOG_LEVEL": "log_level",
            "ASSET_PROBE_LOG_FILE": "log_file",
        }
        for env_var, attr in env_mappings.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            if attr in TIMEOUT_FIELDS:
                setattr(self, attr, parse_timeout(env_var, value))
            else:
                setattr(self, attr, value)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "report": {
                "url": self.report_url,
                "timeout": self.report_timeout,
            },
            "collection": {
                "command_timeout": self.command_timeout,
                "storage_path": self.storage_path,
            },
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
            },
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
