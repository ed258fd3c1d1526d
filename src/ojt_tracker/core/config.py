"""Configuration management for OJT Tracker."""

import copy
import logging
import os
import secrets
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]
from jsonschema import ValidationError, validate  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "OJT_TRACKER_CONFIG"


class ConfigManager:
    """Manage application configuration."""

    DEFAULT_CONFIG = {
        "version": "1.0",
        "general": {
            "data_dir": "~/.ojt-tracker/data",
        },
        "tracking": {
            "default_required_hours": 500,
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
        "api": {
            "host": "localhost",
            "port": 8000,
            "workers": 1,
            "authentication": {
                "token_expiry_hours": 24,
                "secret_key": None,
                "cookie_name": "ojt_session",
            },
            "cors": {
                "enabled": True,
                "origins": ["http://localhost:3000", "http://localhost:5173"],
            },
            "compat": {
                "legacy_not_found_status": False,
            },
            "advanced": {
                "reload": False,
                "log_level": "info",
                "access_log": True,
            },
        },
    }

    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "general": {
                "type": "object",
                "properties": {
                    "data_dir": {"type": "string"},
                },
            },
            "tracking": {
                "type": "object",
                "properties": {
                    "default_required_hours": {"type": "number", "minimum": 0},
                },
            },
            "logging": {
                "type": "object",
                "properties": {
                    "level": {
                        "type": "string",
                        "enum": ["DEBUG", "INFO", "WARNING", "ERROR"],
                    },
                    "file": {"type": ["string", "null"]},
                },
            },
            "api": {
                "type": "object",
                "properties": {
                    "host": {"type": "string"},
                    "port": {"type": "integer", "minimum": 1, "maximum": 65535},
                    "workers": {"type": "integer", "minimum": 1, "maximum": 16},
                    "authentication": {
                        "type": "object",
                        "properties": {
                            "token_expiry_hours": {
                                "type": "integer",
                                "minimum": 1,
                                "maximum": 8760,
                            },
                            "secret_key": {"type": ["string", "null"]},
                            "cookie_name": {"type": "string", "minLength": 1},
                        },
                    },
                    "cors": {
                        "type": "object",
                        "properties": {
                            "enabled": {"type": "boolean"},
                            "origins": {
                                "type": "array",
                                "items": {"type": "string"},
                            },
                        },
                    },
                    "compat": {
                        "type": "object",
                        "properties": {
                            "legacy_not_found_status": {"type": "boolean"},
                        },
                    },
                    "advanced": {
                        "type": "object",
                        "properties": {
                            "reload": {"type": "boolean"},
                            "log_level": {"type": "string"},
                            "access_log": {"type": "boolean"},
                        },
                    },
                },
            },
        },
        "required": ["version"],
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. Defaults to $OJT_TRACKER_CONFIG,
                then ~/.ojt-tracker/config.yml
        """
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            config_path = (
                Path(env_path) if env_path else Path.home() / ".ojt-tracker" / "config.yml"
            )
        self.config_path = Path(config_path)
        self._config: dict[str, Any] = {}
        self._load_or_create()

    def _load_or_create(self) -> None:
        """Read the config file, writing defaults when there is none.

        Raises:
            ValueError: If the file fails validation. It is moved aside to
                ``config.yml.backup`` and replaced with defaults first.
        """
        if not self.config_path.exists():
            self.reset()
            return

        with open(self.config_path, encoding="utf-8") as f:
            stored = yaml.safe_load(f) or {}

        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        _merge_into(self._config, stored)
        try:
            self.validate()
        except ValueError as e:
            moved_to = self.config_path.with_suffix(".yml.backup")
            self.config_path.replace(moved_to)
            self.reset()
            logger.warning(f"Invalid config moved to {moved_to}: {e}")
            raise ValueError(
                f"Config validation failed, backed up to {moved_to}. Using defaults. Error: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'api.port')
            default: Default value if key not found or unset

        Returns:
            Configuration value or default

        Example:
            >>> config.get('tracking.default_required_hours')
            500
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation and save.

        Raises:
            ValueError: If configuration is invalid after setting

        Example:
            >>> config.set('api.port', 8080)
        """
        keys = key.split(".")
        previous = copy.deepcopy(self._config)
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
        try:
            self.validate()
        except ValueError:
            self._config = previous
            raise
        self.save()

    def validate(self) -> bool:
        """Validate configuration against schema.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            validate(instance=self._config, schema=self.CONFIG_SCHEMA)
            return True
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e.message}")

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self._config, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def reset(self) -> None:
        """Reset to default configuration."""
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save()

    def to_dict(self) -> dict[str, Any]:
        """Get a copy of the full configuration."""
        return copy.deepcopy(self._config)

    @property
    def data_dir(self) -> Path:
        """Resolved data directory."""
        return Path(self.get("general.data_dir", "~/.ojt-tracker/data")).expanduser()

    def ensure_api_secret_key(self) -> str:
        """Ensure API secret key exists, generate if needed.

        Returns:
            The API secret key
        """
        secret_key: Optional[str] = self.get("api.authentication.secret_key")
        if not secret_key:
            # 256 bits
            secret_key = secrets.token_urlsafe(32)
            self.set("api.authentication.secret_key", secret_key)
        return secret_key


def _merge_into(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Recursively overlay ``override`` onto ``base`` in place."""
    for key, value in override.items():
        nested = base.get(key)
        if isinstance(nested, dict) and isinstance(value, dict):
            _merge_into(nested, value)
        else:
            base[key] = value
