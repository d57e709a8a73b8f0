"""Configuration loading and migration service.

Handles loading muxctl.yaml and migrating legacy keys to the current schema.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from muxctl.models.config import MuxConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "muxctl.yaml"
CONFIG_PATH_ENV = "MUXCTL_CONFIG"


class ConfigService:
    """Service for loading and managing muxctl configuration.

    Handles:
    - Loading config from muxctl.yaml
    - Validating against Pydantic schema
    - Migrating legacy keys
    - Saving updated config
    """

    def __init__(self, config_path: str | Path = DEFAULT_CONFIG_PATH):
        """Initialize the config service.

        Args:
            config_path: Path to the config file.
        """
        self.config_path = Path(config_path)
        self._config: MuxConfig | None = None

    def load(self) -> MuxConfig:
        """Load and validate configuration.

        Returns:
            Validated MuxConfig instance.
        """
        if not self.config_path.exists():
            logger.debug(f"Config file not found at {self.config_path}, using defaults")
            self._config = MuxConfig()
            return self._config

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Error reading config file: {e}, using defaults")
            self._config = MuxConfig()
            return self._config

        if not isinstance(raw_config, dict):
            logger.warning(f"Config file {self.config_path} is not a mapping, using defaults")
            self._config = MuxConfig()
            return self._config

        migrated = self._migrate_config(raw_config)

        try:
            self._config = MuxConfig(**migrated)
        except ValueError as e:
            logger.warning(f"Config validation error: {e}, using defaults")
            self._config = MuxConfig()

        return self._config

    def get_config(self) -> MuxConfig:
        """Get the current configuration.

        Loads from disk if not already loaded.
        """
        if self._config is None:
            return self.load()
        return self._config

    def reload(self) -> MuxConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()

    def save(self, config: MuxConfig | None = None) -> bool:
        """Save configuration to disk.

        Args:
            config: Config to save. Uses current config if not provided.

        Returns:
            True if save succeeded.
        """
        config = config or self._config
        if config is None:
            return False

        try:
            config_dict = config.model_dump(mode="json")
            with open(self.config_path, "w") as f:
                yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def _migrate_config(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Migrate legacy config keys to the current schema.

        Handles:
        - terminal_backend -> backend
        - timeout -> command_timeout
        - Unknown backend names (fall back to auto)

        Args:
            raw: Raw config dictionary from YAML.

        Returns:
            Migrated config dictionary.
        """
        migrated: dict[str, Any] = {}

        backend = raw.get("backend", raw.get("terminal_backend"))
        if backend is not None:
            if backend in ("auto", "tmux", "psmux"):
                migrated["backend"] = backend
            else:
                logger.warning(f"Unknown backend '{backend}', defaulting to auto")
                migrated["backend"] = "auto"
        if "terminal_backend" in raw:
            logger.info("Config field 'terminal_backend' is deprecated, use 'backend'")

        timeout = raw.get("command_timeout", raw.get("timeout"))
        if timeout is not None:
            migrated["command_timeout"] = timeout

        if "operation_logging" in raw:
            migrated["operation_logging"] = raw["operation_logging"] or {}

        return migrated


# Module-level singleton
_config_service: ConfigService | None = None


def get_config_service(config_path: str | Path | None = None) -> ConfigService:
    """Get the global config service instance.

    Args:
        config_path: Path to config file (only used on first call). Falls back
            to $MUXCTL_CONFIG, then muxctl.yaml in the working directory.

    Returns:
        ConfigService singleton.
    """
    global _config_service
    if _config_service is None:
        if config_path is None:
            config_path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        _config_service = ConfigService(config_path)
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (for testing)."""
    global _config_service
    _config_service = None
