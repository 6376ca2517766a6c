"""Configuration management for linear-shorthand using YAML files."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml

from linear_shorthand.errors import ConfigurationError

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".linear-shorthand"
DEFAULT_TIMEOUT = 30.0


class Config:
    """Configuration manager using YAML file storage.

    Supports both local (directory-level) and global (user-level) configuration.
    Local config is stored in .linear-shorthand/config.yaml in the current directory.
    Global config is stored in ~/.linear-shorthand/config.yaml.

    When reading, values are looked up in local config first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"
        self._config: dict[str, Any] = self._load()

        # For local config, also load global config as fallback
        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    with open(global_config_file, "r") as f:
                        self._global_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        """Load configuration from YAML file.

        Returns:
            Configuration dictionary
        """
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config = yaml.safe_load(f) or {}
                logger.debug("Config loaded successfully", keys=list(config.keys()))
                return config
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", error=str(e))
            raise ConfigurationError(f"Failed to load config from {self.config_file}: {e}") from e

    def _save(self) -> None:
        """Save configuration to YAML file."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ConfigurationError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value, checking local config before global config."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        """Set a configuration value."""
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        """Remove a configuration value."""
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings, local taking precedence over global."""
        if self.is_global:
            logger.debug("Listing global config values", count=len(self._config))
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.

    Returns:
        Config instance
    """
    return Config(use_global=use_global)


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings handed to the workflow."""

    token: str | None
    data_dir: Path
    dry_run: bool = False
    timeout: float = DEFAULT_TIMEOUT

    def require_token(self) -> str:
        if not self.token:
            raise ConfigurationError(
                "LINEAR_API_KEY is not set. Export it or store it using:\n"
                "  lsh config set linear.token <token> --global"
            )
        return self.token


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def default_data_dir() -> Path:
    return Path.home() / CONFIG_DIR_NAME / "user-data"


def load_settings(config: Config | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from the config file, with environment variables taking precedence.

    ``LINEAR_API_KEY`` overrides ``linear.token`` and ``DRY_RUN=1`` forces a dry run.
    """
    config = config or get_config()
    env = os.environ if environ is None else environ

    data_dir = config.get("data_dir")
    settings = Settings(
        token=env.get("LINEAR_API_KEY") or config.get("linear.token"),
        data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(),
        dry_run=env.get("DRY_RUN") == "1" or _as_bool(config.get("dry_run", False)),
        timeout=float(config.get("timeout") or DEFAULT_TIMEOUT),
    )
    logger.debug("Settings loaded", data_dir=str(settings.data_dir), dry_run=settings.dry_run)
    return settings
