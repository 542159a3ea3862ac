"""Configuration settings for the club portal."""

import os
from pathlib import Path
from typing import Any

import yaml

from clubportal.config.env import EnvConfig
from clubportal.config.types import AppConfig
from clubportal.config.types import GlobalConfig
from clubportal.config.utils import deep_merge
from clubportal.config.utils import parse_positive_int
from clubportal.config.utils import resolve_path
from clubportal.error_codes import ErrorCode
from clubportal.exceptions import ConfigError


class ConfigurationManager:
    """Centralized configuration management with caching."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config: AppConfig | None = None
        self._config_path: Path | None = None
        self._initialized = True

    @property
    def config(self) -> AppConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config() first.")
        return self._config

    def load_config(self, config_dir: str | None = None, dev_mode: bool = False, verbose: bool = False) -> AppConfig:
        """Load configuration with caching."""
        if self._config is not None:
            return self._config

        self._config_path = _get_config_path(config_dir)
        global_config = _load_global_config(self._config_path)

        logging_config = global_config['logging']
        try:
            message_timeout_ms = parse_positive_int(global_config['message_timeout_ms'], 'message_timeout_ms')
            for key in ('max_size', 'backup_count'):
                logging_config[key] = parse_positive_int(logging_config.get(key), f'logging.{key}')
        except ValueError as e:
            raise ConfigError(str(e), {"config_dir": str(self._config_path)}) from e

        if verbose:
            log_level = logging_config['verbose_level']
        elif dev_mode:
            log_level = logging_config['dev_level']
        else:
            log_level = logging_config['default_level']

        storage = global_config['storage']
        self._config = AppConfig(
            global_config=global_config,
            config_dir=str(self._config_path),
            data_dir=str(resolve_path(storage['data_dir'])),
            db_file=storage['db_file'],
            seed_file=global_config.get('seed_file'),
            message_timeout_ms=message_timeout_ms,
            log_level=str(log_level).upper(),
            log_file=logging_config.get('file')
        )

        return self._config

    def reload_config(self) -> AppConfig:
        """Force reload configuration."""
        config_dir = str(self._config_path) if self._config_path else None
        self._config = None
        return self.load_config(config_dir)

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance."""
        cls._instance = None

def _get_config_path(config_dir: str | None = None) -> Path:
    """Get configuration directory path."""
    return resolve_path(
        config_dir or os.getenv("CLUBPORTAL_CONFIG_DIR", os.path.join('~', '.clubportal'))
    )

def _load_global_config(config_path: Path) -> GlobalConfig:
    """Load global configuration from YAML file and environment."""
    global_config = EnvConfig.get_global_config()

    config_file = config_path / "config.yaml"
    if config_file.exists():
        try:
            with open(config_file, encoding="utf-8") as f:
                loaded_config: Any = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to read configuration file: {e}",
                {"file": str(config_file)}
            ) from e

        if not isinstance(loaded_config, dict):
            raise ConfigError(
                "Configuration file must contain a mapping",
                {"file": str(config_file), "type": type(loaded_config).__name__}
            )

        global_config = deep_merge(global_config, loaded_config)

        # Relative paths in the file are relative to the config directory
        storage = global_config['storage']
        storage['data_dir'] = str(resolve_path(storage['data_dir'], config_path))
        if global_config.get('seed_file'):
            global_config['seed_file'] = str(resolve_path(global_config['seed_file'], config_path))

    # Explicitly set environment variables win over the file
    EnvConfig.update_config_from_env(global_config)

    if 'storage' not in global_config or 'db_file' not in global_config['storage']:
        raise ConfigError(
            "Storage configuration missing",
            {"config_dir": str(config_path)},
            code=ErrorCode.CONFIG_MISSING
        )

    return global_config

def load_config(config_dir: str | None = None, dev_mode: bool = False, verbose: bool = False) -> AppConfig:
    """Load configuration using the ConfigurationManager."""
    config_manager = ConfigurationManager()
    return config_manager.load_config(config_dir, dev_mode, verbose)
