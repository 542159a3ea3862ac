"""Environment variable handling for configuration."""

import os
from typing import Any

from clubportal.config.types import GlobalConfig
from clubportal.config.types import LoggingConfig
from clubportal.config.types import StorageConfig


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to configuration paths
    ENV_MAPPING = {
        'CLUBPORTAL_DATA_DIR': ('storage', 'data_dir'),
        'CLUBPORTAL_DB_FILE': ('storage', 'db_file'),
        'CLUBPORTAL_SEED_FILE': ('seed_file',),
        'CLUBPORTAL_MESSAGE_TIMEOUT_MS': ('message_timeout_ms',),
        'CLUBPORTAL_LOG_LEVEL': ('logging', 'default_level'),
        'CLUBPORTAL_LOG_FILE': ('logging', 'file'),
        'CLUBPORTAL_LOG_MAX_SIZE': ('logging', 'max_size'),
        'CLUBPORTAL_LOG_BACKUP_COUNT': ('logging', 'backup_count'),
    }

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple, value: Any) -> None:
        """Set value in nested dictionary using path tuple."""
        current = config
        for part in path[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.

        Environment values win over values loaded from config.yaml.

        Args:
            config: Configuration dictionary to update
        """
        for env_var, path in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is not None:
                cls._set_nested_value(config, path, value)

    @classmethod
    def get_storage_config(cls) -> StorageConfig:
        """Get storage configuration from environment."""
        return {
            'data_dir': cls.get_env_value('CLUBPORTAL_DATA_DIR', os.path.join('~', '.clubportal')),
            'db_file': cls.get_env_value('CLUBPORTAL_DB_FILE', 'clubportal.db')
        }

    @classmethod
    def get_logging_config(cls) -> LoggingConfig:
        """Get logging configuration from environment."""
        return {
            'dev_level': cls.get_env_value('CLUBPORTAL_DEV_LOG_LEVEL', 'INFO'),
            'verbose_level': cls.get_env_value('CLUBPORTAL_VERBOSE_LOG_LEVEL', 'DEBUG'),
            'default_level': cls.get_env_value('CLUBPORTAL_LOG_LEVEL', 'WARNING'),
            'file': cls.get_env_value('CLUBPORTAL_LOG_FILE'),
            'max_size': cls.get_env_value('CLUBPORTAL_LOG_MAX_SIZE', 10),
            'backup_count': cls.get_env_value('CLUBPORTAL_LOG_BACKUP_COUNT', 5)
        }

    @classmethod
    def get_global_config(cls) -> GlobalConfig:
        """Get global configuration from environment."""
        return {
            'storage': cls.get_storage_config(),
            'seed_file': cls.get_env_value('CLUBPORTAL_SEED_FILE'),
            'message_timeout_ms': cls.get_env_value('CLUBPORTAL_MESSAGE_TIMEOUT_MS', 2500),
            'logging': cls.get_logging_config(),
            'error_aggregation': {
                'enabled': True,
                'error_threshold': 5
            }
        }
