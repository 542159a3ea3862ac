"""Configuration validation utilities."""

import os
from pathlib import Path
from typing import Any

from clubportal.config.types import AppConfig
from clubportal.exceptions import ConfigError


REQUIRED_CLUB_FIELDS = ("id", "name", "category")

def validate_directories(config: AppConfig) -> None:
    """Validate and create required directories."""
    Path(config.data_dir).mkdir(parents=True, exist_ok=True)

    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

def validate_seed_club(index: int, record: Any) -> None:
    """Validate a single seed club record."""
    if not isinstance(record, dict):
        raise ConfigError(
            f"Invalid club record at position {index}",
            {"index": index, "type": type(record).__name__}
        )

    missing_fields = [name for name in REQUIRED_CLUB_FIELDS if name not in record]
    if missing_fields:
        raise ConfigError(
            f"Missing required fields in club record at position {index}",
            {"index": index, "missing_fields": missing_fields}
        )

    views = record.get("views", 0)
    if isinstance(views, bool) or not isinstance(views, int) or views < 0:
        raise ConfigError(
            f"Invalid views for club {record['id']}",
            {"index": index, "views": views}
        )

def validate_seed_clubs(records: Any) -> None:
    """
    Validate a seed dataset.

    Args:
        records: Decoded seed file content

    Raises:
        ConfigError: If the dataset is not a list of valid, uniquely
            identified club records
    """
    if not isinstance(records, list):
        raise ConfigError(
            "Seed dataset must be a list of clubs",
            {"type": type(records).__name__}
        )

    seen_ids: set[Any] = set()
    for index, record in enumerate(records):
        validate_seed_club(index, record)
        if record["id"] in seen_ids:
            raise ConfigError(
                f"Duplicate club id {record['id']}",
                {"index": index, "club_id": record["id"]}
            )
        seen_ids.add(record["id"])

def validate_config(config: AppConfig) -> None:
    """
    Validate configuration.

    Args:
        config: AppConfig object to validate

    Raises:
        ConfigError: If configuration is invalid
    """
    if config.message_timeout_ms <= 0:
        raise ConfigError(
            "Message timeout must be positive",
            {"message_timeout_ms": config.message_timeout_ms}
        )

    if config.seed_file and not Path(config.seed_file).is_file():
        raise ConfigError(
            f"Seed file not found: {config.seed_file}",
            {"seed_file": config.seed_file}
        )

    try:
        validate_directories(config)
    except OSError as e:
        raise ConfigError(
            f"Unable to prepare directories: {e!s}",
            {"data_dir": config.data_dir, "error_type": type(e).__name__}
        ) from e
