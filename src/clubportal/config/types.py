"""Configuration type definitions."""

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import TypedDict

from clubportal.config.utils import resolve_path


class LoggingConfig(TypedDict):
    """Logging configuration."""
    dev_level: str
    verbose_level: str
    default_level: str
    file: str | None
    max_size: int  # in MB
    backup_count: int

class StorageConfig(TypedDict):
    """Durable storage configuration."""
    data_dir: str
    db_file: str

class GlobalConfig(TypedDict):
    """Global configuration structure."""
    storage: StorageConfig
    seed_file: str | None
    message_timeout_ms: int
    logging: LoggingConfig
    error_aggregation: dict[str, Any]

class SeedClub(TypedDict):
    """Club record as found in the seed dataset."""
    id: int
    name: str
    category: str
    bulletin: str
    contact: str
    views: int

@dataclass
class ErrorAggregationConfig:
    """Error aggregation configuration."""
    enabled: bool = True
    error_threshold: int = 5
    categorize_by: list[str] = field(default_factory=lambda: ['service', 'message'])

@dataclass
class AppConfig:
    """Application configuration."""
    global_config: GlobalConfig
    config_dir: str = "config"
    data_dir: str = "data"
    db_file: str = "clubportal.db"
    seed_file: str | None = None
    message_timeout_ms: int = 2500
    log_level: str = "WARNING"
    log_file: str | None = None

    @property
    def db_path(self) -> str:
        """Absolute or data-dir relative path of the storage database."""
        if self.db_file == ":memory:":
            return self.db_file
        return str(resolve_path(self.db_file, self.data_dir))
