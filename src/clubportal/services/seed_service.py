"""Static seed dataset loading."""

import json
import os
from typing import Any

from clubportal.config.types import SeedClub
from clubportal.config.validation import validate_seed_clubs
from clubportal.exceptions import ConfigError
from clubportal.models.club import Club
from clubportal.utils.logging_utils import EnhancedLoggerMixin


def default_seed_path() -> str:
    """Path of the dataset bundled with the package."""
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data', 'clubs.json')


class SeedService(EnhancedLoggerMixin):
    """Provides the initial club list for a fresh store."""

    def __init__(self, seed_file: str | None = None, records: list[SeedClub] | None = None):
        """Initialize service.

        Args:
            seed_file: JSON file holding the seed dataset (bundled one by default)
            records: Already decoded records, used instead of a file
        """
        super().__init__()
        self.seed_file = seed_file or default_seed_path()
        self._records = records

    def load_records(self) -> list[SeedClub]:
        """
        Read and validate the seed records.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if self._records is not None:
            records: Any = self._records
        else:
            try:
                with open(self.seed_file, encoding="utf-8") as f:
                    records = json.load(f)
            except FileNotFoundError as e:
                raise ConfigError(
                    f"Seed file not found: {self.seed_file}",
                    {"seed_file": self.seed_file}
                ) from e
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(
                    f"Unable to read seed file: {e!s}",
                    {"seed_file": self.seed_file}
                ) from e

        validate_seed_clubs(records)
        return records

    def seed_clubs(self) -> list[Club]:
        """Fresh club list, every club starting with an empty roster."""
        clubs = [Club.from_seed(record) for record in self.load_records()]
        self.info("Seeded club store", clubs=len(clubs), source=self.seed_file if self._records is None else "inline")
        return clubs
