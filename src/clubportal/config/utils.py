"""Configuration utility functions."""

from copy import deepcopy
from pathlib import Path
from typing import Any
from typing import TypeVar


T = TypeVar('T', bound=dict[str, Any])

def deep_merge(base: T, override: T) -> T:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to override base values

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if (
            key in result and
            isinstance(result[key], dict) and
            isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result

def resolve_path(
    path: str | Path,
    base_dir: str | Path | None = None,
    create: bool = False
) -> Path:
    """Resolve path relative to base directory.

    Args:
        path: Path to resolve
        base_dir: Base directory for relative paths
        create: Whether to create the directory

    Returns:
        Resolved Path object
    """
    if isinstance(path, str):
        path = Path(path).expanduser()

    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir).expanduser() / path

    if create:
        path.mkdir(parents=True, exist_ok=True)

    return path

def parse_positive_int(value: Any, name: str) -> int:
    """Coerce a configuration value to a positive integer.

    Raises:
        ValueError: If value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid {name}: {value!r}") from e
    if number <= 0:
        raise ValueError(f"Invalid {name}: must be positive, got {number}")
    return number
