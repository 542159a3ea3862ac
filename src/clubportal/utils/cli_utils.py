"""
Utility functions and decorators for CLI argument handling.
"""

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from clubportal.config.types import AppConfig
from clubportal.models.club import ClubId


@dataclass
class CLIContext:
    """Context object for CLI command execution."""
    args: argparse.Namespace
    logger: logging.Logger
    config: AppConfig
    parser: argparse.ArgumentParser

class CommandCategory(Enum):
    """Categories for organizing commands."""
    SESSION = auto()
    BROWSE = auto()
    MEMBERSHIP = auto()
    MANAGE = auto()

@dataclass
class CommandMetadata:
    """Metadata for command registration."""
    name: str
    help_text: str
    category: CommandCategory
    handler: Callable[[CLIContext], int]
    options: list[dict[str, Any]]

def parse_club_id(value: str) -> ClubId:
    """Club ids are integers in the bundled dataset; anything else stays text."""
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        return value

class CLIOptionFactory:
    """Factory for creating common CLI options with consistent validation."""

    @staticmethod
    def create_format_option() -> dict[str, Any]:
        return {
            'name': '--format',
            'choices': ['text', 'json'],
            'default': 'text',
            'help': 'Output format: human-readable text or machine-readable JSON (default: text)'
        }

    @staticmethod
    def create_club_id_option() -> dict[str, Any]:
        return {
            'name': 'club_id',
            'type': parse_club_id,
            'help': 'Id of the club, as shown by the search command',
            'validator': lambda x: x != ''
        }

class CommandRegistry:
    """Registry for CLI commands with metadata."""

    _commands: dict[str, CommandMetadata] = {}
    _categories: dict[CommandCategory, list[str]] = {}

    @classmethod
    def register(cls,
                name: str,
                help_text: str,
                category: CommandCategory,
                options: list[dict[str, Any]] | None = None) -> Callable[[Callable[[CLIContext], int]], Callable[[CLIContext], int]]:
        """Register a command handler."""
        def decorator(handler: Callable[[CLIContext], int]) -> Callable[[CLIContext], int]:
            cls._commands[name] = CommandMetadata(
                name=name,
                help_text=help_text,
                category=category,
                handler=handler,
                options=options or []
            )

            if category not in cls._categories:
                cls._categories[category] = []
            if name not in cls._categories[category]:
                cls._categories[category].append(name)

            return handler
        return decorator

    @classmethod
    def get_command(cls, name: str) -> CommandMetadata | None:
        """Get command metadata by name."""
        return cls._commands.get(name)

    @classmethod
    def get_commands(cls) -> list[CommandMetadata]:
        """All registered commands in registration order."""
        return list(cls._commands.values())

    @classmethod
    def get_category_commands(cls, category: CommandCategory) -> list[str]:
        """Get all commands in a category."""
        return cls._categories.get(category, [])

class ArgumentValidator:
    """Validator for CLI arguments."""

    @staticmethod
    def validate_option(option: dict[str, Any], value: Any) -> bool:
        """Validate a single option value."""
        if 'validator' not in option:
            return True

        try:
            return bool(option['validator'](value))
        except (TypeError, ValueError):
            return False

    @staticmethod
    def validate_args(args: argparse.Namespace, command: CommandMetadata) -> list[str]:
        """Validate all arguments for a command."""
        errors = []

        for option in command.options:
            value = getattr(args, option['name'].lstrip('-').replace('-', '_'), None)
            if value is not None and not ArgumentValidator.validate_option(option, value):
                errors.append(f"Invalid value for {option['name']}: {value}")

        return errors

def add_common_options(parser: argparse.ArgumentParser) -> None:
    """Add common global options to a parser."""
    parser.add_argument(
        '--config-dir',
        help='Directory holding config.yaml (default: $CLUBPORTAL_CONFIG_DIR or ~/.clubportal)'
    )
    parser.add_argument(
        '--dev',
        action='store_true',
        help='Run in development mode with informational log output'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging output'
    )
    parser.add_argument(
        '--log-file',
        help='Path to write JSON log output (default: console only)'
    )

class CLIBuilder:
    """Builder for constructing CLI parsers with consistent formatting."""

    # Custom option fields that should not be passed to argparse
    _CUSTOM_FIELDS = {'validator'}

    def __init__(self, description: str):
        """Initialize CLI builder."""
        self.parser = argparse.ArgumentParser(prog='clubportal', description=description)
        self.subparsers = self.parser.add_subparsers(dest='command')
        add_common_options(self.parser)

    def add_command(self, command: CommandMetadata) -> None:
        """Add a command to the parser."""
        parser = self.subparsers.add_parser(command.name, help=command.help_text)

        for option in command.options:
            option_copy = option.copy()
            name = option_copy.pop('name')
            option_dict = {k: v for k, v in option_copy.items() if k not in self._CUSTOM_FIELDS}
            parser.add_argument(name, **option_dict)

        parser.set_defaults(func=command.handler)

    def build(self) -> argparse.ArgumentParser:
        """Build and return the parser."""
        return self.parser
