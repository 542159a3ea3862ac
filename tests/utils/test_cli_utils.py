"""Tests for CLI registry helpers."""

import argparse

from clubportal.utils.cli_utils import ArgumentValidator
from clubportal.utils.cli_utils import CLIBuilder
from clubportal.utils.cli_utils import CLIOptionFactory
from clubportal.utils.cli_utils import CommandCategory
from clubportal.utils.cli_utils import CommandMetadata
from clubportal.utils.cli_utils import CommandRegistry
from clubportal.utils.cli_utils import parse_club_id


def test_registered_commands():
    """Test that the CLI module registers every command."""
    import clubportal.cli  # noqa: F401

    names = [command.name for command in CommandRegistry.get_commands()]
    assert names == ['login', 'logout', 'whoami', 'search', 'show', 'join', 'list', 'reset']
    assert CommandRegistry.get_category_commands(CommandCategory.SESSION) == ['login', 'logout', 'whoami']
    assert CommandRegistry.get_category_commands(CommandCategory.MANAGE) == ['reset']
    assert CommandRegistry.get_command('missing') is None


def test_parse_club_id():
    assert parse_club_id("12") == 12
    assert parse_club_id("x-1") == "x-1"


def test_argument_validator():
    """Test custom validators on options."""
    command = CommandMetadata(
        name='show',
        help_text='Show',
        category=CommandCategory.BROWSE,
        handler=lambda ctx: 0,
        options=[CLIOptionFactory.create_club_id_option()]
    )
    assert ArgumentValidator.validate_args(argparse.Namespace(club_id=3), command) == []
    errors = ArgumentValidator.validate_args(argparse.Namespace(club_id=''), command)
    assert errors == ["Invalid value for club_id: "]


def test_builder_strips_custom_fields():
    """Test that validator entries are not passed to argparse."""
    command = CommandMetadata(
        name='show',
        help_text='Show',
        category=CommandCategory.BROWSE,
        handler=lambda ctx: 0,
        options=[CLIOptionFactory.create_club_id_option(), CLIOptionFactory.create_format_option()]
    )
    builder = CLIBuilder(description='test')
    builder.add_command(command)

    args = builder.build().parse_args(['show', '5', '--format', 'json'])
    assert args.club_id == 5
    assert args.format == 'json'
    assert args.func is command.handler
