"""
Command line interface for the club portal.
"""

import argparse
import json
import sys
from typing import Any

from tabulate import tabulate

from clubportal.config.error_aggregator import get_error_aggregator
from clubportal.config.error_aggregator import init_error_aggregator
from clubportal.config.logging import setup_logging
from clubportal.config.settings import ConfigurationManager
from clubportal.config.types import AppConfig
from clubportal.config.types import ErrorAggregationConfig
from clubportal.config.validation import validate_config
from clubportal.exceptions import ClubNotFoundError
from clubportal.exceptions import ClubPortalError
from clubportal.models.club import Club
from clubportal.models.club import ClubId
from clubportal.portal import ClubPortal
from clubportal.utils.cli_utils import ArgumentValidator
from clubportal.utils.cli_utils import CLIBuilder
from clubportal.utils.cli_utils import CLIContext
from clubportal.utils.cli_utils import CLIOptionFactory
from clubportal.utils.cli_utils import CommandCategory
from clubportal.utils.cli_utils import CommandRegistry
from clubportal.utils.logging_utils import get_logger


def _open_portal(ctx: CLIContext) -> ClubPortal:
    return ClubPortal.from_config(ctx.config)

def _report(portal: ClubPortal, ok: bool) -> int:
    """Print the status message left by an action and map it to an exit code."""
    if portal.message:
        print(portal.message, file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1

def _club_name(portal: ClubPortal, club_id: ClubId) -> str:
    """Name of a held club, which may no longer be in the store."""
    try:
        return portal.get_club(club_id).name
    except ClubNotFoundError:
        return "(removed)"

def _club_rows(portal: ClubPortal, clubs: list[Club]) -> list[list[Any]]:
    rows = []
    for club in clubs:
        joined = portal.joined_club_id(club.category) == club.id
        rows.append([club.id, club.name, club.category, club.views, "yes" if joined else ""])
    return rows

def _print_clubs(portal: ClubPortal, clubs: list[Club], output_format: str) -> None:
    if output_format == 'json':
        print(json.dumps([club.to_dict() for club in clubs], indent=2, ensure_ascii=False))
        return

    if not clubs:
        print("No clubs found")
        return

    headers = ["ID", "Name", "Category", "Views", "Joined"]
    print(tabulate(_club_rows(portal, clubs), headers=headers, tablefmt="psql"))

class SessionCommands:
    """Login and logout."""

    @staticmethod
    @CommandRegistry.register(
        name='login',
        help_text='Log in with your name and roll number',
        category=CommandCategory.SESSION,
        options=[
            {'name': 'name', 'help': 'Your name'},
            {'name': 'roll', 'help': 'Your roll number'}
        ]
    )
    def login(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            return _report(portal, portal.login(ctx.args.name, ctx.args.roll))

    @staticmethod
    @CommandRegistry.register(
        name='logout',
        help_text='Log out the current user',
        category=CommandCategory.SESSION
    )
    def logout(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            return _report(portal, portal.logout())

    @staticmethod
    @CommandRegistry.register(
        name='whoami',
        help_text='Show who is logged in',
        category=CommandCategory.SESSION
    )
    def whoami(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            if portal.current_user is None:
                print("Not logged in", file=sys.stderr)
                return 1
            print(portal.current_user.display_name)
            return 0

class BrowseCommands:
    """Searching and viewing clubs."""

    @staticmethod
    @CommandRegistry.register(
        name='search',
        help_text='Search clubs by name, most viewed first',
        category=CommandCategory.BROWSE,
        options=[
            {
                'name': 'query',
                'nargs': '?',
                'default': '',
                'help': 'Part of the club name (default: all clubs)'
            },
            CLIOptionFactory.create_format_option()
        ]
    )
    def search(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            if not portal.search(ctx.args.query):
                return _report(portal, False)
            _print_clubs(portal, portal.results, ctx.args.format)
            return 0

    @staticmethod
    @CommandRegistry.register(
        name='show',
        help_text='Show the details of a club',
        category=CommandCategory.BROWSE,
        options=[CLIOptionFactory.create_club_id_option()]
    )
    def show(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            if not portal.select_club(ctx.args.club_id):
                return _report(portal, False)

            club = portal.selected_club
            print(f"\n{club.name}")
            print("=" * 60)
            print(f"Category: {club.category}")
            print(f"Bulletin: {club.bulletin or '-'}")
            print(f"Contact: {club.contact or '-'}")
            print(f"Views: {club.views}")
            print(f"Members ({len(club.members)}):")
            for member in club.members:
                print(f"  - {member}")
            print("-" * 60)

            held_id = portal.joined_club_id(club.category)
            if held_id is None:
                print(f"Join with: clubportal join {club.id}")
            elif held_id == club.id:
                print("You are a member of this club")
            else:
                print(f"Already joined {_club_name(portal, held_id)} in {club.category}")
            return 0

class MembershipCommands:
    """Joining clubs and listing memberships."""

    @staticmethod
    @CommandRegistry.register(
        name='join',
        help_text='Join a club (one per category)',
        category=CommandCategory.MEMBERSHIP,
        options=[CLIOptionFactory.create_club_id_option()]
    )
    def join(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            return _report(portal, portal.join_club(ctx.args.club_id))

    @staticmethod
    @CommandRegistry.register(
        name='list',
        help_text='List the clubs you joined',
        category=CommandCategory.MEMBERSHIP,
        options=[CLIOptionFactory.create_format_option()]
    )
    def list_joined(ctx: CLIContext) -> int:
        with _open_portal(ctx) as portal:
            if portal.current_user is None:
                print("Login first", file=sys.stderr)
                return 1

            joined = portal.joined_clubs()
            if ctx.args.format == 'json':
                print(json.dumps(joined, indent=2, ensure_ascii=False))
                return 0

            if not joined:
                print("No clubs joined yet")
                return 0

            rows = []
            for category, club_id in joined.items():
                rows.append([category, club_id, _club_name(portal, club_id)])
            print(tabulate(rows, headers=["Category", "ID", "Name"], tablefmt="psql"))
            return 0

class ManageCommands:
    """Administrative commands."""

    @staticmethod
    @CommandRegistry.register(
        name='reset',
        help_text='Delete all stored state and reload the seed clubs',
        category=CommandCategory.MANAGE,
        options=[
            {
                'name': '--yes',
                'action': 'store_true',
                'help': 'Confirm the reset'
            }
        ]
    )
    def reset(ctx: CLIContext) -> int:
        if not ctx.args.yes:
            ctx.logger.error("Refusing to reset without --yes")
            return 1
        with _open_portal(ctx) as portal:
            portal.reset()
            print(f"Storage reset, {len(portal.clubs)} clubs loaded")
            return 0

def create_parser() -> argparse.ArgumentParser:
    """Create argument parser using the CLI builder."""
    builder = CLIBuilder(
        description='Club directory: log in, search clubs and join one club per category'
    )

    for command in CommandRegistry.get_commands():
        builder.add_command(command)

    return builder.build()

def _error_aggregation_config(config: AppConfig) -> ErrorAggregationConfig:
    settings = config.global_config.get('error_aggregation', {})
    return ErrorAggregationConfig(
        enabled=bool(settings.get('enabled', True)),
        error_threshold=int(settings.get('error_threshold', 5)),
        categorize_by=list(settings.get('categorize_by', ['service', 'message']))
    )

def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = ConfigurationManager().load_config(
            args.config_dir, dev_mode=args.dev, verbose=args.verbose
        )
        setup_logging(config, dev_mode=args.dev, verbose=args.verbose, log_file=args.log_file)
        logger = get_logger(__name__)
        validate_config(config)
    except ClubPortalError as e:
        setup_logging(dev_mode=args.dev, verbose=args.verbose)
        get_logger(__name__).error(f"Invalid configuration: {e}")
        return 1

    init_error_aggregator(_error_aggregation_config(config))

    ctx = CLIContext(
        args=args,
        logger=logger,
        config=config,
        parser=parser
    )

    command = CommandRegistry.get_command(args.command)
    if not command:
        logger.error(f"Unknown command: {args.command}")
        return 1

    errors = ArgumentValidator.validate_args(args, command)
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    try:
        return command.handler(ctx)
    except ClubPortalError as e:
        logger.error(f"Command {args.command} failed: {e}")
        return 1
    except Exception:
        logger.exception("Unhandled exception")
        return 1
    finally:
        get_error_aggregator().shutdown()

if __name__ == '__main__':
    sys.exit(main())
