##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Top-level argument parser of the `workit` command.

Every command registered in `workit.cli.commands.ALL_COMMANDS` contributes its
own subparser here. The only options owned by the top-level parser are the
version flag and the log level, which `workit.main` applies before any command
touches a storage backend.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from workit import VERSION
from workit.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DESCRIPTION = """Workit: inspect and manage the storage behind a freelance marketplace.

Users, services, jobs, applications, orders and reviews are kept in the backend
chosen by the `storage` section of app.yaml (memory, mongodb or sql)."""
EPILOG = """examples:
  workit database info
  workit database get all-services --status active
  workit -lvl DEBUG database -b sql flush -f

See workit <command> --help for the options of each command."""


class HelpParser(ArgumentParser):
    """
    Argument parser that shows the full usage on a bad command line, so a
    mistyped entity type or filter is followed by the list of valid ones.

    Methods:
        error: Print the error and the help, then exit with status 2.
    """

    def error(self, message: str):
        """
        Print the error and the help, then exit with status 2.

        Args:
            message: The error reported by argparse.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Build the `workit` parser with a subparser for every registered command.

    Returns:
        The parser. Parsed arguments carry `level` (None unless given) and the
        `func` of the selected command.
    """
    parser = HelpParser(
        prog="workit",
        description=DESCRIPTION,
        formatter_class=RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        metavar="LEVEL",
        help=f"Log level, one of {', '.join(LOG_LEVELS)} (case-insensitive). "
        f"Defaults to `logging.level` from app.yaml, or {DEFAULT_LOG_LEVEL}.",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
