##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module defines the `DatabaseInfoCommand` class, which implements the
`database info` subcommand for the Workit CLI.

The `database info` subcommand provides users with summary details about the
currently active storage backend and its contents. This includes backend type,
version, masked connection information, per-entity counts and a preview of
stored records.
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from workit.cli.commands.command_entry_point import CommandEntryPoint
from workit.cli.utils import apply_backend_override
from workit.db_scripts.workit_db import WorkitDatabase


class DatabaseInfoCommand(CommandEntryPoint):
    """
    Handles the `database info` subcommand, which prints details about the
    currently active storage backend.

    Methods:
        add_parser: Adds the `database info` command to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `database info` subcommand parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `database info`
                subcommand parser will be added.
        """
        parser = subparsers.add_parser(
            "info",
            help="Print information about the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        parser.set_defaults(func=self.process_command)

        parser.add_argument(
            "-m",
            "--max-preview",
            type=int,
            default=3,
            help="The maximum number of records of each type to preview in the output.",
        )

    def process_command(self, args: Namespace):
        """
        Print information about the database to the console.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        apply_backend_override(args)
        workit_db = WorkitDatabase()
        workit_db.info(max_preview=args.max_preview)
