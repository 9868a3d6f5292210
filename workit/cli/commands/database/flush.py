##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Implements the `database flush` subcommand for the Workit CLI, which removes
every record from the storage backend.
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from workit.cli.commands.command_entry_point import CommandEntryPoint
from workit.cli.utils import apply_backend_override
from workit.db_scripts.workit_db import WorkitDatabase


class DatabaseFlushCommand(CommandEntryPoint):
    """
    Handles the `database flush` subcommand.

    Methods:
        add_parser: Adds the `database flush` command to the CLI parser.
        process_command: Flushes the database, asking for confirmation unless forced.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `database flush` subcommand parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `database flush`
                subcommand parser will be added.
        """
        parser = subparsers.add_parser(
            "flush",
            help="Remove every record from the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        parser.set_defaults(func=self.process_command)

        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Flush without asking for confirmation.",
        )

    def process_command(self, args: Namespace):
        """
        Flush the database.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        apply_backend_override(args)
        WorkitDatabase().flush(force=args.force)
