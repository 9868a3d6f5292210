##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module defines the `DatabaseCommand` class, which provides CLI subcommands
for interacting with the storage backend of the Workit application. It supports
commands for inspecting, retrieving, and flushing the stored users, services,
jobs, applications, orders and reviews.

The commands are registered under the `database` top-level command and integrated
into Workit's argument parser system.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from workit.cli.commands.command_entry_point import CommandEntryPoint
from workit.cli.commands.database.flush import DatabaseFlushCommand
from workit.cli.commands.database.get import DatabaseGetCommand
from workit.cli.commands.database.info import DatabaseInfoCommand


LOG = logging.getLogger("workit")


class DatabaseCommand(CommandEntryPoint):
    """
    Handles `database` CLI commands for interacting with Workit's database.

    Attributes:
        info_command (cli.commands.database.info.DatabaseInfoCommand): Handles the `database info` subcommand.
        get_command (cli.commands.database.get.DatabaseGetCommand): Handles the `database get` subcommand.
        flush_command (cli.commands.database.flush.DatabaseFlushCommand): Handles the `database flush` subcommand.

    Methods:
        add_parser: Adds the `database` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def __init__(self):
        """
        Initialize the `DatabaseCommand` instance and its subcommand handlers.
        """
        self.info_command = DatabaseInfoCommand()
        self.get_command = DatabaseGetCommand()
        self.flush_command = DatabaseFlushCommand()

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `database` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `database` command parser will be added.
        """
        database: ArgumentParser = subparsers.add_parser(
            "database",
            help="Interact with Workit's database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        database.set_defaults(func=self.process_command)

        database.add_argument(
            "-b",
            "--backend",
            type=str,
            default=None,
            help="Use this storage backend (memory, mongodb, sql) instead of the configured one.",
        )

        database_commands: ArgumentParser = database.add_subparsers(dest="commands", required=True)

        self.info_command.add_parser(database_commands)
        self.get_command.add_parser(database_commands)
        self.flush_command.add_parser(database_commands)

    def process_command(self, args: Namespace):
        """
        This method doesn't do anything as the subcommands each have logic
        for processing their respective commands. This still has to be implemented
        as we inherit from CommandEntryPoint.

        Args:
            args: An argparse Namespace containing user arguments.
        """
