##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Interface shared by the commands of the `workit` CLI.

A command is an object listed in `workit.cli.commands.ALL_COMMANDS`. It adds its
subparser to the top-level parser and binds `process_command` as the `func`
default, which `workit.main` calls with the parsed arguments. Nested commands,
like `database info`, implement the same interface and are attached by their
parent command instead.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace


class CommandEntryPoint(ABC):
    """
    A `workit` command or subcommand.

    Methods:
        add_parser: Attach this command's parser and bind its handler.
        process_command: Run the command for the parsed arguments.
    """

    @abstractmethod
    def add_parser(self, subparsers: ArgumentParser):
        """
        Attach this command's parser to `subparsers` and set its `func` default
        to `process_command`.

        Args:
            subparsers: The subparsers action of the parent parser.
        """
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `add_parser` method.")

    @abstractmethod
    def process_command(self, args: Namespace):
        """
        Run the command. Errors propagate to `workit.main`, which logs them and
        exits with status 1.

        Args:
            args: The parsed command line, including options of parent commands
                such as `database --backend`.
        """
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement a `process_command` method.")
