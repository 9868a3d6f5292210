##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Implements the `database get` subcommand for the Workit CLI.

This module defines the `DatabaseGetCommand` class, which enables operators to
retrieve records from the Workit database. Records can be queried individually
by id, all records of a given type can be listed (optionally filtered), or the
entire database can be dumped. Records are printed as JSON in their public form,
so passwords never appear in the output.

Main Capabilities:
- `database get <entity> <ids...>`: Retrieve one or more specific records.
- `database get all-<entities>`: Retrieve all records of a type with optional filters.
- `database get everything`: Retrieve every record of every type.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from typing import List

from workit.cli.commands.command_entry_point import CommandEntryPoint
from workit.cli.entity_registry import ENTITY_REGISTRY
from workit.cli.utils import apply_backend_override, get_filters_for_entity, setup_db_entity_subcommands
from workit.db_scripts.data_models import BaseDataModel
from workit.db_scripts.workit_db import WorkitDatabase
from workit.utils import get_plural_of_entity, get_singular_of_entity


LOG = logging.getLogger("workit")


class DatabaseGetCommand(CommandEntryPoint):
    """
    Handles the `database get` subcommand, which retrieves records from the
    Workit database based on entity type, ids, and filters.

    Methods:
        add_parser: Adds the `database get` parser and its subcommands.
        process_command: Dispatches the appropriate get operation based on CLI args.
        _print_items: Outputs records or logs a fallback message.
        _get_and_print: Fetches and prints specific records.
        _get_all_and_print: Fetches and prints filtered records of a type.
    """

    def add_parser(self, database_commands: ArgumentParser):  # pylint: disable=arguments-renamed
        """
        Add the `database get` subcommand parser to the CLI argument parser.

        Parameters:
            database_commands (ArgumentParser): The subparsers object to which the `database get`
                subcommand parser will be added.
        """
        db_get_parser = database_commands.add_parser(
            "get",
            help="Get information stored in the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        db_get_parser.set_defaults(func=self.process_command)

        # database get <entity> or all-<entities>
        get_subcommands_parser = db_get_parser.add_subparsers(dest="get_type", required=True)
        setup_db_entity_subcommands(get_subcommands_parser, "get")

        # database get everything
        get_subcommands_parser.add_parser(
            "everything",
            help="Get everything from the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )

    def _print_items(self, items: List[BaseDataModel], empty_message: str):
        """
        Print each record as redacted JSON, or log a message if there is nothing to print.

        Args:
            items: The records to print. Missing records (None) are skipped.
            empty_message: Message to log if no record was found.
        """
        found = [item for item in items if item is not None]
        if found:
            for item in found:
                print(item.to_json())
        else:
            LOG.info(empty_message)

    def _get_and_print(self, entity_type: str, identifiers: List[int], workit_db: WorkitDatabase):
        """
        Fetch and print specific records by type and id.

        Args:
            entity_type: The type of record to retrieve (e.g., "user", "job").
            identifiers: The ids to retrieve.
            workit_db: Interface to the Workit database.
        """
        items = [workit_db.get(entity_type, ident) for ident in identifiers]
        for ident, item in zip(identifiers, items):
            if item is None:
                LOG.warning(f"No {entity_type} found with id '{ident}'.")
        self._print_items(items, f"No {get_plural_of_entity(entity_type)} found for the given ids.")

    def _get_all_and_print(self, args: Namespace, entity_type: str, workit_db: WorkitDatabase):
        """
        Fetch and print all records of a given type, with optional filters.

        Args:
            args: Parsed CLI arguments.
            entity_type: The type of record to retrieve (e.g., "order").
            workit_db: Interface to the Workit database.
        """
        filters = get_filters_for_entity(args, entity_type)
        items = workit_db.get_all(entity_type, filters=filters)
        filter_msg = f" with filters {filters}" if filters else ""
        self._print_items(items, f"No {get_plural_of_entity(entity_type)}{filter_msg} found in the database.")

    def process_command(self, args: Namespace):
        """
        Process the `database get` command using the provided CLI arguments.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        apply_backend_override(args)
        workit_db = WorkitDatabase()
        get_type = args.get_type

        if get_type == "everything":
            self._print_items(workit_db.get_everything(), "Nothing found in the database.")
        elif get_type.startswith("all-"):
            entity_type = get_singular_of_entity(get_type[4:])
            self._get_all_and_print(args, entity_type, workit_db)
        elif get_type in ENTITY_REGISTRY:
            self._get_and_print(get_type, args.entity, workit_db)
        else:
            LOG.error(f"Unrecognized get_type: {get_type}")
