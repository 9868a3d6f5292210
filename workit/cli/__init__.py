##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
The `cli` package contains the command-line interface of Workit.

Modules:
    argparse_main: Builds the main `workit` argument parser from every registered command.
    entity_registry: Describes the entity types the `database` subcommands operate on.
    utils: Helpers shared by the CLI command handlers.
    commands: The command implementations, one `CommandEntryPoint` per top-level command.
"""
