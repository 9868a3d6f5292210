##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Workit CLI Commands Package.

This package defines all top-level and subcommand implementations for the Workit
command-line interface. Each module encapsulates the logic and argument parsing
for a distinct Workit command, following a consistent structure built around the
`CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    database: Implements the `database` command for inspecting and flushing the storage backend.
"""

from workit.cli.commands.database import DatabaseCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    DatabaseCommand(),
]
