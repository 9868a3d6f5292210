##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
The `database` command of the Workit CLI and its subcommands.

Modules:
    database: Defines `DatabaseCommand`, the `database` command group.
    flush: Implements `database flush`.
    get: Implements `database get`.
    info: Implements `database info`.
"""

from workit.cli.commands.database.database import DatabaseCommand


__all__ = ["DatabaseCommand"]
