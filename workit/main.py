##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Main entry point into Workit's codebase.
"""

import logging
import sys
import traceback

from workit.cli.argparse_main import DEFAULT_LOG_LEVEL, build_main_parser
from workit.config import configfile
from workit.log_formatter import setup_logging
from workit.utils import get_yaml_var


LOG = logging.getLogger("workit")


def main():
    """
    Entry point for the Workit command-line interface (CLI) operations.

    This function sets up the argument parser, handles command-line arguments,
    initializes logging, and executes the appropriate function based on the
    provided command. Any error raised by a command is logged and turned into
    a non-zero exit code.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    log_level = args.level or get_yaml_var(configfile.CONFIG.logging, "level", DEFAULT_LOG_LEVEL)
    setup_logging(logger=LOG, log_level=log_level.upper(), colors=True)

    try:
        args.func(args)
    # Top of the program stack; every failure becomes an exit code.
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
