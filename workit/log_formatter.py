##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""This module handles setting up logging in Workit."""

import logging
import sys

import coloredlogs


FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(message)s",
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(module)s: %(lineno)d] %(message)s",
}


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Setup and configure Python logging.

    Args:
        logger: A logging.Logger object.
        log_level: Logger level.
        colors: If True use colored logs.
    """
    fmt = FORMATS["DEBUG"] if log_level == "DEBUG" else FORMATS["DEFAULT"]
    formatter = logging.Formatter(fmt)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False

    if colors is True:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt)
