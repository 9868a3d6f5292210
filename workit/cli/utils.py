##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Utility functions to support Workit CLI command handlers.

These helpers build the per-entity subcommands of the `database` command from
the entity registry and turn the parsed filter options back into the filter
dictionaries understood by the storage backends.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from typing import Dict

from workit.cli.entity_registry import ENTITY_REGISTRY
from workit.utils import get_plural_of_entity


LOG = logging.getLogger("workit")


def apply_backend_override(args: Namespace):
    """
    Point the storage configuration at the backend requested with `--backend`, if any.

    Must run before the storage backend is first selected.

    Args:
        args: Parsed CLI arguments, possibly holding a `backend` attribute.
    """
    backend = getattr(args, "backend", None)
    if backend:
        from workit.config import configfile  # pylint: disable=import-outside-toplevel

        LOG.debug(f"Overriding the configured storage backend with '{backend}'.")
        configfile.CONFIG.storage.backend = backend


def setup_db_entity_subcommands(subcommand_parser: ArgumentParser, subcommand_name: str) -> Dict[str, ArgumentParser]:
    """
    Dynamically sets up subcommands for each entity type for a given subcommand.

    This function adds both singular (`<entity>`) and plural (`all-<entities>`) variants
    to support direct targeting and filter-based selection, respectively.

    Args:
        subcommand_parser (ArgumentParser): The parser to which entity subcommands should be added.
        subcommand_name (str): The name of the subcommand being configured (e.g., "get").

    Returns:
        A mapping from subcommand name to the corresponding ArgumentParser instance.
    """
    parser_map = {}

    for entity_key, config in ENTITY_REGISTRY.items():
        identifiers = config["identifiers"]
        ident_help = config["ident_help"].format(verb=subcommand_name)
        plural_name = get_plural_of_entity(entity_key)
        filters = config["filters"]

        # <entity> command
        singular = subcommand_parser.add_parser(
            entity_key,
            help=f"{subcommand_name.capitalize()} one or more {plural_name} by {identifiers}.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        singular.add_argument(
            "entity",
            type=int,
            nargs="+",
            help=ident_help,
        )
        parser_map[entity_key] = singular

        # all-<entities> command
        all_name = f"all-{plural_name}"
        all_parser = subcommand_parser.add_parser(
            all_name,
            help=f"{subcommand_name.capitalize()} all {plural_name} (supports filters).",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        for filt in filters:
            arg_name = filt["name"]
            all_parser.add_argument(
                f"--{arg_name.replace('_', '-')}",
                type=filt["type"],
                choices=filt.get("choices"),
                help=f"Filter by {arg_name.replace('_', ' ')}.",
            )
        parser_map[all_name] = all_parser

    return parser_map


def get_filters_for_entity(args: Namespace, entity_type: str) -> Dict:
    """
    Extracts filter arguments from parsed CLI input for a specific entity type.

    Args:
        args (Namespace): Parsed command-line arguments.
        entity_type (str): The entity type whose filter definitions should be used.

    Returns:
        A dictionary of filter argument names to their provided values. Returns an
            empty dictionary if the entity is invalid or no filter was given.
    """
    entity_config = ENTITY_REGISTRY.get(entity_type, None)
    if not entity_config:
        LOG.error(f"Invalid entity: '{entity_type}'.")
        return {}

    filter_keys = [filt["name"] for filt in entity_config.get("filters", [])]
    return {key: getattr(args, key) for key in filter_keys if getattr(args, key, None) is not None}
