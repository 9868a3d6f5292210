##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module provides functionality for managing and loading application configuration
files, default settings, and environment variable overrides. It includes utilities for
locating, reading, and processing the `app.yaml` file.

It houses the `CONFIG` object that's used throughout Workit's codebase.
"""
import logging
import os
from typing import Dict, Optional

from workit.config import Config
from workit.config.config_filepaths import APP_FILENAME, WORKIT_HOME
from workit.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

CONFIG: Optional[Config] = None

TRUTHY_VALUES = ("1", "true", "yes", "on")

# Environment variable -> (config section, key, is a boolean flag)
ENV_OVERRIDES = {
    "WORKIT_STORAGE_BACKEND": ("storage", "backend", False),
    "DATABASE_URL": ("storage", "database_url", False),
    "USE_POSTGRES": ("storage", "use_postgres", True),
    "USE_MONGODB": ("storage", "use_mongodb", True),
    "MONGODB_URI": ("storage", "mongodb_uri", False),
    "MONGODB_DATABASE": ("storage", "mongodb_database", False),
    "USE_IN_MEMORY_MONGODB": ("storage", "use_in_memory_mongodb", True),
    "WORKIT_LOG_LEVEL": ("logging", "level", False),
}


def get_workit_home() -> str:
    """
    Get the Workit home directory, honoring the `WORKIT_HOME` environment variable.

    Returns:
        The path to the Workit home directory.
    """
    return os.environ.get("WORKIT_HOME", WORKIT_HOME)


def load_config(filepath: str) -> Dict:
    """
    Reads a Workit YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath (str): The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> str:
    """
    Locate the Workit application configuration file (`app.yaml`).

    This function searches for the configuration file based on a given directory or,
    if no directory is provided, uses a fallback sequence:
      1. Check for `app.yaml` in the current working directory.
      2. Check for `app.yaml` in the Workit home directory (`$WORKIT_HOME` or `~/.workit`).

    If a `path` is explicitly provided, the function checks only that directory
    for `app.yaml`.

    Args:
        path (str, optional): A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        path_app = os.path.join(get_workit_home(), APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_default_config() -> Dict:
    """
    Creates the default configuration used when no `app.yaml` exists.

    With these values the backend is picked automatically and ends up in memory
    unless an environment variable points at a database.

    Returns:
        Dict: A configuration dictionary with every default value.
    """
    return {
        "storage": {
            "backend": "auto",
            "database_url": None,
            "use_postgres": False,
            "use_mongodb": False,
            "mongodb_uri": "mongodb://localhost:27017",
            "mongodb_database": "workit",
            "use_in_memory_mongodb": False,
            "server_selection_timeout_ms": 5000,
            "echo_sql": False,
        },
        "logging": {"level": "INFO"},
    }


def load_defaults(config: Dict):
    """
    Fill every missing section and key of `config` with its default value.

    Args:
        config (Dict): The configuration dictionary to be updated with default values.
    """
    for section, defaults in get_default_config().items():
        if not isinstance(config.get(section), dict):
            config[section] = {}
        for key, value in defaults.items():
            config[section].setdefault(key, value)


def apply_env_overrides(config: Dict, environ: Optional[Dict[str, str]] = None):
    """
    Override configuration values with the matching environment variables.

    Boolean flags are true for "1", "true", "yes" or "on" (any case).

    Args:
        config (Dict): The configuration dictionary to update in place.
        environ (Dict[str, str], optional): The environment to read. Defaults to `os.environ`.
    """
    environ = os.environ if environ is None else environ
    for env_var, (section, key, is_flag) in ENV_OVERRIDES.items():
        raw_value = environ.get(env_var)
        if raw_value is None or raw_value == "":
            continue
        value = raw_value.strip().lower() in TRUTHY_VALUES if is_flag else raw_value
        LOG.debug(f"Overriding {section}.{key} with the {env_var} environment variable.")
        config.setdefault(section, {})[key] = value


def get_config(path: Optional[str] = None) -> Dict:
    """
    Loads a Workit configuration file and returns a dictionary containing the configuration data.

    This function locates the configuration file using the provided `path` or default search
    locations, loads the configuration data, applies default values where necessary, and
    finally applies environment variable overrides. A missing file is not an error.

    Args:
        path (str, optional): The directory path to search for the configuration file.
            If `None`, default search paths are used.

    Returns:
        A dictionary containing all the configuration data.
    """
    filepath: Optional[str] = find_config_file(path)
    if filepath is None:
        LOG.debug("No app.yaml found. Using the default configuration.")
        config: Dict = {}
    else:
        config = load_config(filepath)
    load_defaults(config)
    apply_env_overrides(config)
    return config


def initialize_config(path: Optional[str] = None) -> Config:
    """
    Initializes and returns the Workit configuration.

    This function can be used to explicitly re-read the configuration when needed,
    rather than relying on the module-level CONFIG constant.

    Args:
        path (Optional[str]): Path to look for configuration file

    Returns:
        The initialized configuration object
    """
    global CONFIG  # pylint: disable=global-statement

    CONFIG = Config(get_config(path))
    return CONFIG


initialize_config()
