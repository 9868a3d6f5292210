##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Used to store the application configuration.

The `config` package provides functionality for managing and configuring the storage
backend and logging of the Workit application. It serves as the central hub for
loading, processing, and utilizing configuration data defined in the `app.yaml` file
and in environment variables.

Modules:
    config_filepaths.py: Constants for the locations of configuration files.
    configfile.py: Handles the loading and processing of application configuration files
        and environment variable overrides.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from workit.utils import mask_connection_string, nested_dict_to_namespaces


CONFIG_SECTIONS: List[str] = ["storage", "logging"]


# Pylint complains that there's too few methods here but this class might
# be useful if we ever need to do extra stuff with the configuration so we'll
# ignore it for now
class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all Workit config settings in one place.
    Regardless of the config data loading method, this class is meant to
    standardize config data retrieval throughout all parts of Workit.

    Attributes:
        storage (Optional[SimpleNamespace]): A namespace containing storage backend settings.
        logging (Optional[SimpleNamespace]): A namespace containing logging settings.

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The dictionary may include the keys "storage" and "logging", each of
                which is converted into a `SimpleNamespace` and assigned to the
                corresponding attribute of the Config instance.
        """
        self.storage: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied `storage` and `logging` attributes.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({section: copy(self.__dict__[section]) for section in CONFIG_SECTIONS})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            str: A string containing the values of the `storage` and `logging` attributes.
                The database URL and MongoDB URI are shown with their passwords masked.
        """
        formatted_str = "config:"
        for name in CONFIG_SECTIONS:
            attr = getattr(self, name)
            if attr is not None:
                items = (
                    f"    {k}: {mask_connection_string(v) if isinstance(v, str) else v!r}"
                    for k, v in attr.__dict__.items()
                )
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in CONFIG_SECTIONS:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The keywords are optional
                pass
