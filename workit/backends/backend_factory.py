##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Backend factory for selecting and instantiating storage backends in Workit.

This module defines the `WorkitBackendFactory` class, which serves as an abstraction
layer for managing available backend implementations. It supports dynamic selection
and instantiation of backends such as the in-memory, MongoDB or SQL backends, based
on configuration.

The factory maintains mappings of backend names and aliases, and raises a clear error
if an unsupported backend is requested.
"""

from typing import Any, Type

from workit.abstracts import WorkitBaseFactory
from workit.backends.memory.memory_backend import MemoryBackend
from workit.backends.mongo.mongo_backend import MongoBackend
from workit.backends.sql.sql_backend import SQLBackend
from workit.backends.storage_backend import StorageBackend
from workit.exceptions import BackendNotSupportedError


class WorkitBackendFactory(WorkitBaseFactory):
    """
    Factory class for managing and instantiating supported Workit backends.

    This subclass of `WorkitBaseFactory` handles registration, validation,
    and instantiation of storage backends (in-memory, MongoDB, SQL).

    Attributes:
        _registry (Dict[str, StorageBackend]): Maps canonical backend names to backend classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical backend names.

    Methods:
        register: Register a new backend class and optional aliases.
        list_available: Return a list of supported backend names.
        create: Instantiate a backend class by name or alias.
        get_component_info: Return metadata about a registered backend.
    """

    def _register_builtins(self):
        """
        Register built-in backend implementations.
        """
        self.register("memory", MemoryBackend, aliases=["in-memory", "in_memory"])
        self.register("mongodb", MongoBackend, aliases=["mongo"])
        self.register("sql", SQLBackend, aliases=["postgresql", "postgres", "sqlite"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of StorageBackend.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass StorageBackend.
        """
        if not issubclass(component_class, StorageBackend):
            raise TypeError(f"{component_class} must inherit from StorageBackend")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering backend plugins.

        Returns:
            The entry point namespace for Workit backend plugins.
        """
        return "workit.backends"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise an appropriate exception for unsupported components.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            BackendNotSupportedError: Always.
        """
        raise BackendNotSupportedError(msg)


backend_factory = WorkitBackendFactory()
