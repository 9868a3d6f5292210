##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
In-memory backend implementation for the Workit application.

This module defines the `MemoryBackend` class, which provides a concrete
implementation of the `StorageBackend` interface that keeps every record in
process memory. It is the fallback when no database is configured or reachable.
"""

import logging

from workit import VERSION
from workit.backends.memory.memory_stores import (
    MemoryApplicationStore,
    MemoryJobStore,
    MemoryOrderStore,
    MemoryReviewStore,
    MemoryServiceStore,
    MemoryUserStore,
)
from workit.backends.storage_backend import StorageBackend


LOG = logging.getLogger(__name__)


class MemoryBackend(StorageBackend):
    """
    A volatile implementation of the `StorageBackend` interface.

    Attributes:
        backend_name (str): Always "memory".
    """

    def __init__(self):
        """
        Initialize the `MemoryBackend` instance with one empty store per entity type.
        """
        stores = {
            "user": MemoryUserStore(),
            "service": MemoryServiceStore(),
            "job": MemoryJobStore(),
            "application": MemoryApplicationStore(),
            "order": MemoryOrderStore(),
            "review": MemoryReviewStore(),
        }
        super().__init__("memory", stores)
        LOG.debug("Initialized the in-memory backend. Records will not survive a restart.")

    def get_version(self) -> str:
        """
        The in-memory backend ships with Workit, so its version is Workit's version.

        Returns:
            The Workit version string.
        """
        return VERSION

    def get_connection_string(self) -> str:
        """
        There is nothing to connect to.

        Returns:
            The string "memory://".
        """
        return "memory://"

    def ping(self):
        """
        Process memory is always reachable.
        """
