##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
MongoDB backend implementation for the Workit application.

This module defines the `MongoBackend` class, which provides a concrete
implementation of the `StorageBackend` interface using MongoDB as the underlying
storage system. It coordinates interactions with the entity-specific MongoDB
store classes, which share one lazily established `MongoConnection`.

For tests and demos the backend can run against an in-process document store
(mongomock) instead of a real server.
"""

import logging
from typing import Callable

from pymongo import MongoClient
from pymongo.database import Database

from workit.backends.mongo.mongo_connection import MongoConnection
from workit.backends.mongo.mongo_store_base import unavailable_on_connection_failure
from workit.backends.mongo.mongo_stores import (
    MongoApplicationStore,
    MongoJobStore,
    MongoOrderStore,
    MongoReviewStore,
    MongoServiceStore,
    MongoUserStore,
)
from workit.backends.storage_backend import StorageBackend
from workit.utils import mask_connection_string


LOG = logging.getLogger(__name__)

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_MONGODB_DATABASE = "workit"


class MongoBackend(StorageBackend):
    """
    A MongoDB-based implementation of the `StorageBackend` interface.

    Attributes:
        backend_name (str): Always "mongodb".
        connection (MongoConnection): The connection shared by every store.

    Methods:
        get_version:
            Query MongoDB for the server version.

        get_connection_string:
            Retrieve the MongoDB URI with the password masked.

        ping:
            Connect if needed and make sure the server answers.

        close:
            Close the client connection.
    """

    def __init__(
        self,
        uri: str = DEFAULT_MONGODB_URI,
        database: str = DEFAULT_MONGODB_DATABASE,
        in_memory: bool = False,
        server_selection_timeout_ms: int = 5000,
        client_factory: Callable[..., MongoClient] = None,
    ):
        """
        Initialize the `MongoBackend` instance. No connection is made until first use.

        Args:
            uri: The MongoDB connection URI.
            database: The name of the database holding Workit's collections.
            in_memory: If True, use an in-process mongomock client instead of a server.
            server_selection_timeout_ms: How long to wait for a server before failing.
            client_factory: Optional callable building the client. Overrides `in_memory`.
        """
        if client_factory is None:
            client_factory = MongoClient
            if in_memory:
                import mongomock  # pylint: disable=import-outside-toplevel

                client_factory = mongomock.MongoClient
                LOG.info("Using an in-process MongoDB for storage. Records will not survive a restart.")

        self.connection = MongoConnection(
            uri or DEFAULT_MONGODB_URI,
            database or DEFAULT_MONGODB_DATABASE,
            client_factory=client_factory,
            server_selection_timeout_ms=server_selection_timeout_ms,
            on_connect=self._initialize_indexes,
        )
        stores = {
            "user": MongoUserStore(self.connection),
            "service": MongoServiceStore(self.connection),
            "job": MongoJobStore(self.connection),
            "application": MongoApplicationStore(self.connection),
            "order": MongoOrderStore(self.connection),
            "review": MongoReviewStore(self.connection),
        }
        super().__init__("mongodb", stores)

    def _initialize_indexes(self, database: Database):
        """Create the indexes of every collection. Runs once per successful connection."""
        for store in self.stores.values():
            store.create_indexes(database)

    def get_version(self) -> str:
        """
        Query MongoDB for the server version.

        Returns:
            The MongoDB server version string.
        """
        with unavailable_on_connection_failure("read the server version"):
            return self.connection.get_client().server_info()["version"]

    def get_connection_string(self) -> str:
        """
        Get the MongoDB URI with any password masked.

        Returns:
            The masked connection URI.
        """
        return mask_connection_string(self.connection.uri)

    def ping(self):
        """
        Connect if needed and make sure the server answers.

        Raises:
            BackendUnavailableError: If MongoDB cannot be reached.
        """
        with unavailable_on_connection_failure("ping the server"):
            self.connection.get_client().server_info()

    def close(self):
        """
        Close the client connection. A later operation reconnects.
        """
        self.connection.close()
