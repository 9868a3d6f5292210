##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
MongoDB connection management for the Workit application.

This module defines the `MongoConnection` class, which establishes the client
connection lazily on first use and memoizes it. Concurrent first callers share a
single setup attempt through a `concurrent.futures.Future`, so the server is only
contacted once. A failed attempt is reported to every waiter and a later call
starts a fresh attempt.
"""

import logging
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Optional

from pymongo import MongoClient
from pymongo.database import Database

from workit.exceptions import BackendUnavailableError
from workit.utils import mask_connection_string


LOG = logging.getLogger(__name__)


class ConnectionState(Enum):
    """
    Lifecycle of a `MongoConnection`.

    Attributes:
        IDLE: No connection attempt has been made (or the connection was closed).
        CONNECTING: One setup attempt is in flight.
        CONNECTED: The client is ready for use.
        FAILED: The last setup attempt failed. The next call retries.
    """

    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class MongoConnection:
    """
    Lazily connects to MongoDB and hands out the configured database.

    Attributes:
        uri (str): The MongoDB connection URI.
        database_name (str): The name of the database to use.
        state (ConnectionState): Where the connection is in its lifecycle.

    Methods:
        get_database: Return the database, connecting first if needed.
        get_client: Return the connected client, connecting first if needed.
        close: Close the client and return to the idle state.
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        client_factory: Callable[..., MongoClient] = MongoClient,
        server_selection_timeout_ms: int = 5000,
        on_connect: Optional[Callable[[Database], None]] = None,
    ):
        """
        Initialize the connection without contacting the server.

        Args:
            uri: The MongoDB connection URI.
            database_name: The name of the database to use.
            client_factory: Callable building the client, `MongoClient` unless a
                drop-in replacement (e.g. `mongomock.MongoClient`) is provided.
            server_selection_timeout_ms: How long the client waits for a server
                before failing.
            on_connect: Optional callback run once with the database after the
                server answered (e.g. to create indexes).
        """
        self.uri: str = uri
        self.database_name: str = database_name
        self.state: ConnectionState = ConnectionState.IDLE
        self._client_factory = client_factory
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._on_connect = on_connect
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None
        self._future: Optional[Future] = None
        self._lock = threading.Lock()

    def get_database(self) -> Database:
        """
        Return the database, connecting first if no connection was established yet.

        Returns:
            The pymongo database object.

        Raises:
            BackendUnavailableError: If the server cannot be reached.
        """
        with self._lock:
            if self.state == ConnectionState.CONNECTED:
                return self._database
            if self.state == ConnectionState.CONNECTING:
                future = self._future
                owner = False
            else:
                future = Future()
                self._future = future
                self.state = ConnectionState.CONNECTING
                owner = True

        if owner:
            self._connect(future)
        return future.result()

    def get_client(self) -> MongoClient:
        """
        Return the connected client, connecting first if needed.

        Returns:
            The pymongo client.
        """
        self.get_database()
        return self._client

    def _connect(self, future: Future):
        """
        Run one setup attempt and resolve `future` with its outcome.

        Args:
            future: The future every concurrent caller is waiting on.
        """
        masked_uri = mask_connection_string(self.uri)
        LOG.debug(f"Connecting to MongoDB at '{masked_uri}'...")
        client = None
        try:
            client = self._client_factory(self.uri, serverSelectionTimeoutMS=self._server_selection_timeout_ms)
            client.server_info()
            database = client[self.database_name]
            if self._on_connect is not None:
                self._on_connect(database)
        except Exception as exc:  # pylint: disable=broad-except
            if client is not None:
                client.close()
            error = BackendUnavailableError(f"Could not connect to MongoDB at '{masked_uri}': {exc}")
            error.__cause__ = exc
            with self._lock:
                self.state = ConnectionState.FAILED
                self._future = None
            LOG.error(str(error))
            future.set_exception(error)
            return

        with self._lock:
            self._client = client
            self._database = database
            self.state = ConnectionState.CONNECTED
        LOG.info(f"Connected to MongoDB database '{self.database_name}' at '{masked_uri}'.")
        future.set_result(database)

    def close(self):
        """
        Close the client, if any, and return to the idle state.
        """
        with self._lock:
            client = self._client
            self._client = None
            self._database = None
            self._future = None
            self.state = ConnectionState.IDLE
        if client is not None:
            client.close()
            LOG.debug("Closed the MongoDB client.")
