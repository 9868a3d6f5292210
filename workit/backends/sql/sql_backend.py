##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Relational backend implementation for the Workit application.

This module defines the `SQLBackend` class, which provides a concrete
implementation of the `StorageBackend` interface on top of SQLAlchemy Core.
PostgreSQL (through psycopg) is the production target; SQLite URLs work for local
use and tests. Tables are created on first use if they do not exist.
"""

import logging

from sqlalchemy import text

from workit.backends.sql.sql_connection import create_database_engine, unavailable_on_operational_error
from workit.backends.sql.sql_stores import (
    SQLApplicationStore,
    SQLJobStore,
    SQLOrderStore,
    SQLReviewStore,
    SQLServiceStore,
    SQLUserStore,
)
from workit.backends.sql.sql_tables import metadata
from workit.backends.storage_backend import StorageBackend


LOG = logging.getLogger(__name__)


class SQLBackend(StorageBackend):
    """
    A SQLAlchemy-based implementation of the `StorageBackend` interface.

    Attributes:
        backend_name (str): Always "sql".
        engine (Engine): The engine shared by every store.

    Methods:
        get_version:
            Query the database server for its version.

        get_connection_string:
            Retrieve the database URL with the password masked.

        ping:
            Run a trivial query to make sure the database answers.

        flush_database:
            Drop and recreate every table, which also restarts ids at 1.

        close:
            Dispose of the connection pool.
    """

    def __init__(self, url: str, echo: bool = False):
        """
        Initialize the `SQLBackend` instance and create missing tables.

        Args:
            url: A PostgreSQL or SQLite database URL.
            echo: If True, SQLAlchemy logs every statement.

        Raises:
            BackendUnavailableError: If the database cannot be reached.
        """
        self.engine = create_database_engine(url, echo=echo)
        stores = {
            "user": SQLUserStore(self.engine),
            "service": SQLServiceStore(self.engine),
            "job": SQLJobStore(self.engine),
            "application": SQLApplicationStore(self.engine),
            "order": SQLOrderStore(self.engine),
            "review": SQLReviewStore(self.engine),
        }
        super().__init__("sql", stores)

        self._initialize_schema()

    def _initialize_schema(self):
        """Initialize the database schema by creating all necessary tables."""
        with unavailable_on_operational_error("create the schema"):
            metadata.create_all(self.engine)

    def get_version(self) -> str:
        """
        Query the database server for its version.

        Returns:
            The dialect name followed by the server version (e.g. "postgresql 16.2").
        """
        with unavailable_on_operational_error("read the server version"), self.engine.connect() as conn:
            version_info = conn.dialect.server_version_info or ()
        return f"{self.engine.dialect.name} {'.'.join(str(part) for part in version_info)}".strip()

    def get_connection_string(self) -> str:
        """
        Get the database URL with any password masked.

        Returns:
            The masked database URL.
        """
        return self.engine.url.render_as_string(hide_password=True)

    def ping(self):
        """
        Run `SELECT 1` to make sure the database answers.

        Raises:
            BackendUnavailableError: If the database cannot be reached.
        """
        with unavailable_on_operational_error("ping the database"), self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def flush_database(self):
        """
        Remove every record by dropping and recreating the tables.
        """
        LOG.info("Dropping and recreating every table of the sql backend...")
        with unavailable_on_operational_error("flush the database"):
            metadata.drop_all(self.engine)
            metadata.create_all(self.engine)

    def close(self):
        """
        Dispose of the connection pool. A later operation opens new connections.
        """
        self.engine.dispose()
