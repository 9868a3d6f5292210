##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Process-wide storage backend selection for the Workit application.

The `StorageSelector` decides once which backend serves the process and then keeps
handing out that same backend. The decision follows the `storage` section of the
configuration:

- `backend: memory` always selects the in-memory backend.
- `backend: sql` or `backend: mongodb` (or any registered plugin name) selects that backend.
- `backend: auto` selects the SQL backend when `use_postgres` or `database_url` is set,
  otherwise the MongoDB backend when `use_mongodb` (or `use_in_memory_mongodb`) is set,
  otherwise the in-memory backend.

Whenever the chosen backend cannot be created or does not answer a ping, a warning is
logged and the in-memory backend is used instead.
"""

import logging
import threading
from types import SimpleNamespace
from typing import Dict, Optional, Tuple

from workit.backends.backend_factory import WorkitBackendFactory, backend_factory
from workit.backends.storage import Storage
from workit.utils import get_yaml_var


LOG = logging.getLogger(__name__)

MEMORY_BACKEND = "memory"


class StorageSelector:
    """
    Selects and memoizes the storage backend of the process.

    Attributes:
        factory (WorkitBackendFactory): The factory used to build backends.

    Methods:
        get_storage: Return the selected backend, selecting it on first call.
        reset: Close and forget the selected backend. Intended for tests.
    """

    def __init__(self, factory: WorkitBackendFactory = backend_factory, storage_config: SimpleNamespace = None):
        """
        Initialize the selector. Nothing is selected until `get_storage` is called.

        Args:
            factory: The factory used to build backends.
            storage_config: Optional storage settings. When omitted, the `storage`
                section of the global configuration is read at selection time.
        """
        self.factory: WorkitBackendFactory = factory
        self._storage_config: Optional[SimpleNamespace] = storage_config
        self._storage: Optional[Storage] = None
        self._lock = threading.Lock()

    def get_storage(self) -> Storage:
        """
        Return the backend of this process, selecting it on the first call.

        Returns:
            The selected backend. Every later call returns the same object.
        """
        with self._lock:
            if self._storage is None:
                self._storage = self._select()
            return self._storage

    def reset(self):
        """
        Close and forget the selected backend so the next call selects again.
        """
        with self._lock:
            if self._storage is not None:
                self._storage.close()
            self._storage = None

    def _get_storage_config(self) -> SimpleNamespace:
        """
        Get the storage settings to decide with.

        Returns:
            The storage settings namespace.
        """
        if self._storage_config is not None:
            return self._storage_config
        from workit.config import configfile  # pylint: disable=import-outside-toplevel

        return configfile.CONFIG.storage

    def _decide(self, storage_config: SimpleNamespace) -> Tuple[str, Dict]:
        """
        Apply the decision table to the storage settings.

        Args:
            storage_config: The storage settings namespace.

        Returns:
            A tuple of the canonical backend name and the keyword arguments to build it with.
        """
        requested = str(get_yaml_var(storage_config, "backend", "auto") or "auto").lower()
        database_url = get_yaml_var(storage_config, "database_url", None)
        use_postgres = bool(get_yaml_var(storage_config, "use_postgres", False))
        in_memory_mongodb = bool(get_yaml_var(storage_config, "use_in_memory_mongodb", False))
        use_mongodb = bool(get_yaml_var(storage_config, "use_mongodb", False)) or in_memory_mongodb

        if requested == "auto":
            if use_postgres or database_url:
                requested = "sql"
            elif use_mongodb:
                requested = "mongodb"
            else:
                requested = MEMORY_BACKEND

        backend_name = self.factory.resolve_name(requested)
        if backend_name == "sql":
            return backend_name, {
                "url": database_url,
                "echo": bool(get_yaml_var(storage_config, "echo_sql", False)),
            }
        if backend_name == "mongodb":
            return backend_name, {
                "uri": get_yaml_var(storage_config, "mongodb_uri", None),
                "database": get_yaml_var(storage_config, "mongodb_database", None),
                "in_memory": in_memory_mongodb,
                "server_selection_timeout_ms": int(get_yaml_var(storage_config, "server_selection_timeout_ms", 5000)),
            }
        return backend_name, None

    def _select(self) -> Storage:
        """
        Build the configured backend and fall back to memory if it is not usable.

        Returns:
            A ready backend.
        """
        backend_name, kwargs = self._decide(self._get_storage_config())
        if backend_name == MEMORY_BACKEND:
            LOG.info("Using the in-memory storage backend.")
            return self.factory.create(MEMORY_BACKEND)

        backend = None
        try:
            if backend_name == "sql" and not kwargs["url"]:
                raise ValueError("no database_url is configured")
            backend = self.factory.create(backend_name, kwargs)
            backend.ping()
        except Exception as exc:  # pylint: disable=broad-except
            LOG.warning(f"Could not use the '{backend_name}' storage backend ({exc}). Falling back to in-memory storage.")
            if backend is not None:
                backend.close()
            return self.factory.create(MEMORY_BACKEND)

        LOG.info(f"Using the '{backend.get_name()}' storage backend at '{backend.get_connection_string()}'.")
        return backend


storage_selector = StorageSelector()


def get_storage() -> Storage:
    """
    Return the storage backend of this process.

    Returns:
        The backend chosen by the process-wide `StorageSelector`.
    """
    return storage_selector.get_storage()
