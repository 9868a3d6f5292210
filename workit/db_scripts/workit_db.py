##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module contains the functionality necessary for operators to inspect
everything stored in Workit's database.
"""

import logging
from typing import Dict, List, Optional

from tabulate import tabulate

from workit.backends.storage_backend import StorageBackend
from workit.db_scripts.data_models import MODEL_REGISTRY, BaseDataModel
from workit.exceptions import EntityTypeNotSupportedError
from workit.utils import get_plural_of_entity


LOG = logging.getLogger("workit")


class WorkitDatabase:
    """
    High-level interface for inspecting the records of the selected storage backend.

    Attributes:
        backend (backends.storage_backend.StorageBackend): The backend to inspect.

    Methods:
        get_db_type: Retrieve the type of the backend being used (e.g., memory, sql).
        get_db_version: Retrieve the version of the backend.
        get_connection_string: Retrieve the backend connection string, credentials masked.
        info: Print a summary of the backend and of the stored records.
        get: Get a record by type and id.
        get_all: Get all records of a specific type, optionally filtered.
        get_everything: Get all records of every type.
        flush: Remove every record after confirmation.
    """

    def __init__(self, backend: StorageBackend = None):
        """
        Initialize a new WorkitDatabase instance.

        Args:
            backend: The backend to inspect. Defaults to the backend selected for this process.
        """
        if backend is None:
            from workit.backends.storage_selector import get_storage  # pylint: disable=import-outside-toplevel

            backend = get_storage()
        self.backend: StorageBackend = backend

    def get_db_type(self) -> str:
        """
        Retrieve the type of backend.

        Returns:
            The type of backend (e.g. memory, mongodb, sql).
        """
        return self.backend.get_name()

    def get_db_version(self) -> str:
        """
        Get the version of the backend.

        Returns:
            The version number of the backend.
        """
        return self.backend.get_version()

    def get_connection_string(self) -> str:
        """
        Get the connection string to the backend with the password masked.

        Returns:
            The connection string to the backend.
        """
        return self.backend.get_connection_string()

    def _validate_entity_type(self, entity_type: str):
        """
        Check to make sure the entity type passed in is supported.

        Args:
            entity_type: The type of entity to validate (user, service, job, ...).

        Raises:
            EntityTypeNotSupportedError: If the entity type is not supported.
        """
        if entity_type not in MODEL_REGISTRY:
            raise EntityTypeNotSupportedError(f"Entity type not supported: {entity_type}")

    def info(self, max_preview: int = 3):
        """
        Print the backend details, the number of stored records of each type and
        a preview of the first records of each type.

        Args:
            max_preview: The maximum number of records of each type to preview.
        """
        general = [
            ["Database Type", self.get_db_type()],
            ["Database Version", self.get_db_version()],
            ["Connection String", self.get_connection_string()],
        ]
        counts = [
            [get_plural_of_entity(entity_type).capitalize(), self.backend.count(entity_type)]
            for entity_type in MODEL_REGISTRY
        ]

        print("Workit Database Information")
        print("---------------------------")
        print(tabulate(general, tablefmt="presto"))
        print()
        print(tabulate(counts, headers=["Entity", "Total"]))
        print()

        if max_preview <= 0:
            return
        for entity_type in MODEL_REGISTRY:
            records = self.backend.retrieve_all(entity_type)[:max_preview]
            if not records:
                continue
            print(f"{get_plural_of_entity(entity_type).capitalize()} (first {len(records)}):")
            print(tabulate([record.to_public_dict() for record in records], headers="keys"))
            print()

    def get(self, entity_type: str, identifier: int) -> Optional[BaseDataModel]:
        """
        Get a record by type and id.

        Args:
            entity_type: The type of record (user, service, job, ...).
            identifier: The id of the record.

        Returns:
            The record, or None if it does not exist.
        """
        self._validate_entity_type(entity_type)
        return self.backend.retrieve(entity_type, identifier)

    def get_all(self, entity_type: str, filters: Dict = None) -> List[BaseDataModel]:
        """
        Get all records of a specific type.

        Args:
            entity_type: The type of record (user, service, job, ...).
            filters: Optional exact-match filters.

        Returns:
            The matching records ordered by ascending id.
        """
        self._validate_entity_type(entity_type)
        return self.backend.retrieve_all(entity_type, filters=filters)

    def get_everything(self) -> List[BaseDataModel]:
        """
        Get all records of every type.

        Returns:
            A list of every stored record, grouped by type.
        """
        result = []
        for entity_type in MODEL_REGISTRY:
            result.extend(self.backend.retrieve_all(entity_type))
        return result

    def flush(self, force: bool = False):
        """
        Remove every record from the database.

        Args:
            force: If True, skip the confirmation prompt.
        """
        flush_database = force
        if not force:
            valid_inputs = ["y", "n"]
            user_input = input("Are you sure you want to flush the entire database? (y/n): ").strip().lower()
            while user_input not in valid_inputs:
                user_input = input("Invalid input. Use 'y' for 'yes' or 'n' for 'no': ").strip().lower()
            flush_database = user_input == "y"

        if flush_database:
            LOG.info("Flushing the database...")
            self.backend.flush_database()
            LOG.info("Database successfully flushed.")
        else:
            LOG.info("Database flush cancelled.")
