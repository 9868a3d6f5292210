##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
MongoDB-based generic store implementation for Workit entities.

This module defines `MongoStoreBase`, a generic base class that keeps the records
of one entity type in a MongoDB collection. Documents use camelCase keys and carry
an integer `id` next to MongoDB's own `_id`, which is never read back.

Ids are assigned as the current maximum plus one. The read and the insert run
under a lock shared by every store of the process that writes to the same
collection, and a unique index on `id` rejects a duplicate written by another
process instead of storing it silently.

See also:
    - workit.backends.store_base: Base class
    - workit.backends.mongo.mongo_stores: Concrete store implementations
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from workit.backends.mongo.mongo_connection import MongoConnection
from workit.backends.store_base import StoreBase, T
from workit.backends.utils import deserialize_entity, serialize_entity, serialize_fields
from workit.exceptions import BackendUnavailableError
from workit.utils import get_plural_of_entity, to_camel_case, utc_now


LOG = logging.getLogger(__name__)

NO_OBJECT_ID = {"_id": 0}


@contextmanager
def unavailable_on_connection_failure(action: str):
    """
    Context manager translating pymongo connection failures into
    `BackendUnavailableError`.

    Args:
        action: A short description of the operation, used in the error message.
    """
    try:
        yield
    except ConnectionFailure as exc:
        raise BackendUnavailableError(f"MongoDB is unavailable while trying to {action}: {exc}") from exc


class MongoStoreBase(StoreBase[T], Generic[T]):
    """
    Base class for MongoDB-based stores.

    Attributes:
        entity_type (str): The entity type this store manages.
        model_class (Type[T]): The model class used for deserialization.
        connection (MongoConnection): The shared, lazily established connection.
        collection_name (str): The collection holding this entity type (e.g. "users").
    """

    _id_locks: ClassVar[Dict[str, threading.Lock]] = {}
    _id_locks_guard: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, entity_type: str, model_class: Type[T], connection: MongoConnection):
        """
        Initialize the store. Nothing is sent to the server until the first operation.

        Args:
            entity_type: The entity type this store manages.
            model_class: The model class used for deserialization.
            connection: The connection shared by every store of the backend.
        """
        super().__init__(entity_type, model_class)
        self.connection: MongoConnection = connection
        self.collection_name: str = get_plural_of_entity(entity_type)

        lock_key = f"{connection.uri}/{connection.database_name}.{self.collection_name}"
        with self._id_locks_guard:
            self._id_lock: threading.Lock = self._id_locks.setdefault(lock_key, threading.Lock())

    @property
    def collection(self) -> Collection:
        """The collection of this store, connecting first if needed."""
        return self.connection.get_database()[self.collection_name]

    def create_indexes(self, database: Database):
        """
        Create the unique index on `id` and on every unique field of the entity type.

        Args:
            database: The database holding this store's collection.
        """
        collection = database[self.collection_name]
        collection.create_index([("id", ASCENDING)], unique=True)
        for field_name in self.model_class.unique_fields:
            collection.create_index([(to_camel_case(field_name), ASCENDING)], unique=True)
        LOG.debug(f"Ensured indexes on the '{self.collection_name}' collection.")

    def _insert(self, entity: T) -> T:
        """
        Assign the next id and the creation time and insert the document.

        Args:
            entity: A validated record without id or created_at.

        Returns:
            The stored record.

        Raises:
            UniqueConstraintError: If a unique field collides with an existing document.
        """
        with self._id_lock, unavailable_on_connection_failure(f"create a {self.entity_type}"):
            collection = self.collection
            last = collection.find_one({}, projection={"id": 1, "_id": 0}, sort=[("id", DESCENDING)])
            next_id = 1 if last is None else last["id"] + 1
            stored = replace(entity, id=next_id, created_at=utc_now())
            try:
                collection.insert_one(serialize_entity(stored))
            except DuplicateKeyError as exc:
                self._raise_unique_conflict(stored, exc)
        return stored

    def _write_update(self, entity: T, changes: Dict) -> Optional[T]:
        """
        Set the changed fields on the stored document.

        Args:
            entity: The merged, validated record.
            changes: The fields that changed.

        Returns:
            The stored record after the update, or None if it vanished meanwhile.
        """
        record = entity.to_record()
        update_doc = {"$set": serialize_fields({name: record[name] for name in changes})}
        with unavailable_on_connection_failure(f"update {self.entity_type} '{entity.id}'"):
            try:
                document = self.collection.find_one_and_update(
                    {"id": entity.id},
                    update_doc,
                    projection=NO_OBJECT_ID,
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError as exc:
                self._raise_unique_conflict(entity, exc)
        return None if document is None else deserialize_entity(document, self.model_class)

    def retrieve(self, identifier: int) -> Optional[T]:
        """
        Retrieve the document with this id.

        Args:
            identifier: The id of the record.

        Returns:
            The record if found, None otherwise.
        """
        with unavailable_on_connection_failure(f"retrieve {self.entity_type} '{identifier}'"):
            document = self.collection.find_one({"id": identifier}, projection=NO_OBJECT_ID)
        return None if document is None else deserialize_entity(document, self.model_class)

    def retrieve_by_field(self, field_name: str, value: Any) -> Optional[T]:
        """
        Retrieve the document holding `value` on a unique field.

        Args:
            field_name: A unique field of this entity type.
            value: The value to look up.

        Returns:
            The record if found, None otherwise.
        """
        self._check_unique_field(field_name)
        with unavailable_on_connection_failure(f"retrieve a {self.entity_type} by {field_name}"):
            document = self.collection.find_one({to_camel_case(field_name): value}, projection=NO_OBJECT_ID)
        return None if document is None else deserialize_entity(document, self.model_class)

    def _find(self, query: Dict) -> List[T]:
        """
        Run a find query and deserialize the documents in ascending id order.

        Args:
            query: A MongoDB query document.

        Returns:
            A list of records.
        """
        LOG.debug(f"MongoDB query on '{self.collection_name}': {query}")
        with unavailable_on_connection_failure(f"list {self.plural_name}"):
            cursor = self.collection.find(query, projection=NO_OBJECT_ID).sort("id", ASCENDING)
            return [deserialize_entity(document, self.model_class) for document in cursor]

    def _query(self, filters: Dict) -> List[T]:
        return self._find(serialize_fields(filters))

    def _query_any(self, predicates: Dict) -> List[T]:
        return self._find({"$or": [{key: val} for key, val in serialize_fields(predicates).items()]})

    def count(self) -> int:
        """
        Count the documents in this store's collection.

        Returns:
            The number of stored records.
        """
        with unavailable_on_connection_failure(f"count {self.plural_name}"):
            return self.collection.count_documents({})

    def flush(self):
        """
        Delete every document of the collection. Indexes are kept.
        """
        with self._id_lock, unavailable_on_connection_failure(f"flush {self.plural_name}"):
            self.collection.delete_many({})
        LOG.debug(f"Flushed the '{self.collection_name}' collection.")
