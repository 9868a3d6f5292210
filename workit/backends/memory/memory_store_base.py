##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
In-memory generic store implementation for Workit entities.

This module defines `MemoryStoreBase`, a generic base class that keeps the records
of one entity type in an insertion-ordered dictionary keyed by id. A per-store lock
makes id assignment, the uniqueness check and the write one atomic step, so
concurrent creates never hand out the same id.

See also:
    - workit.backends.store_base: Base class
    - workit.backends.memory.memory_stores: Concrete store implementations
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, Generic, List, Optional, Type

from workit.backends.store_base import StoreBase, T
from workit.exceptions import UniqueConstraintError
from workit.utils import utc_now


LOG = logging.getLogger(__name__)


class MemoryStoreBase(StoreBase[T], Generic[T]):
    """
    Base class for in-memory stores.

    Records are kept as private copies and every read hands out a fresh copy,
    so callers can never change stored state by mutating a returned record.

    Attributes:
        entity_type (str): The entity type this store manages.
        model_class (Type[T]): The model class of the stored records.
    """

    def __init__(self, entity_type: str, model_class: Type[T]):
        """
        Initialize an empty in-memory store.

        Args:
            entity_type: The entity type this store manages.
            model_class: The model class of the stored records.
        """
        super().__init__(entity_type, model_class)
        self._records: Dict[int, T] = {}
        self._next_id: int = 1
        self._lock = threading.Lock()

    def _check_unique(self, entity: T):
        """
        Make sure no other stored record holds one of `entity`'s unique values.
        Must be called with the lock held.

        Args:
            entity: The record about to be written.

        Raises:
            UniqueConstraintError: If a unique value is already taken.
        """
        for field_name in self.model_class.unique_fields:
            value = getattr(entity, field_name)
            for record in self._records.values():
                if record.id != entity.id and getattr(record, field_name) == value:
                    raise UniqueConstraintError(field_name, value)

    def _insert(self, entity: T) -> T:
        """
        Assign the next id and the creation time, then store a copy of the record.

        Args:
            entity: A validated record without id or created_at.

        Returns:
            A copy of the stored record.
        """
        with self._lock:
            self._check_unique(entity)
            stored = replace(entity, id=self._next_id, created_at=utc_now())
            self._records[stored.id] = stored
            self._next_id += 1
        return replace(stored)

    def _write_update(self, entity: T, changes: Dict) -> Optional[T]:
        """
        Apply the changed fields onto the current stored record.

        The changes are merged onto the record as stored when the lock is taken,
        not onto `entity`, so overlapping updates of different fields all survive.

        Args:
            entity: The merged, validated record. Only its id is used.
            changes: The fields that changed.

        Returns:
            A copy of the stored record, or None if the record was removed meanwhile.
        """
        with self._lock:
            current = self._records.get(entity.id)
            if current is None:
                LOG.debug(f"Cannot update {self.entity_type} '{entity.id}': it was removed.")
                return None
            stored = replace(current, **changes)
            stored.validate()
            self._check_unique(stored)
            self._records[stored.id] = stored
        return replace(stored)

    def retrieve(self, identifier: int) -> Optional[T]:
        """
        Retrieve a copy of the record with this id.

        Args:
            identifier: The id of the record.

        Returns:
            The record if found, None otherwise.
        """
        with self._lock:
            record = self._records.get(identifier)
        return None if record is None else replace(record)

    def retrieve_by_field(self, field_name: str, value: Any) -> Optional[T]:
        """
        Scan for the record holding `value` on a unique field.

        Args:
            field_name: A unique field of this entity type.
            value: The value to look up.

        Returns:
            The record if found, None otherwise.
        """
        self._check_unique_field(field_name)
        with self._lock:
            for record in self._records.values():
                if getattr(record, field_name) == value:
                    return replace(record)
        return None

    def _query(self, filters: Dict) -> List[T]:
        with self._lock:
            records = list(self._records.values())
        return [replace(record) for record in records if record.matches(filters)]

    def _query_any(self, predicates: Dict) -> List[T]:
        with self._lock:
            records = list(self._records.values())
        return [
            replace(record)
            for record in records
            if any(record.matches({key: val}) for key, val in predicates.items())
        ]

    def count(self) -> int:
        """
        Count the stored records.

        Returns:
            The number of stored records.
        """
        with self._lock:
            return len(self._records)

    def flush(self):
        """
        Drop every record and restart ids at 1.
        """
        with self._lock:
            self._records.clear()
            self._next_id = 1
        LOG.debug(f"Flushed every in-memory {self.entity_type} record.")
