##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module defines the abstract base class for all data store implementations in Workit.

This module provides the `StoreBase` class, which outlines the required interface for creating,
retrieving, listing, and updating entities of one record type in a backing data store. All
concrete store classes (in-memory, MongoDB, SQL) must inherit from this class and implement
its abstract methods. Validation of inserted and updated records happens here so that every
backend applies the same rules.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from workit.db_scripts.data_models import BaseDataModel
from workit.exceptions import InvalidFieldError, StorageError, UniqueConstraintError
from workit.utils import get_plural_of_entity


LOG = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseDataModel)


class StoreBase(ABC, Generic[T]):
    """
    Base class for all stores supported in Workit.

    A store persists the records of a single entity type. Ids and creation
    timestamps are assigned by the store and never by the caller.

    Attributes:
        entity_type (str): The entity type this store manages (e.g. "user").
        model_class (Type[T]): The model class used for (de)serialization.

    Methods:
        create: Validate and insert a new record.
        retrieve: Retrieve an entity from the database by ID.
        retrieve_by_field: Retrieve the entity holding a value on a unique field.
        retrieve_all: Query the database for all entities of this type, optionally filtered.
        retrieve_any: Query the database for entities matching any of several predicates.
        update: Merge a partial update onto a stored entity.
        count: Count the entities of this type.
        flush: Remove every entity of this type.
    """

    def __init__(self, entity_type: str, model_class: Type[T]):
        """
        Initialize the store.

        Args:
            entity_type: The entity type this store manages.
            model_class: The model class used for (de)serialization.
        """
        self.entity_type: str = entity_type
        self.model_class: Type[T] = model_class

    @property
    def plural_name(self) -> str:
        """The human readable plural of this store's entity type, used in log messages."""
        return get_plural_of_entity(self.entity_type, split_delimiter="_", join_delimiter=" ")

    def create(self, data: Dict, **assigned: Any) -> T:
        """
        Validate a new record and insert it, assigning its id and creation time.

        Args:
            data: The caller-provided insertable fields.
            **assigned: Fields set outside of the insertable subset (e.g. the owner id).

        Returns:
            The stored record, including `id` and `created_at`.

        Raises:
            InvalidFieldError: If the record fails validation.
            UniqueConstraintError: If a unique field collides with an existing record.
        """
        entity = self.model_class.from_insert(data, **assigned)
        LOG.debug(f"Creating a {self.entity_type} record...")
        created = self._insert(entity)
        LOG.debug(f"Successfully created {self.entity_type} with id '{created.id}'.")
        return created

    def update(self, identifier: int, updates: Dict) -> Optional[T]:
        """
        Merge a partial update onto the stored record with this id.

        Args:
            identifier: The id of the record to update.
            updates: A dictionary of field names to new values.

        Returns:
            The updated record, or None if no record has this id.

        Raises:
            InvalidFieldError: If `updates` names an unknown field or the merged
                record fails validation. Stored state is left unchanged.
            UniqueConstraintError: If the update collides with another record on a unique field.
        """
        existing = self.retrieve(identifier)
        if existing is None:
            LOG.debug(f"Cannot update {self.entity_type} '{identifier}': it does not exist.")
            return None

        updated, changes = existing.apply_update(updates or {})
        if not changes:
            return existing

        LOG.debug(f"Updating {self.entity_type} '{identifier}' with fields: {sorted(changes)}")
        return self._write_update(updated, changes)

    def retrieve_all(self, filters: Dict = None) -> List[T]:
        """
        Query the database for all entities of this type that match every filter.

        Args:
            filters: An optional dictionary of field names to values to match exactly.
                None or an empty dictionary returns every entity.

        Returns:
            The matching entities ordered by ascending id.

        Raises:
            UnsupportedFilterError: If a filter names a field this entity type lacks.
        """
        normalized = self.model_class.normalize_filters(filters)
        log_action = "filtered" if normalized else "all"
        LOG.info(f"Fetching {log_action} {self.plural_name}{f' with filters: {normalized}' if normalized else ''}...")
        entities = self._query(normalized)
        LOG.info(f"Successfully retrieved {len(entities)} {self.plural_name} ({log_action}).")
        return entities

    def retrieve_any(self, predicates: Dict) -> List[T]:
        """
        Query the database for entities matching at least one of the given
        field/value predicates.

        Args:
            predicates: A dictionary of field names to values. An entity matches
                when any one field equals its value.

        Returns:
            The matching entities ordered by ascending id.

        Raises:
            UnsupportedFilterError: If a predicate names a field this entity type lacks.
        """
        normalized = self.model_class.normalize_filters(predicates)
        if not normalized:
            return []
        return self._query_any(normalized)

    def _check_unique_field(self, field_name: str):
        """
        Make sure `field_name` is one of the unique lookup fields of this store.

        Args:
            field_name: The field to look up by.

        Raises:
            InvalidFieldError: If the field is not unique for this entity type.
        """
        if field_name not in self.model_class.unique_fields:
            raise InvalidFieldError(f"'{field_name}' is not a unique field of a {self.entity_type}.")

    def _raise_unique_conflict(self, entity: T, cause: Exception = None):
        """
        Find which unique field of `entity` collides with another stored record and
        raise the matching error. Used after a backend reported a duplicate key.

        Args:
            entity: The record that failed to be written.
            cause: The backend exception being translated.

        Raises:
            UniqueConstraintError: Naming the first colliding field.
            StorageError: If no colliding unique field can be identified.
        """
        for field_name in self.model_class.unique_fields:
            value = getattr(entity, field_name)
            holder = self.retrieve_by_field(field_name, value)
            if holder is not None and holder.id != entity.id:
                raise UniqueConstraintError(field_name, value) from cause
        raise StorageError(f"Failed to write {self.entity_type} '{entity.id}': {cause}") from cause

    @abstractmethod
    def _insert(self, entity: T) -> T:
        """
        Assign an id and creation time to a validated record and persist it.

        Args:
            entity: A validated record without id or created_at.

        Returns:
            The stored record.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement an `_insert` method.")

    @abstractmethod
    def _write_update(self, entity: T, changes: Dict) -> Optional[T]:
        """
        Persist the changed fields of an already validated, merged record.

        Args:
            entity: The merged record.
            changes: The fields that changed and their new values.

        Returns:
            The stored record after the update, or None if it was removed meanwhile.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `_write_update` method.")

    @abstractmethod
    def _query(self, filters: Dict) -> List[T]:
        """
        Return every entity matching all normalized filters, ordered by id.

        Args:
            filters: Normalized filters. Empty means no restriction.

        Returns:
            A list of entities.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `_query` method.")

    @abstractmethod
    def _query_any(self, predicates: Dict) -> List[T]:
        """
        Return every entity matching at least one normalized predicate, ordered by id.

        Args:
            predicates: Normalized, non-empty predicates.

        Returns:
            A list of entities.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `_query_any` method.")

    @abstractmethod
    def retrieve(self, identifier: int) -> Optional[T]:
        """
        Retrieve an entity from the database by its id.

        Args:
            identifier: The id of the entity to retrieve.

        Returns:
            The entity if found, None otherwise.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve` method.")

    @abstractmethod
    def retrieve_by_field(self, field_name: str, value: Any) -> Optional[T]:
        """
        Retrieve the entity holding `value` on the unique field `field_name`.

        Args:
            field_name: A unique field of this entity type.
            value: The value to look up.

        Returns:
            The entity if found, None otherwise.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve_by_field` method.")

    @abstractmethod
    def count(self) -> int:
        """
        Count the entities of this type.

        Returns:
            The number of stored entities.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `count` method.")

    @abstractmethod
    def flush(self):
        """
        Remove every entity of this type.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `flush` method.")
