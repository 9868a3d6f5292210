##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
SQL-based generic store implementation for Workit entities.

This module defines `SQLStoreBase`, a generic base class for managing entity
persistence in a relational database through SQLAlchemy Core. Every write runs in
its own transaction, ids come from the database's autoincrement primary key, and
driver errors are translated into Workit's storage errors.

See also:
    - workit.backends.store_base: Base class
    - workit.backends.sql.sql_stores: Concrete store implementations
    - workit.backends.sql.sql_tables: Table definitions
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Generic, List, Optional, Type

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.elements import ColumnElement

from workit.backends.sql.sql_connection import unavailable_on_operational_error
from workit.backends.sql.sql_tables import TABLES
from workit.backends.store_base import StoreBase, T
from workit.utils import utc_now


LOG = logging.getLogger(__name__)


class SQLStoreBase(StoreBase[T], Generic[T]):
    """
    Base class for SQL-based stores.

    Attributes:
        entity_type (str): The entity type this store manages.
        model_class (Type[T]): The model class used for deserialization.
        engine (Engine): The SQLAlchemy engine shared by every store of the backend.
        table (Table): The table holding this entity type.
    """

    def __init__(self, entity_type: str, model_class: Type[T], engine: Engine):
        """
        Initialize the store.

        Args:
            entity_type: The entity type this store manages.
            model_class: The model class used for deserialization.
            engine: The engine shared by every store of the backend.
        """
        super().__init__(entity_type, model_class)
        self.engine: Engine = engine
        self.table = TABLES[entity_type]

    def _deserialize_row(self, row: Row) -> T:
        """
        Convert a result row into a data model instance.

        Args:
            row: A row selected from this store's table.

        Returns:
            A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance.
        """
        return self.model_class.from_dict(dict(row._mapping))  # pylint: disable=protected-access

    def _build_where_clause(self, filters: Dict[str, Any]) -> List[ColumnElement]:
        """
        Build one equality condition per filter.

        Args:
            filters: Normalized filters keyed by column name.

        Returns:
            A list of SQLAlchemy conditions.
        """
        return [self.table.c[column] == value for column, value in filters.items()]

    def _select(self, condition: ColumnElement = None) -> List[T]:
        """
        Select the rows matching `condition` in ascending id order.

        Args:
            condition: An optional SQLAlchemy condition.

        Returns:
            A list of records.
        """
        query = select(self.table)
        if condition is not None:
            query = query.where(condition)
        query = query.order_by(self.table.c.id)
        LOG.debug(f"SQL query: {query}")

        with unavailable_on_operational_error(f"list {self.plural_name}"), self.engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [self._deserialize_row(row) for row in rows]

    def _insert(self, entity: T) -> T:
        """
        Insert the record in one transaction and read back the assigned id.

        Args:
            entity: A validated record without id or created_at.

        Returns:
            The stored record.

        Raises:
            UniqueConstraintError: If a unique column collides with an existing row.
        """
        stamped = replace(entity, created_at=utc_now())
        values = stamped.to_record()
        values.pop("id")

        with unavailable_on_operational_error(f"create a {self.entity_type}"):
            try:
                with self.engine.begin() as conn:
                    result = conn.execute(insert(self.table).values(**values))
                    new_id = result.inserted_primary_key[0]
            except IntegrityError as exc:
                self._raise_unique_conflict(stamped, exc)
        return self.retrieve(new_id)

    def _write_update(self, entity: T, changes: Dict) -> Optional[T]:
        """
        Update the changed columns in one transaction.

        Args:
            entity: The merged, validated record.
            changes: The fields that changed.

        Returns:
            The stored record after the update.
        """
        record = entity.to_record()
        values = {name: record[name] for name in changes}

        with unavailable_on_operational_error(f"update {self.entity_type} '{entity.id}'"):
            try:
                with self.engine.begin() as conn:
                    conn.execute(update(self.table).where(self.table.c.id == entity.id).values(**values))
            except IntegrityError as exc:
                self._raise_unique_conflict(entity, exc)
        return self.retrieve(entity.id)

    def retrieve(self, identifier: int) -> Optional[T]:
        """
        Retrieve the row with this id.

        Args:
            identifier: The id of the record.

        Returns:
            The record if found, None otherwise.
        """
        query = select(self.table).where(self.table.c.id == identifier)
        with unavailable_on_operational_error(f"retrieve {self.entity_type} '{identifier}'"), self.engine.connect() as conn:
            row = conn.execute(query).first()
        return None if row is None else self._deserialize_row(row)

    def retrieve_by_field(self, field_name: str, value: Any) -> Optional[T]:
        """
        Retrieve the row holding `value` in a unique column.

        Args:
            field_name: A unique field of this entity type.
            value: The value to look up.

        Returns:
            The record if found, None otherwise.
        """
        self._check_unique_field(field_name)
        query = select(self.table).where(self.table.c[field_name] == value)
        with unavailable_on_operational_error(
            f"retrieve a {self.entity_type} by {field_name}"
        ), self.engine.connect() as conn:
            row = conn.execute(query).first()
        return None if row is None else self._deserialize_row(row)

    def _query(self, filters: Dict) -> List[T]:
        conditions = self._build_where_clause(filters)
        return self._select(and_(*conditions) if conditions else None)

    def _query_any(self, predicates: Dict) -> List[T]:
        return self._select(or_(*self._build_where_clause(predicates)))

    def count(self) -> int:
        """
        Count the rows of this store's table.

        Returns:
            The number of stored records.
        """
        query = select(func.count()).select_from(self.table)
        with unavailable_on_operational_error(f"count {self.plural_name}"), self.engine.connect() as conn:
            return conn.execute(query).scalar_one()

    def flush(self):
        """
        Delete every row of this store's table.
        """
        with unavailable_on_operational_error(f"flush {self.plural_name}"), self.engine.begin() as conn:
            conn.execute(delete(self.table))
        LOG.debug(f"Flushed the '{self.table.name}' table.")
