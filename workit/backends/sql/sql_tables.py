##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Table definitions for the relational backend.

Tables are derived from the data model fields: typed columns named after the
snake_case field names, an autoincrement integer primary key, NOT NULL on required
fields and UNIQUE on unique fields. Enum fields are stored as their string values.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Type

from sqlalchemy import Column, DateTime, Float, Integer, MetaData, String, Table, Text
from sqlalchemy.types import TypeEngine

from workit.db_scripts.data_models import MODEL_REGISTRY, BaseDataModel
from workit.utils import get_plural_of_entity


metadata = MetaData()


def _get_column_type(py_type: Any) -> TypeEngine:
    """
    Map a dataclass field type to a SQLAlchemy column type.

    Args:
        py_type: The type hint of the field.

    Returns:
        The SQLAlchemy column type.
    """
    if isinstance(py_type, type) and issubclass(py_type, Enum):
        return String(32)
    if py_type is int:
        return Integer()
    if py_type is float:
        return Float()
    if py_type is datetime:
        return DateTime(timezone=True)
    return Text()


def build_table(model_class: Type[BaseDataModel], table_metadata: MetaData) -> Table:
    """
    Build the table definition of a model class.

    Args:
        model_class: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] subclass.
        table_metadata: The metadata the table is attached to.

    Returns:
        The table, named after the plural of the entity type (e.g. "users").
    """
    columns = []
    for field_obj in model_class.get_class_fields():
        if field_obj.name == "id":
            columns.append(Column("id", Integer, primary_key=True, autoincrement=True))
            continue
        columns.append(
            Column(
                field_obj.name,
                _get_column_type(field_obj.type),
                nullable=field_obj.name not in model_class.required_fields and field_obj.name != "created_at",
                unique=field_obj.name in model_class.unique_fields,
            )
        )
    return Table(get_plural_of_entity(model_class.entity_type), table_metadata, *columns)


TABLES = {entity_type: build_table(model_class, metadata) for entity_type, model_class in MODEL_REGISTRY.items()}
