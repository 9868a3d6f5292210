##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Utility functions for backends in the Workit application.

These utilities convert data models into the persisted document format (camelCase
keys, enum values as strings) and back, so that stored documents keep the field
names clients already know.
"""

import logging
from typing import Dict, Type, TypeVar

from workit.utils import to_camel_case, to_snake_case


T = TypeVar("T")

LOG = logging.getLogger(__name__)


def serialize_entity(entity: T) -> Dict:
    """
    Given a [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance,
    convert its data into a document with camelCase keys.

    Args:
        entity: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance.

    Returns:
        A dictionary the document store can persist.
    """
    return {to_camel_case(key): val for key, val in entity.to_record().items()}


def serialize_fields(fields: Dict) -> Dict:
    """
    Convert normalized snake_case field values (filters, partial updates) to
    camelCase document keys.

    Args:
        fields: A dictionary of snake_case field names to plain values.

    Returns:
        The same values keyed by camelCase names.
    """
    return {to_camel_case(key): val for key, val in fields.items()}


def deserialize_entity(data: Dict, model_class: Type[T]) -> T:
    """
    Given a document that was retrieved, convert it into a data model instance.

    Keys the model does not know (e.g. the document store's `_id`) are dropped.

    Args:
        data: The document retrieved from the store.
        model_class: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] subclass.

    Returns:
        A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance.
    """
    field_names = model_class.get_field_names()
    deserialized_data = {}
    for key, val in data.items():
        name = to_snake_case(key)
        if name in field_names:
            deserialized_data[name] = val
        else:
            LOG.debug(f"Ignoring unknown document key '{key}' for {model_class.entity_type}.")
    return model_class.from_dict(deserialized_data)
