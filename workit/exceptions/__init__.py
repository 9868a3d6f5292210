##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Module of all Workit-specific exception types.
"""

from typing import Any


__all__ = (
    "WorkitError",
    "StorageError",
    "UniqueConstraintError",
    "BackendUnavailableError",
    "InvalidFieldError",
    "UnsupportedFilterError",
    "BackendNotSupportedError",
    "EntityTypeNotSupportedError",
    "EntityNotFoundError",
    "PermissionDeniedError",
)


class WorkitError(Exception):
    """
    Base class for every error raised by Workit.
    """


class StorageError(WorkitError):
    """
    Base class for failures raised by a storage backend.
    """


class UniqueConstraintError(StorageError):
    """
    Exception to signal that a create or update collided with an existing
    record on a unique field (e.g. a username or email).

    Attributes:
        field_name: The name of the unique field that collided.
        value: The value that already exists.
    """

    def __init__(self, field_name: str, value: Any = None, message: str = None):
        self.field_name = field_name
        self.value = value
        if message is None:
            message = f"A record with {field_name} '{value}' already exists."
        super().__init__(message)


class BackendUnavailableError(StorageError):
    """
    Exception to signal that the storage backend could not be reached.
    """


class InvalidFieldError(StorageError, ValueError):
    """
    Exception to signal that a record or partial update holds a value that
    violates the schema (unknown field, missing required field, out-of-enum value,
    out-of-range number).
    """


class UnsupportedFilterError(InvalidFieldError):
    """
    Exception to signal that a list filter referenced a field the record type
    does not have.
    """


class BackendNotSupportedError(WorkitError):
    """
    Exception to signal that the provided backend is not supported by Workit.
    """


class EntityTypeNotSupportedError(WorkitError):
    """
    Exception to signal that an entity type is not one of the six Workit records.
    """


class EntityNotFoundError(WorkitError):
    """
    Exception raised by the marketplace layer when a referenced record is missing.
    """


class PermissionDeniedError(WorkitError):
    """
    Exception raised by the marketplace layer when a user acts on a record in
    a way the ownership rules forbid.
    """
