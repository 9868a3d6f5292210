##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the `store_base.py` module.
"""

from typing import Any, Dict, List, Optional

import pytest

from workit.backends.store_base import StoreBase
from workit.db_scripts.data_models import UserModel
from workit.exceptions import StorageError, UniqueConstraintError


class SingleRecordStore(StoreBase):
    """A store holding at most one record, used to drive the shared logic."""

    def __init__(self, holder: UserModel = None):
        super().__init__("user", UserModel)
        self.holder = holder

    def _insert(self, entity):
        return entity

    def _write_update(self, entity, changes: Dict):
        return entity

    def _query(self, filters: Dict) -> List:
        return []

    def _query_any(self, predicates: Dict) -> List:
        return []

    def retrieve(self, identifier: int) -> Optional[UserModel]:
        return None

    def retrieve_by_field(self, field_name: str, value: Any) -> Optional[UserModel]:
        if self.holder is not None and getattr(self.holder, field_name) == value:
            return self.holder
        return None

    def count(self) -> int:
        return 0

    def flush(self):
        pass


def test_store_base_is_abstract():
    """
    Test that `StoreBase` cannot be instantiated without its storage primitives.
    """
    with pytest.raises(TypeError):
        StoreBase("user", UserModel)  # pylint: disable=abstract-class-instantiated


def test_plural_name():
    """
    Test the human readable plural used in log messages.
    """
    assert SingleRecordStore().plural_name == "users"


def test_unique_conflict_names_the_colliding_field():
    """
    Test that a duplicate key is reported on the field another record holds.
    """
    holder = UserModel(id=1, username="alice", email="shared@example.com", password="x", role="freelancer")
    store = SingleRecordStore(holder)
    duplicate = UserModel(id=2, username="bob", email="shared@example.com", password="y", role="freelancer")

    with pytest.raises(UniqueConstraintError) as exc_info:
        store._raise_unique_conflict(duplicate, cause=RuntimeError("duplicate key"))

    assert exc_info.value.field_name == "email"


def test_unexplained_conflict_raises_storage_error():
    """
    Test that a write failure no unique field explains is reported as a `StorageError`.
    """
    store = SingleRecordStore()
    entity = UserModel(id=2, username="bob", email="bob@example.com", password="y", role="freelancer")

    with pytest.raises(StorageError, match="Failed to write user '2'"):
        store._raise_unique_conflict(entity, cause=RuntimeError("disk full"))
