##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the behavior of the backends under concurrent callers.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from workit.backends.memory.memory_backend import MemoryBackend
from workit.db_scripts.data_models import UserModel
from tests.fixture_types import FixtureBackend, FixtureCallable


NUM_WORKERS = 8
NUM_CREATES = 40


@pytest.fixture(params=["memory", "mongodb"])
def concurrent_backend(request: pytest.FixtureRequest) -> FixtureBackend:
    """
    The backends that assign ids in-process: memory and MongoDB (mongomock).

    Args:
        request: The pytest request, holding the backend name as its param.

    Returns:
        An empty backend.
    """
    return request.getfixturevalue(f"storage_{request.param}")


def test_concurrent_creates_assign_every_id_once(concurrent_backend: FixtureBackend, records_user_data: FixtureCallable):
    """
    Test that N concurrent creates yield exactly the ids 1..N.

    Args:
        concurrent_backend: A backend assigning ids in-process.
        records_user_data: Builds insertable user data.
    """
    start = threading.Barrier(NUM_WORKERS)

    def create(index: int) -> int:
        if index < NUM_WORKERS:
            start.wait()
        return concurrent_backend.create_user(records_user_data(f"user{index}")).id

    with ThreadPoolExecutor(max_workers=NUM_WORKERS) as executor:
        ids = list(executor.map(create, range(NUM_CREATES)))

    assert sorted(ids) == list(range(1, NUM_CREATES + 1))
    assert [user.id for user in concurrent_backend.get_users()] == list(range(1, NUM_CREATES + 1))


def test_concurrent_duplicate_usernames_store_one_user(
    concurrent_backend: FixtureBackend, records_user_data: FixtureCallable
):
    """
    Test that racing registrations of the same username store exactly one user.

    Args:
        concurrent_backend: A backend assigning ids in-process.
        records_user_data: Builds insertable user data.
    """
    start = threading.Barrier(NUM_WORKERS)

    def create(index: int) -> bool:
        start.wait()
        try:
            concurrent_backend.create_user(records_user_data("alice", email=f"alice{index}@example.com"))
        except Exception:  # pylint: disable=broad-except
            return False
        return True

    with ThreadPoolExecutor(max_workers=NUM_WORKERS) as executor:
        results = list(executor.map(create, range(NUM_WORKERS)))

    assert results.count(True) == 1
    assert concurrent_backend.count("user") == 1


def test_concurrent_updates_are_last_write_wins(storage_memory: MemoryBackend, records_user_data: FixtureCallable):
    """
    Test that concurrent updates of one record leave it equal to one of the
    written versions, never a mix of several.

    Args:
        storage_memory: An empty in-memory backend.
        records_user_data: Builds insertable user data.
    """
    user = storage_memory.create_user(records_user_data("alice"))
    start = threading.Barrier(NUM_WORKERS)

    def update(index: int):
        start.wait()
        storage_memory.update_user(user.id, {"bio": f"bio {index}", "profile_picture": f"picture {index}.png"})

    with ThreadPoolExecutor(max_workers=NUM_WORKERS) as executor:
        list(executor.map(update, range(NUM_WORKERS)))

    stored = storage_memory.get_user(user.id)
    index = stored.bio.split()[-1]
    assert stored.profile_picture == f"picture {index}.png"
    assert stored.username == "alice"


def test_overlapping_updates_of_different_fields_both_survive(
    storage_backend: FixtureBackend, records_user_data: FixtureCallable, monkeypatch: pytest.MonkeyPatch
):
    """
    Test that two updates of different fields of one record, both merged before
    either is written, leave both changes in the stored record.

    Args:
        storage_backend: An empty backend.
        records_user_data: Builds insertable user data.
        monkeypatch: Used to hold both updates between the merge and the write.
    """
    user = storage_backend.create_user(records_user_data("alice"))
    merged = threading.Barrier(2)
    original_apply_update = UserModel.apply_update

    def apply_update_then_wait(self, updates):
        result = original_apply_update(self, updates)
        merged.wait(timeout=10)
        return result

    monkeypatch.setattr(UserModel, "apply_update", apply_update_then_wait)

    with ThreadPoolExecutor(max_workers=2) as executor:
        futures = [
            executor.submit(storage_backend.update_user, user.id, {"bio": "new bio"}),
            executor.submit(storage_backend.update_user, user.id, {"profile_picture": "pic.png"}),
        ]
        for future in futures:
            future.result()

    stored = storage_backend.get_user(user.id)
    assert stored.bio == "new bio"
    assert stored.profile_picture == "pic.png"
