##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the `workit_db.py` module.
"""

import logging

import pytest
from pytest_mock import MockerFixture

from workit.backends.memory.memory_backend import MemoryBackend
from workit.db_scripts.workit_db import WorkitDatabase
from workit.exceptions import EntityTypeNotSupportedError
from tests.fixture_types import FixtureCallable


@pytest.fixture
def populated_db(records_user_data: FixtureCallable, records_service_data: FixtureCallable) -> WorkitDatabase:
    """
    A `WorkitDatabase` on an in-memory backend holding two users and a service.

    Args:
        records_user_data: Builds insertable user data.
        records_service_data: Builds insertable service data.

    Returns:
        The populated database.
    """
    backend = MemoryBackend()
    alice = backend.create_user(records_user_data("alice"))
    backend.create_user(records_user_data("bob", role="employer"))
    backend.create_service(alice.id, records_service_data())
    return WorkitDatabase(backend)


class TestWorkitDatabase:
    """
    Tests for the `WorkitDatabase` class.
    """

    def test_defaults_to_the_selected_backend(self, mocker: MockerFixture):
        """
        Test that the process-wide backend is used when none is given.

        Args:
            mocker: PyTest mocker fixture.
        """
        backend = MemoryBackend()
        mocker.patch("workit.backends.storage_selector.get_storage", return_value=backend)

        assert WorkitDatabase().backend is backend

    def test_backend_details(self, populated_db: WorkitDatabase):
        """
        Test the type, version and connection string of the backend.

        Args:
            populated_db: A database holding two users and a service.
        """
        assert populated_db.get_db_type() == "memory"
        assert populated_db.get_connection_string() == "memory://"
        assert populated_db.get_db_version() == populated_db.backend.get_version()

    def test_info(self, populated_db: WorkitDatabase, capsys: pytest.CaptureFixture):
        """
        Test that `info` prints counts and previews without passwords.

        Args:
            populated_db: A database holding two users and a service.
            capsys: PyTest capsys fixture.
        """
        populated_db.info(max_preview=1)

        output = capsys.readouterr().out
        assert "Workit Database Information" in output
        assert "Users (first 1):" in output
        assert "Services (first 1):" in output
        assert "alice" in output
        assert "bob" not in output
        assert "password" not in output

    def test_info_without_preview(self, populated_db: WorkitDatabase, capsys: pytest.CaptureFixture):
        """
        Test that a preview size of 0 only prints the summary.

        Args:
            populated_db: A database holding two users and a service.
            capsys: PyTest capsys fixture.
        """
        populated_db.info(max_preview=0)

        output = capsys.readouterr().out
        assert "Users" in output
        assert "(first" not in output

    def test_get(self, populated_db: WorkitDatabase):
        """
        Test getting a record by type and id.

        Args:
            populated_db: A database holding two users and a service.
        """
        assert populated_db.get("user", 2).username == "bob"
        assert populated_db.get("service", 5) is None

    def test_invalid_entity_type_raises(self, populated_db: WorkitDatabase):
        """
        Test that unknown entity types raise `EntityTypeNotSupportedError`.

        Args:
            populated_db: A database holding two users and a service.
        """
        with pytest.raises(EntityTypeNotSupportedError):
            populated_db.get("invoice", 1)
        with pytest.raises(EntityTypeNotSupportedError):
            populated_db.get_all("invoice")

    def test_get_all_and_everything(self, populated_db: WorkitDatabase):
        """
        Test listing the records of one type and of every type.

        Args:
            populated_db: A database holding two users and a service.
        """
        assert [user.username for user in populated_db.get_all("user", {"role": "employer"})] == ["bob"]
        assert [record.entity_type for record in populated_db.get_everything()] == ["user", "user", "service"]

    def test_flush_with_force(self, populated_db: WorkitDatabase):
        """
        Test that a forced flush removes every record without asking.

        Args:
            populated_db: A database holding two users and a service.
        """
        populated_db.flush(force=True)

        assert populated_db.get_everything() == []

    def test_flush_asks_until_answered(
        self, populated_db: WorkitDatabase, monkeypatch: pytest.MonkeyPatch
    ):
        """
        Test that invalid answers are asked again and that "y" flushes.

        Args:
            populated_db: A database holding two users and a service.
            monkeypatch: PyTest monkeypatch fixture.
        """
        answers = iter(["maybe", " Y "])
        monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

        populated_db.flush()

        assert populated_db.get_everything() == []

    def test_flush_cancelled(
        self, populated_db: WorkitDatabase, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ):
        """
        Test that answering "n" keeps every record.

        Args:
            populated_db: A database holding two users and a service.
            monkeypatch: PyTest monkeypatch fixture.
            caplog: PyTest caplog fixture.
        """
        caplog.set_level(logging.INFO)
        monkeypatch.setattr("builtins.input", lambda _prompt: "n")

        populated_db.flush()

        assert len(populated_db.get_everything()) == 3
        assert "Database flush cancelled." in caplog.text
