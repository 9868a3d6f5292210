##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the `database` command and its `get` subcommand.
"""

import json
import logging
from argparse import Namespace
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from workit.backends.memory.memory_backend import MemoryBackend
from workit.cli.commands.database.get import DatabaseGetCommand
from workit.db_scripts.workit_db import WorkitDatabase
from tests.fixture_types import FixtureCallable


@pytest.fixture
def mock_workit_db(mocker: MockerFixture) -> MagicMock:
    """
    Fixture that mocks the `WorkitDatabase` class used in the `database.get` module.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        The mocked `WorkitDatabase` class.
    """
    return mocker.patch("workit.cli.commands.database.get.WorkitDatabase")


@pytest.fixture
def memory_db(
    mocker: MockerFixture, records_user_data: FixtureCallable, records_service_data: FixtureCallable
) -> WorkitDatabase:
    """
    Patch the `database.get` module to use a real database on an in-memory
    backend holding two users and a service.

    Args:
        mocker: PyTest mocker fixture.
        records_user_data: Builds insertable user data.
        records_service_data: Builds insertable service data.

    Returns:
        The database the command will read.
    """
    backend = MemoryBackend()
    alice = backend.create_user(records_user_data("alice"))
    backend.create_user(records_user_data("bob", role="employer"))
    backend.create_service(alice.id, records_service_data())
    workit_db = WorkitDatabase(backend)
    mocker.patch("workit.cli.commands.database.get.WorkitDatabase", return_value=workit_db)
    return workit_db


@pytest.fixture
def command() -> DatabaseGetCommand:
    """
    Fixture that returns a fresh instance of the `DatabaseGetCommand` class.

    Returns:
        A new instance of the command.
    """
    return DatabaseGetCommand()


def test_add_parser_registers_get_subcommands(command: DatabaseGetCommand, create_parser: FixtureCallable):
    """
    Test that `get` parses the singular, `all-` and `everything` forms.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        create_parser: Builds a parser around a command.
    """
    parser = create_parser(command)

    assert parser.parse_args(["get", "everything"]).get_type == "everything"
    assert parser.parse_args(["get", "review", "1"]).entity == [1]
    args = parser.parse_args(["get", "all-reviews", "--rating", "5"])
    assert args.rating == 5
    assert args.func == command.process_command


def test_process_command_applies_backend_override(
    command: DatabaseGetCommand, mock_workit_db: MagicMock, mocker: MockerFixture
):
    """
    Test that the `--backend` override is applied before the database is opened.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        mock_workit_db: Mocked `WorkitDatabase` class.
        mocker: PyTest mocker fixture.
    """
    override_mock = mocker.patch("workit.cli.commands.database.get.apply_backend_override")
    args = Namespace(get_type="everything", backend="sql")

    command.process_command(args)

    override_mock.assert_called_once_with(args)
    mock_workit_db.assert_called_once_with()


def test_process_command_get_everything(command: DatabaseGetCommand, mock_workit_db: MagicMock, mocker: MockerFixture):
    """
    Test that `everything` hands every record to `_print_items`.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        mock_workit_db: Mocked `WorkitDatabase` class.
        mocker: PyTest mocker fixture.
    """
    mock_print_items = mocker.patch.object(command, "_print_items")

    command.process_command(Namespace(get_type="everything", backend=None))

    mock_print_items.assert_called_once_with(
        mock_workit_db.return_value.get_everything.return_value, "Nothing found in the database."
    )


def test_process_command_all_entities_with_filters(command: DatabaseGetCommand, mock_workit_db: MagicMock):
    """
    Test that `all-<entities>` passes the given filters to `get_all`.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        mock_workit_db: Mocked `WorkitDatabase` class.
    """
    mock_workit_db.return_value.get_all.return_value = []
    args = Namespace(get_type="all-applications", backend=None, job_id=4, user_id=None, status="pending")

    command.process_command(args)

    mock_workit_db.return_value.get_all.assert_called_once_with(
        "application", filters={"job_id": 4, "status": "pending"}
    )


def test_get_by_id_prints_redacted_json(command: DatabaseGetCommand, memory_db: WorkitDatabase, capsys):
    """
    Test that records are printed as JSON without passwords.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        memory_db: The database the command reads.
        capsys: PyTest capsys fixture.
    """
    command.process_command(Namespace(get_type="user", entity=[2], backend=None))

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    printed = json.loads(lines[0])
    assert printed["username"] == "bob"
    assert "password" not in printed


def test_get_missing_ids_warns(
    command: DatabaseGetCommand, memory_db: WorkitDatabase, capsys, caplog: pytest.LogCaptureFixture
):
    """
    Test that a warning is logged per missing id and that found records still print.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        memory_db: The database the command reads.
        capsys: PyTest capsys fixture.
        caplog: PyTest caplog fixture.
    """
    caplog.set_level(logging.INFO)

    command.process_command(Namespace(get_type="service", entity=[1, 8], backend=None))

    assert len(capsys.readouterr().out.strip().splitlines()) == 1
    assert "No service found with id '8'." in caplog.text


def test_get_all_with_no_match_logs(
    command: DatabaseGetCommand, memory_db: WorkitDatabase, capsys, caplog: pytest.LogCaptureFixture
):
    """
    Test that an empty result logs a message naming the filters.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        memory_db: The database the command reads.
        capsys: PyTest capsys fixture.
        caplog: PyTest caplog fixture.
    """
    caplog.set_level(logging.INFO)
    args = Namespace(get_type="all-jobs", backend=None, user_id=1, category=None, job_type=None, location=None, status=None)

    command.process_command(args)

    assert capsys.readouterr().out == ""
    assert "No jobs with filters {'user_id': 1} found in the database." in caplog.text


def test_get_everything_prints_each_record(command: DatabaseGetCommand, memory_db: WorkitDatabase, capsys):
    """
    Test that `everything` prints one line per stored record.

    Args:
        command: Instance of the `DatabaseGetCommand` under test.
        memory_db: The database the command reads.
        capsys: PyTest capsys fixture.
    """
    command.process_command(Namespace(get_type="everything", backend=None))

    assert len(capsys.readouterr().out.strip().splitlines()) == 3
