##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the `mongo_connection.py` module.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError
from pytest_mock import MockerFixture

from workit.backends.mongo.mongo_connection import ConnectionState, MongoConnection
from workit.exceptions import BackendUnavailableError


class TestMongoConnection:
    """
    Tests for the lazy, memoized MongoDB connection.
    """

    @pytest.fixture
    def mock_client(self, mocker: MockerFixture) -> MagicMock:
        """
        A mocked MongoDB client whose server always answers.

        Args:
            mocker: PyTest mocker fixture.

        Returns:
            The mocked client.
        """
        client = mocker.MagicMock(name="client")
        client.server_info.return_value = {"version": "7.0.0"}
        return client

    def test_nothing_happens_until_first_use(self, mocker: MockerFixture):
        """
        Test that creating the connection does not contact the server.

        Args:
            mocker: PyTest mocker fixture.
        """
        factory = mocker.MagicMock()

        connection = MongoConnection("mongodb://localhost:27017", "workit", client_factory=factory)

        factory.assert_not_called()
        assert connection.state == ConnectionState.IDLE

    def test_connects_once_and_memoizes(self, mocker: MockerFixture, mock_client: MagicMock):
        """
        Test that the first call connects, runs the on-connect hook and that later
        calls reuse the connection.

        Args:
            mocker: PyTest mocker fixture.
            mock_client: A mocked MongoDB client.
        """
        factory = mocker.MagicMock(return_value=mock_client)
        on_connect = mocker.MagicMock()
        connection = MongoConnection(
            "mongodb://localhost:27017",
            "workit",
            client_factory=factory,
            server_selection_timeout_ms=250,
            on_connect=on_connect,
        )

        database = connection.get_database()

        assert connection.get_database() is database
        assert connection.get_client() is mock_client
        assert connection.state == ConnectionState.CONNECTED
        factory.assert_called_once_with("mongodb://localhost:27017", serverSelectionTimeoutMS=250)
        mock_client.__getitem__.assert_called_once_with("workit")
        on_connect.assert_called_once_with(database)

    def test_concurrent_first_calls_share_one_setup(self, mocker: MockerFixture, mock_client: MagicMock):
        """
        Test that callers arriving while the setup is in flight wait for it
        instead of starting their own.

        Args:
            mocker: PyTest mocker fixture.
            mock_client: A mocked MongoDB client.
        """

        def slow_factory(*args, **kwargs):
            time.sleep(0.1)
            return mock_client

        factory = mocker.MagicMock(side_effect=slow_factory)
        connection = MongoConnection("mongodb://localhost:27017", "workit", client_factory=factory)
        start = threading.Barrier(8)

        def get_database(_):
            start.wait()
            return connection.get_database()

        with ThreadPoolExecutor(max_workers=8) as executor:
            databases = list(executor.map(get_database, range(8)))

        factory.assert_called_once()
        assert all(database is databases[0] for database in databases)

    def test_failure_is_reported_to_every_waiter(self, mocker: MockerFixture):
        """
        Test that a failed setup raises `BackendUnavailableError` in the caller
        that ran it and in every caller that waited on it.

        Args:
            mocker: PyTest mocker fixture.
        """
        release = threading.Event()

        def failing_factory(*args, **kwargs):
            release.wait(timeout=5)
            raise ServerSelectionTimeoutError("no servers found")

        connection = MongoConnection(
            "mongodb://localhost:27017", "workit", client_factory=mocker.MagicMock(side_effect=failing_factory)
        )
        errors = []

        def get_database():
            try:
                connection.get_database()
            except BackendUnavailableError as exc:
                errors.append(exc)

        owner = threading.Thread(target=get_database)
        owner.start()
        while connection.state != ConnectionState.CONNECTING:
            time.sleep(0.01)
        waiters = [threading.Thread(target=get_database) for _ in range(3)]
        for waiter in waiters:
            waiter.start()
        time.sleep(0.05)
        release.set()
        for thread in [owner, *waiters]:
            thread.join(timeout=5)

        assert len(errors) == 4
        assert connection.state == ConnectionState.FAILED

    def test_failure_allows_retry(self, mocker: MockerFixture, mock_client: MagicMock):
        """
        Test that a later call retries after a failed setup.

        Args:
            mocker: PyTest mocker fixture.
            mock_client: A mocked MongoDB client.
        """
        factory = mocker.MagicMock(side_effect=[ServerSelectionTimeoutError("no servers found"), mock_client])
        connection = MongoConnection("mongodb://user:secret@db:27017", "workit", client_factory=factory)

        with pytest.raises(BackendUnavailableError) as excinfo:
            connection.get_database()
        assert connection.state == ConnectionState.FAILED
        assert "secret" not in str(excinfo.value)

        connection.get_database()
        assert connection.state == ConnectionState.CONNECTED
        assert factory.call_count == 2

    def test_failed_ping_closes_the_client(self, mocker: MockerFixture, mock_client: MagicMock):
        """
        Test that a client whose server does not answer is closed.

        Args:
            mocker: PyTest mocker fixture.
            mock_client: A mocked MongoDB client.
        """
        mock_client.server_info.side_effect = ServerSelectionTimeoutError("no servers found")
        connection = MongoConnection(
            "mongodb://localhost:27017", "workit", client_factory=mocker.MagicMock(return_value=mock_client)
        )

        with pytest.raises(BackendUnavailableError):
            connection.get_database()
        mock_client.close.assert_called_once()

    def test_close_returns_to_idle(self, mocker: MockerFixture, mock_client: MagicMock):
        """
        Test that closing releases the client and that the next call reconnects.

        Args:
            mocker: PyTest mocker fixture.
            mock_client: A mocked MongoDB client.
        """
        factory = mocker.MagicMock(return_value=mock_client)
        connection = MongoConnection("mongodb://localhost:27017", "workit", client_factory=factory)
        connection.get_database()

        connection.close()

        assert connection.state == ConnectionState.IDLE
        mock_client.close.assert_called_once()
        connection.get_database()
        assert factory.call_count == 2
