##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Engine construction and error translation for the relational backend.

PostgreSQL URLs are rewritten to use the psycopg driver. SQLite URLs are accepted
as-is for local use and tests; the parent directory of a SQLite database file is
created if it does not exist.
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from workit.exceptions import BackendUnavailableError


LOG = logging.getLogger(__name__)

POSTGRES_DRIVER = "postgresql+psycopg"


def normalize_database_url(url: str) -> str:
    """
    Rewrite `postgres://` and `postgresql://` URLs to the psycopg driver.

    Args:
        url: A database URL.

    Returns:
        The URL SQLAlchemy should connect with.
    """
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return f"{POSTGRES_DRIVER}://{url[len(scheme):]}"
    return url


def create_database_engine(url: str, echo: bool = False) -> Engine:
    """
    Build the SQLAlchemy engine for a database URL.

    Args:
        url: A PostgreSQL or SQLite URL.
        echo: If True, SQLAlchemy logs every statement.

    Returns:
        The engine. No connection is opened yet.
    """
    normalized = normalize_database_url(url)
    url_obj = make_url(normalized)
    engine_kwargs = {"echo": echo}

    if url_obj.get_backend_name() == "sqlite":
        if url_obj.database and url_obj.database != ":memory:":
            Path(url_obj.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
        else:
            # One shared connection, so every thread sees the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_pre_ping"] = True

    LOG.debug(f"Creating a SQLAlchemy engine for '{url_obj.render_as_string(hide_password=True)}'.")
    return create_engine(url_obj, **engine_kwargs)


@contextmanager
def unavailable_on_operational_error(action: str):
    """
    Context manager translating SQLAlchemy `OperationalError`s (lost or refused
    connections) into `BackendUnavailableError`.

    Args:
        action: A short description of the operation, used in the error message.
    """
    try:
        yield
    except OperationalError as exc:
        raise BackendUnavailableError(f"The database is unavailable while trying to {action}: {exc.orig}") from exc
