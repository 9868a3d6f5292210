##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Backend infrastructure for the Workit application.

The `backends` package provides a unified contract and implementations for persisting
and retrieving Workit's marketplace records (users, services, jobs, applications, orders
and reviews) across several storage technologies. It defines the storage contract
(`Storage`), an abstract routing base (`StorageBackend`) and three concrete backends,
as well as utility functions, store abstractions, a backend factory and the
process-wide backend selection policy.

Subpackages:
    memory: In-memory backend implementation, used when nothing else is configured and in tests.
    mongo: MongoDB-based backend implementation built on pymongo.
    sql: Relational backend implementation built on SQLAlchemy Core (PostgreSQL or SQLite).

Modules:
    backend_factory: Contains `WorkitBackendFactory`, used to dynamically select and instantiate a backend.
    storage: Defines the `Storage` protocol that callers type against.
    storage_backend: Defines the abstract `StorageBackend` base class for backend implementations.
    storage_selector: Decides once per process which backend serves the application.
    store_base: Provides the abstract `StoreBase` class, the foundation for all store implementations.
    utils: Utility functions for converting records to and from stored documents.
"""
