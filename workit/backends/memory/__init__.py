##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
In-memory backend infrastructure for the Workit application.

This package keeps every record in process memory. Nothing survives a restart.
It is the fallback backend when no database is configured or reachable.

Modules:
    memory_backend: Implements the `StorageBackend` interface in memory.
    memory_store_base: Defines a generic, thread-safe base class for in-memory entity stores.
    memory_stores: Contains concrete in-memory store classes for Workit models.
"""
