##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
MongoDB-based backend infrastructure for the Workit application.

This package persists Workit's records in MongoDB collections, one per entity
type, with camelCase document keys and integer ids.

Modules:
    mongo_backend: Implements the `StorageBackend` interface using MongoDB.
    mongo_connection: Lazily establishes and memoizes the client connection.
    mongo_store_base: Defines a generic base class for collection-backed stores.
    mongo_stores: Contains concrete MongoDB store classes for Workit models.
"""
