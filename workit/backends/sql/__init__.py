##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Relational backend infrastructure for the Workit application.

This package persists Workit's records in a relational database through
SQLAlchemy Core. PostgreSQL is the production target and SQLite is accepted
for local use and tests.

Modules:
    sql_backend: Implements the `StorageBackend` interface using SQLAlchemy.
    sql_connection: Builds the engine from a database URL and translates driver errors.
    sql_tables: Derives the table definitions from the data models.
    sql_store_base: Defines a generic base class for table-backed stores.
    sql_stores: Contains concrete SQL store classes for Workit models.
"""
