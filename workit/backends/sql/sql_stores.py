##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
SQL store implementations for Workit entity models.

This module defines concrete `SQLStoreBase` subclasses, one per Workit record type.
Each store is bound to a specific model and table, and all of them share the
backend's engine.

See also:
    - workit.backends.sql.sql_store_base: Base class
    - workit.db_scripts.data_models: Data model definitions
"""

from sqlalchemy.engine import Engine

from workit.backends.sql.sql_store_base import SQLStoreBase
from workit.db_scripts.data_models import (
    ApplicationModel,
    JobModel,
    OrderModel,
    ReviewModel,
    ServiceModel,
    UserModel,
)


class SQLUserStore(SQLStoreBase[UserModel]):
    """
    A SQL-based store for managing [`UserModel`][db_scripts.data_models.UserModel]
    objects.
    """

    def __init__(self, engine: Engine):
        """Initialize the `SQLUserStore`."""
        super().__init__("user", UserModel, engine)


class SQLServiceStore(SQLStoreBase[ServiceModel]):
    """
    A SQL-based store for managing [`ServiceModel`][db_scripts.data_models.ServiceModel]
    objects.
    """

    def __init__(self, engine: Engine):
        """Initialize the `SQLServiceStore`."""
        super().__init__("service", ServiceModel, engine)


class SQLJobStore(SQLStoreBase[JobModel]):
    """
    A SQL-based store for managing [`JobModel`][db_scripts.data_models.JobModel]
    objects.
    """

    def __init__(self, engine: Engine):
        """Initialize the `SQLJobStore`."""
        super().__init__("job", JobModel, engine)


class SQLApplicationStore(SQLStoreBase[ApplicationModel]):
    """
    A SQL-based store for managing [`ApplicationModel`][db_scripts.data_models.ApplicationModel]
    objects.
    """

    def __init__(self, engine: Engine):
        """Initialize the `SQLApplicationStore`."""
        super().__init__("application", ApplicationModel, engine)


class SQLOrderStore(SQLStoreBase[OrderModel]):
    """
    A SQL-based store for managing [`OrderModel`][db_scripts.data_models.OrderModel]
    objects.
    """

    def __init__(self, engine: Engine):
        """Initialize the `SQLOrderStore`."""
        super().__init__("order", OrderModel, engine)


class SQLReviewStore(SQLStoreBase[ReviewModel]):
    """
    A SQL-based store for managing [`ReviewModel`][db_scripts.data_models.ReviewModel]
    objects.
    """

    def __init__(self, engine: Engine):
        """Initialize the `SQLReviewStore`."""
        super().__init__("review", ReviewModel, engine)
