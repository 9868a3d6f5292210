##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
MongoDB store implementations for Workit entity models.

This module defines concrete `MongoStoreBase` subclasses, one per Workit record type.
Each store is bound to a specific model and collection, and all of them share the
backend's `MongoConnection`.

See also:
    - workit.backends.mongo.mongo_store_base: Base class
    - workit.db_scripts.data_models: Data model definitions
"""

from workit.backends.mongo.mongo_connection import MongoConnection
from workit.backends.mongo.mongo_store_base import MongoStoreBase
from workit.db_scripts.data_models import (
    ApplicationModel,
    JobModel,
    OrderModel,
    ReviewModel,
    ServiceModel,
    UserModel,
)


class MongoUserStore(MongoStoreBase[UserModel]):
    """
    A MongoDB-based store for managing [`UserModel`][db_scripts.data_models.UserModel]
    objects.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the `MongoUserStore`.

        Args:
            connection: The connection shared by every store of the backend.
        """
        super().__init__("user", UserModel, connection)


class MongoServiceStore(MongoStoreBase[ServiceModel]):
    """
    A MongoDB-based store for managing [`ServiceModel`][db_scripts.data_models.ServiceModel]
    objects.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the `MongoServiceStore`.

        Args:
            connection: The connection shared by every store of the backend.
        """
        super().__init__("service", ServiceModel, connection)


class MongoJobStore(MongoStoreBase[JobModel]):
    """
    A MongoDB-based store for managing [`JobModel`][db_scripts.data_models.JobModel]
    objects.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the `MongoJobStore`.

        Args:
            connection: The connection shared by every store of the backend.
        """
        super().__init__("job", JobModel, connection)


class MongoApplicationStore(MongoStoreBase[ApplicationModel]):
    """
    A MongoDB-based store for managing [`ApplicationModel`][db_scripts.data_models.ApplicationModel]
    objects.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the `MongoApplicationStore`.

        Args:
            connection: The connection shared by every store of the backend.
        """
        super().__init__("application", ApplicationModel, connection)


class MongoOrderStore(MongoStoreBase[OrderModel]):
    """
    A MongoDB-based store for managing [`OrderModel`][db_scripts.data_models.OrderModel]
    objects.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the `MongoOrderStore`.

        Args:
            connection: The connection shared by every store of the backend.
        """
        super().__init__("order", OrderModel, connection)


class MongoReviewStore(MongoStoreBase[ReviewModel]):
    """
    A MongoDB-based store for managing [`ReviewModel`][db_scripts.data_models.ReviewModel]
    objects.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the `MongoReviewStore`.

        Args:
            connection: The connection shared by every store of the backend.
        """
        super().__init__("review", ReviewModel, connection)
