##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
In-memory store implementations for Workit entity models.

This module defines concrete `MemoryStoreBase` subclasses, one per Workit record type.
Each store is bound to a specific model and entity type.

See also:
    - workit.backends.memory.memory_store_base: Base class
    - workit.db_scripts.data_models: Data model definitions
"""

from workit.backends.memory.memory_store_base import MemoryStoreBase
from workit.db_scripts.data_models import (
    ApplicationModel,
    JobModel,
    OrderModel,
    ReviewModel,
    ServiceModel,
    UserModel,
)


class MemoryUserStore(MemoryStoreBase[UserModel]):
    """
    A memory-based store for managing [`UserModel`][db_scripts.data_models.UserModel]
    objects.
    """

    def __init__(self):
        """Initialize the `MemoryUserStore`."""
        super().__init__("user", UserModel)


class MemoryServiceStore(MemoryStoreBase[ServiceModel]):
    """
    A memory-based store for managing [`ServiceModel`][db_scripts.data_models.ServiceModel]
    objects.
    """

    def __init__(self):
        """Initialize the `MemoryServiceStore`."""
        super().__init__("service", ServiceModel)


class MemoryJobStore(MemoryStoreBase[JobModel]):
    """
    A memory-based store for managing [`JobModel`][db_scripts.data_models.JobModel]
    objects.
    """

    def __init__(self):
        """Initialize the `MemoryJobStore`."""
        super().__init__("job", JobModel)


class MemoryApplicationStore(MemoryStoreBase[ApplicationModel]):
    """
    A memory-based store for managing [`ApplicationModel`][db_scripts.data_models.ApplicationModel]
    objects.
    """

    def __init__(self):
        """Initialize the `MemoryApplicationStore`."""
        super().__init__("application", ApplicationModel)


class MemoryOrderStore(MemoryStoreBase[OrderModel]):
    """
    A memory-based store for managing [`OrderModel`][db_scripts.data_models.OrderModel]
    objects.
    """

    def __init__(self):
        """Initialize the `MemoryOrderStore`."""
        super().__init__("order", OrderModel)


class MemoryReviewStore(MemoryStoreBase[ReviewModel]):
    """
    A memory-based store for managing [`ReviewModel`][db_scripts.data_models.ReviewModel]
    objects.
    """

    def __init__(self):
        """Initialize the `MemoryReviewStore`."""
        super().__init__("review", ReviewModel)
