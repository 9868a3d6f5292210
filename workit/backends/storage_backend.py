##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Abstract base class for storage backends in the Workit application.

This module defines `StorageBackend`, an abstract base class that implements the
storage contract on top of one store per entity type. Concrete backends only need
to build their stores and answer the management queries (version, connection
string, ping).

The `StorageBackend` class encapsulates:
- Store routing for the six entity types (user, service, job, application, order, review)
- The per-entity contract operations (get, list, list by owner, create, update)
- Policies applied at creation time, such as forcing new applications and orders to "pending"

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be subclassed
    by backend-specific implementations such as `MemoryBackend`, `MongoBackend` or `SQLBackend`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from workit.backends.store_base import StoreBase
from workit.common.enums import ApplicationStatus, OrderStatus
from workit.db_scripts.data_models import (
    ApplicationModel,
    BaseDataModel,
    JobModel,
    OrderModel,
    ReviewModel,
    ServiceModel,
    UserModel,
)
from workit.exceptions import EntityTypeNotSupportedError


LOG = logging.getLogger(__name__)


class StorageBackend(ABC):  # pylint: disable=too-many-public-methods
    """
    Abstract base class for a storage backend, which provides every operation of
    the Workit storage contract by routing to per-entity stores.

    Attributes:
        backend_name (str): The name of the backend (e.g., "memory", "mongodb", "sql").
        stores (Dict[str, backends.store_base.StoreBase]): A dictionary of stores that each concrete
            implementation of this class will need to define, keyed by entity type.

    Methods:
        get_name:
            Retrieve the name of the backend.

        get_version:
            Query the backend for the current version.

        get_connection_string:
            Retrieve the connection string used to connect to the backend, credentials masked.

        ping:
            Make sure the backend can be reached.

        count:
            Count the stored records of an entity type.

        flush_database:
            Remove every record in the database.

        close:
            Release any connection held by the backend.

        retrieve / retrieve_all:
            Generic lookups by entity type, used by the operator CLI.

    The remaining public methods are the per-entity contract operations
    (`get_user`, `create_service`, `get_user_orders`, ...).
    """

    def __init__(self, backend_name: str, stores: Dict[str, StoreBase]):
        """
        Initialize the `StorageBackend` instance.

        Args:
            backend_name: The name of the backend (e.g., "memory").
            stores: The stores of this backend keyed by entity type.
        """
        self.backend_name: str = backend_name
        self.stores: Dict[str, StoreBase] = stores

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend (e.g. memory).
        """
        return self.backend_name

    @abstractmethod
    def get_version(self) -> str:
        """
        Query the backend for the current version.

        Returns:
            A string representing the current version of the backend.
        """
        raise NotImplementedError("Subclasses of `StorageBackend` must implement a `get_version` method.")

    @abstractmethod
    def get_connection_string(self) -> str:
        """
        Get the connection string of the backend with any password masked.

        Returns:
            A string representing the connection to the backend.
        """
        raise NotImplementedError("Subclasses of `StorageBackend` must implement a `get_connection_string` method.")

    @abstractmethod
    def ping(self):
        """
        Make sure the backend can be reached.

        Raises:
            BackendUnavailableError: If the backend cannot be reached.
        """
        raise NotImplementedError("Subclasses of `StorageBackend` must implement a `ping` method.")

    def close(self):
        """
        Release any connection held by this backend. Nothing to do by default.
        """

    def flush_database(self):
        """
        Remove everything stored in the database and restart id assignment.
        """
        LOG.info(f"Flushing every store of the {self.backend_name} backend...")
        for store in self.stores.values():
            store.flush()

    def _get_store_by_type(self, entity_type: str) -> StoreBase:
        """
        Get the appropriate store based on the entity type.

        Args:
            entity_type: The type of entity (e.g. "user").

        Returns:
            The corresponding store.

        Raises:
            EntityTypeNotSupportedError: If `entity_type` is not a Workit entity.
        """
        if entity_type not in self.stores:
            raise EntityTypeNotSupportedError(
                f"Invalid entity type '{entity_type}'. Valid types: {', '.join(self.stores)}."
            )
        return self.stores[entity_type]

    def count(self, entity_type: str) -> int:
        """
        Count the stored records of an entity type.

        Args:
            entity_type: The type of entity to count.

        Returns:
            The number of stored records.
        """
        return self._get_store_by_type(entity_type).count()

    def retrieve(self, entity_type: str, identifier: int) -> Optional[BaseDataModel]:
        """
        Retrieve a record of any entity type by its id.

        Args:
            entity_type: The type of entity to look up.
            identifier: The id of the record.

        Returns:
            The record if found, None otherwise.
        """
        LOG.debug(f"Retrieving '{identifier}' from store '{entity_type}'.")
        return self._get_store_by_type(entity_type).retrieve(identifier)

    def retrieve_all(self, entity_type: str, filters: Dict = None) -> List[BaseDataModel]:
        """
        Retrieve every record of an entity type that matches the filters.

        Args:
            entity_type: The type of entity to list.
            filters: Optional exact-match filters.

        Returns:
            The matching records ordered by ascending id.
        """
        return self._get_store_by_type(entity_type).retrieve_all(filters)

    ##########
    # Users
    ##########

    def get_user(self, user_id: int) -> Optional[UserModel]:
        """Get a user by id."""
        return self.stores["user"].retrieve(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserModel]:
        """Get a user by username."""
        return self.stores["user"].retrieve_by_field("username", username)

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        """Get a user by email."""
        return self.stores["user"].retrieve_by_field("email", email)

    def get_users(self, filters: Dict = None) -> List[UserModel]:
        """List users matching every filter."""
        return self.stores["user"].retrieve_all(filters)

    def create_user(self, data: Dict) -> UserModel:
        """
        Create a user.

        Args:
            data: The insertable user fields.

        Returns:
            The stored user.

        Raises:
            UniqueConstraintError: If the username or email is already taken.
        """
        return self.stores["user"].create(data)

    def update_user(self, user_id: int, updates: Dict) -> Optional[UserModel]:
        """Merge `updates` onto a user. Returns None if the user does not exist."""
        return self.stores["user"].update(user_id, updates)

    ##########
    # Services
    ##########

    def get_service(self, service_id: int) -> Optional[ServiceModel]:
        """Get a service by id."""
        return self.stores["service"].retrieve(service_id)

    def get_services(self, filters: Dict = None) -> List[ServiceModel]:
        """List services matching every filter."""
        return self.stores["service"].retrieve_all(filters)

    def get_user_services(self, user_id: int) -> List[ServiceModel]:
        """List the services owned by a user."""
        return self.stores["service"].retrieve_all({"user_id": user_id})

    def create_service(self, user_id: int, data: Dict) -> ServiceModel:
        """
        Create a service owned by `user_id`. An owner id inside `data` is ignored.

        Args:
            user_id: The id of the owner.
            data: The insertable service fields.

        Returns:
            The stored service.
        """
        return self.stores["service"].create(data, user_id=user_id)

    def update_service(self, service_id: int, updates: Dict) -> Optional[ServiceModel]:
        """Merge `updates` onto a service. Returns None if the service does not exist."""
        return self.stores["service"].update(service_id, updates)

    ##########
    # Jobs
    ##########

    def get_job(self, job_id: int) -> Optional[JobModel]:
        """Get a job by id."""
        return self.stores["job"].retrieve(job_id)

    def get_jobs(self, filters: Dict = None) -> List[JobModel]:
        """List jobs matching every filter."""
        return self.stores["job"].retrieve_all(filters)

    def get_user_jobs(self, user_id: int) -> List[JobModel]:
        """List the jobs posted by a user."""
        return self.stores["job"].retrieve_all({"user_id": user_id})

    def create_job(self, user_id: int, data: Dict) -> JobModel:
        """Create a job owned by `user_id`. An owner id inside `data` is ignored."""
        return self.stores["job"].create(data, user_id=user_id)

    def update_job(self, job_id: int, updates: Dict) -> Optional[JobModel]:
        """Merge `updates` onto a job. Returns None if the job does not exist."""
        return self.stores["job"].update(job_id, updates)

    ##########
    # Applications
    ##########

    def get_application(self, application_id: int) -> Optional[ApplicationModel]:
        """Get an application by id."""
        return self.stores["application"].retrieve(application_id)

    def get_applications(self, filters: Dict = None) -> List[ApplicationModel]:
        """List applications matching every filter."""
        return self.stores["application"].retrieve_all(filters)

    def get_applications_for_job(self, job_id: int) -> List[ApplicationModel]:
        """List the applications sent to a job."""
        return self.stores["application"].retrieve_all({"job_id": job_id})

    def get_user_applications(self, user_id: int) -> List[ApplicationModel]:
        """List the applications sent by a user."""
        return self.stores["application"].retrieve_all({"user_id": user_id})

    def create_application(self, user_id: int, data: Dict) -> ApplicationModel:
        """
        Create an application sent by `user_id`.

        The status of a new application is always "pending", whatever `data` holds.

        Args:
            user_id: The id of the applicant.
            data: The insertable application fields.

        Returns:
            The stored application.
        """
        return self.stores["application"].create(data, user_id=user_id, status=ApplicationStatus.PENDING)

    def update_application(self, application_id: int, updates: Dict) -> Optional[ApplicationModel]:
        """Merge `updates` onto an application. Returns None if the application does not exist."""
        return self.stores["application"].update(application_id, updates)

    def update_application_status(
        self, application_id: int, status: ApplicationStatus
    ) -> Optional[ApplicationModel]:
        """Set the status of an application. Returns None if the application does not exist."""
        return self.update_application(application_id, {"status": status})

    ##########
    # Orders
    ##########

    def get_order(self, order_id: int) -> Optional[OrderModel]:
        """Get an order by id."""
        return self.stores["order"].retrieve(order_id)

    def get_orders(self, filters: Dict = None) -> List[OrderModel]:
        """List orders matching every filter."""
        return self.stores["order"].retrieve_all(filters)

    def get_orders_for_service(self, service_id: int) -> List[OrderModel]:
        """List the orders placed for a service."""
        return self.stores["order"].retrieve_all({"service_id": service_id})

    def get_user_orders(self, user_id: int) -> List[OrderModel]:
        """List the orders a user takes part in, either as the buyer or as the seller."""
        return self.stores["order"].retrieve_any({"buyer_id": user_id, "seller_id": user_id})

    def create_order(self, data: Dict) -> OrderModel:
        """
        Create an order. The status of a new order is always "pending".

        Args:
            data: The insertable order fields, including the caller-resolved `seller_id`.

        Returns:
            The stored order.
        """
        return self.stores["order"].create(data, status=OrderStatus.PENDING)

    def update_order(self, order_id: int, updates: Dict) -> Optional[OrderModel]:
        """Merge `updates` onto an order. Returns None if the order does not exist."""
        return self.stores["order"].update(order_id, updates)

    ##########
    # Reviews
    ##########

    def get_review(self, review_id: int) -> Optional[ReviewModel]:
        """Get a review by id."""
        return self.stores["review"].retrieve(review_id)

    def get_reviews(self, filters: Dict = None) -> List[ReviewModel]:
        """List reviews matching every filter."""
        return self.stores["review"].retrieve_all(filters)

    def get_reviews_for_service(self, service_id: int) -> List[ReviewModel]:
        """List the reviews of a service."""
        return self.stores["review"].retrieve_all({"service_id": service_id})

    def get_user_reviews(self, user_id: int) -> List[ReviewModel]:
        """List the reviews written by a user."""
        return self.stores["review"].retrieve_all({"user_id": user_id})

    def create_review(self, data: Dict) -> ReviewModel:
        """Create a review. The rating must be an integer between 1 and 5."""
        return self.stores["review"].create(data)
