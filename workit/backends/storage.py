##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
The storage contract every Workit backend satisfies.

Callers (the marketplace layer, the CLI, an HTTP layer) type against `Storage`
only and never against a concrete backend class. Lookups of a missing id return
None, list operations return records ordered by ascending id, and every returned
record is a copy that callers may mutate freely.
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from workit.common.enums import ApplicationStatus
from workit.db_scripts.data_models import (
    ApplicationModel,
    JobModel,
    OrderModel,
    ReviewModel,
    ServiceModel,
    UserModel,
)


@runtime_checkable
class Storage(Protocol):  # pylint: disable=too-many-public-methods
    """
    Protocol listing every operation of the Workit storage contract.
    """

    # Backend management

    def get_name(self) -> str: ...

    def get_version(self) -> str: ...

    def get_connection_string(self) -> str: ...

    def ping(self): ...

    def count(self, entity_type: str) -> int: ...

    def flush_database(self): ...

    def close(self): ...

    # Users

    def get_user(self, user_id: int) -> Optional[UserModel]: ...

    def get_user_by_username(self, username: str) -> Optional[UserModel]: ...

    def get_user_by_email(self, email: str) -> Optional[UserModel]: ...

    def get_users(self, filters: Dict = None) -> List[UserModel]: ...

    def create_user(self, data: Dict) -> UserModel: ...

    def update_user(self, user_id: int, updates: Dict) -> Optional[UserModel]: ...

    # Services

    def get_service(self, service_id: int) -> Optional[ServiceModel]: ...

    def get_services(self, filters: Dict = None) -> List[ServiceModel]: ...

    def get_user_services(self, user_id: int) -> List[ServiceModel]: ...

    def create_service(self, user_id: int, data: Dict) -> ServiceModel: ...

    def update_service(self, service_id: int, updates: Dict) -> Optional[ServiceModel]: ...

    # Jobs

    def get_job(self, job_id: int) -> Optional[JobModel]: ...

    def get_jobs(self, filters: Dict = None) -> List[JobModel]: ...

    def get_user_jobs(self, user_id: int) -> List[JobModel]: ...

    def create_job(self, user_id: int, data: Dict) -> JobModel: ...

    def update_job(self, job_id: int, updates: Dict) -> Optional[JobModel]: ...

    # Applications

    def get_application(self, application_id: int) -> Optional[ApplicationModel]: ...

    def get_applications(self, filters: Dict = None) -> List[ApplicationModel]: ...

    def get_applications_for_job(self, job_id: int) -> List[ApplicationModel]: ...

    def get_user_applications(self, user_id: int) -> List[ApplicationModel]: ...

    def create_application(self, user_id: int, data: Dict) -> ApplicationModel: ...

    def update_application(self, application_id: int, updates: Dict) -> Optional[ApplicationModel]: ...

    def update_application_status(
        self, application_id: int, status: ApplicationStatus
    ) -> Optional[ApplicationModel]: ...

    # Orders

    def get_order(self, order_id: int) -> Optional[OrderModel]: ...

    def get_orders(self, filters: Dict = None) -> List[OrderModel]: ...

    def get_orders_for_service(self, service_id: int) -> List[OrderModel]: ...

    def get_user_orders(self, user_id: int) -> List[OrderModel]: ...

    def create_order(self, data: Dict) -> OrderModel: ...

    def update_order(self, order_id: int, updates: Dict) -> Optional[OrderModel]: ...

    # Reviews

    def get_review(self, review_id: int) -> Optional[ReviewModel]: ...

    def get_reviews(self, filters: Dict = None) -> List[ReviewModel]: ...

    def get_reviews_for_service(self, service_id: int) -> List[ReviewModel]: ...

    def get_user_reviews(self, user_id: int) -> List[ReviewModel]: ...

    def create_review(self, data: Dict) -> ReviewModel: ...
