##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Marketplace rules that sit on top of the storage contract.

The storage layer trusts its callers: it does not check who owns a record, it
does not resolve prices, and it returns passwords. `Marketplace` is the caller
that enforces those rules before touching storage, so an HTTP layer (or a script)
only has to map its requests onto these methods.
"""

import logging
from typing import Dict, List, Optional

from workit.backends.storage import Storage
from workit.common.enums import ApplicationStatus
from workit.db_scripts.data_models import (
    ApplicationModel,
    BaseDataModel,
    JobModel,
    OrderModel,
    ReviewModel,
    ServiceModel,
    UserModel,
)
from workit.exceptions import EntityNotFoundError, InvalidFieldError, PermissionDeniedError, UniqueConstraintError


LOG = logging.getLogger(__name__)

DECISION_STATUSES = (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED)


class Marketplace:
    """
    Applies ownership, pricing and redaction rules on top of a `Storage` backend.

    Attributes:
        storage (Storage): The backend every operation goes through.

    Methods:
        public_user: Redacted, camelCase view of a user.
        register_user: Create a user after checking the username and email are free.
        update_profile: Let a user update their own profile.
        post_service: Create a service owned by an existing user.
        post_job: Create a job owned by an existing user.
        apply_to_job: Apply to somebody else's job.
        job_applications: List the applications of a job, for its owner only.
        decide_application: Approve or reject an application, for the job owner only.
        place_order: Order somebody else's service at the service's price.
        review_service: Review somebody else's service.
        services_with_owners: List services with their redacted owners attached.
        jobs_with_owners: List jobs with their redacted owners attached.
        reviews_with_authors: List the reviews of a service with their redacted authors attached.
    """

    def __init__(self, storage: Storage):
        """
        Args:
            storage: The backend every operation goes through.
        """
        self.storage: Storage = storage

    @staticmethod
    def public_user(user: UserModel) -> Dict:
        """
        Build the externally visible form of a user. The password is never included.

        Args:
            user: The stored user.

        Returns:
            A camelCase dictionary of the user's fields without `password`.
        """
        return user.to_public_dict(redact=True)

    def _require_user(self, user_id: int) -> UserModel:
        user = self.storage.get_user(user_id)
        if user is None:
            raise EntityNotFoundError(f"User '{user_id}' does not exist.")
        return user

    def _require_job(self, job_id: int) -> JobModel:
        job = self.storage.get_job(job_id)
        if job is None:
            raise EntityNotFoundError(f"Job '{job_id}' does not exist.")
        return job

    def _require_service(self, service_id: int) -> ServiceModel:
        service = self.storage.get_service(service_id)
        if service is None:
            raise EntityNotFoundError(f"Service '{service_id}' does not exist.")
        return service

    def _attach_user(self, entity: BaseDataModel, user_id: int, key: str = "user") -> Dict:
        """
        Build the public form of `entity` with the redacted user `user_id` attached
        under `key`. The user is left out if it no longer exists.
        """
        public = entity.to_public_dict()
        user = self.storage.get_user(user_id)
        if user is not None:
            public[key] = self.public_user(user)
        return public

    def register_user(self, data: Dict) -> UserModel:
        """
        Create a user account.

        The username and then the email are checked up front so the caller gets a
        precise error. The storage layer still enforces uniqueness when two
        registrations race.

        Args:
            data: The insertable user fields.

        Returns:
            The stored user.

        Raises:
            UniqueConstraintError: If the username or email is already taken.
            InvalidFieldError: If the user fails validation.
        """
        username = data.get("username")
        if username is not None and self.storage.get_user_by_username(username) is not None:
            raise UniqueConstraintError("username", username, "Username already exists")
        email = data.get("email")
        if email is not None and self.storage.get_user_by_email(email) is not None:
            raise UniqueConstraintError("email", email, "Email already exists")

        user = self.storage.create_user(data)
        LOG.info(f"Registered user '{user.username}' with id '{user.id}'.")
        return user

    def update_profile(self, acting_user_id: int, user_id: int, updates: Dict) -> UserModel:
        """
        Update a user's profile. Users may only update their own profile.

        Raises:
            PermissionDeniedError: If `acting_user_id` is not `user_id`.
            EntityNotFoundError: If the user does not exist.
        """
        if acting_user_id != user_id:
            raise PermissionDeniedError("You can only update your own profile.")
        user = self.storage.update_user(user_id, updates)
        if user is None:
            raise EntityNotFoundError(f"User '{user_id}' does not exist.")
        return user

    def post_service(self, user_id: int, data: Dict) -> ServiceModel:
        """
        Create a service owned by `user_id`.

        Raises:
            EntityNotFoundError: If the owner does not exist.
        """
        self._require_user(user_id)
        return self.storage.create_service(user_id, data)

    def post_job(self, user_id: int, data: Dict) -> JobModel:
        """
        Create a job owned by `user_id`.

        Raises:
            EntityNotFoundError: If the owner does not exist.
        """
        self._require_user(user_id)
        return self.storage.create_job(user_id, data)

    def apply_to_job(self, user_id: int, job_id: int, data: Dict) -> ApplicationModel:
        """
        Send an application to a job. The application always starts as "pending".

        Args:
            user_id: The id of the applicant.
            job_id: The id of the job.
            data: The remaining insertable application fields (description, resume_file).

        Returns:
            The stored application.

        Raises:
            EntityNotFoundError: If the job does not exist.
            PermissionDeniedError: If the applicant owns the job.
        """
        job = self._require_job(job_id)
        if job.user_id == user_id:
            raise PermissionDeniedError("You cannot apply to your own job.")
        return self.storage.create_application(user_id, {**data, "job_id": job_id})

    def job_applications(self, owner_id: int, job_id: int) -> List[Dict]:
        """
        List the applications of a job with their redacted applicants attached.

        Raises:
            EntityNotFoundError: If the job does not exist.
            PermissionDeniedError: If `owner_id` does not own the job.
        """
        job = self._require_job(job_id)
        if job.user_id != owner_id:
            raise PermissionDeniedError("You are not authorized to view these applications.")
        return [
            self._attach_user(application, application.user_id)
            for application in self.storage.get_applications_for_job(job_id)
        ]

    def decide_application(self, owner_id: int, application_id: int, status: str) -> ApplicationModel:
        """
        Approve or reject an application.

        Args:
            owner_id: The id of the user making the decision.
            application_id: The id of the application.
            status: Either "approved" or "rejected".

        Returns:
            The updated application.

        Raises:
            InvalidFieldError: If `status` is not a decision.
            EntityNotFoundError: If the application or its job does not exist.
            PermissionDeniedError: If `owner_id` does not own the job.
        """
        try:
            decision = ApplicationStatus(status)
        except ValueError as exc:
            raise InvalidFieldError(f"Invalid status '{status}'.") from exc
        if decision not in DECISION_STATUSES:
            raise InvalidFieldError(f"Invalid status '{status}'. Expected 'approved' or 'rejected'.")

        application = self.storage.get_application(application_id)
        if application is None:
            raise EntityNotFoundError(f"Application '{application_id}' does not exist.")
        job = self._require_job(application.job_id)
        if job.user_id != owner_id:
            raise PermissionDeniedError("You are not authorized to update this application.")

        LOG.info(f"Application '{application_id}' was {decision.value} by user '{owner_id}'.")
        return self.storage.update_application_status(application_id, decision)

    def place_order(self, buyer_id: int, service_id: int, data: Dict) -> OrderModel:
        """
        Order a service.

        The seller and the price always come from the service; values supplied by
        the client for `seller_id` or `total_price` are ignored.

        Args:
            buyer_id: The id of the buyer.
            service_id: The id of the ordered service.
            data: The remaining order fields (payment_method).

        Returns:
            The stored order, in the "pending" state.

        Raises:
            EntityNotFoundError: If the service does not exist.
            PermissionDeniedError: If the buyer owns the service.
        """
        service = self._require_service(service_id)
        if service.user_id == buyer_id:
            raise PermissionDeniedError("You cannot order your own service.")
        order_data = {
            **data,
            "service_id": service_id,
            "buyer_id": buyer_id,
            "seller_id": service.user_id,
            "total_price": service.price,
        }
        return self.storage.create_order(order_data)

    def review_service(self, user_id: int, service_id: int, data: Dict) -> ReviewModel:
        """
        Review a service.

        Raises:
            EntityNotFoundError: If the service does not exist.
            PermissionDeniedError: If the reviewer owns the service.
        """
        service = self._require_service(service_id)
        if service.user_id == user_id:
            raise PermissionDeniedError("You cannot review your own service.")
        return self.storage.create_review({**data, "service_id": service_id, "user_id": user_id})

    def services_with_owners(self, filters: Optional[Dict] = None) -> List[Dict]:
        """List services matching `filters`, each with its redacted owner under "user"."""
        return [self._attach_user(service, service.user_id) for service in self.storage.get_services(filters)]

    def jobs_with_owners(self, filters: Optional[Dict] = None) -> List[Dict]:
        """List jobs matching `filters`, each with its redacted owner under "user"."""
        return [self._attach_user(job, job.user_id) for job in self.storage.get_jobs(filters)]

    def reviews_with_authors(self, service_id: int) -> List[Dict]:
        """List the reviews of a service, each with its redacted author under "user"."""
        return [self._attach_user(review, review.user_id) for review in self.storage.get_reviews_for_service(service_id)]
