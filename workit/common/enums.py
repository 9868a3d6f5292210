##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""This module provides the enumerated value sets used by Workit's records."""
from enum import Enum


__all__ = (
    "UserRole",
    "ServiceStatus",
    "JobStatus",
    "ApplicationStatus",
    "PaymentMethod",
    "OrderStatus",
)


class UserRole(str, Enum):
    """
    Enum for the role a user signed up with.

    Attributes:
        FREELANCER: A user that offers services and applies to jobs.
        EMPLOYER: A user that posts jobs and buys services.
    """

    FREELANCER = "freelancer"
    EMPLOYER = "employer"


class ServiceStatus(str, Enum):
    """
    Enum for the visibility of a service listing.

    Attributes:
        ACTIVE: The service can be ordered.
        INACTIVE: The service was withdrawn by its owner.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"


class JobStatus(str, Enum):
    """
    Enum for the state of a job posting.

    Attributes:
        OPEN: The job accepts applications.
        CLOSED: The job no longer accepts applications.
    """

    OPEN = "open"
    CLOSED = "closed"


class ApplicationStatus(str, Enum):
    """
    Enum for the review state of a job application.

    Attributes:
        PENDING: The job owner has not decided yet.
        APPROVED: The job owner accepted the applicant.
        REJECTED: The job owner declined the applicant.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentMethod(str, Enum):
    """
    Enum for how a buyer pays for an order.

    Attributes:
        CARD: Payment by card.
        BANK_TRANSFER: Payment by bank transfer.
    """

    CARD = "card"
    BANK_TRANSFER = "bank_transfer"


class OrderStatus(str, Enum):
    """
    Enum for the lifecycle of an order.

    Attributes:
        PENDING: The order was placed but not paid.
        PAID: Payment was received.
        COMPLETED: The seller delivered the service.
        CANCELLED: The order was cancelled before completion.
        REFUNDED: The payment was returned to the buyer.
    """

    PENDING = "pending"
    PAID = "paid"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
