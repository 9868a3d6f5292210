##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Defines the entity registry used for dynamic CLI command generation in the Workit database interface.

This registry maps entity types (user, service, job, application, order, review) to
their corresponding CLI argument metadata and supported filtering options. It is used
by the `database get` subcommand to automatically construct argument parsers.

Each entry in the registry includes:
- `filters`: A list of supported filters, where each filter specifies a name and its type
  (and optionally `choices` for enumerated fields).
- `identifiers`: A human-readable description of valid identifiers for referencing entities.
- `ident_help`: The help string template for CLI identifier arguments, parameterized with `{verb}`.
"""

from workit.common.enums import (
    ApplicationStatus,
    JobStatus,
    OrderStatus,
    PaymentMethod,
    ServiceStatus,
    UserRole,
)


def _values(enum_class):
    return [member.value for member in enum_class]


ENTITY_REGISTRY = {
    "user": {
        "filters": [
            {"name": "username", "type": str},
            {"name": "email", "type": str},
            {"name": "role", "type": str, "choices": _values(UserRole)},
        ],
        "identifiers": "ID",
        "ident_help": "IDs of the users to {verb}.",
    },
    "service": {
        "filters": [
            {"name": "user_id", "type": int},
            {"name": "category", "type": str},
            {"name": "status", "type": str, "choices": _values(ServiceStatus)},
        ],
        "identifiers": "ID",
        "ident_help": "IDs of the services to {verb}.",
    },
    "job": {
        "filters": [
            {"name": "user_id", "type": int},
            {"name": "category", "type": str},
            {"name": "job_type", "type": str},
            {"name": "location", "type": str},
            {"name": "status", "type": str, "choices": _values(JobStatus)},
        ],
        "identifiers": "ID",
        "ident_help": "IDs of the jobs to {verb}.",
    },
    "application": {
        "filters": [
            {"name": "job_id", "type": int},
            {"name": "user_id", "type": int},
            {"name": "status", "type": str, "choices": _values(ApplicationStatus)},
        ],
        "identifiers": "ID",
        "ident_help": "IDs of the applications to {verb}.",
    },
    "order": {
        "filters": [
            {"name": "service_id", "type": int},
            {"name": "buyer_id", "type": int},
            {"name": "seller_id", "type": int},
            {"name": "payment_method", "type": str, "choices": _values(PaymentMethod)},
            {"name": "status", "type": str, "choices": _values(OrderStatus)},
        ],
        "identifiers": "ID",
        "ident_help": "IDs of the orders to {verb}.",
    },
    "review": {
        "filters": [
            {"name": "service_id", "type": int},
            {"name": "user_id", "type": int},
            {"name": "rating", "type": int},
        ],
        "identifiers": "ID",
        "ident_help": "IDs of the reviews to {verb}.",
    },
}
