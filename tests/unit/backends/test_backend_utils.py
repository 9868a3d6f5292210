##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the `utils.py` module of the `backends/` directory.
"""

from datetime import datetime, timezone

from workit.backends.utils import deserialize_entity, serialize_entity, serialize_fields
from workit.common.enums import OrderStatus, PaymentMethod
from workit.db_scripts.data_models import OrderModel, UserModel


def test_serialize_entity_uses_camel_case_and_plain_values():
    """
    Test that serialized documents carry camelCase keys and enum values as strings.
    """
    order = OrderModel(
        id=3,
        service_id=1,
        buyer_id=2,
        seller_id=1,
        payment_method=PaymentMethod.BANK_TRANSFER,
        total_price=99.5,
        status=OrderStatus.PAID,
    )

    document = serialize_entity(order)

    assert document["serviceId"] == 1
    assert document["paymentMethod"] == "bank_transfer"
    assert document["totalPrice"] == 99.5
    assert document["status"] == "paid"
    assert "service_id" not in document


def test_serialize_fields():
    """
    Test that partial updates and filters are keyed by camelCase names.
    """
    assert serialize_fields({"job_id": 4, "resume_file": "cv.pdf"}) == {"jobId": 4, "resumeFile": "cv.pdf"}


def test_deserialize_entity_drops_unknown_keys():
    """
    Test that a retrieved document becomes a model and keys like `_id` are dropped.
    """
    created_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    document = {
        "_id": "65f0c0ffee",
        "id": 7,
        "username": "alice",
        "email": "alice@example.com",
        "password": "hash",
        "role": "employer",
        "profilePicture": "alice.png",
        "createdAt": created_at,
    }

    user = deserialize_entity(document, UserModel)

    assert user == UserModel(
        id=7,
        username="alice",
        email="alice@example.com",
        password="hash",
        role="employer",
        profile_picture="alice.png",
        created_at=created_at,
    )
