##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
This module houses dataclasses that define the format of the data
that's stored in Workit's database.
"""

import json
import logging
from abc import ABC
from dataclasses import Field, asdict, dataclass, replace
from dataclasses import fields as dataclass_fields
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Set, Tuple, Type, TypeVar

from workit.common.enums import (
    ApplicationStatus,
    JobStatus,
    OrderStatus,
    PaymentMethod,
    ServiceStatus,
    UserRole,
)
from workit.exceptions import InvalidFieldError, UnsupportedFilterError
from workit.utils import ensure_utc, to_camel_case


LOG = logging.getLogger("workit")
T = TypeVar("T", bound="BaseDataModel")

STORAGE_ASSIGNED_FIELDS = ("id", "created_at")


@dataclass
class BaseDataModel(ABC):
    """
    A base class for Workit's record dataclasses that provides common serialization,
    validation, filtering, and update functionality.

    Every record carries an integer `id` and a `created_at` timestamp. Both are
    assigned by the storage layer when the record is created and are never
    changed afterwards.

    Attributes:
        id: The identifier of the record, unique within its entity type.
        created_at: When the record was created (aware, UTC).
        entity_type: The registry name of the record type (e.g. "user").
        insertable_fields: The fields a caller may provide when creating a record.
        required_fields: The fields that must hold a value on every stored record.
        unique_fields: The fields whose values must be unique across the entity type.
        non_negative_fields: Numeric fields that must be >= 0.
        sensitive_fields: Fields that must never leave the process in public output.

    Methods:
        to_dict: Convert the dataclass instance to a dictionary.
        to_record: Convert the instance to plain storable values.
        to_public_dict: Convert the instance to the external camelCase schema.
        to_json: Serialize the public form of the instance to JSON.
        from_dict (classmethod): Create an instance from a dictionary.
        from_insert (classmethod): Build and validate a new record from insertable data.
        get_instance_fields: Retrieve the fields associated with this instance.
        get_class_fields (classmethod): Retrieve the fields associated with the class.
        validate: Check every field against the schema.
        apply_update: Return a validated copy with a partial update merged in.
        normalize_filters (classmethod): Validate and normalize list filters.
        matches: Check whether this record matches a set of filters.
    """

    id: int = None  # pylint: disable=invalid-name
    created_at: datetime = None

    entity_type: ClassVar[str] = None
    insertable_fields: ClassVar[Tuple[str, ...]] = ()
    required_fields: ClassVar[Tuple[str, ...]] = ()
    unique_fields: ClassVar[Tuple[str, ...]] = ()
    non_negative_fields: ClassVar[Tuple[str, ...]] = ()
    sensitive_fields: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self):
        """
        Coerce enum fields to their enum members and normalize the timestamp.

        Raises:
            InvalidFieldError: If an enum field holds a value outside its enum.
        """
        self.created_at = ensure_utc(self.created_at)
        for field_obj in self.get_class_fields():
            if not (isinstance(field_obj.type, type) and issubclass(field_obj.type, Enum)):
                continue
            value = getattr(self, field_obj.name)
            if value is None or isinstance(value, field_obj.type):
                continue
            try:
                setattr(self, field_obj.name, field_obj.type(value))
            except ValueError as exc:
                allowed = ", ".join(member.value for member in field_obj.type)
                raise InvalidFieldError(
                    f"Invalid {self.entity_type} {field_obj.name} '{value}'. Expected one of: {allowed}."
                ) from exc

    def to_dict(self) -> Dict:
        """
        Convert the dataclass to a dictionary.

        Returns:
            The dataclass as a dictionary.
        """
        return asdict(self)

    def to_record(self) -> Dict:
        """
        Convert the dataclass to a dictionary of plain values that any store can
        persist (enum members are replaced by their string values).

        Returns:
            The dataclass as a dictionary of storable values.
        """
        return {key: (val.value if isinstance(val, Enum) else val) for key, val in self.to_dict().items()}

    def to_public_dict(self, redact: bool = True) -> Dict:
        """
        Convert the dataclass to the externally visible schema: camelCase keys,
        enum values as strings and timestamps as ISO 8601 strings.

        Args:
            redact: If True, drop the fields listed in `sensitive_fields`.

        Returns:
            The public representation of this record.
        """
        public = {}
        for key, val in self.to_record().items():
            if redact and key in self.sensitive_fields:
                continue
            if isinstance(val, datetime):
                val = val.isoformat()
            public[to_camel_case(key)] = val
        return public

    def to_json(self) -> str:
        """
        Serialize the redacted public form of the dataclass to a JSON string.

        Returns:
            The dataclass as a JSON string.
        """
        return json.dumps(self.to_public_dict())

    @classmethod
    def from_dict(cls: Type[T], data: Dict) -> T:
        """
        Create an instance of the dataclass from a dictionary.

        Args:
            data: A dictionary to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.

        Raises:
            InvalidFieldError: If `data` holds keys that are not fields of this class.
        """
        unknown = set(data) - cls.get_field_names()
        if unknown:
            raise InvalidFieldError(f"Unknown {cls.entity_type} field(s): {', '.join(sorted(unknown))}.")
        return cls(**data)

    @classmethod
    def from_insert(cls: Type[T], data: Dict, **assigned: Any) -> T:
        """
        Build a new, not yet stored record from caller-provided insertable data.

        Values passed through `assigned` come from the storage layer or a trusted
        caller (e.g. the owner id, a forced status) and win over anything in `data`.

        Args:
            data: The insertable fields provided by the caller.
            **assigned: Fields that are set outside of the insertable subset.

        Returns:
            A validated record without `id` and `created_at`.

        Raises:
            InvalidFieldError: If `data` holds a non-insertable key or the
                resulting record fails validation.
        """
        data = dict(data or {})
        not_insertable = set(data) - set(cls.insertable_fields) - set(assigned)
        if not_insertable:
            raise InvalidFieldError(
                f"Field(s) {', '.join(sorted(not_insertable))} cannot be set when creating a {cls.entity_type}."
            )
        data.update(assigned)
        for field_name in STORAGE_ASSIGNED_FIELDS:
            data.pop(field_name, None)
        entity = cls.from_dict(data)
        entity.validate()
        return entity

    def get_instance_fields(self) -> Tuple[Field]:
        """
        Get the fields associated with this instance.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(self)

    @classmethod
    def get_class_fields(cls) -> Tuple[Field]:
        """
        Get the fields associated with this object.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(cls)

    @classmethod
    def get_field_names(cls) -> Set[str]:
        """
        Get the names of every field on this dataclass.

        Returns:
            A set of field names.
        """
        return {field_obj.name for field_obj in cls.get_class_fields()}

    @property
    def fields_allowed_to_be_updated(self) -> List[str]:
        """
        Every field except the storage-assigned ones can be updated.

        Returns:
            A list of fields that are allowed to be updated in this class.
        """
        return [name for name in self.get_field_names() if name not in STORAGE_ASSIGNED_FIELDS]

    def _validate_type(self, field_obj: Field, value: Any):
        """
        Check a single non-null value against the type declared on its field.

        Args:
            field_obj: The dataclass field being checked.
            value: The value held by that field.

        Raises:
            InvalidFieldError: If the value has the wrong type.
        """
        expected = field_obj.type
        if expected is int:
            valid = isinstance(value, int) and not isinstance(value, bool)
        elif expected is float:
            valid = isinstance(value, (int, float)) and not isinstance(value, bool)
        elif expected is str:
            valid = isinstance(value, str)
        elif expected is datetime:
            valid = isinstance(value, datetime)
        else:
            valid = True

        if not valid:
            raise InvalidFieldError(
                f"Invalid {self.entity_type} {field_obj.name} {value!r}: expected {expected.__name__}."
            )

    def validate(self):
        """
        Check every field of this record against the schema.

        Raises:
            InvalidFieldError: If a required field is missing or a value has the
                wrong type or is out of range.
        """
        for field_obj in self.get_instance_fields():
            value = getattr(self, field_obj.name)
            if value is None:
                if field_obj.name in self.required_fields:
                    raise InvalidFieldError(f"The {self.entity_type} field '{field_obj.name}' is required.")
                continue
            self._validate_type(field_obj, value)
            if field_obj.name in self.non_negative_fields and value < 0:
                raise InvalidFieldError(f"The {self.entity_type} field '{field_obj.name}' must not be negative.")

    def apply_update(self: T, updates: Dict) -> Tuple[T, Dict]:
        """
        Merge a partial update onto a copy of this record and validate the result.

        Storage-assigned fields are ignored with a warning. The record itself is
        never modified.

        Args:
            updates: A dictionary of field names to new values.

        Returns:
            A tuple of the updated copy and the dictionary of changes that were applied.

        Raises:
            InvalidFieldError: If `updates` names an unknown field or the merged
                record fails validation.
        """
        changes = {}
        field_names = self.get_field_names()
        for field_name, new_value in updates.items():
            if field_name not in field_names:
                raise InvalidFieldError(f"Field '{field_name}' does not exist on a {self.entity_type}.")
            if field_name not in self.fields_allowed_to_be_updated:
                LOG.warning(f"Field '{field_name}' is not allowed to be updated. Ignoring the change.")
                continue
            changes[field_name] = new_value

        updated = replace(self, **changes)
        updated.validate()
        applied = {name: getattr(updated, name) for name in changes}
        return updated, applied

    @classmethod
    def normalize_filters(cls, filters: Dict) -> Dict:
        """
        Validate list filters against this record type and replace enum members by
        their string values.

        Args:
            filters: A dictionary of field names to the values to match exactly.

        Returns:
            The normalized filters. An empty dictionary when `filters` is None or empty.

        Raises:
            UnsupportedFilterError: If a filter names a field this record type lacks.
        """
        if not filters:
            return {}
        unknown = set(filters) - cls.get_field_names()
        if unknown:
            raise UnsupportedFilterError(
                f"Cannot filter {cls.entity_type} records on unknown field(s): {', '.join(sorted(unknown))}."
            )
        return {key: (val.value if isinstance(val, Enum) else val) for key, val in filters.items()}

    def matches(self, filters: Dict) -> bool:
        """
        Check whether this record matches every filter exactly.

        Args:
            filters: Normalized filters (see `normalize_filters`).

        Returns:
            True if every filtered field equals the filter value, False otherwise.
        """
        record = self.to_record()
        return all(record[key] == expected for key, expected in filters.items())


@dataclass
class UserModel(BaseDataModel):
    """
    A dataclass to store all of the information for a user account.

    Attributes:
        username (str): The unique login name.
        email (str): The unique email address.
        password (str): The opaque credential. Never part of public output.
        role (UserRole): Whether the user is a freelancer or an employer.
        bio (str): Optional profile text.
        profile_picture (str): Optional URL of the profile picture.
    """

    username: str = None
    email: str = None
    password: str = None
    role: UserRole = None
    bio: str = None
    profile_picture: str = None

    entity_type: ClassVar[str] = "user"
    insertable_fields: ClassVar[Tuple[str, ...]] = ("username", "email", "password", "role", "bio", "profile_picture")
    required_fields: ClassVar[Tuple[str, ...]] = ("username", "email", "password", "role")
    unique_fields: ClassVar[Tuple[str, ...]] = ("username", "email")
    sensitive_fields: ClassVar[Tuple[str, ...]] = ("password",)


@dataclass
class ServiceModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store all of the information for a service a freelancer offers.

    Attributes:
        user_id (int): The id of the owning user.
        title (str): The title of the service.
        description (str): The description of the service.
        price (float): The non-negative price of the service.
        category (str): The category the service is listed under.
        status (ServiceStatus): Whether the service can be ordered.
        image (str): Optional URL of the service image.
        delivery_time (str): Optional human-readable delivery estimate.
    """

    user_id: int = None
    title: str = None
    description: str = None
    price: float = None
    category: str = None
    status: ServiceStatus = ServiceStatus.ACTIVE
    image: str = None
    delivery_time: str = None

    entity_type: ClassVar[str] = "service"
    insertable_fields: ClassVar[Tuple[str, ...]] = (
        "title",
        "description",
        "price",
        "category",
        "status",
        "image",
        "delivery_time",
    )
    required_fields: ClassVar[Tuple[str, ...]] = ("user_id", "title", "description", "price", "category", "status")
    non_negative_fields: ClassVar[Tuple[str, ...]] = ("price",)


@dataclass
class JobModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store all of the information for a job an employer posts.

    Attributes:
        user_id (int): The id of the owning user.
        title (str): The title of the job.
        description (str): The description of the job.
        budget (float): The non-negative budget of the job.
        category (str): The category the job is listed under.
        location (str): Optional location of the job.
        job_type (str): The kind of engagement (e.g. "full-time", "contract").
        status (JobStatus): Whether the job accepts applications.
        image (str): Optional URL of the job image.
    """

    user_id: int = None
    title: str = None
    description: str = None
    budget: float = None
    category: str = None
    location: str = None
    job_type: str = None
    status: JobStatus = JobStatus.OPEN
    image: str = None

    entity_type: ClassVar[str] = "job"
    insertable_fields: ClassVar[Tuple[str, ...]] = (
        "title",
        "description",
        "budget",
        "category",
        "location",
        "job_type",
        "status",
        "image",
    )
    required_fields: ClassVar[Tuple[str, ...]] = (
        "user_id",
        "title",
        "description",
        "budget",
        "category",
        "job_type",
        "status",
    )
    non_negative_fields: ClassVar[Tuple[str, ...]] = ("budget",)


@dataclass
class ApplicationModel(BaseDataModel):
    """
    A dataclass to store all of the information for an application to a job.

    Attributes:
        job_id (int): The id of the job applied to.
        user_id (int): The id of the applicant.
        description (str): The cover letter of the application.
        resume_file (str): Optional URL of the uploaded resume.
        status (ApplicationStatus): The decision of the job owner.
    """

    job_id: int = None
    user_id: int = None
    description: str = None
    resume_file: str = None
    status: ApplicationStatus = ApplicationStatus.PENDING

    entity_type: ClassVar[str] = "application"
    insertable_fields: ClassVar[Tuple[str, ...]] = ("job_id", "description", "resume_file")
    required_fields: ClassVar[Tuple[str, ...]] = ("job_id", "user_id", "description", "status")


@dataclass
class OrderModel(BaseDataModel):
    """
    A dataclass to store all of the information for an order of a service.

    Attributes:
        service_id (int): The id of the ordered service.
        buyer_id (int): The id of the buying user.
        seller_id (int): The id of the service owner at the time of the order.
        payment_method (PaymentMethod): How the buyer pays.
        total_price (float): The non-negative amount charged.
        status (OrderStatus): Where the order is in its lifecycle.
    """

    service_id: int = None
    buyer_id: int = None
    seller_id: int = None
    payment_method: PaymentMethod = None
    total_price: float = None
    status: OrderStatus = OrderStatus.PENDING

    entity_type: ClassVar[str] = "order"
    insertable_fields: ClassVar[Tuple[str, ...]] = (
        "service_id",
        "buyer_id",
        "seller_id",
        "payment_method",
        "total_price",
    )
    required_fields: ClassVar[Tuple[str, ...]] = (
        "service_id",
        "buyer_id",
        "seller_id",
        "payment_method",
        "total_price",
        "status",
    )
    non_negative_fields: ClassVar[Tuple[str, ...]] = ("total_price",)


@dataclass
class ReviewModel(BaseDataModel):
    """
    A dataclass to store all of the information for a review of a service.

    Attributes:
        service_id (int): The id of the reviewed service.
        user_id (int): The id of the reviewer.
        rating (int): An integer rating from 1 to 5.
        comment (str): Optional review text.
    """

    service_id: int = None
    user_id: int = None
    rating: int = None
    comment: str = None

    entity_type: ClassVar[str] = "review"
    insertable_fields: ClassVar[Tuple[str, ...]] = ("service_id", "user_id", "rating", "comment")
    required_fields: ClassVar[Tuple[str, ...]] = ("service_id", "user_id", "rating")

    def validate(self):
        """
        Check every field, then make sure the rating lies between 1 and 5.

        Raises:
            InvalidFieldError: If the record fails validation.
        """
        super().validate()
        if not 1 <= self.rating <= 5:
            raise InvalidFieldError(f"The review rating must be between 1 and 5, got {self.rating}.")


MODEL_REGISTRY: Dict[str, Type[BaseDataModel]] = {
    model_class.entity_type: model_class
    for model_class in (UserModel, ServiceModel, JobModel, ApplicationModel, OrderModel, ReviewModel)
}
