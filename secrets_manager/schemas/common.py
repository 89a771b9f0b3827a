"""Common schema primitives."""

from typing import Any, Literal

from httpx import URL
from pydantic import BaseModel, ConfigDict, Field

from secrets_manager.codec import Timestamp, diff

SecretState = Literal[
    "pre_activation", "active", "suspended", "deactivated", "destroyed"
]


class APIModel(BaseModel):
    """Base wire model; unknown response fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PatchModel(APIModel):
    """Typed partial record sent as a JSON merge-patch."""

    def as_patch(self) -> dict[str, Any]:
        """Return the merge-patch document for this partial record."""
        return diff(self)


class PaginationLink(APIModel):
    """Link to a page of a collection."""

    href: str


class PaginatedCollection(APIModel):
    """Offset-paginated collection envelope.

    Attributes
    ----------
    total_count : int | None
        Number of items matching the request across all pages.
    limit : int | None
        Page size used by the service.
    offset : int | None
        Offset of this page.
    next : PaginationLink | None
        Link to the next page, absent on the last page.
    """

    total_count: int | None = None
    limit: int | None = None
    offset: int | None = None
    first: PaginationLink | None = None
    next: PaginationLink | None = None
    previous: PaginationLink | None = None
    last: PaginationLink | None = None

    @property
    def total(self) -> int | None:
        return self.total_count

    def next_offset(self) -> int | None:
        """Return the offset carried by the ``next`` link.

        Returns
        -------
        int | None
            Offset for the following request, ``None`` on the last page.
        """
        if self.next is None:
            return None
        offset = URL(self.next.href).params.get("offset")
        if offset is None:
            return None
        return int(offset)


class ServiceErrorTarget(APIModel):
    """Request element an error refers to."""

    type: str | None = None
    name: str | None = None


class ServiceErrorDetail(APIModel):
    """One entry of an error response."""

    code: str | None = None
    message: str | None = None
    more_info: str | None = None
    target: ServiceErrorTarget | None = None


class ErrorResponse(APIModel):
    """Structured error body returned with non-2xx statuses."""

    errors: list[ServiceErrorDetail] = Field(default_factory=list)
    status_code: int | None = None
    trace: str | None = None


class CertificateValidity(APIModel):
    """Validity window of a certificate."""

    not_before: Timestamp | None = None
    not_after: Timestamp | None = None


class RotationPolicy(APIModel):
    """Automatic rotation settings."""

    auto_rotate: bool | None = None
    interval: int | None = None
    unit: Literal["day", "month"] | None = None
    rotate_keys: bool | None = None


class SecretGroup(APIModel):
    """Secret group record."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None


class SecretGroupCollection(APIModel):
    """All secret groups of the instance."""

    secret_groups: list[SecretGroup] = Field(default_factory=list)
    total_count: int | None = None


class SecretGroupPrototype(APIModel):
    """Secret group to create."""

    name: str = Field(min_length=2, max_length=64)
    description: str | None = None


class SecretGroupPatch(PatchModel):
    """Updatable secret group fields."""

    name: str | None = None
    description: str | None = None


class SecretLockPrototype(APIModel):
    """Lock to create on a secret or version."""

    name: str = Field(min_length=2, max_length=30)
    description: str | None = None
    attributes: dict[str, Any] | None = None


class SecretLock(APIModel):
    """Lock pinned to a secret version."""

    name: str | None = None
    description: str | None = None
    attributes: dict[str, Any] | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    created_by: str | None = None
    secret_group_id: str | None = None
    secret_id: str | None = None
    secret_version_id: str | None = None
    secret_version_alias: str | None = None


class SecretVersionLocks(APIModel):
    """Lock names held by one version."""

    version_id: str | None = None
    version_alias: str | None = None
    locks: list[str] = Field(default_factory=list)
    payload_available: bool | None = None


class SecretLocks(APIModel):
    """Lock summary of a secret across its versions."""

    secret_id: str | None = None
    secret_group_id: str | None = None
    secret_type: str | None = None
    versions: list[SecretVersionLocks] = Field(default_factory=list)


class SecretLocksPaginatedCollection(PaginatedCollection):
    """Page of lock summaries across secrets."""

    secrets_locks: list[SecretLocks] = Field(default_factory=list)


class SecretLockPaginatedCollection(PaginatedCollection):
    """Page of locks of one secret or version."""

    locks: list[SecretLock] = Field(default_factory=list)


class NotificationsRegistration(APIModel):
    """Event Notifications registration of the instance."""

    event_notifications_instance_crn: str | None = None


class NotificationsRegistrationPrototype(APIModel):
    """Register the instance as an Event Notifications source.

    Attributes
    ----------
    event_notifications_instance_crn : str
        CRN of the Event Notifications instance.
    event_notifications_source_name : str
        Source name shown in Event Notifications.
    event_notifications_source_description : str | None
        Optional source description.
    """

    event_notifications_instance_crn: str
    event_notifications_source_name: str
    event_notifications_source_description: str | None = None
