"""SDK exception types."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from secrets_manager.schemas.common import ServiceErrorDetail


class SecretsManagerError(Exception):
    """Base SDK error."""


class SecretsManagerValidationError(SecretsManagerError):
    """Caller input was rejected before any request was sent."""


class EncodeError(SecretsManagerValidationError):
    """A typed record could not be serialized.

    Parameters
    ----------
    field : str
        Name of the offending field.
    reason : str
        Why encoding failed.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"cannot encode field {field!r}: {reason}")


class DecodeError(SecretsManagerError):
    """A JSON document did not match the expected shape.

    Parameters
    ----------
    path : str
        JSON path of the offending value, rooted at ``$``.
    reason : str
        Why decoding failed.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot decode {path}: {reason}")


class UnknownVariantError(DecodeError):
    """A discriminator was missing or named no registered variant.

    Parameters
    ----------
    family : str
        Polymorphic family being decoded.
    discriminator : str | None
        Discriminator value found, ``None`` when it was missing.
    path : str, default="$"
        JSON path of the polymorphic object.
    """

    def __init__(
        self, family: str, discriminator: str | None, path: str = "$"
    ) -> None:
        self.family = family
        self.discriminator = discriminator
        if discriminator is None:
            reason = f"missing discriminator for {family}"
        else:
            reason = f"unknown {family} variant {discriminator!r}"
        super().__init__(path, reason)


class SecretsManagerTransportError(SecretsManagerError):
    """The HTTP exchange failed below the application layer."""


class SecretsManagerTimeoutError(SecretsManagerTransportError):
    """The per-call deadline elapsed."""


class SecretsManagerAPIError(SecretsManagerError):
    """API request failed.

    Parameters
    ----------
    message : str
        Error message.
    status_code : int | None, default=None
        HTTP status code if available.
    errors : Sequence[ServiceErrorDetail], default=()
        Structured errors reported by the service.
    trace : str | None, default=None
        Service trace identifier, forwarded unchanged.
    headers : Mapping[str, str] | None, default=None
        Response headers.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        errors: Sequence["ServiceErrorDetail"] = (),
        trace: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = list(errors)
        self.trace = trace
        self.headers = dict(headers or {})
        super().__init__(message)


class SecretsManagerAuthError(SecretsManagerAPIError):
    """Authentication failed or no token could be obtained."""


class SecretsManagerForbiddenError(SecretsManagerAPIError):
    """Caller is not allowed to perform the operation."""


class SecretsManagerNotFoundError(SecretsManagerAPIError):
    """Requested resource was not found."""


class SecretsManagerConflictError(SecretsManagerAPIError):
    """Request conflicted with current server state."""


class SecretsManagerPreconditionError(SecretsManagerAPIError):
    """A precondition or business rule was violated."""


class SecretsManagerRateLimitError(SecretsManagerAPIError):
    """Caller hit a rate limit."""


class SecretsManagerServiceError(SecretsManagerAPIError):
    """The service failed with a 5xx status."""
