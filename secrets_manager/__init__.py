"""Python SDK for the Secrets Manager service."""

import logging

from secrets_manager.auth import (
    Authenticator,
    BearerTokenAuthenticator,
    IAMAuthenticator,
    NoAuthAuthenticator,
)
from secrets_manager.client import SecretsManagerClient
from secrets_manager.codec import decode, decode_list, diff, encode
from secrets_manager.config import ServiceSettings, load_service_properties
from secrets_manager.exceptions import (
    DecodeError,
    EncodeError,
    SecretsManagerAPIError,
    SecretsManagerAuthError,
    SecretsManagerConflictError,
    SecretsManagerError,
    SecretsManagerForbiddenError,
    SecretsManagerNotFoundError,
    SecretsManagerPreconditionError,
    SecretsManagerRateLimitError,
    SecretsManagerServiceError,
    SecretsManagerTimeoutError,
    SecretsManagerTransportError,
    SecretsManagerValidationError,
    UnknownVariantError,
)
from secrets_manager.pagination import Pager
from secrets_manager.pki import SigningState
from secrets_manager.registry import REGISTRY
from secrets_manager.retry import RetryPolicy
from secrets_manager.types import DetailedResponse, LockMode, VersionAlias
from secrets_manager.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Authenticator",
    "BearerTokenAuthenticator",
    "DecodeError",
    "DetailedResponse",
    "EncodeError",
    "IAMAuthenticator",
    "LockMode",
    "NoAuthAuthenticator",
    "Pager",
    "REGISTRY",
    "RetryPolicy",
    "SecretsManagerAPIError",
    "SecretsManagerAuthError",
    "SecretsManagerClient",
    "SecretsManagerConflictError",
    "SecretsManagerError",
    "SecretsManagerForbiddenError",
    "SecretsManagerNotFoundError",
    "SecretsManagerPreconditionError",
    "SecretsManagerRateLimitError",
    "SecretsManagerServiceError",
    "SecretsManagerTimeoutError",
    "SecretsManagerTransportError",
    "SecretsManagerValidationError",
    "ServiceSettings",
    "SigningState",
    "UnknownVariantError",
    "VersionAlias",
    "__version__",
    "decode",
    "decode_list",
    "diff",
    "encode",
    "load_service_properties",
]
