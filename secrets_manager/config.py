"""External service configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from secrets_manager.auth import (
    Authenticator,
    BearerTokenAuthenticator,
    IAMAuthenticator,
    NoAuthAuthenticator,
)
from secrets_manager.exceptions import SecretsManagerValidationError

DEFAULT_SERVICE_NAME = "secrets_manager"
CREDENTIALS_FILE_ENV = "IBM_CREDENTIALS_FILE"
CREDENTIALS_FILE_NAME = "ibm-credentials.env"

AUTH_TYPE_IAM = "iam"
AUTH_TYPE_BEARER_TOKEN = "bearertoken"
AUTH_TYPE_NOAUTH = "noauth"


class ServiceSettings(BaseSettings):
    """Connection settings of one service.

    Values come from ``<SERVICE>_*`` environment variables and, with lower
    precedence, from the same keys in a credentials file.

    Attributes
    ----------
    url : str | None
        Service base URL.
    auth_type : str | None
        ``iam``, ``bearertoken`` or ``noauth``.
    apikey : str | None
        IAM API key.
    auth_url : str | None
        IAM endpoint override.
    bearer_token : str | None
        Token for the ``bearertoken`` auth type.
    """

    model_config = SettingsConfigDict(env_prefix="SECRETS_MANAGER_", extra="ignore")

    url: str | None = None
    auth_type: str | None = None
    apikey: str | None = None
    auth_url: str | None = None
    bearer_token: str | None = None


def env_prefix(service_name: str) -> str:
    """Return the variable prefix for ``service_name``.

    Parameters
    ----------
    service_name : str
        Service name, e.g. ``secrets_manager``.

    Returns
    -------
    str
        Upper-cased prefix with a trailing underscore.
    """
    return service_name.upper().replace("-", "_") + "_"


def credentials_file() -> Path | None:
    """Locate the credentials file.

    ``IBM_CREDENTIALS_FILE`` wins; otherwise ``ibm-credentials.env`` is looked
    up in the working directory and then in the home directory.

    Returns
    -------
    Path | None
        Existing credentials file, if any.
    """
    configured = os.environ.get(CREDENTIALS_FILE_ENV)
    if configured:
        path = Path(configured).expanduser()
        return path if path.is_file() else None
    for directory in (Path.cwd(), Path.home()):
        path = directory / CREDENTIALS_FILE_NAME
        if path.is_file():
            return path
    return None


@lru_cache(maxsize=8)
def get_service_settings(service_name: str = DEFAULT_SERVICE_NAME) -> ServiceSettings:
    """Return cached settings for ``service_name``.

    Parameters
    ----------
    service_name : str, default="secrets_manager"
        Service name used to derive the variable prefix.

    Returns
    -------
    ServiceSettings
        Cached settings instance.
    """
    return ServiceSettings(
        _env_prefix=env_prefix(service_name),
        _env_file=credentials_file(),
    )


def load_service_properties(service_name: str = DEFAULT_SERVICE_NAME) -> dict[str, str]:
    """Load the flat property mapping of ``service_name``.

    Parameters
    ----------
    service_name : str, default="secrets_manager"
        Service name used to derive the variable prefix.

    Returns
    -------
    dict[str, str]
        ``URL``, ``AUTH_TYPE`` and, when set, ``APIKEY``, ``AUTH_URL`` and
        ``BEARER_TOKEN``.
    """
    settings = get_service_settings(service_name)
    prefix = env_prefix(service_name)
    if not settings.url:
        raise SecretsManagerValidationError(f"{prefix}URL is required")

    auth_type = (settings.auth_type or AUTH_TYPE_IAM).lower()
    if auth_type == AUTH_TYPE_IAM and not settings.apikey:
        raise SecretsManagerValidationError(
            f"{prefix}APIKEY is required for auth type {AUTH_TYPE_IAM!r}"
        )

    properties = {"URL": settings.url, "AUTH_TYPE": auth_type}
    if settings.apikey:
        properties["APIKEY"] = settings.apikey
    if settings.auth_url:
        properties["AUTH_URL"] = settings.auth_url
    if settings.bearer_token:
        properties["BEARER_TOKEN"] = settings.bearer_token
    return properties


def build_authenticator(properties: Mapping[str, str]) -> Authenticator:
    """Create the authenticator named by ``AUTH_TYPE``.

    Parameters
    ----------
    properties : Mapping[str, str]
        Output of :func:`load_service_properties`.

    Returns
    -------
    Authenticator
        Configured authenticator.
    """
    auth_type = properties.get("AUTH_TYPE", AUTH_TYPE_IAM).lower()
    if auth_type == AUTH_TYPE_IAM:
        return IAMAuthenticator(properties["APIKEY"], url=properties.get("AUTH_URL"))
    if auth_type == AUTH_TYPE_BEARER_TOKEN:
        token = properties.get("BEARER_TOKEN")
        if not token:
            raise SecretsManagerValidationError(
                "BEARER_TOKEN is required for auth type 'bearertoken'"
            )
        return BearerTokenAuthenticator(token)
    if auth_type == AUTH_TYPE_NOAUTH:
        return NoAuthAuthenticator()
    raise SecretsManagerValidationError(f"unsupported auth type {auth_type!r}")
