"""Bearer token providers."""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod

import httpx

from secrets_manager.exceptions import SecretsManagerAuthError

logger = logging.getLogger(__name__)

DEFAULT_IAM_URL = "https://iam.cloud.ibm.com"
IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"


class Authenticator(ABC):
    """Source of bearer tokens.

    ``token`` is called before every HTTP attempt. Implementations own any
    caching and refresh.
    """

    auth_type = "unknown"

    @abstractmethod
    def token(self) -> str | None:
        """Return the bearer token to send, or ``None`` for no header.

        Returns
        -------
        str | None
            Bearer token.
        """

    def close(self) -> None:
        """Release resources held by the authenticator."""


class NoAuthAuthenticator(Authenticator):
    """Send requests without an ``Authorization`` header."""

    auth_type = "noauth"

    def token(self) -> str | None:
        return None


class BearerTokenAuthenticator(Authenticator):
    """Send a caller-managed bearer token.

    Parameters
    ----------
    bearer_token : str
        Token sent verbatim.
    """

    auth_type = "bearertoken"

    def __init__(self, bearer_token: str) -> None:
        if not bearer_token:
            raise SecretsManagerAuthError("bearer token must not be empty")
        self.bearer_token = bearer_token

    def token(self) -> str | None:
        return self.bearer_token


class IAMAuthenticator(Authenticator):
    """Exchange an IAM API key for short-lived bearer tokens.

    Parameters
    ----------
    apikey : str
        IAM API key.
    url : str | None, default=None
        IAM endpoint base URL. Defaults to the public IAM service.
    refresh_margin : float, default=60.0
        Seconds before expiration at which a cached token is replaced.
    timeout : float, default=30.0
        Token request timeout in seconds.
    transport : httpx.BaseTransport | None, default=None
        Optional transport for tests or advanced usage.
    """

    auth_type = "iam"

    def __init__(
        self,
        apikey: str,
        *,
        url: str | None = None,
        refresh_margin: float = 60.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not apikey:
            raise SecretsManagerAuthError("IAM API key must not be empty")
        self.apikey = apikey
        self.url = (url or DEFAULT_IAM_URL).rstrip("/")
        self.refresh_margin = refresh_margin
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._lock = threading.Lock()
        self._access_token: str | None = None
        self._expires_at = 0.0

    def token(self) -> str | None:
        """Return a cached token, fetching a new one inside the refresh margin."""
        with self._lock:
            if self._access_token is None or time.time() >= self._expires_at:
                self._refresh()
            return self._access_token

    def close(self) -> None:
        """Close the token endpoint client."""
        self._client.close()

    def _refresh(self) -> None:
        logger.debug("Requesting IAM token from %s", self.url)
        try:
            response = self._client.post(
                f"{self.url}/identity/token",
                data={"grant_type": IAM_GRANT_TYPE, "apikey": self.apikey},
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise SecretsManagerAuthError(f"IAM token request failed: {exc}") from exc
        if response.status_code != 200:
            raise SecretsManagerAuthError(
                f"IAM token request failed with status {response.status_code}",
                status_code=response.status_code,
                headers=response.headers,
            )
        try:
            data = response.json()
            access_token = data["access_token"]
        except (ValueError, KeyError, TypeError) as exc:
            raise SecretsManagerAuthError("IAM token response is malformed") from exc

        now = time.time()
        expiration = data.get("expiration")
        if expiration is None and data.get("expires_in") is not None:
            expiration = now + float(data["expires_in"])
        if expiration is None:
            expiration = now
        self._access_token = access_token
        self._expires_at = max(now, float(expiration) - self.refresh_margin)
