"""Retry policy for HTTP attempts."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx

RETRIABLE_STATUSES = frozenset({429, 500, 502, 503, 504})
# Statuses at which the service guarantees a POST had no effect.
POST_RETRIABLE_STATUSES = frozenset({429, 503})
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"})


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounds on retrying one operation.

    Attributes
    ----------
    max_attempts : int
        Total attempts, including the first one.
    max_elapsed : float
        Wall-clock budget in seconds for all attempts and backoff sleeps.
    backoff_base : float
        Delay before the first retry, doubled on each further retry.
    backoff_max : float
        Upper bound for any single computed delay. ``Retry-After`` values are
        honored in full; the call deadline decides whether they can be waited out.
    jitter : float
        Relative spread applied to computed delays.
    """

    max_attempts: int = 4
    max_elapsed: float = 30.0
    backoff_base: float = 0.5
    backoff_max: float = 8.0
    jitter: float = 0.25

    @classmethod
    def disabled(cls) -> "RetryPolicy":
        """Return a policy that makes a single attempt.

        Returns
        -------
        RetryPolicy
            Policy with ``max_attempts=1``.
        """
        return cls(max_attempts=1)

    def should_retry_status(self, method: str, status_code: int) -> bool:
        """Return whether a response status is worth another attempt.

        Parameters
        ----------
        method : str
            HTTP method of the request.
        status_code : int
            Response status.

        Returns
        -------
        bool
            Whether the attempt may be repeated.
        """
        if method.upper() in IDEMPOTENT_METHODS:
            return status_code in RETRIABLE_STATUSES
        return status_code in POST_RETRIABLE_STATUSES

    def should_retry_error(self, method: str, exc: httpx.HTTPError) -> bool:
        """Return whether a transport failure is worth another attempt.

        Non-idempotent requests are repeated only when the connection was
        never established.
        """
        if not isinstance(exc, httpx.TransportError):
            return False
        if method.upper() in IDEMPOTENT_METHODS:
            return True
        return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout))

    def compute_delay(self, attempt: int, response: httpx.Response | None = None) -> float:
        """Return the delay before the attempt following ``attempt``.

        Parameters
        ----------
        attempt : int
            One-based number of the attempt that just failed.
        response : httpx.Response | None, default=None
            Failed response, consulted for ``Retry-After``.

        Returns
        -------
        float
            Delay in seconds.
        """
        if response is not None:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            if retry_after is not None:
                return retry_after
        base = min(self.backoff_max, self.backoff_base * (2 ** (attempt - 1)))
        spread = base * self.jitter
        return max(0.0, base + random.uniform(-spread, spread))


def parse_retry_after(value: str | None) -> float | None:
    """Parse a ``Retry-After`` header.

    Parameters
    ----------
    value : str | None
        Header value, either delta seconds or an HTTP-date.

    Returns
    -------
    float | None
        Delay in seconds, ``None`` when absent or malformed.
    """
    if not value:
        return None
    value = value.strip()
    try:
        seconds = int(value)
    except ValueError:
        pass
    else:
        return float(seconds) if seconds >= 0 else None
    try:
        moment = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return max(0.0, (moment - datetime.now(timezone.utc)).total_seconds())
