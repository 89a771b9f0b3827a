"""One operation, one HTTP exchange.

An :class:`Operation` describes where each option goes (path, query, header
or body) and how the response is decoded. :class:`RequestPipeline` turns an
operation plus caller options into an HTTP request, runs it under the retry
policy and maps the outcome to a :class:`DetailedResponse` or a typed error.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from time import monotonic, sleep
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from secrets_manager.auth import Authenticator
from secrets_manager.codec import decode, decode_model, encode, encode_variant
from secrets_manager.exceptions import (
    DecodeError,
    SecretsManagerAPIError,
    SecretsManagerAuthError,
    SecretsManagerConflictError,
    SecretsManagerForbiddenError,
    SecretsManagerNotFoundError,
    SecretsManagerPreconditionError,
    SecretsManagerRateLimitError,
    SecretsManagerServiceError,
    SecretsManagerTimeoutError,
    SecretsManagerTransportError,
    SecretsManagerValidationError,
)
from secrets_manager.registry import REGISTRY
from secrets_manager.retry import RetryPolicy
from secrets_manager.schemas.common import ErrorResponse, PatchModel
from secrets_manager.types import DetailedResponse

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

JSON_CONTENT_TYPE = "application/json"
MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"


class BodyKind(str, Enum):
    """Shape of a request body."""

    NONE = "none"
    MODEL = "model"
    PATCH = "patch"
    ENVELOPE = "envelope"


@dataclass(frozen=True, slots=True)
class Operation:
    """Static description of one endpoint.

    Attributes
    ----------
    name : str
        Operation name, used in logs and errors.
    method : str
        HTTP method.
    path : str
        Path template with ``{name}`` placeholders, each filled from the
        option of the same name.
    success_status : int
        Status documented for success. Any 2xx is accepted.
    query : tuple[str, ...]
        Options sent as query parameters.
    headers : tuple[tuple[str, str], ...]
        ``(option, header name)`` pairs forwarded verbatim.
    body : BodyKind
        Body shape.
    body_param : str | None
        Option holding the body for ``MODEL`` and ``PATCH`` bodies.
    body_family : str | None
        Polymorphic family a ``MODEL`` body must belong to.
    envelope : tuple[str, ...]
        Options wrapped into the body object for ``ENVELOPE`` bodies.
    required : tuple[str, ...]
        Options that must be present besides the path parameters.
    response_family : str | None
        Polymorphic family of the response body.
    response_model : type[BaseModel] | None
        Concrete model of the response body.
    """

    name: str
    method: str
    path: str
    success_status: int = 200
    query: tuple[str, ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    body: BodyKind = BodyKind.NONE
    body_param: str | None = None
    body_family: str | None = None
    envelope: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    response_family: str | None = None
    response_model: type[BaseModel] | None = None

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PLACEHOLDER.findall(self.path))


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_query_value(item) for item in value)
    return str(value)


def _encode_item(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return encode(value)
    if isinstance(value, (list, tuple)):
        return [_encode_item(item) for item in value]
    return value


def _redact(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: ("[redacted]" if key.lower() == "authorization" else value)
        for key, value in headers.items()
    }


class RequestPipeline:
    """Execute operations against the service.

    Parameters
    ----------
    client : httpx.Client
        HTTP client bound to the service base URL.
    authenticator : Authenticator
        Source of bearer tokens, consulted before every attempt.
    retry_policy : RetryPolicy | None, default=None
        Retry bounds. Defaults to :class:`RetryPolicy`.
    timeout : float, default=60.0
        Per-call deadline in seconds. The effective deadline is the lesser
        of this value and the retry budget.
    """

    def __init__(
        self,
        client: httpx.Client,
        authenticator: Authenticator,
        *,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._client = client
        self.authenticator = authenticator
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout = timeout

    def execute(
        self, operation: Operation, options: Mapping[str, Any] | None = None
    ) -> DetailedResponse[Any]:
        """Run ``operation`` with ``options``.

        Parameters
        ----------
        operation : Operation
            Endpoint description.
        options : Mapping[str, Any] | None, default=None
            Option values keyed by name. ``None`` values count as unset.

        Returns
        -------
        DetailedResponse
            Decoded result with status and headers.
        """
        options = dict(options or {})
        self._check_required(operation, options)
        path = self._build_path(operation, options)
        params = self._build_query(operation, options)
        headers = self._build_headers(operation, options)
        content = self._build_body(operation, options, headers)
        response = self._send(operation, path, params, headers, content)
        return self._decode_response(operation, response)

    def _check_required(self, operation: Operation, options: Mapping[str, Any]) -> None:
        for name in (*operation.path_params, *operation.required):
            if _is_missing(options.get(name)):
                raise SecretsManagerValidationError(
                    f"{operation.name}: {name} must be provided"
                )

    def _build_path(self, operation: Operation, options: Mapping[str, Any]) -> str:
        return _PLACEHOLDER.sub(
            lambda match: quote(str(options[match.group(1)]), safe=""),
            operation.path,
        )

    def _build_query(
        self, operation: Operation, options: Mapping[str, Any]
    ) -> dict[str, str]:
        params: dict[str, str] = {}
        for name in operation.query:
            value = options.get(name)
            if value is None:
                continue
            params[name] = _query_value(value)
        return params

    def _build_headers(
        self, operation: Operation, options: Mapping[str, Any]
    ) -> dict[str, str]:
        headers: dict[str, str] = {}
        for name, header in operation.headers:
            value = options.get(name)
            if value is not None:
                headers[header] = str(value)
        return headers

    def _build_body(
        self,
        operation: Operation,
        options: Mapping[str, Any],
        headers: dict[str, str],
    ) -> bytes | None:
        if operation.body is BodyKind.NONE:
            return None

        if operation.body is BodyKind.ENVELOPE:
            body: Any = {
                name: _encode_item(options[name])
                for name in operation.envelope
                if options.get(name) is not None
            }
            content_type = JSON_CONTENT_TYPE
        else:
            value = options.get(operation.body_param or "")
            if value is None:
                raise SecretsManagerValidationError(
                    f"{operation.name}: {operation.body_param} must be provided"
                )
            if operation.body is BodyKind.PATCH:
                body = self._patch_body(operation, value)
                content_type = MERGE_PATCH_CONTENT_TYPE
            else:
                body = self._model_body(operation, value)
                content_type = JSON_CONTENT_TYPE

        headers["Content-Type"] = content_type
        return json.dumps(body).encode("utf-8")

    def _patch_body(self, operation: Operation, value: Any) -> dict[str, Any]:
        if isinstance(value, PatchModel):
            return value.as_patch()
        if isinstance(value, Mapping):
            return dict(value)
        raise SecretsManagerValidationError(
            f"{operation.name}: expected a patch record or mapping, "
            f"got {type(value).__name__}"
        )

    def _model_body(self, operation: Operation, value: Any) -> dict[str, Any]:
        family = operation.body_family
        if isinstance(value, BaseModel):
            if family is None:
                return encode(value)
            return encode_variant(family, value)
        if not isinstance(value, Mapping):
            raise SecretsManagerValidationError(
                f"{operation.name}: expected a record or mapping, "
                f"got {type(value).__name__}"
            )
        if family is None or not REGISTRY.family(family).on_wire:
            return dict(value)
        try:
            return encode(decode(family, value))
        except DecodeError as exc:
            raise SecretsManagerValidationError(f"{operation.name}: {exc}") from exc

    def _send(
        self,
        operation: Operation,
        path: str,
        params: dict[str, str],
        headers: dict[str, str],
        content: bytes | None,
    ) -> httpx.Response:
        """Send the request, retrying within the policy and deadline.

        Returns
        -------
        httpx.Response
            Response with a 2xx status.
        """
        policy = self.retry_policy
        method = operation.method
        deadline = monotonic() + min(self.timeout, policy.max_elapsed)
        attempt = 0
        while True:
            attempt += 1
            remaining = deadline - monotonic()
            if remaining <= 0:
                raise SecretsManagerTimeoutError(
                    f"{operation.name}: deadline elapsed after {attempt - 1} attempts"
                )
            attempt_headers = dict(headers)
            token = self.authenticator.token()
            if token is not None:
                attempt_headers["Authorization"] = f"Bearer {token}"
            logger.debug(
                "%s %s params=%s headers=%s",
                method,
                path,
                params,
                _redact(attempt_headers),
            )

            request = self._client.build_request(
                method,
                path,
                params=params or None,
                headers=attempt_headers,
                content=content,
                timeout=remaining,
            )
            try:
                response = _read_within(
                    self._client.send(request, stream=True), deadline
                )
            except httpx.HTTPError as exc:
                if attempt < policy.max_attempts and policy.should_retry_error(
                    method, exc
                ):
                    delay = policy.compute_delay(attempt)
                    if monotonic() + delay < deadline:
                        logger.warning(
                            "%s attempt %d failed (%s), retrying in %.2fs",
                            operation.name,
                            attempt,
                            exc.__class__.__name__,
                            delay,
                        )
                        sleep(delay)
                        continue
                if isinstance(exc, httpx.TimeoutException):
                    raise SecretsManagerTimeoutError(
                        f"{operation.name}: {exc.__class__.__name__}"
                    ) from exc
                raise SecretsManagerTransportError(
                    f"{operation.name}: {exc.__class__.__name__}: {exc}"
                ) from exc

            if 200 <= response.status_code < 300:
                return response
            if attempt < policy.max_attempts and policy.should_retry_status(
                method, response.status_code
            ):
                delay = policy.compute_delay(attempt, response)
                if monotonic() + delay < deadline:
                    logger.warning(
                        "%s attempt %d returned %d, retrying in %.2fs",
                        operation.name,
                        attempt,
                        response.status_code,
                        delay,
                    )
                    response.close()
                    sleep(delay)
                    continue
            raise _exception_for_response(operation, response)

    def _decode_response(
        self, operation: Operation, response: httpx.Response
    ) -> DetailedResponse[Any]:
        headers = dict(response.headers)
        if response.status_code == 204 or not response.content:
            return DetailedResponse(None, response.status_code, headers)
        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError("$", "response body is not valid JSON") from exc

        result: Any
        if operation.response_family is not None:
            result = decode(operation.response_family, data)
        elif operation.response_model is not None:
            result = decode_model(operation.response_model, data)
        else:
            result = data
        return DetailedResponse(result, response.status_code, headers)


# Describe the encoded stream, not the body re-wrapped by _read_within.
_TRANSFER_HEADERS = frozenset(
    {"content-encoding", "content-length", "transfer-encoding"}
)


def _read_within(response: httpx.Response, deadline: float) -> httpx.Response:
    """Read a streamed response body, giving up once ``deadline`` passes.

    httpx timeouts bound each network phase separately, so a body that keeps
    trickling in could otherwise outlast the call deadline.

    Parameters
    ----------
    response : httpx.Response
        Response returned by ``send(..., stream=True)``.
    deadline : float
        ``monotonic()`` value at which the call expires.

    Returns
    -------
    httpx.Response
        Fully read response.
    """
    chunks: list[bytes] = []
    try:
        for chunk in response.iter_bytes():
            if monotonic() > deadline:
                raise httpx.ReadTimeout(
                    "response body exceeded the call deadline",
                    request=response.request,
                )
            chunks.append(chunk)
    finally:
        response.close()
    headers = [
        (name, value)
        for name, value in response.headers.multi_items()
        if name.lower() not in _TRANSFER_HEADERS
    ]
    return httpx.Response(
        response.status_code,
        headers=headers,
        content=b"".join(chunks),
        request=response.request,
    )


_STATUS_ERRORS: dict[int, type[SecretsManagerAPIError]] = {
    401: SecretsManagerAuthError,
    403: SecretsManagerForbiddenError,
    404: SecretsManagerNotFoundError,
    409: SecretsManagerConflictError,
    412: SecretsManagerPreconditionError,
    429: SecretsManagerRateLimitError,
}


def _exception_for_response(
    operation: Operation, response: httpx.Response
) -> SecretsManagerAPIError:
    """Map an error response to a typed SDK exception.

    Parameters
    ----------
    operation : Operation
        Operation that failed.
    response : httpx.Response
        HTTP response.

    Returns
    -------
    SecretsManagerAPIError
        Typed SDK error carrying the decoded service diagnostic.
    """
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        error = ErrorResponse()
    status = response.status_code
    message = next(
        (detail.message for detail in error.errors if detail.message),
        f"Secrets Manager request failed with status {status}",
    )
    logger.info(
        "%s failed with status_code=%d trace=%s", operation.name, status, error.trace
    )

    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        error_cls = SecretsManagerServiceError if status >= 500 else SecretsManagerAPIError
    return error_cls(
        message,
        status_code=status,
        errors=error.errors,
        trace=error.trace,
        headers=response.headers,
    )

