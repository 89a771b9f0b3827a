"""SDK response types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

ResultT = TypeVar("ResultT")


@dataclass(frozen=True, slots=True)
class DetailedResponse(Generic[ResultT]):
    """Outcome of one successful operation.

    Attributes
    ----------
    result : ResultT | None
        Decoded response body, ``None`` when the service sent no content.
    status_code : int
        HTTP status code.
    headers : Mapping[str, str]
        Response headers.
    """

    result: ResultT | None
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)

    def get_result(self) -> ResultT:
        """Return the result, failing when the response had no body.

        Returns
        -------
        ResultT
            Decoded response body.
        """
        if self.result is None:
            raise ValueError(f"response with status {self.status_code} has no body")
        return self.result


class LockMode:
    """Known values of the ``mode`` query parameter of bulk lock creation.

    The service may accept other values; any string is sent unchanged.
    """

    EXCLUSIVE = "exclusive"
    EXCLUSIVE_DELETE = "exclusive_delete"
    REMOVE_PREVIOUS = "remove_previous"
    REMOVE_PREVIOUS_AND_DELETE = "remove_previous_and_delete"


class VersionAlias:
    """Aliases accepted wherever a version id is."""

    CURRENT = "current"
    PREVIOUS = "previous"
