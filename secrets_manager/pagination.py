"""Lazy iteration over offset-paginated list endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from secrets_manager.exceptions import SecretsManagerError
from secrets_manager.schemas.common import PaginatedCollection

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")


class Pager(Generic[ItemT]):
    """Page through a list endpoint.

    The first request omits ``offset`` (unless ``start_offset`` is given);
    every following request uses the offset carried by the previous page's
    ``next`` link. A failed request leaves the pager where it was, so
    calling :meth:`get_next` again repeats it at the same offset.

    A pager is meant for a single caller. To resume after discarding a
    pager, build a new one with ``start_offset`` set to :attr:`offset`.

    Parameters
    ----------
    fetch : Callable[[int | None], PaginatedCollection]
        Fetch the page at an offset, ``None`` meaning the first page.
    items_field : str
        Name of the page attribute holding the items.
    start_offset : int | None, default=None
        Offset of the first request.
    name : str, default="pager"
        Label used in log records.
    """

    def __init__(
        self,
        fetch: Callable[[int | None], PaginatedCollection],
        items_field: str,
        *,
        start_offset: int | None = None,
        name: str = "pager",
    ) -> None:
        self._fetch = fetch
        self._items_field = items_field
        self._offset = start_offset
        self._has_next = True
        self._total: int | None = None
        self.name = name

    @property
    def offset(self) -> int | None:
        """Offset the next request will use, ``None`` for the first page."""
        return self._offset

    @property
    def total(self) -> int | None:
        """Total reported by the first page fetched."""
        return self._total

    def has_next(self) -> bool:
        """Return whether another page may be fetched.

        Returns
        -------
        bool
            ``False`` once the last page has been returned.
        """
        return self._has_next

    def get_next(self) -> list[ItemT]:
        """Fetch the next page.

        Returns
        -------
        list[ItemT]
            Items of the page.
        """
        if not self._has_next:
            raise SecretsManagerError(f"{self.name} has no more pages")
        page = self._fetch(self._offset)
        items: list[Any] = list(getattr(page, self._items_field))
        if self._total is None:
            self._total = page.total
        next_offset = page.next_offset()
        logger.debug(
            "%s fetched %d items at offset=%s next=%s",
            self.name,
            len(items),
            self._offset,
            next_offset,
        )
        if not items or next_offset is None or next_offset == self._offset:
            self._has_next = False
        else:
            self._offset = next_offset
        return items

    def get_all(self) -> list[ItemT]:
        """Fetch every remaining page.

        Returns
        -------
        list[ItemT]
            Concatenated items of the remaining pages.
        """
        results: list[ItemT] = []
        while self.has_next():
            results.extend(self.get_next())
        return results

    def __iter__(self) -> Iterator[ItemT]:
        while self.has_next():
            yield from self.get_next()
