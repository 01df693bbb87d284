"""Lazy iteration over the API's paginated listings.

Listing endpoints answer with ``{"previous", "next", "results"}``. A
``ResourceIterator`` holds the records of the page it fetched last plus the
``next`` URL, and only requests the following page once the buffered records
run out. Each page is requested at most once; ``next is None`` ends the
sequence for good.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import ClassVar, Deque, Generic, Iterator, Optional, Type
from urllib.parse import urlencode

import requests

from ..domain import Account, Instrument, Order, PaginatedPage, Position
from ..domain.resources import RecordT
from ..errors import InstrumentNotFound
from .transport import decode, send

logger = logging.getLogger(__name__)


class ResourceIterator(Iterator[RecordT], Generic[RecordT]):
    record_type: ClassVar[Type]
    path: ClassVar[str]

    def __init__(
        self,
        session: requests.Session,
        api_base: str,
        url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._buffer: Deque[RecordT] = deque()
        self._next: Optional[str] = url or api_base + self.path
        self._pages_fetched = 0

    @property
    def next_url(self) -> Optional[str]:
        return self._next

    @property
    def exhausted(self) -> bool:
        return not self._buffer and self._next is None

    def __iter__(self) -> "ResourceIterator[RecordT]":
        return self

    def __next__(self) -> RecordT:
        while not self._buffer:
            url = self._next
            if url is None:
                raise StopIteration
            self._fetch_page(url)
        return self._buffer.popleft()

    def _fetch_page(self, url: str) -> None:
        # A failed page ends the sequence; callers restart with a new iterator.
        self._next = None

        resp = send(self._session, "GET", url, timeout=self._timeout)
        page = decode(resp, PaginatedPage[self.record_type])

        self._buffer.extend(page.results)
        self._next = page.next
        self._pages_fetched += 1
        logger.debug(
            "page_fetched",
            extra={
                "resource": type(self).__name__,
                "url": url,
                "records": len(page.results),
                "has_next": page.next is not None,
                "page": self._pages_fetched,
            },
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(buffered={len(self._buffer)}, "
            f"next={self._next!r}, pages_fetched={self._pages_fetched})"
        )


class Instruments(ResourceIterator[Instrument]):
    record_type = Instrument
    path = "instruments/"

    @classmethod
    def search_by_symbol(
        cls,
        session: requests.Session,
        api_base: str,
        symbol: str,
        *,
        timeout: Optional[float] = None,
    ) -> Instrument:
        url = f"{api_base}{cls.path}?{urlencode({'symbol': symbol})}"
        found = next(cls(session, api_base, url, timeout=timeout), None)
        if found is None:
            raise InstrumentNotFound(f"No instrument found for symbol {symbol!r}")
        return found


class Accounts(ResourceIterator[Account]):
    record_type = Account
    path = "accounts/"


class Orders(ResourceIterator[Order]):
    record_type = Order
    path = "orders/"


class Positions(ResourceIterator[Position]):
    record_type = Position
    # Account-scoped listings are passed in as the starting URL.
    path = "positions/"
