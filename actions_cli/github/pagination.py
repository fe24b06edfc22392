"""Cursor-following pagination over GitHub list endpoints."""

import logging
from collections.abc import (
    AsyncGenerator,
    AsyncIterator,
    Callable,
    Mapping,
    Sequence,
)
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeAlias, TypeVar

import aiohttp
from pydantic import BaseModel

from actions_cli.github.policies import ContinuationPolicy, always_continue

log = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)
I = TypeVar("I")

EndReason: TypeAlias = Literal["exhausted", "stopped", "failed"]


class PaginationError(RuntimeError):
    """Raised when a paginated listing ended because a request failed."""


@dataclass(frozen=True, kw_only=True)
class Request:
    """Everything needed to issue one HTTP call.

    Authentication and client headers live on the session; ``headers`` only
    carries per-request additions.
    """

    url: str
    method: str = "GET"
    params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    def follow(self, url: str) -> "Request":
        """Request for a continuation link, which already carries the query."""
        return Request(url=url, headers=self.headers)


@dataclass(frozen=True)
class Fetch:
    """Cursor pointing at the next page to fetch."""

    request: Request


@dataclass(frozen=True)
class End:
    """Terminal cursor recording why pagination stopped."""

    reason: EndReason
    error: BaseException | None = None


Cursor: TypeAlias = Fetch | End


def next_link(response: aiohttp.ClientResponse) -> str | None:
    """Return the URL of the ``rel="next"`` entry of the Link header."""
    link = response.links.get("next")
    if link is None:
        return None
    return str(link["url"])


@dataclass(kw_only=True)
class PageStream(Generic[P, I]):
    """Lazy async sequence of the items of a paginated listing.

    Every ``async for`` starts again from ``request``. Pages are fetched one
    at a time; a page is only requested once the previous one has been
    extracted and the continuation policy approved it.

    Failed requests end the sequence like an exhausted listing would. The
    terminal cursor is kept in ``end`` so callers can tell the two apart,
    see :meth:`raise_for_failure`.
    """

    session: aiohttp.ClientSession = field(repr=False)
    request: Request
    page_model: type[P]
    extract: Callable[[P], Sequence[I]]
    should_continue: ContinuationPolicy[I] = always_continue
    end: End | None = field(default=None, init=False)
    pages: int = field(default=0, init=False)

    def __aiter__(self) -> AsyncIterator[I]:
        return self._items()

    async def _items(self) -> AsyncGenerator[I, None]:
        self.end = None
        self.pages = 0
        cursor: Cursor = Fetch(self.request)

        while isinstance(cursor, Fetch):
            try:
                page, link = await self._fetch(cursor.request)
            except (aiohttp.ClientError, TimeoutError, ValueError) as exc:
                log.warning(
                    "Pagination of %s stopped after %d page(s): %s",
                    self.request.url,
                    self.pages,
                    exc,
                )
                cursor = End("failed", exc)
                break

            self.pages += 1
            items = self.extract(page)
            if link is None:
                cursor = End("exhausted")
            elif not self.should_continue(items):
                cursor = End("stopped")
            else:
                cursor = Fetch(cursor.request.follow(link))

            for item in items:
                yield item

        log.debug(
            "Pagination of %s ended (%s) after %d page(s)",
            self.request.url,
            cursor.reason,
            self.pages,
        )
        self.end = cursor

    async def _fetch(self, request: Request) -> tuple[P, str | None]:
        log.debug(
            "Fetching page: %s %s %s", request.method, request.url, request.params
        )
        kwargs: dict[str, Any] = {}
        if request.params:
            kwargs["params"] = dict(request.params)
        if request.headers:
            kwargs["headers"] = dict(request.headers)

        async with self.session.request(
            request.method, request.url, **kwargs
        ) as response:
            response.raise_for_status()
            link = next_link(response)
            data = await response.json()

        return self.page_model.model_validate(data), link

    @property
    def failed(self) -> bool:
        """Whether the last iteration ended on a failed request."""
        return self.end is not None and self.end.reason == "failed"

    def raise_for_failure(self) -> None:
        """Raise if the last iteration ended on a failed request.

        Raises:
            PaginationError: If a request or page decode failed

        """
        if self.end is not None and self.end.reason == "failed":
            raise PaginationError(
                f"Failed to list {self.request.url}: {self.end.error}"
            ) from self.end.error
