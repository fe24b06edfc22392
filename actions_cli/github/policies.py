"""Continuation policies deciding whether to fetch the next page."""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, Protocol, TypeAlias, TypeVar

I = TypeVar("I")

ContinuationPolicy: TypeAlias = Callable[[Sequence[I]], bool]


class Created(Protocol):
    """Anything carrying a creation timestamp."""

    @property
    def created_at(self) -> datetime: ...


T = TypeVar("T", bound=Created)


def always_continue(items: Sequence[Any]) -> bool:
    """Fetch every page."""
    return True


def possibly_recent(since: datetime) -> ContinuationPolicy[T]:
    """Continue while a page may still contain items created since ``since``.

    Listings are returned newest first, so once a whole page is older than
    ``since`` every following page is too.
    """

    def should_continue(items: Sequence[T]) -> bool:
        return any(item.created_at >= since for item in items)

    return should_continue
