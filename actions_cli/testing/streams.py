"""Helpers for feeding items to async consumers in tests."""

from collections.abc import AsyncIterator, Iterable
from typing import TypeVar

T = TypeVar("T")


async def from_items(items: Iterable[T]) -> AsyncIterator[T]:
    """Yield ``items`` as an async iterator."""
    for item in items:
        yield item
