"""Lazy async collections.

An ``AsyncCollection`` wraps a zero-argument factory returning an async
iterable.  Transformations (``map``, ``filter``, ``flatten``) compose new
factories without consuming anything; terminal operations (``to_list``,
``to_map``) drain the pipeline.

Every iteration calls the factory again, so iterating the same collection twice
re-runs the whole pipeline (including any remote listing calls).  Buffer the
result with ``to_list`` when it must be read more than once.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Hashable, Iterable
from inspect import isawaitable
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K", bound=Hashable)


class AsyncCollection(Generic[T]):
    """Re-invocable lazy async sequence."""

    def __init__(self, source: Callable[[], AsyncIterable[T]]) -> None:
        self._source = source

    @classmethod
    def of(cls, items: Iterable[T]) -> AsyncCollection[T]:
        """Build a collection over an in-memory iterable."""
        snapshot = list(items)

        async def _gen() -> AsyncIterator[T]:
            for item in snapshot:
                yield item

        return cls(_gen)

    def __aiter__(self) -> AsyncIterator[T]:
        return aiter(self._source())

    # -- Transformations -------------------------------------------------------

    def map(self, fn: Callable[[T], U | Awaitable[U]]) -> AsyncCollection[U]:
        async def _gen() -> AsyncIterator[U]:
            async for item in self:
                result = fn(item)
                yield await result if isawaitable(result) else result  # type: ignore[misc]

        return AsyncCollection(_gen)

    def filter(self, predicate: Callable[[T], object]) -> AsyncCollection[T]:
        async def _gen() -> AsyncIterator[T]:
            async for item in self:
                if predicate(item):
                    yield item

        return AsyncCollection(_gen)

    def flatten(self: AsyncCollection[Iterable[U]]) -> AsyncCollection[U]:
        """Flatten a collection of pages into a collection of items."""

        async def _gen() -> AsyncIterator[U]:
            async for page in self:
                for item in page:
                    yield item

        return AsyncCollection(_gen)

    # -- Terminal operations ---------------------------------------------------

    async def to_list(self) -> list[T]:
        return [item async for item in self]

    async def to_map(self, key: Callable[[T], K]) -> dict[K, T]:
        """Drain into a dict.  Later items overwrite earlier ones on key collision."""
        result: dict[K, T] = {}
        async for item in self:
            result[key(item)] = item
        return result


def to_collection(source: Callable[[], AsyncIterable[T]]) -> AsyncCollection[T]:
    return AsyncCollection(source)
