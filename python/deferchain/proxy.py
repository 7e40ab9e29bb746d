"""Lazy chaining proxy over an eventual value.

A ``Deferred`` records attribute reads, indexing and calls made against a
value that does not exist yet. Each operation returns a new ``Deferred``
whose resolution waits for its parent and then applies the operation, so
``node.a.b[0].c()`` is built synchronously and resolved link by link when
the last node is awaited.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

from .access import safe_attr, safe_call, safe_index

__all__ = ["DEFER_PROXY_TEXT", "RESERVED_NAMES", "Deferred", "settle"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFER_PROXY_TEXT = "[Defer Proxy]"

# Members answered by the proxy itself rather than read from the value. Names
# added here without a matching method are refused by __getattr__; read them
# with combinators.get.
RESERVED_NAMES = frozenset({"then", "catch", "finally", "finally_", "fmap", "invoke"})


async def settle(result):
    """Await ``result`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(result):
        return await result
    return result


def _require_callable(name: str, fn) -> None:
    if not callable(fn):
        raise TypeError(f"{name}() argument must be callable, got {type(fn).__name__}")


def _log_outcome(future: asyncio.Future) -> None:
    if future.cancelled():
        logger.debug("deferred link cancelled")
        return
    exc = future.exception()
    if exc is not None:
        logger.debug("deferred link failed: %s", type(exc).__name__)


class Deferred(Generic[T]):
    """Awaitable proxy for an eventual value.

    ``source`` is a zero-argument callable returning the awaitable that
    produces this link's value. It is called once, on first await; the
    resulting future is shared by every awaiter and every child chain.
    """

    __slots__ = ("_source", "_future")

    def __init__(self, source: Callable[[], Awaitable[T]]) -> None:
        self._source: Optional[Callable[[], Awaitable[T]]] = source
        self._future: Optional[asyncio.Future] = None

    def _ensure_future(self) -> asyncio.Future:
        if self._future is None:
            source = self._source
            self._source = None
            self._future = asyncio.ensure_future(source())
            self._future.add_done_callback(_log_outcome)
            logger.debug("deferred link scheduled")
        return self._future

    def _link(self, step: Callable[[Any], Any]) -> "Deferred":
        parent = self

        async def source():
            value = await parent
            return await settle(step(value))

        return Deferred(source)

    # Awaitable / thenable surface

    def __await__(self) -> Generator[Any, None, T]:
        return asyncio.shield(self._ensure_future()).__await__()

    def then(self, on_success=None, on_failure=None) -> "Deferred":
        parent = self

        async def source():
            try:
                value = await parent
            except Exception as exc:
                if on_failure is None:
                    raise
                _require_callable("then", on_failure)
                return await settle(on_failure(exc))
            if on_success is None:
                return value
            _require_callable("then", on_success)
            return await settle(on_success(value))

        return Deferred(source)

    def catch(self, on_failure) -> "Deferred":
        parent = self

        async def source():
            try:
                return await parent
            except Exception as exc:
                _require_callable("catch", on_failure)
                return await settle(on_failure(exc))

        return Deferred(source)

    def finally_(self, on_settle) -> "Deferred[T]":
        parent = self

        async def source():
            try:
                return await parent
            finally:
                _require_callable("finally_", on_settle)
                await settle(on_settle())

        return Deferred(source)

    # Explicit transforms

    def fmap(self, fn: Callable[[T], Any]) -> "Deferred":
        def step(value):
            _require_callable("fmap", fn)
            return fn(value)

        return self._link(step)

    def invoke(self, *args, **kwargs) -> "Deferred":
        return self._link(lambda value: safe_call(value, args, kwargs))

    # Interception

    def __call__(self, *args, **kwargs) -> "Deferred":
        return self.invoke(*args, **kwargs)

    def __getattr__(self, name: str) -> "Deferred":
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        if name in Deferred.__slots__:
            raise AttributeError(name)
        if name == "finally":
            return self.finally_
        if name in RESERVED_NAMES:
            raise AttributeError(
                f"{name!r} is reserved on Deferred; read it with get(node, {name!r})"
            )
        return self._link(lambda value: safe_attr(value, name))

    def __getitem__(self, key) -> "Deferred":
        return self._link(lambda value: safe_index(value, key))

    def __iter__(self):
        raise TypeError("Deferred is not iterable; await it first")

    # Display

    def __str__(self) -> str:
        return DEFER_PROXY_TEXT

    def __repr__(self) -> str:
        return DEFER_PROXY_TEXT

    def __format__(self, format_spec: str) -> str:
        return DEFER_PROXY_TEXT
