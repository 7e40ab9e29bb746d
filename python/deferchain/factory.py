from __future__ import annotations

import functools
import inspect
from typing import Any

from .proxy import Deferred

__all__ = ["defer", "lift", "wrap"]


def _holding(value: Any) -> Deferred:
    async def source():
        return value

    return Deferred(source)


def _failing(exc: BaseException) -> Deferred:
    async def source():
        raise exc

    return Deferred(source)


def lift(value: Any) -> Deferred:
    """Return ``value`` as a root node, leaving existing nodes untouched."""
    if isinstance(value, Deferred):
        return value
    if inspect.isawaitable(value):
        return Deferred(lambda: value)
    return _holding(value)


def _node_factory(fn):
    @functools.wraps(fn)
    def factory(*args, **kwargs) -> Deferred:
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            return _failing(exc)
        return lift(result)

    return factory


def defer(value):
    """Wrap an eventual value.

    Awaitables (coroutines, futures, tasks, other nodes) become a root node.
    Callables become a factory: each call invokes ``value`` right away and
    returns a fresh root node for its result. An exception raised by the
    call is held by the node and raised when it is awaited. Anything else
    becomes a node already holding that value.
    """
    if inspect.isawaitable(value):
        return lift(value)
    if callable(value):
        return _node_factory(value)
    return _holding(value)


wrap = defer
