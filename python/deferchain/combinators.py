"""Explicit combinators over nodes.

Each function accepts a node, any other awaitable, or a plain value. They
reach members whose names the proxy reserves for itself (``then``,
``fmap``, dunders) and compose with ``functools.partial``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from .access import safe_attr, safe_call, safe_index
from .factory import lift
from .proxy import Deferred

__all__ = [
    "call",
    "catch",
    "finally_",
    "fmap",
    "gather",
    "get",
    "invoke",
    "is_deferred",
    "then",
]


def get(node, key) -> Deferred:
    if isinstance(key, str):
        return lift(node)._link(lambda value: safe_attr(value, key))
    return lift(node)._link(lambda value: safe_index(value, key))


def call(node, *args, **kwargs) -> Deferred:
    return lift(node)._link(lambda value: safe_call(value, args, kwargs))


invoke = call


def fmap(node, fn: Callable[[Any], Any]) -> Deferred:
    return lift(node).fmap(fn)


def then(node, on_success=None, on_failure=None) -> Deferred:
    return lift(node).then(on_success, on_failure)


def catch(node, on_failure) -> Deferred:
    return lift(node).catch(on_failure)


def finally_(node, on_settle) -> Deferred:
    return lift(node).finally_(on_settle)


def gather(*nodes, return_exceptions: bool = False) -> Deferred:
    """Node resolving to the list of results of ``nodes``, in order."""

    async def source():
        results = await asyncio.gather(*nodes, return_exceptions=return_exceptions)
        return list(results)

    return Deferred(source)


def is_deferred(value) -> bool:
    return isinstance(value, Deferred)
