from __future__ import annotations

from typing import Any

import jmespath  # type: ignore[import-untyped]

from .combinators import fmap
from .proxy import Deferred

__all__ = ["query"]

_compiled_cache: dict[str, Any] = {}


def _compile(expression: str):
    compiled = _compiled_cache.get(expression)
    if compiled is None:
        compiled = jmespath.compile(expression)
        _compiled_cache[expression] = compiled
    return compiled


def query(node, expression: str) -> Deferred:
    """Apply a JMESPath expression to the node's eventual value.

    The expression is compiled when the node resolves, so a malformed
    expression surfaces as the node's failure.
    """

    def apply(data):
        return _compile(expression).search(data)

    return fmap(node, apply)
