from __future__ import annotations

from .access import register_sequence_helper
from .combinators import (
    call,
    catch,
    finally_,
    fmap,
    gather,
    get,
    invoke,
    is_deferred,
    then,
)
from .factory import defer, lift, wrap
from .proxy import DEFER_PROXY_TEXT, Deferred
from .structured import query


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("deferchain")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "DEFER_PROXY_TEXT",
    "Deferred",
    "call",
    "catch",
    "defer",
    "finally_",
    "fmap",
    "gather",
    "get",
    "invoke",
    "is_deferred",
    "lift",
    "query",
    "register_sequence_helper",
    "then",
    "wrap",
    "__version__",
]
