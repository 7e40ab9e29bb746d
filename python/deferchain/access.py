"""Null-safe reads applied to resolved values."""

from __future__ import annotations

from collections.abc import Mapping, Sized
from typing import Any, Callable, Optional

__all__ = [
    "SEQUENCE_HELPERS",
    "register_sequence_helper",
    "safe_attr",
    "safe_call",
    "safe_index",
]


def _is_iterable(value) -> bool:
    if isinstance(value, (str, bytes, Mapping)):
        return False
    return hasattr(value, "__iter__")


def _is_sized(value) -> bool:
    return isinstance(value, Sized) and not isinstance(value, Mapping)


def _length(value):
    return len(value)


def _map(value):
    def map(fn):
        return [fn(item) for item in value]

    return map


def _filter(value):
    def filter(fn):
        return [item for item in value if fn(item)]

    return filter


def _slice(value):
    def slice(start=None, stop=None):
        return list(value)[start:stop]

    return slice


# Members synthesized for array-shaped values that lack an attribute of the
# same name. Maps name -> (applies, build) where build receives the value.
SEQUENCE_HELPERS: dict[str, tuple[Callable[[Any], bool], Callable[[Any], Any]]] = {
    "length": (_is_sized, _length),
    "map": (_is_iterable, _map),
    "filter": (_is_iterable, _filter),
    "slice": (_is_iterable, _slice),
}


def register_sequence_helper(
    name: str,
    build: Callable[[Any], Any],
    applies: Optional[Callable[[Any], bool]] = None,
) -> None:
    """Register an array-shaped member.

    ``build`` receives the resolved value and returns the member, usually a
    closure over the value. ``applies`` defaults to "any non-string iterable".
    """
    SEQUENCE_HELPERS[name] = (applies or _is_iterable, build)


def safe_attr(value, name: str):
    if value is None:
        return None
    if isinstance(value, Mapping) and name in value:
        return value[name]
    try:
        return getattr(value, name)
    except AttributeError:
        pass
    helper = SEQUENCE_HELPERS.get(name)
    if helper is not None:
        applies, build = helper
        if applies(value):
            return build(value)
    return None


def safe_index(value, key):
    if value is None:
        return None
    if isinstance(key, str) and not isinstance(value, Mapping):
        return safe_attr(value, key)
    if not hasattr(value, "__getitem__"):
        return None
    # Negative indices and slices keep their Python meaning.
    try:
        return value[key]
    except (LookupError, TypeError):
        return None


def safe_call(value, args, kwargs):
    if value is None:
        return None
    if not callable(value):
        raise TypeError(f"{type(value).__name__!r} object is not callable")
    return value(*args, **kwargs)
