from __future__ import annotations

from collections import OrderedDict
from types import SimpleNamespace

import pytest

from deferchain import access


@pytest.fixture
def restore_helpers():
    saved = dict(access.SEQUENCE_HELPERS)
    try:
        yield
    finally:
        access.SEQUENCE_HELPERS.clear()
        access.SEQUENCE_HELPERS.update(saved)


@pytest.mark.parametrize(
    ("value", "name", "expected"),
    [
        pytest.param(None, "anything", None, id="none-value"),
        pytest.param({"a": 1}, "a", 1, id="mapping-key"),
        pytest.param(OrderedDict(a=2), "a", 2, id="mapping-subclass"),
        pytest.param({"a": 1}, "b", None, id="mapping-missing"),
        pytest.param(SimpleNamespace(x=3), "x", 3, id="attribute"),
        pytest.param(SimpleNamespace(x=3), "y", None, id="attribute-missing"),
        pytest.param([1, 2, 3], "length", 3, id="list-length"),
        pytest.param("abcd", "length", 4, id="str-length"),
        pytest.param((1, 2), "length", 2, id="tuple-length"),
        pytest.param("abcd", "map", None, id="str-has-no-map"),
        pytest.param(5, "length", None, id="int-has-no-length"),
    ],
)
def test_safe_attr(value, name, expected) -> None:
    assert access.safe_attr(value, name) == expected


def test_safe_attr_prefers_mapping_keys_over_methods() -> None:
    assert access.safe_attr({"keys": "k"}, "keys") == "k"
    assert access.safe_attr({"a": 1}, "keys")() == {"a": 1}.keys()


def test_safe_attr_prefers_real_attributes_over_helpers() -> None:
    value = SimpleNamespace(length=99)
    assert access.safe_attr(value, "length") == 99


def test_sequence_helpers_on_generators_and_tuples() -> None:
    assert access.safe_attr((1, 2, 3), "map")(lambda x: -x) == [-1, -2, -3]
    assert access.safe_attr(range(6), "filter")(lambda x: x > 3) == [4, 5]
    assert access.safe_attr(iter([1, 2, 3]), "slice")(1) == [2, 3]


@pytest.mark.parametrize(
    ("value", "key", "expected"),
    [
        pytest.param([1, 2], 0, 1, id="list-index"),
        pytest.param([1, 2], 5, None, id="list-out-of-range"),
        pytest.param({"k": "v"}, "k", "v", id="mapping"),
        pytest.param({"k": "v"}, "x", None, id="mapping-missing"),
        pytest.param({1: "one"}, 1, "one", id="mapping-int-key"),
        pytest.param(None, 0, None, id="none-value"),
        pytest.param(42, 0, None, id="not-subscriptable"),
        pytest.param([1, 2, 3], "length", 3, id="string-key-reads-member"),
        pytest.param("hello", slice(1, 3), "el", id="str-slice"),
    ],
)
def test_safe_index(value, key, expected) -> None:
    assert access.safe_index(value, key) == expected


def test_safe_call() -> None:
    assert access.safe_call(max, (1, 5), {}) == 5
    assert access.safe_call(sorted, ([3, 1],), {"reverse": True}) == [3, 1]
    assert access.safe_call(None, (1,), {}) is None


def test_safe_call_rejects_non_callable() -> None:
    with pytest.raises(TypeError, match="'int' object is not callable"):
        access.safe_call(3, (), {})


def test_register_sequence_helper(restore_helpers) -> None:
    access.register_sequence_helper("total", lambda value: sum(value))
    assert access.safe_attr([1, 2, 3], "total") == 6
    assert access.safe_attr({"a": 1}, "total") is None


def test_register_sequence_helper_with_custom_predicate(restore_helpers) -> None:
    access.register_sequence_helper(
        "text",
        lambda value: value.decode(),
        applies=lambda value: isinstance(value, bytes),
    )
    assert access.safe_attr(b"ab", "text") == "ab"
    assert access.safe_attr("ab", "text") is None


def test_length_is_not_synthesized_for_mappings() -> None:
    assert access.safe_attr({"a": 1}, "length") is None
    assert access.safe_attr({"length": 7}, "length") == 7


@pytest.mark.parametrize(
    ("value", "key"),
    [
        pytest.param([1, 2], 1.5, id="float-index"),
        pytest.param({"a": 1}, ["unhashable"], id="unhashable-key"),
        pytest.param((1, 2), None, id="none-index"),
    ],
)
def test_safe_index_ignores_unusable_keys(value, key) -> None:
    assert access.safe_index(value, key) is None


def test_safe_index_keeps_negative_indices() -> None:
    assert access.safe_index([1, 2, 3], -1) == 3
