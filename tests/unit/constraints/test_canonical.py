"""
arrayschema — unit tests for canonical equality

File: tests/unit/constraints/test_canonical.py

Purpose
- Validate the kind-preserving, order-insensitive-for-objects equality used by
  ``uniqueItems`` and ``enum``.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from arrayschema.constraints.canonical import canonical_key, has_duplicates, json_equal

_JSON = st.recursive(
    st.one_of(
        st.none(),
        st.booleans(),
        st.integers(min_value=-1_000, max_value=1_000),
        st.floats(allow_nan=False, allow_infinity=False),
        st.text(max_size=5),
    ),
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=4), children, max_size=4),
    ),
    max_leaves=12,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("left", "right", "equal"),
    [
        (1, 1.0, True),
        (1, "1", False),
        (True, 1, False),
        (False, 0, False),
        (None, None, True),
        ({"a": 1, "b": 2}, {"b": 2, "a": 1}, True),
        ([1, 2], [2, 1], False),
        ([1, [2]], [1.0, [2.0]], True),
        ({"a": [1]}, {"a": ["1"]}, False),
    ],
)
def test_json_equal_matrix(left: object, right: object, equal: bool) -> None:
    assert json_equal(left, right) is equal


@pytest.mark.unit
def test_has_duplicates() -> None:
    assert has_duplicates([1, 2, 2])
    assert not has_duplicates([1, "1"])
    assert not has_duplicates([1, True])
    assert has_duplicates([{"x": 1, "y": 2}, {"y": 2, "x": 1}])
    assert not has_duplicates([])


@pytest.mark.unit
@given(value=_JSON)
def test_property_key_is_hashable_and_reflexive(value: object) -> None:
    assert hash(canonical_key(value)) == hash(canonical_key(value))
    assert json_equal(value, value)


@pytest.mark.unit
@given(items=st.lists(_JSON, max_size=6))
def test_property_repeating_any_element_creates_duplicate(items: list[object]) -> None:
    if not items:
        return
    assert has_duplicates([*items, items[0]])


@pytest.mark.unit
@given(mapping=st.dictionaries(st.text(max_size=4), st.integers(), max_size=5))
def test_property_object_key_order_is_irrelevant(mapping: dict[str, int]) -> None:
    reversed_mapping = dict(reversed(list(mapping.items())))

    assert json_equal(mapping, reversed_mapping)
