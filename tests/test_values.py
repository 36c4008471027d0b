from __future__ import annotations

from typing import Any, Sequence

import pytest

from fieldcheck.errors import InvalidRuleSyntax
from fieldcheck.values import Integer, IntegerSequence, Text, TextSequence, classify


def test_classify_from_declared_type():
    assert classify("abc", str) == Text("abc")
    assert classify(3, int) == Integer(3)
    assert classify(["a", "b"], list[str]) == TextSequence(("a", "b"))
    assert classify((1, 2), tuple[int, ...]) == IntegerSequence((1, 2))
    assert classify([1], Sequence[int]) == IntegerSequence((1,))


def test_declared_type_disambiguates_empty_sequences():
    assert classify([], list[int]) == IntegerSequence(())
    assert classify([], list[str]) == TextSequence(())


def test_classify_from_runtime_value():
    assert classify("abc") == Text("abc")
    assert classify(-4, Any) == Integer(-4)
    assert classify(["x"]) == TextSequence(("x",))
    assert classify([1, 2]) == IntegerSequence((1, 2))


def test_bool_is_not_an_integer():
    with pytest.raises(InvalidRuleSyntax):
        classify(True)
    with pytest.raises(InvalidRuleSyntax):
        classify(True, int)
    with pytest.raises(InvalidRuleSyntax):
        classify([1, False], list[int])


def test_unsupported_shapes():
    unsupported = [
        (1.5, None),
        ({"a": 1}, None),
        (["a", 1], None),
        ({"a"}, set[str]),
        ((1, "a"), tuple[int, str]),
        ("abc", int),
        (5, str),
        ("abc", list[str]),
        (["a", 2], list[str]),
        (None, str),
    ]
    for value, declared in unsupported:
        with pytest.raises(InvalidRuleSyntax):
            classify(value, declared)
