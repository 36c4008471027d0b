from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, TypeVar

from .errors import ConstraintViolation, InvalidRuleSyntax
from .rules import ConstraintKind
from .values import Integer, IntegerSequence, Text, TextSequence, Value

# Checkers return None when the value passes and raise a ConstraintError otherwise.
Checker = Callable[[Value, str], None]

T = TypeVar("T")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str) -> int:
    """Parse a base-10 signed integer parameter.

    Only an optional sign followed by ASCII digits is accepted; whitespace,
    underscores and anything else ``int()`` would tolerate are rejected.
    """
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidRuleSyntax()
    return int(text)


def parse_bounds(text: str) -> tuple[int, int]:
    parts = text.split(",")
    if len(parts) != 2:
        raise InvalidRuleSyntax()
    return parse_int(parts[0]), parse_int(parts[1])


def _require_all(items: Iterable[T], accept: Callable[[T], bool], template: str) -> None:
    for i, item in enumerate(items):
        if not accept(item):
            raise ConstraintViolation(template.format(i), position=i)


def _check_measured(
    value: Value,
    accept: Callable[[int], bool],
    *,
    text_message: str,
    integer_message: str,
    text_item_template: str,
    integer_item_template: str,
) -> None:
    """Apply a numeric predicate to text lengths or integers, per shape."""
    if isinstance(value, Text):
        if not accept(len(value.value)):
            raise ConstraintViolation(text_message)
    elif isinstance(value, Integer):
        if not accept(value.value):
            raise ConstraintViolation(integer_message)
    elif isinstance(value, TextSequence):
        _require_all(value.items, lambda s: accept(len(s)), text_item_template)
    elif isinstance(value, IntegerSequence):
        _require_all(value.items, accept, integer_item_template)
    else:
        raise InvalidRuleSyntax()


def check_length(value: Value, parameter: str) -> None:
    expected = parse_int(parameter)
    if isinstance(value, Text):
        if len(value.value) != expected:
            raise ConstraintViolation("lengths don't match")
    elif isinstance(value, TextSequence):
        _require_all(
            value.items,
            lambda s: len(s) == expected,
            "The string on position {} has a wrong length",
        )
    else:
        raise InvalidRuleSyntax()


def check_membership(value: Value, parameter: str) -> None:
    if not isinstance(value, (Text, Integer, TextSequence, IntegerSequence)):
        raise InvalidRuleSyntax()
    # An empty set admits nothing, whatever the shape.
    if not parameter:
        raise ConstraintViolation()

    tokens = parameter.split(",")
    if isinstance(value, Text):
        if value.value not in set(tokens):
            raise ConstraintViolation()
    elif isinstance(value, TextSequence):
        allowed = set(tokens)
        _require_all(value.items, lambda s: s in allowed, "The string on position {} is not allowed")
    else:
        # Every token must parse, even if an earlier one already matches.
        allowed_ints = {parse_int(t) for t in tokens}
        if isinstance(value, Integer):
            if value.value not in allowed_ints:
                raise ConstraintViolation()
        else:
            _require_all(value.items, lambda n: n in allowed_ints, "The integer on position {} is not allowed")


def check_minimum(value: Value, parameter: str) -> None:
    low = parse_int(parameter)
    _check_measured(
        value,
        lambda n: n >= low,
        text_message="String length is less than allowed",
        integer_message="Integer is less than allowed",
        text_item_template="The string on position {} is shorter than allowed",
        integer_item_template="The integer on position {} is less than allowed",
    )


def check_maximum(value: Value, parameter: str) -> None:
    high = parse_int(parameter)
    _check_measured(
        value,
        lambda n: n <= high,
        text_message="String length is more than allowed",
        integer_message="Integer is more than allowed",
        text_item_template="The string on position {} is longer than allowed",
        integer_item_template="The integer on position {} is more than allowed",
    )


def check_range(value: Value, parameter: str) -> None:
    low, high = parse_bounds(parameter)
    _check_measured(
        value,
        lambda n: low <= n <= high,
        text_message="String length is not allowed",
        integer_message="Integer is not allowed",
        text_item_template="The string on position {} has a length out of range",
        integer_item_template="The integer on position {} is out of range",
    )


CHECKERS: Mapping[ConstraintKind, Checker] = MappingProxyType(
    {
        ConstraintKind.LENGTH: check_length,
        ConstraintKind.MEMBERSHIP: check_membership,
        ConstraintKind.MINIMUM: check_minimum,
        ConstraintKind.MAXIMUM: check_maximum,
        ConstraintKind.RANGE: check_range,
    }
)
