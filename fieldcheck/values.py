"""Closed set of value shapes the checkers understand.

A field value is classified exactly once, from its declared type when that is
one of the supported shapes, otherwise from the runtime value itself.
"""

from __future__ import annotations

import collections.abc
import typing
from dataclasses import dataclass
from typing import Any

from .errors import InvalidRuleSyntax


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class TextSequence:
    items: tuple[str, ...]


@dataclass(frozen=True)
class IntegerSequence:
    items: tuple[int, ...]


Value = Text | Integer | TextSequence | IntegerSequence

# Ordered containers accepted for sequence fields.
_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _element_type(declared: Any) -> Any:
    """Return the element type of a supported sequence annotation, else None."""
    origin = typing.get_origin(declared)
    if origin not in _SEQUENCE_ORIGINS:
        return None
    args = typing.get_args(declared)
    if origin is tuple:
        # Only homogeneous tuple[X, ...] counts as a sequence.
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0] if len(args) == 1 else None


def _from_declared(declared: Any, value: Any) -> Value:
    if declared is str:
        if isinstance(value, str):
            return Text(value)
        raise InvalidRuleSyntax()
    if declared is int:
        if _is_integer(value):
            return Integer(value)
        raise InvalidRuleSyntax()

    element = _element_type(declared)
    if element is None or not isinstance(value, (list, tuple)):
        raise InvalidRuleSyntax()
    if element is str and all(isinstance(v, str) for v in value):
        return TextSequence(tuple(value))
    if element is int and all(_is_integer(v) for v in value):
        return IntegerSequence(tuple(value))
    raise InvalidRuleSyntax()


def _from_runtime(value: Any) -> Value:
    if isinstance(value, str):
        return Text(value)
    if _is_integer(value):
        return Integer(value)
    if isinstance(value, (list, tuple)):
        if all(isinstance(v, str) for v in value):
            return TextSequence(tuple(value))
        if all(_is_integer(v) for v in value):
            return IntegerSequence(tuple(value))
    raise InvalidRuleSyntax()


def classify(value: Any, declared: Any = None) -> Value:
    """Classify ``value`` into one of the supported shapes.

    Args:
        value: Runtime value of the field.
        declared: Resolved type annotation of the field, or None if unknown.

    Raises:
        InvalidRuleSyntax: The shape is not supported, or the runtime value
            does not match the declared type.
    """
    if declared is None or declared is Any:
        return _from_runtime(value)
    return _from_declared(declared, value)
