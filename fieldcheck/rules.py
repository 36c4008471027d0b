from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidRuleSyntax, UnrecognizedConstraintKind

SEPARATOR = ":"


class ConstraintKind(str, Enum):
    """Built-in constraint kinds, valued by their annotation token."""

    LENGTH = "len"
    MEMBERSHIP = "in"
    MINIMUM = "min"
    MAXIMUM = "max"
    RANGE = "between"


# kind -> (parameter form, what is checked)
KIND_EXPLANATIONS: dict[ConstraintKind, tuple[str, str]] = {
    ConstraintKind.LENGTH: (
        "integer",
        "Text length equals n; for text sequences, every element's length. Not defined for integers.",
    ),
    ConstraintKind.MEMBERSHIP: (
        "comma-separated tokens",
        "Value (or every element) is one of the tokens. Tokens are parsed as integers for integer fields. "
        "An empty list admits nothing.",
    ),
    ConstraintKind.MINIMUM: (
        "integer",
        "Integer value, or text length, is at least n; applied per element for sequences.",
    ),
    ConstraintKind.MAXIMUM: (
        "integer",
        "Integer value, or text length, is at most n; applied per element for sequences.",
    ),
    ConstraintKind.RANGE: (
        "two comma-separated integers",
        "Integer value, or text length, lies in [lo, hi]; applied per element for sequences.",
    ),
}


@dataclass(frozen=True)
class Rule:
    kind: ConstraintKind
    parameter: str

    def __str__(self) -> str:
        return f"{self.kind.value}{SEPARATOR}{self.parameter}"


def parse_rule(raw: str) -> Rule:
    """
    Parse a ``"<kind>:<parameter>"`` annotation.

    The parameter is kept verbatim; interpreting it is the checker's job.

    Raises:
        InvalidRuleSyntax: Not exactly one separator, or an empty kind token.
        UnrecognizedConstraintKind: The kind token is not a built-in kind.
    """
    parts = raw.split(SEPARATOR)
    if len(parts) != 2 or not parts[0]:
        raise InvalidRuleSyntax()

    token, parameter = parts
    try:
        kind = ConstraintKind(token)
    except ValueError:
        raise UnrecognizedConstraintKind() from None
    return Rule(kind=kind, parameter=parameter)
