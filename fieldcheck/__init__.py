"""Declarative field validation for dataclasses (rules as metadata, checkers as code)."""

__version__ = "0.1.0"

from .engine import ANNOTATION_KEY, constrained, ensure_valid, validate
from .errors import (
    ConstraintError,
    ConstraintViolation,
    FieldcheckError,
    InaccessibleFieldValidation,
    InvalidRuleSyntax,
    NotARecordTypeError,
    UnrecognizedConstraintKind,
    ValidationErrors,
)
from .rules import ConstraintKind, Rule, parse_rule

__all__ = [
    "ANNOTATION_KEY",
    "ConstraintError",
    "ConstraintKind",
    "ConstraintViolation",
    "FieldcheckError",
    "InaccessibleFieldValidation",
    "InvalidRuleSyntax",
    "NotARecordTypeError",
    "Rule",
    "UnrecognizedConstraintKind",
    "ValidationErrors",
    "constrained",
    "ensure_valid",
    "parse_rule",
    "validate",
]
