"""Error taxonomy for record validation.

Field-level failures are ``ConstraintError`` subclasses and are collected into
a ``ValidationErrors`` aggregate. ``NotARecordTypeError`` is raised on its own,
before any field is looked at.
"""

from __future__ import annotations

import copy
from typing import Iterator, Sequence, TypeVar


class FieldcheckError(Exception):
    """Base class for every error raised by fieldcheck."""


class NotARecordTypeError(FieldcheckError, TypeError):
    """The value handed to the engine is not a dataclass instance."""

    def __init__(self, message: str = "wrong argument given, should be a dataclass instance"):
        super().__init__(message)


class ConstraintError(FieldcheckError):
    """A single field-level failure."""

    default_message = "constraint failed"

    def __init__(self, message: str | None = None, *, position: int | None = None):
        super().__init__(message or self.default_message)
        self._position = position
        self._field: str | None = None

    @property
    def message(self) -> str:
        return str(self.args[0])

    @property
    def field(self) -> str | None:
        """Name of the field this failure was collected for."""
        return self._field

    @property
    def position(self) -> int | None:
        """Index of the first failing element, for collection values."""
        return self._position

    def bound_to(self, field_name: str) -> ConstraintError:
        """Return a copy of this error attributed to ``field_name``."""
        bound = copy.copy(self)
        bound._field = field_name
        return bound

    def __str__(self) -> str:
        return self.message


class InaccessibleFieldValidation(ConstraintError):
    default_message = "validation for private field is not allowed"


class InvalidRuleSyntax(ConstraintError):
    default_message = "invalid validator syntax"


class UnrecognizedConstraintKind(ConstraintError):
    default_message = "Unexpected validator option"


class ConstraintViolation(ConstraintError):
    """The value was checked and does not satisfy the rule."""

    default_message = "Field value isn't allowed"


E = TypeVar("E", bound=ConstraintError)


class ValidationErrors(FieldcheckError):
    """Ordered, non-empty collection of field failures for one record."""

    def __init__(self, errors: Sequence[ConstraintError]):
        if not errors:
            raise ValueError("ValidationErrors requires at least one error")
        self._errors = tuple(errors)
        super().__init__(self._errors)

    def __str__(self) -> str:
        return "".join(e.message for e in self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ConstraintError]:
        return iter(self._errors)

    def __getitem__(self, index: int) -> ConstraintError:
        return self._errors[index]

    def of_type(self, error_type: type[E]) -> list[E]:
        """Return the collected errors that are instances of ``error_type``."""
        return [e for e in self._errors if isinstance(e, error_type)]
