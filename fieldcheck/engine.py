from __future__ import annotations

import dataclasses
import logging
import typing
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from .checkers import CHECKERS
from .errors import (
    ConstraintError,
    InaccessibleFieldValidation,
    InvalidRuleSyntax,
    NotARecordTypeError,
    ValidationErrors,
)
from .rules import parse_rule
from .values import classify

logger = logging.getLogger(__name__)

# Metadata key holding a field's rule annotation.
ANNOTATION_KEY = "validate"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    declared: Any  # resolved annotation, None if it could not be resolved
    accessible: bool
    annotation: Any  # raw metadata value, None when the field is not annotated


def constrained(rule: str, **field_kwargs: Any) -> Any:
    """Declare a dataclass field carrying a validation rule.

    Example:
        @dataclass
        class User:
            name: str = constrained("len:5", default="")
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[ANNOTATION_KEY] = rule
    return dataclasses.field(metadata=metadata, **field_kwargs)


def _is_record(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _resolve_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as e:
        # Unresolvable forward references: fall back to runtime classification.
        logger.debug("Could not resolve annotations of %s: %s", record_type.__qualname__, e)
        return {}


def describe_fields(record: Any) -> list[FieldSpec]:
    """Return one FieldSpec per declared field, in declaration order."""
    if not _is_record(record):
        raise NotARecordTypeError()

    hints = _resolve_hints(type(record))
    return [
        FieldSpec(
            name=f.name,
            declared=hints.get(f.name),
            accessible=not f.name.startswith("_"),
            annotation=f.metadata.get(ANNOTATION_KEY),
        )
        for f in dataclasses.fields(record)
    ]


class ResultCollector:
    """Accumulates field failures for one validation call.

    ``ConstraintError`` raised while evaluating a field is recorded and the
    walk continues. Any other exception escapes and aborts the call.
    """

    def __init__(self) -> None:
        self._errors: list[ConstraintError] = []

    def add(self, field_name: str, error: ConstraintError) -> None:
        self._errors.append(error.bound_to(field_name))

    @contextmanager
    def evaluating(self, field_name: str) -> Iterator[None]:
        try:
            yield
        except ConstraintError as e:
            self.add(field_name, e)

    def __len__(self) -> int:
        return len(self._errors)

    def result(self) -> ValidationErrors | None:
        if not self._errors:
            return None
        return ValidationErrors(self._errors)


def evaluate_field(spec: FieldSpec, value: Any) -> None:
    """Parse and apply the field's rule; raise ConstraintError on failure."""
    if not isinstance(spec.annotation, str):
        raise InvalidRuleSyntax()
    rule = parse_rule(spec.annotation)
    checker = CHECKERS[rule.kind]
    checker(classify(value, spec.declared), rule.parameter)


def validate(record: Any) -> ValidationErrors | None:
    """
    Validate every annotated field of a dataclass instance.

    Returns:
        None if every rule holds, otherwise a ValidationErrors holding one
        failure per failing field, in declaration order.

    Raises:
        NotARecordTypeError: ``record`` is not a dataclass instance.
    """
    collector = ResultCollector()

    for spec in describe_fields(record):
        if spec.annotation is None:
            logger.debug("Skipping unannotated field %s", spec.name)
            continue
        if not spec.accessible:
            collector.add(spec.name, InaccessibleFieldValidation())
            continue
        with collector.evaluating(spec.name):
            evaluate_field(spec, getattr(record, spec.name))

    logger.debug("Validated %s: %d failure(s)", type(record).__qualname__, len(collector))
    return collector.result()


def ensure_valid(record: Any) -> None:
    """Like validate(), but raise the aggregate instead of returning it."""
    errors = validate(record)
    if errors is not None:
        raise errors
