"""Queryable fields, their kinds, and the operators each kind accepts."""

from __future__ import annotations

from datetime import date
from enum import Enum, auto

from ..models import Todo
from .errors import SemanticError


class Operator(Enum):
    """Comparison operators, valued by their canonical spelling."""

    EQ = "="
    NOT_EQ = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    LIKE = "LIKE"
    CONTAINS = "CONTAINS"
    IN = "IN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"


class FieldKind(Enum):
    """Type classification of a field, governing which operators are legal."""

    TEXT = auto()
    ENUM_TEXT = auto()
    TEXT_LIST = auto()
    OPTIONAL_TEXT = auto()
    OPTIONAL_DATE = auto()


_SCALAR_TEXT_OPERATORS = frozenset(
    {Operator.EQ, Operator.NOT_EQ, Operator.LIKE, Operator.IN}
)
_NULL_OPERATORS = frozenset({Operator.IS_NULL, Operator.IS_NOT_NULL})
DATE_OPERATORS = frozenset(
    {Operator.EQ, Operator.NOT_EQ, Operator.LT, Operator.LE, Operator.GT, Operator.GE}
)

ACCEPTED_OPERATORS: dict[FieldKind, frozenset[Operator]] = {
    FieldKind.TEXT: _SCALAR_TEXT_OPERATORS,
    FieldKind.ENUM_TEXT: _SCALAR_TEXT_OPERATORS,
    FieldKind.TEXT_LIST: frozenset({Operator.CONTAINS, Operator.IN}),
    FieldKind.OPTIONAL_TEXT: _SCALAR_TEXT_OPERATORS | _NULL_OPERATORS,
    FieldKind.OPTIONAL_DATE: DATE_OPERATORS | _NULL_OPERATORS,
}


class Field(Enum):
    """The closed set of fields a filter expression can refer to."""

    NAME = "name"
    NOTES = "notes"
    STATUS = "status"
    TAGS = "tags"
    PROJECT = "project"
    AREA = "area"
    DUE = "due"
    CREATED = "created"
    MODIFIED = "modified"

    @property
    def kind(self) -> FieldKind:
        """The declared kind of this field."""
        return _FIELD_KINDS[self]

    def accepts(self, operator: Operator) -> bool:
        """Check whether this field's kind accepts the operator."""
        return operator in ACCEPTED_OPERATORS[self.kind]

    @classmethod
    def lookup(cls, name: str) -> Field | None:
        """Find a field by name or alias, ignoring case."""
        return _FIELD_NAMES.get(name.lower())


_FIELD_KINDS = {
    Field.NAME: FieldKind.TEXT,
    Field.NOTES: FieldKind.TEXT,
    Field.STATUS: FieldKind.ENUM_TEXT,
    Field.TAGS: FieldKind.TEXT_LIST,
    Field.PROJECT: FieldKind.OPTIONAL_TEXT,
    Field.AREA: FieldKind.OPTIONAL_TEXT,
    Field.DUE: FieldKind.OPTIONAL_DATE,
    Field.CREATED: FieldKind.OPTIONAL_DATE,
    Field.MODIFIED: FieldKind.OPTIONAL_DATE,
}

_FIELD_NAMES: dict[str, Field] = {f.value: f for f in Field}
_FIELD_NAMES.update(
    {
        "title": Field.NAME,
        "tag": Field.TAGS,
        "deadline": Field.DUE,
        "due_date": Field.DUE,
        "creation_date": Field.CREATED,
        "modification_date": Field.MODIFIED,
    }
)

# Resolved value types, one per kind
FieldValue = str | tuple[str, ...] | date | None


def check_operator(
    field: Field, operator: Operator, position: int | None = None
) -> None:
    """Reject an operator that the field's kind does not accept.

    Raises:
        SemanticError: If the pair is invalid.
    """
    if not field.accepts(operator):
        raise SemanticError(
            f"Operator {operator.value} cannot be applied to field '{field.value}'"
            f" ({field.kind.name})",
            field=field.value,
            operator=operator.value,
            position=position,
        )


def resolve_field(field: Field, todo: Todo) -> FieldValue:
    """Read the value of a field from a record.

    Args:
        field: The field to read.
        todo: The record to read it from.

    Returns:
        A str for TEXT/ENUM_TEXT, a str or None for OPTIONAL_TEXT, a tuple of
        tag names for TEXT_LIST, and a date or None for OPTIONAL_DATE.
    """
    if field is Field.NAME:
        return todo.name
    if field is Field.NOTES:
        return todo.notes or ""
    if field is Field.STATUS:
        return todo.status.value
    if field is Field.TAGS:
        return tuple(todo.tags)
    if field is Field.PROJECT:
        return todo.project
    if field is Field.AREA:
        return todo.area
    if field is Field.DUE:
        return todo.due
    if field is Field.CREATED:
        return todo.created
    if field is Field.MODIFIED:
        return todo.modified
    # Should never reach here with proper typing
    raise TypeError(f"Unknown field: {field}")
