"""Evaluator for filter expressions against task records."""

import re
from collections.abc import Iterable
from datetime import date
from functools import lru_cache

from ..models import Todo
from .fields import FieldKind, Operator, resolve_field
from .types import AndExpr, Compare, NotExpr, OrExpr, QueryExpr

_DATE_COMPARISONS = {
    Operator.LT: lambda a, b: a < b,
    Operator.LE: lambda a, b: a <= b,
    Operator.GT: lambda a, b: a > b,
    Operator.GE: lambda a, b: a >= b,
}

_LIKE_WILDCARDS = {"%": ".*", "_": "."}


@lru_cache(maxsize=256)
def _like_regex(pattern: str) -> re.Pattern[str]:
    """Compile a LIKE pattern to a regex ('%' = any run of characters, '_' = one)."""
    regex = "".join(_LIKE_WILDCARDS.get(char) or re.escape(char) for char in pattern)
    return re.compile(regex, re.IGNORECASE | re.DOTALL)


def _match_like(text: str, pattern: str) -> bool:
    """Check if text matches a LIKE pattern, ignoring case.

    Examples:
        >>> _match_like("Review PROJ-1234 implementation", "review%")
        True
        >>> _match_like("Follow up on API changes", "%api%")
        True
    """
    return _like_regex(pattern).fullmatch(text) is not None


def _text_equals(value: str, literal: str, kind: FieldKind) -> bool:
    """Compare a resolved text value to a literal.

    Status values compare ignoring case; every other text field must be
    character-for-character identical.
    """
    if kind is FieldKind.ENUM_TEXT:
        return value.casefold() == literal.casefold()
    return value == literal


def _evaluate_compare(expr: Compare, todo: Todo) -> bool:
    """Evaluate a single comparison against a record."""
    kind = expr.field.kind
    value = resolve_field(expr.field, todo)

    if expr.op is Operator.IS_NULL:
        return value is None
    if expr.op is Operator.IS_NOT_NULL:
        return value is not None

    if kind is FieldKind.TEXT_LIST:
        assert isinstance(value, tuple)
        wanted = (expr.value,) if expr.op is Operator.CONTAINS else expr.value
        assert isinstance(wanted, tuple)
        folded = {w.casefold() for w in wanted}
        return any(tag.casefold() in folded for tag in value)

    if kind is FieldKind.OPTIONAL_DATE:
        assert isinstance(expr.value, date)
        if value is None:
            # A missing date only satisfies "!="
            return expr.op is Operator.NOT_EQ
        assert isinstance(value, date)
        if expr.op is Operator.EQ:
            return value == expr.value
        if expr.op is Operator.NOT_EQ:
            return value != expr.value
        return _DATE_COMPARISONS[expr.op](value, expr.value)

    # Scalar text kinds: TEXT, ENUM_TEXT, OPTIONAL_TEXT
    if value is None:
        return expr.op is Operator.NOT_EQ
    assert isinstance(value, str)

    if expr.op is Operator.EQ:
        assert isinstance(expr.value, str)
        return _text_equals(value, expr.value, kind)
    if expr.op is Operator.NOT_EQ:
        assert isinstance(expr.value, str)
        return not _text_equals(value, expr.value, kind)
    if expr.op is Operator.LIKE:
        assert isinstance(expr.value, str)
        return _match_like(value, expr.value)
    if expr.op is Operator.IN:
        assert isinstance(expr.value, tuple)
        return any(_text_equals(value, literal, kind) for literal in expr.value)

    # Compare.__post_init__ rejects every other operator for text kinds
    raise TypeError(f"Unsupported operator {expr.op} for {expr.field}")


def matches(expr: QueryExpr, todo: Todo) -> bool:
    """Evaluate a filter expression against a record.

    Args:
        expr: The parsed filter expression.
        todo: The record to evaluate against. It is never modified.

    Returns:
        True if the record satisfies the expression, False otherwise.

    Examples:
        >>> from .parser import parse_filter
        >>> expr = parse_filter("status = open")
        >>> matches(expr, Todo(id="1", name="Buy milk"))
        True
    """
    if isinstance(expr, Compare):
        return _evaluate_compare(expr, todo)
    elif isinstance(expr, NotExpr):
        return not matches(expr.operand, todo)
    elif isinstance(expr, AndExpr):
        return matches(expr.left, todo) and matches(expr.right, todo)
    elif isinstance(expr, OrExpr):
        return matches(expr.left, todo) or matches(expr.right, todo)
    else:
        raise TypeError(f"Unknown expression type: {type(expr)}")


def filter_items(todos: Iterable[Todo], expr: QueryExpr) -> list[Todo]:
    """Keep the records that satisfy a filter expression, in input order."""
    return [todo for todo in todos if matches(expr, todo)]
