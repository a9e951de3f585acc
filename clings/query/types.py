"""AST types for the filter expression language."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .errors import SemanticError
from .fields import DATE_OPERATORS, Field, FieldKind, Operator, check_operator

# Python value carried by a Compare node
LiteralValue = str | tuple[str, ...] | date | None


@dataclass(frozen=True)
class Compare:
    """A comparison predicate: field, operator and literal value.

    Attributes:
        field: The field being compared.
        op: The comparison operator.
        value: A str for most operators, a non-empty tuple of str for IN, a
            date for comparisons against date fields, None for IS [NOT] NULL.

    Raises:
        SemanticError: If the operator is not accepted by the field's kind, or
            the value does not have the shape the operator needs.
    """

    field: Field
    op: Operator
    value: LiteralValue = None

    def __post_init__(self) -> None:
        check_operator(self.field, self.op)

        if self.op in (Operator.IS_NULL, Operator.IS_NOT_NULL):
            expected: type = type(None)
        elif self.op is Operator.IN:
            expected = tuple
            if not isinstance(self.value, tuple) or not self.value or not all(
                isinstance(v, str) for v in self.value
            ):
                self._reject(f"IN needs a non-empty list of strings, got {self.value!r}")
        elif self.field.kind is FieldKind.OPTIONAL_DATE and self.op in DATE_OPERATORS:
            expected = date
        else:
            expected = str

        if not isinstance(self.value, expected):
            self._reject(
                f"{self.field.value} {self.op.value} needs a {expected.__name__}"
                f" value, got {self.value!r}"
            )

    def _reject(self, message: str) -> None:
        raise SemanticError(
            message, field=self.field.value, operator=self.op.value
        )


@dataclass(frozen=True)
class NotExpr:
    """Negation expression.

    Attributes:
        operand: The expression to negate.
    """

    operand: QueryExpr


@dataclass(frozen=True)
class AndExpr:
    """AND expression (conjunction of two sub-expressions)."""

    left: QueryExpr
    right: QueryExpr


@dataclass(frozen=True)
class OrExpr:
    """OR expression (disjunction of two sub-expressions)."""

    left: QueryExpr
    right: QueryExpr


# Union of all expression types
QueryExpr = Compare | NotExpr | AndExpr | OrExpr


def _escape_string_value(value: str) -> str:
    """Escape special characters in a string value for display."""
    result = value.replace("\\", "\\\\")
    result = result.replace("'", "\\'")
    result = result.replace("\n", "\\n")
    result = result.replace("\r", "\\r")
    result = result.replace("\t", "\\t")
    return result


def _format_literal(value: str | date) -> str:
    if isinstance(value, date):
        return f"'{value.isoformat()}'"
    return f"'{_escape_string_value(value)}'"


def _compare_to_string(expr: Compare) -> str:
    name = expr.field.value
    if expr.op in (Operator.IS_NULL, Operator.IS_NOT_NULL):
        return f"{name} {expr.op.value}"
    if expr.op is Operator.IN:
        assert isinstance(expr.value, tuple)
        items = ", ".join(_format_literal(v) for v in expr.value)
        return f"{name} IN ({items})"
    assert isinstance(expr.value, (str, date))
    return f"{name} {expr.op.value} {_format_literal(expr.value)}"


def to_canonical_string(expr: QueryExpr) -> str:
    """Convert a filter expression to its canonical string representation.

    This produces a normalized form with:
    - Canonical field names (aliases resolved)
    - Uppercase keywords
    - Single-quoted, escaped values and ISO dates
    - Parentheses only where precedence requires them

    Args:
        expr: The filter expression to convert.

    Returns:
        The canonical string representation.

    Examples:
        >>> to_canonical_string(Compare(Field.STATUS, Operator.EQ, "open"))
        "status = 'open'"
    """
    if isinstance(expr, Compare):
        return _compare_to_string(expr)

    if isinstance(expr, NotExpr):
        inner = to_canonical_string(expr.operand)
        if isinstance(expr.operand, (AndExpr, OrExpr)):
            return f"NOT ({inner})"
        return f"NOT {inner}"

    if isinstance(expr, AndExpr):
        parts = []
        for operand in (expr.left, expr.right):
            inner = to_canonical_string(operand)
            # OR binds looser than AND
            if isinstance(operand, OrExpr):
                inner = f"({inner})"
            parts.append(inner)
        return " AND ".join(parts)

    if isinstance(expr, OrExpr):
        return f"{to_canonical_string(expr.left)} OR {to_canonical_string(expr.right)}"

    # Should never reach here with proper typing
    raise TypeError(f"Unknown expression type: {type(expr)}")
