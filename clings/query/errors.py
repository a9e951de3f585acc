"""Error types raised by the filter expression language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import Token


class FilterError(Exception):
    """Base class for every failure raised while building a filter expression."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        if position is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} (at position {position})")


class LexError(FilterError):
    """Raised when the query text cannot be split into tokens."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message, position)


class ParseError(FilterError):
    """Raised when the token stream does not follow the grammar.

    Attributes:
        token: The offending token.
        expected: Human-readable description of what was expected instead.
    """

    def __init__(self, message: str, token: Token, expected: str) -> None:
        self.token = token
        self.expected = expected
        super().__init__(message, token.position)


class EmptyExpressionError(FilterError):
    """Raised when the query text is empty or only whitespace."""

    def __init__(self) -> None:
        super().__init__("Empty filter expression")


class SemanticError(FilterError):
    """Raised when an operator is not valid for a field's kind."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        operator: str | None = None,
        position: int | None = None,
    ) -> None:
        self.field = field
        self.operator = operator
        super().__init__(message, position)
