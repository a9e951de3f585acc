"""Tokenizer for the filter expression language."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from .errors import LexError


class TokenType(Enum):
    """Token types for the filter expression language."""

    IDENTIFIER = auto()  # Bare word: field names and unquoted values
    STRING = auto()  # Quoted string ('...' or "...")
    AND = auto()
    OR = auto()
    NOT = auto()
    IN = auto()
    IS = auto()
    NULL = auto()
    LIKE = auto()
    CONTAINS = auto()
    EQ = auto()  # = or ==
    NOT_EQ = auto()  # != or <>
    LT = auto()  # <
    LE = auto()  # <=
    GT = auto()  # >
    GE = auto()  # >=
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    EOF = auto()  # End of input


KEYWORDS = {
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "NOT": TokenType.NOT,
    "IN": TokenType.IN,
    "IS": TokenType.IS,
    "NULL": TokenType.NULL,
    "LIKE": TokenType.LIKE,
    "CONTAINS": TokenType.CONTAINS,
}

# Longest operators first so "!=" wins over a lone "!"
_OPERATORS = (
    ("!=", TokenType.NOT_EQ),
    ("<>", TokenType.NOT_EQ),
    ("==", TokenType.EQ),
    ("<=", TokenType.LE),
    (">=", TokenType.GE),
    ("=", TokenType.EQ),
    ("<", TokenType.LT),
    (">", TokenType.GT),
    ("(", TokenType.LPAREN),
    (")", TokenType.RPAREN),
    (",", TokenType.COMMA),
)

_ESCAPES = {
    "\\": "\\",
    "'": "'",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


@dataclass(frozen=True)
class Token:
    """A token from the filter expression language.

    Attributes:
        type: The type of token.
        value: The token's text (unescaped content for STRING tokens).
        position: Position in input for error messages.
    """

    type: TokenType
    value: str
    position: int = 0

    def describe(self) -> str:
        """Describe the token for error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING:
            return f"string '{self.value}'"
        return f"'{self.value}'"


def _skip_whitespace(query: str, pos: int) -> int:
    """Skip whitespace characters and return new position."""
    while pos < len(query) and query[pos].isspace():
        pos += 1
    return pos


def _parse_string(query: str, pos: int) -> tuple[Token, int]:
    """Parse a quoted string starting at pos (the opening quote).

    Args:
        query: The query string.
        pos: Position of the opening quote.

    Returns:
        Tuple of (Token, new_position).

    Raises:
        LexError: If the string is not terminated or holds a bad escape.
    """
    start_pos = pos
    quote = query[pos]
    pos += 1  # Skip opening quote
    value_chars: list[str] = []

    while pos < len(query):
        char = query[pos]

        if char == quote:
            return (
                Token(
                    type=TokenType.STRING,
                    value="".join(value_chars),
                    position=start_pos,
                ),
                pos + 1,
            )
        elif char == "\\":
            if pos + 1 >= len(query):
                raise LexError("Unterminated escape sequence", pos)
            next_char = query[pos + 1]
            if next_char not in _ESCAPES:
                raise LexError(f"Invalid escape sequence: \\{next_char}", pos)
            value_chars.append(_ESCAPES[next_char])
            pos += 2
        else:
            value_chars.append(char)
            pos += 1

    raise LexError("Unterminated string", start_pos)


def _is_identifier_char(char: str, numeric: bool = False) -> bool:
    """Check if a character can be part of an identifier (due, my_tag.v2).

    Words starting with a digit may also hold "-" and "/" so that bare dates
    such as 2024-12-15 or 12/15 scan as one word.
    """
    return char.isalnum() or char in "_." or (numeric and char in "-/")


def tokenize(query: str) -> Iterator[Token]:
    """Tokenize a filter query into tokens.

    Args:
        query: The query string to tokenize.

    Yields:
        Token objects, always ending with an EOF token.

    Raises:
        LexError: If tokenization fails.
    """
    pos = 0
    length = len(query)

    while pos < length:
        pos = _skip_whitespace(query, pos)
        if pos >= length:
            break

        char = query[pos]

        if char in "'\"":
            token, pos = _parse_string(query, pos)
            yield token
            continue

        if char.isalnum() or char == "_":
            start = pos
            numeric = char.isdigit()
            while pos < length and _is_identifier_char(query[pos], numeric):
                pos += 1
            word = query[start:pos]
            token_type = KEYWORDS.get(word.upper(), TokenType.IDENTIFIER)
            yield Token(type=token_type, value=word, position=start)
            continue

        for text, token_type in _OPERATORS:
            if query.startswith(text, pos):
                yield Token(type=token_type, value=text, position=pos)
                pos += len(text)
                break
        else:
            raise LexError(f"Unexpected character: {char}", pos)

    yield Token(type=TokenType.EOF, value="", position=pos)
