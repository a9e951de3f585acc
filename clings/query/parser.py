"""Parser for the filter expression language.

Grammar (EBNF):
    query      = or_expr, EOF ;
    or_expr    = and_expr, { "OR", and_expr } ;
    and_expr   = not_expr, { "AND", not_expr } ;
    not_expr   = { "NOT" }, primary ;
    primary    = "(", or_expr, ")" | comparison ;
    comparison = field, ( "=" | "!=" | "<" | "<=" | ">" | ">=" ), value
               | field, "LIKE", value
               | field, "CONTAINS", value
               | field, "IN", "(", value, { ",", value }, ")"
               | field, "IS", [ "NOT" ], "NULL" ;
    value      = string | identifier ;

Precedence (tightest to loosest):
    1. NOT
    2. AND
    3. OR
    Parentheses override precedence. Chains of AND/OR are left-associative.
"""

import logging
from datetime import date

from ..dates import parse_natural_date
from ..models import DEFAULT_STATUS_SYNONYMS, Status
from .errors import EmptyExpressionError, ParseError, SemanticError
from .fields import DATE_OPERATORS, Field, FieldKind, Operator, check_operator
from .tokenizer import Token, TokenType, tokenize
from .types import AndExpr, Compare, NotExpr, OrExpr, QueryExpr, to_canonical_string

logger = logging.getLogger(__name__)

_COMPARISON_OPERATORS = {
    TokenType.EQ: Operator.EQ,
    TokenType.NOT_EQ: Operator.NOT_EQ,
    TokenType.LT: Operator.LT,
    TokenType.LE: Operator.LE,
    TokenType.GT: Operator.GT,
    TokenType.GE: Operator.GE,
    TokenType.LIKE: Operator.LIKE,
    TokenType.CONTAINS: Operator.CONTAINS,
}

_FIELD_NAMES = ", ".join(f.value for f in Field)


class _Parser:
    """Recursive descent parser for the filter expression language."""

    def __init__(
        self, query: str, today: date, status_synonyms: dict[str, str]
    ) -> None:
        self.query = query
        self.today = today
        self.status_synonyms = status_synonyms
        self.tokens = list(tokenize(query))
        self.pos = 0

    def _current(self) -> Token:
        """Get the current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        """Advance to the next token and return the previous one."""
        token = self._current()
        self.pos += 1
        return token

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        """Expect a specific token type, raise error if not found."""
        token = self._current()
        if token.type != token_type:
            raise ParseError(
                f"Expected {expected}, got {token.describe()}", token, expected
            )
        return self._advance()

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of a specific type."""
        return self._current().type == token_type

    def parse(self) -> QueryExpr:
        """Parse the query and return the AST."""
        expr = self._parse_or_expr()

        if not self._check(TokenType.EOF):
            token = self._current()
            raise ParseError(
                f"Unexpected token: {token.describe()}",
                token,
                "AND, OR or end of input",
            )

        return expr

    def _parse_or_expr(self) -> QueryExpr:
        """Parse OR expression: and_expr { OR and_expr }."""
        expr = self._parse_and_expr()
        while self._check(TokenType.OR):
            self._advance()  # consume OR
            expr = OrExpr(left=expr, right=self._parse_and_expr())
        return expr

    def _parse_and_expr(self) -> QueryExpr:
        """Parse AND expression: not_expr { AND not_expr }."""
        expr = self._parse_not_expr()
        while self._check(TokenType.AND):
            self._advance()  # consume AND
            expr = AndExpr(left=expr, right=self._parse_not_expr())
        return expr

    def _parse_not_expr(self) -> QueryExpr:
        """Parse NOT expression: { NOT } primary."""
        not_count = 0
        while self._check(TokenType.NOT):
            self._advance()
            not_count += 1

        expr = self._parse_primary()

        # Apply NOT operators from innermost to outermost
        for _ in range(not_count):
            expr = NotExpr(operand=expr)

        return expr

    def _parse_primary(self) -> QueryExpr:
        """Parse primary expression: ( or_expr ) | comparison."""
        if self._check(TokenType.LPAREN):
            self._advance()  # consume (
            expr = self._parse_or_expr()
            self._expect(TokenType.RPAREN, "')'")
            return expr
        return self._parse_comparison()

    def _parse_comparison(self) -> Compare:
        """Parse a comparison: field operator value."""
        field_token = self._current()
        if field_token.type != TokenType.IDENTIFIER:
            raise ParseError(
                f"Expected field name or '(', got {field_token.describe()}",
                field_token,
                "field name or '('",
            )

        field = Field.lookup(field_token.value)
        if field is None:
            raise ParseError(
                f"Unknown field: {field_token.value}",
                field_token,
                f"one of {_FIELD_NAMES}",
            )
        self._advance()

        op_token = self._current()
        if op_token.type == TokenType.IS:
            self._advance()
            op = Operator.IS_NULL
            if self._check(TokenType.NOT):
                self._advance()
                op = Operator.IS_NOT_NULL
            self._expect(TokenType.NULL, "NULL")
            check_operator(field, op, op_token.position)
            return Compare(field=field, op=op)

        if op_token.type == TokenType.IN:
            self._advance()
            check_operator(field, Operator.IN, op_token.position)
            self._expect(TokenType.LPAREN, "'(' after IN")
            values = [self._parse_value(field, Operator.IN)]
            while self._check(TokenType.COMMA):
                self._advance()
                values.append(self._parse_value(field, Operator.IN))
            self._expect(TokenType.RPAREN, "',' or ')'")
            return Compare(field=field, op=Operator.IN, value=tuple(values))

        if op_token.type in _COMPARISON_OPERATORS:
            self._advance()
            op = _COMPARISON_OPERATORS[op_token.type]
            check_operator(field, op, op_token.position)
            return Compare(field=field, op=op, value=self._parse_value(field, op))

        raise ParseError(
            f"Expected operator after '{field_token.value}', got {op_token.describe()}",
            op_token,
            "comparison operator",
        )

    def _parse_value(self, field: Field, op: Operator) -> str | date:
        """Parse a value (quoted string or bare word) and convert it for the field."""
        token = self._current()
        if token.type not in (TokenType.STRING, TokenType.IDENTIFIER):
            raise ParseError(
                f"Expected value for {field.value} {op.value}, got {token.describe()}",
                token,
                "quoted string or bare word",
            )
        self._advance()

        if field.kind is FieldKind.OPTIONAL_DATE and op in DATE_OPERATORS:
            return self._convert_date(token)

        if field is Field.STATUS and op is not Operator.LIKE:
            status = Status.from_text(token.value, self.status_synonyms)
            if status is None:
                raise SemanticError(
                    f"Unknown status: '{token.value}'"
                    f" (expected one of {', '.join(s.value for s in Status)})",
                    field=field.value,
                    operator=op.value,
                    position=token.position,
                )
            return status.value

        return token.value

    def _convert_date(self, token: Token) -> date:
        """Convert a date literal (ISO, relative or natural-language) to a date."""
        result = parse_natural_date(token.value, self.today)
        if result is None:
            raise ParseError(
                f"Invalid date: '{token.value}'",
                token,
                "a date (YYYY-MM-DD, today, friday, next week, in 3 days, dec 15)",
            )
        return result


def parse_filter(
    query: str,
    *,
    today: date | None = None,
    status_synonyms: dict[str, str] | None = None,
) -> QueryExpr:
    """Parse a filter query string into an AST.

    Args:
        query: The query string to parse.
        today: Date that relative dates (today, friday, in 3 days, ...)
            resolve against. Defaults to the current local date.
        status_synonyms: Alternate status spellings mapped to canonical values.
            Defaults to DEFAULT_STATUS_SYNONYMS.

    Returns:
        The parsed filter expression tree.

    Raises:
        EmptyExpressionError: If the query is empty or whitespace only.
        LexError: If the query contains a malformed token.
        ParseError: If the query does not follow the grammar.
        SemanticError: If an operator does not suit its field.

    Examples:
        >>> parse_filter("status = open")
        Compare(field=<Field.STATUS: 'status'>, op=<Operator.EQ: '='>, value='open')

        >>> parse_filter("project IS NULL")
        Compare(field=<Field.PROJECT: 'project'>, op=<Operator.IS_NULL: 'IS NULL'>, value=None)
    """
    if not query.strip():
        raise EmptyExpressionError()

    parser = _Parser(
        query,
        today=today or date.today(),
        status_synonyms=(
            DEFAULT_STATUS_SYNONYMS if status_synonyms is None else status_synonyms
        ),
    )
    expr = parser.parse()
    logger.debug(f"Parsed filter {query!r} as {to_canonical_string(expr)}")
    return expr
