"""Filter expression language for selecting todos.

This package provides a small SQL-flavored query language that is parsed
into an immutable expression tree and evaluated against task records.

Query Language Examples:
    status = open                          - Status equality (case-insensitive)
    name = 'Buy milk'                      - Exact, case-sensitive match
    area LIKE '%work%'                     - Pattern match (% any run, _ one char)
    tags CONTAINS 'jira'                   - Tag membership (case-insensitive)
    status IN ('open', 'canceled')         - Any of a list of values
    project IS NULL                        - No project set
    due < today                            - Date comparison
    NOT (area LIKE '%Work%') OR status = completed

Fields:
    name, notes, status, tags, project, area, due (deadline), created, modified

Precedence (tightest to loosest):
    1. NOT
    2. AND
    3. OR
    Parentheses override precedence.

Quoted values use single or double quotes. A backslash escapes the next
character: \\\\, \\', \\", \\n, \\r and \\t are recognized.
"""

from .errors import (
    EmptyExpressionError,
    FilterError,
    LexError,
    ParseError,
    SemanticError,
)
from .evaluator import filter_items, matches
from .fields import Field, FieldKind, Operator
from .parser import parse_filter
from .types import (
    AndExpr,
    Compare,
    NotExpr,
    OrExpr,
    QueryExpr,
    to_canonical_string,
)

__all__ = [
    # Parser
    "parse_filter",
    # Evaluator
    "matches",
    "filter_items",
    # Errors
    "FilterError",
    "LexError",
    "ParseError",
    "EmptyExpressionError",
    "SemanticError",
    # Types
    "QueryExpr",
    "Compare",
    "NotExpr",
    "AndExpr",
    "OrExpr",
    "Field",
    "FieldKind",
    "Operator",
    # Utilities
    "to_canonical_string",
]
