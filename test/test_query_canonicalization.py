"""Tests for the canonical string form of filter expressions."""

from datetime import date

from clings.query import (
    AndExpr,
    Compare,
    Field,
    NotExpr,
    Operator,
    OrExpr,
    parse_filter,
    to_canonical_string,
)


def test_canonical_simple_comparison() -> None:
    """Test canonicalization of a bare-word comparison."""
    assert to_canonical_string(parse_filter("status = open")) == "status = 'open'"


def test_canonical_resolves_aliases_and_keyword_case() -> None:
    """Test that aliases and lowercase keywords are normalized."""
    result = to_canonical_string(parse_filter("Title like '%x%' and deadline is not null"))
    assert result == "name LIKE '%x%' AND due IS NOT NULL"


def test_canonical_not_equal_spelling() -> None:
    """Test that <> is rendered as !=."""
    assert to_canonical_string(parse_filter("status <> completed")) == (
        "status != 'completed'"
    )


def test_canonical_in_list() -> None:
    """Test canonicalization of an IN list."""
    result = to_canonical_string(parse_filter('tags in (work, "urgent")'))
    assert result == "tags IN ('work', 'urgent')"


def test_canonical_date_literal() -> None:
    """Test that dates are rendered in ISO form."""
    expr = parse_filter("due < today", today=date(2025, 12, 10))
    assert to_canonical_string(expr) == "due < '2025-12-10'"


def test_canonical_escapes_quotes() -> None:
    """Test that quotes and backslashes in values are escaped."""
    expr = Compare(Field.NAME, Operator.EQ, "it's a \\ test")
    assert to_canonical_string(expr) == r"name = 'it\'s a \\ test'"


def test_canonical_or_inside_and_is_parenthesized() -> None:
    """Test that an OR operand of AND keeps its parentheses."""
    expr = parse_filter("status = open AND (tags CONTAINS 'a' OR tags CONTAINS 'b')")
    assert to_canonical_string(expr) == (
        "status = 'open' AND (tags CONTAINS 'a' OR tags CONTAINS 'b')"
    )


def test_canonical_drops_redundant_parentheses() -> None:
    """Test that parentheses precedence already implies are dropped."""
    expr = parse_filter("(status = open AND project IS NULL) OR (area IS NULL)")
    assert to_canonical_string(expr) == (
        "status = 'open' AND project IS NULL OR area IS NULL"
    )


def test_canonical_not_over_group() -> None:
    """Test that NOT keeps parentheses around a compound operand."""
    expr = NotExpr(
        OrExpr(
            Compare(Field.AREA, Operator.LIKE, "%Work%"),
            Compare(Field.STATUS, Operator.EQ, "completed"),
        )
    )
    assert to_canonical_string(expr) == (
        "NOT (area LIKE '%Work%' OR status = 'completed')"
    )


def test_canonical_not_over_comparison() -> None:
    """Test NOT applied to a single comparison."""
    expr = NotExpr(Compare(Field.PROJECT, Operator.IS_NULL))
    assert to_canonical_string(expr) == "NOT project IS NULL"


def test_canonical_form_reparses_to_same_tree() -> None:
    """Test that parsing the canonical form gives back the same tree."""
    queries = [
        "status = open",
        "NOT (area LIKE '%Work%') OR status = completed",
        "status = open AND (tags CONTAINS 'work' OR tags CONTAINS 'urgent')",
        "tags IN ('jira', 'review') AND NOT NOT due IS NOT NULL",
        "name = 'it\\'s' OR notes LIKE '%\\n%'",
        "created >= '2025-01-01' AND modified < '2025-12-31'",
        "status = cancelled",
    ]
    for query in queries:
        expr = parse_filter(query)
        assert parse_filter(to_canonical_string(expr)) == expr, query


def test_canonical_and_of_ors() -> None:
    """Test canonicalization of two OR groups joined by AND."""
    a = Compare(Field.TAGS, Operator.CONTAINS, "a")
    b = Compare(Field.TAGS, Operator.CONTAINS, "b")
    expr = AndExpr(OrExpr(a, b), OrExpr(b, a))
    assert to_canonical_string(expr) == (
        "(tags CONTAINS 'a' OR tags CONTAINS 'b')"
        " AND (tags CONTAINS 'b' OR tags CONTAINS 'a')"
    )
