"""
Tests de la classification des colonnes.
"""

import pytest

from sql_aligner.classifier import (
    ColumnKind, classify_value, classify_column, classify_columns,
    combine_kinds, is_string_literal
)


class TestStringLiterals:
    """Tests de détection des littéraux chaîne."""

    def test_simple(self):
        assert is_string_literal("'abc'")

    def test_empty_string(self):
        assert is_string_literal("''")

    def test_doubled_quote(self):
        assert is_string_literal("'it''s'")

    def test_backslash_escape(self):
        assert is_string_literal("'it\\'s'")

    def test_concatenation_is_not_a_single_literal(self):
        assert not is_string_literal("'a' || 'b'")

    def test_unterminated(self):
        assert not is_string_literal("'abc\\'")

    def test_double_quotes_are_not_string_literals(self):
        assert not is_string_literal('"abc"')


class TestClassifyValue:
    """Tests de classification d'une valeur."""

    @pytest.mark.parametrize("value", ["42", "-3.5", "+7", "1e10", ".5", "2.", "6.02E-23"])
    def test_numeric(self, value):
        assert classify_value(value) == ColumnKind.NUMERIC

    @pytest.mark.parametrize("value", ["NULL", "null", "Null"])
    def test_null(self, value):
        assert classify_value(value) == ColumnKind.NULL

    @pytest.mark.parametrize("value", ["NOW()", "JSON_ARRAY(1,2)", "POINT(1,2)", "(1 + 2)"])
    def test_function_or_expression(self, value):
        assert classify_value(value) == ColumnKind.FUNCTION_OR_EXPRESSION

    def test_string_with_parens_is_string(self):
        assert classify_value("'(x)'") == ColumnKind.STRING_LITERAL

    @pytest.mark.parametrize("value", ["abc", "TRUE", "1.2.3", "'a' || 'b'", "", "@var"])
    def test_opaque(self, value):
        assert classify_value(value) == ColumnKind.OPAQUE

    def test_surrounding_whitespace_ignored(self):
        assert classify_value("  12  ") == ColumnKind.NUMERIC


class TestCombineKinds:
    """Tests de la combinaison des natures d'une colonne."""

    def test_function_dominates(self):
        assert combine_kinds([ColumnKind.STRING_LITERAL, ColumnKind.FUNCTION_OR_EXPRESSION]) \
            == ColumnKind.FUNCTION_OR_EXPRESSION
        assert combine_kinds([ColumnKind.NUMERIC, ColumnKind.FUNCTION_OR_EXPRESSION, ColumnKind.NULL]) \
            == ColumnKind.FUNCTION_OR_EXPRESSION

    def test_numbers_and_nulls(self):
        assert combine_kinds([ColumnKind.NUMERIC, ColumnKind.NULL]) == ColumnKind.NUMERIC

    def test_only_nulls(self):
        assert combine_kinds([ColumnKind.NULL, ColumnKind.NULL]) == ColumnKind.NULL

    def test_only_strings(self):
        assert combine_kinds([ColumnKind.STRING_LITERAL] * 3) == ColumnKind.STRING_LITERAL

    def test_mixed_falls_back_to_opaque(self):
        assert combine_kinds([ColumnKind.STRING_LITERAL, ColumnKind.NUMERIC]) == ColumnKind.OPAQUE
        assert combine_kinds([ColumnKind.STRING_LITERAL, ColumnKind.NULL]) == ColumnKind.OPAQUE

    def test_empty(self):
        assert combine_kinds([]) == ColumnKind.OPAQUE


class TestClassifyColumns:
    """Tests de classification par index de colonne."""

    def test_per_index(self):
        rows = [["1", "'a'", "x"], ["NULL", "NOW()", "y"]]
        assert classify_columns(rows) == [
            ColumnKind.NUMERIC,
            ColumnKind.FUNCTION_OR_EXPRESSION,
            ColumnKind.OPAQUE,
        ]

    def test_single_column(self):
        assert classify_column(["'a'", "'bb'"]) == ColumnKind.STRING_LITERAL

    def test_no_rows(self):
        assert classify_columns([]) == []


class TestAlignmentPolicy:
    """Tests de la politique d'alignement portée par ColumnKind."""

    def test_right_aligned(self):
        assert ColumnKind.NUMERIC.right_aligned
        assert ColumnKind.NULL.right_aligned
        assert not ColumnKind.STRING_LITERAL.right_aligned
        assert not ColumnKind.OPAQUE.right_aligned

    def test_padded(self):
        assert not ColumnKind.FUNCTION_OR_EXPRESSION.padded
        assert ColumnKind.OPAQUE.padded
