# =============================================================================
# test_precedence.py - Operator Precedence Table Tests
# =============================================================================
# Tests for the binary operator precedence table: default ranks, lookups
# for characters that are not operators, OP=RANK configuration strings
# and validation.
# =============================================================================

import pytest
from toylang.frontend.precedence import PrecedenceTable, DEFAULT_PRECEDENCE, NOT_AN_OPERATOR
from toylang.frontend.lexer import Token, TokenType
from toylang.frontend.errors import PrecedenceError


def char_token(char: str) -> Token:
    return Token(TokenType.CHAR, char, 1, 1, "<test>")


class TestDefaultTable:
    """Test the built-in operator ranks."""

    @pytest.mark.parametrize("op,rank", [
        ("<", 10), (">", 10), ("=", 10),
        ("+", 20), ("-", 20),
        ("*", 40), ("/", 40), ("%", 40),
    ])
    def test_default_rank(self, op, rank):
        assert PrecedenceTable().of_char(op) == rank

    def test_multiplicative_binds_tighter(self):
        table = PrecedenceTable()
        assert table.of_char("*") > table.of_char("+") > table.of_char("<")

    def test_default_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_PRECEDENCE["^"] = 50

    def test_contains(self):
        table = PrecedenceTable()
        assert "+" in table
        assert "(" not in table


class TestLookup:
    """Test lookups for tokens that are not binary operators."""

    @pytest.mark.parametrize("char", ["(", ")", "{", "}", ",", "!", "^"])
    def test_unknown_character(self, char):
        assert PrecedenceTable().of_char(char) == NOT_AN_OPERATOR == -1

    def test_zero_rank_is_not_operator(self):
        table = PrecedenceTable({"+": 0, "*": 40})
        assert table.of_char("+") == -1
        assert "+" not in table

    def test_negative_rank_is_not_operator(self):
        assert PrecedenceTable({"+": -5}).of_char("+") == -1

    def test_of_char_token(self):
        assert PrecedenceTable().of(char_token("*")) == 40

    def test_of_non_char_token(self):
        """Identifiers, numbers and keywords never act as operators."""
        table = PrecedenceTable({"x": 30})
        assert table.of(Token(TokenType.IDENTIFIER, "x", 1, 1, "<test>")) == -1
        assert table.of(Token(TokenType.NUMBER, 5, 1, 1, "<test>")) == -1
        assert table.of(Token(TokenType.EOF, None, 1, 1, "<test>")) == -1

    def test_ranks_are_read_only(self):
        table = PrecedenceTable({"+": 20})
        with pytest.raises(TypeError):
            table.ranks["*"] = 40

    def test_table_copies_its_input(self):
        ranks = {"+": 20}
        table = PrecedenceTable(ranks)
        ranks["*"] = 40
        assert table.of_char("*") == -1


class TestFromStrings:
    """Test building tables from OP=RANK strings."""

    def test_add_operator(self):
        table = PrecedenceTable.from_strings(["^=50"])
        assert table.of_char("^") == 50
        assert table.of_char("+") == 20

    def test_disable_operator(self):
        table = PrecedenceTable.from_strings(["<=0"])
        assert table.of_char("<") == -1
        assert table.of_char(">") == 10

    def test_equals_operator(self):
        """The first '=' after the operator separates it from the rank."""
        table = PrecedenceTable.from_strings(["==15"])
        assert table.of_char("=") == 15

    def test_custom_base(self):
        table = PrecedenceTable.from_strings(["+=5"], base={})
        assert dict(table.ranks) == {"+": 5}

    def test_no_entries_gives_defaults(self):
        assert dict(PrecedenceTable.from_strings([]).ranks) == dict(DEFAULT_PRECEDENCE)

    @pytest.mark.parametrize("entry", ["", "+", "+20", "+:20", "ab=3"])
    def test_malformed_entry(self, entry):
        with pytest.raises(PrecedenceError):
            PrecedenceTable.from_strings([entry])

    def test_non_integer_rank(self):
        with pytest.raises(PrecedenceError, match="must be an integer"):
            PrecedenceTable.from_strings(["+=high"])


class TestValidation:
    """Test table validation."""

    def test_multi_character_operator(self):
        with pytest.raises(PrecedenceError, match="single character"):
            PrecedenceTable({"<=": 10})

    def test_empty_operator(self):
        with pytest.raises(PrecedenceError):
            PrecedenceTable({"": 10})

    def test_non_integer_rank(self):
        with pytest.raises(PrecedenceError):
            PrecedenceTable({"+": 2.5})

    def test_bool_rank(self):
        with pytest.raises(PrecedenceError):
            PrecedenceTable({"+": True})

    def test_repr(self):
        assert repr(PrecedenceTable({"+": 20})) == "PrecedenceTable({'+': 20})"
