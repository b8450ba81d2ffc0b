"""
Binary Operator Precedence
==========================

Maps a single operator character to a positive rank; a higher rank binds
tighter. The table is built once before parsing and is read-only from
then on.

Default Ranks (lowest to highest)
---------------------------------
| Rank | Operators | Meaning                 |
|------|-----------|-------------------------|
| 10   | < > =     | relational and equality |
| 20   | + -       | additive                |
| 40   | * / %     | multiplicative          |

Any character missing from the table, or mapped to a rank of zero or
less, is not a binary operator: its precedence is -1, which ends
precedence climbing.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from toylang.frontend.errors import PrecedenceError
from toylang.frontend.lexer import Token, TokenType


DEFAULT_PRECEDENCE: Mapping[str, int] = MappingProxyType({
    "<": 10,
    ">": 10,
    "=": 10,
    "+": 20,
    "-": 20,
    "*": 40,
    "/": 40,
    "%": 40,
})

# Precedence of anything that is not a binary operator
NOT_AN_OPERATOR = -1


class PrecedenceTable:
    """
    Read-only operator precedence table.

    Example:
        table = PrecedenceTable({"+": 20, "*": 40})
        table.of_char("*")   # 40
        table.of_char("(")   # -1
    """

    def __init__(self, ranks: Optional[Mapping[str, int]] = None):
        ranks = DEFAULT_PRECEDENCE if ranks is None else ranks
        for op, rank in ranks.items():
            if not isinstance(op, str) or len(op) != 1:
                raise PrecedenceError(f"operator must be a single character, got {op!r}")
            if isinstance(rank, bool) or not isinstance(rank, int):
                raise PrecedenceError(f"rank of '{op}' must be an integer, got {rank!r}")
        self._ranks = MappingProxyType(dict(ranks))

    @classmethod
    def from_strings(
        cls,
        entries: Iterable[str],
        base: Optional[Mapping[str, int]] = None,
    ) -> "PrecedenceTable":
        """
        Build a table from ``OP=RANK`` strings layered over `base`.

        ``"^=50"`` adds an operator, ``"<=0"`` disables one. The first '='
        after the operator character separates it from the rank, so
        ``"==10"`` configures the '=' operator.
        """
        ranks = dict(DEFAULT_PRECEDENCE if base is None else base)
        for entry in entries:
            op, sep, rank = entry[:1], entry[1:2], entry[2:]
            if not op or sep != "=":
                raise PrecedenceError(f"expected OP=RANK, got {entry!r}")
            try:
                ranks[op] = int(rank)
            except ValueError:
                raise PrecedenceError(f"rank of '{op}' must be an integer, got {rank!r}") from None
        return cls(ranks)

    @property
    def ranks(self) -> Mapping[str, int]:
        return self._ranks

    def of_char(self, char: str) -> int:
        """Return the rank of `char`, or -1 if it is not a binary operator."""
        rank = self._ranks.get(char, NOT_AN_OPERATOR)
        if rank <= 0:
            return NOT_AN_OPERATOR
        return rank

    def of(self, token: Token) -> int:
        """Return the rank of a pending operator token, or -1."""
        if token.type != TokenType.CHAR:
            return NOT_AN_OPERATOR
        return self.of_char(token.value)

    def __contains__(self, char: str) -> bool:
        return self.of_char(char) > 0

    def __repr__(self) -> str:
        entries = ", ".join(f"{op!r}: {rank}" for op, rank in sorted(self._ranks.items()))
        return f"PrecedenceTable({{{entries}}})"
