"""
Toy Language Lexer (Tokenizer)
==============================

This module converts a character stream into tokens for the parser.
The lexer knows nothing about the grammar: it only classifies runs of
characters.

Token Categories
----------------
- Reserved words: FUNC PRINT RETURN CONTINUE IF THEN ELSE FI WHILE DO DONE VAR
- Identifiers: [A-Za-z][A-Za-z0-9]*
- Integers: [0-9]+ (unsigned decimal; the sign belongs to the grammar)
- Text: "anything but a quote", kept verbatim with its quotes
- Assignment symbol: :=
- Every other character is returned as a CHAR token of its own

Comments
--------
- Single-line: // comment, up to the end of the line or input

Streaming
---------
The lexer reads its input one character at a time and never holds more
than one unconsumed character, so it can scan an interactive stream such
as ``sys.stdin`` as well as a string.

Example Usage
-------------
>>> from toylang.frontend.lexer import Lexer
>>> for token in Lexer('x := x + 1', "test.toy").tokenize():
...     print(token)
Token(IDENTIFIER, 'x', 1:1)
Token(ASSIGN, ':=', 1:3)
Token(IDENTIFIER, 'x', 1:6)
Token(CHAR, '+', 1:8)
Token(NUMBER, 1, 1:10)
Token(EOF, 1:11)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO, Union
import io
import logging
import string

from toylang.errors import SourceLocation
from toylang.frontend.errors import UnterminatedTextError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the toy language.

    Reserved words are distinguished from identifiers to simplify
    parsing. Operators and punctuation are not given types of their own:
    they arrive as CHAR tokens whose value is the character.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input
    ERROR = auto()          # Character the language cannot contain

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable/function names
    NUMBER = auto()         # Integer literals
    TEXT = auto()           # Quoted text "..."
    ASSIGN = auto()         # :=

    # === Reserved Words ===
    FUNC = auto()
    PRINT = auto()
    RETURN = auto()
    CONTINUE = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    FI = auto()
    WHILE = auto()
    DO = auto()
    DONE = auto()
    VAR = auto()

    # === Single raw character ===
    CHAR = auto()           # ( ) { } , + - * / < > = ...


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "FUNC": TokenType.FUNC,
    "PRINT": TokenType.PRINT,
    "RETURN": TokenType.RETURN,
    "CONTINUE": TokenType.CONTINUE,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ELSE": TokenType.ELSE,
    "FI": TokenType.FI,
    "WHILE": TokenType.WHILE,
    "DO": TokenType.DO,
    "DONE": TokenType.DONE,
    "VAR": TokenType.VAR,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from toy language source.

    Attributes:
        type: The TokenType classification
        value: Identifier or keyword text, the raw character for CHAR and
            ERROR, the verbatim quoted text for TEXT, an int for NUMBER,
            or None for EOF
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_char(self, char: str) -> bool:
        """Return True if this is the raw character token `char`."""
        return self.type == TokenType.CHAR and self.value == char

    def describe(self) -> str:
        """Short human-readable form used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        return str(self.value)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes toy language source.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()      # one at a time
        tokens = list(lexer.tokenize()) # or all of them, EOF included

    Attributes:
        filename: Name of the source (for error reporting)
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    WHITESPACE = " \t\n\r\v\f"

    def __init__(self, source: Union[str, TextIO], filename: str = "<input>"):
        """
        Initialize the lexer.

        Args:
            source: Source text, or a text stream read one character at a time
            filename: Name of the source (for error messages)
        """
        self.filename = filename
        self._stream = io.StringIO(source) if isinstance(source, str) else source

        # Position of the lookahead character
        self._line = 1
        self._column = 1

        # Source lines seen so far, for error context. A string source is
        # known up front, so its lines are complete.
        self._lines: list[str] = []
        self._current_line: list[str] = []
        self._source_lines = (
            [line.rstrip("\r") for line in source.split("\n")]
            if isinstance(source, str) else None
        )

        self._char = ""
        self._read()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _read(self) -> None:
        """Read the next raw character into the lookahead slot."""
        self._char = self._stream.read(1)
        if self._char and self._char not in "\n\r":
            self._current_line.append(self._char)

    def _advance(self) -> str:
        """Consume and return the lookahead character."""
        char = self._char
        if char == "\n":
            self._lines.append("".join(self._current_line))
            self._current_line = []
            self._line += 1
            self._column = 1
        elif char:
            self._column += 1
        self._read()
        return char

    def _at_end(self) -> bool:
        return self._char == ""

    def line_text(self, line: int) -> Optional[str]:
        """Return the text of a source line read so far, if any."""
        if self._source_lines is not None:
            if 0 < line <= len(self._source_lines):
                return self._source_lines[line - 1]
            return None
        if 0 < line <= len(self._lines):
            return self._lines[line - 1]
        if line == len(self._lines) + 1:
            return "".join(self._current_line)
        return None

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def tokenize(self) -> Iterator[Token]:
        """
        Generate every remaining token, ending with EOF.

        Raises:
            UnterminatedTextError: If quoted text is never closed
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Raises:
            UnterminatedTextError: If quoted text is never closed
        """
        while True:
            while not self._at_end() and self._char in self.WHITESPACE:
                self._advance()

            start_line = self._line
            start_column = self._column

            if self._at_end():
                return self._make_token(TokenType.EOF, None, start_line, start_column)

            char = self._char

            if char in self.IDENT_START:
                return self._scan_identifier(start_line, start_column)

            if char in string.digits:
                return self._scan_number(start_line, start_column)

            if char == "/":
                self._advance()
                if self._char != "/":
                    return self._make_token(TokenType.CHAR, "/", start_line, start_column)
                self._skip_comment()
                continue

            if char == ":":
                self._advance()
                if self._char != "=":
                    return self._make_token(TokenType.CHAR, ":", start_line, start_column)
                self._advance()
                return self._make_token(TokenType.ASSIGN, ":=", start_line, start_column)

            if char == '"':
                return self._scan_text(start_line, start_column)

            self._advance()
            if ord(char) > 127:
                logger.debug(f"non-ASCII character {char!r} at {start_line}:{start_column}")
                return self._make_token(TokenType.ERROR, char, start_line, start_column)
            return self._make_token(TokenType.CHAR, char, start_line, start_column)

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | None,
        line: int,
        column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _skip_comment(self) -> None:
        """Skip the rest of a // comment; the first '/' is already consumed."""
        while not self._at_end() and self._char not in "\n\r":
            self._advance()

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or reserved word.

        Reserved words are upper case and matched exactly, so ``Func`` or
        ``func`` are ordinary identifiers.
        """
        chars = []
        while not self._at_end() and self._char in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan an unsigned decimal integer."""
        chars = []
        while not self._at_end() and self._char in string.digits:
            chars.append(self._advance())

        return self._make_token(TokenType.NUMBER, int("".join(chars)), start_line, start_column)

    def _scan_text(self, start_line: int, start_column: int) -> Token:
        """
        Scan quoted text, keeping both quotes.

        Each literal starts from an empty buffer. There are no escape
        sequences and the text may span lines.
        """
        chars = [self._advance()]  # opening "

        while self._char != '"':
            if self._at_end():
                raise UnterminatedTextError(
                    SourceLocation(self.filename, start_line, start_column),
                    self.line_text(start_line),
                )
            chars.append(self._advance())

        chars.append(self._advance())  # closing "
        return self._make_token(TokenType.TEXT, "".join(chars), start_line, start_column)
