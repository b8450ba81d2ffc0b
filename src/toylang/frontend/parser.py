"""
Toy Language Recursive Descent Parser
=====================================

This module implements a recursive descent parser for the toy language.
It pulls tokens from the lexer one at a time, keeping a single token of
lookahead, and builds an Abstract Syntax Tree (AST).

Grammar (EBNF)
--------------
program         ::= function*
function        ::= 'FUNC' IDENTIFIER '(' (IDENTIFIER (',' IDENTIFIER)*)? ')' statement

statement       ::= block | if_stmt | while_stmt | print_stmt
                  | return_stmt | 'CONTINUE' | assignment
block           ::= '{' declaration? statement* '}'
declaration     ::= 'VAR' IDENTIFIER (',' IDENTIFIER)*
if_stmt         ::= 'IF' expr 'THEN' statement ('ELSE' statement)? 'FI'
while_stmt      ::= 'WHILE' expr 'DO' statement 'DONE'
print_stmt      ::= 'PRINT' print_item (',' print_item)*
print_item      ::= TEXT | expr
return_stmt     ::= 'RETURN' expr
assignment      ::= IDENTIFIER ':=' expr

expr            ::= unary (binop unary)*        (precedence climbing)
unary           ::= '-' expr | primary
primary         ::= NUMBER | IDENTIFIER | IDENTIFIER '(' (expr (',' expr)*)? ')'
                  | '(' expr ')'

Binary operators and their ranks come from a PrecedenceTable.

Error Handling
--------------
Every parse method either returns a complete node or raises. Nothing is
caught below the program level, so a bad statement or expression voids
its whole function. Parser.parse() reports the error, discards exactly
one token and tries the next function.

Example Usage
-------------
>>> from toylang.frontend.parser import parse_source
>>> program = parse_source("FUNC main() RETURN 1 + 2 * 3")
>>> program.functions[0].body.value
BinaryExpression(operator='+', left=NumberLiteral(value=1), ...)
"""

import logging
from typing import Iterator, Optional

from toylang.errors import SourceLocation
from toylang.frontend.lexer import Lexer, Token, TokenType
from toylang.frontend.precedence import PrecedenceTable
from toylang.frontend.diagnostics import DiagnosticReporter
from toylang.frontend.ast import (
    ProgramNode,
    FunctionNode,
    PrototypeNode,
    VarDeclaration,
    Statement,
    BlockStatement,
    AssignmentStatement,
    PrintStatement,
    ReturnStatement,
    NullStatement,
    IfStatement,
    WhileStatement,
    Expression,
    NumberLiteral,
    IdentifierExpression,
    NegationExpression,
    BinaryExpression,
    CallExpression,
)
from toylang.frontend.errors import (
    FrontEndError,
    ParseError,
    UnexpectedTokenError,
    MissingTokenError,
    MisplacedDeclarationError,
)

logger = logging.getLogger(__name__)


# Tokens that can start a PRINT item
_PRINT_ITEM_STARTS = (TokenType.IDENTIFIER, TokenType.TEXT, TokenType.NUMBER)


class Parser:
    """
    Recursive descent parser for the toy language.

    One Parser owns the scan state of one parse run: the lexer and the
    current token. Build a new Parser for every input.

    Attributes:
        lexer: Token source
        precedence: Binary operator ranks
        reporter: Where the program assembler sends diagnostics
    """

    def __init__(
        self,
        lexer: Lexer,
        precedence: Optional[PrecedenceTable] = None,
        reporter: Optional[DiagnosticReporter] = None,
    ):
        self.lexer = lexer
        self.precedence = precedence or PrecedenceTable()
        self.reporter = reporter if reporter is not None else DiagnosticReporter()
        self.filename = lexer.filename

        # Prime the single token of lookahead
        self._current: Optional[Token] = None
        self._discard()

    # =========================================================================
    # Program Assembler
    # =========================================================================

    def parse(self) -> ProgramNode:
        """
        Parse every function up to end of input.

        Functions that fail to parse are reported and left out; the
        returned program holds the ones that succeeded.
        """
        location = SourceLocation(self.filename, 1, 1)
        functions = list(self.iter_functions())
        return ProgramNode(location=location, functions=functions)

    def iter_functions(self) -> Iterator[FunctionNode]:
        """
        Yield each function as soon as it has been parsed.

        On failure the error goes to the reporter and exactly one token
        is discarded before the next attempt. A malformed function can
        therefore leave the parser mid-function and cause further
        diagnostics until it falls back into step.
        """
        while not self._at_end():
            if self.reporter.should_stop():
                self.reporter.add_warning(
                    f"too many errors ({self.reporter.error_count()}), stopping",
                    self._current.location,
                )
                return

            try:
                function = self._parse_function()
            except FrontEndError as e:
                self._report(e)
                logger.debug(f"skipping {self._current!r} to recover")
                self._discard()
                continue

            logger.debug(f"parsed function '{function.name}' with {len(function.parameters)} parameters")
            yield function

    def _report(self, error: FrontEndError) -> None:
        source_line = self.lexer.line_text(error.location.line) if error.location else None
        self.reporter.add(error.with_source_line(source_line))

    def _discard(self) -> None:
        """
        Drop the current token and scan the next one, reporting any
        lexical error instead of raising it.

        A lexical error consumes the rest of the input, so the token
        scanned after it is EOF.
        """
        if self._current is not None and self._at_end():
            return
        try:
            self._current = self.lexer.next_token()
        except FrontEndError as e:
            self._report(e)
            self._current = self.lexer.next_token()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    @property
    def current(self) -> Token:
        """The single token of lookahead."""
        return self._current

    def _at_end(self) -> bool:
        return self._current.type == TokenType.EOF

    def _advance(self) -> Token:
        """Consume the current token and scan the next one."""
        token = self._current
        if token.type != TokenType.EOF:
            self._current = self.lexer.next_token()
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._current.type in types

    def _check_char(self, char: str) -> bool:
        return self._current.is_char(char)

    def _expect(self, token_type: TokenType, message: str, hint: Optional[str] = None) -> Token:
        """
        Consume a token of the given type.

        Raises:
            MissingTokenError: If the current token has another type
        """
        if self._check(token_type):
            return self._advance()
        raise MissingTokenError(
            token_type.name,
            self._current.location,
            message=message,
            hint=hint,
        )

    def _expect_char(self, char: str, message: str) -> Token:
        if self._check_char(char):
            return self._advance()
        raise MissingTokenError(f"'{char}'", self._current.location, message=message)

    def _unexpected(self, expected: str, message: Optional[str] = None) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            self._current.describe(),
            expected=expected,
            location=self._current.location,
            message=message,
        )

    # =========================================================================
    # Function Parsing
    # =========================================================================

    def _parse_function(self) -> FunctionNode:
        """function ::= 'FUNC' prototype statement"""
        location = self._current.location
        if not self._check(TokenType.FUNC):
            raise self._unexpected("'FUNC' to start a function definition")
        self._advance()

        prototype = self._parse_prototype()
        body = self.parse_statement()
        return FunctionNode(location=location, prototype=prototype, body=body)

    def _parse_prototype(self) -> PrototypeNode:
        """prototype ::= IDENTIFIER '(' (IDENTIFIER (',' IDENTIFIER)*)? ')'"""
        location = self._current.location
        name = self._expect(TokenType.IDENTIFIER, "Expected function name in prototype").value
        self._expect_char("(", "Expected '(' in prototype")

        parameters = []
        if self._check(TokenType.IDENTIFIER):
            parameters.append(self._advance().value)
            while self._check_char(","):
                self._advance()
                parameters.append(
                    self._expect(TokenType.IDENTIFIER, "Expected parameter name after ',' in prototype").value
                )

        self._expect_char(")", "Expected ')' in prototype")
        return PrototypeNode(location=location, name=name, parameters=parameters)

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def parse_statement(self) -> Statement:
        """Parse any statement, dispatching on the current token."""
        token = self._current

        if token.type == TokenType.IF:
            return self._parse_if_statement()
        if token.type == TokenType.WHILE:
            return self._parse_while_statement()
        if token.type == TokenType.PRINT:
            return self._parse_print_statement()
        if token.type == TokenType.RETURN:
            return self._parse_return_statement()
        if token.type == TokenType.CONTINUE:
            return self._parse_null_statement()
        if token.type == TokenType.VAR:
            # Only a block's first statement may declare
            raise MisplacedDeclarationError(token.location)
        if token.is_char("{"):
            return self._parse_block()

        return self._parse_assignment()

    def _parse_declaration(self) -> VarDeclaration:
        """declaration ::= 'VAR' IDENTIFIER (',' IDENTIFIER)*"""
        location = self._expect(TokenType.VAR, "expected VAR").location

        names = [self._expect(TokenType.IDENTIFIER, "expected identifier after VAR").value]
        while self._check_char(","):
            self._advance()
            names.append(self._expect(TokenType.IDENTIFIER, "expected identifier list after VAR").value)

        return VarDeclaration(location=location, names=names)

    def _parse_block(self) -> BlockStatement:
        """block ::= '{' declaration? statement* '}'"""
        location = self._expect_char("{", "expected '{'").location

        declarations = []
        statements = []

        if self._check(TokenType.VAR):
            declarations.append(self._parse_declaration())

        while not self._check_char("}"):
            if self._at_end():
                raise MissingTokenError("'}'", self._current.location, message="expected '}' to close block")
            if self._check(TokenType.CONTINUE):
                # A bare CONTINUE in a block does nothing
                self._advance()
                continue
            statements.append(self.parse_statement())

        self._advance()  # consume '}'

        return BlockStatement(location=location, declarations=declarations, statements=statements)

    def _parse_null_statement(self) -> NullStatement:
        location = self._advance().location
        return NullStatement(location=location)

    def _parse_if_statement(self) -> IfStatement:
        """if_stmt ::= 'IF' expr 'THEN' statement ('ELSE' statement)? 'FI'"""
        location = self._advance().location

        condition = self.parse_expression()
        self._expect(TokenType.THEN, "expected THEN")
        then_branch = self.parse_statement()

        else_branch = None
        if self._check(TokenType.ELSE):
            self._advance()
            else_branch = self.parse_statement()
            self._expect(TokenType.FI, "expected FI after ELSE branch")
        elif self._check(TokenType.FI):
            self._advance()
        else:
            raise MissingTokenError("FI or ELSE", self._current.location, message="expected FI or ELSE")

        return IfStatement(
            location=location,
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
        )

    def _parse_while_statement(self) -> WhileStatement:
        """while_stmt ::= 'WHILE' expr 'DO' statement 'DONE'"""
        location = self._advance().location

        condition = self.parse_expression()
        self._expect(TokenType.DO, "expect DO in WHILE statement")
        body = self.parse_statement()
        self._expect(TokenType.DONE, "expect DONE in WHILE statement")

        return WhileStatement(location=location, condition=condition, body=body)

    def _parse_print_statement(self) -> PrintStatement:
        """
        print_stmt ::= 'PRINT' print_item (',' print_item)*

        Text items go into the format as they are; each expression item
        becomes a placeholder plus an argument. The statement ends at the
        first token that cannot start an item, or after an item that is
        not followed by a comma.
        """
        location = self._advance().location

        fragments: list[Optional[str]] = []
        arguments: list[Expression] = []

        while self._check(*_PRINT_ITEM_STARTS) or self._check_char("(") or self._check_char("-"):
            if self._check(TokenType.TEXT):
                fragments.append(self._advance().value[1:-1])
            else:
                fragments.append(None)
                arguments.append(self.parse_expression())

            if not self._check_char(","):
                break
            self._advance()

        return PrintStatement(location=location, fragments=fragments, arguments=arguments)

    def _parse_return_statement(self) -> ReturnStatement:
        location = self._advance().location
        value = self.parse_expression()
        return ReturnStatement(location=location, value=value)

    def _parse_assignment(self) -> AssignmentStatement:
        """assignment ::= IDENTIFIER ':=' expr"""
        location = self._current.location
        if not self._check(TokenType.IDENTIFIER):
            raise self._unexpected("a statement")

        target = self._parse_identifier_expression()
        if not self._check(TokenType.ASSIGN):
            raise MissingTokenError(
                "':='",
                self._current.location,
                message="need := in assignment statement",
            )
        self._advance()

        value = self.parse_expression()
        return AssignmentStatement(location=location, target=target, value=value)

    # =========================================================================
    # Expression Parsing (Precedence Climbing)
    # =========================================================================

    def parse_expression(self) -> Expression:
        """expr ::= unary (binop unary)*"""
        left = self._parse_primary()
        return self._parse_binary_rhs(0, left)

    def _parse_binary_rhs(self, min_precedence: int, left: Expression) -> Expression:
        """
        Climb binary operators whose rank is at least `min_precedence`.

        An operator of equal rank combines with what is on its left; a
        tighter one following the right operand takes that operand first.
        """
        while True:
            precedence = self.precedence.of(self._current)
            if precedence < min_precedence or self._check_char("}"):
                return left

            op_token = self._advance()
            right = self._parse_primary()

            next_precedence = self.precedence.of(self._current)
            if precedence < next_precedence:
                right = self._parse_binary_rhs(precedence + 1, right)

            left = BinaryExpression(
                location=op_token.location,
                operator=op_token.value,
                left=left,
                right=right,
            )

    def _parse_primary(self) -> Expression:
        """primary ::= NUMBER | identifier_expr | '(' expr ')' | '-' expr"""
        token = self._current

        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier_expression()
        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteral(location=token.location, value=token.value)
        if token.is_char("("):
            return self._parse_paren_expression()
        if token.is_char("-"):
            return self._parse_negation()

        raise self._unexpected(
            "an expression",
            message="unknown token when expecting an expression",
        )

    def _parse_identifier_expression(self) -> Expression:
        """identifier_expr ::= IDENTIFIER | IDENTIFIER '(' (expr (',' expr)*)? ')'"""
        token = self._advance()

        if not self._check_char("("):
            return IdentifierExpression(location=token.location, name=token.value)

        self._advance()  # consume '('
        arguments = []
        if not self._check_char(")"):
            while True:
                arguments.append(self.parse_expression())
                if self._check_char(")"):
                    break
                if not self._check_char(","):
                    raise MissingTokenError(
                        "')' or ','",
                        self._current.location,
                        message="Expected ')' or ',' in argument list",
                    )
                self._advance()
        self._advance()  # consume ')'

        return CallExpression(location=token.location, function_name=token.value, arguments=arguments)

    def _parse_paren_expression(self) -> Expression:
        self._advance()  # consume '('
        expr = self.parse_expression()
        self._expect_char(")", "expected ')'")
        return expr

    def _parse_negation(self) -> NegationExpression:
        """'-' applies to the whole expression that follows it."""
        location = self._advance().location
        operand = self.parse_expression()
        return NegationExpression(location=location, operand=operand)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    precedence: Optional[PrecedenceTable] = None,
) -> ProgramNode:
    """
    Parse toy language source into an AST.

    Raises:
        CompilationError: If any diagnostic was reported
    """
    reporter = DiagnosticReporter()
    parser = Parser(Lexer(source, filename), precedence, reporter)
    program = parser.parse()
    reporter.raise_if_errors()
    return program


def parse_expression_source(
    source: str,
    precedence: Optional[PrecedenceTable] = None,
) -> Expression:
    """
    Parse a single expression, which must make up the whole input.

    Raises:
        ParseError: If the text is not exactly one expression
    """
    parser = Parser(Lexer(source, "<expr>"), precedence)
    expr = parser.parse_expression()
    if not parser._at_end():
        raise ParseError(
            f"unexpected '{parser.current.describe()}' after expression",
            parser.current.location,
        )
    return expr
