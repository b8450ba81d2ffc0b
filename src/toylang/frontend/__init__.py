"""
Toy Language Front End
======================

Turns source text of the toy language into an abstract syntax tree.

- A lexer (tokenizer) reading one character at a time
- A configurable binary operator precedence table
- A recursive descent parser with precedence climbing for expressions
- A diagnostic reporter collecting errors across functions
- A code generator interface the AST is handed to

Pipeline
--------
    Source → Lexer → Parser → AST → Code Generator (external)

Usage
-----
>>> from toylang.frontend import parse_source
>>> program = parse_source('''
... FUNC max(a, b)
...     IF a > b THEN RETURN a ELSE RETURN b FI
... ''')
>>> program.functions[0].parameters
['a', 'b']
"""

from toylang.frontend.compiler import FrontEnd, FrontEndOptions, FrontEndResult, compile_toy
from toylang.frontend.errors import (
    FrontEndError,
    LexicalError,
    UnterminatedTextError,
    ParseError,
    UnexpectedTokenError,
    MissingTokenError,
    ScopeError,
    MisplacedDeclarationError,
    PrecedenceError,
    CompilationError,
)
from toylang.frontend.lexer import Lexer, Token, TokenType
from toylang.frontend.precedence import PrecedenceTable, DEFAULT_PRECEDENCE
from toylang.frontend.parser import Parser, parse_source, parse_expression_source
from toylang.frontend.diagnostics import DiagnosticReporter
from toylang.frontend.codegen import CodeGenerator
from toylang.frontend.ast import (
    ASTNode,
    ProgramNode,
    FunctionNode,
    PrototypeNode,
    VarDeclaration,
    BlockStatement,
    AssignmentStatement,
    PrintStatement,
    ReturnStatement,
    NullStatement,
    IfStatement,
    WhileStatement,
    NumberLiteral,
    IdentifierExpression,
    NegationExpression,
    BinaryExpression,
    CallExpression,
    ASTVisitor,
    ASTPrinter,
    SourcePrinter,
)

__all__ = [
    # Main API
    "FrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "compile_toy",
    "parse_source",
    "parse_expression_source",
    # Errors
    "FrontEndError",
    "LexicalError",
    "UnterminatedTextError",
    "ParseError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "ScopeError",
    "MisplacedDeclarationError",
    "PrecedenceError",
    "CompilationError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "PrecedenceTable",
    "DEFAULT_PRECEDENCE",
    "DiagnosticReporter",
    "CodeGenerator",
    # AST Nodes
    "ASTNode",
    "ProgramNode",
    "FunctionNode",
    "PrototypeNode",
    "VarDeclaration",
    "BlockStatement",
    "AssignmentStatement",
    "PrintStatement",
    "ReturnStatement",
    "NullStatement",
    "IfStatement",
    "WhileStatement",
    "NumberLiteral",
    "IdentifierExpression",
    "NegationExpression",
    "BinaryExpression",
    "CallExpression",
    "ASTVisitor",
    "ASTPrinter",
    "SourcePrinter",
]
