"""
Toy Language Abstract Syntax Tree (AST) Definitions
===================================================

This module defines the AST node types produced by the parser and
consumed by a code generator.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node, ordered list of functions
├── Declarations
│   ├── FunctionNode - prototype plus one body statement
│   ├── PrototypeNode - function name and parameter names
│   └── VarDeclaration - VAR name, name, ...
├── Statements
│   ├── BlockStatement - { declaration? statement* }
│   ├── AssignmentStatement - name := expression
│   ├── PrintStatement - PRINT "text", expression, ...
│   ├── ReturnStatement - RETURN expression
│   ├── NullStatement - CONTINUE
│   ├── IfStatement - IF ... THEN ... ELSE ... FI
│   └── WhileStatement - WHILE ... DO ... DONE
└── Expressions
    ├── NumberLiteral - integer constant
    ├── IdentifierExpression - variable reference
    ├── NegationExpression - unary minus
    ├── BinaryExpression - binary operators
    └── CallExpression - function call

Design Notes
------------
- All nodes are dataclasses; each parent owns its children outright
- Each node stores its source location, which does not take part in
  equality, so two parses of equivalent text compare equal
- Nodes are built bottom-up by the parser and never changed afterwards
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from toylang.errors import SourceLocation


# Format placeholder standing for one PRINT argument
PRINT_PLACEHOLDER = "%d"


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation = field(compare=False, repr=False)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


@dataclass
class Statement(ASTNode):
    """Base class for all statement nodes."""
    pass


@dataclass
class Declaration(ASTNode):
    """Base class for nodes that introduce names."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class NumberLiteral(Expression):
    """Integer constant."""
    value: int = 0


@dataclass
class IdentifierExpression(Expression):
    """Reference to a variable or parameter."""
    name: str = ""


@dataclass
class NegationExpression(Expression):
    """
    Unary minus.

    The operand is everything the minus sign prefixes, so ``-a + b``
    negates ``a + b``.
    """
    operand: Expression = None


@dataclass
class BinaryExpression(Expression):
    """
    Binary operation expression (a op b).

    Attributes:
        operator: The operator character, e.g. '+'
        left: Left operand expression
        right: Right operand expression
    """
    operator: str = ""
    left: Expression = None
    right: Expression = None


@dataclass
class CallExpression(Expression):
    """
    Function call.

    Attributes:
        function_name: Name of the called function
        arguments: Argument expressions, in order
    """
    function_name: str = ""
    arguments: list[Expression] = field(default_factory=list)


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass
class VarDeclaration(Declaration):
    """
    VAR declaration introducing names into the enclosing block.

    There is no initializer: variables get their values by assignment.
    """
    names: list[str] = field(default_factory=list)


@dataclass
class PrototypeNode(Declaration):
    """
    A function's name and parameter names, independent of its body.
    """
    name: str = ""
    parameters: list[str] = field(default_factory=list)


@dataclass
class FunctionNode(Declaration):
    """
    Function definition: prototype plus exactly one body statement.
    """
    prototype: PrototypeNode = None
    body: Statement = None

    @property
    def name(self) -> str:
        return self.prototype.name

    @property
    def parameters(self) -> list[str]:
        return self.prototype.parameters


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class BlockStatement(Statement):
    """
    Block enclosed in braces, opening a new scope.

    Attributes:
        declarations: The block's leading VAR declaration (at most one)
        statements: Statements in the block, in source order
    """
    declarations: list[VarDeclaration] = field(default_factory=list)
    statements: list[Statement] = field(default_factory=list)


@dataclass
class AssignmentStatement(Statement):
    """
    Assignment ``target := value``.

    The target is parsed by the same rule as an identifier expression,
    so a call-shaped target such as ``f(x) := 1`` is accepted here and
    left to the code generator to reject.
    """
    target: Expression = None
    value: Expression = None

    @property
    def name(self) -> str:
        """Name of the assigned variable."""
        if isinstance(self.target, CallExpression):
            return self.target.function_name
        return self.target.name

    @property
    def target_is_call(self) -> bool:
        return isinstance(self.target, CallExpression)


@dataclass
class PrintStatement(Statement):
    """
    PRINT statement.

    Text items are stored without their surrounding quotes, so the
    fragments join directly into a printf-style format. The TEXT token
    itself keeps the quotes; SourcePrinter puts them back.

    Attributes:
        fragments: Text pieces in order, unquoted; None marks an argument slot
        arguments: Expressions filling the slots, in order
    """
    fragments: list[Optional[str]] = field(default_factory=list)
    arguments: list[Expression] = field(default_factory=list)

    @property
    def format_string(self) -> str:
        """printf-style format with one placeholder per argument."""
        return "".join(PRINT_PLACEHOLDER if f is None else f for f in self.fragments)


@dataclass
class ReturnStatement(Statement):
    value: Expression = None


@dataclass
class NullStatement(Statement):
    """CONTINUE: does nothing when executed."""
    pass


@dataclass
class IfStatement(Statement):
    """
    If statement with optional else branch.

    Attributes:
        condition: The condition expression
        then_branch: Statement executed if condition is true
        else_branch: Optional statement executed if condition is false
    """
    condition: Expression = None
    then_branch: Statement = None
    else_branch: Optional[Statement] = None


@dataclass
class WhileStatement(Statement):
    condition: Expression = None
    body: Statement = None


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass
class ProgramNode(ASTNode):
    """
    Root node: every function of the parse unit, in source order.
    """
    functions: list[FunctionNode] = field(default_factory=list)

    def get_function(self, name: str) -> Optional[FunctionNode]:
        for function in self.functions:
            if function.name == name:
                return function
        return None


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about; anything else falls through to generic_visit, which walks the
    node's children.

    Usage:
        class CallCounter(ASTVisitor):
            def __init__(self):
                self.count = 0

            def visit_CallExpression(self, node):
                self.count += 1
                self.generic_visit(node)
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to visit_<NodeClass>, or generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all children of the node."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# Expression Rendering
# =============================================================================

def expression_to_str(expr: Optional[Expression]) -> str:
    """
    Render an expression as source text.

    Binary and negation nodes are fully parenthesized, so the result
    parses back to the same tree whatever the precedence table.
    """
    if expr is None:
        return ""
    if isinstance(expr, NumberLiteral):
        return str(expr.value)
    if isinstance(expr, IdentifierExpression):
        return expr.name
    if isinstance(expr, NegationExpression):
        return f"(-{expression_to_str(expr.operand)})"
    if isinstance(expr, BinaryExpression):
        return f"({expression_to_str(expr.left)} {expr.operator} {expression_to_str(expr.right)})"
    if isinstance(expr, CallExpression):
        args = ", ".join(expression_to_str(a) for a in expr.arguments)
        return f"{expr.function_name}({args})"
    raise TypeError(f"not an expression node: {type(expr).__name__}")


def _print_items(node: PrintStatement) -> list[str]:
    """Render PRINT items back in source order."""
    items = []
    arguments = iter(node.arguments)
    for fragment in node.fragments:
        if fragment is None:
            items.append(expression_to_str(next(arguments)))
        else:
            items.append(f'"{fragment}"')
    return items


# =============================================================================
# Indenting Printer Base
# =============================================================================

class _IndentingPrinter(ASTVisitor):
    """Shared line/indent bookkeeping for the printers below."""

    indent_unit = "  "

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = self.indent_unit * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _nested(self, node: ASTNode) -> None:
        self._indent()
        self.visit(node)
        self._dedent()


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(_IndentingPrinter):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(program))
    """

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self._indent()
        for function in node.functions:
            self.visit(function)
        self._dedent()

    def visit_FunctionNode(self, node: FunctionNode):
        params = ", ".join(node.parameters)
        self._emit(f"Function: {node.name}({params})")
        self._nested(node.body)

    def visit_VarDeclaration(self, node: VarDeclaration):
        self._emit(f"Var: {', '.join(node.names)}")

    def visit_BlockStatement(self, node: BlockStatement):
        self._emit("Block")
        self._indent()
        for decl in node.declarations:
            self.visit(decl)
        for stmt in node.statements:
            self.visit(stmt)
        self._dedent()

    def visit_AssignmentStatement(self, node: AssignmentStatement):
        self._emit(f"Assign: {expression_to_str(node.target)} := {expression_to_str(node.value)}")

    def visit_PrintStatement(self, node: PrintStatement):
        args = ", ".join(expression_to_str(a) for a in node.arguments)
        self._emit(f"Print: {node.format_string!r} [{args}]")

    def visit_ReturnStatement(self, node: ReturnStatement):
        self._emit(f"Return {expression_to_str(node.value)}")

    def visit_NullStatement(self, node: NullStatement):
        self._emit("Continue")

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If {expression_to_str(node.condition)}")
        self._indent()
        self._emit("Then:")
        self._nested(node.then_branch)
        if node.else_branch is not None:
            self._emit("Else:")
            self._nested(node.else_branch)
        self._dedent()

    def visit_WhileStatement(self, node: WhileStatement):
        self._emit(f"While {expression_to_str(node.condition)}")
        self._nested(node.body)


# =============================================================================
# Source Printer
# =============================================================================

class SourcePrinter(_IndentingPrinter):
    """
    Renders an AST back into toy language source.

    Parsing the output again gives a tree equal to the input tree.

    Usage:
        text = SourcePrinter().print(program)
    """

    indent_unit = "    "

    def visit_ProgramNode(self, node: ProgramNode):
        for index, function in enumerate(node.functions):
            if index:
                self.output.append("")
            self.visit(function)

    def visit_FunctionNode(self, node: FunctionNode):
        self._emit(f"FUNC {node.name}({', '.join(node.parameters)})")
        self.visit(node.body)

    def visit_VarDeclaration(self, node: VarDeclaration):
        self._emit(f"VAR {', '.join(node.names)}")

    def visit_BlockStatement(self, node: BlockStatement):
        self._emit("{")
        self._indent()
        for decl in node.declarations:
            self.visit(decl)
        for stmt in node.statements:
            self.visit(stmt)
        self._dedent()
        self._emit("}")

    def visit_AssignmentStatement(self, node: AssignmentStatement):
        self._emit(f"{expression_to_str(node.target)} := {expression_to_str(node.value)}")

    def visit_PrintStatement(self, node: PrintStatement):
        self._emit(" ".join(["PRINT", ", ".join(_print_items(node))]).rstrip())

    def visit_ReturnStatement(self, node: ReturnStatement):
        self._emit(f"RETURN {expression_to_str(node.value)}")

    def visit_NullStatement(self, node: NullStatement):
        self._emit("CONTINUE")

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"IF {expression_to_str(node.condition)} THEN")
        self._nested(node.then_branch)
        if node.else_branch is not None:
            self._emit("ELSE")
            self._nested(node.else_branch)
        self._emit("FI")

    def visit_WhileStatement(self, node: WhileStatement):
        self._emit(f"WHILE {expression_to_str(node.condition)} DO")
        self._nested(node.body)
        self._emit("DONE")
