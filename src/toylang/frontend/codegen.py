"""
Code Generator Interface
========================

The front end stops at the AST. Lowering it to something executable is
the job of a code generator, which plugs in here:

    class MyBackend(CodeGenerator):
        def generate_function(self, function):
            ...   # visit function.prototype and function.body

    FrontEnd().compile_source(source, generator=MyBackend())

Each function is handed over as soon as it has parsed, then the whole
program once parsing is done. Nothing is expected back from a generator
except that it raises on failure.
"""

from abc import ABC, abstractmethod

from toylang.frontend.ast import ASTVisitor, FunctionNode, ProgramNode


class CodeGenerator(ASTVisitor, ABC):
    """
    Base class for code generators consuming the AST.

    Subclasses implement generate_function() and usually visit_* methods
    for the statement and expression nodes they lower.
    """

    @abstractmethod
    def generate_function(self, function: FunctionNode) -> None:
        """Lower one function."""

    def finish_program(self, program: ProgramNode) -> None:
        """Called once with the whole program after the last function."""

    def generate_program(self, program: ProgramNode) -> None:
        """Lower every function of an already parsed program, in order."""
        for function in program.functions:
            self.generate_function(function)
        self.finish_program(program)
