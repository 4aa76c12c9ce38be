"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser builds these nodes and the evaluator walks them. Every node
renders to a canonical text form through `str()`: infix and prefix
expressions are fully parenthesized, so the rendering shows exactly how the
parser grouped the operators. Tests and function values rely on this form,
and parsing a rendering again produces the same rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


def _join(nodes) -> str:
    return ', '.join(str(n) for n in nodes)


# Statements

@dataclass
class Program(Node):
    statements: List[Node]
    # set by the parser when input ended in the middle of a construct
    incomplete: bool = field(default=False, compare=False, repr=False)

    def need_next(self) -> bool:
        """True when the source stopped before a construct was closed."""
        return self.incomplete

    def __str__(self) -> str:
        return ''.join(f"{stmt}\n" for stmt in self.statements)


@dataclass
class LetStmt(Node):
    name: Ident
    value: Node

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStmt(Node):
    value: Node

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass
class ExprStmt(Node):
    expr: Node

    def __str__(self) -> str:
        return str(self.expr)


@dataclass
class Block(Node):
    statements: List[Node]

    def __str__(self) -> str:
        body = ''.join(f"\t{stmt}\n" for stmt in self.statements)
        return "{\n" + body + "}"


# Expressions

@dataclass
class Ident(Node):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLit(Node):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class StringLit(Node):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class BooleanLit(Node):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class PrefixOp(Node):
    op: str
    operand: Node

    def __str__(self) -> str:
        return f"({self.op}{self.operand})"


@dataclass
class InfixOp(Node):
    op: str
    left: Node
    right: Node

    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"


@dataclass
class IfExpr(Node):
    condition: Node
    consequence: Block
    alternative: Optional[Block] = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass
class FunctionLit(Node):
    params: List[Ident]
    body: Block

    def __str__(self) -> str:
        return f"fn ({_join(self.params)}) {self.body}"


@dataclass
class Call(Node):
    callee: Node
    args: List[Node]

    def __str__(self) -> str:
        return f"{self.callee}({_join(self.args)})"


@dataclass
class ArrayLit(Node):
    elements: List[Node]

    def __str__(self) -> str:
        return f"[{_join(self.elements)}]"


@dataclass
class Index(Node):
    target: Node
    index: Node

    def __str__(self) -> str:
        return f"({self.target}[{self.index}])"


@dataclass
class HashLit(Node):
    pairs: List[Tuple[Node, Node]]

    def __str__(self) -> str:
        entries = ', '.join(f"{key}: {value}" for key, value in self.pairs)
        return "{" + entries + "}"
