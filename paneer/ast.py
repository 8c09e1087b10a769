"""Abstract Syntax Tree (AST) definitions for PaneerLang.

The AST classes defined in this module represent the syntactic structure
of parsed PaneerLang programs. They are used by the interpreter to evaluate
PaneerLang code. Each node corresponds to a construct in the grammar and
records the source line it started on for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


# Statements

@dataclass
class VarDecl(Node):
    name: str
    type_spec: TypeSpec
    expr: Node  # initializer
    line: int = 0


@dataclass
class FuncParam:
    name: str
    type_spec: TypeSpec


@dataclass
class FuncDecl(Node):
    name: str
    params: List[FuncParam]
    return_type: TypeSpec  # TypeSpec('void') when omitted
    body: 'Block'
    line: int = 0


@dataclass
class Block(Node):
    statements: List[Node]
    line: int = 0


@dataclass
class IfStmt(Node):
    condition: Node
    then_block: Block
    else_block: Optional[Node]  # Block, or IfStmt for `varna agar`
    line: int = 0


@dataclass
class WhileStmt(Node):
    condition: Node
    body: Block
    line: int = 0


@dataclass
class ForInStmt(Node):
    var_name: str
    iterable: Node
    body: Block
    line: int = 0


@dataclass
class ReturnStmt(Node):
    value: Optional[Node]
    line: int = 0


@dataclass
class ExprStmt(Node):
    expr: Node
    line: int = 0


# Expressions

@dataclass
class IntLit(Node):
    value: int
    line: int = 0


@dataclass
class FloatLit(Node):
    value: float
    line: int = 0


@dataclass
class StringLit(Node):
    value: str
    line: int = 0


@dataclass
class BoolLit(Node):
    value: bool
    line: int = 0


@dataclass
class ArrayLit(Node):
    elements: List[Node] = field(default_factory=list)
    line: int = 0


@dataclass
class Ident(Node):
    name: str
    line: int = 0


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node
    line: int = 0


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node
    line: int = 0


@dataclass
class Call(Node):
    name: str
    args: List[Node]
    line: int = 0


@dataclass
class Index(Node):
    target: Node
    index: Node
    line: int = 0


@dataclass
class Print(Node):
    """`paneer.bol(arg)`: the built-in print."""
    arg: Node
    line: int = 0
