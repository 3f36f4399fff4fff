"""Abstract Syntax Tree (AST) definitions for the BrainRot language.

Nodes are frozen dataclasses built bottom-up by the parser and never
mutated afterwards. Statement bodies, parameter lists and argument lists
are tuples. Every node records the line and column of the token it
starts at (the operator token for unary and binary expressions); those
positions are ignored when nodes are compared.

An expression used as a statement appears directly in a statement list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .types import Value


@dataclass(frozen=True, kw_only=True)
class Node:
    """Base class for all AST nodes."""
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


# Expressions

@dataclass(frozen=True)
class Literal(Node):
    value: Value


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class UnaryExpression(Node):
    operator: str  # NOT, NOTROT or MINUS
    operand: 'Expression'


@dataclass(frozen=True)
class BinaryExpression(Node):
    operator: str  # PLUS, EQ, ANDROT, ...
    left: 'Expression'
    right: 'Expression'


@dataclass(frozen=True)
class CallExpression(Node):
    name: str
    arguments: Tuple['Expression', ...] = ()


# Statements

@dataclass(frozen=True)
class VariableDeclaration(Node):
    name: str
    value: 'Expression'


@dataclass(frozen=True)
class PrintStatement(Node):
    expression: 'Expression'


@dataclass(frozen=True)
class WhileLoop(Node):
    condition: 'Expression'
    body: Tuple['Statement', ...] = ()


@dataclass(frozen=True)
class IfStatement(Node):
    condition: 'Expression'
    then_body: Tuple['Statement', ...] = ()
    else_body: Optional[Tuple['Statement', ...]] = None


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: str
    parameters: Tuple[str, ...] = ()
    body: Tuple['Statement', ...] = ()


Expression = Union[Literal, Identifier, UnaryExpression, BinaryExpression, CallExpression]

Statement = Union[
    VariableDeclaration, PrintStatement, WhileLoop, IfStatement, FunctionDeclaration,
    Expression,
]

EXPRESSION_TYPES = (Literal, Identifier, UnaryExpression, BinaryExpression, CallExpression)
