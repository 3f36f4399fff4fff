"""Interpreter for the BrainRot language.

This module implements the evaluation stage of the BrainRot toolchain
and the `execute` entry point that drives the whole pipeline: source
text is tokenized, parsed into top-level statements and then executed
by a tree-walking interpreter.

Execution happens against one flat variable environment and a function
table, both created fresh for every run. Printed values are collected
as output lines rather than written to stdout. A run always produces an
`ExecutionResult`: the lines printed so far plus at most one error.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .ast import (
    Literal, Identifier, UnaryExpression, BinaryExpression, CallExpression,
    VariableDeclaration, PrintStatement, WhileLoop, IfStatement, FunctionDeclaration,
    Node, Statement, EXPRESSION_TYPES,
)
from .environment import Environment
from .errors import BrainrotError, ErrorInfo, ErrorKind
from .parser import ParseFailure, parse_program
from .types import NIL, Value, is_number, to_string, type_name

DEFAULT_MAX_STEPS = 1_000_000
DEFAULT_MAX_CALL_DEPTH = 100

OPERATOR_SYMBOLS = {
    'PLUS': '+',
    'MINUS': '-',
    'MULTIPLY': '*',
    'DIVIDE': '/',
    'GT': '>',
    'LT': '<',
    'EQ': '==',
    'NEQ': '!=',
    'ANDROT': 'androt',
    'ORROT': 'orrot',
    'NOT': '!',
    'NOTROT': 'notrot',
}


@dataclass
class ExecutionResult:
    lines: List[str] = field(default_factory=list)
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'lines': list(self.lines)}
        if self.error is not None:
            result['error'] = self.error.to_dict()
        return result


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class Interpreter:
    """Core interpreter that executes BrainRot statements."""
    def __init__(
        self,
        debug_level: int = 0,
        debug_file: Optional[str] = 'debug.txt',
        max_steps: Optional[int] = DEFAULT_MAX_STEPS,
        max_call_depth: Optional[int] = DEFAULT_MAX_CALL_DEPTH,
        strict: bool = False,
    ):
        self.env = Environment()
        self.functions: Dict[str, FunctionDeclaration] = {}
        self.output: List[str] = []
        self.max_steps = max_steps
        self.max_call_depth = max_call_depth
        self.strict = strict
        self.steps = 0
        self.depth = 0
        self.current: Optional[Node] = None  # last node charged a step
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def report_parse_failure(self, failure: ParseFailure):
        """Parser callback for statements dropped during recovery."""
        self.debug(f"discarded statement: {failure.message}")
        if self.strict:
            raise BrainrotError(ErrorInfo(failure.message, failure.line, failure.column, ErrorKind.SYNTAX))

    # Public API
    def run(self, program: Sequence[Statement]) -> ExecutionResult:
        """Execute top-level statements in a fresh environment."""
        self.env = Environment()
        self.functions = {}
        self.output = []
        self.steps = 0
        self.depth = 0
        self.current = None
        self.debug(f"run: {len(program)} statement(s)")
        try:
            self.execute_block(program)
        except BrainrotError as ex:
            self.debug(f"error: {ex.err}")
            return ExecutionResult(list(self.output), ex.err)
        except RecursionError:
            err = ErrorInfo('maximum recursion depth exceeded', *self.position(), ErrorKind.RESOURCE)
            self.debug(f"error: {err}")
            return ExecutionResult(list(self.output), err)
        except Exception as ex:
            err = ErrorInfo(f"{type(ex).__name__}: {ex}", *self.position(), ErrorKind.RUNTIME)
            self.debug(f"error: {err}")
            return ExecutionResult(list(self.output), err)
        self.debug(f"run finished after {self.steps} step(s), {len(self.output)} line(s)")
        return ExecutionResult(list(self.output))

    def position(self):
        if self.current is None:
            return 0, 0
        return self.current.line, self.current.column

    def tick(self, node: Node):
        self.steps += 1
        self.current = node
        if self.max_steps is not None and self.steps > self.max_steps:
            raise BrainrotError(ErrorInfo(
                f"step budget of {self.max_steps} exhausted", node.line, node.column, ErrorKind.RESOURCE))

    def execute_block(self, statements: Sequence[Statement]) -> Value:
        # a block evaluates to the result of its last statement
        result: Value = NIL
        for stmt in statements:
            result = self.execute(stmt)
        return result

    def execute(self, node: Statement) -> Value:
        self.tick(node)
        if isinstance(node, VariableDeclaration):
            value = self.evaluate(node.value)
            self.env.declare(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {type_name(value)} = {to_string(value)}")
            return NIL
        if isinstance(node, PrintStatement):
            value = self.evaluate(node.expression)
            self.output.append(to_string(value))
            return value
        if isinstance(node, WhileLoop):
            while True:
                self.tick(node)
                cond = self.evaluate(node.condition)
                truthy = self.is_truthy(cond)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)} -> {truthy}")
                if not truthy:
                    break
                self.execute_block(node.body)
            return NIL
        if isinstance(node, IfStatement):
            cond = self.evaluate(node.condition)
            truthy = self.is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute_block(node.then_body)
            if node.else_body is not None:
                return self.execute_block(node.else_body)
            return NIL
        if isinstance(node, FunctionDeclaration):
            self.functions[node.name] = node
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.parameters)})")
            return NIL
        if isinstance(node, EXPRESSION_TYPES):
            return self.evaluate(node)
        raise BrainrotError(ErrorInfo(
            f"unknown statement type {type(node).__name__}",
            getattr(node, 'line', 0), getattr(node, 'column', 0), ErrorKind.RUNTIME))

    def evaluate(self, node: Node) -> Value:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Identifier):
            return self.env.get(node.name, node.line, node.column)
        if isinstance(node, UnaryExpression):
            operand = self.evaluate(node.operand)
            return self.apply_unary_op(node, operand)
        if isinstance(node, BinaryExpression):
            # both sides always run, androt/orrot included
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node, left, right)
        if isinstance(node, CallExpression):
            return self.call_function(node)
        raise BrainrotError(ErrorInfo(
            f"unknown expression type {type(node).__name__}",
            getattr(node, 'line', 0), getattr(node, 'column', 0), ErrorKind.RUNTIME))

    def call_function(self, node: CallExpression) -> Value:
        func = self.functions.get(node.name)
        if func is None:
            raise BrainrotError(ErrorInfo(
                f"undefined function '{node.name}'", node.line, node.column, ErrorKind.RUNTIME))
        if self.max_call_depth is not None and self.depth >= self.max_call_depth:
            raise BrainrotError(ErrorInfo(
                f"call depth limit of {self.max_call_depth} exceeded calling '{node.name}'",
                node.line, node.column, ErrorKind.RESOURCE))
        if self.debug_level >= 2:
            self.debug(f"call {node.name} with {len(node.arguments)} argument(s) at depth {self.depth + 1}")
        snapshot = self.env.snapshot()
        self.depth += 1
        try:
            # Arguments are evaluated one at a time as their parameter is bound,
            # so later arguments already see earlier parameters. Extra
            # arguments are never evaluated.
            for index, param in enumerate(func.parameters):
                value = self.evaluate(node.arguments[index]) if index < len(node.arguments) else NIL
                self.env.declare(param, value)
            return self.execute_block(func.body)
        finally:
            self.depth -= 1
            self.env.restore(snapshot)

    def is_truthy(self, value: Any) -> bool:
        if value is NIL:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            return value != 0.0  # NaN is truthy
        if isinstance(value, str):
            return len(value) > 0
        return True

    def apply_unary_op(self, node: UnaryExpression, operand: Value) -> Value:
        op = node.operator
        if op in ('NOT', 'NOTROT'):
            return not self.is_truthy(operand)
        if op == 'MINUS':
            if is_number(operand):
                return -operand
            raise BrainrotError(ErrorInfo(
                f"bad operand type for unary -: {type_name(operand)}", node.line, node.column, ErrorKind.TYPE))
        raise BrainrotError(ErrorInfo(f"unknown operator {op}", node.line, node.column, ErrorKind.RUNTIME))

    def apply_binary_op(self, node: BinaryExpression, a: Value, b: Value) -> Value:
        op = node.operator
        numbers = is_number(a) and is_number(b)
        if op == 'PLUS':
            # If either operand is a string, concatenate the printed forms
            if isinstance(a, str) or isinstance(b, str):
                return to_string(a) + to_string(b)
            if numbers:
                return a + b
        elif op == 'MINUS':
            if numbers:
                return a - b
        elif op == 'MULTIPLY':
            if numbers:
                return a * b
        elif op == 'DIVIDE':
            if numbers:
                return divide(a, b)
        elif op in ('GT', 'LT'):
            if numbers or (isinstance(a, str) and isinstance(b, str)):
                return a > b if op == 'GT' else a < b
        elif op == 'EQ':
            return self.equal_values(a, b)
        elif op == 'NEQ':
            return not self.equal_values(a, b)
        elif op == 'ANDROT':
            return self.is_truthy(a) and self.is_truthy(b)
        elif op == 'ORROT':
            return self.is_truthy(a) or self.is_truthy(b)
        else:
            raise BrainrotError(ErrorInfo(f"unknown operator {op}", node.line, node.column, ErrorKind.RUNTIME))
        raise BrainrotError(ErrorInfo(
            f"unsupported operand types for {OPERATOR_SYMBOLS[op]}: {type_name(a)} and {type_name(b)}",
            node.line, node.column, ErrorKind.TYPE))

    def equal_values(self, a: Value, b: Value) -> bool:
        # strict: same tag and same value, no coercion
        if type_name(a) != type_name(b):
            return False
        return a == b


def execute(
    source: str,
    debug_level: int = 0,
    debug_file: Optional[str] = 'debug.txt',
    max_steps: Optional[int] = DEFAULT_MAX_STEPS,
    max_call_depth: Optional[int] = DEFAULT_MAX_CALL_DEPTH,
    strict: bool = False,
) -> ExecutionResult:
    """Run BrainRot source code and return its output lines and error, if any.

    This never raises for problems in the program itself. Statements that
    fail to parse are skipped unless `strict` is set, in which case the
    first of them is returned as a SYNTAX error.
    """
    with Interpreter(debug_level, debug_file, max_steps, max_call_depth, strict) as interpreter:
        try:
            program = parse_program(source, on_failure=interpreter.report_parse_failure)
        except BrainrotError as ex:
            interpreter.debug(f"error: {ex.err}")
            return ExecutionResult([], ex.err)
        except Exception as ex:
            return ExecutionResult([], ErrorInfo(f"{type(ex).__name__}: {ex}", 0, 0, ErrorKind.SYNTAX))
        return interpreter.run(program)


def run_file(file_path: str, **options) -> ExecutionResult:
    """Read a BrainRot source file and execute it."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return execute(source, **options)
