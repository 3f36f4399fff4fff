"""Parser for the BrainRot language.

Parsing works on the token list produced by :func:`brainrot.lexer.tokenize`
and proceeds one top-level statement at a time:

1. **Statement parsing**: the tokens of a statement are fed one by one
   into a Lark LALR parser driven interactively, whose grammar encodes
   the statement forms and the operator precedence levels. A statement
   is complete when the next token can no longer extend it and the
   tokens fed so far form a whole statement. The resulting parse tree
   is transformed into AST nodes by :class:`ASTTransformer`.

2. **Recovery**: a statement that cannot be completed yields a
   :class:`ParseFailure` instead of a node. The failure is handed to the
   optional ``on_failure`` callback and otherwise dropped; parsing then
   skips past the offending token up to the next ``;`` or statement
   keyword and carries on. A malformed statement therefore disappears
   from the program together with its error, and the rest of the source
   still runs.

The `parse_program` function is the public entry point and returns the
list of top-level statements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from lark import Lark, Transformer
from lark import Token as LarkToken
from lark.exceptions import UnexpectedInput, VisitError
from lark.lexer import Lexer

from .ast import (
    Literal, Identifier, UnaryExpression, BinaryExpression, CallExpression,
    VariableDeclaration, PrintStatement, WhileLoop, IfStatement, FunctionDeclaration,
    Statement,
)
from .errors import BrainrotError, ErrorInfo, ErrorKind
from .lexer import Token, tokenize, KEYWORD, OPERATOR, DELIMITER, END


BRAINROT_GRAMMAR = r"""
    start: statement

    // Statements
    ?statement: var_decl
              | print_stmt
              | while_loop
              | if_stmt
              | func_decl
              | expr_stmt

    var_decl: MOLD IDENTIFIER ASSIGN expression SEMICOLON
    print_stmt: ROTT expression SEMICOLON
    while_loop: SPIN expression body
    if_stmt: IFROT expression body (ELSED body)?
    func_decl: FNROT IDENTIFIER LPAREN params? RPAREN body
    params: IDENTIFIER (COMMA IDENTIFIER)*
    body: LBRACE statement* RBRACE
    expr_stmt: expression SEMICOLON

    // Expressions, lowest precedence first
    ?expression: logic_or
    ?logic_or: logic_and (ORROT logic_and)*
    ?logic_and: equality (ANDROT equality)*
    ?equality: relational ((EQ | NEQ) relational)*
    ?relational: additive ((GT | LT) additive)*
    ?additive: multiplicative ((PLUS | MINUS) multiplicative)*
    ?multiplicative: unary ((MULTIPLY | DIVIDE) unary)*
    ?unary: (NOT | NOTROT | MINUS) unary -> unary_op
          | call
    ?call: primary
         | IDENTIFIER LPAREN arguments? RPAREN -> call_expr
    arguments: expression (COMMA expression)*
    ?primary: NUMBER -> number
            | STRING -> string
            | IDENTIFIER -> identifier
            | LPAREN expression RPAREN -> group

    // Tokens come from brainrot.lexer
    %declare MOLD ROTT SPIN IFROT ELSED FNROT ANDROT ORROT NOTROT
    %declare IDENTIFIER NUMBER STRING
    %declare PLUS MINUS MULTIPLY DIVIDE ASSIGN GT LT NOT EQ NEQ
    %declare LPAREN RPAREN LBRACE RBRACE SEMICOLON COMMA
"""

# Keywords at which recovery stops skipping.
SYNC_KEYWORDS = frozenset({'mold', 'rott', 'spin', 'ifrot', 'fnrot'})

PUNCTUATION = frozenset({'ASSIGN', 'LPAREN', 'RPAREN', 'LBRACE', 'RBRACE', 'SEMICOLON', 'COMMA'})


class TokenStreamLexer(Lexer):
    """Lexer stand-in: tokens are fed to the interactive parser directly."""
    def __init__(self, lexer_conf):
        pass

    def lex(self, data):
        return iter(())


BRAINROT_PARSER = Lark(
    BRAINROT_GRAMMAR,
    parser='lalr',
    lexer=TokenStreamLexer,
    maybe_placeholders=False,
)


def terminal_name(token: Token) -> str:
    """Return the grammar terminal a lexer token is fed as."""
    if token.kind == KEYWORD:
        return token.text.upper()
    if token.kind in (OPERATOR, DELIMITER):
        return token.text
    return token.kind


def to_lark_token(token: Token) -> LarkToken:
    return LarkToken(terminal_name(token), token.text, line=token.line, column=token.column)


def describe(token: Token) -> str:
    if token.kind == END:
        return f"unexpected end of input at line {token.line}, column {token.column}"
    return f"unexpected {token.kind.lower()} {token.text!r} at line {token.line}, column {token.column}"


def _significant(items) -> list:
    # drop punctuation tokens, keep keywords/operators/names and nodes
    return [item for item in items if not (isinstance(item, LarkToken) and item.type in PUNCTUATION)]


class ASTTransformer(Transformer):
    """Transforms the parse tree of one statement into AST nodes."""

    def start(self, items):
        return items[0]

    def var_decl(self, items):
        keyword, name, value = _significant(items)
        return VariableDeclaration(str(name), value, line=keyword.line, column=keyword.column)

    def print_stmt(self, items):
        keyword, expression = _significant(items)
        return PrintStatement(expression, line=keyword.line, column=keyword.column)

    def while_loop(self, items):
        keyword, condition, body = _significant(items)
        return WhileLoop(condition, body, line=keyword.line, column=keyword.column)

    def if_stmt(self, items):
        parts = _significant(items)
        keyword, condition, then_body = parts[:3]
        # parts[3] is the ELSED keyword when an else branch is present
        else_body = parts[4] if len(parts) > 3 else None
        return IfStatement(condition, then_body, else_body, line=keyword.line, column=keyword.column)

    def func_decl(self, items):
        parts = _significant(items)
        keyword, name = parts[0], parts[1]
        params = parts[2] if len(parts) == 4 else ()
        return FunctionDeclaration(str(name), params, parts[-1], line=keyword.line, column=keyword.column)

    def params(self, items):
        return tuple(str(token) for token in _significant(items))

    def body(self, items):
        return tuple(_significant(items))

    def expr_stmt(self, items):
        return _significant(items)[0]

    # Expressions
    def binary_expr(self, items):
        # items pattern: operand (operator operand)*, folded to the left
        left = items[0]
        for i in range(1, len(items), 2):
            operator = items[i]
            left = BinaryExpression(operator.type, left, items[i + 1], line=operator.line, column=operator.column)
        return left

    logic_or = binary_expr
    logic_and = binary_expr
    equality = binary_expr
    relational = binary_expr
    additive = binary_expr
    multiplicative = binary_expr

    def unary_op(self, items):
        operator, operand = items
        return UnaryExpression(operator.type, operand, line=operator.line, column=operator.column)

    def call_expr(self, items):
        parts = _significant(items)
        name = parts[0]
        arguments = parts[1] if len(parts) > 1 else ()
        return CallExpression(str(name), arguments, line=name.line, column=name.column)

    def arguments(self, items):
        return tuple(_significant(items))

    def number(self, items):
        token = items[0]
        return Literal(float(token), line=token.line, column=token.column)

    def string(self, items):
        token = items[0]
        return Literal(str(token), line=token.line, column=token.column)

    def identifier(self, items):
        token = items[0]
        return Identifier(str(token), line=token.line, column=token.column)

    def group(self, items):
        return _significant(items)[0]


@dataclass(frozen=True)
class ParsedStatement:
    node: Statement
    end: int  # index of the first token after the statement


@dataclass(frozen=True)
class ParseFailure:
    message: str
    position: int  # index of the offending token
    line: int
    column: int


StatementResult = Union[ParsedStatement, ParseFailure]


class Parser:
    def __init__(self, tokens: List[Token], on_failure: Optional[Callable[[ParseFailure], None]] = None):
        if not tokens or tokens[-1].kind != END:
            raise ValueError("token sequence must end with an END token")
        self.tokens = tokens
        self.pos = 0
        self.on_failure = on_failure

    def at_end(self) -> bool:
        return self.tokens[self.pos].kind == END

    def parse_program(self) -> List[Statement]:
        statements: List[Statement] = []
        while not self.at_end():
            result = self.parse_statement(self.pos)
            if isinstance(result, ParseFailure):
                if self.on_failure is not None:
                    self.on_failure(result)
                self.pos = self.synchronize(result.position)
            else:
                statements.append(result.node)
                self.pos = result.end
        return statements

    def parse_statement(self, start: int) -> StatementResult:
        interactive = BRAINROT_PARSER.parse_interactive('')
        pos = start
        last: Optional[LarkToken] = None
        while True:
            token = self.tokens[pos]
            if token.kind != END:
                lark_token = to_lark_token(token)
                try:
                    interactive.feed_token(lark_token)
                except UnexpectedInput:
                    pass
                else:
                    last = lark_token
                    pos += 1
                    continue
            # the token cannot extend the statement: either it is complete or broken here
            if last is not None:
                try:
                    tree = interactive.feed_eof(last)
                except UnexpectedInput:
                    pass
                else:
                    return ParsedStatement(self.build(tree, start), pos)
            return ParseFailure(describe(token), pos, token.line, token.column)

    def build(self, tree, start: int) -> Statement:
        try:
            return ASTTransformer().transform(tree)
        except (RecursionError, VisitError) as e:
            # lark wraps errors raised inside transformer callbacks
            if isinstance(e, VisitError) and not isinstance(e.orig_exc, RecursionError):
                raise
            first = self.tokens[start]
            raise BrainrotError(ErrorInfo(
                "statement nests too deeply", first.line, first.column, ErrorKind.RESOURCE)) from None

    def synchronize(self, position: int) -> int:
        """Return the index at which parsing resumes after a failure at `position`."""
        pos = position
        if self.tokens[pos].kind != END:
            pos += 1
        while self.tokens[pos].kind != END:
            previous = self.tokens[pos - 1]
            if previous.kind == DELIMITER and previous.text == 'SEMICOLON':
                return pos
            current = self.tokens[pos]
            if current.kind == KEYWORD and current.text in SYNC_KEYWORDS:
                return pos
            pos += 1
        return pos


def parse(tokens: List[Token], on_failure: Optional[Callable[[ParseFailure], None]] = None) -> List[Statement]:
    """Parse a token list into top-level statements, recovering from bad ones."""
    return Parser(tokens, on_failure).parse_program()


def parse_program(source: str, on_failure: Optional[Callable[[ParseFailure], None]] = None) -> List[Statement]:
    """Tokenize and parse BrainRot source code into a list of statements."""
    return parse(tokenize(source), on_failure)
