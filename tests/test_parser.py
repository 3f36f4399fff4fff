import pytest

from brainrot.ast import (
    Literal, Identifier, UnaryExpression, BinaryExpression, CallExpression,
    VariableDeclaration, PrintStatement, WhileLoop, IfStatement, FunctionDeclaration,
)
from brainrot.lexer import tokenize
from brainrot.parser import Parser, ParseFailure, parse, parse_program


def parse_one(source):
    program = parse_program(source)
    assert len(program) == 1
    return program[0]


def parse_with_failures(source):
    failures = []
    program = parse_program(source, on_failure=failures.append)
    return program, failures


def test_multiplication_binds_tighter_than_addition():
    assert parse_one('mold x = 1 + 2 * 3;') == VariableDeclaration(
        'x',
        BinaryExpression('PLUS', Literal(1.0), BinaryExpression('MULTIPLY', Literal(2.0), Literal(3.0))),
    )


def test_binary_operators_are_left_associative():
    assert parse_one('1 - 2 - 3;') == BinaryExpression(
        'MINUS', BinaryExpression('MINUS', Literal(1.0), Literal(2.0)), Literal(3.0))


def test_grouping_overrides_precedence():
    assert parse_one('(1 + 2) * 3;') == BinaryExpression(
        'MULTIPLY', BinaryExpression('PLUS', Literal(1.0), Literal(2.0)), Literal(3.0))


def test_androt_binds_tighter_than_orrot():
    a, b, c = Identifier('a'), Identifier('b'), Identifier('c')
    assert parse_one('a orrot b androt c;') == BinaryExpression('ORROT', a, BinaryExpression('ANDROT', b, c))


def test_relational_binds_tighter_than_equality():
    a, b, c, d = (Identifier(n) for n in 'abcd')
    assert parse_one('a < b == c > d;') == BinaryExpression(
        'EQ', BinaryExpression('LT', a, b), BinaryExpression('GT', c, d))


def test_unary_operators_bind_tightest():
    assert parse_one('notrot a == b;') == BinaryExpression(
        'EQ', UnaryExpression('NOTROT', Identifier('a')), Identifier('b'))
    assert parse_one('-x * !y;') == BinaryExpression(
        'MULTIPLY', UnaryExpression('MINUS', Identifier('x')), UnaryExpression('NOT', Identifier('y')))


def test_print_statement_with_string():
    assert parse_one('rott "hi";') == PrintStatement(Literal('hi'))


def test_calls_with_and_without_arguments():
    assert parse_one('f();') == CallExpression('f', ())
    assert parse_one('f(1, x + 1);') == CallExpression(
        'f', (Literal(1.0), BinaryExpression('PLUS', Identifier('x'), Literal(1.0))))


def test_function_declaration():
    assert parse_one('fnrot add(a, b) { a + b; }') == FunctionDeclaration(
        'add', ('a', 'b'), (BinaryExpression('PLUS', Identifier('a'), Identifier('b')),))
    assert parse_one('fnrot nothing() {}') == FunctionDeclaration('nothing', (), ())


def test_if_with_and_without_else():
    assert parse_one('ifrot x { rott 1; }') == IfStatement(Identifier('x'), (PrintStatement(Literal(1.0)),), None)
    assert parse_one('ifrot x { rott 1; } elsed { rott 2; }') == IfStatement(
        Identifier('x'), (PrintStatement(Literal(1.0)),), (PrintStatement(Literal(2.0)),))


def test_nested_while_loops():
    node = parse_one('spin a { spin b { rott 1; } mold a = 0; }')
    assert node == WhileLoop(Identifier('a'), (
        WhileLoop(Identifier('b'), (PrintStatement(Literal(1.0)),)),
        VariableDeclaration('a', Literal(0.0)),
    ))


def test_several_statements():
    program = parse_program('mold x = 1;\nrott x;\nx;')
    assert program == [
        VariableDeclaration('x', Literal(1.0)),
        PrintStatement(Identifier('x')),
        Identifier('x'),
    ]


def test_nodes_carry_positions():
    node = parse_one('\n  mold x = 1 + 2;')
    assert (node.line, node.column) == (2, 3)
    # binary expressions sit at their operator
    assert (node.value.line, node.value.column) == (2, 14)
    assert (node.value.left.line, node.value.left.column) == (2, 12)


def test_malformed_statement_is_skipped_up_to_semicolon():
    program, failures = parse_with_failures('mold = 5; rott "ok";')
    assert program == [PrintStatement(Literal('ok'))]
    assert len(failures) == 1
    assert (failures[0].line, failures[0].column) == (1, 6)
    assert "ASSIGN" in failures[0].message


def test_recovery_skips_the_offending_token_first():
    # the failure is at the second rott, which is skipped along with its statement
    program, failures = parse_with_failures('rott 1 rott 2; rott 3;')
    assert program == [PrintStatement(Literal(3.0))]
    assert len(failures) == 1


def test_recovery_stops_before_statement_keyword():
    program, failures = parse_with_failures('rott 1 + ) 2 spin 0 { } rott "ok";')
    assert program == [WhileLoop(Literal(0.0)), PrintStatement(Literal('ok'))]
    assert len(failures) == 1


def test_missing_semicolon_at_end_of_input():
    program, failures = parse_with_failures('rott 1')
    assert program == []
    assert len(failures) == 1
    assert failures[0].message == 'unexpected end of input at line 1, column 7'


def test_reserved_keyword_without_statement_form_fails():
    program, failures = parse_with_failures('retrot 1; rott 2;')
    assert program == [PrintStatement(Literal(2.0))]
    assert len(failures) == 1
    assert failures[0].column == 1


def test_parse_without_callback_drops_failures_silently():
    assert parse_program(') ) rott 1;') == [PrintStatement(Literal(1.0))]


def test_parse_statement_reports_failure_value():
    parser = Parser(tokenize('rott ;'))
    result = parser.parse_statement(0)
    assert isinstance(result, ParseFailure)
    assert result.position == 1


def test_parse_requires_end_token():
    with pytest.raises(ValueError):
        parse(tokenize('rott 1;')[:-1])
