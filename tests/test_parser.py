import pytest

from monkey.ast import (
    Program, LetStmt, ReturnStmt, ExprStmt, Block, Ident, IntegerLit, StringLit,
    BooleanLit, PrefixOp, InfixOp, IfExpr, FunctionLit, Call, HashLit,
)
from monkey.parser import parse_program


def parse_ok(source):
    program, errors = parse_program(source)
    assert errors == []
    return program


def test_let_statements():
    program = parse_ok('let x = 5; let y = true; let foobar = y;')
    assert program.statements == [
        LetStmt(Ident('x'), IntegerLit(5)),
        LetStmt(Ident('y'), BooleanLit(True)),
        LetStmt(Ident('foobar'), Ident('y')),
    ]


def test_return_statements():
    program = parse_ok('return 5; return x + 1;')
    assert program.statements == [
        ReturnStmt(IntegerLit(5)),
        ReturnStmt(InfixOp('+', Ident('x'), IntegerLit(1))),
    ]


def test_literal_expressions():
    program = parse_ok('foobar; 5; "hello world"; false; -15; !true;')
    assert program.statements == [
        ExprStmt(Ident('foobar')),
        ExprStmt(IntegerLit(5)),
        ExprStmt(StringLit('hello world')),
        ExprStmt(BooleanLit(False)),
        ExprStmt(PrefixOp('-', IntegerLit(15))),
        ExprStmt(PrefixOp('!', BooleanLit(True))),
    ]


@pytest.mark.parametrize('source, expected', [
    ('-a * b', '((-a) * b)'),
    ('!-a', '(!(-a))'),
    ('a + b + c', '((a + b) + c)'),
    ('a + b - c', '((a + b) - c)'),
    ('a * b * c', '((a * b) * c)'),
    ('a * b / c', '((a * b) / c)'),
    ('a + b / c', '(a + (b / c))'),
    ('a + b * c + d / e - f', '(((a + (b * c)) + (d / e)) - f)'),
    ('3 + 4; -5 * 5', '(3 + 4)\n((-5) * 5)'),
    ('5 > 4 == 3 < 4', '((5 > 4) == (3 < 4))'),
    ('5 < 4 != 3 > 4', '((5 < 4) != (3 > 4))'),
    ('3 + 4 * 5 == 3 * 1 + 4 * 5', '((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))'),
    ('3 > 5 == false', '((3 > 5) == false)'),
    ('1 + (2 + 3) + 4', '((1 + (2 + 3)) + 4)'),
    ('(5 + 5) * 2', '((5 + 5) * 2)'),
    ('2 / (5 + 5)', '(2 / (5 + 5))'),
    ('-(5 + 5)', '(-(5 + 5))'),
    ('!(true == true)', '(!(true == true))'),
    ('a + add(b * c) + d', '((a + add((b * c))) + d)'),
    ('add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))', 'add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))'),
    ('add(a + b + c * d / f + g)', 'add((((a + b) + ((c * d) / f)) + g))'),
    ('a * [1, 2, 3, 4][b * c] * d', '((a * ([1, 2, 3, 4][(b * c)])) * d)'),
    ('add(a * b[2], b[1], 2 * [1, 2][1])', 'add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))'),
])
def test_operator_precedence(source, expected):
    program = parse_ok(source)
    assert str(program) == expected + '\n'


def test_if_else_expression():
    program = parse_ok('if (x < y) { x } else { y }')
    assert program.statements == [ExprStmt(IfExpr(
        InfixOp('<', Ident('x'), Ident('y')),
        Block([ExprStmt(Ident('x'))]),
        Block([ExprStmt(Ident('y'))]),
    ))]


def test_if_without_else():
    program = parse_ok('if (x) { x }')
    assert program.statements[0].expr.alternative is None


def test_function_literal():
    program = parse_ok('fn(x, y) { x + y; }')
    assert program.statements == [ExprStmt(FunctionLit(
        [Ident('x'), Ident('y')],
        Block([ExprStmt(InfixOp('+', Ident('x'), Ident('y')))]),
    ))]


@pytest.mark.parametrize('source, params', [
    ('fn() {};', []),
    ('fn(x) {};', ['x']),
    ('fn(x, y, z) {};', ['x', 'y', 'z']),
])
def test_function_parameters(source, params):
    program = parse_ok(source)
    assert [p.name for p in program.statements[0].expr.params] == params


def test_call_expression():
    program = parse_ok('add(1, 2 * 3, 4 + 5);')
    assert program.statements == [ExprStmt(Call(Ident('add'), [
        IntegerLit(1),
        InfixOp('*', IntegerLit(2), IntegerLit(3)),
        InfixOp('+', IntegerLit(4), IntegerLit(5)),
    ]))]


def test_hash_literals():
    program = parse_ok('{"one": 1, "two": 2}; {}')
    assert program.statements == [
        ExprStmt(HashLit([(StringLit('one'), IntegerLit(1)), (StringLit('two'), IntegerLit(2))])),
        ExprStmt(HashLit([])),
    ]


def test_hash_literal_with_expressions():
    program = parse_ok('{"one": 0 + 1, true: 10 - 8}')
    assert str(program) == '{"one": (0 + 1), true: (10 - 8)}\n'


def test_let_errors_are_all_reported():
    program, errors = parse_program('let x 5; let = 10; let 838383;')
    assert errors == [
        'expected next token to be ASSIGN, got INT instead',
        'expected next token to be IDENT, got ASSIGN instead',
        'expected next token to be IDENT, got INT instead',
    ]
    assert not program.need_next()


def test_no_prefix_rule():
    _, errors = parse_program(')')
    assert errors == ['no prefix parse function for RPAREN found']


def test_integer_out_of_range():
    _, errors = parse_program('9223372036854775808')
    assert errors == ['could not parse 9223372036854775808 as integer']
    program = parse_ok('9223372036854775807')
    assert program.statements == [ExprStmt(IntegerLit(9223372036854775807))]


def test_failed_block_statement_drops_enclosing_statement():
    program, errors = parse_program('if (true) { 1 + }; let y = 2;')
    assert errors == ['no prefix parse function for RBRACE found']
    assert [str(s) for s in program.statements] == ['let y = 2;']
    assert not program.need_next()


def test_recovery_skips_nested_blocks():
    program, errors = parse_program('if (a) { if (b) { 1 + }; x; }; let y = 2;')
    assert errors == ['no prefix parse function for RBRACE found']
    assert [str(s) for s in program.statements] == ['let y = 2;']


def test_failed_function_body_is_dropped():
    program, errors = parse_program('let f = fn(x) { let = 1; let 2; x }; f')
    assert errors == [
        'expected next token to be IDENT, got ASSIGN instead',
        'expected next token to be IDENT, got INT instead',
    ]
    assert [str(s) for s in program.statements] == ['f']


@pytest.mark.parametrize('source', [
    'let f = fn(x) {',
    'let x = ',
    '5 +',
    'add(1, ',
    'if (x) { 1 } else {',
    '{"a": ',
])
def test_unfinished_input_needs_next(source):
    program, errors = parse_program(source)
    assert errors
    assert program.need_next()


@pytest.mark.parametrize('source', ['let x = 5;', ')', 'let x 5;'])
def test_finished_input_does_not_need_next(source):
    program, _ = parse_program(source)
    assert not program.need_next()


def test_empty_program():
    program = parse_ok('')
    assert program == Program([])
