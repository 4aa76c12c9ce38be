import json

import pytest

from monkey.ast_json import ast_to_obj, ast_from_obj
from monkey.parser import parse_program


def test_ast_to_obj_shape():
    program, _ = parse_program('-5')
    assert ast_to_obj(program) == {
        "type": "Program",
        "statements": [{
            "type": "ExprStmt",
            "expr": {"type": "PrefixOp", "op": "-", "operand": {"type": "IntegerLit", "value": 5}},
        }],
    }


def test_json_round_trip_preserves_program():
    source = '''
    let fib = fn(n) { if (n < 2) { return n; } else { fib(n - 1) + fib(n - 2) } };
    let h = {"a": [1, true, "x"], 2: fib};
    h["a"][0] + fib(3);
    '''
    program, errors = parse_program(source)
    assert errors == []
    data = json.loads(json.dumps(ast_to_obj(program)))
    assert ast_from_obj(data) == program


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "WhileStmt"})


def test_unsupported_object():
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(TypeError):
        ast_from_obj([1, 2])
