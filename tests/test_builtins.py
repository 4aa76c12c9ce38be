import pytest

from monkey.evaluator import Evaluator
from monkey.parser import parse_program
from monkey.types import ArrayVal, ErrorVal, ExitVal, IntegerVal, NULL, to_string


def run(source, evaluator=None):
    program, errors = parse_program(source)
    assert errors == []
    if evaluator is None:
        evaluator = Evaluator()
    return evaluator.eval_program(program)


@pytest.mark.parametrize('source, expected', [
    ('len("")', IntegerVal(0)),
    ('len("four")', IntegerVal(4)),
    ('len("hello world")', IntegerVal(11)),
    ('len([1, 2, 3])', IntegerVal(3)),
    ('len([])', IntegerVal(0)),
    ('len(1)', ErrorVal('argument to `len` not supported, got INTEGER')),
    ('len("one", "two")', ErrorVal('wrong number of arguments. got=2, want=1')),
    ('first([1, 2, 3])', IntegerVal(1)),
    ('first([])', NULL),
    ('first(1)', ErrorVal('argument to `first` must be ARRAY, got INTEGER')),
    ('last([1, 2, 3])', IntegerVal(3)),
    ('last([])', NULL),
    ('last("abc")', ErrorVal('argument to `last` must be ARRAY, got STRING')),
    ('rest([])', NULL),
    ('push(1, 1)', ErrorVal('argument to `push` must be ARRAY, got INTEGER')),
    ('push([1])', ErrorVal('wrong number of arguments. got=1, want=2')),
])
def test_builtin_functions(source, expected):
    assert run(source) == expected


def test_rest():
    result = run('rest([1, 2, 3])')
    assert isinstance(result, ArrayVal)
    assert result.elements == [IntegerVal(2), IntegerVal(3)]


def test_push_leaves_receiver_unchanged():
    evaluator = Evaluator()
    run('let a = [1]; let b = push(a, 2);', evaluator)
    assert evaluator.global_env.get('a').elements == [IntegerVal(1)]
    assert evaluator.global_env.get('b').elements == [IntegerVal(1), IntegerVal(2)]


def test_puts(capsys):
    assert run('puts("hello", 1, [1, "a"], true)') == NULL
    assert capsys.readouterr().out == 'hello\n1\n[1, "a"]\ntrue\n'


@pytest.mark.parametrize('source, expected', [
    ('exit()', ExitVal(0)),
    ('exit(4)', ExitVal(4)),
    ('exit("x")', ErrorVal('argument to `exit` must be INTEGER, got STRING')),
    ('exit(1, 2)', ErrorVal('wrong number of arguments. got=2, want=1')),
])
def test_exit(source, expected):
    assert run(source) == expected


def test_builtin_rendering():
    assert to_string(run('len')) == '<builtin len>'


def test_user_bindings_shadow_builtins():
    assert run('let len = fn(x) { 42 }; len([1])') == IntegerVal(42)


def test_import_binds_into_caller_scope(tmp_path):
    lib = tmp_path / 'lib.monkey'
    lib.write_text('let double = fn(x) { x * 2 };', encoding='utf-8')
    assert run(f'import("{lib}"); double(21)') == IntegerVal(42)


def test_import_yields_last_value(tmp_path):
    lib = tmp_path / 'value.monkey'
    lib.write_text('1 + 2', encoding='utf-8')
    assert run(f'import("{lib}")') == IntegerVal(3)


def test_import_inside_function_stays_local(tmp_path):
    lib = tmp_path / 'z.monkey'
    lib.write_text('let z = 5;', encoding='utf-8')
    evaluator = Evaluator()
    assert run(f'let f = fn() {{ import("{lib}"); z }}; f()', evaluator) == IntegerVal(5)
    assert run('z', evaluator) == ErrorVal('identifier not found: z')


def test_import_missing_file(tmp_path):
    missing = tmp_path / 'nope.monkey'
    assert run(f'import("{missing}")') == ErrorVal(f'could not import "{missing}": file not found')


def test_import_directory(tmp_path):
    assert run(f'import("{tmp_path}")') == ErrorVal(f'could not import "{tmp_path}": is a directory')


def test_import_parse_errors(tmp_path):
    lib = tmp_path / 'bad.monkey'
    lib.write_text('let = 1;', encoding='utf-8')
    assert run(f'import("{lib}")') == ErrorVal(
        f'parser errors in "{lib}": expected next token to be IDENT, got ASSIGN instead')


def test_circular_import(tmp_path):
    a = tmp_path / 'a.monkey'
    b = tmp_path / 'b.monkey'
    a.write_text(f'import("{b}");', encoding='utf-8')
    b.write_text(f'import("{a}");', encoding='utf-8')
    evaluator = Evaluator()
    assert run(f'import("{a}")', evaluator) == ErrorVal(f'circular import: "{a}"')
    assert evaluator.importing == []


def test_import_requires_string():
    assert run('import(1)') == ErrorVal('argument to `import` must be STRING, got INTEGER')
