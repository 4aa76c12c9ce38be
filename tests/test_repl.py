from monkey.evaluator import Evaluator
from monkey.repl import Shell
from monkey.types import IntegerVal


def test_prints_values(capsys):
    shell = Shell()
    shell.onecmd('let x = 5;')
    shell.onecmd('x * 2')
    assert capsys.readouterr().out == '5\n10\n'


def test_null_results_are_not_printed(capsys):
    shell = Shell()
    shell.onecmd('puts("hi")')
    shell.onecmd('if (false) { 1 }')
    assert capsys.readouterr().out == 'hi\n'


def test_continuation_lines(capsys):
    shell = Shell()
    shell.onecmd('let add = fn(a, b) {')
    assert shell.prompt == Shell.secondary_prompt
    shell.onecmd('a + b')
    assert shell.prompt == Shell.secondary_prompt
    shell.onecmd('};')
    assert shell.prompt == Shell._tmp_prompt
    capsys.readouterr()
    shell.onecmd('add(2, 3)')
    assert capsys.readouterr().out == '5\n'


def test_syntax_errors(capsys):
    shell = Shell()
    shell.onecmd('let = 1;')
    assert capsys.readouterr().out == 'parser errors:\n\texpected next token to be IDENT, got ASSIGN instead\n'
    assert shell.prompt == Shell._tmp_prompt


def test_runtime_errors(capsys):
    shell = Shell()
    shell.onecmd('5 + true')
    assert capsys.readouterr().out == 'type mismatch: INTEGER + BOOLEAN\n'


def test_fatal_faults_do_not_end_session(capsys):
    shell = Shell()
    assert shell.onecmd('1 / 0') is None
    assert capsys.readouterr().out.startswith('Runtime error:')


def test_shared_evaluator():
    evaluator = Evaluator()
    shell = Shell(evaluator)
    shell.onecmd('let answer = 42;')
    assert evaluator.global_env.get('answer') == IntegerVal(42)


def test_exit_ends_loop():
    shell = Shell()
    assert shell.onecmd('exit(2)') is True
    assert shell.exit_code == 2


def test_eof_and_empty_lines(capsys):
    shell = Shell()
    assert shell.onecmd('') is None
    assert shell.onecmd('EOF') is True


def test_lines_starting_with_command_names_are_evaluated(capsys):
    shell = Shell()
    shell.onecmd('let help = 41;')
    shell.onecmd('help + 1')
    shell.onecmd('help')
    assert capsys.readouterr().out == '41\n42\n41\n'
