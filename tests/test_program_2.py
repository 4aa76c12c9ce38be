from pathlib import Path

from monkey.evaluator import Evaluator
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_closures(capsys):
    with open(EXAMPLES / 'program_2.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    program, errors = parse_program(source)
    assert errors == []
    Evaluator().eval_program(program)
    out = capsys.readouterr().out.strip()
    assert out == '5\n14'
