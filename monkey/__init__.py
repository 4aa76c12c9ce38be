# Monkey language package
# This package provides a lexer, a Pratt parser and a tree-walking evaluator for Monkey.
from .errors import MonkeyError, ParseError
from .evaluator import Evaluator, run_file, run_program
from .parser import parse_program

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Evaluator',
    'MonkeyError',
    'ParseError',
]
