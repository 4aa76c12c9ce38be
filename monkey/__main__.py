"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv]                 start the REPL
    python -m monkey [-v...] <program_file>
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. The exit status is 0 on success, the code
passed to `exit()`, or 1 on syntax errors, runtime errors and missing files.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import MonkeyError
from .evaluator import RECURSION_LIMIT, Evaluator
from .parser import parse_program
from .repl import Shell
from .types import ErrorVal, ExitVal


def _report_parse_errors(errors: List[str]) -> None:
    print("parser errors:", file=sys.stderr)
    for error in errors:
        print(f"\t{error}", file=sys.stderr)


def _read_program(path: Path) -> Program:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    program, errors = parse_program(source)
    if errors:
        _report_parse_errors(errors)
        sys.exit(1)
    return program


def _execute(program: Program, debug_level: int) -> None:
    evaluator = Evaluator(debug_level=debug_level)
    try:
        result = evaluator.eval_program(program)
    except (MonkeyError, ArithmeticError, RecursionError) as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        evaluator.close()
    if isinstance(result, ErrorVal):
        print(result.message, file=sys.stderr)
        sys.exit(1)
    if isinstance(result, ExitVal):
        sys.exit(result.code)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='monkey', description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to execute')
    args = parser.parse_args(argv)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = _read_program(program_file)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        try:
            ast_program = ast_from_obj(data)
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        _execute(ast_program, args.v)
        return

    # No program: interactive mode
    if not args.program:
        evaluator = Evaluator(debug_level=args.v)
        shell = Shell(evaluator)
        try:
            shell.cmdloop()
        finally:
            evaluator.close()
        if shell.exit_code:
            sys.exit(shell.exit_code)
        return

    _execute(_read_program(Path(args.program)), args.v)


if __name__ == '__main__':
    main()
