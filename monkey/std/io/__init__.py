from .basic_io import BasicIO
from monkey.builtin_function import BuiltinFunction
from monkey.errors import MonkeyIOError
from monkey.parser import parse_program
from monkey.types import ErrorVal, StringVal, type_name
from typing import Any, Dict, List


def populate_io_builtins() -> Dict[str, BuiltinFunction]:
    basic_io = BasicIO()

    def monkey_import(args: List[Any], evaluator: Any) -> Any:
        """Run another source file in the evaluator's current environment."""
        path = args[0]
        if not isinstance(path, StringVal):
            return ErrorVal(f"argument to `import` must be STRING, got {type_name(path)}")
        filename = path.value
        resolved = basic_io.resolve(filename)
        if resolved in evaluator.importing:
            return ErrorVal(f'circular import: "{filename}"')
        try:
            source = basic_io.read_source(filename)
        except MonkeyIOError as e:
            return ErrorVal(f'could not import "{filename}": {e}')

        program, errors = parse_program(source)
        if errors:
            return ErrorVal(f'parser errors in "{filename}": ' + '; '.join(errors))

        evaluator.debug(f"import {resolved}")
        evaluator.importing.append(resolved)
        try:
            return evaluator.eval_program(program)
        finally:
            evaluator.importing.pop()

    return {
        'import': BuiltinFunction('import', 1, monkey_import),
    }
