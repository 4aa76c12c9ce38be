from typing import Any, Dict, List

from monkey.builtin_function import BuiltinFunction
from monkey.types import (
    ArrayVal, ErrorVal, ExitVal, IntegerVal, StringVal, NULL, type_name, to_string,
)


def _require_array(name: str, value: Any) -> Any:
    """Return an ErrorVal unless `value` is an array, else None."""
    if not isinstance(value, ArrayVal):
        return ErrorVal(f"argument to `{name}` must be ARRAY, got {type_name(value)}")
    return None


def populate_core_builtins() -> Dict[str, BuiltinFunction]:
    builtins: Dict[str, BuiltinFunction] = {}

    def monkey_len(args: List[Any], evaluator: Any) -> Any:
        value = args[0]
        if isinstance(value, StringVal):
            return IntegerVal(len(value.value))
        if isinstance(value, ArrayVal):
            return IntegerVal(len(value.elements))
        return ErrorVal(f"argument to `len` not supported, got {type_name(value)}")

    def monkey_first(args: List[Any], evaluator: Any) -> Any:
        err = _require_array('first', args[0])
        if err is not None:
            return err
        elements = args[0].elements
        return elements[0] if elements else NULL

    def monkey_last(args: List[Any], evaluator: Any) -> Any:
        err = _require_array('last', args[0])
        if err is not None:
            return err
        elements = args[0].elements
        return elements[-1] if elements else NULL

    def monkey_rest(args: List[Any], evaluator: Any) -> Any:
        err = _require_array('rest', args[0])
        if err is not None:
            return err
        elements = args[0].elements
        if not elements:
            return NULL
        return ArrayVal(list(elements[1:]))

    def monkey_push(args: List[Any], evaluator: Any) -> Any:
        err = _require_array('push', args[0])
        if err is not None:
            return err
        # the receiver is never modified
        return ArrayVal(args[0].elements + [args[1]])

    def monkey_puts(args: List[Any], evaluator: Any) -> Any:
        for value in args:
            print(value.value if isinstance(value, StringVal) else to_string(value))
        return NULL

    def monkey_exit(args: List[Any], evaluator: Any) -> Any:
        if len(args) > 1:
            return ErrorVal(f"wrong number of arguments. got={len(args)}, want=1")
        if not args:
            return ExitVal(0)
        code = args[0]
        if not isinstance(code, IntegerVal):
            return ErrorVal(f"argument to `exit` must be INTEGER, got {type_name(code)}")
        return ExitVal(code.value)

    builtins['len'] = BuiltinFunction('len', 1, monkey_len)
    builtins['first'] = BuiltinFunction('first', 1, monkey_first)
    builtins['last'] = BuiltinFunction('last', 1, monkey_last)
    builtins['rest'] = BuiltinFunction('rest', 1, monkey_rest)
    builtins['push'] = BuiltinFunction('push', 2, monkey_push)
    builtins['puts'] = BuiltinFunction('puts', None, monkey_puts)
    builtins['exit'] = BuiltinFunction('exit', None, monkey_exit)

    return builtins
