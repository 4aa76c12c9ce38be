"""Runtime values of the Monkey language.

Every value the evaluator produces is one of the classes below. The set is
closed: `type_name` and `to_string` dispatch over all of them, and the
evaluator treats anything else as an internal error.

Integers, strings and booleans are immutable values that compare and hash
by content; they are the only kinds that can be used as hash keys. Errors
and return wrappers compare by content too (so tests can assert on them) but
are not hashable. Functions, arrays and hashes are reference values: binding
one to a second name shares it rather than copying it.

`ReturnVal`, `ErrorVal` and `ExitVal` are control values. They flow through
the evaluator like any other value and each evaluation step checks for them
explicitly; none of them is a Python exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .ast import Block, Ident
from .environment import Environment


I64_MIN = -2 ** 63
I64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class IntegerVal:
    value: int

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True)
class StringVal:
    value: str

    def __repr__(self) -> str:
        return f"String({self.value!r})"


@dataclass(frozen=True)
class BooleanVal:
    value: bool

    def __repr__(self) -> str:
        return f"Boolean({self.value})"


@dataclass
class NullVal:
    """Marker object for the Monkey `null` value."""
    def __repr__(self) -> str:
        return 'Null'


@dataclass
class ReturnVal:
    """Wraps the operand of a `return` until the enclosing call unwraps it."""
    value: Any

    def __repr__(self) -> str:
        return f"Return({self.value!r})"


@dataclass
class ErrorVal:
    """A runtime error.

    Errors are first-class values: they propagate by being returned from
    every evaluation step until they reach the top of the program.
    """
    message: str

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


@dataclass
class ExitVal:
    """Request to terminate, produced by the `exit` built-in.

    The evaluator stops at it like at an error; whoever embeds the
    evaluator decides how to terminate.
    """
    code: int = 0


@dataclass(eq=False)
class FunctionVal:
    """A user-defined function together with its defining environment."""
    params: List[Ident]
    body: Block
    env: Environment = field(repr=False)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<function fn({', '.join(p.name for p in self.params)})>"


@dataclass(eq=False)
class ArrayVal:
    elements: List[Any]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Array({self.elements!r})"


@dataclass(eq=False)
class HashVal:
    """A hash value. Keys are hashable values (see `is_hashable`)."""
    pairs: Dict[Any, Any]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Hash({self.pairs!r})"


TRUE = BooleanVal(True)
FALSE = BooleanVal(False)
NULL = NullVal()


def native_bool(value: bool) -> BooleanVal:
    return TRUE if value else FALSE


def is_error(value: Any) -> bool:
    return isinstance(value, ErrorVal)


def is_hashable(value: Any) -> bool:
    """Return True if `value` may be used as a hash key."""
    return isinstance(value, (IntegerVal, StringVal, BooleanVal))


def type_name(value: Any) -> str:
    """Return the Monkey type name of a runtime value."""
    # local import: builtin_function imports this module
    from .builtin_function import BuiltinFunction
    if isinstance(value, IntegerVal):
        return 'INTEGER'
    if isinstance(value, StringVal):
        return 'STRING'
    if isinstance(value, BooleanVal):
        return 'BOOLEAN'
    if isinstance(value, NullVal):
        return 'NULL'
    if isinstance(value, ReturnVal):
        return 'RETURN'
    if isinstance(value, ErrorVal):
        return 'ERROR'
    if isinstance(value, FunctionVal):
        return 'FUNCTION'
    if isinstance(value, BuiltinFunction):
        return 'BUILTIN'
    if isinstance(value, ArrayVal):
        return 'ARRAY'
    if isinstance(value, HashVal):
        return 'HASH'
    if isinstance(value, ExitVal):
        return 'EXIT'
    raise TypeError(f"not a Monkey value: {value!r}")


def to_string(value: Any) -> str:
    """Render a Monkey value for display.

    Strings are shown double-quoted; containers render their elements the
    same way.
    """
    from .builtin_function import BuiltinFunction
    if isinstance(value, BooleanVal):
        return 'true' if value.value else 'false'
    if isinstance(value, IntegerVal):
        return str(value.value)
    if isinstance(value, StringVal):
        return f'"{value.value}"'
    if isinstance(value, NullVal):
        return 'NULL'
    if isinstance(value, ReturnVal):
        return to_string(value.value)
    if isinstance(value, ErrorVal):
        return value.message
    if isinstance(value, FunctionVal):
        params = ', '.join(p.name for p in value.params)
        return f"fn({params}) {value.body}"
    if isinstance(value, BuiltinFunction):
        return f"<builtin {value.name}>"
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.elements) + ']'
    if isinstance(value, HashVal):
        entries = ', '.join(f"{to_string(k)}: {to_string(v)}" for k, v in value.pairs.items())
        return '{' + entries + '}'
    if isinstance(value, ExitVal):
        return 'Exit'
    raise TypeError(f"not a Monkey value: {value!r}")
