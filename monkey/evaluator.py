"""Tree-walking evaluator for the Monkey language.

The evaluator walks the AST produced by `monkey.parser` and computes runtime
values from `monkey.types`. Runtime errors are `ErrorVal` values returned
from every evaluation step rather than raised, so each step checks the
values it gets back and hands an error (or an `ExitVal` from `exit()`)
straight up to its caller. `ReturnVal` travels the same way until the
enclosing function call, or the top of the program, unwraps it.

Faults of the host machine are not Monkey errors: integer division by zero
raises `ZeroDivisionError`, results outside the signed 64-bit range raise
`OverflowError` and runaway recursion raises `RecursionError`. These
propagate to whoever called the evaluator. Each Monkey call costs about ten
Python frames, so the CLI raises the interpreter recursion limit to
`RECURSION_LIMIT` before evaluating.

The evaluator keeps a single reference to the current scope. Function
calls replace it for their duration and restore it in a `finally` block, so
an error value or an exception leaves the caller's scope in place. `if`
branches run in the scope the `if` appears in.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ast import (
    Node, Program, LetStmt, ReturnStmt, ExprStmt, Block,
    Ident, IntegerLit, StringLit, BooleanLit, PrefixOp, InfixOp,
    IfExpr, FunctionLit, Call, ArrayLit, Index, HashLit,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import EvaluationError, ParseError
from .parser import parse_program
from .std import populate_builtins
from .types import (
    I64_MIN, I64_MAX, IntegerVal, StringVal, BooleanVal, NullVal,
    ReturnVal, ErrorVal, ExitVal, FunctionVal, ArrayVal, HashVal,
    TRUE, FALSE, NULL, native_bool, is_hashable, type_name, to_string,
)


# frames available to the evaluator when run from the command line
RECURSION_LIMIT = 10000


def _halts(value: Any) -> bool:
    """True for values that stop evaluation of the enclosing expression."""
    return isinstance(value, (ErrorVal, ExitVal))


def _checked(value: int) -> IntegerVal:
    if value < I64_MIN or value > I64_MAX:
        raise OverflowError(f"integer overflow: {value} does not fit in 64 bits")
    return IntegerVal(value)


def is_truthy(value: Any) -> bool:
    if isinstance(value, NullVal):
        return False
    if isinstance(value, BooleanVal):
        return value.value
    return True


class Evaluator:
    """Evaluates Monkey programs against a persistent global environment."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.global_env.set('null', NULL)
        self.global_env.set('true', TRUE)
        self.global_env.set('false', FALSE)
        self.env = self.global_env
        self.builtins: Dict[str, BuiltinFunction] = populate_builtins()
        # resolved paths of the files `import` is currently evaluating
        self.importing: List[str] = []
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def eval_program(self, program: Program, env: Optional[Environment] = None) -> Any:
        """Evaluate every statement of `program` and return the last value.

        `env` defaults to the current scope. A top-level `return` ends the
        program with its operand; errors and exit requests are returned
        as they are.
        """
        previous = self.env
        if env is not None:
            self.env = env
        try:
            result: Any = NULL
            for stmt in program.statements:
                self.debug(f"eval {stmt}")
                result = self.execute(stmt)
                if isinstance(result, ReturnVal):
                    return result.value
                if _halts(result):
                    return result
        finally:
            self.env = previous
        if result is None:
            raise EvaluationError('program evaluated to no value')
        return result

    def eval_block(self, block: Block, env: Environment) -> Any:
        previous = self.env
        self.env = env
        try:
            result: Any = NULL
            for stmt in block.statements:
                result = self.execute(stmt)
                if isinstance(result, ReturnVal) or _halts(result):
                    return result
            return result
        finally:
            self.env = previous

    # Statements
    def execute(self, node: Node) -> Any:
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expr)
        if isinstance(node, LetStmt):
            value = self.evaluate(node.value)
            if _halts(value):
                return value
            self.env.set(node.name.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.name} = {to_string(value)}")
            return value
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value)
            if _halts(value):
                return value
            return ReturnVal(value)
        raise EvaluationError(f"cannot execute {type(node).__name__}")

    # Expressions
    def evaluate(self, node: Node) -> Any:
        if isinstance(node, IntegerLit):
            return IntegerVal(node.value)
        if isinstance(node, StringLit):
            return StringVal(node.value)
        if isinstance(node, BooleanLit):
            return native_bool(node.value)
        if isinstance(node, Ident):
            return self.eval_identifier(node)
        if isinstance(node, PrefixOp):
            operand = self.evaluate(node.operand)
            if _halts(operand):
                return operand
            return self.eval_prefix(node.op, operand)
        if isinstance(node, InfixOp):
            right = self.evaluate(node.right)
            if _halts(right):
                return right
            left = self.evaluate(node.left)
            if _halts(left):
                return left
            return self.eval_infix(node.op, left, right)
        if isinstance(node, IfExpr):
            return self.eval_if(node)
        if isinstance(node, FunctionLit):
            return FunctionVal(node.params, node.body, self.env)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee)
            if _halts(callee):
                return callee
            args = []
            for arg in node.args:
                value = self.evaluate(arg)
                if _halts(value):
                    return value
                args.append(value)
            return self.apply(callee, args)
        if isinstance(node, ArrayLit):
            elements = []
            for element in node.elements:
                value = self.evaluate(element)
                if _halts(value):
                    return value
                elements.append(value)
            return ArrayVal(elements)
        if isinstance(node, Index):
            target = self.evaluate(node.target)
            if _halts(target):
                return target
            index = self.evaluate(node.index)
            if _halts(index):
                return index
            return self.eval_index(target, index)
        if isinstance(node, HashLit):
            return self.eval_hash(node)
        raise EvaluationError(f"cannot evaluate {type(node).__name__}")

    def eval_identifier(self, node: Ident) -> Any:
        value = self.env.get(node.name)
        if value is not None:
            return value
        if node.name in self.builtins:
            return self.builtins[node.name]
        return ErrorVal(f"identifier not found: {node.name}")

    def eval_prefix(self, op: str, operand: Any) -> Any:
        if op == '!':
            if isinstance(operand, BooleanVal):
                return native_bool(not operand.value)
            if isinstance(operand, NullVal):
                return TRUE
            return FALSE
        if op == '-':
            if not isinstance(operand, IntegerVal):
                return ErrorVal(f"unknown operator: -{type_name(operand)}")
            return _checked(-operand.value)
        return ErrorVal(f"unknown operator: {op}{type_name(operand)}")

    def eval_infix(self, op: str, left: Any, right: Any) -> Any:
        lt, rt = type_name(left), type_name(right)
        if lt != rt:
            return ErrorVal(f"type mismatch: {lt} {op} {rt}")
        if isinstance(left, IntegerVal):
            return self.eval_integer_infix(op, left.value, right.value)
        if isinstance(left, StringVal):
            if op == '+':
                return StringVal(left.value + right.value)
            if op == '==':
                return native_bool(left.value == right.value)
            if op == '!=':
                return native_bool(left.value != right.value)
        elif isinstance(left, BooleanVal):
            if op == '==':
                return native_bool(left.value == right.value)
            if op == '!=':
                return native_bool(left.value != right.value)
        return ErrorVal(f"unknown operator: {lt} {op} {rt}")

    def eval_integer_infix(self, op: str, a: int, b: int) -> Any:
        if op == '+':
            return _checked(a + b)
        if op == '-':
            return _checked(a - b)
        if op == '*':
            return _checked(a * b)
        if op == '/':
            # truncates toward zero; b == 0 raises ZeroDivisionError
            quotient = abs(a) // abs(b)
            return _checked(-quotient if (a < 0) != (b < 0) else quotient)
        if op == '<':
            return native_bool(a < b)
        if op == '>':
            return native_bool(a > b)
        if op == '==':
            return native_bool(a == b)
        if op == '!=':
            return native_bool(a != b)
        return ErrorVal(f"unknown operator: INTEGER {op} INTEGER")

    def eval_if(self, node: IfExpr) -> Any:
        condition = self.evaluate(node.condition)
        if _halts(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if {node.condition} -> {truthy}")
        if truthy:
            return self.eval_block(node.consequence, self.env)
        if node.alternative is not None:
            return self.eval_block(node.alternative, self.env)
        return NULL

    def apply(self, callee: Any, args: List[Any]) -> Any:
        if isinstance(callee, FunctionVal):
            if len(args) != len(callee.params):
                return ErrorVal(
                    f"wrong number of arguments: want={len(callee.params)}, got={len(args)}"
                )
            call_env = callee.env.enclosed()
            for param, arg in zip(callee.params, args):
                call_env.set(param.name, arg)
            if self.debug_level >= 2:
                rendered = ', '.join(to_string(a) for a in args)
                self.debug(f"call {to_string(callee).splitlines()[0]} with ({rendered})")
            result = self.eval_block(callee.body, call_env)
            if isinstance(result, ReturnVal):
                return result.value
            return result
        if isinstance(callee, BuiltinFunction):
            if self.debug_level >= 2:
                self.debug(f"call builtin {callee.name}")
            return callee.invoke(args, self)
        return ErrorVal(f"not a function: {type_name(callee)}")

    def eval_index(self, target: Any, index: Any) -> Any:
        if isinstance(target, ArrayVal) and isinstance(index, IntegerVal):
            i = index.value
            if i < 0 or i >= len(target.elements):
                return NULL
            return target.elements[i]
        if isinstance(target, HashVal):
            if not is_hashable(index):
                return ErrorVal(f"unusable as hash key: {type_name(index)}")
            return target.pairs.get(index, NULL)
        return ErrorVal(f"index operator not supported: {type_name(target)}")

    def eval_hash(self, node: HashLit) -> Any:
        pairs: Dict[Any, Any] = {}
        for key_node, value_node in node.pairs:
            key = self.evaluate(key_node)
            if _halts(key):
                return key
            if not is_hashable(key):
                return ErrorVal(f"unusable as hash key: {type_name(key)}")
            value = self.evaluate(value_node)
            if _halts(value):
                return value
            pairs[key] = value
        return HashVal(pairs)


def run_program(source: str, evaluator: Optional[Evaluator] = None) -> Any:
    """Convenience function to parse and evaluate Monkey source text."""
    program, errors = parse_program(source)
    if errors:
        raise ParseError(errors)
    if evaluator is None:
        evaluator = Evaluator()
    return evaluator.eval_program(program)


def run_file(path: str, evaluator: Optional[Evaluator] = None) -> Any:
    """Evaluate a Monkey source file, returning the program's value."""
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, evaluator)
