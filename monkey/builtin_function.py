from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from monkey.types import ErrorVal


@dataclass(eq=False)
class BuiltinFunction:
    name: str
    arity: Optional[int]  # None means variadic
    fn: Callable[[List[Any], Any], Any]

    __hash__ = None  # type: ignore[assignment]

    def invoke(self, args: List[Any], evaluator: Any) -> Any:
        if self.arity is not None and len(args) != self.arity:
            return ErrorVal(f"wrong number of arguments. got={len(args)}, want={self.arity}")
        return self.fn(args, evaluator)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
