"""Built-in functions available to every Monkey program."""

from typing import Dict

from monkey.builtin_function import BuiltinFunction
from .core import populate_core_builtins
from .io import populate_io_builtins


def populate_builtins() -> Dict[str, BuiltinFunction]:
    builtins = populate_core_builtins()
    builtins.update(populate_io_builtins())
    return builtins
