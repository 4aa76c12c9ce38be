"""Host-level exceptions.

Monkey runtime errors are `ErrorVal` values, not exceptions. The classes
here are for conditions reported to the Python caller: syntax errors
met by the convenience runners, I/O failures inside `BasicIO` and
evaluator bugs.
"""

from typing import List


class MonkeyError(Exception):
    """Base class for exceptions raised by the monkey package."""


class ParseError(MonkeyError):
    """Raised when a program with syntax errors is about to be run."""
    def __init__(self, errors: List[str]):
        super().__init__('parser errors:\n' + '\n'.join(f"\t{e}" for e in errors))
        self.errors = errors


class EvaluationError(MonkeyError):
    """Internal error: the evaluator met a node or value it cannot handle."""


class MonkeyIOError(MonkeyError):
    """Raised by the file-reading collaborator used by `import`."""
