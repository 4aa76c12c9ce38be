"""Interactive mode for the Monkey interpreter. Uses cmd as backend."""

import cmd
from typing import Optional

from .evaluator import Evaluator
from .parser import parse_program
from .types import ExitVal, NullVal, to_string


class Shell(cmd.Cmd):
    """Monkey read-eval-print loop."""
    intro = "Monkey interpreter :: Python backend\nPress Ctrl-D to exit."
    prompt = ">>> "
    secondary_prompt = "... "  # used while a construct is still open
    _tmp_prompt = ">>> "

    def __init__(self, evaluator: Optional[Evaluator] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.exit_code = 0

        self._tmp_source = ""

    def onecmd(self, line):
        """Sends every line to `default`; only the EOF marker from cmdloop ends the session."""
        if line == "EOF":
            return self.do_EOF("")
        if not line.strip():
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Evaluates Monkey source, waiting for more lines while it is incomplete."""
        source = self._tmp_source + line + "\n"
        program, errors = parse_program(source)

        if program.need_next():
            self._tmp_source = source
            self.prompt = self.secondary_prompt
            return None

        self._tmp_source = ""
        self.prompt = self._tmp_prompt

        if errors:
            print("parser errors:")
            for error in errors:
                print(f"\t{error}")
            return None

        try:
            result = self.evaluator.eval_program(program)
        except (ArithmeticError, RecursionError) as e:  # cmd.Cmd exits on uncaught exceptions
            print(f"Runtime error: {e}")
            return None

        if isinstance(result, ExitVal):
            self.exit_code = result.code
            return True
        if not isinstance(result, NullVal):
            print(to_string(result))
        return None

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return None

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True
