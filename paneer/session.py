"""REPL state for PaneerLang.

A `Session` keeps one interpreter and one global environment alive across
inputs, so declarations made by earlier fragments stay visible to later
ones, including after a fragment fails.
"""

from typing import Any, Callable, Optional

from .errors import PaneerError, ErrorVal, FatalError
from .interpreter import Interpreter
from .parser import compile_source


class Session:
    def __init__(self, output: Optional[Callable[[str], Any]] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.interpreter = Interpreter(output=output, debug_level=debug_level, debug_file=debug_file)
        self.inputs = 0

    @property
    def env(self):
        return self.interpreter.global_env

    @staticmethod
    def complete(source: str) -> str:
        # a lone expression typed at the prompt may omit its ';'
        stripped = source.strip()
        if stripped and not stripped.endswith(';') and '{' not in stripped:
            return stripped + ';'
        return source

    def execute(self, source: str) -> Optional[ErrorVal]:
        """Compile and run one input fragment.

        Returns None on success or the ErrorVal describing the first failure.
        Bindings made before a runtime error are kept. FatalError is not
        converted and propagates to the caller.
        """
        self.inputs += 1
        source = self.complete(source)
        try:
            program = compile_source(source, source_name=f'<repl {self.inputs}>', trace=self.interpreter.debug)
            self.interpreter.run(program, self.env)
        except FatalError:
            raise
        except PaneerError as e:
            self.interpreter.debug(f"session input {self.inputs} failed: {e}")
            return e.err
        return None

    def close(self):
        self.interpreter.close()
