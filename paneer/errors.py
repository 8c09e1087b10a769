from dataclasses import dataclass
from typing import Any, List, Optional


LEX_ERROR = 'LexError'
PARSE_ERROR = 'ParseError'
NAME_ERROR = 'NameError'
TYPE_ERROR = 'TypeError'
ARITY_ERROR = 'ArityError'
ARITHMETIC_ERROR = 'ArithmeticError'
INDEX_ERROR = 'IndexOutOfBounds'
FATAL_ERROR = 'Fatal'

# error name -> pipeline stage that produces it
ERROR_STAGES = {
    LEX_ERROR: 'lex',
    PARSE_ERROR: 'parse',
    NAME_ERROR: 'runtime',
    TYPE_ERROR: 'runtime',
    ARITY_ERROR: 'runtime',
    ARITHMETIC_ERROR: 'runtime',
    INDEX_ERROR: 'runtime',
    FATAL_ERROR: 'runtime',
}


@dataclass
class ErrorVal:
    """A classified PaneerLang failure.

    `name` is one of the closed set of error kinds above, `message` the
    detail worth showing a user and `line` the source line the failure was
    attributed to, when known.
    """
    name: str
    message: str
    line: Optional[int] = None

    def __post_init__(self):
        if self.name not in ERROR_STAGES:
            raise ValueError(f"unknown error kind {self.name!r}")

    @property
    def stage(self) -> str:
        return ERROR_STAGES[self.name]

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r}, line={self.line!r})"


class PaneerError(Exception):
    """Exception type used to propagate PaneerLang errors."""
    def __init__(self, err: ErrorVal):
        where = f" (line {err.line})" if err.line is not None else ''
        super().__init__(f"{err.name}: {err.message}{where}")
        self.err = err
        self.source_name: Optional[str] = None


class LexError(PaneerError):
    """Raised by the lexer for the first character it cannot match."""
    def __init__(self, message: str, line: int, column: int, char: str = ''):
        super().__init__(ErrorVal(LEX_ERROR, message, line))
        self.column = column
        self.char = char


class ParseError(PaneerError):
    """Raised by the parser for the first unexpected token."""
    def __init__(self, expected: str, actual: Any, line: Optional[int]):
        found = describe_token(actual)
        super().__init__(ErrorVal(PARSE_ERROR, f"expected {expected}, got {found}", line))
        self.expected = expected
        self.actual = actual


class FatalError(PaneerError):
    """Unrecoverable failure of the host (stack exhaustion)."""
    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(ErrorVal(FATAL_ERROR, message, line))


class ReturnSignal(Exception):
    """Internal exception to handle return statements in functions."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value


def describe_token(token: Any) -> str:
    if token is None:
        return 'end of input'
    kind = getattr(token, 'type', None)
    if kind == 'EOF':
        return 'end of input'
    if kind == 'STRING':
        return f'string "{token.value}"'
    if kind is not None:
        return repr(token.value)
    return repr(token)


def format_error(err: ErrorVal, source: Optional[str] = None, source_name: str = '<input>',
                 line_base: int = 1) -> str:
    """Render an error with its source line for display.

    The first line is `source_name:line: Kind: message`; when the source
    text is available the offending line follows, indented.
    """
    location = f"{source_name}:{err.line}" if err.line is not None else source_name
    lines: List[str] = [f"{location}: {err.name}: {err.message}"]
    if source is not None and err.line is not None:
        source_lines = source.splitlines()
        index = err.line - line_base
        if 0 <= index < len(source_lines):
            lines.append('    ' + source_lines[index].strip())
    return '\n'.join(lines)
