# PaneerLang package
# This package provides a lexer, parser and tree-walking interpreter for PaneerLang.
from .errors import PaneerError, ErrorVal, format_error
from .interpreter import run_program, run_file, Interpreter
from .parser import compile_source, parse_program
from .session import Session

__all__ = [
    'run_program',
    'run_file',
    'compile_source',
    'parse_program',
    'Interpreter',
    'Session',
    'PaneerError',
    'ErrorVal',
    'format_error',
]
