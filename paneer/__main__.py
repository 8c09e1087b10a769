"""CLI entry point for the PaneerLang interpreter.

Usage:
    python -m paneer [-v|-vv|-vvv] <program_file>
    python -m paneer [-v...] --repl
    python -m paneer [-v...] --emit-ast <program_file>
    python -m paneer [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --repl        Start an interactive session
  --emit-ast    Parse the given .paneer file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported on stderr and make the
process exit with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import PaneerError, format_error
from .interpreter import Interpreter
from .parser import compile_source
from .session import Session
from .shell import Shell


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def fail(e: PaneerError, source: Optional[str] = None, source_name: str = '<input>'):
    print(format_error(e.err, source, e.source_name or source_name), file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='paneer', description="PaneerLang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--repl', action='store_true', help='start an interactive session')
    group.add_argument('--emit-ast', metavar='PANEER_FILE', help='emit AST JSON for the given .paneer file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='PaneerLang program file (.paneer) to execute')
    args = parser.parse_args(argv)

    if args.repl:
        sess = Session(debug_level=args.v)
        try:
            Shell(sess).cmdloop()
        finally:
            sess.close()
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = compile_source(source, source_name=str(program_file))
        except PaneerError as e:
            fail(e, source)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        data = json.loads(read_source(ast_path))
        ast_program = ast_from_obj(data)
        interpreter = Interpreter(debug_level=args.v)
        try:
            interpreter.run(ast_program)
        except PaneerError as e:
            fail(e, source_name=str(ast_path))
        finally:
            interpreter.close()
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --repl/--emit-ast/--ast')
    program_file = Path(args.program)
    source = read_source(program_file)
    interpreter = Interpreter(debug_level=args.v)
    try:
        ast_program = compile_source(source, source_name=str(program_file), trace=interpreter.debug)
        interpreter.run(ast_program)
    except PaneerError as e:
        fail(e, source, str(program_file))
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
