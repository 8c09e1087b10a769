"""Interactive mode for the PaneerLang interpreter. Uses cmd as backend."""

import cmd
import sys

from .errors import FatalError, format_error
from .session import Session


class Shell(cmd.Cmd):
    """PaneerLang REPL shell."""
    intro = "PaneerLang REPL\nType 'exit' to quit."
    prompt = "paneer> "
    secondary_prompt = "   ...> "  # used while a block is still open
    _tmp_prompt = "paneer> "

    def __init__(self, sess: Session, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    def parseline(self, line):
        # `!` and `?` start PaneerLang expressions here, not shell escapes or help
        stripped = line.strip()
        if stripped.startswith(('!', '?')):
            return None, None, stripped
        return super().parseline(line)

    def default(self, line):
        """Executes a PaneerLang fragment."""
        source = self._tmp_line + line
        if source.count('{') > source.count('}'):
            self._tmp_line = source + "\n"
            self.prompt = self.secondary_prompt
            return False

        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        try:
            err = self.sess.execute(source)
        except FatalError as e:
            print(format_error(e.err, source_name='<repl>'), file=sys.stderr)
            return True
        if err is not None:
            print(format_error(err, self.sess.complete(source), source_name='<repl>'), file=sys.stderr)
        return False

    def do_help(self, arg):
        """Prints a short language summary instead of command docs."""
        print("PaneerLang quick reference:\n"
              "  ye x: int = 5;                 declare a variable (int, float, string, bool, array<T>)\n"
              "  paneer.bol(x);                 print a value\n"
              "  func add(a int, b int) int { return a + b; }\n"
              "  agar cond { } varna { }        if / else (varna agar chains)\n"
              "  jabtak cond { }                while loop\n"
              "  har x mein arr { }             loop over an array\n"
              "  return x;  wapas kar x;        return from a function\n"
              "Lines without ';' get one added. Type 'exit' to quit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            # `exit` followed by more text is PaneerLang, not the command
            return self.default("exit " + arg)
        return True
