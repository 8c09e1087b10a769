from typing import Any, Dict, Optional

from .ast import FuncDecl
from .errors import PaneerError, ErrorVal, NAME_ERROR, TYPE_ERROR
from .types import TypeSpec, check_value


class Environment:
    """Represents a scope mapping identifiers to values and functions.

    Functions live in their own namespace: they are not values and are only
    reachable through a call by name.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        self.functions: Dict[str, FuncDecl] = {}

    @property
    def root(self) -> 'Environment':
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def get(self, name: str, line: Optional[int] = None) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise PaneerError(ErrorVal(NAME_ERROR, f'undefined variable {name}', line))

    def lookup_function(self, name: str, line: Optional[int] = None) -> FuncDecl:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.functions:
                return env.functions[name]
            env = env.parent
        raise PaneerError(ErrorVal(NAME_ERROR, f'undefined function {name}', line))

    def declare(self, name: str, type_spec: TypeSpec, value: Any, line: Optional[int] = None):
        # Re-declaring a name in the same scope replaces the earlier binding.
        try:
            value = check_value(value, type_spec)
        except TypeError as e:
            raise PaneerError(ErrorVal(TYPE_ERROR, f'{name}: {e}', line))
        self.values[name] = value

    def define_function(self, decl: FuncDecl):
        self.functions[decl.name] = decl

