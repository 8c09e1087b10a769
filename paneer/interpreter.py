"""Interpreter for the PaneerLang language.

This module implements the tree-walking evaluator: it executes a parsed
`Program` statement by statement against an environment chain, applies
operator semantics and type checks, and streams the output of
`paneer.bol(...)` to an injected output sink.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from .ast import (
    Program, VarDecl, FuncDecl, Block, IfStmt, WhileStmt, ForInStmt,
    ReturnStmt, ExprStmt, IntLit, FloatLit, StringLit, BoolLit, ArrayLit,
    Ident, BinaryOp, UnaryOp, Call, Index, Print, Node,
)
from .environment import Environment
from .errors import (
    PaneerError, ErrorVal, FatalError, ReturnSignal,
    TYPE_ERROR, ARITY_ERROR, ARITHMETIC_ERROR, INDEX_ERROR,
)
from .parser import parse_program
from .stack import deep_stack
from .types import (
    TypeSpec, ArrayVal, VoidVal, check_value, fits_int64, is_numeric,
    to_string, type_name, type_of, unify,
)


def type_error(message: str, line: Optional[int]) -> PaneerError:
    return PaneerError(ErrorVal(TYPE_ERROR, message, line))


class Interpreter:
    """Core interpreter that executes PaneerLang AST."""
    def __init__(self, output: Optional[Callable[[str], Any]] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.output = output if output is not None else print
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        """Execute the top-level statements of `program` in order.

        `env` is the global environment to run against; it defaults to this
        interpreter's own and survives runtime errors, so a REPL can keep
        evaluating against it. Exhausting the host stack raises FatalError.
        """
        if env is None:
            env = self.global_env
        self.debug(f"run: {len(program.body)} top-level statements")
        deep_stack(self.run_statements, program.body, env)

    def run_statements(self, statements: List[Node], env: Environment) -> None:
        try:
            for stmt in statements:
                self.execute(stmt, env)
        except RecursionError:
            raise FatalError('maximum recursion depth exceeded') from None

    def execute_block(self, statements: List[Node], env: Environment) -> Any:
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Node, env: Environment) -> Any:
        if isinstance(node, VarDecl):
            value = self.evaluate(node.expr, env)
            env.declare(node.name, node.type_spec, value, node.line)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {node.type_spec!r} = {to_string(env.values[node.name])}")
            return None
        if isinstance(node, FuncDecl):
            env.define_function(node)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}")
            return None
        if isinstance(node, Block):
            # new environment for block scope; bindings vanish when the block exits
            return self.execute_block(node.statements, env.child())
        if isinstance(node, IfStmt):
            cond = self.condition(node.condition, env, 'agar')
            if self.debug_level >= 3:
                self.debug(f"if condition at line {node.line} -> {to_string(cond)}")
            if cond:
                return self.execute(node.then_block, env)
            if node.else_block is not None:
                return self.execute(node.else_block, env)
            return None
        if isinstance(node, WhileStmt):
            while self.condition(node.condition, env, 'jabtak'):
                res = self.execute(node.body, env)
                if isinstance(res, ReturnSignal):
                    return res
            return None
        if isinstance(node, ForInStmt):
            return self.execute_for_in(node, env)
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env) if node.value is not None else VoidVal()
            return ReturnSignal(value)
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return None
        # catch any other nodes
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_for_in(self, node: ForInStmt, env: Environment) -> Any:
        source = self.evaluate(node.iterable, env)
        if not isinstance(source, ArrayVal):
            raise type_error(f'har ... mein expects an array, got {type_name(source)}', node.line)
        for item in list(source.items):
            # fresh scope per iteration holding only the loop variable
            iter_env = env.child()
            elem_type = source.elem_type if source.elem_type is not None else type_of(item)
            iter_env.declare(node.var_name, elem_type, item, node.line)
            res = self.execute(node.body, iter_env)
            if isinstance(res, ReturnSignal):
                return res
        return None

    def condition(self, expr: Node, env: Environment, construct: str) -> bool:
        value = self.evaluate(expr, env)
        if not isinstance(value, bool):
            raise type_error(f'{construct} condition must be bool, got {type_name(value)}', expr_line(expr))
        return value

    def evaluate(self, node: Node, env: Environment) -> Any:
        # Evaluate expression nodes
        if isinstance(node, (IntLit, FloatLit, StringLit, BoolLit)):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name, node.line)
        if isinstance(node, ArrayLit):
            items = [self.evaluate(el, env) for el in node.elements]
            elem_type: Optional[TypeSpec] = None
            for item in items:
                if isinstance(item, VoidVal):
                    raise type_error('void value cannot be an array element', node.line)
                try:
                    elem_type = unify(elem_type, type_of(item))
                except TypeError as e:
                    raise type_error(str(e), node.line)
            return ArrayVal(elem_type, items)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            return self.apply_unary_op(node.op, operand, node.line)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right, node.line)
        if isinstance(node, Index):
            target = self.evaluate(node.target, env)
            index = self.evaluate(node.index, env)
            return self.index_value(target, index, node.line)
        if isinstance(node, Call):
            return self.call_function(node, env)
        if isinstance(node, Print):
            # the argument is fully evaluated before anything is emitted
            value = self.evaluate(node.arg, env)
            if isinstance(value, VoidVal):
                raise type_error('cannot print a void value', node.line)
            self.output(to_string(value))
            return VoidVal()
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def index_value(self, target: Any, index: Any, line: int) -> Any:
        if not isinstance(target, ArrayVal):
            raise type_error(f'cannot index type {type_name(target)}', line)
        if isinstance(index, bool) or not isinstance(index, int):
            raise type_error(f'array index must be int, got {type_name(index)}', line)
        if index < 0 or index >= len(target.items):
            raise PaneerError(ErrorVal(
                INDEX_ERROR, f'array index {index} out of bounds for length {len(target.items)}', line))
        return target.items[index]

    def call_function(self, node: Call, env: Environment) -> Any:
        func = env.lookup_function(node.name, node.line)
        # arguments are evaluated left to right in the caller's environment
        args = [self.evaluate(arg, env) for arg in node.args]
        if len(args) != len(func.params):
            raise PaneerError(ErrorVal(
                ARITY_ERROR, f"{func.name} expects {len(func.params)} arguments, got {len(args)}", node.line))
        if self.debug_level >= 3:
            self.debug(f"call {func.name}({', '.join(to_string(a) for a in args)})")
        # Functions only see their parameters and the global scope
        call_env = Environment(parent=env.root)
        # a function declared inside a block can still call itself
        call_env.define_function(func)
        for param, arg in zip(func.params, args):
            if isinstance(arg, VoidVal):
                raise type_error(f"argument {param.name} of {func.name} is void", node.line)
            call_env.declare(param.name, param.type_spec, arg, node.line)
        res = self.execute(func.body, call_env)
        if isinstance(res, ReturnSignal):
            ret_val = res.value
        elif func.return_type.kind == 'void':
            ret_val = VoidVal()
        else:
            raise type_error(
                f"function {func.name} ended without returning a {func.return_type!r}", func.line)
        try:
            return check_value(ret_val, func.return_type)
        except TypeError as e:
            raise type_error(f"return type mismatch in function {func.name}: {e}", node.line)

    def apply_unary_op(self, op: str, operand: Any, line: int) -> Any:
        if op == '!':
            if not isinstance(operand, bool):
                raise type_error(f'! expects bool, got {type_name(operand)}', line)
            return not operand
        if op == '-':
            if not is_numeric(operand):
                raise type_error(f'unary - expects a number, got {type_name(operand)}', line)
            if isinstance(operand, int):
                return self.int_result(-operand, line)
            return -operand
        raise type_error(f'unsupported unary operator {op}', line)

    def apply_binary_op(self, op: str, a: Any, b: Any, line: int) -> Any:
        if isinstance(a, VoidVal) or isinstance(b, VoidVal):
            raise type_error(f'void value used as operand of {op}', line)
        if op == '+' and (isinstance(a, str) or isinstance(b, str)):
            # String concatenation coerces the other operand to text
            return to_string(a) + to_string(b)
        if op in ('+', '-', '*', '/'):
            if not (is_numeric(a) and is_numeric(b)):
                raise type_error(f'unsupported {op} for {type_name(a)} and {type_name(b)}', line)
            return self.arithmetic(op, a, b, line)
        if op in ('==', '!='):
            eq = self.equal_values(a, b, line)
            return eq if op == '==' else not eq
        if op in ('<', '>', '<=', '>='):
            if not ((is_numeric(a) and is_numeric(b)) or (isinstance(a, str) and isinstance(b, str))):
                raise type_error(f'comparison not supported for {type_name(a)} and {type_name(b)}', line)
            if op == '<': return a < b
            if op == '>': return a > b
            if op == '<=': return a <= b
            return a >= b
        raise type_error(f'unknown operator {op}', line)

    def arithmetic(self, op: str, a: Any, b: Any, line: int) -> Any:
        if isinstance(a, int) and isinstance(b, int):
            if op == '+':
                return self.int_result(a + b, line)
            if op == '-':
                return self.int_result(a - b, line)
            if op == '*':
                return self.int_result(a * b, line)
            if b == 0:
                raise PaneerError(ErrorVal(ARITHMETIC_ERROR, 'division by zero', line))
            # integer division truncating toward zero
            quotient = abs(a) // abs(b)
            return self.int_result(quotient if (a < 0) == (b < 0) else -quotient, line)
        # at least one float: promote
        a, b = float(a), float(b)
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if b == 0.0:
            raise PaneerError(ErrorVal(ARITHMETIC_ERROR, 'division by zero', line))
        return a / b

    def int_result(self, value: int, line: int) -> int:
        if not fits_int64(value):
            raise PaneerError(ErrorVal(ARITHMETIC_ERROR, 'integer overflow', line))
        return value

    def equal_values(self, a: Any, b: Any, line: int) -> bool:
        # Numeric: int and float compare by value
        if is_numeric(a) and is_numeric(b):
            return a == b
        if isinstance(a, str) and isinstance(b, str):
            return a == b
        if isinstance(a, bool) and isinstance(b, bool):
            return a == b
        if isinstance(a, ArrayVal) and isinstance(b, ArrayVal):
            if len(a.items) != len(b.items):
                return False
            return all(self.equal_values(x, y, line) for x, y in zip(a.items, b.items))
        raise type_error(f'cannot compare {type_name(a)} with {type_name(b)}', line)


def expr_line(node: Node) -> Optional[int]:
    return getattr(node, 'line', None)


def run_program(source: str, output: Optional[Callable[[str], Any]] = None, debug_level: int = 0) -> Interpreter:
    """Convenience function to compile and run a PaneerLang program from source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(output=output, debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    finally:
        interpreter.close()
    return interpreter


def run_file(file_path: str, output: Optional[Callable[[str], Any]] = None, debug_level: int = 0) -> Interpreter:
    """Compile and execute a PaneerLang file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, output=output, debug_level=debug_level)
