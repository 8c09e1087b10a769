"""Parser for the PaneerLang language.

A recursive-descent parser over the token list produced by
`paneer.lexer.tokenize`. One token of lookahead is enough for every rule.
Operator precedence, lowest to highest binding:

    equality (== !=) < comparison (> < >= <=) < term (+ -)
    < factor (* /) < unary (! -) < postfix ([]) < primary

The parser stops at the first unexpected token and raises a ParseError
naming the expected construct, the token actually found and its line;
there is no error recovery.

`compile_source` is the public entry point used by drivers and returns a
`Program` AST node representing the entire source text.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Union

from .ast import (
    Program, VarDecl, FuncParam, FuncDecl, Block, IfStmt, WhileStmt,
    ForInStmt, ReturnStmt, ExprStmt, IntLit, FloatLit, StringLit, BoolLit,
    ArrayLit, Ident, BinaryOp, UnaryOp, Call, Index, Print, Node,
)
from .errors import LexError, ParseError
from .lexer import Token, tokenize
from .stack import deep_stack
from .types import TypeSpec


TYPE_TOKENS = {
    'INT_TYPE': 'int',
    'FLOAT_TYPE': 'float',
    'STRING_TYPE': 'string',
    'BOOL_TYPE': 'bool',
}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.func_depth = 0

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        # the lexer always appends EOF; tolerate hand-built token lists too
        last_line = self.tokens[-1].line if self.tokens else 1
        return Token('EOF', '', last_line, 0)

    def consume(self, expected: Union[str, List[str]], what: Optional[str] = None) -> Token:
        token = self.peek()
        if not self.match(expected):
            if what is None:
                what = ' or '.join(repr(e) for e in expected) if isinstance(expected, list) else repr(expected)
            raise ParseError(what, token, token.line)
        self.pos += 1
        return token

    def match(self, expected: Union[str, List[str]]) -> bool:
        token = self.peek()
        if isinstance(expected, list):
            return token.type in expected
        return token.type == expected

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.match('EOF'):
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        token = self.peek()
        if token.type == 'YE':
            return self.parse_var_decl()
        if token.type == 'FUNC':
            return self.parse_func_decl()
        if token.type == 'AGAR':
            return self.parse_if_stmt()
        if token.type == 'JABTAK':
            return self.parse_while_stmt()
        if token.type == 'HAR':
            return self.parse_for_stmt()
        if token.type == 'RETURN':
            return self.parse_return_stmt()
        if token.type == '{':
            return self.parse_block()
        expr = self.parse_expression()
        self.consume(';', "';' after expression")
        return ExprStmt(expr, line=token.line)

    def parse_var_decl(self) -> VarDecl:
        start = self.consume('YE')
        name_token = self.consume('IDENT', 'variable name')
        self.consume(':', "':' after variable name")
        type_spec = self.parse_type_spec()
        self.consume('=', "'=' after type")
        expr = self.parse_expression()
        self.consume(';', "';' after variable declaration")
        return VarDecl(name_token.value, type_spec, expr, line=start.line)

    def parse_type_spec(self) -> TypeSpec:
        # int | float | string | bool | array '<' type '>'
        token = self.peek()
        if token.type in TYPE_TOKENS:
            self.pos += 1
            return TypeSpec(TYPE_TOKENS[token.type])
        if token.type == 'ARRAY_TYPE':
            self.pos += 1
            self.consume('<', "'<' after 'array'")
            # nested array types are accepted here; the interpreter decides what to do with them
            elem = self.parse_type_spec()
            self.consume('>', "'>' after array element type")
            return TypeSpec.array(elem)
        raise ParseError('type annotation', token, token.line)

    def parse_func_decl(self) -> FuncDecl:
        start = self.consume('FUNC')
        name_token = self.consume('IDENT', 'function name')
        self.consume('(', "'(' after function name")
        params: List[FuncParam] = []
        if not self.match(')'):
            params = self.parse_param_list()
        self.consume(')', "')' after parameters")
        if self.match('{'):
            return_type = TypeSpec.void()
        else:
            return_type = self.parse_type_spec()
        self.func_depth += 1
        try:
            body = self.parse_block()
        finally:
            self.func_depth -= 1
        return FuncDecl(name_token.value, params, return_type, body, line=start.line)

    def parse_param_list(self) -> List[FuncParam]:
        params: List[FuncParam] = []
        while True:
            name_token = self.consume('IDENT', 'parameter name')
            # `n: int` and `n int` are both accepted
            if self.match(':'):
                self.consume(':')
            type_spec = self.parse_type_spec()
            params.append(FuncParam(name_token.value, type_spec))
            if not self.match(','):
                break
            self.consume(',')
        return params

    def parse_block(self) -> Block:
        start = self.consume('{', "'{'")
        statements: List[Node] = []
        while not self.match('}'):
            if self.match('EOF'):
                raise ParseError("'}' to close block", self.peek(), self.peek().line)
            statements.append(self.parse_statement())
        self.consume('}')
        return Block(statements, line=start.line)

    def parse_if_stmt(self) -> IfStmt:
        start = self.consume('AGAR')
        condition = self.parse_expression()
        then_block = self.parse_block()
        else_block: Optional[Node] = None
        if self.match('VARNA'):
            self.consume('VARNA')
            if self.match('AGAR'):
                else_block = self.parse_if_stmt()
            else:
                else_block = self.parse_block()
        return IfStmt(condition, then_block, else_block, line=start.line)

    def parse_while_stmt(self) -> WhileStmt:
        start = self.consume('JABTAK')
        condition = self.parse_expression()
        body = self.parse_block()
        return WhileStmt(condition, body, line=start.line)

    def parse_for_stmt(self) -> ForInStmt:
        start = self.consume('HAR')
        var_token = self.consume('IDENT', "loop variable name after 'har'")
        self.consume('MEIN', "'mein' after loop variable")
        iterable = self.parse_expression()
        body = self.parse_block()
        return ForInStmt(var_token.value, iterable, body, line=start.line)

    def parse_return_stmt(self) -> ReturnStmt:
        start = self.consume('RETURN')
        if self.func_depth == 0:
            raise ParseError('return inside a function body', start, start.line)
        if self.match(';'):
            self.consume(';')
            return ReturnStmt(None, line=start.line)
        value = self.parse_expression()
        self.consume(';', "';' after return statement")
        return ReturnStmt(value, line=start.line)

    # Expression parsing
    def parse_expression(self) -> Node:
        return self.parse_equality()

    def parse_equality(self) -> Node:
        node = self.parse_comparison()
        while self.match(['==', '!=']):
            op_token = self.consume(['==', '!='])
            right = self.parse_comparison()
            node = BinaryOp(op_token.value, node, right, line=op_token.line)
        return node

    def parse_comparison(self) -> Node:
        node = self.parse_term()
        while self.match(['<', '>', '<=', '>=']):
            op_token = self.consume(['<', '>', '<=', '>='])
            right = self.parse_term()
            node = BinaryOp(op_token.value, node, right, line=op_token.line)
        return node

    def parse_term(self) -> Node:
        node = self.parse_factor()
        while self.match(['+', '-']):
            op_token = self.consume(['+', '-'])
            right = self.parse_factor()
            node = BinaryOp(op_token.value, node, right, line=op_token.line)
        return node

    def parse_factor(self) -> Node:
        node = self.parse_unary()
        while self.match(['*', '/']):
            op_token = self.consume(['*', '/'])
            right = self.parse_unary()
            node = BinaryOp(op_token.value, node, right, line=op_token.line)
        return node

    def parse_unary(self) -> Node:
        if self.match(['!', '-']):
            op_token = self.consume(['!', '-'])
            operand = self.parse_unary()
            # fold `-5` and `-2.5` into negative literals
            if op_token.value == '-' and isinstance(operand, IntLit):
                return IntLit(-operand.value, line=op_token.line)
            if op_token.value == '-' and isinstance(operand, FloatLit):
                return FloatLit(-operand.value, line=op_token.line)
            return UnaryOp(op_token.value, operand, line=op_token.line)
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        node = self.parse_primary()
        while self.match('['):
            bracket = self.consume('[')
            index_expr = self.parse_expression()
            self.consume(']', "']' after array index")
            node = Index(node, index_expr, line=bracket.line)
        return node

    def parse_arguments(self) -> List[Node]:
        self.consume('(', "'('")
        args: List[Node] = []
        if not self.match(')'):
            args.append(self.parse_expression())
            while self.match(','):
                self.consume(',')
                args.append(self.parse_expression())
        self.consume(')', "')' after arguments")
        return args

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.type == 'INT':
            self.pos += 1
            return IntLit(int(token.value), line=token.line)
        if token.type == 'FLOAT':
            self.pos += 1
            return FloatLit(float(token.value), line=token.line)
        if token.type == 'STRING':
            self.pos += 1
            return StringLit(token.value, line=token.line)
        if token.type == 'BOOL':
            self.pos += 1
            return BoolLit(token.value == 'true', line=token.line)
        if token.type == 'IDENT':
            self.pos += 1
            if self.match('('):
                return Call(token.value, self.parse_arguments(), line=token.line)
            return Ident(token.value, line=token.line)
        if token.type == 'PANEER':
            return self.parse_print()
        if token.type == '[':
            self.pos += 1
            elements: List[Node] = []
            if not self.match(']'):
                elements.append(self.parse_expression())
                while self.match(','):
                    self.consume(',')
                    elements.append(self.parse_expression())
            self.consume(']', "']' after array elements")
            return ArrayLit(elements, line=token.line)
        if token.type == '(':
            self.pos += 1
            expr = self.parse_expression()
            self.consume(')', "')' after expression")
            return expr
        raise ParseError('expression', token, token.line)

    def parse_print(self) -> Print:
        start = self.consume('PANEER')
        self.consume('.', "'.' after 'paneer'")
        self.consume('BOL', "'bol' after 'paneer.'")
        self.consume('(', "'(' after 'paneer.bol'")
        arg = self.parse_expression()
        self.consume(')', "')' after the single argument of paneer.bol")
        return Print(arg, line=start.line)


def parse_tokens(parser: Parser) -> Program:
    try:
        return parser.parse_program()
    except RecursionError:
        token = parser.peek()
        raise ParseError('a less deeply nested program', token, token.line) from None


def parse_program(source: str, line_base: int = 1,
                  trace: Optional[Callable[[str], Any]] = None) -> Program:
    """Parse the given source code into a Program AST.

    `trace`, when given, receives one line with the token count and one with
    the statement count.
    """
    tokens = tokenize(source, line_base)
    if trace is not None:
        trace(f"lexed {len(tokens)} tokens")
    program = deep_stack(parse_tokens, Parser(tokens))
    if trace is not None:
        trace(f"parsed {len(program.body)} statements")
    return program


def compile_source(source: str, source_name: str = '<input>', line_base: int = 1,
                   trace: Optional[Callable[[str], Any]] = None) -> Program:
    """Compile source text into a Program.

    Raises LexError or ParseError for the first offence found; a partially
    parsed program is never returned. `source_name` is only used to label
    the error for drivers that render it.
    """
    try:
        return parse_program(source, line_base, trace)
    except (LexError, ParseError) as e:
        e.source_name = source_name
        raise
