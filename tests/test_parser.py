import pytest

from paneer.ast import (
    ExprStmt, BinaryOp, IntLit, FloatLit, IfStmt, Block, FuncDecl, VarDecl,
    ForInStmt, ReturnStmt, Call, Ident, Index, Print, UnaryOp, ArrayLit, StringLit,
)
from paneer.errors import ParseError, PARSE_ERROR
from paneer.parser import parse_program, compile_source
from paneer.types import TypeSpec


def first(source):
    return parse_program(source).body[0]


def test_precedence():
    stmt = first('2 + 3 * 4;')
    assert stmt == ExprStmt(
        BinaryOp('+', IntLit(2, line=1), BinaryOp('*', IntLit(3, line=1), IntLit(4, line=1), line=1), line=1),
        line=1,
    )


def test_comparison_binds_looser_than_term():
    expr = first('1 + 2 < 4 == true;').expr
    assert expr.op == '=='
    assert expr.left.op == '<'
    assert expr.left.left.op == '+'


def test_negative_literals_are_folded():
    assert first('-5;').expr == IntLit(-5, line=1)
    assert first('-2.5;').expr == FloatLit(-2.5, line=1)
    assert isinstance(first('-x;').expr, UnaryOp)


def test_var_decl_with_nested_array_type():
    decl = first('ye grid: array<array<int>> = [[1]];')
    assert isinstance(decl, VarDecl)
    assert decl.name == 'grid'
    assert decl.type_spec == TypeSpec.array(TypeSpec.array(TypeSpec.integer()))
    assert isinstance(decl.expr, ArrayLit)


def test_func_decl():
    func = first('func add(a int, b: int) int { return a + b; }')
    assert isinstance(func, FuncDecl)
    assert [p.name for p in func.params] == ['a', 'b']
    assert func.return_type == TypeSpec.integer()
    assert isinstance(func.body.statements[0], ReturnStmt)


def test_func_without_return_type_is_void():
    func = first('func hello() { paneer.bol("hi"); }')
    assert func.return_type == TypeSpec.void()
    assert func.params == []


def test_if_else_chain():
    stmt = first('agar x { } varna agar y { } varna { }')
    assert isinstance(stmt, IfStmt)
    assert isinstance(stmt.else_block, IfStmt)
    assert isinstance(stmt.else_block.else_block, Block)


def test_for_in():
    stmt = first('har n mein nums { paneer.bol(n); }')
    assert isinstance(stmt, ForInStmt)
    assert stmt.var_name == 'n'
    assert stmt.iterable == Ident('nums', line=1)


def test_return_alias_parses_to_same_node():
    plain = first('func f() int { return 1; }').body.statements[0]
    alias = first('func f() int { wapas kar 1; }').body.statements[0]
    assert plain == alias


def test_call_index_and_print():
    expr = first('paneer.bol(f(1)[0]);').expr
    assert isinstance(expr, Print)
    assert isinstance(expr.arg, Index)
    assert expr.arg.target == Call('f', [IntLit(1, line=1)], line=1)


def test_print_is_an_expression():
    decl = first('ye x: int = paneer.bol("a");')
    assert decl.expr == Print(StringLit('a', line=1), line=1)


def test_statement_lines():
    program = parse_program('ye a: int = 1;\n\nye b: int = 2;')
    assert [s.line for s in program.body] == [1, 3]


def test_missing_semicolon():
    with pytest.raises(ParseError) as exc:
        parse_program('ye x: int = 5\nye y: int = 6;')
    assert exc.value.err.name == PARSE_ERROR
    assert exc.value.err.line == 2
    assert 'got' in exc.value.err.message


def test_unclosed_block():
    with pytest.raises(ParseError) as exc:
        parse_program('agar true { paneer.bol(1);')
    assert 'end of input' in exc.value.err.message


def test_return_outside_function():
    with pytest.raises(ParseError):
        parse_program('return 1;')


def test_function_declared_inside_block():
    stmt = first('agar x { func f() int { return 1; } }')
    assert isinstance(stmt.then_block.statements[0], FuncDecl)
    outer = first('func outer() { func inner() { } }')
    assert isinstance(outer.body.statements[0], FuncDecl)


def test_deeply_nested_parentheses():
    expr = first('paneer.bol(' + '(' * 200 + '1' + ')' * 200 + ');').expr
    assert expr.arg == IntLit(1, line=1)


def test_nesting_beyond_the_stack_is_a_parse_error():
    with pytest.raises(ParseError) as exc:
        compile_source('paneer.bol(' + '(' * 30000 + '1' + ')' * 30000 + ');')
    assert exc.value.err.name == PARSE_ERROR
    assert exc.value.err.line == 1


def test_print_takes_one_argument():
    with pytest.raises(ParseError):
        parse_program('paneer.bol(1, 2);')


def test_missing_type_annotation():
    with pytest.raises(ParseError) as exc:
        parse_program('ye x = 5;')
    assert "':'" in exc.value.err.message


def test_compile_source_labels_errors():
    with pytest.raises(ParseError) as exc:
        compile_source('ye;', source_name='broken.paneer')
    assert exc.value.source_name == 'broken.paneer'
