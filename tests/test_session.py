import pytest

from paneer.errors import FatalError, ARITHMETIC_ERROR, LEX_ERROR, NAME_ERROR, PARSE_ERROR
from paneer.session import Session


@pytest.fixture
def session():
    lines = []
    sess = Session(output=lines.append)
    sess.lines = lines
    return sess


def test_bindings_persist_between_inputs(session):
    assert session.execute('ye x: int = 1;') is None
    assert session.execute('paneer.bol(x);') is None
    assert session.lines == ['1']


def test_bindings_survive_errors(session):
    session.execute('ye x: int = 1;')
    err = session.execute('ye y: int = x / 0;')
    assert err.name == ARITHMETIC_ERROR
    assert err.stage == 'runtime'
    assert session.execute('paneer.bol(x)') is None
    assert session.lines == ['1']


def test_partial_input_keeps_earlier_bindings(session):
    err = session.execute('ye a: int = 1; ye b: int = 1 / 0;')
    assert err.name == ARITHMETIC_ERROR
    session.execute('paneer.bol(a);')
    assert session.lines == ['1']
    assert session.execute('paneer.bol(b);').name == NAME_ERROR


def test_functions_persist(session):
    session.execute('func double(n int) int { return n * 2; }')
    session.execute('paneer.bol(double(21))')
    assert session.lines == ['42']


def test_missing_semicolon_is_added():
    assert Session.complete('x') == 'x;'
    assert Session.complete('  paneer.bol(1)  ') == 'paneer.bol(1);'
    assert Session.complete('ye x: int = 1;') == 'ye x: int = 1;'
    assert Session.complete('agar true { paneer.bol(1); }') == 'agar true { paneer.bol(1); }'


def test_compile_errors_are_returned(session):
    err = session.execute('ye = ;')
    assert err.name == PARSE_ERROR
    assert err.stage == 'parse'
    assert session.execute('ye x: int = #;').name == LEX_ERROR


def test_fatal_errors_propagate(session):
    session.execute('func f(n int) int { return f(n + 1); }')
    with pytest.raises(FatalError):
        session.execute('f(0);')


def test_semicolon_added_when_input_does_not_end_with_one(session):
    assert Session.complete('paneer.bol("a;b")') == 'paneer.bol("a;b");'
    assert session.execute('paneer.bol("a;b")') is None
    assert session.lines == ['a;b']


def test_too_deeply_nested_input_is_reported(session):
    err = session.execute('paneer.bol(' + '(' * 30000 + '1' + ')' * 30000 + ')')
    assert err.name == PARSE_ERROR
    assert session.execute('paneer.bol(1)') is None
    assert session.lines == ['1']
