import pytest

from paneer.errors import LexError, LEX_ERROR
from paneer.lexer import tokenize


def kinds(source):
    return [t.type for t in tokenize(source)]


def test_declaration_tokens():
    assert kinds('ye x: int = 5;') == ['YE', 'IDENT', ':', 'INT_TYPE', '=', 'INT', ';', 'EOF']


def test_keywords_and_types():
    source = 'func agar varna jabtak har mein paneer bol toh se tak float string bool array'
    assert kinds(source)[:-1] == [
        'FUNC', 'AGAR', 'VARNA', 'JABTAK', 'HAR', 'MEIN', 'PANEER', 'BOL',
        'TOH', 'SE', 'TAK', 'FLOAT_TYPE', 'STRING_TYPE', 'BOOL_TYPE', 'ARRAY_TYPE',
    ]


def test_both_return_spellings():
    plain = tokenize('return 1;')
    alias = tokenize('wapas kar 1;')
    assert plain[0].type == 'RETURN'
    assert alias[0].type == 'RETURN'
    assert alias[0].value == 'wapas kar'
    assert [t.type for t in alias] == ['RETURN', 'INT', ';', 'EOF']


def test_wapas_alone_is_identifier():
    assert kinds('wapas;') == ['IDENT', ';', 'EOF']
    assert kinds('wapas') == ['IDENT', 'EOF']


def test_operators():
    assert kinds('== != >= <= > < = ! + - * /')[:-1] == [
        '==', '!=', '>=', '<=', '>', '<', '=', '!', '+', '-', '*', '/',
    ]


def test_numbers():
    tokens = tokenize('42 3.14 -7')
    assert [(t.type, t.value) for t in tokens[:-1]] == [
        ('INT', '42'), ('FLOAT', '3.14'), ('-', '-'), ('INT', '7'),
    ]


def test_bool_literals():
    tokens = tokenize('true false')
    assert [(t.type, t.value) for t in tokens[:-1]] == [('BOOL', 'true'), ('BOOL', 'false')]


def test_string_escapes():
    tokens = tokenize(r'"line\none \"quoted\""')
    assert tokens[0].type == 'STRING'
    assert tokens[0].value == 'line\none "quoted"'


def test_comments_and_line_numbers():
    tokens = tokenize('paneer.bol(1);\n// comment\nye')
    assert 'LINE_COMMENT' not in [t.type for t in tokens]
    assert tokens[0].line == 1
    assert tokens[-2].type == 'YE'
    assert tokens[-2].line == 3


def test_line_base_offsets_lines():
    tokens = tokenize('x;', line_base=10)
    assert tokens[0].line == 10


def test_eof_is_last():
    assert kinds('') == ['EOF']


def test_unknown_character():
    with pytest.raises(LexError) as exc:
        tokenize('ye x: int = 5;\nye y: int = @;')
    assert exc.value.err.name == LEX_ERROR
    assert exc.value.err.line == 2
    assert exc.value.char == '@'


def test_integer_literal_too_large():
    with pytest.raises(LexError):
        tokenize('99999999999999999999')
