"""Tokenizer for PaneerLang.

Terminals are described with a small lark grammar and lexed with lark's
basic lexer, so the regular expressions live in one place. Keywords are
resolved afterwards by a post-lexer: identifier-shaped spans are looked up
in the keyword table before falling back to plain identifiers, and the
two-word return alias `wapas kar` is merged into a single RETURN token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List
import re

from lark import Lark
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters
from lark.lark import PostLex

from .errors import LexError
from .types import fits_int64


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    line: int
    column: int


KEYWORDS = {
    'ye': 'YE',
    'func': 'FUNC',
    'agar': 'AGAR',
    'toh': 'TOH',
    'varna': 'VARNA',
    'jabtak': 'JABTAK',
    'har': 'HAR',
    'mein': 'MEIN',
    'se': 'SE',
    'tak': 'TAK',
    'return': 'RETURN',
    'paneer': 'PANEER',
    'bol': 'BOL',
    'int': 'INT_TYPE',
    'float': 'FLOAT_TYPE',
    'string': 'STRING_TYPE',
    'bool': 'BOOL_TYPE',
    'array': 'ARRAY_TYPE',
    'true': 'BOOL',
    'false': 'BOOL',
}

# lark terminal name -> token type handed to the parser
SYMBOLS = {
    'EQEQ': '==', 'NOTEQ': '!=', 'GE': '>=', 'LE': '<=',
    'GT': '>', 'LT': '<', 'ASSIGN': '=', 'BANG': '!',
    'PLUS': '+', 'MINUS': '-', 'STAR': '*', 'SLASH': '/',
    'COLON': ':', 'SEMI': ';', 'COMMA': ',', 'DOT': '.',
    'LPAR': '(', 'RPAR': ')', 'LBRACE': '{', 'RBRACE': '}',
    'LSQB': '[', 'RSQB': ']',
}

PANEER_TOKENS = r"""
    start: _token*
    _token: NAME | FLOAT | INT | STRING
          | EQEQ | NOTEQ | GE | LE | GT | LT | ASSIGN | BANG
          | PLUS | MINUS | STAR | SLASH
          | COLON | SEMI | COMMA | DOT
          | LPAR | RPAR | LBRACE | RBRACE | LSQB | RSQB

    FLOAT.2: /[0-9]+\.[0-9]+/
    EQEQ: "=="
    NOTEQ: "!="
    GE: ">="
    LE: "<="
    GT: ">"
    LT: "<"
    ASSIGN: "="
    BANG: "!"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    COLON: ":"
    SEMI: ";"
    COMMA: ","
    DOT: "."
    LPAR: "("
    RPAR: ")"
    LBRACE: "{"
    RBRACE: "}"
    LSQB: "["
    RSQB: "]"

    %import common.CNAME -> NAME
    %import common.INT
    %import common.ESCAPED_STRING -> STRING
    %import common.WS
    %ignore WS

    // Comments
    LINE_COMMENT.2: /\/\/[^\n]*/
    %ignore LINE_COMMENT
"""

STRING_ESCAPES = {'"': '"', '\\': '\\', 'n': '\n', 't': '\t'}
_ESCAPE_RE = re.compile(r'\\(.)', re.DOTALL)


class KeywordPostLex(PostLex):
    """Turns NAME tokens into keyword tokens and merges `wapas kar`."""
    always_accept = ()

    def process(self, stream: Iterator[LarkToken]) -> Iterator[LarkToken]:
        held = None  # a `wapas` waiting to see whether `kar` follows
        for token in stream:
            if held is not None:
                if token.type == 'NAME' and token.value == 'kar':
                    yield LarkToken.new_borrow_pos('RETURN', 'wapas kar', held)
                    held = None
                    continue
                yield LarkToken.new_borrow_pos('IDENT', held.value, held)
                held = None
            if token.type == 'NAME':
                if token.value == 'wapas':
                    held = token
                    continue
                kind = KEYWORDS.get(token.value, 'IDENT')
                yield LarkToken.new_borrow_pos(kind, token.value, token)
            else:
                yield token
        if held is not None:
            yield LarkToken.new_borrow_pos('IDENT', held.value, held)


PANEER_LEXER = Lark(
    PANEER_TOKENS,
    parser='lalr',
    lexer='basic',
    postlex=KeywordPostLex(),
)


def decode_string(raw: str) -> str:
    """Strip the quotes of a string literal and decode its escapes."""
    body = raw[1:-1]
    return _ESCAPE_RE.sub(lambda m: STRING_ESCAPES.get(m.group(1), m.group(0)), body)


def tokenize(source: str, line_base: int = 1) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF.

    The minus sign is always tokenized as a separate operator; negative
    numbers are handled by the parser's unary expression rule. The first
    character that matches no terminal raises a LexError.
    """
    offset = line_base - 1
    tokens: List[Token] = []
    try:
        for tok in PANEER_LEXER.lex(source):
            line = tok.line + offset
            kind = SYMBOLS.get(tok.type, tok.type)
            value = str(tok)
            if kind == 'INT' and not fits_int64(int(value)):
                raise LexError(f"integer literal {value} does not fit in 64 bits", line, tok.column, value)
            if kind == 'STRING':
                value = decode_string(value)
            tokens.append(Token(kind, value, line, tok.column))
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r} at column {e.column}",
                       e.line + offset, e.column, e.char) from None
    end_line = tokens[-1].line if tokens else line_base
    tokens.append(Token('EOF', '', end_line, 0))
    return tokens
