"""Lexer for the Monkey language.

The terminals are declared as a Lark grammar and scanned with Lark's basic
lexer. The parser never sees Lark tokens: `Lexer.next_token` converts each
one into a `Token` and keeps returning EOF once the input is exhausted.
Characters no terminal accepts are reported as ILLEGAL tokens, so lexing
itself never fails.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark
from lark import Token as LarkToken

from .token import Token, TokenKind, lookup_ident


MONKEY_TERMINALS = r"""
    start: _token*

    _token: IDENT | INT | STRING
          | EQ | NOT_EQ | ASSIGN | PLUS | MINUS | BANG | ASTERISK | SLASH
          | LT | GT | COMMA | SEMICOLON | COLON
          | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
          | ILLEGAL

    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    INT: /[0-9]+/
    STRING: /"[^"]*"/

    EQ: "=="
    NOT_EQ: "!="
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    BANG: "!"
    ASTERISK: "*"
    SLASH: "/"
    LT: "<"
    GT: ">"

    COMMA: ","
    SEMICOLON: ";"
    COLON: ":"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    LBRACKET: "["
    RBRACKET: "]"

    // Lowest priority: only wins when nothing else matches
    ILLEGAL.-1: /./

    COMMENT: /\/\/[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


MONKEY_LEXER = Lark(
    MONKEY_TERMINALS,
    parser='lalr',
    lexer='basic',
)


def _convert(lark_token: LarkToken) -> Token:
    kind = TokenKind[lark_token.type]
    literal = str(lark_token.value)
    if kind is TokenKind.IDENT:
        kind = lookup_ident(literal)
    elif kind is TokenKind.STRING:
        literal = literal[1:-1]
    return Token(kind, literal)


class Lexer:
    """Pull-based token source consumed by the parser."""

    def __init__(self, source: str):
        self.source = source
        self._stream: Iterator[LarkToken] = iter(MONKEY_LEXER.lex(source))

    def next_token(self) -> Token:
        lark_token = next(self._stream, None)
        if lark_token is None:
            return Token(TokenKind.EOF, '')
        return _convert(lark_token)


def tokenize(source: str) -> List[Token]:
    """Lex the whole source, including the trailing EOF token."""
    lexer = Lexer(source)
    tokens: List[Token] = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.kind is TokenKind.EOF:
            return tokens
