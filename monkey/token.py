"""Token definitions for the Monkey language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenKind(Enum):
    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    INT = 'INT'
    STRING = 'STRING'

    # Operators
    ASSIGN = 'ASSIGN'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    BANG = 'BANG'
    ASTERISK = 'ASTERISK'
    SLASH = 'SLASH'
    LT = 'LT'
    GT = 'GT'
    EQ = 'EQ'
    NOT_EQ = 'NOT_EQ'

    # Delimiters
    COMMA = 'COMMA'
    SEMICOLON = 'SEMICOLON'
    COLON = 'COLON'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    LBRACE = 'LBRACE'
    RBRACE = 'RBRACE'
    LBRACKET = 'LBRACKET'
    RBRACKET = 'RBRACKET'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    IF = 'IF'
    ELSE = 'ELSE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.value


KEYWORDS: Dict[str, TokenKind] = {
    'fn': TokenKind.FUNCTION,
    'let': TokenKind.LET,
    'true': TokenKind.TRUE,
    'false': TokenKind.FALSE,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'return': TokenKind.RETURN,
}


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for `ident`, or IDENT for plain names."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.literal!r})"
