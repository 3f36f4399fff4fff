"""Tokenizer for the BrainRot language.

The tokenizer never fails. Characters it does not recognize are dropped
without producing a token, an unterminated string simply runs to the end
of the input, and the resulting sequence always ends with exactly one
``END`` token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

KEYWORD = 'KEYWORD'
IDENTIFIER = 'IDENTIFIER'
NUMBER = 'NUMBER'
STRING = 'STRING'
OPERATOR = 'OPERATOR'
DELIMITER = 'DELIMITER'
END = 'END'

KEYWORDS = frozenset({
    'mold', 'rott', 'spin', 'ifrot', 'elsed',
    'fnrot', 'androt', 'orrot', 'notrot', 'retrot',
})

# Tried before the single character tables.
COMPOUND_OPERATORS = {
    '==': 'EQ',
    '!=': 'NEQ',
}

OPERATORS = {
    '+': 'PLUS',
    '-': 'MINUS',
    '*': 'MULTIPLY',
    '/': 'DIVIDE',
    '=': 'ASSIGN',
    '>': 'GT',
    '<': 'LT',
    '!': 'NOT',
}

DELIMITERS = {
    '(': 'LPAREN',
    ')': 'RPAREN',
    '{': 'LBRACE',
    '}': 'RBRACE',
    ';': 'SEMICOLON',
    ',': 'COMMA',
}

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
}

WHITESPACE = ' \t\n\r'
COMMENT_START = '#rot'
QUOTES = '"\''


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"{self.kind}({self.text})@{self.line}:{self.column}"


def fold_case(text: str) -> str:
    """Canonical case folding applied to identifiers before keyword lookup."""
    return text.casefold()


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_ident_start(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_ident_char(c: str) -> bool:
    return is_ident_start(c) or is_digit(c)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Lines and columns are 1-based. A leading minus sign is never part of
    a number; the parser handles negation as a unary operator. Keywords
    are matched case-insensitively and carry their folded name, while
    identifiers keep their original spelling.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance():
        nonlocal i, col, line
        if i < length:
            if source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    while i < length:
        c = source[i]
        if c in WHITESPACE:
            advance()
            continue
        if source.startswith(COMMENT_START, i):
            while i < length and source[i] != '\n':
                advance()
            continue

        start_line = line
        start_col = col

        # Numbers: digits with at most one decimal point
        if is_digit(c):
            start_i = i
            has_dot = False
            while i < length:
                ch = source[i]
                if is_digit(ch):
                    advance()
                elif ch == '.' and not has_dot:
                    has_dot = True
                    advance()
                else:
                    break
            tokens.append(Token(NUMBER, source[start_i:i], start_line, start_col))
            continue

        # String literal, either quote style
        if c in QUOTES:
            quote = c
            advance()
            chars: List[str] = []
            while i < length and source[i] != quote:
                ch = source[i]
                if ch == '\\':
                    advance()
                    escaped = source[i] if i < length else ''
                    chars.append(ESCAPES.get(escaped, escaped))
                else:
                    chars.append(ch)
                advance()
            if i < length:
                advance()  # closing quote
            tokens.append(Token(STRING, ''.join(chars), start_line, start_col))
            continue

        if is_ident_start(c):
            start_i = i
            while i < length and is_ident_char(source[i]):
                advance()
            text = source[start_i:i]
            folded = fold_case(text)
            if folded in KEYWORDS:
                tokens.append(Token(KEYWORD, folded, start_line, start_col))
            else:
                tokens.append(Token(IDENTIFIER, text, start_line, start_col))
            continue

        pair = source[i:i + 2]
        if pair in COMPOUND_OPERATORS:
            advance()
            advance()
            tokens.append(Token(OPERATOR, COMPOUND_OPERATORS[pair], start_line, start_col))
            continue
        if c in OPERATORS:
            advance()
            tokens.append(Token(OPERATOR, OPERATORS[c], start_line, start_col))
            continue
        if c in DELIMITERS:
            advance()
            tokens.append(Token(DELIMITER, DELIMITERS[c], start_line, start_col))
            continue

        # unknown character, dropped
        advance()

    tokens.append(Token(END, '', line, col))
    return tokens
