"""Tokenizador de expresiones para la calculadora científica.

Convierte el texto que arma la interfaz (``2sin(30)+5!``) en una lista de
tokens tipados e inserta las multiplicaciones implícitas.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

from calculator_errors import UnexpectedCharacterError


class TokenKind(Enum):
    NUMBER = "num"
    IDENTIFIER = "id"
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    UNARY_MINUS = "u-"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","
    PERCENT = "%"
    FACTORIAL = "!"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: float | str | None = None

    def __str__(self) -> str:
        if self.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER):
            return str(self.value)
        return self.kind.value


BINARY_OPERATORS = frozenset({
    TokenKind.ADD,
    TokenKind.SUBTRACT,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
    TokenKind.POWER,
})
OPERATORS = BINARY_OPERATORS | {TokenKind.UNARY_MINUS}
POSTFIX_OPERATORS = frozenset({TokenKind.PERCENT, TokenKind.FACTORIAL})

FUNCTION_IDENTIFIERS = frozenset({
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "ln",
    "log",
    "sqrt",
    "exp",
    "abs",
    "pow",
    "min",
    "max",
})
CONSTANT_IDENTIFIERS = frozenset({"pi", "e"})

_SYMBOLS = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUBTRACT,
    "−": TokenKind.SUBTRACT,
    "*": TokenKind.MULTIPLY,
    "×": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "÷": TokenKind.DIVIDE,
    "^": TokenKind.POWER,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    ",": TokenKind.COMMA,
    "%": TokenKind.PERCENT,
    "!": TokenKind.FACTORIAL,
}

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_MULTIPLY = Token(TokenKind.MULTIPLY)


def tokenize(text: str) -> list[Token]:
    """Devuelve los tokens de ``text`` con las multiplicaciones implícitas.

    Raises:
        UnexpectedCharacterError: símbolo fuera del conjunto admitido.
    """
    return _insert_implicit_mult(_scan(text))


def _scan(text: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch in " \t":
            i += 1
            continue

        if ch in _DIGITS or (ch == "." and i + 1 < n and text[i + 1] in _DIGITS):
            j = _scan_number(text, i)
            tokens.append(Token(TokenKind.NUMBER, float(text[i:j])))
            i = j
            continue

        if ch in _LETTERS:
            j = i + 1
            while j < n and text[j] in _LETTERS:
                j += 1
            tokens.append(Token(TokenKind.IDENTIFIER, text[i:j].lower()))
            i = j
            continue

        if ch == "π":
            tokens.append(Token(TokenKind.IDENTIFIER, "pi"))
            i += 1
            continue

        kind = _SYMBOLS.get(ch)
        if kind is None:
            raise UnexpectedCharacterError(ch)
        tokens.append(Token(kind))
        i += 1

    return tokens


def _scan_number(text: str, start: int) -> int:
    """Índice final del literal numérico que empieza en ``start``."""
    n = len(text)
    j = start
    while j < n and text[j] in _DIGITS:
        j += 1
    if j < n and text[j] == ".":
        j += 1
        while j < n and text[j] in _DIGITS:
            j += 1

    # El exponente solo cuenta si trae al menos un dígito: "2e" es 2·e.
    if j < n and text[j] in "eE":
        k = j + 1
        if k < n and text[k] in "+-":
            k += 1
        first_digit = k
        while k < n and text[k] in _DIGITS:
            k += 1
        if k > first_digit:
            j = k

    return j


def _ends_value(tok: Token) -> bool:
    if tok.kind is TokenKind.IDENTIFIER:
        return tok.value not in FUNCTION_IDENTIFIERS
    return tok.kind in (
        TokenKind.NUMBER,
        TokenKind.RIGHT_PAREN,
        TokenKind.FACTORIAL,
        TokenKind.PERCENT,
    )


def _needs_mult(tok: Token, nxt: Token) -> bool:
    if _ends_value(tok) and nxt.kind in (TokenKind.LEFT_PAREN, TokenKind.IDENTIFIER):
        return True
    if nxt.kind is TokenKind.NUMBER:
        if tok.kind in (TokenKind.RIGHT_PAREN, TokenKind.FACTORIAL, TokenKind.PERCENT):
            return True
        if tok.kind is TokenKind.IDENTIFIER and tok.value not in FUNCTION_IDENTIFIERS:
            return True
    return False


def _insert_implicit_mult(tokens: list[Token]) -> list[Token]:
    out: list[Token] = []
    for tok, nxt in zip(tokens, tokens[1:] + [None]):
        out.append(tok)
        if nxt is not None and _needs_mult(tok, nxt):
            out.append(_MULTIPLY)
    return out
