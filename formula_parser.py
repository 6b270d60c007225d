"""Reordenamiento infijo → postfijo (RPN) con shunting-yard."""

from __future__ import annotations

from collections.abc import Sequence

from calculator_errors import CommaOutsideFunctionError, MismatchedParensError
from formula_tokens import OPERATORS, POSTFIX_OPERATORS, Token, TokenKind

PRECEDENCE = {
    TokenKind.UNARY_MINUS: 5,
    TokenKind.POWER: 4,
    TokenKind.MULTIPLY: 3,
    TokenKind.DIVIDE: 3,
    TokenKind.ADD: 2,
    TokenKind.SUBTRACT: 2,
}
RIGHT_ASSOCIATIVE = frozenset({TokenKind.POWER, TokenKind.UNARY_MINUS})

# Tras estos tokens un "-" es negación y no resta.
_UNARY_CONTEXT = frozenset({
    TokenKind.ADD,
    TokenKind.SUBTRACT,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
    TokenKind.POWER,
    TokenKind.LEFT_PAREN,
    TokenKind.COMMA,
})

_UNARY_MINUS = Token(TokenKind.UNARY_MINUS)


def mark_unary_minus(tokens: Sequence[Token]) -> list[Token]:
    """Sustituye por ``UNARY_MINUS`` cada resta en posición de prefijo."""
    marked = []
    for idx, tok in enumerate(tokens):
        if tok.kind is TokenKind.SUBTRACT and (
            idx == 0 or tokens[idx - 1].kind in _UNARY_CONTEXT
        ):
            marked.append(_UNARY_MINUS)
        else:
            marked.append(tok)
    return marked


def _yields_to(incoming: TokenKind, top: TokenKind) -> bool:
    if incoming in RIGHT_ASSOCIATIVE:
        return PRECEDENCE[incoming] < PRECEDENCE[top]
    return PRECEDENCE[incoming] <= PRECEDENCE[top]


def to_postfix(tokens: Sequence[Token]) -> list[Token]:
    """Convierte una secuencia infija en notación polaca inversa.

    Los identificadores van a la pila y se emiten al cerrar su paréntesis,
    o antes del siguiente operador si no tenían argumentos (``pi``).

    Raises:
        MismatchedParensError: paréntesis sin pareja.
        CommaOutsideFunctionError: coma sin paréntesis que la contenga.
    """
    out: list[Token] = []
    stack: list[Token] = []

    for tok in mark_unary_minus(tokens):
        kind = tok.kind

        if kind is TokenKind.NUMBER:
            out.append(tok)

        elif kind is TokenKind.IDENTIFIER:
            stack.append(tok)

        elif kind in OPERATORS:
            while stack:
                top = stack[-1].kind
                if top in OPERATORS:
                    if not _yields_to(kind, top):
                        break
                elif top is not TokenKind.IDENTIFIER:
                    break
                out.append(stack.pop())
            stack.append(tok)

        elif kind is TokenKind.LEFT_PAREN:
            stack.append(tok)

        elif kind is TokenKind.RIGHT_PAREN:
            _pop_until_paren(stack, out, MismatchedParensError)
            stack.pop()
            if stack and stack[-1].kind is TokenKind.IDENTIFIER:
                out.append(stack.pop())

        elif kind is TokenKind.COMMA:
            _pop_until_paren(stack, out, CommaOutsideFunctionError)

        elif kind in POSTFIX_OPERATORS:
            # La negación pendiente y las constantes sueltas forman parte
            # del operando: -1! es (-1)!
            while stack and stack[-1].kind in (
                TokenKind.UNARY_MINUS,
                TokenKind.IDENTIFIER,
            ):
                out.append(stack.pop())
            out.append(tok)

        else:  # pragma: no cover - TokenKind es cerrado
            raise ValueError(f"Token inesperado: {tok}")

    while stack:
        tok = stack.pop()
        if tok.kind in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN):
            raise MismatchedParensError()
        out.append(tok)

    return out


def _pop_until_paren(stack: list[Token], out: list[Token], error) -> None:
    while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
        out.append(stack.pop())
    if not stack:
        raise error()
