"""Evaluación de expresiones para la calculadora científica.

Encadena el tokenizador, el reordenamiento a postfijo y una pila de
valores. La aritmética sigue la semántica IEEE-754 de float64: dividir
entre cero o salir del dominio de una función da ``inf`` o ``NaN`` en
lugar de una excepción.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from enum import Enum

import numpy as np

from calculator_errors import (
    ArityError,
    FactorialTooLargeError,
    InvalidExpressionError,
    NegativeFactorialError,
    NonIntegerFactorialError,
    UnknownIdentifierError,
)
from formula_parser import to_postfix
from formula_tokens import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

MAX_FACTORIAL = 170  # 171! ya desborda float64


class AngleMode(Enum):
    DEGREES = "DEG"
    RADIANS = "RAD"

    @classmethod
    def parse(cls, value) -> "AngleMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized in {mode.value for mode in cls}:
                return cls(normalized)
        raise ValueError("El modo debe ser 'DEG' o 'RAD'")


def factorial(n) -> float:
    """Producto 1·2·…·n para enteros entre 0 y 170."""
    if n < 0:
        raise NegativeFactorialError()
    if np.floor(n) != n:
        raise NonIntegerFactorialError()
    if n > MAX_FACTORIAL:
        raise FactorialTooLargeError()

    result = 1.0
    for i in range(2, int(n) + 1):
        result *= i
    return result


class NumpyMathProvider:
    """Provee funciones y constantes para un modo angular fijo."""

    def __init__(self, angle_mode: AngleMode = AngleMode.DEGREES):
        self._angle_mode = AngleMode.parse(angle_mode)

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    def _trig(self, fn):
        if self._angle_mode is AngleMode.RADIANS:
            return fn

        def w(x):
            return fn(x * math.pi / 180)

        return w

    def _inv_trig(self, fn):
        if self._angle_mode is AngleMode.RADIANS:
            return fn

        def w(x):
            return fn(x) * 180 / math.pi

        return w

    def build_constants(self) -> dict:
        return {
            "pi": np.float64(math.pi),
            "e": np.float64(math.e),
        }

    def build_unary_functions(self) -> dict:
        return {
            "sin": self._trig(np.sin),
            "cos": self._trig(np.cos),
            "tan": self._trig(np.tan),
            "asin": self._inv_trig(np.arcsin),
            "acos": self._inv_trig(np.arccos),
            "atan": self._inv_trig(np.arctan),
            "ln": np.log,
            "log": np.log10,
            "sqrt": np.sqrt,
            "exp": np.exp,
            "abs": np.abs,
        }

    @staticmethod
    def build_binary_functions() -> dict:
        return {
            "pow": np.power,
            "min": np.minimum,
            "max": np.maximum,
        }


_BINARY_OPERATIONS = {
    TokenKind.ADD: np.add,
    TokenKind.SUBTRACT: np.subtract,
    TokenKind.MULTIPLY: np.multiply,
    TokenKind.DIVIDE: np.divide,
    TokenKind.POWER: np.power,
}


class FormulaEvaluator:
    """Evalúa secuencias postfijas con las tablas de un proveedor."""

    def __init__(self, provider: NumpyMathProvider):
        self._provider = provider
        self._constants = provider.build_constants()
        self._unary = provider.build_unary_functions()
        self._binary = provider.build_binary_functions()

    @property
    def angle_mode(self) -> AngleMode:
        return self._provider.angle_mode

    def evaluate(self, expression: str) -> float:
        tokens = tokenize(expression)
        postfix = to_postfix(tokens)
        logger.debug(
            "tokens=%s rpn=%s",
            " ".join(map(str, tokens)),
            " ".join(map(str, postfix)),
        )
        return self.evaluate_postfix(postfix)

    def evaluate_postfix(self, postfix: Sequence[Token]) -> float:
        stack: list = []

        with np.errstate(all="ignore"):
            for tok in postfix:
                kind = tok.kind

                if kind is TokenKind.NUMBER:
                    stack.append(np.float64(tok.value))
                elif kind in _BINARY_OPERATIONS:
                    b = _pop(stack)
                    a = _pop(stack)
                    stack.append(_BINARY_OPERATIONS[kind](a, b))
                elif kind is TokenKind.UNARY_MINUS:
                    stack.append(-_pop(stack))
                elif kind is TokenKind.IDENTIFIER:
                    stack.append(self._apply_identifier(tok.value, stack))
                elif kind is TokenKind.PERCENT:
                    stack.append(_pop(stack) / 100)
                elif kind is TokenKind.FACTORIAL:
                    stack.append(np.float64(factorial(_pop(stack))))
                else:
                    raise InvalidExpressionError(f"Token inesperado en RPN: {tok}")

        if len(stack) != 1:
            raise InvalidExpressionError()
        return float(stack[0])

    def _apply_identifier(self, name: str, stack: list):
        if name in self._constants:
            return self._constants[name]
        if name in self._unary:
            return self._unary[name](_pop(stack))
        if name in self._binary:
            b = _pop(stack)
            a = _pop(stack)
            return self._binary[name](a, b)
        raise UnknownIdentifierError(name)


def _pop(stack: list):
    if not stack:
        raise ArityError()
    return stack.pop()


# Las tablas no cambian: un evaluador por modo, creado una sola vez.
_EVALUATORS = {mode: FormulaEvaluator(NumpyMathProvider(mode)) for mode in AngleMode}


def evaluate(expression: str, angle_mode=AngleMode.DEGREES) -> float:
    """Evalúa ``expression`` y devuelve el resultado como float.

    Args:
        expression: texto de la expresión, p. ej. ``"2sin(30)+5!"``.
        angle_mode: ``"DEG"``, ``"RAD"`` o un :class:`AngleMode`.

    Raises:
        CalculatorError: cualquier entrada mal formada; ``kind`` indica
            la causa.
    """
    return _EVALUATORS[AngleMode.parse(angle_mode)].evaluate(expression)
