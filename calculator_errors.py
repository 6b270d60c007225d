"""Errores del motor de expresiones.

Todos heredan de ``ValueError`` para que la interfaz pueda seguir
capturando ``ValueError`` como hasta ahora; ``kind`` identifica el tipo
de fallo de forma estable y ``message`` es el texto para el usuario.
"""

from __future__ import annotations


class CalculatorError(ValueError):
    """Error base del motor con tipo y mensaje legible."""

    kind = "calculator_error"
    default_message = "Error de cálculo"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class UnexpectedCharacterError(CalculatorError):
    kind = "unexpected_character"

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Carácter inesperado '{char}'")


class MismatchedParensError(CalculatorError):
    kind = "mismatched_parens"
    default_message = "Paréntesis desbalanceados"


class CommaOutsideFunctionError(CalculatorError):
    kind = "comma_outside_function"
    default_message = "Coma fuera de una función"


class ArityError(CalculatorError):
    kind = "arity_error"
    default_message = "Faltan operandos"


class InvalidExpressionError(CalculatorError):
    kind = "invalid_expression"
    default_message = "Expresión inválida"


class UnknownIdentifierError(CalculatorError):
    kind = "unknown_identifier"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Identificador desconocido: {name}")


class NegativeFactorialError(CalculatorError):
    kind = "negative_factorial"
    default_message = "Factorial de un número negativo"


class NonIntegerFactorialError(CalculatorError):
    kind = "non_integer_factorial"
    default_message = "factorial requiere entero"


class FactorialTooLargeError(CalculatorError):
    kind = "factorial_too_large"
    default_message = "factorial demasiado grande (máximo 170)"


__all__ = [
    "CalculatorError",
    "UnexpectedCharacterError",
    "MismatchedParensError",
    "CommaOutsideFunctionError",
    "ArityError",
    "InvalidExpressionError",
    "UnknownIdentifierError",
    "NegativeFactorialError",
    "NonIntegerFactorialError",
    "FactorialTooLargeError",
]
