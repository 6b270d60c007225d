"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, la fachada que usa la
interfaz: guarda el modo angular, el último resultado y la memoria
(M+, M−, MR, MC), y delega la evaluación en formula_evaluator.

Contrato de interfaz:
    - evaluate(expression: str) -> str
    - evaluate_value(expression: str) -> float
    - angle_mode: propiedad 'DEG' | 'RAD'
"""

import logging
import math

from formula_evaluator import AngleMode, evaluate

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Evalúa expresiones matemáticas con funciones científicas."""

    def __init__(self, angle_mode="DEG"):
        self._angle_mode = AngleMode.parse(angle_mode)
        self._last_result: float | None = None
        self._memory = 0.0
        self._has_memory = False

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._angle_mode.value

    @angle_mode.setter
    def angle_mode(self, mode):
        self._angle_mode = AngleMode.parse(mode)
        logger.debug("angle mode set to %s", self._angle_mode.value)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            CalculatorError: expresión inválida (subclase de ValueError).
        """
        return self.format_result(self.evaluate_value(expression))

    def evaluate_value(self, expression: str) -> float:
        result = evaluate(expression, self._angle_mode)
        self._last_result = result
        logger.debug("%r (%s) = %r", expression, self._angle_mode.value, result)
        return result

    @property
    def last_result(self) -> float | None:
        return self._last_result

    # ── Memoria ──────────────────────────────────────────────────

    @property
    def has_memory(self) -> bool:
        return self._has_memory

    def memory_add(self, value: float | None = None) -> float:
        self._memory += self._memory_operand(value)
        self._has_memory = True
        return self._memory

    def memory_subtract(self, value: float | None = None) -> float:
        self._memory -= self._memory_operand(value)
        self._has_memory = True
        return self._memory

    def memory_recall(self) -> float:
        return self._memory

    def memory_clear(self):
        self._memory = 0.0
        self._has_memory = False

    def _memory_operand(self, value: float | None) -> float:
        if value is not None:
            return float(value)
        if self._last_result is None:
            raise ValueError("No hay cálculo previo")
        return self._last_result

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def format_result(value: float) -> str:
        if math.isnan(value):
            return "NaN"
        if value == float("inf"):
            return "∞"
        if value == float("-inf"):
            return "-∞"
        if value == int(value) and abs(value) < 1e15:
            return str(int(value))
        # repr es la forma más corta que vuelve a leerse como el mismo float
        return repr(value)
