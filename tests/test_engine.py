import math

import pytest

from calculator_engine import CalculatorEngine
from calculator_errors import CalculatorError, MismatchedParensError


@pytest.fixture
def engine():
    return CalculatorEngine()


def test_default_angle_mode_is_degrees(engine):
    assert engine.angle_mode == "DEG"
    assert engine.evaluate_value("sin(30)") == pytest.approx(0.5)
    assert engine.evaluate("2^8") == "256"


def test_angle_mode_setter_accepts_legacy_values(engine):
    engine.angle_mode = "rad"
    assert engine.angle_mode == "RAD"
    assert engine.evaluate_value("sin(pi/2)") == pytest.approx(1)
    with pytest.raises(ValueError):
        engine.angle_mode = "grad"
    assert engine.angle_mode == "RAD"


@pytest.mark.parametrize(
    "value, text",
    [
        (256.0, "256"),
        (-3.0, "-3"),
        (-0.0, "0"),
        (0.5, "0.5"),
        (1 / 3, "0.3333333333333333"),
        (1e15, "1000000000000000.0"),
        (1e-30, "1e-30"),
        (math.inf, "∞"),
        (-math.inf, "-∞"),
        (math.nan, "NaN"),
    ],
)
def test_format_result(value, text):
    assert CalculatorEngine.format_result(value) == text


@pytest.mark.parametrize("expr", ["2^8", "1/3", "-2/7", "3*10^-30", "1e300*10", "170!", "sqrt(2)"])
def test_display_text_round_trips(engine, expr):
    value = engine.evaluate_value(expr)
    assert engine.evaluate_value(engine.evaluate(expr)) == value


def test_last_result_tracks_successful_evaluations(engine):
    assert engine.last_result is None
    engine.evaluate("2+2")
    assert engine.last_result == 4
    with pytest.raises(MismatchedParensError):
        engine.evaluate("(1")
    assert engine.last_result == 4


def test_errors_propagate_as_value_errors(engine):
    with pytest.raises(ValueError) as info:
        engine.evaluate("5!!!!")
    assert isinstance(info.value, CalculatorError)
    assert info.value.kind == "factorial_too_large"


def test_memory_register(engine):
    assert not engine.has_memory
    assert engine.memory_recall() == 0

    engine.evaluate("2^8")
    assert engine.memory_add() == 256
    assert engine.has_memory
    assert engine.memory_subtract(6) == 250
    assert engine.memory_add(0.5) == 250.5
    assert engine.memory_recall() == 250.5

    engine.memory_clear()
    assert not engine.has_memory
    assert engine.memory_recall() == 0


def test_memory_without_previous_result(engine):
    with pytest.raises(ValueError):
        engine.memory_add()
