from calculator_engine import CalculatorEngine
from calculator_errors import CalculatorError
from formula_parser import to_postfix
from formula_tokens import tokenize
import math
import sys


def _rpn_text(expr: str) -> str:
	return " ".join(str(tok) for tok in to_postfix(tokenize(expr)))


def _error_kind(expr: str, mode: str = "DEG") -> str:
	engine = CalculatorEngine(mode)
	try:
		engine.evaluate(expr)
	except CalculatorError as exc:
		return exc.kind
	return "no error"


def inspect_expression(expr: str, *, mode: str = "DEG") -> None:
	"""Imprime tokens, RPN y resultado de una expresión."""
	print("Expression inspection")
	print(f"expr:    {expr}")
	print(f"mode:    {mode}")
	try:
		print(f"tokens:  {' '.join(str(tok) for tok in tokenize(expr))}")
		print(f"rpn:     {_rpn_text(expr)}")
		print(f"result:  {CalculatorEngine(mode).evaluate(expr)}")
	except CalculatorError as exc:
		print(f"error:   {exc.kind} ({exc.message})")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	deg = CalculatorEngine("DEG")
	rad = CalculatorEngine("RAD")

	for expr, expected in (
		("2+3*4", "14"),
		("(2+3)*4", "20"),
		("2^8", "256"),
		("50%", "0.5"),
		("5!", "120"),
		("2^3^2", "512"),
		("2pi/pi", "2"),
		("pow(2,10)", "1024"),
		("max(3, min(7, 5))", "5"),
		("1/0", "∞"),
		("-1/0", "-∞"),
		("0/0", "NaN"),
	):
		expected_actual.append((expr, expected, deg.evaluate(expr)))

	checks.append(("pi matches math.pi", abs(deg.evaluate_value("pi") - math.pi) < 1e-12))
	checks.append(("e matches math.e", abs(deg.evaluate_value("e") - math.e) < 1e-12))
	checks.append(("sin(30) in DEG is 0.5", abs(deg.evaluate_value("sin(30)") - 0.5) < 1e-10))
	checks.append(("sin(pi/2) in RAD is 1", abs(rad.evaluate_value("sin(pi/2)") - 1) < 1e-10))
	checks.append(("asin(1) in DEG is 90", abs(deg.evaluate_value("asin(1)") - 90) < 1e-10))
	checks.append((
		"constant before call multiplies",
		abs(deg.evaluate_value("e sin(90)") - math.e) < 1e-12,
	))

	expected_actual.append(("-1! rpn", "1 u- !", _rpn_text("-1!")))
	expected_actual.append(("sin(30) rpn", "30 sin", _rpn_text("sin(30)")))
	expected_actual.append(("-1!", "negative_factorial", _error_kind("-1!")))
	expected_actual.append((")", "mismatched_parens", _error_kind(")")))
	expected_actual.append(("(-)", "arity_error", _error_kind("(-)")))
	expected_actual.append(("1,2", "comma_outside_function", _error_kind("1,2")))
	expected_actual.append(("foo(2)", "unknown_identifier", _error_kind("foo(2)")))
	expected_actual.append(("2.5!", "non_integer_factorial", _error_kind("2.5!")))
	expected_actual.append(("171!", "factorial_too_large", _error_kind("171!")))
	expected_actual.append(("", "invalid_expression", _error_kind("")))
	expected_actual.append(("2#3", "unexpected_character", _error_kind("2#3")))

	for expr in ("1/3", "2^0.5", "1e300*10", "3*10^-30", "170!"):
		first = deg.evaluate_value(expr)
		again = deg.evaluate_value(deg.format_result(first))
		checks.append((f"{expr} round-trips through its display text", first == again))

	checks.append((
		"evaluation is deterministic",
		deg.evaluate_value("sin(1)^2+cos(1)^2") == deg.evaluate_value("sin(1)^2+cos(1)^2"),
	))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "2sin(30)+5!"
	#   python regression_checks.py --inspect "sin(pi/2)" --mode RAD
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		mode = "DEG"
		if "--mode" in sys.argv:
			try:
				mode = sys.argv[sys.argv.index("--mode") + 1]
			except IndexError:
				raise SystemExit("Missing value for --mode")

		inspect_expression(expr, mode=mode)
	else:
		run_regressions()
