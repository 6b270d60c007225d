"""Punto de entrada de la calculadora científica (línea de comandos)."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from calculator_engine import CalculatorEngine
from calculator_errors import CalculatorError


DEFAULT_ANGLE_MODE = "DEG"
ANGLE_MODE_ENV = "CALCULADORA_ANGLE_MODE"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PROMPT = "calc> "
EXIT_COMMANDS = {"exit", "quit", "salir"}

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calculadora",
        description="Calculadora científica",
    )
    parser.add_argument(
        "expression",
        nargs="*",
        help="Expresión a evaluar; sin ella se abre el modo interactivo",
    )
    parser.add_argument(
        "--angle",
        type=str.upper,
        choices=["DEG", "RAD"],
        default=None,
        help=f"Modo angular (por defecto ${ANGLE_MODE_ENV} o {DEFAULT_ANGLE_MODE})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Registro DEBUG")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def resolve_angle_mode(cli_value: str | None) -> str:
    if cli_value:
        return cli_value
    return os.environ.get(ANGLE_MODE_ENV, DEFAULT_ANGLE_MODE)


def _handle_command(engine: CalculatorEngine, line: str) -> str | None:
    """Comandos del modo interactivo; None si la línea es una expresión."""
    command = line.lower()
    if command in ("deg", "rad"):
        engine.angle_mode = command
        return f"Modo {engine.angle_mode}"
    if command == "m+":
        return engine.format_result(engine.memory_add())
    if command == "m-":
        return engine.format_result(engine.memory_subtract())
    if command == "mr":
        return engine.format_result(engine.memory_recall())
    if command == "mc":
        engine.memory_clear()
        return "Memoria borrada"
    return None


def run_interactive(engine: CalculatorEngine, stdin=None, stdout=None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    interactive = stdin.isatty()

    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        if line.lower() in EXIT_COMMANDS:
            break

        try:
            output = _handle_command(engine, line)
            if output is None:
                output = engine.evaluate(line)
        except ValueError as exc:
            output = f"Error: {exc}"
        stdout.write(output + "\n")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        engine = CalculatorEngine(resolve_angle_mode(args.angle))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if not args.expression:
        return run_interactive(engine)

    expression = " ".join(args.expression)
    try:
        print(engine.evaluate(expression))
    except CalculatorError as exc:
        logger.debug("evaluation failed: %s", exc.kind)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
