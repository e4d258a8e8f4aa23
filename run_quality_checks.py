#!/usr/bin/env python
"""Run the microbit_sim quality gates locally.

Each gate is one tool invocation through the current interpreter
(``python -m <tool>``), so the checks always use the environment the
package was installed into (``pip install -e .[dev]``). Tool settings
live in pyproject.toml.

Usage:
    python run_quality_checks.py                  # every gate, no fixes
    python run_quality_checks.py --fix            # let black/isort rewrite files
    python run_quality_checks.py --only tests     # a single gate
    python run_quality_checks.py --skip lint type # everything but pylint/mypy
    python run_quality_checks.py --fast           # deselect tests marked slow
"""

import argparse
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parent
PACKAGE = "microbit_sim"
TESTS = "tests"
EXAMPLE = "examples/run_led_blink.py"
SOURCES = [PACKAGE, TESTS, "examples", Path(__file__).name]


@dataclass
class Gate:
    key: str
    title: str
    cmd: list[str]
    fix_cmd: Optional[list[str]] = None
    capture: bool = True


@dataclass
class Report:
    passed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _module(name: str, *args: str) -> list[str]:
    return [sys.executable, "-m", name, *args]


def build_gates(fast: bool) -> list[Gate]:
    pytest_args = [
        # Coroutine tests are marked explicitly with @pytest.mark.asyncio
        "--asyncio-mode=strict",
        f"--cov={PACKAGE}",
        "--cov-report=term-missing",
        TESTS,
    ]
    if fast:
        pytest_args[-1:-1] = ["-m", "not slow"]

    return [
        Gate(
            "formatting",
            "black",
            _module("black", "--check", "--diff", *SOURCES),
            fix_cmd=_module("black", *SOURCES),
        ),
        Gate(
            "imports",
            "isort",
            _module("isort", "--check-only", "--diff", *SOURCES),
            fix_cmd=_module("isort", *SOURCES),
        ),
        Gate("lint", "pylint", _module("pylint", PACKAGE)),
        Gate("type", "mypy", _module("mypy", PACKAGE)),
        Gate("deadcode", "vulture", _module("vulture", PACKAGE, "--min-confidence", "80")),
        Gate("complexity", "radon", _module("radon", "cc", PACKAGE, "-a", "-nc"), capture=False),
        Gate("tests", "pytest + coverage", _module("pytest", *pytest_args), capture=False),
        Gate(
            "example",
            "example script smoke run",
            [sys.executable, EXAMPLE, "--seconds", "0.3", "--period", "20"],
        ),
    ]


def run_gate(gate: Gate, fix: bool, verbose: bool) -> bool:
    cmd = gate.fix_cmd if fix and gate.fix_cmd else gate.cmd
    label = f"{gate.title} (fix)" if cmd is gate.fix_cmd else gate.title
    print(f"\n== {label} ==")
    if verbose:
        print("$ " + " ".join(cmd))

    capture = gate.capture and not verbose
    try:
        result = subprocess.run(cmd, cwd=ROOT, check=False, capture_output=capture, text=True)
    except FileNotFoundError as exc:
        print(f"[FAIL] {label}: {exc}")
        return False

    if result.returncode != 0 and capture:
        print(result.stdout, end="")
        print(result.stderr, end="", file=sys.stderr)
    print(f"[{'PASS' if result.returncode == 0 else 'FAIL'}] {label}")
    if result.returncode == 127 or "No module named" in (result.stderr or ""):
        print("       tool missing? install with: pip install -e .[dev]")
    return result.returncode == 0


def run_gates(gates: list[Gate], args: argparse.Namespace) -> Report:
    report = Report()
    for gate in gates:
        if (args.only and gate.key not in args.only) or gate.key in args.skip:
            report.skipped.append(gate.key)
            continue
        if run_gate(gate, fix=args.fix, verbose=args.verbose):
            report.passed.append(gate.key)
        else:
            report.failed.append(gate.key)
    return report


def print_report(report: Report) -> None:
    print("\n== summary ==")
    rows = (("PASS", report.passed), ("FAIL", report.failed), ("SKIP", report.skipped))
    for status, keys in rows:
        if keys:
            print(f"[{status}] {', '.join(keys)}")
    if not report.failed:
        print("all selected gates passed")


def main(argv: Optional[list[str]] = None) -> int:
    keys = [gate.key for gate in build_gates(fast=False)]
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--fix", "--apply", action="store_true", dest="fix", help="run black/isort in rewrite mode"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="print commands and all tool output"
    )
    parser.add_argument("--fast", action="store_true", help="deselect tests marked slow")
    gate_list = ", ".join(keys)
    parser.add_argument(
        "--skip", nargs="+", default=[], choices=keys, metavar="GATE", help=f"skip: {gate_list}"
    )
    parser.add_argument(
        "--only", nargs="+", default=[], choices=keys, metavar="GATE", help=f"only: {gate_list}"
    )
    args = parser.parse_args(argv)

    report = run_gates(build_gates(fast=args.fast), args)
    print_report(report)
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
