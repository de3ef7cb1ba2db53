"""Command-line flag parsing: flags followed by a value, and bare options."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence

__all__ = ["ParseError", "parse_values", "parse_options", "parse_usage"]

Convertor = Callable[[str], Optional[Any]]


class ParseError(ValueError):
    """A flag is missing its value or its value is not recognised."""


def parse_values(
    argv: Sequence[str],
    flags: Iterable[str],
    convertor: Convertor = str,
) -> dict[str, Any]:
    """Return the converted value following each of ``flags`` in ``argv``.

    ``argv`` excludes the program name. Each flag is taken at its first
    occurrence only. ``convertor`` turns the value text into a value and
    returns ``None`` (or raises ``ValueError``) when it is not recognised.
    """
    pending = list(flags)
    args = list(argv)
    found: dict[str, Any] = {}

    position = 0
    while position < len(args):
        flag = args[position]
        if flag in pending:
            if position + 1 >= len(args):
                raise ParseError(f"value missing for specified flag {flag}.")
            position += 1
            value = args[position]
            try:
                processed = convertor(value)
            except ValueError:
                processed = None
            if processed is None:
                raise ParseError(
                    f"value {value} requested for flag {flag} is not recognized."
                )
            found[flag] = processed
            pending.remove(flag)
            print(f"processed ({flag}, {value}) pair.")
        position += 1

    return found


def parse_options(argv: Sequence[str], flags: Iterable[str]) -> set[str]:
    """Return those of ``flags`` that appear in ``argv``."""
    pending = set(flags)
    found: set[str] = set()
    for arg in argv:
        if arg in pending:
            pending.discard(arg)
            found.add(arg)
            print(f"processed {arg} option.")
    return found


def parse_usage(argv: Sequence[str], usage: str) -> None:
    """Print ``usage`` and exit with status 1 when ``--help`` is given."""
    if "--help" in parse_options(argv, ["--help"]):
        print(usage, end="")
        raise SystemExit(1)