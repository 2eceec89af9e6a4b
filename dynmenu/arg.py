"""Parsing of clustered single-letter command-line flags."""

from __future__ import annotations

from collections.abc import Container, Sequence


class UsageError(Exception):
    """The command line could not be parsed."""


def parse_flags(
    argv: Sequence[str], takes_value: Container[str]
) -> tuple[list[tuple[str, str | None]], list[str]]:
    """Split ``argv`` (without the program name) into flags and operands.

    Flags may be clustered (``-abc``). A flag listed in ``takes_value``
    takes the rest of its cluster as its value, or the next argument when
    the cluster ends with it. ``--`` ends flag parsing; a lone ``-`` is an
    operand. Returns the flags in order, each paired with its value or
    ``None``, and the remaining operands.
    """
    flags: list[tuple[str, str | None]] = []
    args = list(argv)
    pos = 0
    while pos < len(args) and args[pos].startswith("-") and len(args[pos]) > 1:
        arg = args[pos]
        pos += 1
        if arg == "--":
            break
        for index, flag in enumerate(arg[1:], start=1):
            if flag not in takes_value:
                flags.append((flag, None))
                continue
            rest = arg[index + 1 :]
            if rest:
                flags.append((flag, rest))
            elif pos < len(args):
                flags.append((flag, args[pos]))
                pos += 1
            else:
                raise UsageError(f"option requires an argument -- '{flag}'")
            break
    return flags, args[pos:]