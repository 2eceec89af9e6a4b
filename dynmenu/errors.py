"""Fatal error reporting shared by the command-line tools."""

from __future__ import annotations

import sys
from typing import NoReturn


class FatalError(Exception):
    """An unrecoverable error that ends the program with ``status``."""

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


def _describe(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def die(fmt: str, *args: object) -> NoReturn:
    """Raise :class:`FatalError` with ``fmt % args`` as its message.

    A format ending in ``':'`` is followed by a description of the
    exception currently being handled, if there is one.
    """
    message = fmt % args if args else fmt
    if fmt.endswith(":"):
        current = sys.exc_info()[1]
        if current is not None:
            message = f"{message} {_describe(current)}"
    raise FatalError(message)