"""Filter a list of files by properties, in the manner of test(1)."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TextIO

from .arg import UsageError, parse_flags

PATH_MAX = 4096

_FLAG_FIELDS = {
    "a": "hidden",
    "b": "block_special",
    "c": "char_special",
    "d": "directory",
    "e": "exists",
    "f": "regular",
    "g": "setgid",
    "h": "symlink",
    "l": "list_dirs",
    "p": "fifo",
    "q": "quiet",
    "r": "readable",
    "s": "nonempty",
    "u": "setuid",
    "v": "invert",
    "w": "writable",
    "x": "executable",
}


@dataclass
class Options:
    """Which tests a file must pass to be printed.

    ``newer_than`` and ``older_than`` are modification times in whole
    seconds, or None when that test is off.
    """

    hidden: bool = False
    block_special: bool = False
    char_special: bool = False
    directory: bool = False
    exists: bool = False
    regular: bool = False
    setgid: bool = False
    symlink: bool = False
    list_dirs: bool = False
    newer_than: int | None = None
    older_than: int | None = None
    fifo: bool = False
    quiet: bool = False
    readable: bool = False
    nonempty: bool = False
    setuid: bool = False
    invert: bool = False
    writable: bool = False
    executable: bool = False


def _is_symlink(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False


def _passes(path: str, name: str, options: Options) -> bool:
    try:
        st = os.stat(path)
    except OSError:
        return False
    mode = st.st_mode
    mtime = int(st.st_mtime)
    checks = (
        lambda: options.hidden or not name.startswith("."),
        lambda: not options.block_special or stat.S_ISBLK(mode),
        lambda: not options.char_special or stat.S_ISCHR(mode),
        lambda: not options.directory or stat.S_ISDIR(mode),
        lambda: not options.exists or os.access(path, os.F_OK),
        lambda: not options.regular or stat.S_ISREG(mode),
        lambda: not options.setgid or bool(mode & stat.S_ISGID),
        lambda: not options.symlink or _is_symlink(path),
        lambda: options.newer_than is None or mtime > options.newer_than,
        lambda: options.older_than is None or mtime < options.older_than,
        lambda: not options.fifo or stat.S_ISFIFO(mode),
        lambda: not options.readable or os.access(path, os.R_OK),
        lambda: not options.nonempty or st.st_size > 0,
        lambda: not options.setuid or bool(mode & stat.S_ISUID),
        lambda: not options.writable or os.access(path, os.W_OK),
        lambda: not options.executable or os.access(path, os.X_OK),
    )
    return all(check() for check in checks)


def test_path(path: str, name: str, options: Options) -> bool:
    """Return whether ``path`` passes the tests, inverted by ``options.invert``.

    ``name`` is what the hidden-file test looks at. A path that cannot be
    stat'ed fails every test.
    """
    return _passes(path, name, options) != options.invert


test_path.__test__ = False  # type: ignore[attr-defined]


def _directory_entries(directory: str) -> list[str] | None:
    try:
        entries = os.listdir(directory)
    except OSError:
        return None
    return [".", "..", *entries]


def _candidates(
    paths: Sequence[str], options: Options, stdin: TextIO
) -> Iterable[tuple[str, str]]:
    if not paths:
        for line in stdin:
            line = line[:-1] if line.endswith("\n") else line
            yield line, line
        return
    for arg in paths:
        entries = _directory_entries(arg) if options.list_dirs else None
        if entries is None:
            yield arg, arg
            continue
        for entry in entries:
            full = f"{arg}/{entry}"
            if len(os.fsencode(full)) < PATH_MAX:
                yield full, entry


def run(
    paths: Sequence[str], options: Options, stdin: TextIO, stdout: TextIO
) -> int:
    """Print the names that pass; return 0 if any did, else 1.

    With no ``paths`` the names are read one per line from ``stdin``.
    In quiet mode nothing is printed and the first match ends the run.
    """
    matched = False
    for path, name in _candidates(paths, options, stdin):
        if test_path(path, name, options):
            if options.quiet:
                return 0
            matched = True
            print(name, file=stdout)
    return 0 if matched else 1


def _usage(prog: str) -> int:
    print(
        f"usage: {prog} [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]",
        file=sys.stderr,
    )
    return 2


def _reference_mtime(file: str) -> int | None:
    try:
        return int(os.stat(file).st_mtime)
    except OSError as exc:
        print(f"{file}: {exc.strerror or exc}", file=sys.stderr)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    if argv is None:
        prog = os.path.basename(sys.argv[0]) if sys.argv else "stest"
        argv = sys.argv[1:]
    else:
        prog = "stest"
    try:
        flags, operands = parse_flags(argv, "no")
    except UsageError:
        return _usage(prog)

    settings: dict[str, object] = {}
    for flag, value in flags:
        if flag == "n" and value is not None:
            settings["newer_than"] = _reference_mtime(value)
        elif flag == "o" and value is not None:
            settings["older_than"] = _reference_mtime(value)
        elif flag in _FLAG_FIELDS:
            settings[_FLAG_FIELDS[flag]] = True
        else:
            return _usage(prog)

    options = Options(**settings)  # type: ignore[arg-type]
    return run(operands, options, sys.stdin, sys.stdout)